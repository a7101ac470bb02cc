"""archdiff - audit a pacman-managed root filesystem for drift."""

__version__ = "0.1.0"
