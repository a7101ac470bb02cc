"""Allow running archdiff as ``python -m archdiff``."""

from archdiff.cli.main import app

app()
