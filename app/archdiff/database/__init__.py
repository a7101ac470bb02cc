"""Package database access.

This module exports the pacman local database reader.
"""

from archdiff.database.pacman import DatabaseError, PacmanDatabase, parse_sections

__all__ = ["DatabaseError", "PacmanDatabase", "parse_sections"]
