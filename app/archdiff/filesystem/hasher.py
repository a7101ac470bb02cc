"""Streaming content fingerprints.

MD5 matches what pacman records for backup files. It is used purely to
detect modification, never as a security check.
"""

import hashlib

from archdiff.utils.outcome import Outcome, attempt

# Read size per chunk; memory use stays flat regardless of file size
CHUNK_SIZE = 1024 * 1024


def hash_file(path: str, chunk_size: int = CHUNK_SIZE) -> str:
    """Compute the MD5 hex digest of a file's content.

    Args:
        path: Absolute path of the file.
        chunk_size: Number of bytes read per iteration.

    Returns:
        Lowercase hex digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    h = hashlib.md5(usedforsecurity=False)
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            h.update(chunk)
    return h.hexdigest()


def try_hash_file(path: str) -> Outcome[str]:
    """Hash a file, capturing I/O failure in the returned Outcome."""
    return attempt(hash_file, path)
