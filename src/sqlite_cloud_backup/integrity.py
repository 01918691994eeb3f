"""
Content fingerprints -- SHA-256 over files and in-memory buffers.

The same bytes always produce the same fingerprint, whether they
were streamed from disk or handed over as a buffer.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Union

CHUNK_SIZE = 64 * 1024


def fingerprint_file(path: Union[str, Path]) -> str:
    """Compute the SHA-256 hex digest of a file, streaming it in chunks.

    Args:
        path: File to hash.

    Returns:
        Hex-encoded SHA-256 digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def fingerprint_bytes(data: bytes) -> str:
    """Compute the SHA-256 hex digest of a byte buffer.

    Args:
        data: Bytes to hash.

    Returns:
        Hex-encoded SHA-256 digest.
    """
    return hashlib.sha256(data).hexdigest()


def verify(path: Union[str, Path], expected: str) -> bool:
    """Check a file against an expected fingerprint.

    Args:
        path: File to verify.
        expected: Hex digest the file should have.

    Returns:
        True if the digests match. A mismatch is not an error.
    """
    return fingerprint_file(path) == expected
