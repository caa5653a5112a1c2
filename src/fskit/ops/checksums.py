"""File digests used to compare copies."""

from __future__ import annotations

import hashlib
from pathlib import Path

from .streams import open_read


def digest(path: Path, algorithm: str = "sha256") -> str:
    """Hex digest of a regular file; any `hashlib` algorithm name is accepted."""
    with open_read(path) as f:
        return hashlib.file_digest(f, algorithm).hexdigest()
