"""Exception hierarchy used inside the readers.

None of these cross the public decode functions; they are converted into
status results at that boundary.
"""

from __future__ import annotations


class SystemInfoError(Exception):
    """Base class for all reader errors."""


class UnsupportedVersionError(SystemInfoError):
    """Raised when a document or chunk declares a version with no reader."""

    def __init__(self, version: int, kind: str = "document"):
        self.version = version
        self.kind = kind
        super().__init__(f"Unsupported {kind} version: {version}")


class ChunkError(SystemInfoError):
    """Raised when a chunk is missing from the archive or cannot be read."""


__all__ = ["SystemInfoError", "UnsupportedVersionError", "ChunkError"]
