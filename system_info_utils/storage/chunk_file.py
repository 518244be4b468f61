import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, Union

from system_info_utils.errors import ChunkError

logger = logging.getLogger(__name__)


class ChunkFile(ABC):
    """
    Abstract base class for archives of named, versioned data chunks.

    Concrete archive formats implement these three calls; the readers never
    depend on anything else.
    """

    @abstractmethod
    def contains(self, name: str) -> bool:
        """Return True when a chunk with this identifier exists."""
        pass

    @abstractmethod
    def get_version(self, name: str) -> int:
        """Return the format version declared by the chunk."""
        pass

    @abstractmethod
    def read(self, name: str) -> bytes:
        """Return the raw data of the chunk."""
        pass


class InMemoryChunkFile(ChunkFile):
    """Chunk file backed by a dictionary, used for standalone documents and tests."""

    def __init__(self, chunks: Optional[Dict[str, Tuple[int, Union[bytes, str]]]] = None):
        self._chunks: Dict[str, Tuple[int, bytes]] = {}
        for name, (version, data) in (chunks or {}).items():
            self.add_chunk(name, version, data)

    def add_chunk(self, name: str, version: int, data: Union[bytes, str]) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._chunks[name] = (version, bytes(data))
        logger.debug(f"Stored chunk {name} v{version} ({len(data)} bytes)")

    def contains(self, name: str) -> bool:
        return name in self._chunks

    def get_version(self, name: str) -> int:
        return self._get(name)[0]

    def read(self, name: str) -> bytes:
        return self._get(name)[1]

    def _get(self, name: str) -> Tuple[int, bytes]:
        if name not in self._chunks:
            raise ChunkError(f"Chunk {name} not found")
        return self._chunks[name]
