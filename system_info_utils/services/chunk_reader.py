"""
Decode the system info and driver overrides chunks stored in a chunk file.

Each chunk goes through the same checks before any data is read: the chunk
must exist and its declared version must be one this build supports. The
chunk data is then handed to the matching document decoder.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from system_info_utils.core.config import ReaderConfig, get_reader_config
from system_info_utils.data.definitions import (
    DRIVER_OVERRIDES_CHUNK_IDENTIFIER,
    SYSTEM_INFO_CHUNK_IDENTIFIER,
)
from system_info_utils.data.driver_overrides_reader import decode_driver_overrides
from system_info_utils.data.system_info_reader import decode_system_info
from system_info_utils.domain.models import SystemInfo
from system_info_utils.errors import ChunkError, UnsupportedVersionError
from system_info_utils.storage.chunk_file import ChunkFile

logger = logging.getLogger(__name__)


@contextmanager
def _chunk_buffer(chunk_file: ChunkFile, name: str) -> Iterator[bytearray]:
    """Hold a copy of the chunk data for the duration of the block."""
    buffer = bytearray(chunk_file.read(name))
    try:
        yield buffer
    finally:
        buffer.clear()


def _terminated(buffer: bytearray) -> bytes:
    # Chunk text ends at the first NUL, as if the data were a C string.
    end = buffer.find(0)
    return bytes(buffer if end < 0 else buffer[:end])


def read_chunk(chunk_file: ChunkFile, name: str, min_version: int, max_version: int) -> Tuple[int, bytes]:
    """
    Read a chunk after checking that it exists and its version is supported.

    Returns:
        The chunk version and its data up to the first NUL byte.

    Raises:
        ChunkError: The chunk is not in the file. The version is not checked.
        UnsupportedVersionError: The chunk version is out of range. The data
            is not read.
    """
    if not chunk_file.contains(name):
        raise ChunkError(f"Chunk {name} not present")

    version = chunk_file.get_version(name)
    if not min_version <= version <= max_version:
        raise UnsupportedVersionError(version, kind=f"{name} chunk")

    with _chunk_buffer(chunk_file, name) as buffer:
        logger.debug(f"Read chunk {name} v{version} ({len(buffer)} bytes)")
        return version, _terminated(buffer)


def decode_system_info_from_archive(
    chunk_file: ChunkFile, config: Optional[ReaderConfig] = None
) -> Tuple[SystemInfo, bool]:
    """
    Decode the SystemInfo chunk of a chunk file.

    Returns:
        The decoded record and True, or a default ``SystemInfo()`` and False
        when the chunk is missing, too new, unreadable or malformed.
    """
    config = config or get_reader_config()
    try:
        _, data = read_chunk(
            chunk_file,
            SYSTEM_INFO_CHUNK_IDENTIFIER,
            0,
            config.system_info_chunk_version_max,
        )
    except (ChunkError, UnsupportedVersionError) as e:
        logger.warning(f"Cannot decode system info chunk: {e}")
        return SystemInfo(), False
    except Exception as e:
        logger.error(f"Failed to read system info chunk: {e}", exc_info=True)
        return SystemInfo(), False

    return decode_system_info(data)


def is_driver_overrides_chunk_present(chunk_file: ChunkFile) -> bool:
    """Return True when the chunk file holds a DriverOverrides chunk."""
    try:
        return bool(chunk_file.contains(DRIVER_OVERRIDES_CHUNK_IDENTIFIER))
    except Exception as e:
        logger.error(f"Failed to query driver overrides chunk: {e}", exc_info=True)
        return False


def decode_driver_overrides_from_archive(
    chunk_file: ChunkFile, config: Optional[ReaderConfig] = None
) -> Tuple[str, bool]:
    """
    Decode the DriverOverrides chunk of a chunk file.

    Returns:
        The filtered overrides JSON text and True, or "" and False when the
        chunk is missing, its version is out of range, or it is malformed.
    """
    config = config or get_reader_config()
    try:
        version, data = read_chunk(
            chunk_file,
            DRIVER_OVERRIDES_CHUNK_IDENTIFIER,
            config.driver_overrides_chunk_version_min,
            config.driver_overrides_chunk_version_max,
        )
    except (ChunkError, UnsupportedVersionError) as e:
        logger.warning(f"Cannot decode driver overrides chunk: {e}")
        return "", False
    except Exception as e:
        logger.error(f"Failed to read driver overrides chunk: {e}", exc_info=True)
        return "", False

    return decode_driver_overrides(data, version)
