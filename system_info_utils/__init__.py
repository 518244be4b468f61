"""
Readers for system info and driver overrides documents.

Every public decode function returns a status instead of raising: a failed
decode yields a default result together with ``False``.
"""

from system_info_utils.core.config import ReaderConfig, configure_logging, get_reader_config
from system_info_utils.data.driver_overrides_reader import decode_driver_overrides
from system_info_utils.data.system_info_reader import decode_system_info, normalize_system_info
from system_info_utils.domain.models import (
    AsicInfo,
    ClockInfo,
    ConfigInfo,
    CpuInfo,
    DevDriverInfo,
    DriverInfo,
    DriverOverridesDocument,
    EtwSupportInfo,
    ExcludedRangeInfo,
    GpuInfo,
    HeapInfo,
    IdInfo,
    MemoryInfo,
    OsInfo,
    OsMemoryInfo,
    PciInfo,
    Process,
    SoftwareVersion,
    SystemInfo,
    Version,
)
from system_info_utils.services.chunk_reader import (
    decode_driver_overrides_from_archive,
    decode_system_info_from_archive,
    is_driver_overrides_chunk_present,
)
from system_info_utils.storage.chunk_file import ChunkFile, InMemoryChunkFile

__version__ = "0.1.0"

__all__ = [
    "AsicInfo",
    "ChunkFile",
    "ClockInfo",
    "ConfigInfo",
    "CpuInfo",
    "DevDriverInfo",
    "DriverInfo",
    "DriverOverridesDocument",
    "EtwSupportInfo",
    "ExcludedRangeInfo",
    "GpuInfo",
    "HeapInfo",
    "IdInfo",
    "InMemoryChunkFile",
    "MemoryInfo",
    "OsInfo",
    "OsMemoryInfo",
    "PciInfo",
    "Process",
    "ReaderConfig",
    "SoftwareVersion",
    "SystemInfo",
    "Version",
    "configure_logging",
    "decode_driver_overrides",
    "decode_driver_overrides_from_archive",
    "decode_system_info",
    "decode_system_info_from_archive",
    "get_reader_config",
    "is_driver_overrides_chunk_present",
    "normalize_system_info",
]
