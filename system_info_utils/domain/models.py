"""
Pydantic models for the system info reader.

This module defines the records produced by the readers, including:
- The system info tree (driver, OS, CPUs, GPUs, processes)
- Version records for the document schema
- The filtered driver overrides tree

Every field carries a default so that a bare ``SystemInfo()`` is a complete,
zero-valued record. Absent sections in the input simply leave these defaults
in place.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from system_info_utils.data.definitions import DRIVER_OVERRIDES_MISC_STRUCTURE, LUID_SIZE


# ---------------------------------------------------------------------------
# Versioning Models
# ---------------------------------------------------------------------------


class Version(BaseModel):
    """
    Revision of the system info document.

    Legacy documents only carry a bare major number, so ``major`` defaults
    to 1 and the remaining parts to 0.
    """

    major: int = 1
    minor: int = 0
    patch: int = 0
    build: int = 0


class SoftwareVersion(BaseModel):
    """Software release version numbers (the GPU's 'Big Software' release)."""

    major: int = 0
    minor: int = 0
    misc: int = Field(default=0, description="Subminor/misc/patch version number.")


# ---------------------------------------------------------------------------
# Driver Models
# ---------------------------------------------------------------------------


class DevDriverInfo(BaseModel):
    major_version: int = Field(default=0, description="The interface major version.")
    tag: str = Field(default="", description="The release tag name string.")


class DriverInfo(BaseModel):
    """
    GPU device driver info.

    ``packaging_version_major`` and ``packaging_version_minor`` are derived
    from ``packaging_version`` and stay 0 when it cannot be split.
    """

    packaging_version_major: int = 0
    packaging_version_minor: int = 0
    name: str = ""
    description: str = ""
    packaging_version: str = ""
    software_version: str = Field(
        default="",
        description="Driver software version string (Windows only).",
    )
    is_closed_source: bool = Field(
        default=False,
        description="True when the driver is the closed source (PRO) build.",
    )


# ---------------------------------------------------------------------------
# Operating System Models
# ---------------------------------------------------------------------------


class OsMemoryInfo(BaseModel):
    physical: int = Field(default=0, description="Total physical memory in bytes.")
    swap: int = Field(default=0, description="Total swap memory in bytes.")
    type: str = Field(default="", description="The memory type name.")


class EtwSupportInfo(BaseModel):
    """Event Tracing for Windows capability of the capturing account."""

    is_supported: bool = False
    has_permission: bool = False
    status_code: int = Field(
        default=0,
        description="Status code received when attempting to open an ETW session.",
    )
    needs_rgp_registry_or_usergroup: bool = False


class ConfigInfo(BaseModel):
    power_dpm_writable: bool = Field(
        default=False,
        description="True when the power management file is writable (Linux).",
    )
    drm_major_version: int = 0
    drm_minor_version: int = 0
    etw_support_info: EtwSupportInfo = Field(default_factory=EtwSupportInfo)


class OsInfo(BaseModel):
    name: str = ""
    desc: str = ""
    hostname: str = ""
    memory: OsMemoryInfo = Field(default_factory=OsMemoryInfo)
    config: ConfigInfo = Field(default_factory=ConfigInfo)


# ---------------------------------------------------------------------------
# CPU Models
# ---------------------------------------------------------------------------


class CpuInfo(BaseModel):
    """
    A single CPU device.

    Each entry defaults independently, so a malformed CPU in the list never
    affects its siblings.
    """

    name: str = ""
    cpu_id: str = ""
    device_id: str = Field(default="", description="CPU slot identifier, e.g. 'CPU0'.")
    architecture: str = ""
    vendor_id: str = ""
    virtualization: str = ""
    num_physical_cores: int = 0
    num_logical_cores: int = 0
    max_clock_speed: int = Field(default=0, description="Maximum clock speed in MHz.")
    timestamp_clock_frequency: int = Field(default=0, description="Timestamp clock frequency in Hz.")


# ---------------------------------------------------------------------------
# GPU Models
# ---------------------------------------------------------------------------


class PciInfo(BaseModel):
    bus: int = 0
    device: int = 0
    function: int = 0


class ClockInfo(BaseModel):
    min: int = Field(default=0, description="Minimum clock value in Hz.")
    max: int = Field(default=0, description="Maximum clock value in Hz.")


class IdInfo(BaseModel):
    """
    Identification of the ASIC, used to tell GPUs apart in a system.

    ``luid`` is always exactly 8 bytes; it is written to JSON as hex text.
    """

    gfx_engine: int = 0
    family: int = 0
    e_rev: int = 0
    revision: int = 0
    device: int = 0
    subsystem: int = 0
    vendor: int = 0
    luid: bytes = Field(
        default=bytes(LUID_SIZE),
        description="Locally unique identifier for the adapter.",
    )

    @field_validator("luid")
    @classmethod
    def _fixed_size_luid(cls, value: bytes) -> bytes:
        return value[:LUID_SIZE].ljust(LUID_SIZE, b"\x00")

    @field_serializer("luid")
    def _serialize_luid(self, value: bytes) -> str:
        return value.hex()


class AsicInfo(BaseModel):
    gpu_index: int = Field(default=0, description="Index of the GPU as enumerated by the system.")
    gpu_counter_freq: int = 0
    engine_clock_hz: ClockInfo = Field(default_factory=ClockInfo)
    num_shader_engines: int = 0
    num_shader_arrays_per_engine: int = 0
    # Indexed by shader engine first, then by shader array within the engine.
    cu_mask: List[List[int]] = Field(default_factory=list)
    num_cus: int = 0
    id_info: IdInfo = Field(default_factory=IdInfo)


class HeapInfo(BaseModel):
    heap_type: str = Field(default="", description="Heap type, typically 'local' or 'invisible'.")
    phys_addr: int = Field(default=0, description="Physical heap location as a byte offset.")
    size: int = 0


class ExcludedRangeInfo(BaseModel):
    base: int = 0
    size: int = 0


class MemoryInfo(BaseModel):
    type: str = ""
    mem_ops_per_clock: int = 0
    bus_bit_width: int = 0
    bandwidth: int = Field(default=0, description="Memory bus bandwidth in bytes/second.")
    mem_clock_hz: ClockInfo = Field(default_factory=ClockInfo)
    heaps: List[HeapInfo] = Field(default_factory=list)
    excluded_va_ranges: List[ExcludedRangeInfo] = Field(default_factory=list)


class GpuInfo(BaseModel):
    name: str = ""
    pci: PciInfo = Field(default_factory=PciInfo)
    asic: AsicInfo = Field(default_factory=AsicInfo)
    memory: MemoryInfo = Field(default_factory=MemoryInfo)
    big_sw: SoftwareVersion = Field(default_factory=SoftwareVersion)


# ---------------------------------------------------------------------------
# Process Models
# ---------------------------------------------------------------------------


class Process(BaseModel):
    name: str = ""
    path: str = ""
    id: int = 0


# ---------------------------------------------------------------------------
# Root Model
# ---------------------------------------------------------------------------


class SystemInfo(BaseModel):
    """
    Hardware and software inventory of the target system.

    ``processes`` is only populated by version 2 and later documents.
    """

    version: Version = Field(default_factory=Version)
    driver: DriverInfo = Field(default_factory=DriverInfo)
    devdriver: DevDriverInfo = Field(default_factory=DevDriverInfo)
    os: OsInfo = Field(default_factory=OsInfo)
    cpus: List[CpuInfo] = Field(default_factory=list)
    gpus: List[GpuInfo] = Field(default_factory=list)
    processes: List[Process] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Driver Overrides Models
# ---------------------------------------------------------------------------


class OverridesStructure(BaseModel):
    """
    A named group of settings inside a component.

    Settings are kept as the raw JSON objects of the source document.
    """

    model_config = ConfigDict(populate_by_name=True)

    structure: str = Field(default=DRIVER_OVERRIDES_MISC_STRUCTURE, alias="Structure")
    settings: List[Dict[str, Any]] = Field(default_factory=list, alias="Settings")


class OverridesComponent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    component: str = Field(default="", alias="Component")
    structures: List[OverridesStructure] = Field(default_factory=list, alias="Structures")


class DriverOverridesDocument(BaseModel):
    """
    Driver overrides tree reduced to the settings the user modified.

    Serialized with ``by_alias=True`` so the output keeps the key names of
    the source document.
    """

    model_config = ConfigDict(populate_by_name=True)

    is_driver_experiments: bool = Field(default=False, alias="IsDriverExperiments")
    components: List[OverridesComponent] = Field(default_factory=list, alias="Components")
