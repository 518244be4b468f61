"""
Decode system info JSON documents into ``SystemInfo`` records.

Documents are versioned. Each version has a mapper in ``SYSTEM_INFO_MAPPERS``
that first applies the previous version's mapper and then reads the fields
its version added. Supporting a new version means appending a mapper that
delegates to the latest existing one.

Every section is optional. A missing or malformed section leaves the
defaults of the matching record in place; only an unreadable document or an
unknown version makes the decode fail.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Tuple, Union

from system_info_utils.data import definitions as keys
from system_info_utils.domain.json_utils import (
    get_value,
    has_node,
    is_unsigned,
    iter_members,
    iter_nodes,
    parse_luid,
)
from system_info_utils.domain.models import (
    AsicInfo,
    ClockInfo,
    ConfigInfo,
    CpuInfo,
    DevDriverInfo,
    DriverInfo,
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
from system_info_utils.errors import UnsupportedVersionError

logger = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"\d*")

SystemInfoMapper = Callable[[Any, SystemInfo], None]
DocumentText = Union[str, bytes, bytearray]


# ---------------------------------------------------------------------------
# Section readers
# ---------------------------------------------------------------------------


def _read_devdriver(node: Any) -> DevDriverInfo:
    info = DevDriverInfo(tag=get_value(node, keys.NODE_TAG, ""))
    if has_node(node, keys.NODE_VERSION):
        info.major_version = get_value(node[keys.NODE_VERSION], keys.NODE_MAJOR, 0)
    return info


def split_packaging_version(packaging_version: str) -> Tuple[int, int]:
    """
    Split a driver packaging version such as ``"23.10.1"`` into (23, 10).

    Returns (0, 0) when there is no ``.`` or no digits directly follow it.
    """
    major_text, dot, rest = packaging_version.partition(".")
    if not dot:
        return 0, 0

    minor_digits = _LEADING_DIGITS.match(rest).group()
    if not minor_digits:
        return 0, 0

    major_digits = _LEADING_DIGITS.match(major_text.strip()).group()
    major = int(major_digits) if major_digits else 0
    return major, int(minor_digits)


def _read_driver(node: Any) -> DriverInfo:
    driver = DriverInfo(
        name=get_value(node, keys.NODE_NAME, ""),
        description=get_value(node, keys.NODE_DESCRIPTION, ""),
        software_version=get_value(node, keys.NODE_DRIVER_SOFTWARE_VERSION, ""),
        packaging_version=get_value(node, keys.NODE_DRIVER_PACKAGING_VERSION, ""),
        is_closed_source=get_value(node, keys.NODE_IS_CLOSED_SOURCE, False),
    )
    if driver.packaging_version:
        major, minor = split_packaging_version(driver.packaging_version)
        driver.packaging_version_major = major
        driver.packaging_version_minor = minor
    return driver


def _read_os_memory(node: Any) -> OsMemoryInfo:
    return OsMemoryInfo(
        physical=get_value(node, keys.NODE_MEMORY_PHYSICAL, 0),
        swap=get_value(node, keys.NODE_MEMORY_SWAP, 0),
        type=get_value(node, keys.NODE_NAME, ""),
    )


def _read_etw(node: Any) -> EtwSupportInfo:
    return EtwSupportInfo(
        is_supported=get_value(node, keys.NODE_SUPPORTED, False),
        has_permission=get_value(node, keys.NODE_HAS_PERMISSION, False),
        status_code=get_value(node, keys.NODE_STATUS_CODE, 0),
        needs_rgp_registry_or_usergroup=get_value(node, keys.NODE_ETW_REGISTRY_OR_USER_GROUP, False),
    )


def _read_os_config(node: Any) -> ConfigInfo:
    # The linux and windows branches are independent; both are read when present.
    config = ConfigInfo()

    if has_node(node, keys.NODE_LINUX):
        linux_node = node[keys.NODE_LINUX]
        config.power_dpm_writable = get_value(linux_node, keys.NODE_POWER_DPM_WRITABLE, False)

        if has_node(linux_node, keys.NODE_DRM):
            drm_node = linux_node[keys.NODE_DRM]
            config.drm_major_version = get_value(drm_node, keys.NODE_MAJOR, 0)
            config.drm_minor_version = get_value(drm_node, keys.NODE_MINOR, 0)

    if has_node(node, keys.NODE_WINDOWS):
        windows_node = node[keys.NODE_WINDOWS]
        if has_node(windows_node, keys.NODE_ETW_SUPPORT):
            config.etw_support_info = _read_etw(windows_node[keys.NODE_ETW_SUPPORT])

    return config


def _read_os(node: Any) -> OsInfo:
    os_info = OsInfo(
        name=get_value(node, keys.NODE_NAME, ""),
        desc=get_value(node, keys.NODE_DESCRIPTION, ""),
        hostname=get_value(node, keys.NODE_HOSTNAME, ""),
    )
    if has_node(node, keys.NODE_MEMORY):
        os_info.memory = _read_os_memory(node[keys.NODE_MEMORY])
    if has_node(node, keys.NODE_CONFIG):
        os_info.config = _read_os_config(node[keys.NODE_CONFIG])
    return os_info


def _read_cpus(node: Any) -> List[CpuInfo]:
    cpus: List[CpuInfo] = []
    for cpu_node in iter_nodes(node):
        cpu = CpuInfo(
            name=get_value(cpu_node, keys.NODE_NAME, ""),
            architecture=get_value(cpu_node, keys.NODE_ARCHITECTURE, ""),
            cpu_id=get_value(cpu_node, keys.NODE_CPU_ID, ""),
            device_id=get_value(cpu_node, keys.NODE_CPU_DEVICE_ID, ""),
            vendor_id=get_value(cpu_node, keys.NODE_CPU_VENDOR_ID, ""),
            virtualization=get_value(cpu_node, keys.NODE_VIRTUALIZATION, ""),
            num_logical_cores=get_value(cpu_node, keys.NODE_CPU_LOGICAL_CORE_COUNT, 0),
            num_physical_cores=get_value(cpu_node, keys.NODE_CPU_PHYSICAL_CORE_COUNT, 0),
            timestamp_clock_frequency=get_value(cpu_node, keys.NODE_CPU_TIME_CLOCK_FREQ, 0),
        )
        if has_node(cpu_node, keys.NODE_SPEED):
            cpu.max_clock_speed = get_value(cpu_node[keys.NODE_SPEED], keys.NODE_MAX, 0)
        cpus.append(cpu)
    return cpus


def _read_pci(node: Any) -> PciInfo:
    return PciInfo(
        bus=get_value(node, keys.NODE_PCI_BUS, 0),
        device=get_value(node, keys.NODE_DEVICE, 0),
        function=get_value(node, keys.NODE_PCI_FUNCTION, 0),
    )


def read_cu_mask(node: Any) -> List[List[int]]:
    """
    Read the active CU mask, indexed by shader engine then shader array.

    A value that is not an array is ignored. Otherwise the mask is all or
    nothing: one engine entry that is not an array, or one array mask that
    is not a non-negative integer, discards every entry read so far.
    """
    if not isinstance(node, list):
        return []

    cu_mask: List[List[int]] = []
    for shader_array_list in node:
        if not isinstance(shader_array_list, list):
            logger.debug("Discarding CU mask: shader engine entry is not an array")
            return []

        shader_array_masks: List[int] = []
        for shader_array_mask in shader_array_list:
            if not is_unsigned(shader_array_mask):
                logger.debug(f"Discarding CU mask: invalid shader array mask {shader_array_mask!r}")
                return []
            shader_array_masks.append(shader_array_mask)

        cu_mask.append(shader_array_masks)
    return cu_mask


def _read_clock(node: Any) -> ClockInfo:
    return ClockInfo(
        min=get_value(node, keys.NODE_MIN, 0),
        max=get_value(node, keys.NODE_MAX, 0),
    )


def _read_asic_ids(node: Any) -> IdInfo:
    return IdInfo(
        gfx_engine=get_value(node, keys.NODE_ASIC_GFX_ENGINE, 0),
        family=get_value(node, keys.NODE_ASIC_FAMILY, 0),
        e_rev=get_value(node, keys.NODE_ASIC_E_REV, 0),
        revision=get_value(node, keys.NODE_ASIC_REVISION, 0),
        device=get_value(node, keys.NODE_DEVICE, 0),
        subsystem=get_value(node, keys.NODE_ASIC_SUBSYSTEM, 0),
        vendor=get_value(node, keys.NODE_ASIC_VENDOR, 0),
        luid=parse_luid(get_value(node, keys.NODE_ASIC_LUID, "")),
    )


def _read_asic(node: Any) -> AsicInfo:
    asic = AsicInfo(
        gpu_index=get_value(node, keys.NODE_ASIC_GPU_INDEX, keys.UNKNOWN_GPU_INDEX),
        gpu_counter_freq=get_value(node, keys.NODE_ASIC_GPU_COUNTER_FREQUENCY, 0),
        num_shader_engines=get_value(node, keys.NODE_ASIC_NUM_SE, 0),
        num_shader_arrays_per_engine=get_value(node, keys.NODE_ASIC_NUM_SA_PER_SE, 0),
        num_cus=get_value(node, keys.NODE_ASIC_NUM_CUS, 0),
    )
    if has_node(node, keys.NODE_ASIC_CU_MASK):
        asic.cu_mask = read_cu_mask(node[keys.NODE_ASIC_CU_MASK])
    if has_node(node, keys.NODE_ASIC_ENGINE_CLOCK_SPEED):
        asic.engine_clock_hz = _read_clock(node[keys.NODE_ASIC_ENGINE_CLOCK_SPEED])
    if has_node(node, keys.NODE_ASIC_IDS):
        asic.id_info = _read_asic_ids(node[keys.NODE_ASIC_IDS])
    return asic


def _read_heaps(node: Any) -> List[HeapInfo]:
    # The heap type is the member name, not a field of the heap object.
    return [
        HeapInfo(
            heap_type=heap_type,
            phys_addr=get_value(heap_node, keys.NODE_PHYSICAL_ADDRESS, 0),
            size=get_value(heap_node, keys.NODE_SIZE, 0),
        )
        for heap_type, heap_node in iter_members(node)
    ]


def _read_excluded_ranges(node: Any) -> List[ExcludedRangeInfo]:
    return [
        ExcludedRangeInfo(
            base=get_value(range_node, keys.NODE_BASE, 0),
            size=get_value(range_node, keys.NODE_SIZE, 0),
        )
        for range_node in iter_nodes(node)
    ]


def _read_gpu_memory(node: Any) -> MemoryInfo:
    memory = MemoryInfo(
        type=get_value(node, keys.NODE_TYPE, ""),
        mem_ops_per_clock=get_value(node, keys.NODE_MEMORY_OPS_PER_CLOCK, 0),
        bus_bit_width=get_value(node, keys.NODE_MEMORY_BUS_BIT_WIDTH, 0),
        bandwidth=get_value(node, keys.NODE_MEMORY_BANDWIDTH, 0),
    )
    if has_node(node, keys.NODE_MEMORY_CLOCK_SPEED):
        memory.mem_clock_hz = _read_clock(node[keys.NODE_MEMORY_CLOCK_SPEED])
    if has_node(node, keys.NODE_HEAPS):
        memory.heaps = _read_heaps(node[keys.NODE_HEAPS])
    if has_node(node, keys.NODE_EXCLUDED_VA_RANGES):
        memory.excluded_va_ranges = _read_excluded_ranges(node[keys.NODE_EXCLUDED_VA_RANGES])
    return memory


def _read_software_version(node: Any) -> SoftwareVersion:
    return SoftwareVersion(
        major=get_value(node, keys.NODE_MAJOR, 0),
        minor=get_value(node, keys.NODE_MINOR, 0),
        misc=get_value(node, keys.NODE_MISC, 0),
    )


def _read_gpus(node: Any) -> List[GpuInfo]:
    gpus: List[GpuInfo] = []
    for gpu_node in iter_nodes(node):
        gpu = GpuInfo(name=get_value(gpu_node, keys.NODE_NAME, ""))
        if has_node(gpu_node, keys.NODE_PCI):
            gpu.pci = _read_pci(gpu_node[keys.NODE_PCI])
        if has_node(gpu_node, keys.NODE_ASIC):
            gpu.asic = _read_asic(gpu_node[keys.NODE_ASIC])
        if has_node(gpu_node, keys.NODE_MEMORY):
            gpu.memory = _read_gpu_memory(gpu_node[keys.NODE_MEMORY])
        if has_node(gpu_node, keys.NODE_BIG_SW):
            gpu.big_sw = _read_software_version(gpu_node[keys.NODE_BIG_SW])
        gpus.append(gpu)
    return gpus


def _read_processes(node: Any) -> List[Process]:
    return [
        Process(
            name=get_value(process_node, keys.NODE_NAME, ""),
            path=get_value(process_node, keys.NODE_PATH, ""),
            id=get_value(process_node, keys.NODE_PROCESS_ID, 0),
        )
        for process_node in iter_nodes(node)
    ]


# ---------------------------------------------------------------------------
# Versioned mappers
# ---------------------------------------------------------------------------


def map_system_info_v1(system_node: Any, system_info: SystemInfo) -> None:
    """Populate the sections shared by every document version."""
    if has_node(system_node, keys.NODE_DEV_DRIVER):
        system_info.devdriver = _read_devdriver(system_node[keys.NODE_DEV_DRIVER])
    if has_node(system_node, keys.NODE_DRIVER):
        system_info.driver = _read_driver(system_node[keys.NODE_DRIVER])
    if has_node(system_node, keys.NODE_OS):
        system_info.os = _read_os(system_node[keys.NODE_OS])
    if has_node(system_node, keys.NODE_CPUS):
        system_info.cpus = _read_cpus(system_node[keys.NODE_CPUS])
    if has_node(system_node, keys.NODE_GPUS):
        system_info.gpus = _read_gpus(system_node[keys.NODE_GPUS])


def map_system_info_v2(system_node: Any, system_info: SystemInfo) -> None:
    """Version 2 adds the running process list."""
    map_system_info_v1(system_node, system_info)
    if has_node(system_node, keys.NODE_PROCESSES):
        system_info.processes = _read_processes(system_node[keys.NODE_PROCESSES])


SYSTEM_INFO_MAPPERS: Dict[int, SystemInfoMapper] = {
    1: map_system_info_v1,
    2: map_system_info_v2,
}


def create_system_info_mapper(major_version: int) -> SystemInfoMapper:
    """
    Select the mapper for a document's major version.

    Raises:
        UnsupportedVersionError: No mapper exists for this version. There is
            no fallback to the nearest known version.
    """
    mapper = SYSTEM_INFO_MAPPERS.get(major_version)
    if mapper is None:
        raise UnsupportedVersionError(major_version, kind="system info")
    return mapper


def read_version(system_node: Any) -> Version:
    """
    Read the document version marker.

    Version 2 and later use an object with major/minor/patch/build, where a
    missing major means 2. Legacy documents use a bare number, and a
    document without any marker is version 1.
    """
    if has_node(system_node, keys.NODE_VERSION) and isinstance(system_node[keys.NODE_VERSION], dict):
        version_node = system_node[keys.NODE_VERSION]
        return Version(
            major=get_value(version_node, keys.NODE_MAJOR, 2),
            minor=get_value(version_node, keys.NODE_MINOR, 0),
            patch=get_value(version_node, keys.NODE_PATCH, 0),
            build=get_value(version_node, keys.NODE_BUILD, 0),
        )
    return Version(major=get_value(system_node, keys.NODE_VERSION, 1))


def _process_system_node(system_node: Any) -> SystemInfo:
    version = read_version(system_node)
    mapper = create_system_info_mapper(version.major)
    logger.debug(f"Decoding system info version {version.major}.{version.minor}.{version.patch}.{version.build}")

    system_info = SystemInfo(version=version)
    mapper(system_node, system_info)
    return system_info


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def load_document(text: DocumentText) -> Any:
    """Parse JSON text (bytes are read as UTF-8)."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")
    return json.loads(text)


def _unwrap_system_node(structure: Any) -> Any:
    # Standalone chunks carry the payload without the "system" envelope.
    if has_node(structure, keys.NODE_SYSTEM):
        return structure[keys.NODE_SYSTEM]
    return structure


def decode_system_info(text: DocumentText) -> Tuple[SystemInfo, bool]:
    """
    Decode a system info JSON document.

    Returns:
        The decoded record and True, or a default ``SystemInfo()`` and False
        when the document is malformed or its version is not supported.
        Callers must check the flag: a default record looks the same as a
        legitimately empty one.
    """
    try:
        structure = load_document(text)
        return _process_system_node(_unwrap_system_node(structure)), True
    except UnsupportedVersionError as e:
        logger.warning(f"Cannot decode system info: {e}")
    except ValueError as e:
        logger.error(f"Malformed system info document: {e}")
    except Exception as e:
        logger.error(f"Failed to decode system info: {e}", exc_info=True)
    return SystemInfo(), False


def normalize_system_info(text: DocumentText) -> str:
    """
    Return the JSON text of the system info payload without its envelope.

    A document with a "system" key yields that node re-serialized; a
    document without it is returned as is. Returns "" when the text is not
    valid JSON.
    """
    try:
        structure = load_document(text)
    except Exception as e:
        logger.error(f"Malformed system info document: {e}")
        return ""

    if has_node(structure, keys.NODE_SYSTEM):
        return json.dumps(structure[keys.NODE_SYSTEM], separators=(",", ":"), ensure_ascii=False)
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("utf-8")
    return text
