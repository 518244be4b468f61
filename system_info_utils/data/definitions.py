"""
JSON key names and chunk identifiers used by the readers.

The key strings are the wire contract of the documents and are matched
case-sensitively.
"""

# ---------------------------------------------------------------------------
# System info chunk
# ---------------------------------------------------------------------------

SYSTEM_INFO_CHUNK_IDENTIFIER = "SystemInfo"
SYSTEM_INFO_CHUNK_VERSION = 1
SYSTEM_INFO_CHUNK_VERSION_MAX = SYSTEM_INFO_CHUNK_VERSION

# Sentinel written to AsicInfo.gpu_index when the asic section omits it.
UNKNOWN_GPU_INDEX = 0xFFFFFFFF

LUID_SIZE = 8

NODE_DRIVER = "driver"
NODE_SYSTEM = "system"
NODE_NAME = "name"
NODE_DESCRIPTION = "description"
NODE_VERSION = "version"
NODE_DRIVER_PACKAGING_VERSION = "packagingVersion"
NODE_DRIVER_SOFTWARE_VERSION = "softwareVersion"
NODE_OS = "os"
NODE_VIRTUALIZATION = "virtualization"
NODE_TYPE = "type"
NODE_HOSTNAME = "hostname"
NODE_MEMORY = "memory"
NODE_MEMORY_PHYSICAL = "physical"
NODE_MEMORY_SWAP = "swap"
NODE_CPUS = "cpus"
NODE_PROCESSES = "processes"
NODE_PROCESS_ID = "processId"
NODE_PATH = "path"
NODE_ARCHITECTURE = "architecture"
NODE_CPU_VENDOR_ID = "vendorId"
NODE_CPU_TIME_CLOCK_FREQ = "cpuTimeClockFreq"
NODE_CPU_PHYSICAL_CORE_COUNT = "numPhysicalCores"
NODE_CPU_LOGICAL_CORE_COUNT = "numLogicalCores"
NODE_SPEED = "speed"
NODE_CPU_ID = "cpuId"
NODE_CPU_DEVICE_ID = "deviceId"
NODE_GPUS = "gpus"
NODE_PCI = "pci"
NODE_PCI_BUS = "bus"
NODE_DEVICE = "device"
NODE_PCI_FUNCTION = "function"
NODE_ASIC = "asic"
NODE_ASIC_GPU_INDEX = "gpuIndex"
NODE_ASIC_GPU_COUNTER_FREQUENCY = "gpuCounterFreq"
NODE_ASIC_NUM_SE = "numShaderEngines"
NODE_ASIC_NUM_SA_PER_SE = "numShaderArraysPerEngine"
NODE_ASIC_CU_MASK = "cuMask"
NODE_ASIC_NUM_CUS = "numCus"
NODE_ASIC_ENGINE_CLOCK_SPEED = "engineClockHz"
NODE_MIN = "min"
NODE_MAX = "max"
NODE_ASIC_IDS = "ids"
NODE_ASIC_GFX_ENGINE = "gfxEngine"
NODE_ASIC_FAMILY = "family"
NODE_ASIC_E_REV = "eRev"
NODE_ASIC_REVISION = "revision"
NODE_ASIC_SUBSYSTEM = "subsystem"
NODE_ASIC_VENDOR = "vendor"
NODE_ASIC_LUID = "luid"
NODE_MEMORY_OPS_PER_CLOCK = "memOpsPerClock"
NODE_MEMORY_BUS_BIT_WIDTH = "busBitWidth"
NODE_MEMORY_BANDWIDTH = "bandwidthBytesPerSec"
NODE_MEMORY_CLOCK_SPEED = "memClockHz"
NODE_HEAPS = "heaps"
NODE_PHYSICAL_ADDRESS = "physicalAddress"
NODE_SIZE = "size"
NODE_EXCLUDED_VA_RANGES = "excludedVaRanges"
NODE_BASE = "base"
NODE_BIG_SW = "bigSw"
NODE_MAJOR = "major"
NODE_MINOR = "minor"
NODE_PATCH = "patch"
NODE_BUILD = "build"
NODE_MISC = "misc"
NODE_CONFIG = "config"
NODE_DRM = "drm"
NODE_IS_CLOSED_SOURCE = "isClosedSource"
NODE_ETW_SUPPORT = "etwSupport"
NODE_SUPPORTED = "isSupported"
NODE_ETW_REGISTRY_OR_USER_GROUP = "needsRegistryOrUserGroup"
NODE_HAS_PERMISSION = "hasPermission"
NODE_STATUS_CODE = "statusCode"
NODE_POWER_DPM_WRITABLE = "powerDpmWritable"
NODE_DEV_DRIVER = "devdriver"
NODE_TAG = "tag"
NODE_LINUX = "linux"
NODE_WINDOWS = "windows"

# ---------------------------------------------------------------------------
# Driver overrides chunk
# ---------------------------------------------------------------------------

DRIVER_OVERRIDES_CHUNK_IDENTIFIER = "DriverOverrides"
DRIVER_OVERRIDES_CHUNK_VERSION = 3
DRIVER_OVERRIDES_CHUNK_VERSION_MIN = 2
DRIVER_OVERRIDES_CHUNK_VERSION_MAX = DRIVER_OVERRIDES_CHUNK_VERSION

# Label given to structures that carry no name.
DRIVER_OVERRIDES_MISC_STRUCTURE = "Misc."

OVERRIDES_IS_DRIVER_EXPERIMENTS = "IsDriverExperiments"
OVERRIDES_COMPONENTS = "Components"
OVERRIDES_COMPONENT = "Component"
OVERRIDES_STRUCTURES = "Structures"
OVERRIDES_STRUCTURE = "Structure"
OVERRIDES_SETTINGS = "Settings"
OVERRIDES_SETTING_NAME = "SettingName"
OVERRIDES_CURRENT = "Current"
OVERRIDES_VALUE = "Value"
OVERRIDES_USER_OVERRIDE = "UserOverride"
OVERRIDES_DESCRIPTION = "Description"
OVERRIDES_SUPPORTED = "Supported"
