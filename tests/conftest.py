"""
Shared fixtures for the reader tests.
"""
import copy
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from system_info_utils.storage.chunk_file import InMemoryChunkFile


SYSTEM_PAYLOAD = {
    "version": {"major": 2, "minor": 1, "patch": 3, "build": 4},
    "devdriver": {"version": {"major": 42}, "tag": "release-24"},
    "driver": {
        "name": "AMD Radeon Software",
        "description": "Adrenalin Edition",
        "packagingVersion": "23.10.1",
        "softwareVersion": "31.0.22001.1",
        "isClosedSource": True,
    },
    "os": {
        "name": "Windows 11",
        "description": "Windows 11 Pro 22H2",
        "hostname": "build-machine",
        "memory": {"physical": 34359738368, "swap": 8589934592, "name": "DDR5"},
        "config": {
            "windows": {
                "etwSupport": {
                    "isSupported": True,
                    "hasPermission": False,
                    "statusCode": 5,
                    "needsRegistryOrUserGroup": True,
                }
            }
        },
    },
    "cpus": [
        {
            "name": "AMD Ryzen 9 7950X 16-Core Processor",
            "architecture": "x86_64",
            "cpuId": "AMD64 Family 25 Model 97 Stepping 2",
            "deviceId": "CPU0",
            "vendorId": "AuthenticAMD",
            "virtualization": "AMD-V",
            "numPhysicalCores": 16,
            "numLogicalCores": 32,
            "speed": {"max": 4501},
            "cpuTimeClockFreq": 10000000,
        }
    ],
    "gpus": [
        {
            "name": "AMD Radeon RX 7900 XTX",
            "pci": {"bus": 3, "device": 0, "function": 0},
            "asic": {
                "gpuIndex": 0,
                "gpuCounterFreq": 100000000,
                "engineClockHz": {"min": 500000000, "max": 2500000000},
                "numShaderEngines": 2,
                "numShaderArraysPerEngine": 2,
                "cuMask": [[255, 255], [255, 127]],
                "numCus": 96,
                "ids": {
                    "gfxEngine": 11,
                    "family": 145,
                    "eRev": 1,
                    "revision": 200,
                    "device": 29772,
                    "subsystem": 4660,
                    "vendor": 4098,
                    "luid": "0123456789abcdef",
                },
            },
            "memory": {
                "type": "GDDR6",
                "memOpsPerClock": 16,
                "busBitWidth": 384,
                "bandwidthBytesPerSec": 960000000000,
                "memClockHz": {"min": 96000000, "max": 2500000000},
                "heaps": {
                    "local": {"physicalAddress": 0, "size": 268435456},
                    "invisible": {"physicalAddress": 268435456, "size": 25501368320},
                },
                "excludedVaRanges": [{"base": 4096, "size": 65536}],
            },
            "bigSw": {"major": 2023, "minor": 4, "misc": 1},
        }
    ],
    "processes": [
        {"name": "game.exe", "path": "C:\\Games\\game.exe", "processId": 4242},
        {"name": "explorer.exe", "path": "C:\\Windows\\explorer.exe", "processId": 1024},
    ],
}


OVERRIDES_V2 = {
    "IsDriverExperiments": False,
    "Components": [
        {
            "Component": "DXX",
            "Structures": [
                {
                    "Structure": "DxxSettings",
                    "Settings": [
                        {"SettingName": "TessellationMode", "Description": "Tessellation", "Value": 2, "UserOverride": True},
                        {"SettingName": "AnisotropicFilter", "Description": "AF level", "Value": 16, "UserOverride": False},
                    ],
                },
                {
                    "Structure": "",
                    "Settings": [
                        {"SettingName": "VSyncControl", "Value": 1, "UserOverride": True},
                    ],
                },
            ],
        },
        {
            "Component": "Vulkan",
            "Structures": [
                {
                    "Structure": "VkSettings",
                    "Settings": [
                        {"SettingName": "ShaderCache", "Value": 0},
                    ],
                }
            ],
        },
    ],
}


OVERRIDES_V3 = {
    "IsDriverExperiments": True,
    "Components": [
        {
            "Component": "Experiments",
            "Structures": [
                {
                    "Structure": "ShaderCompiler",
                    "Settings": [
                        {
                            "SettingName": "DisableLoopUnrolling",
                            "Description": "Disable loop unrolling",
                            "Current": {"Value": True, "UserOverride": True},
                            "Supported": True,
                        },
                        {
                            "SettingName": "DisableRayTracing",
                            "Current": {"Value": True, "UserOverride": True},
                            "Supported": False,
                        },
                        {
                            "SettingName": "ForceWave32",
                            "Current": {"Value": False, "UserOverride": False},
                            "Supported": True,
                        },
                    ],
                }
            ],
        }
    ],
}


@pytest.fixture
def system_payload():
    return copy.deepcopy(SYSTEM_PAYLOAD)


@pytest.fixture
def system_document(system_payload):
    """A version 2 document wrapped in the "system" envelope."""
    return {"system": system_payload}


@pytest.fixture
def overrides_v2():
    return copy.deepcopy(OVERRIDES_V2)


@pytest.fixture
def overrides_v3():
    return copy.deepcopy(OVERRIDES_V3)


@pytest.fixture
def chunk_file(system_payload, overrides_v3):
    return InMemoryChunkFile(
        {
            "SystemInfo": (1, json.dumps(system_payload)),
            "DriverOverrides": (3, json.dumps(overrides_v3)),
        }
    )
