"""Tests for the top level package API."""
import json

import system_info_utils


def test_public_names_resolve():
    for name in system_info_utils.__all__:
        assert hasattr(system_info_utils, name), name


def test_round_trip_through_public_api(system_payload, overrides_v2):
    chunk_file = system_info_utils.InMemoryChunkFile()
    chunk_file.add_chunk("SystemInfo", 1, json.dumps({"system": system_payload}))
    chunk_file.add_chunk("DriverOverrides", 2, json.dumps(overrides_v2))

    info, ok = system_info_utils.decode_system_info_from_archive(chunk_file)
    assert ok
    assert isinstance(info, system_info_utils.SystemInfo)
    assert info.gpus[0].memory.heaps[0].heap_type == "local"

    assert system_info_utils.is_driver_overrides_chunk_present(chunk_file)
    text, ok = system_info_utils.decode_driver_overrides_from_archive(chunk_file)
    assert ok
    assert json.loads(text)["Components"][0]["Component"] == "DXX"
