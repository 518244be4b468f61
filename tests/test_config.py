"""Tests for the reader configuration."""
import logging

import pytest
from pydantic import ValidationError

from system_info_utils.core import config as config_module
from system_info_utils.core.config import (
    ReaderConfig,
    configure_logging,
    get_reader_config,
    set_reader_config,
)


@pytest.fixture(autouse=True)
def reset_config():
    yield
    set_reader_config(None)


class TestReaderConfig:
    def test_defaults(self):
        config = ReaderConfig()
        assert config.system_info_chunk_version_max == 1
        assert config.driver_overrides_chunk_version_min == 2
        assert config.driver_overrides_chunk_version_max == 3

    def test_min_above_max_rejected(self):
        with pytest.raises(ValidationError):
            ReaderConfig(driver_overrides_chunk_version_min=4, driver_overrides_chunk_version_max=3)

    def test_zero_version_rejected(self):
        with pytest.raises(ValidationError):
            ReaderConfig(system_info_chunk_version_max=0)

    def test_global_config(self):
        assert get_reader_config() is get_reader_config()
        custom = ReaderConfig(system_info_chunk_version_max=5)
        set_reader_config(custom)
        assert get_reader_config() is custom

    def test_global_config_used_by_chunk_reader(self, system_payload):
        import json

        from system_info_utils.services.chunk_reader import decode_system_info_from_archive
        from system_info_utils.storage.chunk_file import InMemoryChunkFile

        chunk_file = InMemoryChunkFile({"SystemInfo": (2, json.dumps(system_payload))})
        assert not decode_system_info_from_archive(chunk_file)[1]
        set_reader_config(ReaderConfig(system_info_chunk_version_max=2))
        assert decode_system_info_from_archive(chunk_file)[1]


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging(logging.DEBUG)
    assert calls == {"level": logging.DEBUG, "format": config_module.LOG_FORMAT}
