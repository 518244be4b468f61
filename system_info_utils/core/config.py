from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from system_info_utils.data.definitions import (
    DRIVER_OVERRIDES_CHUNK_VERSION_MAX,
    DRIVER_OVERRIDES_CHUNK_VERSION_MIN,
    SYSTEM_INFO_CHUNK_VERSION_MAX,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ReaderConfig(BaseModel):
    """
    Chunk version limits accepted by the archive readers.

    The defaults are the versions this build knows how to decode.
    """

    system_info_chunk_version_max: int = Field(
        default=SYSTEM_INFO_CHUNK_VERSION_MAX,
        ge=1,
        description="Newest SystemInfo chunk version that will be decoded.",
    )
    driver_overrides_chunk_version_min: int = Field(
        default=DRIVER_OVERRIDES_CHUNK_VERSION_MIN,
        ge=1,
        description="Oldest DriverOverrides chunk version that will be decoded.",
    )
    driver_overrides_chunk_version_max: int = Field(
        default=DRIVER_OVERRIDES_CHUNK_VERSION_MAX,
        ge=1,
        description="Newest DriverOverrides chunk version that will be decoded.",
    )

    @model_validator(mode="after")
    def _check_overrides_range(self) -> "ReaderConfig":
        if self.driver_overrides_chunk_version_min > self.driver_overrides_chunk_version_max:
            raise ValueError("driver_overrides_chunk_version_min must not exceed driver_overrides_chunk_version_max")
        return self


_reader_config: Optional[ReaderConfig] = None


def get_reader_config() -> ReaderConfig:
    """
    Return the process-wide reader configuration, creating the default one
    on first use.
    """
    global _reader_config
    if _reader_config is None:
        _reader_config = ReaderConfig()
    return _reader_config


def set_reader_config(config: Optional[ReaderConfig]) -> None:
    """Replace the process-wide configuration (None restores the defaults)."""
    global _reader_config
    _reader_config = config


def configure_logging(level: int = logging.INFO) -> None:
    """Set up root logging the same way for scripts and test sessions."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
