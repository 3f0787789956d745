"""Centralized configuration via pydantic-settings.

All ``CONVOREC_*`` environment variables are read, validated, and exposed here.
Logging env vars (``CONVOREC_LOG_FORMAT``, ``CONVOREC_LOG_LEVEL``) are
excluded: they stay in ``convorec.logging`` for bootstrap-safety.

The recorder core never reads settings on its own; ``SessionRecorder.from_settings``
and the CLI are the only consumers.

Usage::

    from convorec.config.settings import get_settings

    settings = get_settings()
    print(settings.recorder.sample_rate)  # int, validated
    print(settings.sink.output_dir)       # str

``.env`` files in the working directory are loaded automatically.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from convorec._audio_constants import (
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_SAMPLE_RATE,
    FILENAME_PREFIX_PATTERN,
    MAX_SAMPLE_RATE,
    MIN_SAMPLE_RATE,
)


class RecorderSettings(BaseSettings):
    """Recording session settings."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    sample_rate: int = Field(
        default=DEFAULT_SAMPLE_RATE,
        ge=MIN_SAMPLE_RATE,
        le=MAX_SAMPLE_RATE,
        validation_alias="CONVOREC_SAMPLE_RATE",
    )
    filename_prefix: str = Field(
        default=DEFAULT_FILENAME_PREFIX,
        pattern=FILENAME_PREFIX_PATTERN,
        validation_alias="CONVOREC_FILENAME_PREFIX",
    )


class SinkSettings(BaseSettings):
    """Artifact sink settings."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    output_dir: str = Field(default="./recordings", validation_alias="CONVOREC_OUTPUT_DIR")


class ConvoRecSettings(BaseSettings):
    """Root settings. Aggregates all subsystem settings.

    Loads ``.env`` from the current directory when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    recorder: RecorderSettings = Field(default_factory=RecorderSettings)
    sink: SinkSettings = Field(default_factory=SinkSettings)


@lru_cache(maxsize=1)
def get_settings() -> ConvoRecSettings:
    """Return the singleton ``ConvoRecSettings`` instance.

    The result is cached; subsequent calls return the same object.
    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    return ConvoRecSettings()
