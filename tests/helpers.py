"""Shared test helpers.

Usage:
    from tests.helpers import (
        SAMPLE_RATE,
        b64_samples,
        parse_wav_header,
        pcm_bytes,
    )
"""

from __future__ import annotations

import base64
import struct
from datetime import datetime

import numpy as np

SAMPLE_RATE = 24000
FIXED_START = datetime(2024, 3, 5, 14, 7, 9)
FIXED_STAMP = "2024-03-05 14_07_09"

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def pcm_bytes(samples: list[int]) -> bytes:
    """Little-endian PCM16 bytes for ``samples``."""
    return struct.pack(f"<{len(samples)}h", *samples)


def b64_samples(samples: list[int]) -> str:
    """Base64 frame carrying ``samples`` as PCM16."""
    return base64.b64encode(pcm_bytes(samples)).decode("ascii")


def b64_raw(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def wav_samples(wav: bytes) -> list[int]:
    """Samples in the data chunk of a canonical 44-byte-header WAV."""
    return np.frombuffer(wav[44:], dtype="<i2").tolist()


def parse_wav_header(wav: bytes) -> dict[str, object]:
    """Unpack the 44-byte canonical header into named fields."""
    (
        riff,
        riff_size,
        wave,
        fmt,
        fmt_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_tag,
        data_length,
    ) = _HEADER.unpack(wav[:44])
    return {
        "riff": riff,
        "riff_size": riff_size,
        "wave": wave,
        "fmt": fmt,
        "fmt_size": fmt_size,
        "audio_format": audio_format,
        "channels": channels,
        "sample_rate": sample_rate,
        "byte_rate": byte_rate,
        "block_align": block_align,
        "bits_per_sample": bits_per_sample,
        "data_tag": data_tag,
        "data_length": data_length,
    }


class SequentialIds:
    """Deterministic session id factory: sess-1, sess-2, ..."""

    def __init__(self, prefix: str = "sess") -> None:
        self._prefix = prefix
        self._count = 0

    def __call__(self) -> str:
        self._count += 1
        return f"{self._prefix}-{self._count}"
