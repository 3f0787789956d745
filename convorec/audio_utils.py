"""Shared PCM16 conversion utilities.

Centralizes sample normalization so the timeline and the WAV encoder accept
the same inputs: int16 numpy arrays, sequences of ints, or raw little-endian
PCM bytes.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from convorec._audio_constants import (
    BYTES_PER_SAMPLE_INT16,
    MAX_SAMPLE_RATE,
    MIN_SAMPLE_RATE,
    PCM_INT16_DTYPE,
    PCM_INT16_MAX,
    PCM_INT16_MIN,
)
from convorec.exceptions import AudioFormatError

PCMInput = np.ndarray | bytes | bytearray | memoryview | Sequence[int]

__all__ = [
    "PCMInput",
    "as_int16_samples",
    "check_sample_rate",
    "pcm16_bytes_to_samples",
    "samples_to_pcm16_bytes",
]


def pcm16_bytes_to_samples(pcm_data: bytes | bytearray | memoryview) -> np.ndarray:
    """Interpret little-endian PCM16 bytes as an owned int16 array.

    A dangling final byte (odd length) is dropped; block alignment of
    2 bytes always holds for the result.
    """
    usable = len(pcm_data) - (len(pcm_data) % BYTES_PER_SAMPLE_INT16)
    if usable == 0:
        return np.zeros(0, dtype=np.int16)
    view = np.frombuffer(pcm_data, dtype=PCM_INT16_DTYPE, count=usable // BYTES_PER_SAMPLE_INT16)
    return view.astype(np.int16, copy=True)


def as_int16_samples(data: PCMInput) -> np.ndarray:
    """Normalize any supported PCM input into an owned 1-D int16 array.

    The result never aliases the caller's buffer.

    Args:
        data: int16 array, integer sequence, or PCM16 bytes.

    Returns:
        Contiguous int16 array (copy).

    Raises:
        AudioFormatError: If the input is not mono integer PCM within int16 range.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return pcm16_bytes_to_samples(data)

    array = np.asarray(data)
    if array.size == 0:
        return np.zeros(0, dtype=np.int16)
    if array.ndim != 1:
        raise AudioFormatError(f"expected mono samples (1-D), got shape {array.shape}")
    if array.dtype == np.int16:
        return np.array(array, dtype=np.int16, copy=True)
    if array.dtype.kind not in ("i", "u"):
        raise AudioFormatError(f"expected integer PCM16 samples, got dtype {array.dtype}")
    if int(array.min()) < PCM_INT16_MIN or int(array.max()) > PCM_INT16_MAX:
        raise AudioFormatError("sample values exceed the signed 16-bit range")
    return array.astype(np.int16)


def samples_to_pcm16_bytes(samples: np.ndarray) -> bytes:
    """Serialize int16 samples as little-endian PCM16 bytes."""
    return samples.astype(PCM_INT16_DTYPE, copy=False).tobytes()


def check_sample_rate(sample_rate: int) -> int:
    """Return ``sample_rate`` if it lies within the supported range.

    Raises:
        AudioFormatError: If the rate is outside MIN_SAMPLE_RATE..MAX_SAMPLE_RATE.
    """
    if not MIN_SAMPLE_RATE <= sample_rate <= MAX_SAMPLE_RATE:
        raise AudioFormatError(
            f"sample rate {sample_rate} Hz outside {MIN_SAMPLE_RATE}..{MAX_SAMPLE_RATE}"
        )
    return sample_rate
