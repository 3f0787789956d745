"""Canonical RIFF/WAVE PCM encoder (mono, 16-bit).

Layout (44-byte header, all fields little-endian):

    offset  size  field
    0       4     "RIFF"
    4       4     36 + data_length
    8       4     "WAVE"
    12      4     "fmt "
    16      4     16 (fmt subchunk size)
    20      2     1 (PCM)
    22      2     1 (channels)
    24      4     sample_rate
    28      4     sample_rate * 2 (byte rate)
    32      2     2 (block align)
    34      2     16 (bits per sample)
    36      4     "data"
    40      4     data_length

Pure functions with no I/O and no shared state.
"""

from __future__ import annotations

import struct

from convorec._audio_constants import (
    BYTES_PER_SAMPLE_INT16,
    RIFF_MAX_SIZE,
    WAV_BITS_PER_SAMPLE,
    WAV_BLOCK_ALIGN,
    WAV_CONTENT_TYPE,
    WAV_FILE_EXTENSION,
    WAV_FMT_CHUNK_SIZE,
    WAV_FORMAT_PCM,
    WAV_HEADER_SIZE,
    WAV_NUM_CHANNELS,
)
from convorec.audio_utils import PCMInput, as_int16_samples, samples_to_pcm16_bytes
from convorec.exceptions import AudioFormatError, EmptyPayloadError

_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


def build_wav_header(data_length: int, sample_rate: int) -> bytes:
    """Build the 44-byte header for a mono PCM16 payload.

    Args:
        data_length: Payload size in bytes. Must be block aligned (even).
        sample_rate: Sample rate in Hz.

    Raises:
        AudioFormatError: If the sample rate or data length cannot be represented.
    """
    if sample_rate <= 0 or sample_rate * WAV_BLOCK_ALIGN > RIFF_MAX_SIZE:
        raise AudioFormatError(f"sample rate {sample_rate} out of range")
    if data_length < 0 or data_length % WAV_BLOCK_ALIGN != 0:
        raise AudioFormatError(f"data length {data_length} is not block aligned")
    if WAV_HEADER_SIZE - 8 + data_length > RIFF_MAX_SIZE:
        raise AudioFormatError(f"data length {data_length} exceeds the RIFF size limit")

    byte_rate = sample_rate * WAV_NUM_CHANNELS * WAV_BITS_PER_SAMPLE // 8
    header = _HEADER_STRUCT.pack(
        b"RIFF",
        WAV_HEADER_SIZE - 8 + data_length,
        b"WAVE",
        b"fmt ",
        WAV_FMT_CHUNK_SIZE,
        WAV_FORMAT_PCM,
        WAV_NUM_CHANNELS,
        sample_rate,
        byte_rate,
        WAV_BLOCK_ALIGN,
        WAV_BITS_PER_SAMPLE,
        b"data",
        data_length,
    )
    return header


def encode_wav(samples: PCMInput, sample_rate: int) -> bytes:
    """Encode PCM16 samples as a complete WAV file.

    A byte payload of odd length loses its dangling final byte so the data
    chunk stays block aligned.

    Args:
        samples: int16 array, integer sequence, or PCM16 bytes.
        sample_rate: Sample rate in Hz.

    Returns:
        Header followed by the little-endian sample bytes.

    Raises:
        EmptyPayloadError: If there are no samples to encode.
        AudioFormatError: If the samples or sample rate are invalid.
    """
    pcm = as_int16_samples(samples)
    if pcm.size == 0:
        raise EmptyPayloadError()
    payload = samples_to_pcm16_bytes(pcm)
    return build_wav_header(pcm.size * BYTES_PER_SAMPLE_INT16, sample_rate) + payload


class WavEncoder:
    """Stateless WAV encoder used by the recorder."""

    content_type: str = WAV_CONTENT_TYPE
    file_extension: str = WAV_FILE_EXTENSION

    def encode(self, samples: PCMInput, sample_rate: int) -> bytes:
        """Encode samples as WAV. See ``encode_wav``."""
        return encode_wav(samples, sample_rate)
