"""Centralized audio format constants for convorec.

Single source of truth for PCM and WAV container parameters shared by the
codec, timeline, recorder, and CLI.
"""

from __future__ import annotations

# --- PCM 16-bit format ---
# Signed 16-bit integer range: [-32768, 32767]
PCM_INT16_MAX: int = 32767
PCM_INT16_MIN: int = -32768

# Bytes per sample for 16-bit PCM.
BYTES_PER_SAMPLE_INT16: int = 2

# Samples travel as little-endian int16 regardless of host byte order.
PCM_INT16_DTYPE: str = "<i2"

# --- Sample rates ---
# Realtime speech-generation services deliver 24kHz PCM16.
DEFAULT_SAMPLE_RATE: int = 24000
MIN_SAMPLE_RATE: int = 8000
MAX_SAMPLE_RATE: int = 192000

# --- WAV container (canonical PCM mono layout) ---
WAV_HEADER_SIZE: int = 44
WAV_FMT_CHUNK_SIZE: int = 16
WAV_FORMAT_PCM: int = 1
WAV_NUM_CHANNELS: int = 1
WAV_BITS_PER_SAMPLE: int = 16
WAV_BLOCK_ALIGN: int = WAV_NUM_CHANNELS * BYTES_PER_SAMPLE_INT16
WAV_CONTENT_TYPE: str = "audio/wav"
WAV_FILE_EXTENSION: str = "wav"

# Largest value a RIFF u32 size field can hold.
RIFF_MAX_SIZE: int = 0xFFFFFFFF

# --- Artifact naming ---
# Filename prefixes must survive every sink's filename rules.
FILENAME_PREFIX_PATTERN: str = r"^[A-Za-z0-9_-]{1,64}$"
DEFAULT_FILENAME_PREFIX: str = "convo"
