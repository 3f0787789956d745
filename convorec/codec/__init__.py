"""Codec layer: remote frame decoding and WAV encoding."""

from __future__ import annotations

from convorec.codec.frame import FrameDecoder, decode_frame
from convorec.codec.wav import WavEncoder, build_wav_header, encode_wav

__all__ = ["FrameDecoder", "WavEncoder", "build_wav_header", "decode_frame", "encode_wav"]
