"""Remote frame decoding (base64 text -> raw PCM bytes).

Speech-generation services deliver audio as base64-encoded PCM16 frames.
Decoding is pure: the decoded length may be odd, and sample alignment
across frames is the timeline's job, not the decoder's.
"""

from __future__ import annotations

import base64
import binascii
import re

from convorec.exceptions import DecodeError
from convorec.logging import get_logger

logger = get_logger("codec.frame")

_ASCII_WHITESPACE_RE = re.compile(rb"[\t\n\f\r ]+")
_BASE64_BODY_RE = re.compile(rb"[A-Za-z0-9+/]*")


def decode_frame(text: str | bytes) -> bytes:
    """Decode one base64 frame into raw bytes.

    Decoding is forgiving in the way browser ``atob`` is: ASCII whitespace
    anywhere in the frame is ignored and trailing ``=`` padding is optional.
    Empty input decodes to ``b""``.

    Raises:
        DecodeError: If the input is not valid base64.
    """
    if isinstance(text, str):
        try:
            payload = text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise DecodeError("non-ASCII characters in frame") from exc
    else:
        payload = bytes(text)

    payload = _ASCII_WHITESPACE_RE.sub(b"", payload)
    if not payload:
        return b""

    if len(payload) % 4 == 0:
        payload = payload.removesuffix(b"=").removesuffix(b"=")
    if len(payload) % 4 == 1:
        raise DecodeError(f"impossible base64 length {len(payload)}")
    if not _BASE64_BODY_RE.fullmatch(payload):
        raise DecodeError("invalid base64 character or misplaced padding")

    try:
        return base64.b64decode(payload + b"=" * (-len(payload) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(str(exc)) from exc


class FrameDecoder:
    """Counts decoded and rejected frames around ``decode_frame``.

    Holds no audio state; carrying odd bytes between frames lives in the
    TimelineStore.
    """

    def __init__(self) -> None:
        self._frames_decoded = 0
        self._frames_rejected = 0

    @property
    def frames_decoded(self) -> int:
        return self._frames_decoded

    @property
    def frames_rejected(self) -> int:
        return self._frames_rejected

    def decode(self, text: str | bytes) -> bytes:
        """Decode one frame.

        Raises:
            DecodeError: If the input is not valid base64.
        """
        try:
            raw = decode_frame(text)
        except DecodeError:
            self._frames_rejected += 1
            raise
        self._frames_decoded += 1
        logger.debug("frame_decoded", num_bytes=len(raw))
        return raw

    def reset(self) -> None:
        self._frames_decoded = 0
        self._frames_rejected = 0
