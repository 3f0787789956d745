"""Filesystem artifact sink.

Writes each artifact as a file under a base directory::

    {base_dir}/{filename}
"""

from __future__ import annotations

import os
import re

from convorec.exceptions import SinkError
from convorec.logging import get_logger
from convorec.sink.interface import ArtifactSink

logger = get_logger("sink.filesystem")

# Recorder filenames contain a space between date and time.
_SAFE_FILENAME = re.compile(r"^[A-Za-z0-9_. -]+$")


class FileSystemArtifactSink(ArtifactSink):
    """Persist artifacts as files in ``base_dir`` (created on first delivery)."""

    def __init__(self, base_dir: str | os.PathLike[str]) -> None:
        self._base_dir = os.path.abspath(os.fspath(base_dir))

    @property
    def base_dir(self) -> str:
        return self._base_dir

    @staticmethod
    def _validate_filename(filename: str) -> None:
        """Validate filename to prevent path traversal."""
        if not _SAFE_FILENAME.match(filename) or filename in (".", "..") or ".." in filename:
            raise SinkError(f"Invalid artifact filename: {filename!r}")

    def deliver(self, data: bytes, filename: str, content_type: str) -> str:
        self._validate_filename(filename)
        path = os.path.join(self._base_dir, filename)
        try:
            os.makedirs(self._base_dir, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as exc:
            raise SinkError(f"Failed to write artifact '{filename}': {exc}") from exc

        logger.info(
            "artifact_written",
            path=path,
            num_bytes=len(data),
            content_type=content_type,
        )
        return path
