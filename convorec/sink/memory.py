"""In-memory artifact sink for tests and embedding hosts."""

from __future__ import annotations

from convorec._types import Artifact
from convorec.exceptions import SinkError
from convorec.sink.interface import ArtifactSink


class MemoryArtifactSink(ArtifactSink):
    """Keeps delivered artifacts in a dict keyed by filename.

    Locations have the form ``memory://{filename}``. Delivering the same
    filename twice overwrites the earlier entry.
    """

    scheme = "memory://"

    def __init__(self) -> None:
        self._store: dict[str, tuple[bytes, str]] = {}

    @property
    def filenames(self) -> list[str]:
        return list(self._store)

    def deliver(self, data: bytes, filename: str, content_type: str) -> str:
        if not filename:
            raise SinkError("Artifact filename must not be empty")
        self._store[filename] = (bytes(data), content_type)
        return f"{self.scheme}{filename}"

    def get(self, filename: str) -> bytes | None:
        entry = self._store.get(filename)
        return entry[0] if entry is not None else None

    def content_type(self, filename: str) -> str | None:
        entry = self._store.get(filename)
        return entry[1] if entry is not None else None

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Artifact):
            return item.filename in self._store
        return item in self._store

    def __len__(self) -> int:
        return len(self._store)
