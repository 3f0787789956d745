"""Artifact sinks: where finished recordings go."""

from __future__ import annotations

from convorec.sink.filesystem import FileSystemArtifactSink
from convorec.sink.interface import ArtifactSink
from convorec.sink.memory import MemoryArtifactSink

__all__ = ["ArtifactSink", "FileSystemArtifactSink", "MemoryArtifactSink"]
