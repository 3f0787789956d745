"""Audio timeline storage."""

from __future__ import annotations

from convorec.timeline.store import TimelineStore

__all__ = ["TimelineStore"]
