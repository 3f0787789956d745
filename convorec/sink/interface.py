"""Abstract interface for artifact sinks."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ArtifactSink(ABC):
    """Receives finished artifacts and is responsible for delivering them.

    Persistence, transport, retries, and cancellation all belong to the sink.
    The recorder only calls ``deliver`` and surfaces any ``SinkError``
    unchanged.
    """

    @abstractmethod
    def deliver(self, data: bytes, filename: str, content_type: str) -> str:
        """Deliver one artifact.

        Args:
            data: Encoded artifact bytes.
            filename: Name generated by the recorder.
            content_type: MIME type (e.g., "audio/wav").

        Returns:
            Location of the delivered artifact (path, URL, key).

        Raises:
            SinkError: If delivery fails.
        """
        ...
