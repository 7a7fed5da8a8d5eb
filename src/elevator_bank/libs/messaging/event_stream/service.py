"""
Facade over the trace stream backend, plus the process-wide instance that
units and the dispatcher publish to when none is passed in.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from .base import EventStreamClient, StreamEntry
from .factory import StreamProvider, create_stream_client

logger = logging.getLogger(__name__)


class EventStreamService:
    """Thin wrapper that forwards every call to its backend client."""

    _backend: EventStreamClient

    def __init__(
        self, backend: Optional[Union[str, EventStreamClient]] = None, **backend_options
    ) -> None:
        """Use the given client, or build one by provider name (default: memory)."""
        if backend is None or backend == StreamProvider.MEMORY.value:
            self._backend = create_stream_client(StreamProvider.MEMORY, backend_options)
        elif isinstance(backend, EventStreamClient):
            self._backend = backend
        else:
            raise ValueError(f"Unsupported event stream backend: {backend}")

    @property
    def backend(self) -> EventStreamClient:
        return self._backend

    def publish(self, stream: str, data: Dict[str, Any]) -> str:
        return self._backend.publish(stream, data)

    def read(self, stream: str, **kwargs) -> List[StreamEntry]:
        return self._backend.read(stream, **kwargs)

    def range(self, stream: str, start: str = "-", end: str = "+") -> List[StreamEntry]:
        return self._backend.range(stream, start, end)

    def trim(self, stream: str, maxlen: int) -> int:
        return self._backend.trim(stream, maxlen)

    def length(self, stream: str) -> int:
        return self._backend.length(stream)

    def close(self) -> None:
        self._backend.close()


# Process-wide instance, created lazily
_event_stream_service: Optional[EventStreamService] = None


def get_event_stream() -> EventStreamService:
    """Return the process-wide service, creating an in-memory one on first use."""
    global _event_stream_service
    if _event_stream_service is None:
        _event_stream_service = EventStreamService()
    return _event_stream_service


def init_event_stream(backend=None, **backend_options) -> EventStreamService:
    """Replace the process-wide service with a fresh one."""
    global _event_stream_service
    _event_stream_service = EventStreamService(backend, **backend_options)
    logger.debug("Event stream initialized with options: %s", backend_options)
    return _event_stream_service


def close() -> None:
    """Close the connection to the global event stream backend."""
    if _event_stream_service is not None:
        _event_stream_service.close()
