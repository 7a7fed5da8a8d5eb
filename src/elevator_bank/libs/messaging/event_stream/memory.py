"""
In-process implementation of the Event Stream client interface.

Entries are kept per stream in insertion order and addressed by Redis-style
IDs of the form ``<milliseconds>-<sequence>``.
"""

import logging
import threading
import time
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional, Tuple

from .base import EventStreamClient, StreamEntry
from .exceptions import EventStreamClosedError, EventStreamError

logger = logging.getLogger(__name__)


def parse_id(message_id: str) -> Tuple[int, int]:
    """Split a '<ms>-<seq>' ID into a sortable tuple."""
    try:
        ms, _, seq = message_id.partition("-")
        return int(ms), int(seq or 0)
    except ValueError as e:
        raise EventStreamError(f"Invalid stream ID: {message_id!r}") from e


class InMemoryStreamClient(EventStreamClient):
    """Thread-safe in-memory event stream."""

    def __init__(self, maxlen: Optional[int] = None, **kwargs: Any):
        """Initialize with an optional per-stream length cap."""
        self.maxlen = maxlen
        self._streams: Dict[str, Deque[StreamEntry]] = defaultdict(deque)
        self._last_id: Tuple[int, int] = (0, 0)
        self._closed = False
        self._cond = threading.Condition()

    def _next_id(self) -> str:
        ms = int(time.time() * 1000)
        last_ms, last_seq = self._last_id
        if ms <= last_ms:
            self._last_id = (last_ms, last_seq + 1)
        else:
            self._last_id = (ms, 0)
        return "%d-%d" % self._last_id

    def _ensure_open(self) -> None:
        if self._closed:
            raise EventStreamClosedError("Event stream is closed")

    def publish(self, stream: str, data: Dict[str, Any]) -> str:
        """Append an event to a stream and wake blocked readers."""
        with self._cond:
            self._ensure_open()
            message_id = self._next_id()
            entries = self._streams[stream]
            entries.append((message_id, dict(data)))
            if self.maxlen is not None:
                while len(entries) > self.maxlen:
                    entries.popleft()
            self._cond.notify_all()
        logger.debug(
            "Event published to stream '%s' with message ID: %s", stream, message_id
        )
        return message_id

    def _after(self, stream: str, last_id: str) -> List[StreamEntry]:
        floor = parse_id(last_id)
        return [e for e in self._streams.get(stream, ()) if parse_id(e[0]) > floor]

    def read(
        self,
        stream: str,
        last_id: str = "0",
        count: Optional[int] = None,
        block: Optional[int] = None,
    ) -> List[StreamEntry]:
        """Read entries after last_id, waiting up to block ms for new ones."""
        with self._cond:
            self._ensure_open()
            entries = self._after(stream, last_id)
            if not entries and block:
                deadline = time.monotonic() + block / 1000.0
                while not entries and not self._closed:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        break
                    self._cond.wait(remaining)
                    entries = self._after(stream, last_id)
            return entries[:count] if count is not None else entries

    def range(
        self, stream: str, start: str = "-", end: str = "+"
    ) -> List[StreamEntry]:
        """Return entries with start <= ID <= end."""
        lo = (0, 0) if start == "-" else parse_id(start)
        with self._cond:
            self._ensure_open()
            entries = list(self._streams.get(stream, ()))
        if end == "+":
            return [e for e in entries if parse_id(e[0]) >= lo]
        hi = parse_id(end)
        return [e for e in entries if lo <= parse_id(e[0]) <= hi]

    def trim(self, stream: str, maxlen: int) -> int:
        with self._cond:
            self._ensure_open()
            entries = self._streams.get(stream)
            if not entries:
                return 0
            trimmed = 0
            while len(entries) > maxlen:
                entries.popleft()
                trimmed += 1
            return trimmed

    def length(self, stream: str) -> int:
        with self._cond:
            return len(self._streams.get(stream, ()))

    def close(self) -> None:
        """Close the stream and release any blocked readers."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
