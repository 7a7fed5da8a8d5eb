"""
Abstract base class for event stream clients.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

# (message_id, data)
StreamEntry = Tuple[str, Dict[str, Any]]


class EventStreamClient(ABC):
    """Abstract base class for event stream clients.

    This defines the interface that all event stream implementations must follow.
    Implementations must be safe to call from several threads at once.
    """

    @abstractmethod
    def publish(self, stream: str, data: Dict[str, Any]) -> str:
        """Publish an event to a stream.

        Args:
            stream: Name of the stream to publish to
            data: The event data

        Returns:
            The message ID of the published event
        """
        pass

    @abstractmethod
    def read(
        self,
        stream: str,
        last_id: str = "0",
        count: Optional[int] = None,
        block: Optional[int] = None,
    ) -> List[StreamEntry]:
        """Read entries published after last_id.

        Args:
            stream: Name of the stream to read from
            last_id: ID of the last entry already seen, '0' for the beginning
            count: Maximum number of entries to return
            block: Block for this many milliseconds if no entries are available

        Returns:
            List of entries, possibly empty
        """
        pass

    @abstractmethod
    def range(
        self, stream: str, start: str = "-", end: str = "+"
    ) -> List[StreamEntry]:
        """Retrieve entries from a stream within a given range.

        Args:
            stream: Name of the stream
            start: Start ID of the range (inclusive), '-' for the first entry
            end: End ID of the range (inclusive), '+' for the last entry

        Returns:
            List of entries
        """
        pass

    @abstractmethod
    def trim(self, stream: str, maxlen: int) -> int:
        """Trim a stream to at most maxlen entries, dropping the oldest.

        Returns:
            Number of trimmed entries
        """
        pass

    @abstractmethod
    def length(self, stream: str) -> int:
        """Number of entries currently held by a stream."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the connection to the event stream."""
        pass
