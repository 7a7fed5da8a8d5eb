"""Exceptions for the event stream service."""


class EventStreamError(Exception):
    """Base exception for event stream errors."""

    pass


class EventStreamClosedError(EventStreamError):
    """Raised when attempting to use a closed event stream connection."""

    pass


__all__ = [
    "EventStreamError",
    "EventStreamClosedError",
]
