"""
Event Stream package for the elevator bank's structured event trace.

This package provides a high-level interface for event streaming operations
over a pluggable backend (in-memory by default).

Basic usage:
    >>> from elevator_bank.libs.messaging.event_stream import event_stream
    >>>
    >>> # Publish an event
    >>> event_stream.publish('my_stream', {'key': 'value'})
    >>>
    >>> # Read it back
    >>> event_stream.range('my_stream')
"""

from .exceptions import EventStreamClosedError, EventStreamError
from .factory import StreamProvider, create_stream_client
from .memory import InMemoryStreamClient
from .service import (EventStreamService, close, get_event_stream,
                      init_event_stream)

# The global event_stream instance
event_stream: EventStreamService = get_event_stream()

__all__ = [
    # Main instance
    'event_stream',

    # Service and initialization
    'EventStreamService',
    'InMemoryStreamClient',
    'StreamProvider',
    'create_stream_client',
    'get_event_stream',
    'init_event_stream',
    'close',

    # Exceptions
    'EventStreamError',
    'EventStreamClosedError',
]
