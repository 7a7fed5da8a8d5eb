"""Factory for creating and configuring Dispatcher instances."""

from dataclasses import asdict
from typing import Optional

import structlog

from ..config import EVENT_STREAM_MAXLEN, TimingConfig
from ..libs.messaging.event_stream import EventStreamService, init_event_stream
from .scheduler import Dispatcher

logger = structlog.get_logger(__name__)


def create_dispatcher(
    timing: Optional[TimingConfig] = None,
    event_stream: Optional[EventStreamService] = None,
) -> Dispatcher:
    """Create a Dispatcher wired to the configured timing and event stream.

    When no stream is given, the global stream is (re)initialized with the
    configured length cap so a fresh run starts from an empty trace.
    """
    timing = timing or TimingConfig.from_env()
    if event_stream is None:
        event_stream = init_event_stream(maxlen=EVENT_STREAM_MAXLEN)
    logger.debug("dispatcher_created", timing=asdict(timing))
    return Dispatcher(timing=timing, event_stream=event_stream)
