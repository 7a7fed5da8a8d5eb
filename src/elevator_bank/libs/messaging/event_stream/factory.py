from enum import Enum
from typing import Any, Dict, Optional

from .base import EventStreamClient
from .memory import InMemoryStreamClient


class StreamProvider(Enum):
    """Backends the trace stream can run on."""
    MEMORY = "memory"


def create_stream_client(
    provider: StreamProvider = StreamProvider.MEMORY,
    config: Optional[Dict[str, Any]] = None
) -> EventStreamClient:
    """
    Build the client that stores unit and dispatcher event records.

    Args:
        provider: Which backend to build
        config: Keyword arguments for the backend constructor

    Example:
        # Keep at most 1000 records per stream
        stream = create_stream_client(StreamProvider.MEMORY, {"maxlen": 1000})

    Returns:
        A ready-to-use client

    Raises:
        ValueError: If the provider has no implementation
    """
    config = config or {}

    if provider == StreamProvider.MEMORY:
        return InMemoryStreamClient(**config)

    raise ValueError(f"No stream client for provider: {provider}")
