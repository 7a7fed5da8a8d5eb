"""
Floor request model queued by the dispatcher.
"""

import time
import uuid
from dataclasses import dataclass, field

from .elevator import Direction


@dataclass(frozen=True)
class FloorRequest:
    """
    Call from a floor, waiting in the dispatcher queue until routed.

    Attributes:
        floor: The floor where the call was made
        direction: UP or DOWN
        id: Unique identifier for the request
        timestamp: When the request was created
    """

    floor: int
    direction: Direction
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "floor": self.floor,
            "direction": self.direction.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FloorRequest":
        """
        Create a FloorRequest from a dictionary.

        Args:
            data: Dictionary containing request data

        Returns:
            New FloorRequest instance
        """
        return cls(
            floor=data["floor"],
            direction=Direction(data["direction"]),
            id=data["id"],
            timestamp=data["timestamp"],
        )
