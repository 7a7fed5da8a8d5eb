"""
Elevator state model shared by the units, the dispatcher and the floors.
"""

import enum
from dataclasses import dataclass


class State(str, enum.Enum):
    """Lifecycle states of an elevator unit."""

    IDLE = "idle"
    MOVING = "moving"
    VISITING_FLOOR = "visiting_floor"


class Direction(str, enum.Enum):
    """Travel direction of a unit or a request."""

    NONE = "none"
    UP = "up"
    DOWN = "down"

    @property
    def step(self) -> int:
        """Floor increment for one move in this direction."""
        if self is Direction.UP:
            return 1
        if self is Direction.DOWN:
            return -1
        return 0

    def reversed(self) -> "Direction":
        """Return the opposite direction (UP for NONE)."""
        return Direction.DOWN if self is Direction.UP else Direction.UP

    @classmethod
    def of_travel(cls, origin: int, destination: int) -> "Direction":
        """Direction a rider travels from origin to destination."""
        return cls.UP if destination > origin else cls.DOWN


@dataclass(frozen=True)
class ElevatorSnapshot:
    """
    Consistent view of a unit taken under its lock.

    Attributes:
        unit_id: Identifier of the unit
        state: Lifecycle state at the time of the snapshot
        direction: Travel direction at the time of the snapshot
        floor: Current floor at the time of the snapshot
    """

    unit_id: str
    state: State
    direction: Direction
    floor: int

    @property
    def is_idle(self) -> bool:
        return self.state is State.IDLE

    def to_dict(self) -> dict:
        """
        Convert the snapshot to a dictionary.

        Returns:
            Dictionary representation of the snapshot
        """
        return {
            "id": self.unit_id,
            "state": self.state.value,
            "direction": self.direction.value,
            "floor": self.floor,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ElevatorSnapshot":
        """
        Create a snapshot from a dictionary.

        Args:
            data: Dictionary containing snapshot fields

        Returns:
            New ElevatorSnapshot instance
        """
        return cls(
            unit_id=data["id"],
            state=State(data["state"]),
            direction=Direction(data["direction"]),
            floor=data["floor"],
        )
