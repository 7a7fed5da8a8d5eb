"""Interface for components notified when a unit stops at a floor."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..models.elevator import Direction, State

if TYPE_CHECKING:
    from .controller import ElevatorUnit


class ArrivalHandler(ABC):
    """Receives a unit's arrival notification.

    The unit calls elevator_arrived on its own thread with the door open and
    does not close the door until the call returns, so any rider exchange
    done here is complete before the unit moves on.
    """

    @abstractmethod
    def elevator_arrived(
        self, unit: "ElevatorUnit", state: State, floor: int, direction: Direction
    ) -> None:
        """Handle a unit visiting a marked floor.

        Args:
            unit: The unit standing at the floor
            state: The unit's state (VISITING_FLOOR)
            floor: The floor being visited
            direction: The unit's direction of travel
        """
        pass
