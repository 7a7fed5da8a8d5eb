"""
Floor collaborator: holds waiting riders and exchanges them with a unit
when it arrives.
"""

import threading
from typing import TYPE_CHECKING, List

import structlog

from .elevator import Direction
from .rider import Rider

if TYPE_CHECKING:
    from ..controller.controller import ElevatorUnit

logger = structlog.get_logger(__name__)


class Floor:
    """
    A floor of the building.

    Riders released here are kept in arrival order for the whole run, so
    the arrived list grows with every unload at this floor.

    Attributes:
        number: Floor index (0 is the bottom floor)
    """

    def __init__(self, number: int):
        self.number = number
        self._waiting: List[Rider] = []
        self._arrived: List[Rider] = []
        self._lock = threading.Lock()

    @property
    def waiting(self) -> List[Rider]:
        with self._lock:
            return list(self._waiting)

    @property
    def arrived(self) -> List[Rider]:
        """Riders who were released at this floor."""
        with self._lock:
            return list(self._arrived)

    def add_rider(self, rider: Rider) -> None:
        with self._lock:
            self._waiting.append(rider)

    def direction_of(self, rider: Rider) -> Direction:
        return Direction.of_travel(self.number, rider.destination_floor)

    def elevator_arrived(self, unit: "ElevatorUnit", direction: Direction) -> None:
        """
        Exchange riders with a unit stopped here while travelling direction.

        Riders whose destination is this floor get off first. Waiting riders
        heading the same way then board; the rest keep waiting.

        Args:
            unit: The unit standing at this floor with its door open
            direction: The unit's direction of travel
        """
        with self._lock:
            released = unit.unload_riders()
            self._arrived.extend(released)

            still_waiting: List[Rider] = []
            boarded = 0
            for rider in self._waiting:
                if (
                    self.direction_of(rider) == direction
                    and rider.destination_floor != self.number
                ):
                    unit.load_rider(rider)
                    boarded += 1
                else:
                    still_waiting.append(rider)
            self._waiting = still_waiting

        logger.debug(
            "riders_exchanged",
            floor=self.number,
            elevator_id=unit.unit_id,
            released=len(released),
            boarded=boarded,
        )
