from .elevator import Direction, ElevatorSnapshot, State
from .event import EventKind, EventRecord
from .floor import Floor
from .request import FloorRequest
from .rider import Rider

__all__ = [
    "Direction",
    "ElevatorSnapshot",
    "EventKind",
    "EventRecord",
    "Floor",
    "FloorRequest",
    "Rider",
    "State",
]
