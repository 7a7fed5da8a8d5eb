"""Concurrent elevator bank simulation: unit state machines plus a dispatcher."""

from .controller import ArrivalHandler, DoorTimer, ElevatorUnit
from .exceptions import (CommandError, DispatcherStateError, ElevatorError,
                         FloorOutOfRangeError, InvalidDirectionError,
                         UnknownElevatorError)
from .models import (Direction, ElevatorSnapshot, EventKind, EventRecord, Floor,
                     FloorRequest, Rider, State)
from .scheduler import Dispatcher, create_dispatcher, select_elevator

__version__ = "0.1.0"

__all__ = [
    "ArrivalHandler",
    "DoorTimer",
    "ElevatorUnit",
    "Dispatcher",
    "create_dispatcher",
    "select_elevator",
    "Direction",
    "ElevatorSnapshot",
    "EventKind",
    "EventRecord",
    "Floor",
    "FloorRequest",
    "Rider",
    "State",
    "ElevatorError",
    "FloorOutOfRangeError",
    "InvalidDirectionError",
    "UnknownElevatorError",
    "DispatcherStateError",
    "CommandError",
]
