from .base import ArrivalHandler
from .controller import ElevatorUnit
from .door import DoorTimer

__all__ = ["ArrivalHandler", "DoorTimer", "ElevatorUnit"]
