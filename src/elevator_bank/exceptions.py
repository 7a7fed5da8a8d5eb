"""
Custom exceptions for the elevator bank.
"""


class ElevatorError(Exception):
    """Base exception for all elevator-bank errors."""

    pass


class FloorOutOfRangeError(ElevatorError, ValueError):
    """Raised when a floor index falls outside the building."""

    def __init__(self, floor: int, num_floors: int):
        super().__init__(f"floor {floor} out of range [0, {num_floors})")
        self.floor = floor
        self.num_floors = num_floors


class InvalidDirectionError(ElevatorError, ValueError):
    """Raised when a request carries no usable direction."""

    pass


class UnknownElevatorError(ElevatorError, KeyError):
    """Raised when no unit has the requested id."""

    pass


class DispatcherStateError(ElevatorError):
    """Raised when the dispatcher is used before setup or started twice."""

    pass


class CommandError(ElevatorError):
    """Raised when a command-script line cannot be parsed."""

    pass


__all__ = [
    "ElevatorError",
    "FloorOutOfRangeError",
    "InvalidDirectionError",
    "UnknownElevatorError",
    "DispatcherStateError",
    "CommandError",
]
