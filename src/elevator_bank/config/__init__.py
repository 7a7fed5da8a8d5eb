import os
from dataclasses import dataclass

from dotenv import load_dotenv

from ..channels import ELEVATOR_EVENTS, ELEVATOR_UNIT_EVENTS
from .logging import configure_logging

load_dotenv()


# Building configuration
GROUND_FLOOR = int(os.getenv("GROUND_FLOOR", "1"))

# Timing configuration (seconds)
MOVE_TIME_PER_FLOOR_SECS = float(os.getenv("MOVE_TIME_PER_FLOOR_SECS", "3"))
DOOR_REMAINS_OPEN_SECS = float(os.getenv("DOOR_REMAINS_OPEN_SECS", "3"))
DOOR_REMAINS_OPEN_MAX_SECS = float(os.getenv("DOOR_REMAINS_OPEN_MAX_SECS", "60"))
DOOR_POLL_INTERVAL_SECS = float(os.getenv("DOOR_POLL_INTERVAL_SECS", "0.1"))
DISPATCHER_BACKOFF_SECS = float(os.getenv("DISPATCHER_BACKOFF_SECS", "1"))

EVENT_STREAM_MAXLEN = int(os.getenv("EVENT_STREAM_MAXLEN", "10000"))


@dataclass(frozen=True)
class TimingConfig:
    """
    Delays used by the elevator units and the dispatcher.

    Attributes:
        move_time_per_floor: Seconds to travel between consecutive floors
        door_dwell: Minimum seconds the door stays open at a serviced floor
        door_force_max: Longest the force-open button may hold the door
        door_poll_interval: Polling period while the door is held open
        dispatcher_backoff: Sleep before retrying an unroutable request
    """

    move_time_per_floor: float = MOVE_TIME_PER_FLOOR_SECS
    door_dwell: float = DOOR_REMAINS_OPEN_SECS
    door_force_max: float = DOOR_REMAINS_OPEN_MAX_SECS
    door_poll_interval: float = DOOR_POLL_INTERVAL_SECS
    dispatcher_backoff: float = DISPATCHER_BACKOFF_SECS

    @classmethod
    def from_env(cls) -> "TimingConfig":
        """
        Read the delays from the environment.

        Raises:
            ValueError: If a polling or retry interval is not positive
        """
        timing = cls(
            move_time_per_floor=float(
                os.getenv("MOVE_TIME_PER_FLOOR_SECS", MOVE_TIME_PER_FLOOR_SECS)
            ),
            door_dwell=float(os.getenv("DOOR_REMAINS_OPEN_SECS", DOOR_REMAINS_OPEN_SECS)),
            door_force_max=float(
                os.getenv("DOOR_REMAINS_OPEN_MAX_SECS", DOOR_REMAINS_OPEN_MAX_SECS)
            ),
            door_poll_interval=float(
                os.getenv("DOOR_POLL_INTERVAL_SECS", DOOR_POLL_INTERVAL_SECS)
            ),
            dispatcher_backoff=float(
                os.getenv("DISPATCHER_BACKOFF_SECS", DISPATCHER_BACKOFF_SECS)
            ),
        )
        if timing.dispatcher_backoff <= 0:
            raise ValueError("DISPATCHER_BACKOFF_SECS must be positive")
        if timing.door_poll_interval <= 0:
            raise ValueError("DOOR_POLL_INTERVAL_SECS must be positive")
        return timing


__all__ = [
    "ELEVATOR_EVENTS",
    "ELEVATOR_UNIT_EVENTS",
    "configure_logging",
    "GROUND_FLOOR",
    "MOVE_TIME_PER_FLOOR_SECS",
    "DOOR_REMAINS_OPEN_SECS",
    "DOOR_REMAINS_OPEN_MAX_SECS",
    "DOOR_POLL_INTERVAL_SECS",
    "DISPATCHER_BACKOFF_SECS",
    "EVENT_STREAM_MAXLEN",
    "TimingConfig",
]
