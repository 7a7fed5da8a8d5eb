"""
Structured event records published on the elevator event stream.

A trace of these records (ordered by stream id) is enough to reconstruct
what every unit did, modulo timing.
"""

import enum
import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class EventKind(str, enum.Enum):
    """Kinds of records published by units and the dispatcher."""

    IDLE = "idle"
    GOING = "going"
    FLOOR_REQUESTED = "floor_requested"
    LOADED = "loaded"
    UNLOADED = "unloaded"
    DOOR_OPEN = "door_open"
    DOOR_CLOSE = "door_close"
    DIRECTION_SWITCH = "direction_switch"
    FORCE_DOOR_ALARM = "force_door_alarm"
    REQUEST_QUEUED = "request_queued"
    REQUEST_ASSIGNED = "request_assigned"


@dataclass(frozen=True)
class EventRecord:
    """
    One entry of the event stream.

    Attributes:
        kind: What happened
        floor: Floor the unit was at (or the requested floor)
        unit_id: Unit that emitted the record, None for dispatcher records
        timestamp: Wall-clock time of the event
        detail: Extra fields (direction, rider name, ...)
    """

    kind: EventKind
    floor: int
    unit_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    detail: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "unit_id": self.unit_id,
            "floor": self.floor,
            "kind": self.kind.value,
            "detail": dict(self.detail),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "EventRecord":
        return cls(
            kind=EventKind(data["kind"]),
            floor=data["floor"],
            unit_id=data.get("unit_id"),
            timestamp=data["timestamp"],
            detail=dict(data.get("detail") or {}),
        )
