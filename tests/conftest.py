import time
from typing import List, Optional

import pytest

from elevator_bank.channels import ELEVATOR_EVENTS, ELEVATOR_UNIT_EVENTS
from elevator_bank.config import TimingConfig
from elevator_bank.controller import ArrivalHandler, ElevatorUnit
from elevator_bank.libs.messaging.event_stream import (EventStreamService,
                                                       InMemoryStreamClient)
from elevator_bank.models import EventRecord
from elevator_bank.scheduler import Dispatcher

NO_DELAY = TimingConfig(
    move_time_per_floor=0.0,
    door_dwell=0.0,
    door_force_max=0.0,
    door_poll_interval=0.0,
    dispatcher_backoff=0.0,
)

FAST = TimingConfig(
    move_time_per_floor=0.005,
    door_dwell=0.005,
    door_force_max=0.05,
    door_poll_interval=0.001,
    dispatcher_backoff=0.005,
)


class RecordingHandler(ArrivalHandler):
    """Records every arrival together with the unit's state at that moment."""

    def __init__(self):
        self.visits = []
        self.snapshots = []

    def elevator_arrived(self, unit, state, floor, direction):
        self.visits.append((floor, direction))
        self.snapshots.append(unit.get_state())


@pytest.fixture
def event_stream():
    """A fresh in-memory event stream per test."""
    service = EventStreamService(InMemoryStreamClient())
    yield service
    service.close()


@pytest.fixture
def recorder():
    return RecordingHandler()


@pytest.fixture
def make_unit(event_stream, recorder):
    """Build an ElevatorUnit with no delays, wired to the recording handler."""

    def _make(num_floors=5, initial_floor=None, timing=NO_DELAY, **kwargs):
        unit = ElevatorUnit(
            unit_id="A",
            num_floors=num_floors,
            initial_floor=initial_floor,
            timing=timing,
            event_stream=event_stream,
            **kwargs,
        )
        unit.add_handler(recorder)
        return unit

    return _make


@pytest.fixture
def dispatcher(event_stream, mocker):
    """A dispatcher with no delays whose threads are never started."""
    return Dispatcher(timing=NO_DELAY, event_stream=event_stream, sleep=mocker.Mock())


@pytest.fixture
def running_dispatcher(event_stream):
    """A dispatcher with millisecond delays; stopped and joined after the test."""
    dispatcher = Dispatcher(timing=FAST, event_stream=event_stream)
    yield dispatcher
    dispatcher.stop()
    dispatcher.join(timeout=2.0)


@pytest.fixture
def read_trace(event_stream):
    """Return the event records of one unit, or of the whole bank."""

    def _read(unit_id: Optional[str] = None) -> List[EventRecord]:
        stream = ELEVATOR_EVENTS if unit_id is None else ELEVATOR_UNIT_EVENTS.format(unit_id)
        return [EventRecord.from_dict(data) for _, data in event_stream.range(stream)]

    return _read


@pytest.fixture
def wait_until():
    def _wait(predicate, timeout: float = 5.0, interval: float = 0.002) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(interval)
        return predicate()

    return _wait
