"""
End-to-end runs of the bank on real threads with millisecond timings.
"""

import threading
import time
from dataclasses import replace

from conftest import FAST
from elevator_bank.models import Direction, EventKind, Rider, State


def visits(trace, unit_id=None):
    return [
        (r.unit_id, r.floor)
        for r in trace
        if r.kind == EventKind.DOOR_OPEN and (unit_id is None or r.unit_id == unit_id)
    ]


class StateSampler:
    """Samples every unit's snapshot on a background thread."""

    def __init__(self, units):
        self.units = units
        self.samples = []
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self):
        while not self._done.is_set():
            self.samples.extend(unit.get_state() for unit in self.units)
            time.sleep(0.0005)

    def __enter__(self):
        self._thread.start()
        return self

    def __exit__(self, *exc):
        self._done.set()
        self._thread.join()


def test_single_unit_answers_a_call(running_dispatcher, read_trace, wait_until):
    running_dispatcher.start(num_floors=5, num_elevators=1)
    unit = running_dispatcher.get_elevator("A")

    running_dispatcher.request_elevator(3, Direction.UP)

    assert wait_until(lambda: ("A", 3) in visits(read_trace()))
    assert wait_until(lambda: unit.get_state().state == State.IDLE)
    snapshot = unit.get_state()
    assert (snapshot.direction, snapshot.floor) == (Direction.NONE, 3)
    going = [r.floor for r in read_trace("A") if r.kind == EventKind.GOING]
    assert going[:3] == [1, 2, 3]


def test_tie_goes_to_first_unit(running_dispatcher, read_trace, wait_until):
    running_dispatcher.start(num_floors=5, num_elevators=2, initial_floors=[0, 4])

    running_dispatcher.request_elevator(2, Direction.DOWN)

    assert wait_until(lambda: ("A", 2) in visits(read_trace()))
    assert wait_until(
        lambda: running_dispatcher.get_elevator("A").get_state().state == State.IDLE
    )
    assert visits(read_trace(), "B") == []
    assert running_dispatcher.get_elevator("B").get_state().floor == 4


def test_rider_reaches_destination(running_dispatcher, read_trace, wait_until):
    running_dispatcher.start(num_floors=5, num_elevators=1)
    bob = Rider("bob", 4)

    running_dispatcher.add_rider(0, bob)

    assert wait_until(lambda: running_dispatcher.get_floor(4).arrived == [bob])
    unit = running_dispatcher.get_elevator("A")
    assert bob not in unit.riders
    assert running_dispatcher.get_floor(0).waiting == []
    kinds = [(r.kind, r.floor) for r in read_trace("A")]
    assert kinds.index((EventKind.LOADED, 0)) < kinds.index((EventKind.UNLOADED, 4))


def test_held_door_closes_with_alarm(make_unit, read_trace):
    unit = make_unit(num_floors=5, initial_floor=2, timing=FAST)
    unit.force_open_door(True)
    unit.request_floor(2, Direction.UP)

    start = time.monotonic()
    unit._service()
    elapsed = time.monotonic() - start

    assert elapsed >= FAST.door_force_max
    assert unit.door.force_open
    kinds = [r.kind for r in read_trace("A")]
    door = [k for k in kinds if k in (
        EventKind.DOOR_OPEN, EventKind.FORCE_DOOR_ALARM, EventKind.DOOR_CLOSE
    )]
    assert door == [EventKind.DOOR_OPEN, EventKind.FORCE_DOOR_ALARM, EventKind.DOOR_CLOSE]


def test_released_door_closes_without_alarm(make_unit, read_trace):
    timing = replace(FAST, door_force_max=5.0)
    unit = make_unit(num_floors=5, initial_floor=2, timing=timing)
    unit.force_open_door(True)
    unit.request_floor(2, Direction.UP)
    releaser = threading.Timer(0.01, unit.force_open_door, args=(False,))

    releaser.start()
    unit._service()
    releaser.join()

    kinds = [r.kind for r in read_trace("A")]
    assert EventKind.FORCE_DOOR_ALARM not in kinds
    assert EventKind.DOOR_CLOSE in kinds


def test_busy_bank_keeps_state_consistent(running_dispatcher, wait_until):
    running_dispatcher.start(num_floors=6, num_elevators=2)
    riders = [
        (0, Rider("bob", 4)),
        (3, Rider("alice", 1)),
        (5, Rider("carol", 0)),
        (2, Rider("dave", 5)),
        (4, Rider("erin", 2)),
    ]

    with StateSampler(running_dispatcher.elevators.values()) as sampler:
        for start, rider in riders:
            running_dispatcher.add_rider(start, rider)
        for _, rider in riders:
            destination = running_dispatcher.get_floor(rider.destination_floor)
            assert wait_until(lambda: rider in destination.arrived, timeout=10.0)

    assert sampler.samples
    for snapshot in sampler.samples:
        assert (snapshot.direction == Direction.NONE) == (snapshot.state == State.IDLE)
    for unit in running_dispatcher.elevators.values():
        assert wait_until(lambda: unit.get_state().state == State.IDLE)
        assert unit.marked_floors(Direction.UP) == []
        assert unit.marked_floors(Direction.DOWN) == []
        assert unit.riders == []
