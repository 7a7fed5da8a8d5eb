import pytest

from elevator_bank.models import (Direction, ElevatorSnapshot, EventKind,
                                  EventRecord, FloorRequest, Rider, State)


def test_direction_steps():
    assert Direction.UP.step == 1
    assert Direction.DOWN.step == -1
    assert Direction.NONE.step == 0


def test_direction_reversed():
    assert Direction.UP.reversed() == Direction.DOWN
    assert Direction.DOWN.reversed() == Direction.UP


def test_direction_of_travel():
    assert Direction.of_travel(1, 4) == Direction.UP
    assert Direction.of_travel(4, 1) == Direction.DOWN


def test_snapshot_idle_flag():
    assert ElevatorSnapshot("A", State.IDLE, Direction.NONE, 0).is_idle
    assert not ElevatorSnapshot("A", State.VISITING_FLOOR, Direction.UP, 0).is_idle


def test_snapshot_dict_form():
    snapshot = ElevatorSnapshot("B", State.MOVING, Direction.DOWN, 3)

    assert snapshot.to_dict() == {
        "id": "B",
        "state": "moving",
        "direction": "down",
        "floor": 3,
    }
    assert ElevatorSnapshot.from_dict(snapshot.to_dict()) == snapshot


def test_requests_get_unique_ids():
    first = FloorRequest(floor=2, direction=Direction.UP)
    second = FloorRequest(floor=2, direction=Direction.UP)

    assert first.id != second.id
    assert first.to_dict()["direction"] == "up"


def test_event_record_detail_survives_serialization():
    record = EventRecord(
        kind=EventKind.LOADED, floor=1, unit_id="A", detail={"rider": "bob"}
    )

    restored = EventRecord.from_dict(record.to_dict())

    assert restored == record
    assert '"kind": "loaded"' in record.to_json()


def test_rider_is_immutable():
    rider = Rider("bob", 4)

    with pytest.raises(AttributeError):
        rider.destination_floor = 2
