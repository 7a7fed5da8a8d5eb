import pytest

from elevator_bank.models import Direction, Floor, Rider


@pytest.fixture
def unit(make_unit):
    return make_unit(num_floors=6, initial_floor=2)


def test_new_floor_is_empty():
    floor = Floor(3)

    assert floor.number == 3
    assert floor.waiting == []
    assert floor.arrived == []


def test_direction_of_rider():
    floor = Floor(2)

    assert floor.direction_of(Rider("up", 5)) == Direction.UP
    assert floor.direction_of(Rider("down", 0)) == Direction.DOWN


def test_riders_going_the_unit_direction_board(unit):
    floor = Floor(2)
    bob = Rider("bob", 5)
    amy = Rider("amy", 0)
    floor.add_rider(bob)
    floor.add_rider(amy)

    floor.elevator_arrived(unit, Direction.UP)

    assert unit.riders == [bob]
    assert unit.is_marked(5, Direction.UP)
    assert floor.waiting == [amy]


def test_arrivals_get_off_before_boarding(unit):
    floor = Floor(2)
    unit.load_rider(Rider("carl", 2))
    dana = Rider("dana", 0)
    floor.add_rider(dana)

    floor.elevator_arrived(unit, Direction.DOWN)

    assert [r.name for r in floor.arrived] == ["carl"]
    assert unit.riders == [dana]
    assert floor.waiting == []


def test_waiting_order_is_preserved(unit):
    floor = Floor(2)
    riders = [Rider("a", 0), Rider("b", 4), Rider("c", 1)]
    for rider in riders:
        floor.add_rider(rider)

    floor.elevator_arrived(unit, Direction.UP)

    assert floor.waiting == [riders[0], riders[2]]


def test_waiting_list_is_a_copy():
    floor = Floor(0)
    floor.add_rider(Rider("bob", 3))

    floor.waiting.clear()

    assert len(floor.waiting) == 1


def test_arrived_riders_accumulate_across_visits(unit):
    floor = Floor(2)
    first = Rider("first", 2)
    second = Rider("second", 2)

    unit.load_rider(first)
    floor.elevator_arrived(unit, Direction.UP)
    unit.load_rider(second)
    floor.elevator_arrived(unit, Direction.DOWN)

    assert floor.arrived == [first, second]
    assert unit.riders == []
