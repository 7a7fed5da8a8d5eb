"""
Elevator Unit

One elevator car with its own control loop. The unit sleeps until a floor is
marked, then sweeps: it services every marked floor in its direction of
travel before reversing, and goes idle once no marks remain.

Shared state (state, direction, position, floor marks and riders) is
guarded by the unit's lock. The lock is never held while the unit sleeps,
polls its door or calls its arrival handlers.
"""

import threading
import time
from typing import Callable, Dict, List, Optional

import structlog

from ..channels import ELEVATOR_EVENTS, ELEVATOR_UNIT_EVENTS
from ..config import GROUND_FLOOR, TimingConfig
from ..exceptions import FloorOutOfRangeError, InvalidDirectionError
from ..libs.messaging.event_stream import EventStreamService, get_event_stream
from ..models.elevator import Direction, ElevatorSnapshot, State
from ..models.event import EventKind, EventRecord
from ..models.rider import Rider
from .base import ArrivalHandler
from .door import DoorTimer


class ElevatorUnit:
    """
    A single elevator car.

    Attributes:
        unit_id: Identifier of the car ("A", "B", ...)
        num_floors: Number of floors served, numbered 0..num_floors-1
        timing: Travel and door delays
        door: Door timer holding the force-open/force-close overrides
    """

    def __init__(
        self,
        unit_id: str,
        num_floors: int,
        initial_floor: Optional[int] = None,
        timing: Optional[TimingConfig] = None,
        event_stream: Optional[EventStreamService] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the unit, idle at initial_floor.

        Args:
            unit_id: Identifier of the car
            num_floors: Number of floors served (at least 1)
            initial_floor: Starting floor, defaults to the ground floor
            timing: Delays to use, defaults to the configured ones
            event_stream: Where event records go, defaults to the global stream
            sleep: Sleep function for travel and door polling
        """
        if num_floors < 1:
            raise ValueError(f"num_floors must be at least 1, got {num_floors}")
        if initial_floor is None:
            initial_floor = min(GROUND_FLOOR, num_floors - 1)

        self.unit_id = unit_id
        self.num_floors = num_floors
        self._check_floor(initial_floor)

        self.timing = timing or TimingConfig()
        self.door = DoorTimer(self.timing, sleep=sleep)
        self.events = event_stream or get_event_stream()
        self._sleep = sleep

        self._state = State.IDLE
        self._direction = Direction.NONE
        self._current_floor = initial_floor
        self._marks: Dict[Direction, List[bool]] = {
            Direction.UP: [False] * num_floors,
            Direction.DOWN: [False] * num_floors,
        }
        self._riders: List[Rider] = []
        self._handlers: List[ArrivalHandler] = []

        self._lock = threading.Lock()
        self._signal = threading.Event()
        self._stop_requested = False
        self._thread: Optional[threading.Thread] = None

        self.logger = structlog.get_logger(__name__).bind(elevator_id=unit_id)

    def __repr__(self) -> str:
        snapshot = self.get_state()
        return (
            f"ElevatorUnit({self.unit_id!r}, floor={snapshot.floor}, "
            f"state={snapshot.state.value}, direction={snapshot.direction.value})"
        )

    # ------------------------------------------------------------------
    # Public interface

    def get_state(self) -> ElevatorSnapshot:
        """Return state, direction and floor as one consistent snapshot."""
        with self._lock:
            return ElevatorSnapshot(
                unit_id=self.unit_id,
                state=self._state,
                direction=self._direction,
                floor=self._current_floor,
            )

    @property
    def riders(self) -> List[Rider]:
        with self._lock:
            return list(self._riders)

    def is_marked(self, floor: int, direction: Direction) -> bool:
        self._check_floor(floor)
        with self._lock:
            return self._marks[direction][floor]

    def marked_floors(self, direction: Direction) -> List[int]:
        with self._lock:
            return [i for i, marked in enumerate(self._marks[direction]) if marked]

    def add_handler(self, handler: ArrivalHandler) -> None:
        self._handlers.append(handler)

    def remove_handler(self, handler: ArrivalHandler) -> None:
        self._handlers.remove(handler)

    def request_floor(self, floor: int, direction: Direction) -> None:
        """
        Mark floor as a stop for travel in direction and wake the unit.

        Args:
            floor: Floor to stop at
            direction: UP or DOWN
        """
        self._check_floor(floor)
        if direction not in (Direction.UP, Direction.DOWN):
            raise InvalidDirectionError(f"cannot request floor {floor} going {direction}")

        with self._lock:
            self._marks[direction][floor] = True
            current = self._current_floor

        self._emit(
            EventKind.FLOOR_REQUESTED,
            current,
            requested_floor=floor,
            direction=direction.value,
        )
        self._signal.set()

    def load_rider(self, rider: Rider) -> None:
        """Take a rider aboard and mark the floor they chose."""
        self._check_floor(rider.destination_floor)

        with self._lock:
            self._riders.append(rider)
            current = self._current_floor
            if rider.destination_floor >= current:
                self._marks[Direction.UP][rider.destination_floor] = True
            else:
                self._marks[Direction.DOWN][rider.destination_floor] = True

        self._emit(
            EventKind.LOADED,
            current,
            rider=rider.name,
            destination=rider.destination_floor,
        )
        self._signal.set()

    def unload_riders(self) -> List[Rider]:
        """Remove and return every rider whose destination is the current floor."""
        with self._lock:
            current = self._current_floor
            released = [r for r in self._riders if r.destination_floor == current]
            self._riders = [r for r in self._riders if r.destination_floor != current]

        for rider in released:
            self._emit(EventKind.UNLOADED, current, rider=rider.name)
        return released

    def force_open_door(self, pressed: bool) -> None:
        self.door.set_force_open(pressed)

    def force_close_door(self, pressed: bool) -> None:
        self.door.set_force_close(pressed)

    # ------------------------------------------------------------------
    # Thread lifecycle

    def start(self) -> None:
        """Run the control loop on a dedicated thread.

        A loop left over from an earlier start is joined first, so the unit never
        has two loops servicing its marks.
        """
        if self._thread is not None:
            if self._thread.is_alive() and not self._stop_requested:
                raise RuntimeError(f"elevator {self.unit_id} is already running")
            self._thread.join()
        self._stop_requested = False
        self._thread = threading.Thread(
            target=self.run, name=f"elevator-{self.unit_id}", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the control loop to exit; in-flight delays are not cut short."""
        self._stop_requested = True
        self._signal.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the control loop to exit. Returns True if it has."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def run(self) -> None:
        """Main loop: sleep until signaled, then service one trip."""
        self.logger.info("service_started", floor=self.get_state().floor)
        while True:
            self._signal.wait()
            self._signal.clear()
            if self._stop_requested:
                break
            self._service()
        self.logger.info("service_stopped")

    # ------------------------------------------------------------------
    # Control loop internals

    def _service(self) -> None:
        """Sweep through every marked floor, then go idle."""
        with self._lock:
            closest = self._closest_marked_floor()
            if closest is not None:
                self._state = State.MOVING
                self._direction = (
                    Direction.UP if closest >= self._current_floor else Direction.DOWN
                )

        if closest is not None:
            while True:
                self._do_floor()
                if not self._move() or self._stop_requested:
                    break

        with self._lock:
            self._state = State.IDLE
            self._direction = Direction.NONE
            current = self._current_floor
        self._emit(EventKind.IDLE, current)

    def _do_floor(self) -> None:
        """Visit the current floor if it is marked in the direction of travel."""
        with self._lock:
            floor = self._current_floor
            direction = self._direction
            marks = self._marks[direction]
            marked = marks[floor]
            marks[floor] = False
            if marked:
                self._state = State.VISITING_FLOOR

        self._emit(EventKind.GOING, floor, direction=direction.value)
        if not marked:
            return

        self._open_door(floor)
        self._notify(floor, direction)
        self._close_door(floor)

        with self._lock:
            self._state = State.MOVING

    def _open_door(self, floor: int) -> None:
        self._emit(EventKind.DOOR_OPEN, floor)
        self.door.hold_open()

    def _close_door(self, floor: int) -> None:
        if self.door.hold_for_force_open():
            self._emit(
                EventKind.FORCE_DOOR_ALARM,
                floor,
                held_for=self.timing.door_force_max,
            )
        self._emit(EventKind.DOOR_CLOSE, floor)

    def _notify(self, floor: int, direction: Direction) -> None:
        for handler in list(self._handlers):
            try:
                handler.elevator_arrived(self, State.VISITING_FLOOR, floor, direction)
            except Exception:
                self.logger.exception(
                    "arrival_handler_failed",
                    floor=floor,
                    direction=direction.value,
                    handler=type(handler).__name__,
                )

    def _move(self) -> bool:
        """
        Reverse at a turning point, otherwise travel one floor.

        Returns:
            True if marked floors remain in the (possibly new) direction
        """
        with self._lock:
            turning = self._at_turning_point()
            if turning:
                self._direction = self._direction.reversed()
            direction = self._direction
            floor = self._current_floor

        if turning:
            self._emit(EventKind.DIRECTION_SWITCH, floor, direction=direction.value)
        else:
            self._sleep(self.timing.move_time_per_floor)
            with self._lock:
                self._current_floor += direction.step

        with self._lock:
            return self._floors_remain()

    # The helpers below expect the caller to hold self._lock.

    def _closest_marked_floor(self) -> Optional[int]:
        closest = None
        closest_dist = self.num_floors
        for floor in range(self.num_floors):
            if self._is_marked_any(floor):
                dist = abs(floor - self._current_floor)
                if dist < closest_dist:
                    closest, closest_dist = floor, dist
        return closest

    def _at_turning_point(self) -> bool:
        """At the terminus ahead, or past the last mark in the direction of travel."""
        floor = self._current_floor
        direction = self._direction
        if direction is Direction.UP and floor == self.num_floors - 1:
            return True
        if direction is Direction.DOWN and floor == 0:
            return True

        marked = [i for i in range(self.num_floors) if self._is_marked_any(i)]
        if not marked:
            return True
        if direction is Direction.UP:
            return floor >= max(marked)
        return floor <= min(marked)

    def _floors_remain(self) -> bool:
        step = self._direction.step
        floor = self._current_floor
        while 0 <= floor < self.num_floors:
            if self._is_marked_any(floor):
                return True
            floor += step
        return False

    def _is_marked_any(self, floor: int) -> bool:
        return self._marks[Direction.UP][floor] or self._marks[Direction.DOWN][floor]

    def _check_floor(self, floor: int) -> None:
        if not 0 <= floor < self.num_floors:
            raise FloorOutOfRangeError(floor, self.num_floors)

    def _emit(self, kind: EventKind, floor: int, **detail) -> None:
        record = EventRecord(kind=kind, floor=floor, unit_id=self.unit_id, detail=detail)
        payload = record.to_dict()
        self.events.publish(ELEVATOR_EVENTS, payload)
        self.events.publish(ELEVATOR_UNIT_EVENTS.format(self.unit_id), payload)

        if kind is EventKind.FORCE_DOOR_ALARM:
            self.logger.warning(kind.value, floor=floor, **detail)
        else:
            self.logger.info(kind.value, floor=floor, **detail)
