"""
Dispatcher

Owns the bank of elevator units and the queue of floor calls. Its own
thread routes calls to units strictly in arrival order: the head of the
queue is retried until some unit can take it.
"""

import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence

import structlog

from ..channels import ELEVATOR_EVENTS
from ..config import TimingConfig
from ..controller.base import ArrivalHandler
from ..controller.controller import ElevatorUnit
from ..exceptions import (DispatcherStateError, FloorOutOfRangeError,
                          InvalidDirectionError, UnknownElevatorError)
from ..libs.messaging.event_stream import EventStreamService, get_event_stream
from ..models.elevator import Direction, State
from ..models.event import EventKind, EventRecord
from ..models.floor import Floor
from ..models.request import FloorRequest
from ..models.rider import Rider
from .routing import select_elevator

logger = structlog.get_logger(__name__)


def unit_name(index: int) -> str:
    """Letter id for the index-th unit: A, B, ..., Z, AA, AB, ..."""
    name = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        name = chr(65 + rem) + name
    return name


class Dispatcher(ArrivalHandler):
    """
    Elevator controller for the whole bank.

    This service:
    1. Builds the floors and one ElevatorUnit per car
    2. Queues floor calls in arrival order
    3. Routes the head call to the best unit, retrying until one is free
    4. Hands every unit arrival to the floor it stopped at
    """

    def __init__(
        self,
        timing: Optional[TimingConfig] = None,
        event_stream: Optional[EventStreamService] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.timing = timing or TimingConfig()
        self.events = event_stream or get_event_stream()
        self._sleep = sleep

        self.floors: List[Floor] = []
        self._units: List[ElevatorUnit] = []
        self._registry: Dict[str, ElevatorUnit] = {}

        self._requests: Deque[FloorRequest] = deque()
        self._queue_lock = threading.Lock()
        self._wakeup = threading.Event()
        self._running = False
        self._thread: Optional[threading.Thread] = None

    @property
    def num_floors(self) -> int:
        return len(self.floors)

    @property
    def elevators(self) -> Dict[str, ElevatorUnit]:
        """Units keyed by id, in scan order."""
        return dict(self._registry)

    @property
    def running(self) -> bool:
        return self._running

    def setup(
        self,
        num_floors: int,
        num_elevators: int,
        initial_floors: Optional[Sequence[int]] = None,
    ) -> None:
        """
        Build the floors and the units without starting any thread.

        Args:
            num_floors: Number of floors in the building
            num_elevators: Number of units in the bank
            initial_floors: Starting floor of each unit, defaults to the ground floor
        """
        if self._running:
            raise DispatcherStateError("cannot rebuild a running dispatcher")
        if num_floors < 1:
            raise ValueError(f"num_floors must be at least 1, got {num_floors}")
        if num_elevators < 1:
            raise ValueError(f"num_elevators must be at least 1, got {num_elevators}")
        if initial_floors is not None and len(initial_floors) != num_elevators:
            raise ValueError(
                f"expected {num_elevators} initial floors, got {len(initial_floors)}"
            )

        self.floors = [Floor(i) for i in range(num_floors)]
        self._units = []
        for i in range(num_elevators):
            unit = ElevatorUnit(
                unit_id=unit_name(i),
                num_floors=num_floors,
                initial_floor=initial_floors[i] if initial_floors is not None else None,
                timing=self.timing,
                event_stream=self.events,
                sleep=self._sleep,
            )
            unit.add_handler(self)
            self._units.append(unit)
        self._registry = {unit.unit_id: unit for unit in self._units}

        with self._queue_lock:
            self._requests.clear()

    def start(
        self,
        num_floors: int,
        num_elevators: int,
        initial_floors: Optional[Sequence[int]] = None,
    ) -> None:
        """Build the bank, then start one thread per unit plus the dispatcher's."""
        if self._running:
            raise DispatcherStateError("dispatcher already started")
        self._retire_previous_run()
        self.setup(num_floors, num_elevators, initial_floors)

        self._running = True
        self._thread = threading.Thread(target=self.run, name="dispatcher", daemon=True)
        self._thread.start()
        for unit in self._units:
            unit.start()

        logger.info(
            "dispatcher_started", num_floors=num_floors, num_elevators=num_elevators
        )

    def stop(self) -> None:
        """Signal every loop to stop. Delays already in progress run to completion."""
        for unit in self._units:
            unit.stop()
        self._running = False
        self._wakeup.set()
        logger.info("dispatcher_stopping", pending=len(self.pending_requests()))

    def _retire_previous_run(self) -> None:
        """Wait for the loops of an earlier run to exit before reusing the queue."""
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        for unit in self._units:
            unit.join()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for every thread to exit. Returns True if all have."""
        deadline = None if timeout is None else time.monotonic() + timeout
        threads = [self._thread] if self._thread is not None else []
        done = True
        for thread in threads:
            thread.join(None if deadline is None else max(0.0, deadline - time.monotonic()))
            done = done and not thread.is_alive()
        for unit in self._units:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            done = unit.join(remaining) and done
        return done

    # ------------------------------------------------------------------
    # Requests

    def request_elevator(self, floor: int, direction: Direction) -> FloorRequest:
        """Queue a call from floor for travel in direction."""
        self._ensure_setup()
        if not 0 <= floor < self.num_floors:
            raise FloorOutOfRangeError(floor, self.num_floors)
        if direction not in (Direction.UP, Direction.DOWN):
            raise InvalidDirectionError(f"cannot call an elevator going {direction}")

        request = FloorRequest(floor=floor, direction=direction)
        with self._queue_lock:
            self._requests.append(request)
        self._emit(EventKind.REQUEST_QUEUED, floor, request=request)
        self._wakeup.set()
        return request

    def add_rider(self, start_floor: int, rider: Rider) -> FloorRequest:
        """Put rider on start_floor and call an elevator in their direction."""
        floor = self.get_floor(start_floor)
        self.get_floor(rider.destination_floor)
        floor.add_rider(rider)
        return self.request_elevator(start_floor, floor.direction_of(rider))

    def pending_requests(self) -> List[FloorRequest]:
        with self._queue_lock:
            return list(self._requests)

    def get_floor(self, floor: int) -> Floor:
        self._ensure_setup()
        if not 0 <= floor < self.num_floors:
            raise FloorOutOfRangeError(floor, self.num_floors)
        return self.floors[floor]

    def get_elevator(self, unit_id: str) -> ElevatorUnit:
        self._ensure_setup()
        try:
            return self._registry[unit_id.upper()]
        except KeyError:
            raise UnknownElevatorError(f"unknown elevator {unit_id!r}") from None

    def force_open_door(self, unit_id: str, pressed: bool) -> None:
        self.get_elevator(unit_id).force_open_door(pressed)

    def force_close_door(self, unit_id: str, pressed: bool) -> None:
        self.get_elevator(unit_id).force_close_door(pressed)

    # ------------------------------------------------------------------
    # Routing

    def find_best_elevator(self, floor: int, direction: Direction) -> Optional[int]:
        """Index of the unit that should take the call, or None."""
        snapshots = [unit.get_state() for unit in self._units]
        return select_elevator(snapshots, floor, direction)

    def run(self) -> None:
        """Main loop: route queued calls in order until stopped."""
        while self._running:
            if self._dispatch_next() is None:
                self._wakeup.wait()
                self._wakeup.clear()
        logger.info("dispatcher_stopped")

    def _dispatch_next(self) -> Optional[bool]:
        """
        Try to route the head of the queue.

        Returns:
            None if the queue is empty, True if the head was routed, False if
            no unit could take it (after sleeping the backoff interval)
        """
        with self._queue_lock:
            request = self._requests[0] if self._requests else None
        if request is None:
            return None

        idx = self.find_best_elevator(request.floor, request.direction)
        if idx is None:
            logger.debug(
                "no_suitable_elevator",
                floor=request.floor,
                direction=request.direction.value,
                request_id=request.id,
            )
            self._sleep(self.timing.dispatcher_backoff)
            return False

        with self._queue_lock:
            if not self._requests or self._requests[0] is not request:
                return False
            self._requests.popleft()
        unit = self._units[idx]
        unit.request_floor(request.floor, request.direction)
        self._emit(EventKind.REQUEST_ASSIGNED, request.floor, request=request, unit_id=unit.unit_id)
        return True

    # ------------------------------------------------------------------
    # ArrivalHandler

    def elevator_arrived(
        self, unit: ElevatorUnit, state: State, floor: int, direction: Direction
    ) -> None:
        if state == State.VISITING_FLOOR:
            self.floors[floor].elevator_arrived(unit, direction)

    # ------------------------------------------------------------------

    def _ensure_setup(self) -> None:
        if not self._units:
            raise DispatcherStateError("dispatcher has not been set up")

    def _emit(
        self,
        kind: EventKind,
        floor: int,
        request: FloorRequest,
        unit_id: Optional[str] = None,
    ) -> None:
        detail = {"request_id": request.id, "direction": request.direction.value}
        if unit_id is not None:
            detail["assigned_to"] = unit_id
        record = EventRecord(kind=kind, floor=floor, detail=detail)
        self.events.publish(ELEVATOR_EVENTS, record.to_dict())
        logger.info(kind.value, floor=floor, **detail)
