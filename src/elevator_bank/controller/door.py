"""
Door timing for an elevator unit: dwell time plus the force-open and
force-close overrides.
"""

import threading
import time
from typing import Callable

from ..config import TimingConfig


class DoorTimer:
    """
    Holds the door open for the dwell period and honours the override buttons.

    The override flags are threading.Event objects so that any thread may
    press or release them while the unit's thread polls them.
    """

    def __init__(
        self,
        timing: TimingConfig,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timing = timing
        self._sleep = sleep
        self._clock = clock
        self._force_open = threading.Event()
        self._force_close = threading.Event()

    @property
    def force_open(self) -> bool:
        return self._force_open.is_set()

    @property
    def force_close(self) -> bool:
        return self._force_close.is_set()

    def set_force_open(self, pressed: bool) -> None:
        if pressed:
            self._force_open.set()
        else:
            self._force_open.clear()

    def set_force_close(self, pressed: bool) -> None:
        if pressed:
            self._force_close.set()
        else:
            self._force_close.clear()

    def hold_open(self) -> None:
        """Block for the dwell period, or until force-close is pressed."""
        deadline = self._clock() + self.timing.door_dwell
        while not self._force_close.is_set() and self._clock() < deadline:
            self._sleep(self.timing.door_poll_interval)

    def hold_for_force_open(self) -> bool:
        """
        Keep the door open while force-open is pressed, up to door_force_max.

        Returns:
            True if the button was still pressed when the limit expired
        """
        deadline = self._clock() + self.timing.door_force_max
        while self._force_open.is_set() and self._clock() < deadline:
            self._sleep(self.timing.door_poll_interval)
        return self._force_open.is_set()
