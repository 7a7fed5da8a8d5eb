"""
Feeds a command script to a Dispatcher, one line at a time.
"""

import time
from dataclasses import dataclass
from typing import Callable, Iterable

import structlog

from ..exceptions import CommandError, ElevatorError
from ..models.rider import Rider
from ..scheduler.scheduler import Dispatcher
from .commands import (Command, DoorCommand, InitCommand, QuitCommand,
                       RiderCommand, SleepCommand, parse_line)

logger = structlog.get_logger(__name__)


@dataclass
class RunSummary:
    executed: int = 0
    skipped: int = 0
    failed: int = 0
    quit: bool = False


class ScriptRunner:
    """
    Executes script commands against a dispatcher.

    A line that cannot be parsed or executed is logged and skipped; the rest
    of the script still runs.
    """

    def __init__(self, dispatcher: Dispatcher, sleep: Callable[[float], None] = time.sleep):
        self.dispatcher = dispatcher
        self._sleep = sleep

    def run(self, lines: Iterable[str]) -> RunSummary:
        summary = RunSummary()
        for lineno, line in enumerate(lines, 1):
            try:
                command = parse_line(line)
                if command is None:
                    summary.skipped += 1
                    continue
                if not self.execute(command):
                    summary.quit = True
                    break
                summary.executed += 1
            except (CommandError, ElevatorError) as e:
                summary.failed += 1
                logger.error("command_failed", line=lineno, text=line.strip(), error=str(e))
        logger.info(
            "script_finished",
            executed=summary.executed,
            skipped=summary.skipped,
            failed=summary.failed,
        )
        return summary

    def execute(self, command: Command) -> bool:
        """
        Execute one command.

        Returns:
            False if the command asks to stop reading the script
        """
        if isinstance(command, QuitCommand):
            return False
        if isinstance(command, InitCommand):
            self.dispatcher.start(command.num_floors, command.num_elevators)
        elif isinstance(command, SleepCommand):
            self._sleep(command.seconds)
        elif isinstance(command, RiderCommand):
            rider = Rider(name=command.name, destination_floor=command.destination_floor)
            self.dispatcher.add_rider(command.start_floor, rider)
        elif isinstance(command, DoorCommand):
            if command.action == "open":
                self.dispatcher.force_open_door(command.elevator_id, command.pressed)
            else:
                self.dispatcher.force_close_door(command.elevator_id, command.pressed)
        return True
