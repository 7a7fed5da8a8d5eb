from .commands import (DoorCommand, InitCommand, QuitCommand, RiderCommand,
                       SleepCommand, parse_line)
from .runner import RunSummary, ScriptRunner

__all__ = [
    "DoorCommand",
    "InitCommand",
    "QuitCommand",
    "RiderCommand",
    "SleepCommand",
    "parse_line",
    "RunSummary",
    "ScriptRunner",
]
