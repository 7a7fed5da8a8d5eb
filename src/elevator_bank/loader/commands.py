"""
Command-script models.

A script is one command per line, case-insensitive:

    init <num_floors> <num_elevators>
    sleep <seconds>
    rider <name> <start_floor> <destination_floor>
    open <elevator_id> on|off
    close <elevator_id> on|off
    quit

Blank lines, lines starting with '#' and unknown verbs are ignored.
"""

from typing import Dict, Optional, Tuple, Type, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..exceptions import CommandError

logger = structlog.get_logger(__name__)


class InitCommand(BaseModel):
    """Start the simulation with a fresh bank."""

    num_floors: int = Field(..., ge=1, description="Floors in the building")
    num_elevators: int = Field(..., ge=1, description="Units in the bank")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"num_floors": 5, "num_elevators": 2}},
    )


class SleepCommand(BaseModel):
    """Pause the script."""

    seconds: float = Field(..., ge=0, description="How long to pause")

    model_config = ConfigDict(frozen=True)


class RiderCommand(BaseModel):
    """A rider appears at start_floor wanting destination_floor."""

    name: str = Field(..., min_length=1)
    start_floor: int = Field(..., ge=0, description="Floor where the rider waits")
    destination_floor: int = Field(..., ge=0, description="Floor the rider wants")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {"name": "bob", "start_floor": 0, "destination_floor": 4}
        },
    )

    @model_validator(mode="after")
    def check_trip(self) -> "RiderCommand":
        if self.start_floor == self.destination_floor:
            raise ValueError("destination must differ from the start floor")
        return self


class DoorCommand(BaseModel):
    """Press or release a unit's force-open or force-close button."""

    action: str = Field(..., pattern="^(open|close)$")
    elevator_id: str = Field(..., pattern="^[a-z]+$")
    pressed: bool = Field(..., description="on/off")

    model_config = ConfigDict(frozen=True)


class QuitCommand(BaseModel):
    """Stop reading the script."""

    model_config = ConfigDict(frozen=True)


Command = Union[InitCommand, SleepCommand, RiderCommand, DoorCommand, QuitCommand]

# verb -> (model, positional field names)
COMMANDS: Dict[str, Tuple[Type[BaseModel], Tuple[str, ...]]] = {
    "init": (InitCommand, ("num_floors", "num_elevators")),
    "sleep": (SleepCommand, ("seconds",)),
    "rider": (RiderCommand, ("name", "start_floor", "destination_floor")),
    "open": (DoorCommand, ("elevator_id", "pressed")),
    "close": (DoorCommand, ("elevator_id", "pressed")),
    "quit": (QuitCommand, ()),
}


def parse_line(line: str) -> Optional[Command]:
    """
    Parse one script line.

    Args:
        line: Raw line from the script

    Returns:
        The command, or None for blank lines, comments and unknown verbs

    Raises:
        CommandError: If the verb is known but its arguments are malformed
    """
    parts = line.strip().lower().split()
    if not parts or parts[0].startswith("#"):
        return None

    verb, args = parts[0], parts[1:]
    if verb not in COMMANDS:
        logger.debug("ignored_line", verb=verb)
        return None

    model, fields = COMMANDS[verb]
    if len(args) != len(fields):
        raise CommandError(f"{verb}: expected {len(fields)} arguments, got {len(args)}")

    data = dict(zip(fields, args))
    if model is DoorCommand:
        data["action"] = verb
    try:
        return model(**data)
    except ValidationError as e:
        raise CommandError(f"{verb}: {e.errors()[0]['msg']}") from e
