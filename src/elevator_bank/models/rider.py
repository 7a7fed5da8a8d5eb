from dataclasses import dataclass


@dataclass(frozen=True)
class Rider:
    """A person travelling to destination_floor. Immutable once created."""

    name: str
    destination_floor: int
