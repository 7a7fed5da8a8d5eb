"""
Event stream names for the elevator bank.
This module contains the centralized definitions of all stream names so
publishers and readers agree on them.
"""

# Stream carrying every unit and dispatcher event record
ELEVATOR_EVENTS = "elevator:events"

# Per-unit stream name (format with elevator ID)
# Example usage: ELEVATOR_UNIT_EVENTS.format("A") -> "elevator:events:A"
ELEVATOR_UNIT_EVENTS = "elevator:events:{}"
