"""
Routing: choose which unit should answer a floor call.
"""

from typing import Optional, Sequence

from ..models.elevator import Direction, ElevatorSnapshot


def is_en_route(snapshot: ElevatorSnapshot, floor: int, direction: Direction) -> bool:
    """A busy unit travelling direction that has not yet passed floor."""
    if snapshot.is_idle or snapshot.direction != direction:
        return False
    if direction == Direction.UP:
        return snapshot.floor <= floor
    return snapshot.floor >= floor


def select_elevator(
    snapshots: Sequence[ElevatorSnapshot], floor: int, direction: Direction
) -> Optional[int]:
    """
    Pick the unit for a call at floor going direction.

    The closest idle unit and the closest en-route unit are found first; the
    en-route one wins only if it is strictly closer. Within each group the
    earliest unit in scan order wins ties.

    Args:
        snapshots: Unit states, in scan order
        floor: Floor of the call
        direction: Requested direction

    Returns:
        Index into snapshots, or None if no unit can take the call now
    """
    closest_idle_idx, closest_idle_dist = None, None
    closest_moving_idx, closest_moving_dist = None, None

    for idx, snapshot in enumerate(snapshots):
        dist = abs(floor - snapshot.floor)
        if snapshot.is_idle:
            if closest_idle_dist is None or dist < closest_idle_dist:
                closest_idle_idx, closest_idle_dist = idx, dist
        elif is_en_route(snapshot, floor, direction):
            if closest_moving_dist is None or dist < closest_moving_dist:
                closest_moving_idx, closest_moving_dist = idx, dist

    if closest_moving_idx is None:
        return closest_idle_idx
    if closest_idle_idx is None:
        return closest_moving_idx
    return closest_moving_idx if closest_moving_dist < closest_idle_dist else closest_idle_idx
