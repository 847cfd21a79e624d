"""
Generated level checks.

- LVL-001: No pair of committed rooms penetrates beyond the tolerance
- LVL-002: Connected entrances coincide
- LVL-003: Connected entrances face each other (warning only)
- LVL-004: No entrance was processed twice
- LVL-005: Repeat window fallbacks (informational)
"""

from collections import Counter
from typing import Optional

import numpy as np

from ..core import ValidationResult
from ..rules import LVL_001, LVL_002, LVL_003, LVL_004, LVL_005
from prefab_levelgenerator.src.generators.layout.level_tree import LevelTree
from prefab_levelgenerator.src.generators.layout.spatial import OverlapOracle, SeparatingAxisOracle

# Connected entrances closer than this coincide
POSITION_EPSILON = 1e-6


def check_room_overlaps(level: LevelTree, tolerance: float = 0.05,
                        oracle: Optional[OverlapOracle] = None) -> ValidationResult:
    """Check every pair of committed rooms against the overlap tolerance."""
    oracle = oracle or SeparatingAxisOracle()
    result = ValidationResult()
    rooms = level.rooms
    for i in range(len(rooms)):
        box_a = rooms[i].world_box()
        for j in range(i + 1, len(rooms)):
            depth = oracle.penetration(box_a, rooms[j].world_box())
            if depth > tolerance:
                result.add_issue(LVL_001.issue(
                    template=f"{rooms[i].template_id}/{rooms[j].template_id}",
                    room=f"{i},{j}",
                    a=i, b=j, depth=depth, tolerance=tolerance,
                ))
    return result


def check_connections(level: LevelTree) -> ValidationResult:
    """Check that every connection joins coincident, facing entrances."""
    result = ValidationResult()
    for conn in level.connections:
        parent_room = level.room(conn.parent.room_index)
        child_room = level.room(conn.child.room_index)

        distance = float(np.linalg.norm(
            parent_room.entrance_world(conn.parent.socket_index)
            - child_room.entrance_world(conn.child.socket_index)
        ))
        if distance > POSITION_EPSILON:
            result.add_issue(LVL_002.issue(
                room=str(conn.child.room_index), entrance=str(conn.child),
                parent=conn.parent, child=conn.child, distance=distance,
            ))

        parent_facing = parent_room.entrance_facing(conn.parent.socket_index)
        child_facing = child_room.entrance_facing(conn.child.socket_index)
        if child_facing != parent_facing.opposite():
            result.add_issue(LVL_003.issue(
                template=child_room.template_id,
                room=str(conn.child.room_index), entrance=str(conn.child),
                parent=conn.parent, child=conn.child,
                parent_facing=parent_facing.value, child_facing=child_facing.value,
            ))
    return result


def check_visits(level: LevelTree) -> ValidationResult:
    """Check that the visit log never repeats an entrance."""
    result = ValidationResult()
    for ref, count in Counter(level.visited).items():
        if count > 1:
            result.add_issue(LVL_004.issue(
                room=str(ref.room_index), entrance=str(ref), count=count,
            ))
    return result


def report_fallbacks(level: LevelTree) -> ValidationResult:
    result = ValidationResult()
    for fallback in level.warnings:
        result.add_issue(LVL_005.issue(
            room=str(fallback.entrance.room_index), entrance=str(fallback.entrance),
            message=fallback.message,
        ))
    return result
