"""Shared template builders and level helpers for the test suite."""

from itertools import combinations

from prefab_levelgenerator.src.generators.layout import SeparatingAxisOracle
from prefab_levelgenerator.src.generators.rooms import (
    BoundingVolume,
    EntranceFacing,
    EntranceSocket,
    RoomTemplate,
)


def corridor(template_id="Corridor"):
    """2x2x2 box with an east socket at x=+1 and a west socket at x=-1."""
    return RoomTemplate(
        template_id=template_id,
        bounds=BoundingVolume(center=(0.0, 0.0, 1.0), size=(2.0, 2.0, 2.0)),
        entrances=(
            EntranceSocket("east", (1.0, 0.0, 0.0), EntranceFacing.EAST),
            EntranceSocket("west", (-1.0, 0.0, 0.0), EntranceFacing.WEST),
        ),
    )


def crossroads(template_id="Cross"):
    """2x2x2 box with a socket on each side face."""
    return RoomTemplate(
        template_id=template_id,
        bounds=BoundingVolume(center=(0.0, 0.0, 1.0), size=(2.0, 2.0, 2.0)),
        entrances=(
            EntranceSocket("north", (0.0, 1.0, 0.0), EntranceFacing.NORTH),
            EntranceSocket("east", (1.0, 0.0, 0.0), EntranceFacing.EAST),
            EntranceSocket("south", (0.0, -1.0, 0.0), EntranceFacing.SOUTH),
            EntranceSocket("west", (-1.0, 0.0, 0.0), EntranceFacing.WEST),
        ),
    )


def max_pairwise_penetration(level):
    oracle = SeparatingAxisOracle(use_broad_phase=False)
    worst = 0.0
    for a, b in combinations(level.rooms, 2):
        worst = max(worst, oracle.penetration(a.world_box(), b.world_box()))
    return worst


def x_positions(level):
    return sorted(room.position[0] for room in level.rooms)
