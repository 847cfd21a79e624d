"""
Junction templates: crossroads and T-junction.
"""

from ..base import BoundingVolume, EntranceFacing, EntranceSocket, RoomTemplate


CROSSROADS = RoomTemplate(
    template_id="Crossroads",
    bounds=BoundingVolume(center=(0.0, 0.0, 1.5), size=(4.0, 4.0, 3.0)),
    entrances=(
        EntranceSocket("north", (0.0, 2.0, 0.0), EntranceFacing.NORTH),
        EntranceSocket("east", (2.0, 0.0, 0.0), EntranceFacing.EAST),
        EntranceSocket("south", (0.0, -2.0, 0.0), EntranceFacing.SOUTH),
        EntranceSocket("west", (-2.0, 0.0, 0.0), EntranceFacing.WEST),
    ),
    category="Hall",
    description="Four-way intersection.",
)

T_JUNCTION = RoomTemplate(
    template_id="TJunction",
    bounds=BoundingVolume(center=(0.0, 0.0, 1.5), size=(4.0, 4.0, 3.0)),
    entrances=(
        EntranceSocket("west", (-2.0, 0.0, 0.0), EntranceFacing.WEST),
        EntranceSocket("east", (2.0, 0.0, 0.0), EntranceFacing.EAST),
        EntranceSocket("north", (0.0, 2.0, 0.0), EntranceFacing.NORTH),
    ),
    category="Hall",
    description="Three-way intersection.",
)
