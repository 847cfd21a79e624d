"""
Chamber templates: larger rooms, usually ending a branch.
"""

from ..base import BoundingVolume, EntranceFacing, EntranceSocket, RoomTemplate


CHAMBER = RoomTemplate(
    template_id="Chamber",
    bounds=BoundingVolume(center=(0.0, 3.0, 2.0), size=(6.0, 6.0, 4.0)),
    entrances=(
        EntranceSocket("south", (0.0, 0.0, 0.0), EntranceFacing.SOUTH),
    ),
    category="Room",
    description="Dead-end room entered from its south wall.",
)

GREAT_HALL = RoomTemplate(
    template_id="GreatHall",
    bounds=BoundingVolume(center=(0.0, 0.0, 2.5), size=(10.0, 8.0, 5.0)),
    entrances=(
        EntranceSocket("west", (-5.0, 0.0, 0.0), EntranceFacing.WEST),
        EntranceSocket("east", (5.0, 0.0, 0.0), EntranceFacing.EAST),
        EntranceSocket("north", (0.0, 4.0, 0.0), EntranceFacing.NORTH),
    ),
    category="Room",
    description="Large hall with three exits.",
)
