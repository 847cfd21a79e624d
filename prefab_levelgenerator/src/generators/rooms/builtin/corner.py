"""
Corner template: ninety degree turn.
"""

from ..base import BoundingVolume, EntranceFacing, EntranceSocket, RoomTemplate


SQUARE_CORNER = RoomTemplate(
    template_id="SquareCorner",
    bounds=BoundingVolume(center=(0.0, 0.0, 1.5), size=(4.0, 4.0, 3.0)),
    entrances=(
        EntranceSocket("west", (-2.0, 0.0, 0.0), EntranceFacing.WEST),
        EntranceSocket("north", (0.0, 2.0, 0.0), EntranceFacing.NORTH),
    ),
    category="Hall",
)
