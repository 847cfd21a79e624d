"""
Straight corridor: two entrances on opposite short faces.
"""

from ..base import BoundingVolume, EntranceFacing, EntranceSocket, RoomTemplate


STRAIGHT_CORRIDOR = RoomTemplate(
    template_id="StraightCorridor",
    bounds=BoundingVolume(center=(0.0, 0.0, 1.5), size=(4.0, 2.0, 3.0)),
    entrances=(
        EntranceSocket("east", (2.0, 0.0, 0.0), EntranceFacing.EAST),
        EntranceSocket("west", (-2.0, 0.0, 0.0), EntranceFacing.WEST),
    ),
    category="Hall",
    description="Short straight hall joining two openings.",
)
