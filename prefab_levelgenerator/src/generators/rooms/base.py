"""
RoomTemplate dataclasses: immutable authored pieces and their entrance sockets.

A template is defined in its own local frame:
- bounds: oriented box used for overlap rejection
- entrances: ordered sockets where other rooms may attach

Coordinates are Z-up. Templates are loaded once and never mutated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

Vec3 = Tuple[float, float, float]


class EntranceFacing(Enum):
    """Outward facing of an entrance socket."""
    NORTH = "north"  # +Y direction
    SOUTH = "south"  # -Y direction
    EAST = "east"    # +X direction
    WEST = "west"    # -X direction
    UP = "up"        # +Z direction
    DOWN = "down"    # -Z direction

    def opposite(self) -> 'EntranceFacing':
        """Return the opposite facing."""
        opposites = {
            EntranceFacing.NORTH: EntranceFacing.SOUTH,
            EntranceFacing.SOUTH: EntranceFacing.NORTH,
            EntranceFacing.EAST: EntranceFacing.WEST,
            EntranceFacing.WEST: EntranceFacing.EAST,
            EntranceFacing.UP: EntranceFacing.DOWN,
            EntranceFacing.DOWN: EntranceFacing.UP,
        }
        return opposites[self]

    def rotated(self, rotation_step: int) -> 'EntranceFacing':
        """Return the facing after ``rotation_step`` quarter turns about Z.

        Matches the yaw convention in ``layout.transforms``: one step maps
        (x, y) to (y, -x), so NORTH becomes EAST.
        """
        if self in (EntranceFacing.UP, EntranceFacing.DOWN):
            return self
        order = [
            EntranceFacing.NORTH,
            EntranceFacing.EAST,
            EntranceFacing.SOUTH,
            EntranceFacing.WEST,
        ]
        return order[(order.index(self) + rotation_step) % 4]


@dataclass(frozen=True)
class BoundingVolume:
    """Oriented bounding box in template-local space.

    Attributes:
        center: Box center relative to the room origin
        size: Full box dimensions (x, y, z), all positive
        yaw: Local orientation of the box about Z, in degrees
    """
    center: Vec3 = (0.0, 0.0, 0.0)
    size: Vec3 = (1.0, 1.0, 1.0)
    yaw: float = 0.0

    @property
    def half_extents(self) -> Vec3:
        return (self.size[0] / 2.0, self.size[1] / 2.0, self.size[2] / 2.0)

    @property
    def is_degenerate(self) -> bool:
        return any(s <= 0 for s in self.size)


@dataclass(frozen=True)
class EntranceSocket:
    """Attachment point on a template, in template-local space."""
    name: str
    position: Vec3
    facing: EntranceFacing = EntranceFacing.NORTH


@dataclass(frozen=True)
class RoomTemplate:
    """
    An immutable room piece that the placement engine can instantiate.

    Templates carry only structure: a bounding volume and an ordered
    sequence of entrance sockets. Socket order is significant, since the
    engine enumerates sockets by index and reproducible generation depends
    on a stable enumeration order.
    """

    # Identity
    template_id: str
    bounds: BoundingVolume
    entrances: Tuple[EntranceSocket, ...] = field(default_factory=tuple)

    # Descriptive only
    category: str = "Room"
    description: str = ""

    def __post_init__(self):
        # Accept lists from loaders while keeping the dataclass hashable
        if not isinstance(self.entrances, tuple):
            object.__setattr__(self, 'entrances', tuple(self.entrances))

    @property
    def entrance_count(self) -> int:
        return len(self.entrances)

    def socket(self, index: int) -> EntranceSocket:
        """Get the entrance socket at ``index``."""
        return self.entrances[index]
