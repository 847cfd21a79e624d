"""
Level Tree: the output of a generation run.

Holds every committed room instance (in commit order) plus the
parent/child entrance connection graph. Rooms are stored in an arena and
referenced by integer index; entrances are referenced by
(room index, socket index) pairs. Indices are assigned at commit time and
never reused, so they serve as stable visitation keys.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

import numpy as np

from ..errors import LevelFrozenError
from ..rooms.base import EntranceFacing, RoomTemplate, Vec3
from .spatial import OrientedBox
from .transforms import RigidTransform, as_tuple, as_vector, yaw_matrix_degrees


@dataclass(frozen=True)
class EntranceRef:
    """One socket on one committed room."""
    room_index: int
    socket_index: int

    def __str__(self) -> str:
        return f"room{self.room_index}.e{self.socket_index}"


@dataclass(frozen=True)
class Connection:
    """Link between a parent room's entrance and the child entrance attached to it."""
    parent: EntranceRef
    child: EntranceRef


@dataclass(frozen=True)
class RepeatFallback:
    """Recoverable warning: the repeat window excluded every template.

    Attributes:
        entrance: Entrance being filled when the window ran dry
        step: Number of rooms committed when the fallback happened
        source_template_id: Template of the room owning the entrance
        excluded: Template ids the repeat window excluded
        used_source: True if even the source template had to be allowed
    """
    entrance: EntranceRef
    step: int
    source_template_id: str
    excluded: Tuple[str, ...]
    used_source: bool = False

    @property
    def message(self) -> str:
        pool = "full catalog" if self.used_source else f"catalog minus '{self.source_template_id}'"
        return (f"No possible rooms at {self.entrance} after excluding "
                f"{list(self.excluded)}, generating from {pool}")


@dataclass(eq=False)
class RoomInstance:
    """
    A template placed in world space.

    Created as a transient candidate by the candidate builder. ``index`` stays
    None until the Level Tree commits the instance. ``handle`` is whatever the
    instance factory returned for the instance's external representation.
    """
    template: RoomTemplate
    transform: RigidTransform
    index: Optional[int] = None
    handle: Any = None
    _box: Optional[OrientedBox] = field(default=None, repr=False)

    @property
    def template_id(self) -> str:
        return self.template.template_id

    @property
    def rotation_step(self) -> int:
        return self.transform.rotation_step

    @property
    def position(self) -> Vec3:
        return as_tuple(self.transform.position)

    @property
    def is_committed(self) -> bool:
        return self.index is not None

    def entrance_world(self, socket_index: int) -> np.ndarray:
        """World position of an entrance socket as a numpy vector."""
        return self.transform.apply(self.template.socket(socket_index).position)

    def entrance_position(self, socket_index: int) -> Vec3:
        return as_tuple(self.entrance_world(socket_index))

    def entrance_facing(self, socket_index: int) -> EntranceFacing:
        return self.template.socket(socket_index).facing.rotated(self.rotation_step)

    def world_box(self) -> OrientedBox:
        """Oriented bounding box in world space (cached; transforms never change)."""
        if self._box is None:
            bounds = self.template.bounds
            axes = self.transform.matrix @ yaw_matrix_degrees(bounds.yaw)
            self._box = OrientedBox(
                center=self.transform.apply(bounds.center),
                axes=axes,
                half_extents=as_vector(bounds.half_extents),
            )
        return self._box

    def describe(self) -> str:
        label = f"#{self.index}" if self.is_committed else "candidate"
        return f"{self.template_id}{label} step={self.rotation_step} pos={self.position}"


@dataclass
class LevelTree:
    """
    Committed rooms plus the connection graph between their entrances.

    Grows monotonically while the placement engine runs; ``freeze()`` marks
    generation complete, after which commits are rejected.
    """
    rooms: List[RoomInstance] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    visited: List[EntranceRef] = field(default_factory=list)
    dead_ends: List[EntranceRef] = field(default_factory=list)
    warnings: List[RepeatFallback] = field(default_factory=list)
    seed: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    _visited_set: Set[EntranceRef] = field(default_factory=set, repr=False)
    _frozen: bool = field(default=False, repr=False)

    # -- mutation (placement engine only) --

    def commit(self, instance: RoomInstance) -> int:
        """Take ownership of a candidate and assign its arena index."""
        if self._frozen:
            raise LevelFrozenError(f"Cannot commit {instance.template_id}: level is frozen")
        instance.index = len(self.rooms)
        self.rooms.append(instance)
        return instance.index

    def connect(self, parent: EntranceRef, child: EntranceRef) -> Connection:
        connection = Connection(parent=parent, child=child)
        self.connections.append(connection)
        return connection

    def mark_visited(self, ref: EntranceRef) -> bool:
        """Mark an entrance as processed. Returns False if it already was."""
        if ref in self._visited_set:
            return False
        self._visited_set.add(ref)
        self.visited.append(ref)
        return True

    def is_visited(self, ref: EntranceRef) -> bool:
        return ref in self._visited_set

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # -- queries --

    @property
    def root(self) -> Optional[RoomInstance]:
        return self.rooms[0] if self.rooms else None

    def room(self, index: int) -> RoomInstance:
        return self.rooms[index]

    def __len__(self) -> int:
        return len(self.rooms)

    def entrance_refs(self, room_index: int) -> List[EntranceRef]:
        room = self.rooms[room_index]
        return [EntranceRef(room_index, i) for i in range(room.template.entrance_count)]

    def entrance_position(self, ref: EntranceRef) -> Vec3:
        return self.rooms[ref.room_index].entrance_position(ref.socket_index)

    def children_of(self, room_index: int) -> List[int]:
        """Indices of rooms attached to any entrance of ``room_index``, in commit order."""
        return [c.child.room_index for c in self.connections
                if c.parent.room_index == room_index]

    def parent_of(self, room_index: int) -> Optional[int]:
        for c in self.connections:
            if c.child.room_index == room_index:
                return c.parent.room_index
        return None

    def branch_path(self, room_index: int) -> List[int]:
        """Room indices from the root down to ``room_index`` (inclusive)."""
        path = [room_index]
        parent = self.parent_of(room_index)
        while parent is not None:
            path.append(parent)
            parent = self.parent_of(parent)
        path.reverse()
        return path

    def branch_template_ids(self, room_index: int) -> List[str]:
        return [self.rooms[i].template_id for i in self.branch_path(room_index)]

    def leaves(self) -> List[int]:
        parents = {c.parent.room_index for c in self.connections}
        return [r.index for r in self.rooms if r.index not in parents]

    def template_counts(self) -> Dict[str, int]:
        return dict(Counter(r.template_id for r in self.rooms))

    def signature(self) -> List[Tuple[str, int, Vec3]]:
        """(template id, rotation step, position) per room in commit order."""
        return [(r.template_id, r.rotation_step, r.position) for r in self.rooms]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            'seed': self.seed,
            'rooms': [
                {
                    'index': r.index,
                    'template': r.template_id,
                    'rotation_step': r.rotation_step,
                    'position': list(r.position),
                    'entrances': [list(r.entrance_position(i))
                                  for i in range(r.template.entrance_count)],
                }
                for r in self.rooms
            ],
            'connections': [
                {
                    'parent': [c.parent.room_index, c.parent.socket_index],
                    'child': [c.child.room_index, c.child.socket_index],
                }
                for c in self.connections
            ],
            'dead_ends': [[d.room_index, d.socket_index] for d in self.dead_ends],
            'warnings': [w.message for w in self.warnings],
            'metadata': dict(self.metadata),
        }
