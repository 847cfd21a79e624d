"""
Candidate builder: produces a rigidly aligned transient room instance.

Alignment is translation-only: the rotation step fixes the room's
orientation, then the room is slid so that the chosen entrance socket lands
exactly on the target entrance. Facing mismatches between the two sockets
are not corrected beyond the discrete quarter-turn steps.
"""

from __future__ import annotations
from typing import Sequence

from ..layout.level_tree import RoomInstance
from ..layout.transforms import RigidTransform, as_vector
from ..rooms.base import RoomTemplate


def build_candidate(
    template: RoomTemplate,
    rotation_step: int,
    socket_index: int,
    target_position: Sequence[float],
) -> RoomInstance:
    """Build a transient room instance whose socket coincides with ``target_position``.

    Args:
        template: Template to instantiate
        rotation_step: Quarter turns about the vertical axis (0-3)
        socket_index: Index of the template socket to attach
        target_position: World position of the entrance being filled

    Returns:
        Uncommitted RoomInstance (no factory handle, not validated)
    """
    # Trial placement at the origin gives the socket's offset from the room origin
    trial = RigidTransform(rotation_step, (0.0, 0.0, 0.0))
    socket_offset = trial.apply(template.socket(socket_index).position)

    position = as_vector(target_position) - socket_offset
    return RoomInstance(template=template, transform=trial.with_position(position))


def build_root(template: RoomTemplate) -> RoomInstance:
    """Root room: origin, identity orientation."""
    return RoomInstance(template=template, transform=RigidTransform(0, (0.0, 0.0, 0.0)))
