"""
Level layout types: committed rooms, entrance references and the geometry
used to place and validate them.
"""

from .transforms import (
    RigidTransform,
    rotation_steps,
    yaw_matrix,
    ALL_ROTATION_STEPS,
)
from .spatial import AABB, OrientedBox, OverlapOracle, SeparatingAxisOracle
from .level_tree import (
    Connection,
    EntranceRef,
    LevelTree,
    RepeatFallback,
    RoomInstance,
)

__all__ = [
    'RigidTransform',
    'rotation_steps',
    'yaw_matrix',
    'ALL_ROTATION_STEPS',
    'AABB',
    'OrientedBox',
    'OverlapOracle',
    'SeparatingAxisOracle',
    'Connection',
    'EntranceRef',
    'LevelTree',
    'RepeatFallback',
    'RoomInstance',
]

__version__ = '1.0.0'
