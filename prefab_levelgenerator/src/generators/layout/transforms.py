"""
Rigid transforms for room placement.

Rooms are only ever rotated in quarter turns about the vertical (Z) axis, so
rotation matrices are built from an exact lookup table rather than from
cos/sin, which keeps positions free of 1e-17 noise and makes seeded runs
comparable by value.

Yaw convention: one step maps local (x, y) to (y, -x), i.e. a clockwise
quarter turn seen from above.
"""

from __future__ import annotations
import math
from typing import Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

ROTATION_STEP_DEGREES = 90
ALL_ROTATION_STEPS: Tuple[int, ...] = (0, 1, 2, 3)

# (cos, sin) for each quarter-turn step
_QUARTER_TURNS = {
    0: (1.0, 0.0),
    1: (0.0, 1.0),
    2: (-1.0, 0.0),
    3: (0.0, -1.0),
}


def rotation_steps(rotate_enabled: bool) -> Tuple[int, ...]:
    """Rotation steps tried for every candidate: {0} or {0, 1, 2, 3}."""
    return ALL_ROTATION_STEPS if rotate_enabled else (0,)


def yaw_matrix(rotation_step: int) -> np.ndarray:
    """Exact 3x3 rotation for ``rotation_step`` quarter turns about Z."""
    c, s = _QUARTER_TURNS[rotation_step % 4]
    return np.array([
        [c, s, 0.0],
        [-s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def yaw_matrix_degrees(yaw: float) -> np.ndarray:
    """Rotation about Z for an arbitrary yaw in degrees (same handedness as yaw_matrix)."""
    if yaw % ROTATION_STEP_DEGREES == 0:
        return yaw_matrix(int(yaw // ROTATION_STEP_DEGREES))
    rad = math.radians(yaw)
    c, s = math.cos(rad), math.sin(rad)
    return np.array([
        [c, s, 0.0],
        [-s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def as_vector(value: Sequence[float]) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(3)


def as_tuple(vector: np.ndarray) -> Vec3:
    """Convert a numpy vector to a plain float tuple (normalizing -0.0)."""
    return tuple(float(v) + 0.0 for v in vector)


class RigidTransform:
    """World placement of a room: quarter-turn yaw followed by translation."""

    __slots__ = ('rotation_step', 'position', '_matrix')

    def __init__(self, rotation_step: int = 0, position: Sequence[float] = (0.0, 0.0, 0.0)):
        self.rotation_step = rotation_step % 4
        self.position = as_vector(position)
        self._matrix = yaw_matrix(self.rotation_step)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def rotate(self, local: Sequence[float]) -> np.ndarray:
        """Rotate a local vector without translating it."""
        return self._matrix @ as_vector(local)

    def apply(self, local: Sequence[float]) -> np.ndarray:
        """Map a local point to world space."""
        return self.rotate(local) + self.position

    def with_position(self, position: Sequence[float]) -> 'RigidTransform':
        return RigidTransform(self.rotation_step, position)

    def __repr__(self) -> str:
        return f"RigidTransform(step={self.rotation_step}, position={as_tuple(self.position)})"
