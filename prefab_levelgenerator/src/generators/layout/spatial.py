"""
Spatial overlap detection for placed rooms.

Provides the overlap oracle the placement engine consults before committing a
candidate room: given two oriented bounding boxes, return how deeply they
penetrate each other. Zero means disjoint or merely touching.

The default oracle runs an exact separating-axis test on oriented boxes
(3 + 3 face axes and 9 edge-pair axes). An axis-aligned bounding box check
rejects far-apart pairs first, since most committed rooms are nowhere near
a new candidate.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Tuple

import numpy as np

# Cross products shorter than this come from (nearly) parallel edges and
# carry no separating information.
_PARALLEL_EPSILON = 1e-9


@dataclass
class AABB:
    """Axis-Aligned Bounding Box."""
    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float

    def intersects(self, other: 'AABB') -> bool:
        """Check if this AABB intersects another AABB (touching does not count)."""
        # Two AABBs intersect if they overlap on all three axes
        return (
            self.min_x < other.max_x and self.max_x > other.min_x and
            self.min_y < other.max_y and self.max_y > other.min_y and
            self.min_z < other.max_z and self.max_z > other.min_z
        )

    def intersection_volume(self, other: 'AABB') -> float:
        """Calculate the intersection volume with another AABB."""
        if not self.intersects(other):
            return 0.0

        overlap_x = min(self.max_x, other.max_x) - max(self.min_x, other.min_x)
        overlap_y = min(self.max_y, other.max_y) - max(self.min_y, other.min_y)
        overlap_z = min(self.max_z, other.max_z) - max(self.min_z, other.min_z)

        return max(0.0, overlap_x) * max(0.0, overlap_y) * max(0.0, overlap_z)

    @property
    def volume(self) -> float:
        return (
            (self.max_x - self.min_x) *
            (self.max_y - self.min_y) *
            (self.max_z - self.min_z)
        )


@dataclass
class OrientedBox:
    """World-space oriented bounding box.

    Attributes:
        center: Box center (3,)
        axes: 3x3 matrix whose columns are the box's unit axes
        half_extents: Half sizes along each axis (3,)
    """
    center: np.ndarray
    axes: np.ndarray
    half_extents: np.ndarray

    def to_aabb(self) -> AABB:
        """Smallest AABB enclosing this box."""
        reach = np.abs(self.axes) @ self.half_extents
        lo = self.center - reach
        hi = self.center + reach
        return AABB(float(lo[0]), float(lo[1]), float(lo[2]),
                    float(hi[0]), float(hi[1]), float(hi[2]))

    def corners(self) -> np.ndarray:
        """The 8 corner points, shape (8, 3)."""
        signs = np.array([[sx, sy, sz]
                          for sx in (-1.0, 1.0)
                          for sy in (-1.0, 1.0)
                          for sz in (-1.0, 1.0)])
        return self.center + (signs * self.half_extents) @ self.axes.T


class OverlapOracle(Protocol):
    """Capability computing penetration depth between two oriented boxes."""

    def penetration(self, box_a: OrientedBox, box_b: OrientedBox) -> float:
        ...


def _projected_radius(box: OrientedBox, axis: np.ndarray) -> float:
    return float(np.sum(box.half_extents * np.abs(box.axes.T @ axis)))


def _candidate_axes(box_a: OrientedBox, box_b: OrientedBox):
    for i in range(3):
        yield box_a.axes[:, i]
    for j in range(3):
        yield box_b.axes[:, j]
    for i in range(3):
        for j in range(3):
            cross = np.cross(box_a.axes[:, i], box_b.axes[:, j])
            norm = np.linalg.norm(cross)
            if norm > _PARALLEL_EPSILON:
                yield cross / norm


class SeparatingAxisOracle:
    """Exact OBB/OBB penetration depth via the separating axis theorem.

    The depth reported is the smallest overlap over all candidate axes, i.e.
    the length of the minimum translation that would separate the boxes.
    """

    def __init__(self, use_broad_phase: bool = True):
        self.use_broad_phase = use_broad_phase

    def penetration(self, box_a: OrientedBox, box_b: OrientedBox) -> float:
        if self.use_broad_phase and not box_a.to_aabb().intersects(box_b.to_aabb()):
            return 0.0

        offset = box_b.center - box_a.center
        depth = np.inf
        for axis in _candidate_axes(box_a, box_b):
            overlap = (
                _projected_radius(box_a, axis)
                + _projected_radius(box_b, axis)
                - abs(float(offset @ axis))
            )
            if overlap <= 0.0:
                return 0.0
            depth = min(depth, overlap)
        return float(depth)


def separation_report(box_a: OrientedBox, box_b: OrientedBox,
                      oracle: OverlapOracle = None) -> Tuple[float, float]:
    """Return (penetration depth, AABB intersection volume) for diagnostics."""
    oracle = oracle or SeparatingAxisOracle()
    return (oracle.penetration(box_a, box_b),
            box_a.to_aabb().intersection_volume(box_b.to_aabb()))
