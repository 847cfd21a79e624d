"""
Room template catalog checks.

- CAT-001: Bounding volume has positive size on every axis
- CAT-002: Template has at least one entrance
- CAT-003: Entrance sockets sit on (or inside) the bounding volume
"""

from typing import Iterable

import numpy as np

from ..core import ValidationResult
from ..rules import CAT_001, CAT_002, CAT_003
from prefab_levelgenerator.src.generators.layout.transforms import as_vector, yaw_matrix_degrees
from prefab_levelgenerator.src.generators.rooms.base import RoomTemplate

# Sockets within this distance of the box surface count as on it
SURFACE_EPSILON = 1e-6


def socket_distance_outside(template: RoomTemplate, socket_index: int) -> float:
    """Distance from a socket to the template's bounding box (0 if on or inside)."""
    bounds = template.bounds
    rotation = yaw_matrix_degrees(bounds.yaw)
    offset = as_vector(template.socket(socket_index).position) - as_vector(bounds.center)
    local = rotation.T @ offset
    excess = np.maximum(np.abs(local) - as_vector(bounds.half_extents), 0.0)
    return float(np.linalg.norm(excess))


def validate_template(template: RoomTemplate) -> ValidationResult:
    """Validate one template."""
    result = ValidationResult()
    tid = template.template_id

    if template.bounds.is_degenerate:
        result.add_issue(CAT_001.issue(template=tid, size=template.bounds.size))

    if template.entrance_count == 0:
        result.add_issue(CAT_002.issue(template=tid))

    for i, socket in enumerate(template.entrances):
        distance = socket_distance_outside(template, i)
        if distance > SURFACE_EPSILON:
            result.add_issue(CAT_003.issue(
                template=tid, entrance=socket.name, name=socket.name, distance=distance,
            ))

    return result


def validate_catalog_templates(templates: Iterable[RoomTemplate]) -> ValidationResult:
    """Validate every template of a catalog."""
    result = ValidationResult()
    for template in templates:
        result.merge(validate_template(template))
    return result
