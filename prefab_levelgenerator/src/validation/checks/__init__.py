"""
Validation check modules.

Each module provides specific validation checks:
- catalog_checks: Template bounds and socket placement
- level_checks: Overlap, connection alignment and visitation of generated levels
"""

from .catalog_checks import (
    validate_template,
    validate_catalog_templates,
    socket_distance_outside,
)

from .level_checks import (
    check_room_overlaps,
    check_connections,
    check_visits,
    report_fallbacks,
)

__all__ = [
    # Catalog
    'validate_template',
    'validate_catalog_templates',
    'socket_distance_outside',
    # Level
    'check_room_overlaps',
    'check_connections',
    'check_visits',
    'report_fallbacks',
]
