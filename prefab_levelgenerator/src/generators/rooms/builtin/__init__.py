"""
Built-in room templates.
"""

from .junction import CROSSROADS, T_JUNCTION
from .corridor import STRAIGHT_CORRIDOR
from .corner import SQUARE_CORNER
from .chamber import CHAMBER, GREAT_HALL

# Catalog order; the first entry is the default root piece
BUILTIN_TEMPLATES = (
    CROSSROADS,
    STRAIGHT_CORRIDOR,
    T_JUNCTION,
    SQUARE_CORNER,
    CHAMBER,
    GREAT_HALL,
)


def builtin_catalog():
    """Build a catalog holding all built-in templates."""
    from ..catalog import RoomTemplateCatalog
    return RoomTemplateCatalog(BUILTIN_TEMPLATES)


__all__ = [
    'CROSSROADS',
    'T_JUNCTION',
    'STRAIGHT_CORRIDOR',
    'SQUARE_CORNER',
    'CHAMBER',
    'GREAT_HALL',
    'BUILTIN_TEMPLATES',
    'builtin_catalog',
]
