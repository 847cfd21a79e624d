"""
Room templates: authored pieces the placement engine assembles into levels.
"""

from .base import BoundingVolume, EntranceFacing, EntranceSocket, RoomTemplate, Vec3
from .catalog import RoomTemplateCatalog
from .catalog_storage import load_catalog_from_path, catalog_from_dict, catalog_to_dict
from .builtin import BUILTIN_TEMPLATES, builtin_catalog

__all__ = [
    'BoundingVolume',
    'EntranceFacing',
    'EntranceSocket',
    'RoomTemplate',
    'Vec3',
    'RoomTemplateCatalog',
    'load_catalog_from_path',
    'catalog_from_dict',
    'catalog_to_dict',
    'BUILTIN_TEMPLATES',
    'builtin_catalog',
]
