"""
Catalog persistence layer for authored room templates.

Reads template catalogs from JSON files of the form::

    {
      "templates": [
        {
          "id": "Corridor",
          "bounds": {"center": [0, 0, 1.5], "size": [4, 2, 3], "yaw": 0},
          "entrances": [
            {"name": "east", "position": [2, 0, 0], "facing": "east"}
          ]
        }
      ]
    }
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from .base import BoundingVolume, EntranceFacing, EntranceSocket, RoomTemplate, Vec3
from .catalog import RoomTemplateCatalog
from ..errors import CatalogError

logger = logging.getLogger(__name__)


def _vec3(value: Any, what: str) -> Vec3:
    """Coerce a 3-element sequence to a float tuple."""
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise CatalogError(f"{what} must be a list of 3 numbers, got {value!r}")
    try:
        return (float(value[0]), float(value[1]), float(value[2]))
    except (TypeError, ValueError):
        raise CatalogError(f"{what} must contain numbers, got {value!r}")


def _dict_to_socket(data: Dict[str, Any], template_id: str, index: int) -> EntranceSocket:
    """Create an EntranceSocket from a dictionary."""
    if not isinstance(data, dict):
        raise CatalogError(f"Template '{template_id}' entrance {index} must be an object, got {data!r}")
    name = data.get("name") or f"entrance_{index}"
    facing_name = str(data.get("facing", "north")).lower()
    try:
        facing = EntranceFacing(facing_name)
    except ValueError:
        raise CatalogError(
            f"Template '{template_id}' entrance '{name}' has unknown facing '{facing_name}'"
        )
    return EntranceSocket(
        name=name,
        position=_vec3(data.get("position"), f"Template '{template_id}' entrance '{name}' position"),
        facing=facing,
    )


def _dict_to_template(data: Dict[str, Any]) -> RoomTemplate:
    """Create a RoomTemplate from a dictionary."""
    if not isinstance(data, dict):
        raise CatalogError(f"Template entry must be an object, got {data!r}")
    template_id = data.get("id")
    if not template_id:
        raise CatalogError(f"Template entry without an 'id': {data!r}")

    bounds_data = data.get("bounds")
    if not isinstance(bounds_data, dict):
        raise CatalogError(f"Template '{template_id}' is missing 'bounds'")

    yaw = bounds_data.get("yaw", 0.0)
    try:
        yaw = float(yaw)
    except (TypeError, ValueError):
        raise CatalogError(f"Template '{template_id}' bounds yaw must be a number, got {yaw!r}")

    bounds = BoundingVolume(
        center=_vec3(bounds_data.get("center", [0, 0, 0]), f"Template '{template_id}' bounds center"),
        size=_vec3(bounds_data.get("size"), f"Template '{template_id}' bounds size"),
        yaw=yaw,
    )

    entrance_data = data.get("entrances") or []
    if not isinstance(entrance_data, list):
        raise CatalogError(f"Template '{template_id}' entrances must be a list, got {entrance_data!r}")
    entrances = [
        _dict_to_socket(entry, template_id, i)
        for i, entry in enumerate(entrance_data)
    ]

    return RoomTemplate(
        template_id=str(template_id),
        bounds=bounds,
        entrances=tuple(entrances),
        category=data.get("category", "Room"),
        description=data.get("description", ""),
    )


def _template_to_dict(template: RoomTemplate) -> Dict[str, Any]:
    """Convert a RoomTemplate to a JSON-serializable dictionary."""
    return {
        "id": template.template_id,
        "category": template.category,
        "description": template.description,
        "bounds": {
            "center": list(template.bounds.center),
            "size": list(template.bounds.size),
            "yaw": template.bounds.yaw,
        },
        "entrances": [
            {
                "name": socket.name,
                "position": list(socket.position),
                "facing": socket.facing.value,
            }
            for socket in template.entrances
        ],
    }


def catalog_from_dict(data: Dict[str, Any]) -> RoomTemplateCatalog:
    """Build a catalog from already-parsed JSON data.

    Raises:
        CatalogError: If the data is malformed or holds no templates
    """
    if not isinstance(data, dict) or not isinstance(data.get("templates"), list):
        raise CatalogError("Catalog data must be an object with a 'templates' list")
    templates: List[RoomTemplate] = [_dict_to_template(entry) for entry in data["templates"]]
    return RoomTemplateCatalog(templates)


def catalog_to_dict(templates: Sequence[RoomTemplate]) -> Dict[str, Any]:
    return {"templates": [_template_to_dict(t) for t in templates]}


def load_catalog_from_path(file_path: Union[str, Path]) -> RoomTemplateCatalog:
    """
    Load a room template catalog from a JSON file.

    Args:
        file_path: Path to the catalog file

    Returns:
        RoomTemplateCatalog with the templates in file order

    Raises:
        CatalogError: If the file is missing, unreadable or malformed
    """
    path = Path(file_path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file {path} is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogError(f"Catalog file {path} could not be read: {e}") from e

    catalog = catalog_from_dict(data)
    logger.info(f"Loaded {len(catalog)} template(s) from {path}")
    return catalog
