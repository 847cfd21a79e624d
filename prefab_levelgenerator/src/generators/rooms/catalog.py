"""
Room template catalog: ordered, read-only set of templates for one generation run.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .base import RoomTemplate
from ..errors import CatalogError, EmptyCatalogError

logger = logging.getLogger(__name__)


class RoomTemplateCatalog:
    """Ordered registry of room templates.

    Order matters: the first template is the default root piece, and
    candidate enumeration follows catalog order so that a seeded run is
    reproducible.
    """

    def __init__(self, templates: Iterable[RoomTemplate]):
        """Initialize the catalog.

        Args:
            templates: Room templates in authoring order

        Raises:
            EmptyCatalogError: If no templates were given
            CatalogError: If two templates share an id
        """
        ordered: List[RoomTemplate] = list(templates)
        if not ordered:
            raise EmptyCatalogError()

        by_id: Dict[str, RoomTemplate] = {}
        for template in ordered:
            if template.template_id in by_id:
                raise CatalogError(f"Duplicate template id '{template.template_id}'")
            by_id[template.template_id] = template

        self._templates: Tuple[RoomTemplate, ...] = tuple(ordered)
        self._by_id = by_id
        logger.debug(f"Catalog created with {len(self._templates)} template(s)")

    def templates(self) -> Tuple[RoomTemplate, ...]:
        """Get all templates in catalog order."""
        return self._templates

    def ids(self) -> List[str]:
        return [t.template_id for t in self._templates]

    def get(self, template_id: str) -> Optional[RoomTemplate]:
        """Get a template by id."""
        return self._by_id.get(template_id)

    def require(self, template_id: str) -> RoomTemplate:
        """Get a template by id, raising CatalogError when it is unknown."""
        template = self._by_id.get(template_id)
        if template is None:
            raise CatalogError(
                f"Unknown template id '{template_id}' (known: {', '.join(self.ids())})"
            )
        return template

    def list_categories(self) -> List[str]:
        """Get all unique categories."""
        return sorted({t.category for t in self._templates})

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[RoomTemplate]:
        return iter(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._by_id
