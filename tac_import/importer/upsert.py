"""Delete-by-name and create primitives for every object kind.

Each create starts from the kind's default bundle, applies the caller's
overrides and raises EntityCreationError if the world model rejects the
request, so callers can count failures the same way everywhere.
"""

import logging
from typing import Any

from tac_import.database.models.enums import ObjectType
from tac_import.importer.exceptions import EntityCreationError
from tac_import.world.defaults import (
    ATTRIBUTE_DEFAULTS,
    BARRIER_DEFAULTS,
    CHARACTER_DEFAULTS,
    GRAPHIC_DEFAULTS,
    HANDOUT_DEFAULTS,
    PAGE_DEFAULTS,
    with_defaults,
)
from tac_import.world.repository import WorldEntity, WorldRepository

logger = logging.getLogger(__name__)


class EntityUpserter:
    """Name-keyed create/delete operations on a world repository."""

    def __init__(self, repository: WorldRepository) -> None:
        self.repository = repository

    def delete_by_name(self, kind: ObjectType, name: str) -> int:
        """Remove every object of a kind with exactly this name.

        Args:
            kind: Kind of object.
            name: Exact, case-sensitive name.

        Returns:
            Number of objects removed. Zero matches is not an error.
        """
        existing = self.repository.find_by_type_and_name(kind, name)
        for obj in existing:
            obj.remove()
        if existing:
            logger.info(f"Deleted {len(existing)} existing {kind.value} with name: {name}")
        return len(existing)

    def _create(
        self,
        kind: ObjectType,
        defaults: dict[str, Any],
        overrides: dict[str, Any],
    ) -> WorldEntity:
        attributes = with_defaults(defaults, overrides)
        obj = self.repository.create(kind, attributes)
        if obj is None:
            raise EntityCreationError(kind.value, attributes.get("name", ""))
        return obj

    def create_page(self, name: str, **overrides: Any) -> WorldEntity:
        return self._create(ObjectType.PAGE, PAGE_DEFAULTS, {"name": name, **overrides})

    def create_character(self, name: str, **overrides: Any) -> WorldEntity:
        return self._create(ObjectType.CHARACTER, CHARACTER_DEFAULTS, {"name": name, **overrides})

    def create_attribute(self, character: WorldEntity, name: str, **overrides: Any) -> WorldEntity:
        return self._create(
            ObjectType.ATTRIBUTE,
            ATTRIBUTE_DEFAULTS,
            {"name": name, "characterid": character.id, **overrides},
        )

    def create_handout(self, name: str, **overrides: Any) -> WorldEntity:
        return self._create(ObjectType.HANDOUT, HANDOUT_DEFAULTS, {"name": name, **overrides})

    def create_graphic(self, page: WorldEntity, **overrides: Any) -> WorldEntity:
        return self._create(
            ObjectType.GRAPHIC,
            GRAPHIC_DEFAULTS,
            {"pageid": page.id, **overrides},
        )

    def create_barrier(
        self,
        page: WorldEntity,
        start: tuple[int, int],
        end: tuple[int, int],
        **overrides: Any,
    ) -> WorldEntity:
        """Create a two-point polyline on the page.

        Points are in page pixels. The path is stored the way the host
        draws it: a bounding box (center, width, height) plus move/line
        commands relative to the box's top-left corner.
        """
        (x1, y1), (x2, y2) = start, end
        min_x, min_y = min(x1, x2), min(y1, y2)
        width, height = abs(x2 - x1), abs(y2 - y1)
        geometry = {
            "left": min_x + width / 2,
            "top": min_y + height / 2,
            "width": width,
            "height": height,
            "path": [["M", x1 - min_x, y1 - min_y], ["L", x2 - min_x, y2 - min_y]],
            "points": [[x1, y1], [x2, y2]],
        }
        return self._create(
            ObjectType.PATH,
            BARRIER_DEFAULTS,
            {"pageid": page.id, **geometry, **overrides},
        )
