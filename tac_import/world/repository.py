"""World model repository.

The importer only talks to the world through the WorldRepository protocol:
name-keyed lookup, create, and the get/set/remove methods on the returned
objects. SqlWorldRepository is the SQLAlchemy-backed implementation.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from sqlalchemy.orm import Session

from tac_import.database.models.enums import ObjectType
from tac_import.database.models.world import Campaign, WorldObject
from tac_import.managers.base import BaseManager

logger = logging.getLogger(__name__)


class WorldEntity(Protocol):
    """An object owned by the world model."""

    id: Any

    def get(self, field: str, default: Any = None) -> Any: ...

    def set(self, fields: dict[str, Any] | None = None, **kwargs: Any) -> None: ...

    def remove(self) -> None: ...


class WorldRepository(Protocol):
    """Capabilities the importer needs from the world model."""

    def find_by_type_and_name(self, kind: ObjectType | str, name: str) -> list[WorldEntity]: ...

    def find_all(self, kind: ObjectType | str) -> list[WorldEntity]: ...

    def create(self, kind: ObjectType | str, attributes: dict[str, Any]) -> WorldEntity | None: ...

    def find_children_of_page(self, kind: ObjectType | str, page_id: Any) -> list[WorldEntity]: ...

    def find_attributes_of_character(self, character_id: Any) -> list[WorldEntity]: ...

    async def resolve_attribute(self, attribute: WorldEntity) -> tuple[Any, Any]: ...


# Kinds that must be attached to a page or a character
_PAGE_OWNED = (ObjectType.GRAPHIC, ObjectType.PATH)


class SqlWorldRepository(BaseManager):
    """World model stored in the campaign's world_objects rows."""

    def __init__(self, db: Session, campaign: Campaign) -> None:
        super().__init__(db, campaign)

    def _query(self, kind: ObjectType | str):
        return self.db.query(WorldObject).filter(
            WorldObject.campaign_id == self.campaign_id,
            WorldObject.object_type == ObjectType(kind),
        )

    def find_by_type_and_name(self, kind: ObjectType | str, name: str) -> list[WorldObject]:
        """Find every object of a kind with exactly this name.

        Matching is case-sensitive.
        """
        return self._query(kind).filter(WorldObject.name == name).order_by(WorldObject.id).all()

    def find_all(self, kind: ObjectType | str) -> list[WorldObject]:
        """Find every object of a kind, oldest first."""
        return self._query(kind).order_by(WorldObject.id).all()

    def find_children_of_page(self, kind: ObjectType | str, page_id: int) -> list[WorldObject]:
        """Find every graphic or path drawn on a page."""
        return (
            self._query(kind)
            .filter(WorldObject.page_id == page_id)
            .order_by(WorldObject.id)
            .all()
        )

    def find_attributes_of_character(self, character_id: int) -> list[WorldObject]:
        """Find every attribute keyed to a character."""
        return (
            self._query(ObjectType.ATTRIBUTE)
            .filter(WorldObject.character_id == character_id)
            .order_by(WorldObject.id)
            .all()
        )

    async def resolve_attribute(self, attribute: WorldObject) -> tuple[Any, Any]:
        """Get an attribute's (current, max) values.

        Stored attributes resolve immediately. Hosts with computed
        attributes may suspend here.
        """
        return attribute.get("current"), attribute.get("max")

    def create(self, kind: ObjectType | str, attributes: dict[str, Any]) -> WorldObject | None:
        """Create one object.

        Mirrors the host: a request it cannot honour (missing owner, owner
        of the wrong kind) yields None rather than raising.

        Args:
            kind: Kind of object to create.
            attributes: Field values. "name", "pageid" and "characterid" are
                stored in columns; everything else goes to the property bag.

        Returns:
            The created object, or None if the request was rejected.
        """
        object_type = ObjectType(kind)
        fields = dict(attributes)
        name = fields.pop("name", "") or ""
        page_id = fields.pop("pageid", None)
        character_id = fields.pop("characterid", None)

        if object_type in _PAGE_OWNED:
            if not self._owner_exists(ObjectType.PAGE, page_id):
                logger.warning(f"Rejected {object_type.value} '{name}': no page with id {page_id}")
                return None
        elif page_id is not None:
            logger.warning(f"Rejected {object_type.value} '{name}': only graphics and paths have a page")
            return None

        if object_type == ObjectType.ATTRIBUTE:
            if not self._owner_exists(ObjectType.CHARACTER, character_id):
                logger.warning(f"Rejected attribute '{name}': no character with id {character_id}")
                return None
        elif character_id is not None:
            logger.warning(f"Rejected {object_type.value} '{name}': only attributes have a character")
            return None

        obj = WorldObject(
            campaign_id=self.campaign_id,
            object_type=object_type,
            name=name,
            page_id=page_id,
            character_id=character_id,
            properties=fields,
        )
        self.db.add(obj)
        self.db.flush()
        return obj

    def _owner_exists(self, kind: ObjectType, object_id: Any) -> bool:
        if object_id is None:
            return False
        return self._query(kind).filter(WorldObject.id == object_id).first() is not None
