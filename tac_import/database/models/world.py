"""World model objects (pages, characters, handouts, graphics, paths)."""

from typing import Any

from sqlalchemy import JSON, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.ext.mutable import MutableDict
from sqlalchemy.orm import Mapped, mapped_column, object_session, relationship

from tac_import.database.models.base import Base, TimestampMixin
from tac_import.database.models.enums import ObjectType


class Campaign(Base, TimestampMixin):
    """A campaign owning one independent world model."""

    __tablename__ = "campaigns"
    __table_args__ = (UniqueConstraint("name", name="uq_campaign_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    objects: Mapped[list["WorldObject"]] = relationship(
        back_populates="campaign",
        cascade="all, delete",
    )

    def __repr__(self) -> str:
        return f"<Campaign {self.id}: {self.name}>"


class WorldObject(Base, TimestampMixin):
    """One named object in the world model.

    Mirrors the host's loosely typed objects: a few indexed columns used
    for lookups plus a free-form property bag. Graphics and paths belong to
    a page, attributes belong to a character, and both are removed with
    their owner.
    """

    __tablename__ = "world_objects"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    campaign_id: Mapped[int] = mapped_column(
        ForeignKey("campaigns.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Identity
    object_type: Mapped[ObjectType] = mapped_column(
        Enum(ObjectType, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        default="",
        index=True,
    )

    # Ownership
    page_id: Mapped[int | None] = mapped_column(
        ForeignKey("world_objects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="Owning page for graphics and paths",
    )
    character_id: Mapped[int | None] = mapped_column(
        ForeignKey("world_objects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="Owning character for attributes",
    )

    properties: Mapped[dict[str, Any]] = mapped_column(
        MutableDict.as_mutable(JSON),
        default=dict,
        nullable=False,
    )

    campaign: Mapped["Campaign"] = relationship(back_populates="objects")
    page: Mapped["WorldObject | None"] = relationship(
        remote_side="WorldObject.id",
        foreign_keys=[page_id],
        back_populates="page_children",
    )
    page_children: Mapped[list["WorldObject"]] = relationship(
        foreign_keys=[page_id],
        back_populates="page",
        cascade="all, delete",
    )
    character: Mapped["WorldObject | None"] = relationship(
        remote_side="WorldObject.id",
        foreign_keys=[character_id],
        back_populates="attributes",
    )
    attributes: Mapped[list["WorldObject"]] = relationship(
        foreign_keys=[character_id],
        back_populates="character",
        cascade="all, delete",
    )

    # Fields stored in columns rather than in the property bag
    _COLUMN_FIELDS = {
        "id": "id",
        "name": "name",
        "type": "object_type",
        "pageid": "page_id",
        "characterid": "character_id",
    }

    def get(self, field: str, default: Any = None) -> Any:
        """Read a field by its host name (e.g. "name", "pageid", "width")."""
        column = self._COLUMN_FIELDS.get(field)
        if column is not None:
            value = getattr(self, column)
            return value.value if isinstance(value, ObjectType) else value
        return self.properties.get(field, default)

    def set(self, fields: dict[str, Any] | None = None, **kwargs: Any) -> None:
        """Update one or more fields.

        Accepts a mapping, keyword arguments, or both. Identity fields
        ("id", "type") cannot be changed.
        """
        updates = {**(fields or {}), **kwargs}
        for field, value in updates.items():
            if field in ("id", "type"):
                raise ValueError(f"Cannot change read-only field: {field}")
            column = self._COLUMN_FIELDS.get(field)
            if column is not None:
                setattr(self, column, value)
            else:
                self.properties[field] = value

    def remove(self) -> None:
        """Delete this object (and anything it owns) from the world."""
        db = object_session(self)
        if db is None:
            return
        db.delete(self)
        db.flush()

    def __repr__(self) -> str:
        return f"<WorldObject {self.object_type.value} {self.id}: {self.name!r}>"
