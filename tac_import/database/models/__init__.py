"""Database models package."""

from tac_import.database.models.base import Base, TimestampMixin
from tac_import.database.models.enums import Layer, ObjectType
from tac_import.database.models.world import Campaign, WorldObject

__all__ = [
    "Base",
    "TimestampMixin",
    "Layer",
    "ObjectType",
    "Campaign",
    "WorldObject",
]
