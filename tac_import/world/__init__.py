"""World model access for the importer.

This module contains:
- transform: Source canvas to destination page coordinate scaling
- defaults: Default attribute bundles per object kind
- repository: World model protocol and SQLAlchemy implementation
"""

from tac_import.world.repository import SqlWorldRepository, WorldEntity, WorldRepository
from tac_import.world.transform import (
    CanvasTransform,
    radius_to_feet,
    round_half_up,
    to_destination,
)

__all__ = [
    "CanvasTransform",
    "radius_to_feet",
    "round_half_up",
    "to_destination",
    "SqlWorldRepository",
    "WorldEntity",
    "WorldRepository",
]
