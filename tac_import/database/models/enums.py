"""Database enumerations."""

from enum import Enum


class ObjectType(str, Enum):
    """Kind of object in the world model."""

    PAGE = "page"
    CHARACTER = "character"
    ATTRIBUTE = "attribute"
    HANDOUT = "handout"
    GRAPHIC = "graphic"
    PATH = "path"


class Layer(str, Enum):
    """Page layer a graphic or path is drawn on."""

    MAP = "map"  # Background art
    OBJECTS = "objects"  # Tokens visible to players
    WALLS = "walls"  # Dynamic lighting geometry and light markers
