"""Default attribute bundles for every kind of object the importer creates.

These values must stay exactly as they are for imported scenes to look the
same as the ones built by hand in the host.
"""

from typing import Any

from tac_import.database.models.enums import Layer

# 1x1 transparent PNG used as the image for light markers
TRANSPARENT_PIXEL = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

PAGE_SIZE_UNITS = 21.94

PAGE_DEFAULTS: dict[str, Any] = {
    "showgrid": True,
    "dynamic_lighting_enabled": True,
    "explorer_mode": "basic",
    "grid_type": "square",
    "scale_number": 5,
    "scale_units": "ft",
    "grid_opacity": 0.5,
    "gridcolor": "#000000",
    "background_color": "#ffffff",
    "snapping_increment": 1,
}

GRAPHIC_DEFAULTS: dict[str, Any] = {
    "subtype": "token",
    "layer": Layer.OBJECTS.value,
    "left": 0,
    "top": 0,
    "width": 70,
    "height": 70,
    "isdrawing": False,
}

BACKGROUND_DEFAULTS: dict[str, Any] = {
    "layer": Layer.MAP.value,
    "isdrawing": True,
}

BARRIER_DEFAULTS: dict[str, Any] = {
    "layer": Layer.WALLS.value,
    "stroke": "#ff0000",
    "stroke_width": 5,
    "fill": "transparent",
    "barrier_type": "wall",
}

LIGHT_DEFAULTS: dict[str, Any] = {
    "layer": Layer.WALLS.value,
    "imgsrc": TRANSPARENT_PIXEL,
    "width": 70,
    "height": 70,
    "aura1_square": False,
    "showplayers_aura1": False,
    "emits_bright_light": True,
    "emits_low_light": True,
    "has_directional_bright_light": False,
    "light_otherplayers": True,
}

CHARACTER_DEFAULTS: dict[str, Any] = {
    "archived": False,
    "inplayerjournals": "",
    "controlledby": "",
}

HANDOUT_DEFAULTS: dict[str, Any] = {
    "archived": False,
    "inplayerjournals": "",
    "controlledby": "",
}

ATTRIBUTE_DEFAULTS: dict[str, Any] = {
    "current": "",
    "max": "",
}

DEFAULT_LIGHT_COLOR = "#ffffff"

# Attribute that stores an imported NPC's description
NPC_DESCRIPTION_ATTRIBUTE = "npc_description"


def with_defaults(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge caller overrides on top of a default bundle without mutating it."""
    return {**defaults, **overrides}
