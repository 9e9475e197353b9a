"""Coordinate transform from the authoring canvas to a destination page.

The authoring tool exports geometry on a fixed square canvas. Destination
pages can be any size, so every value is scaled by the page's live edge
length in grid cells:

    dest = round((value / canvas_size) * cell_px * grid_units)

Rounding is half-up, the same as the host. Results are not clamped.
"""

import math
from dataclasses import dataclass


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going toward positive infinity.

    Python's round() uses banker's rounding; the host does not.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def to_destination(
    source_value: float,
    source_canvas_size: float,
    dest_cell_px: float,
    dest_grid_units: float,
) -> int:
    """Map one source-canvas value to destination pixels.

    Args:
        source_value: Coordinate in source-canvas units.
        source_canvas_size: Edge length of the source canvas.
        dest_cell_px: Pixels per grid cell on the destination page.
        dest_grid_units: Destination page edge length in grid cells.

    Returns:
        Destination pixel value, rounded half-up.

    Raises:
        ValueError: If source_canvas_size is not positive.
    """
    if source_canvas_size <= 0:
        raise ValueError(f"Source canvas size must be positive, got {source_canvas_size}")
    return round_half_up((source_value / source_canvas_size) * dest_cell_px * dest_grid_units)


def radius_to_feet(
    source_radius: float,
    source_canvas_size: float,
    dest_cell_px: float,
    dest_grid_units: float,
    px_per_foot: float,
) -> float:
    """Map a source-canvas radius to feet on the destination page."""
    if px_per_foot <= 0:
        raise ValueError(f"Pixels per foot must be positive, got {px_per_foot}")
    return (
        to_destination(source_radius, source_canvas_size, dest_cell_px, dest_grid_units)
        / px_per_foot
    )


@dataclass(frozen=True)
class CanvasTransform:
    """Transform bound to one destination page's live dimensions.

    Build a new one for every page; page sizes are read at import time
    and never cached across scenes.
    """

    source_canvas_size: float
    dest_cell_px: float
    page_width: float
    page_height: float
    px_per_foot: float

    def x(self, value: float) -> int:
        return to_destination(value, self.source_canvas_size, self.dest_cell_px, self.page_width)

    def y(self, value: float) -> int:
        return to_destination(value, self.source_canvas_size, self.dest_cell_px, self.page_height)

    def point(self, x: float, y: float) -> tuple[int, int]:
        return self.x(x), self.y(y)

    def radius(self, value: float) -> float:
        """Radius in feet, scaled by the page width."""
        return radius_to_feet(
            value,
            self.source_canvas_size,
            self.dest_cell_px,
            self.page_width,
            self.px_per_foot,
        )
