"""Tests for the source canvas to destination page transform."""

import pytest

from tac_import.world.transform import (
    CanvasTransform,
    radius_to_feet,
    round_half_up,
    to_destination,
)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (2.5, 3),
            (3.5, 4),
            (2.4999, 2),
            (-2.5, -2),
            (-2.6, -3),
            (0.0, 0),
        ],
    )
    def test_rounds_half_toward_positive_infinity(self, value, expected):
        """Halves go up, unlike Python's banker's rounding."""
        assert round_half_up(value) == expected

    def test_returns_int(self):
        assert isinstance(round_half_up(1.2), int)


class TestToDestination:
    """Tests for to_destination."""

    def test_full_canvas_maps_to_full_page(self):
        """The far edge of the canvas lands on the far edge of a 21.94 cell page."""
        assert to_destination(1536, 1536, 70, 21.94) == 1536

    def test_origin_stays_at_origin(self):
        assert to_destination(0, 1536, 70, 21.94) == 0

    def test_midpoint(self):
        assert to_destination(768, 1536, 70, 21.94) == 768

    def test_scales_to_smaller_page(self):
        """A 10 cell page is 700 px wide."""
        assert to_destination(1536, 1536, 70, 10) == 700
        assert to_destination(768, 1536, 70, 10) == 350

    def test_half_pixel_rounds_up(self):
        """2.5 rounds to 3 where round() would give 2."""
        assert to_destination(1, 2, 1, 5) == 3

    def test_out_of_range_is_not_clamped(self):
        assert to_destination(3072, 1536, 70, 21.94) == 3072
        assert to_destination(-768, 1536, 70, 21.94) == -768

    def test_deterministic(self):
        """Same inputs always give the same output."""
        results = {to_destination(123.4, 1536, 70, 21.94) for _ in range(20)}
        assert len(results) == 1

    def test_rejects_non_positive_canvas(self):
        with pytest.raises(ValueError):
            to_destination(10, 0, 70, 21.94)


class TestRadiusToFeet:
    """Tests for radius_to_feet."""

    def test_two_cells_is_ten_feet(self):
        """140 canvas units is two 70 px cells, i.e. 10 ft."""
        assert radius_to_feet(140, 1536, 70, 21.94, 14) == pytest.approx(10.0)

    def test_zero_radius(self):
        assert radius_to_feet(0, 1536, 70, 21.94, 14) == 0

    def test_rejects_non_positive_ratio(self):
        with pytest.raises(ValueError):
            radius_to_feet(140, 1536, 70, 21.94, 0)


class TestCanvasTransform:
    """Tests for CanvasTransform bound to page dimensions."""

    def test_x_uses_width_and_y_uses_height(self):
        transform = CanvasTransform(
            source_canvas_size=1536,
            dest_cell_px=70,
            page_width=10,
            page_height=20,
            px_per_foot=14,
        )

        assert transform.x(1536) == 700
        assert transform.y(1536) == 1400
        assert transform.point(768, 768) == (350, 700)

    def test_radius_uses_width(self):
        transform = CanvasTransform(
            source_canvas_size=1536,
            dest_cell_px=70,
            page_width=10,
            page_height=20,
            px_per_foot=14,
        )

        assert transform.radius(1536) == pytest.approx(50.0)
