"""Tests for grid mapping and the obstacle field.

Validates:
  - Pixel <-> grid conversion, including half-cell rounding
  - Obstacle rectangles cover body + padding, inclusive
  - Fallback-style polylines crossing a body are detected
"""

from __future__ import annotations

import unittest

from src.schematic.placer.models import Placement
from src.schematic.router.grid import (
    ObstacleField, to_grid, to_px, point_to_cell, cell_to_point,
)


class TestCoordinateMapping(unittest.TestCase):

    def test_exact_multiples(self):
        self.assertEqual(to_grid(0), 0)
        self.assertEqual(to_grid(280), 14)
        self.assertEqual(to_px(14), 280)

    def test_rounds_to_nearest(self):
        self.assertEqual(to_grid(29), 1)
        self.assertEqual(to_grid(31), 2)

    def test_half_cell_rounds_up(self):
        """Halves round towards +inf, never to even."""
        self.assertEqual(to_grid(10), 1)
        self.assertEqual(to_grid(30), 2)
        self.assertEqual(to_grid(50), 3)
        self.assertEqual(to_grid(-10), 0)

    def test_custom_quantum(self):
        self.assertEqual(to_grid(100, 25), 4)
        self.assertEqual(to_px(4, 25), 100)

    def test_point_round_trip_is_grid_aligned(self):
        x, y = cell_to_point(point_to_cell(173.3, 207.0))
        self.assertEqual((x % 20, y % 20), (0, 0))
        self.assertEqual((x, y), (180, 200))


class TestObstacleField(unittest.TestCase):

    def setUp(self):
        # Body covers cells x 3..14, y 3..10; padding 2 grows that to 1..16, 1..12.
        self.placements = {"U": Placement(x=60, y=60, w=220, h=140)}
        self.field = ObstacleField.build(self.placements, grid_size=20, padding=2)

    def test_padded_rectangle_is_inclusive(self):
        self.assertIn((1, 1), self.field)
        self.assertIn((16, 12), self.field)
        self.assertIn((14, 6), self.field)

    def test_cells_outside_padding_are_free(self):
        self.assertNotIn((0, 5), self.field)
        self.assertNotIn((17, 5), self.field)
        self.assertNotIn((5, 13), self.field)
        self.assertFalse(self.field.is_blocked(17, 12))

    def test_cell_count(self):
        self.assertEqual(len(self.field), 16 * 12)

    def test_zero_padding(self):
        field = ObstacleField.build(self.placements, grid_size=20, padding=0)
        self.assertEqual(len(field), 12 * 8)
        self.assertNotIn((2, 5), field)

    def test_overlapping_bodies_merge(self):
        placements = {
            "A": Placement(x=0, y=0, w=40, h=40),
            "B": Placement(x=20, y=0, w=40, h=40),
        }
        field = ObstacleField.build(placements, grid_size=20, padding=0)
        # A covers x 0..2, B covers x 1..3, both y 0..2
        self.assertEqual(len(field), 4 * 3)

    def test_bodies_crossed(self):
        through = [(0, 120), (400, 120)]
        self.assertEqual(self.field.bodies_crossed(through), ["U"])

    def test_bodies_crossed_ignores_listed_ids(self):
        through = [(0, 120), (400, 120)]
        self.assertEqual(self.field.bodies_crossed(through, ignore={"U"}), [])

    def test_bodies_crossed_clear_path(self):
        below = [(0, 400), (400, 400)]
        self.assertEqual(self.field.bodies_crossed(below), [])
        self.assertEqual(self.field.bodies_crossed([(0, 0)]), [])


if __name__ == "__main__":
    unittest.main()
