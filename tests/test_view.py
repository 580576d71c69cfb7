"""Tests for the pan/zoom view transform."""

from __future__ import annotations

import unittest

from src.schematic.view import MAX_SCALE, MIN_SCALE, ViewTransform


class TestZoom(unittest.TestCase):

    def test_steps(self):
        v = ViewTransform()
        v.zoom_in()
        self.assertEqual(v.scale, 1.1)
        v.zoom_out()
        v.zoom_out()
        self.assertEqual(v.scale, 0.9)

    def test_clamped(self):
        v = ViewTransform()
        for _ in range(40):
            v.zoom_in()
        self.assertEqual(v.scale, MAX_SCALE)
        for _ in range(40):
            v.zoom_out()
        self.assertEqual(v.scale, MIN_SCALE)


class TestPan(unittest.TestCase):

    def test_pan_and_reset(self):
        v = ViewTransform()
        v.pan_by(30, -10)
        v.pan_by(5, 5)
        self.assertEqual((v.pan_x, v.pan_y), (35, -5))
        v.reset_pan()
        self.assertEqual((v.pan_x, v.pan_y), (0.0, 0.0))


class TestMapping(unittest.TestCase):

    def test_screen_world_inverse(self):
        v = ViewTransform(pan_x=40, pan_y=-20, scale=2.0)
        self.assertEqual(v.to_screen(100, 50), (240, 80))
        self.assertEqual(v.to_world(240, 80), (100, 50))

    def test_drag_delta_is_scaled(self):
        v = ViewTransform(scale=2.0)
        self.assertEqual(v.drag_delta(40, -20), (20, -10))

    def test_view_does_not_touch_positions(self):
        from src.schematic.placer import Placement
        p = Placement(x=60, y=60, w=220, h=140)
        v = ViewTransform()
        v.zoom_in()
        v.pan_by(100, 100)
        self.assertEqual((p.x, p.y), (60, 60))


if __name__ == "__main__":
    unittest.main()
