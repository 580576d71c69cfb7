"""Tests for pin location on component bodies."""

from __future__ import annotations

import unittest

from src.schematic.design.models import Component, Pin
from src.schematic.placer.models import Placement
from src.schematic.router.pins import (
    access_cell, fallback_pin, locate_pin, partition_pins,
)


class TestLocatePin(unittest.TestCase):

    def setUp(self):
        self.comp = Component(id="U", name="U", pins=[
            Pin(1, "VCC", "left"),
            Pin(2, "GND", "left"),
            Pin(3, "OUT", "right"),
            Pin(4, "EN", "top"),
            Pin(5, "CLK", "top"),
            Pin(6, "NC", "bottom"),
        ])
        self.body = Placement(x=100, y=200, w=220, h=160)

    def _xy(self, ident):
        rp = locate_pin(self.comp, self.body, ident)
        self.assertIsNotNone(rp)
        return (rp.x, rp.y, rp.side)

    def test_left_pins_stack_below_header(self):
        self.assertEqual(self._xy("VCC"), (100, 260, "left"))
        self.assertEqual(self._xy("GND"), (100, 300, "left"))

    def test_right_pin_on_right_edge(self):
        self.assertEqual(self._xy("OUT"), (320, 260, "right"))

    def test_top_pins_spread_across_width(self):
        x, y, side = self._xy("EN")
        self.assertAlmostEqual(x, 100 + 220 / 3)
        self.assertEqual((y, side), (200, "top"))
        x, _, _ = self._xy(5)
        self.assertAlmostEqual(x, 100 + 2 * 220 / 3)

    def test_bottom_pin_centred(self):
        self.assertEqual(self._xy("NC"), (210, 360, "bottom"))

    def test_lookup_by_number_or_name(self):
        self.assertEqual(self._xy(2), self._xy("GND"))
        self.assertEqual(self._xy("2"), self._xy("GND"))

    def test_numeric_string_pin_numbers(self):
        comp = Component(id="J", name="J", pins=[Pin("A4", "VBUS", "right")])
        rp = locate_pin(comp, self.body, "A4")
        self.assertEqual((rp.x, rp.y), (320, 260))

    def test_left_group_searched_first(self):
        comp = Component(id="X", name="X", pins=[
            Pin(9, "SIG", "right"),
            Pin(1, "9", "left"),
        ])
        rp = locate_pin(comp, self.body, "9")
        self.assertEqual(rp.side, "left")
        self.assertEqual(rp.index, 0)

    def test_unknown_pin_is_none(self):
        self.assertIsNone(locate_pin(self.comp, self.body, "MISO"))

    def test_component_without_pins(self):
        self.assertIsNone(locate_pin(Component(id="E", name="E"), self.body, 1))

    def test_direction_points_outward(self):
        self.assertEqual(locate_pin(self.comp, self.body, "VCC").direction, (-1, 0))
        self.assertEqual(locate_pin(self.comp, self.body, "OUT").direction, (1, 0))
        self.assertEqual(locate_pin(self.comp, self.body, "EN").direction, (0, -1))
        self.assertEqual(locate_pin(self.comp, self.body, "NC").direction, (0, 1))


class TestPartition(unittest.TestCase):

    def test_order_within_side_kept(self):
        comp = Component(id="U", name="U", pins=[
            Pin(1, "A", "right"), Pin(2, "B"), Pin(3, "C", "right"), Pin(4, "D", "diagonal"),
        ])
        groups = partition_pins(comp)
        self.assertEqual([p.name for p in groups["right"]], ["A", "C"])
        self.assertEqual([p.name for p in groups["left"]], ["B", "D"])
        self.assertEqual(groups["top"], [])


class TestFallbackAndAccess(unittest.TestCase):

    def test_fallback_is_top_left_corner(self):
        rp = fallback_pin("U", Placement(x=100, y=200, w=220, h=160), "MISO")
        self.assertEqual((rp.x, rp.y, rp.side), (100, 200, "left"))
        self.assertFalse(rp.resolved)
        self.assertEqual(rp.pin, "MISO")

    def test_access_cell(self):
        self.assertEqual(access_cell((5, 5), "left"), (4, 5))
        self.assertEqual(access_cell((5, 5), "right"), (6, 5))
        self.assertEqual(access_cell((5, 5), "top"), (5, 4))
        self.assertEqual(access_cell((5, 5), "bottom"), (5, 6))


if __name__ == "__main__":
    unittest.main()
