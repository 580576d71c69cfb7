"""Shared layout constants for the schematic pipeline.

The grid quantum is used both to size component bodies (placer) and to
discretise the routing space (router).  Both stages read it from this
single source of truth so that obstacle cells and pin-access cells stay
aligned.

Change a value here and both stages will stay in sync automatically.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutRules:
    """Geometry rules for schematic symbols and the placement flow.

    All distances are in pixels.
    """

    grid_size_px: int = 20
    """Grid quantum Q.  Every placement coordinate and route point is a
    multiple of this value."""

    header_height_px: int = 40
    """Height of the name bar at the top of a component body."""

    pin_spacing_px: int = 20
    """Half the vertical pitch between consecutive left/right pins."""

    min_body_height_px: int = 100
    """Smallest body height, used for components with few or no pins."""

    body_padding_px: int = 40
    """Extra room added below the last pin before rounding to the grid."""

    body_width_px: int = 220
    """Base body width before rounding up to the grid."""

    # ── Flow layout ────────────────────────────────────────────────

    origin_x_px: int = 60
    origin_y_px: int = 60
    column_width_px: int = 360
    row_height_px: int = 360
    max_columns: int = 3

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def pin_pitch_px(self) -> int:
        """Distance between two consecutive pins on a left/right side."""
        return 2 * self.pin_spacing_px

    @property
    def first_pin_offset_px(self) -> int:
        """Offset from the top edge to the first left/right pin."""
        return self.header_height_px + self.pin_spacing_px


# Shared by placer, router and export.
LAYOUT_RULES = LayoutRules()


# Eagle uses a 0.1 inch grid; one grid cell maps onto one Eagle grid step.
EAGLE_SCALE_MM_PER_PX = 2.54 / LAYOUT_RULES.grid_size_px
