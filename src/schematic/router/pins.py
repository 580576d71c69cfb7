"""Pin resolution — convert a net connection to a pixel position.

Pins are grouped by side.  Left and right pins stack downwards below
the header at a fixed pitch; top and bottom pins are spread evenly
across the body width.  Lookup order is left, right, top, bottom, and
a pin matches on either its number or its name.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.schematic.config import LAYOUT_RULES, LayoutRules
from src.schematic.design.models import Component, Pin
from src.schematic.placer.models import Placement

from .grid import Cell


SIDE_ORDER = ("left", "right", "top", "bottom")

# Outward unit step for each side, in grid cells (y grows downwards).
ACCESS_STEP = {
    "left": (-1, 0),
    "right": (1, 0),
    "top": (0, -1),
    "bottom": (0, 1),
}


@dataclass
class ResolvedPin:
    """A pin reference resolved to pixel coordinates."""

    component_id: str
    pin: str                # identifier as given by the connection
    side: str               # "left" | "right" | "top" | "bottom"
    x: float
    y: float
    index: int              # position within its side group, -1 for fallback
    resolved: bool = True   # False if this is the fallback point

    @property
    def direction(self) -> tuple[int, int]:
        """Outward direction perpendicular to the body edge."""
        return ACCESS_STEP[self.side]


def partition_pins(component: Component) -> dict[str, list[Pin]]:
    """Group pins by side, keeping input order within each group."""
    groups: dict[str, list[Pin]] = {side: [] for side in SIDE_ORDER}
    for pin in component.pins:
        groups[pin.side if pin.side in groups else "left"].append(pin)
    return groups


def pin_offset(
    side: str,
    index: int,
    group_size: int,
    placement: Placement,
    rules: LayoutRules = LAYOUT_RULES,
) -> tuple[float, float]:
    """Pin position relative to the body's top-left corner."""
    if side in ("left", "right"):
        dy = rules.first_pin_offset_px + index * rules.pin_pitch_px
        dx = 0 if side == "left" else placement.w
        return (dx, dy)
    step = placement.w / (group_size + 1)
    dx = step * (index + 1)
    dy = 0 if side == "top" else placement.h
    return (dx, dy)


def locate_pin(
    component: Component,
    placement: Placement,
    identifier: str | int,
    rules: LayoutRules = LAYOUT_RULES,
) -> ResolvedPin | None:
    """Find a pin by number or name and return its pixel position.

    Returns None if no pin on the component matches.
    """
    groups = partition_pins(component)
    for side in SIDE_ORDER:
        group = groups[side]
        idx = next((i for i, p in enumerate(group) if p.matches(identifier)), -1)
        if idx == -1:
            continue
        dx, dy = pin_offset(side, idx, len(group), placement, rules)
        return ResolvedPin(
            component_id=component.id,
            pin=str(identifier),
            side=side,
            x=placement.x + dx,
            y=placement.y + dy,
            index=idx,
        )
    return None


def fallback_pin(
    component_id: str,
    placement: Placement,
    identifier: str | int,
) -> ResolvedPin:
    """Default point used when a pin cannot be found: the body's top-left corner."""
    return ResolvedPin(
        component_id=component_id,
        pin=str(identifier),
        side="left",
        x=placement.x,
        y=placement.y,
        index=-1,
        resolved=False,
    )


def access_cell(cell: Cell, side: str) -> Cell:
    """The grid cell one step outward from a pin cell."""
    dx, dy = ACCESS_STEP.get(side, (0, 0))
    return (cell[0] + dx, cell[1] + dy)
