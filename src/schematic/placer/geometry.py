"""Low-level geometry helpers for the placer."""

from __future__ import annotations

import math

from shapely.geometry import box as shapely_box
from shapely.strtree import STRtree

from src.schematic.config import LAYOUT_RULES, LayoutRules
from src.schematic.design.models import Component

from .models import Placement, Placements


def snap_to_grid(value: float, grid_size: int = LAYOUT_RULES.grid_size_px) -> int:
    """Round a pixel value to the nearest grid multiple (halves round up)."""
    return int(math.floor(value / grid_size + 0.5)) * grid_size


def ceil_to_grid(value: float, grid_size: int = LAYOUT_RULES.grid_size_px) -> int:
    return int(math.ceil(value / grid_size)) * grid_size


def side_counts(component: Component) -> dict[str, int]:
    """Number of pins on each side (unassigned pins count as left)."""
    counts = {"left": 0, "right": 0, "top": 0, "bottom": 0}
    for pin in component.pins:
        counts[pin.side if pin.side in counts else "left"] += 1
    return counts


def component_size(
    component: Component, rules: LayoutRules = LAYOUT_RULES,
) -> tuple[int, int]:
    """Return (width, height) of a component body in pixels.

    Height follows the taller of the left and right pin columns; top and
    bottom pins do not affect it.  Both dimensions are grid multiples.
    """
    counts = side_counts(component)
    max_vertical = max(counts["left"], counts["right"])
    content_h = rules.header_height_px + max_vertical * rules.pin_pitch_px
    h = ceil_to_grid(
        max(content_h, rules.min_body_height_px) + rules.body_padding_px,
        rules.grid_size_px,
    )
    w = ceil_to_grid(rules.body_width_px, rules.grid_size_px)
    return (w, h)


def body_box(p: Placement, margin: float = 0.0):
    """Shapely box covering a placement, optionally grown by *margin*."""
    return shapely_box(p.x - margin, p.y - margin, p.right + margin, p.bottom + margin)


def find_overlaps(placements: Placements) -> list[tuple[str, str]]:
    """Return id pairs whose bodies overlap (touching edges do not count)."""
    ids = list(placements)
    boxes = [body_box(placements[i]) for i in ids]
    tree = STRtree(boxes)
    pairs: list[tuple[str, str]] = []
    for i, b in enumerate(boxes):
        for j in tree.query(b):
            j = int(j)
            if j <= i:
                continue
            if b.intersection(boxes[j]).area > 0:
                pairs.append((ids[i], ids[j]))
    pairs.sort()
    return pairs
