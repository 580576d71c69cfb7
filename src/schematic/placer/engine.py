"""Placement engine — row-major flow layout plus manual edits.

Placement state is a plain ``{component_id: Placement}`` dict.  It is
populated once and afterwards only individual entries change (drag).
Running the placer again on a populated dict is a no-op; only
``reset_placements`` wipes it.
"""

from __future__ import annotations

import logging

from src.schematic.config import LAYOUT_RULES, LayoutRules
from src.schematic.design.models import Component

from .geometry import component_size, snap_to_grid, ceil_to_grid
from .models import Placement, Placements, PlacementError


log = logging.getLogger(__name__)


def place_components(
    components: list[Component],
    placements: Placements | None = None,
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> Placements:
    """Assign every component an initial position and size.

    Parameters
    ----------
    components : list[Component]
        Components in input order; this order drives the flow layout.
    placements : Placements | None
        Existing placement state.  If it already holds entries it is
        returned untouched.
    rules : LayoutRules
        Body geometry and flow constants.

    Returns
    -------
    Placements
        The (possibly freshly populated) placement dict.
    """
    if placements is None:
        placements = {}
    if placements:
        return placements

    col = 0
    row = 0
    for comp in components:
        w, h = component_size(comp, rules)
        placements[comp.id] = Placement(
            x=rules.origin_x_px + col * rules.column_width_px,
            y=rules.origin_y_px + row * rules.row_height_px,
            w=w,
            h=h,
        )
        col += 1
        if col >= rules.max_columns:
            col = 0
            row += 1

    log.info("Placer: placed %d components in %d row(s)",
             len(placements), row + (1 if col else 0))
    return placements


def place_missing(
    components: list[Component],
    placements: Placements,
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> list[str]:
    """Place components that have no entry yet, below the existing layout.

    Existing entries are never moved.  Returns the ids that were added.
    """
    missing = [c for c in components if c.id not in placements]
    if not missing:
        return []
    if not placements:
        place_components(missing, placements, rules=rules)
        return [c.id for c in missing]

    # New rows start one origin margin below the lowest existing body.
    shift = ceil_to_grid(max(p.bottom for p in placements.values()), rules.grid_size_px)
    fresh = place_components(missing, {}, rules=rules)
    for comp in missing:
        p = fresh[comp.id]
        p.y += shift
        placements[comp.id] = p
    log.info("Placer: added %d new component(s)", len(missing))
    return [c.id for c in missing]


def move_component(
    placements: Placements,
    component_id: str,
    x: float,
    y: float,
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> Placement:
    """Move one component, snapping its top-left corner to the grid.

    Width and height are kept as they are.
    """
    p = placements.get(component_id)
    if p is None:
        raise PlacementError(component_id, "no placement for this id")
    p.x = snap_to_grid(x, rules.grid_size_px)
    p.y = snap_to_grid(y, rules.grid_size_px)
    return p


def snap_placements(
    placements: Placements,
    *,
    rules: LayoutRules = LAYOUT_RULES,
) -> list[str]:
    """Align externally supplied placements to the grid, in place.

    Corners are rounded to the nearest grid point; width and height are
    rounded up so a body never shrinks.  Returns the ids that changed.
    """
    q = rules.grid_size_px
    changed = []
    for cid, p in placements.items():
        snapped = (snap_to_grid(p.x, q), snap_to_grid(p.y, q),
                   ceil_to_grid(p.w, q), ceil_to_grid(p.h, q))
        if snapped != (p.x, p.y, p.w, p.h):
            p.x, p.y, p.w, p.h = snapped
            changed.append(cid)
    if changed:
        log.info("Placer: snapped %d off-grid placement(s) to the grid", len(changed))
    return changed


def reset_placements(placements: Placements) -> None:
    """Clear all placement state so the next placer run starts fresh."""
    placements.clear()
