"""Main routing engine — connects the pins of every net with Manhattan wires.

Algorithm overview:
  1. Build the obstacle field from all placements (bodies + padding).
  2. For each net, resolve every connection to a pin position.
  3. Chain the resolved pins: route pin 0 -> 1, 1 -> 2, ... (no Steiner merge).
  4. Each segment starts and ends one cell outside the body, on the pin's
     access side.  A short lane through the padding is opened for both
     pins so the search can leave and re-enter the obstacle field.
  5. A* between the two access cells; the literal pin points are added
     back so wires end exactly on the pins.

The pass is single-shot and greedy: routes do not block each other and
nothing is ripped up.
"""

from __future__ import annotations

import logging

from src.schematic.config import LAYOUT_RULES, LayoutRules
from src.schematic.design.models import Component, Net, SchematicData
from src.schematic.placer.models import Placements

from .grid import Cell, ObstacleField, point_to_cell, cell_to_point
from .models import (
    Route, RoutingResult, RouterConfig, UnresolvedPin, UnresolvedPinError,
    SIGNAL_COLOR, POWER_COLOR, GROUND_COLOR,
    POWER_NAME_HINTS, GROUND_NAME_HINTS,
)
from .pathfinder import SearchBounds, search_path, simplify_path
from .pins import ResolvedPin, locate_pin, fallback_pin, access_cell


log = logging.getLogger(__name__)


# ── Main entry points ──────────────────────────────────────────────


def route_nets(
    schematic: SchematicData,
    placements: Placements,
    *,
    config: RouterConfig | None = None,
    rules: LayoutRules = LAYOUT_RULES,
) -> RoutingResult:
    """Route all nets against the current placements.

    Parameters
    ----------
    schematic : SchematicData
        Components and nets.
    placements : Placements
        Current body rectangles, keyed by component id.
    config : RouterConfig | None
        Tuneable parameters.  Uses defaults when *None*.
    rules : LayoutRules
        Pin geometry used to locate pins on the bodies.

    Returns
    -------
    RoutingResult
        Routes in net order then segment order, plus diagnostics.

    Raises
    ------
    UnresolvedPinError
        Only when ``config.unresolved_pin_policy == "error"``.
    """
    if config is None:
        config = RouterConfig()

    comp_map = {c.id: c for c in schematic.components}
    obstacles = ObstacleField.build(
        placements, config.grid_size_px, config.obstacle_padding,
    )

    log.info("Router: starting — %d components, %d nets, %d blocked cells",
             len(placements), len(schematic.nets), len(obstacles))

    result = RoutingResult(routes=[])

    for net in schematic.nets:
        pins = _resolve_net_pins(net, comp_map, placements, config, rules, result)
        if len(pins) < 2:
            log.debug("Router: net %s has %d usable pin(s), skipped", net.id, len(pins))
            result.skipped_nets.append(net.id)
            continue

        color = net_color(net)
        for i in range(len(pins) - 1):
            result.routes.append(
                _route_segment(net, i, pins[i], pins[i + 1], color, obstacles, config)
            )

    log.info("Router: done — %d routes, %d fallback, %d skipped nets, %d unresolved pins",
             len(result.routes), len(result.fallback_routes),
             len(result.skipped_nets), len(result.unresolved_pins))
    return result


def route(
    components: list[Component],
    nets: list[Net],
    placements: Placements,
    *,
    config: RouterConfig | None = None,
) -> list[Route]:
    """Shortcut returning only the route list."""
    return route_nets(
        SchematicData(components=components, nets=nets),
        placements,
        config=config,
    ).routes


def net_color(net: Net) -> str:
    """Wire colour for a net: declared type first, then case-sensitive name hints."""
    if net.type == "ground":
        return GROUND_COLOR
    if net.type == "power":
        return POWER_COLOR
    if net.type == "signal":
        return SIGNAL_COLOR

    name = net.name
    # Ground wins over power when a name carries both hints.
    if any(hint in name for hint in GROUND_NAME_HINTS):
        return GROUND_COLOR
    if any(hint in name for hint in POWER_NAME_HINTS):
        return POWER_COLOR
    return SIGNAL_COLOR


# ── Pin resolution ─────────────────────────────────────────────────


def _resolve_net_pins(
    net: Net,
    comp_map: dict[str, Component],
    placements: Placements,
    config: RouterConfig,
    rules: LayoutRules,
    result: RoutingResult,
) -> list[ResolvedPin]:
    """Resolve a net's connections in order, skipping unplaced components."""
    pins: list[ResolvedPin] = []
    for conn in net.connections:
        comp = comp_map.get(conn.component_id)
        placement = placements.get(conn.component_id)
        if comp is None or placement is None:
            log.debug("Router: net %s references unplaced component %s",
                      net.id, conn.component_id)
            continue

        rp = locate_pin(comp, placement, conn.pin, rules)
        if rp is None:
            policy = config.unresolved_pin_policy
            if policy == "error":
                raise UnresolvedPinError(net.id, conn.component_id, str(conn.pin))
            if policy == "warn":
                log.warning("Router: net %s — pin '%s' not found on %s, using fallback point",
                            net.id, conn.pin, conn.component_id)
            result.unresolved_pins.append(
                UnresolvedPin(net_id=net.id, component_id=conn.component_id, pin=str(conn.pin))
            )
            rp = fallback_pin(conn.component_id, placement, conn.pin)
        pins.append(rp)
    return pins


# ── Segment routing ────────────────────────────────────────────────


class _OpenedObstacles:
    """Obstacle set with a few cells temporarily opened."""

    __slots__ = ("_blocked", "_opened")

    def __init__(self, blocked: set[Cell], opened: set[Cell]) -> None:
        self._blocked = blocked
        self._opened = opened

    def __contains__(self, cell: object) -> bool:
        return cell in self._blocked and cell not in self._opened


def _escape_lane(pin: ResolvedPin, pin_cell: Cell, padding: int) -> set[Cell]:
    """Cells from just outside the pin through the padding, along its side."""
    dx, dy = pin.direction
    return {(pin_cell[0] + k * dx, pin_cell[1] + k * dy) for k in range(1, padding + 1)}


def _route_segment(
    net: Net,
    index: int,
    a: ResolvedPin,
    b: ResolvedPin,
    color: str,
    obstacles: ObstacleField,
    config: RouterConfig,
) -> Route:
    q = config.grid_size_px
    cell_a = point_to_cell(a.x, a.y, q)
    cell_b = point_to_cell(b.x, b.y, q)
    start = access_cell(cell_a, a.side)
    end = access_cell(cell_b, b.side)

    opened = (_escape_lane(a, cell_a, config.obstacle_padding)
              | _escape_lane(b, cell_b, config.obstacle_padding))
    bounds = SearchBounds.around(start, end, config.search_margin)

    found = search_path(
        start, end,
        _OpenedObstacles(obstacles.blocked, opened),
        bounds,
        step_cost=config.step_cost,
        turn_penalty=config.turn_penalty,
        heuristic_weight=config.heuristic_weight,
        max_iterations=config.max_iterations,
    )
    log.debug("Router: %s-%d %s -> %s, %d iterations, cost=%s",
              net.id, index, start, end, found.iterations, found.cost)

    cells = simplify_path([cell_a, *found.path, cell_b])
    path = [cell_to_point(c, q) for c in cells]

    crossed: list[str] = []
    if found.fallback:
        crossed = obstacles.bodies_crossed(path, ignore={a.component_id, b.component_id})
        if crossed:
            log.warning("Router: fallback wire %s-%d crosses %s",
                        net.id, index, ", ".join(crossed))

    return Route(
        id=f"{net.id}-{index}",
        net_id=net.id,
        net_name=net.name,
        segment_index=index,
        color=color,
        path=path,
        fallback=found.fallback,
        crossed=crossed,
    )
