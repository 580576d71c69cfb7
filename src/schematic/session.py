"""Layout session — placement state plus a cached routing pass.

Placement is the only persistent, mutable state.  Routing is a pure
function of (schematic, placements) and is cached under a pair of
version tokens; any edit bumps a token and the next ``routing()``
call recomputes from scratch.

A session may be shared between request threads.  Every edit and
every routing pass holds ``lock``, so a pass always reads one
consistent set of placements and edits are applied one at a time.
"""

from __future__ import annotations

import logging
import threading

from .config import LAYOUT_RULES, LayoutRules
from .design.models import SchematicData
from .design.validation import validate_schematic
from .placer import (
    Placement, Placements,
    place_components, place_missing, move_component, reset_placements,
    snap_placements, find_overlaps, placements_to_dict,
)
from .router import RoutingResult, RouterConfig, route_nets, route_to_dict


log = logging.getLogger(__name__)


class LayoutSession:
    """Owns the placements of one schematic and serves routing snapshots."""

    def __init__(
        self,
        schematic: SchematicData,
        placements: Placements | None = None,
        *,
        rules: LayoutRules = LAYOUT_RULES,
        router_config: RouterConfig | None = None,
    ) -> None:
        self.schematic = schematic
        self.rules = rules
        self.router_config = router_config or RouterConfig(grid_size_px=rules.grid_size_px)
        self.placements: Placements = placements if placements is not None else {}
        self.placement_version = 0
        self.data_version = 0
        # Re-entrant: snapshot() holds it while calling routing().
        self.lock = threading.RLock()
        self._cache_key: tuple[int, int] | None = None
        self._cache: RoutingResult | None = None

        snap_placements(self.placements, rules=rules)
        place_missing(schematic.components, self.placements, rules=rules)

    # ── Edits ──────────────────────────────────────────────────────

    def set_schematic(self, schematic: SchematicData) -> None:
        """Swap in new component/net data, keeping existing positions."""
        with self.lock:
            ids = {c.id for c in schematic.components}
            for cid in [cid for cid in self.placements if cid not in ids]:
                del self.placements[cid]
            added = place_missing(schematic.components, self.placements, rules=self.rules)
            self.schematic = schematic
            self.data_version += 1
            if added:
                self.placement_version += 1

    def move_component(self, component_id: str, x: float, y: float) -> Placement:
        """Drag a component; the new corner is snapped to the grid."""
        with self.lock:
            p = move_component(self.placements, component_id, x, y, rules=self.rules)
            self.placement_version += 1
            overlaps = [pair for pair in find_overlaps(self.placements) if component_id in pair]
        if overlaps:
            log.warning("Session: %s now overlaps %s", component_id,
                        ", ".join(a if a != component_id else b for a, b in overlaps))
        return p

    def reset_layout(self) -> None:
        """Discard all positions and run the flow layout again."""
        with self.lock:
            reset_placements(self.placements)
            place_components(self.schematic.components, self.placements, rules=self.rules)
            self.placement_version += 1

    # ── Derived state ──────────────────────────────────────────────

    @property
    def version(self) -> tuple[int, int]:
        return (self.placement_version, self.data_version)

    def routing(self) -> RoutingResult:
        """Routing for the current state, recomputed only after an edit."""
        with self.lock:
            key = self.version
            if self._cache is None or self._cache_key != key:
                # Cached under the version the pass started from, so an
                # edit made during the pass forces the next call to recompute.
                self._cache = route_nets(
                    self.schematic, self.placements,
                    config=self.router_config, rules=self.rules,
                )
                self._cache_key = key
            return self._cache

    def warnings(self) -> list[str]:
        with self.lock:
            msgs = validate_schematic(self.schematic)
            msgs.extend(
                f"Components '{a}' and '{b}' overlap"
                for a, b in find_overlaps(self.placements)
            )
        return msgs

    def snapshot(self) -> dict:
        """Positions and routes, the structure rendering and export consume."""
        with self.lock:
            result = self.routing()
            return {
                "positions": placements_to_dict(self.placements),
                "routes": [route_to_dict(r) for r in result.routes],
            }
