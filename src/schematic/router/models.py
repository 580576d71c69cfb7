"""Router output dataclasses and configuration constants."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.schematic.config import LAYOUT_RULES


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass
class Route:
    """A routed wire between two consecutive pins of a net."""

    id: str                             # "<net_id>-<segment_index>"
    net_id: str
    net_name: str
    segment_index: int
    color: str
    path: list[tuple[int, int]]         # waypoints in px, Manhattan segments
    fallback: bool = False              # True if A* gave up and a naive path was used
    crossed: list[str] = field(default_factory=list)  # component ids a fallback path crosses


@dataclass
class UnresolvedPin:
    """A net connection whose pin matched nothing on its component."""

    net_id: str
    component_id: str
    pin: str


@dataclass
class RoutingResult:
    """Complete routing result, ready for rendering and export."""

    routes: list[Route]
    unresolved_pins: list[UnresolvedPin] = field(default_factory=list)
    skipped_nets: list[str] = field(default_factory=list)   # < 2 resolved points

    @property
    def fallback_routes(self) -> list[str]:
        return [r.id for r in self.routes if r.fallback]

    @property
    def ok(self) -> bool:
        return not self.unresolved_pins and not self.fallback_routes


class UnresolvedPinError(Exception):
    """Raised for an unknown pin when the policy is ``"error"``."""

    def __init__(self, net_id: str, component_id: str, pin: str) -> None:
        self.net_id = net_id
        self.component_id = component_id
        self.pin = pin
        super().__init__(
            f"Net '{net_id}': pin '{pin}' not found on component '{component_id}'"
        )


# ── Net colours ───────────────────────────────────────────────────

SIGNAL_COLOR = "#059669"
POWER_COLOR = "#dc2626"
GROUND_COLOR = "#1e293b"

POWER_NAME_HINTS = ("VCC", "3V3", "5V")
GROUND_NAME_HINTS = ("GND",)


# ── Router configuration ──────────────────────────────────────────
#
# The grid quantum comes from the shared layout rules
# (src.schematic.config.LAYOUT_RULES).  Router-only knobs live here.

PIN_POLICIES = ("ignore", "warn", "error")


@dataclass
class RouterConfig:
    """All tuneable router parameters in one place.

    ``grid_size_px`` is read from ``LAYOUT_RULES`` so it stays in sync
    with the placer.
    """

    # ── Shared geometry ────────────────────────────────────────
    grid_size_px: int = LAYOUT_RULES.grid_size_px

    # ── Router-only knobs ──────────────────────────────────────
    obstacle_padding: int = 2            # clearance cells around every body
    search_margin: int = 20              # cells added around the two access points
    step_cost: int = 10                  # A* cost per cell moved
    turn_penalty: int = 50               # A* cost for changing direction
    heuristic_weight: int = 10           # multiplier on the Manhattan heuristic
    max_iterations: int = 5000           # frontier pops before falling back

    unresolved_pin_policy: str = "warn"  # "ignore" | "warn" | "error"

    def __post_init__(self) -> None:
        if self.unresolved_pin_policy not in PIN_POLICIES:
            raise ValueError(
                f"unresolved_pin_policy must be one of {PIN_POLICIES}, "
                f"got {self.unresolved_pin_policy!r}"
            )


# Module-level defaults (used when no RouterConfig is passed)
_DEFAULT_CFG = RouterConfig()

GRID_SIZE_PX = _DEFAULT_CFG.grid_size_px
OBSTACLE_PADDING = _DEFAULT_CFG.obstacle_padding
SEARCH_MARGIN = _DEFAULT_CFG.search_margin

STEP_COST = _DEFAULT_CFG.step_cost
TURN_PENALTY = _DEFAULT_CFG.turn_penalty
HEURISTIC_WEIGHT = _DEFAULT_CFG.heuristic_weight
MAX_ITERATIONS = _DEFAULT_CFG.max_iterations
