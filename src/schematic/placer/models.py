"""Placer output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass
class Placement:
    """A component body rectangle in pixel space (top-left origin).

    ``w`` and ``h`` are computed once from the pin counts and are not
    re-derived when the component is moved.
    """

    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)


# component id -> Placement
Placements = dict[str, Placement]


class PlacementError(Exception):
    """Raised when an explicit edit targets a component with no placement."""

    def __init__(self, component_id: str, reason: str) -> None:
        self.component_id = component_id
        self.reason = reason
        super().__init__(f"Cannot move '{component_id}': {reason}")
