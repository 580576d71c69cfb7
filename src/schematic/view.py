"""View transform — pan and zoom applied at render time only.

Kept apart from placement state: nothing here reads or writes
component positions.
"""

from __future__ import annotations

from dataclasses import dataclass


MIN_SCALE = 0.5
MAX_SCALE = 3.0
ZOOM_STEP = 0.1


@dataclass
class ViewTransform:
    pan_x: float = 0.0
    pan_y: float = 0.0
    scale: float = 1.0

    def zoom_in(self) -> None:
        self.scale = round(min(self.scale + ZOOM_STEP, MAX_SCALE), 6)

    def zoom_out(self) -> None:
        self.scale = round(max(self.scale - ZOOM_STEP, MIN_SCALE), 6)

    def pan_by(self, dx: float, dy: float) -> None:
        """Pan by a screen-space delta."""
        self.pan_x += dx
        self.pan_y += dy

    def reset_pan(self) -> None:
        self.pan_x = 0.0
        self.pan_y = 0.0

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.scale + self.pan_x, y * self.scale + self.pan_y)

    def to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return ((sx - self.pan_x) / self.scale, (sy - self.pan_y) / self.scale)

    def drag_delta(self, dx: float, dy: float) -> tuple[float, float]:
        """Convert a screen-space mouse delta to a world-space delta."""
        return (dx / self.scale, dy / self.scale)
