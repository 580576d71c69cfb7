"""Grid mapping and the obstacle field.

Pixel coordinates map onto integer grid cells by the shared quantum.
The obstacle field is the set of cells covered by component bodies,
grown by a clearance padding.  It is rebuilt from scratch on every
routing pass.
"""

from __future__ import annotations

import math

from shapely.geometry import LineString, box as shapely_box

from src.schematic.placer.models import Placements

from .models import GRID_SIZE_PX, OBSTACLE_PADDING


Cell = tuple[int, int]


# ── Coordinate conversion ──────────────────────────────────────────


def to_grid(px: float, grid_size: int = GRID_SIZE_PX) -> int:
    """Convert a pixel value to the nearest grid index (halves round up)."""
    return int(math.floor(px / grid_size + 0.5))


def to_px(cell: int, grid_size: int = GRID_SIZE_PX) -> int:
    """Convert a grid index to pixels."""
    return cell * grid_size


def point_to_cell(x: float, y: float, grid_size: int = GRID_SIZE_PX) -> Cell:
    return (to_grid(x, grid_size), to_grid(y, grid_size))


def cell_to_point(cell: Cell, grid_size: int = GRID_SIZE_PX) -> tuple[int, int]:
    return (to_px(cell[0], grid_size), to_px(cell[1], grid_size))


# ── Obstacle field ─────────────────────────────────────────────────


class ObstacleField:
    """Blocked grid cells derived from the current placements.

    Every body occupies the inclusive cell rectangle
    ``[gx - pad, gx + gw + pad] x [gy - pad, gy + gh + pad]``.
    The padded rectangles are also kept as shapely boxes (in grid
    units) so a finished polyline can be checked against them.
    """

    def __init__(self, grid_size: int = GRID_SIZE_PX, padding: int = OBSTACLE_PADDING) -> None:
        self.grid_size = grid_size
        self.padding = padding
        self.blocked: set[Cell] = set()
        self._footprints: dict[str, object] = {}

    @classmethod
    def build(
        cls,
        placements: Placements,
        grid_size: int = GRID_SIZE_PX,
        padding: int = OBSTACLE_PADDING,
    ) -> "ObstacleField":
        obstacles = cls(grid_size, padding)
        for cid, p in placements.items():
            obstacles.add_body(cid, p.x, p.y, p.w, p.h)
        return obstacles

    def add_body(self, component_id: str, x: int, y: int, w: int, h: int) -> None:
        """Rasterise one body rectangle (pixels) into blocked cells."""
        q = self.grid_size
        pad = self.padding
        gx, gy = to_grid(x, q), to_grid(y, q)
        gw, gh = to_grid(w, q), to_grid(h, q)
        x0, x1 = gx - pad, gx + gw + pad
        y0, y1 = gy - pad, gy + gh + pad
        for cx in range(x0, x1 + 1):
            for cy in range(y0, y1 + 1):
                self.blocked.add((cx, cy))
        self._footprints[component_id] = shapely_box(x0, y0, x1, y1)

    # ── Cell queries ───────────────────────────────────────────────

    def __contains__(self, cell: Cell) -> bool:
        return cell in self.blocked

    def __len__(self) -> int:
        return len(self.blocked)

    def is_blocked(self, gx: int, gy: int) -> bool:
        return (gx, gy) in self.blocked

    # ── Diagnostics ────────────────────────────────────────────────

    def bodies_crossed(
        self,
        path_px: list[tuple[int, int]],
        ignore: set[str] | frozenset[str] = frozenset(),
    ) -> list[str]:
        """Ids of bodies whose padded footprint the polyline passes through.

        Only the interior counts; running along the padding edge does not.
        """
        if len(path_px) < 2:
            return []
        q = self.grid_size
        line = LineString([(x / q, y / q) for x, y in path_px])
        hits = []
        for cid, fp in self._footprints.items():
            if cid in ignore:
                continue
            if line.intersects(fp) and not line.touches(fp):
                hits.append(cid)
        return hits
