"""A* pathfinder for Manhattan routing over an obstacle set.

Supports:
  - Point-to-point routing inside a bounding search window
  - Turn penalty to prefer long straight runs and few bends
  - Blocked destination cell (pins sit on a blocked body border)
  - Iteration cap with a naive L-shaped fallback, so a path is always returned
  - Collinear point removal on the finished path
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Container

from .grid import Cell
from .models import STEP_COST, TURN_PENALTY, HEURISTIC_WEIGHT, MAX_ITERATIONS


log = logging.getLogger(__name__)


# Manhattan directions: (dx, dy)
DIRS = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass(frozen=True)
class SearchBounds:
    """Inclusive rectangle of grid cells the search may visit."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @classmethod
    def around(cls, a: Cell, b: Cell, margin: int) -> "SearchBounds":
        return cls(
            min_x=min(a[0], b[0]) - margin,
            max_x=max(a[0], b[0]) + margin,
            min_y=min(a[1], b[1]) - margin,
            max_y=max(a[1], b[1]) + margin,
        )

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


@dataclass
class PathResult:
    path: list[Cell]
    fallback: bool
    iterations: int
    cost: int | None        # None when the fallback was used


def find_path(
    start: Cell,
    end: Cell,
    blocked: Container[Cell],
    bounds: SearchBounds,
    *,
    step_cost: int = STEP_COST,
    turn_penalty: int = TURN_PENALTY,
    heuristic_weight: int = HEURISTIC_WEIGHT,
    max_iterations: int = MAX_ITERATIONS,
) -> list[Cell]:
    """Return the bend points of a Manhattan path from *start* to *end*.

    Never returns an empty list; see ``search_path`` for details.
    """
    return search_path(
        start, end, blocked, bounds,
        step_cost=step_cost,
        turn_penalty=turn_penalty,
        heuristic_weight=heuristic_weight,
        max_iterations=max_iterations,
    ).path


def search_path(
    start: Cell,
    end: Cell,
    blocked: Container[Cell],
    bounds: SearchBounds,
    *,
    step_cost: int = STEP_COST,
    turn_penalty: int = TURN_PENALTY,
    heuristic_weight: int = HEURISTIC_WEIGHT,
    max_iterations: int = MAX_ITERATIONS,
) -> PathResult:
    """A* point-to-point Manhattan routing.

    Blocked cells are impassable except *end* itself.  The start cell is
    never checked, so a search may begin inside the obstacle padding.
    Cells outside *bounds* are pruned.  If the frontier empties or
    *max_iterations* pops are used up, a naive L-shaped path is returned
    instead (it may cross obstacles).

    The successful path is simplified to its bend points; *start* and
    *end* are always kept.

    Search state is the cell alone, not (cell, heading), and closed cells
    are never reopened.  Around obstacles the result can therefore carry
    more bends than the cheapest possible path; it is not guaranteed
    minimal.
    """
    sx, sy = start
    tx, ty = end

    if start == end:
        return PathResult(path=[start], fallback=False, iterations=0, cost=0)

    counter = 0
    h0 = (abs(sx - tx) + abs(sy - ty)) * heuristic_weight
    # (f, insertion counter, x, y, direction index)
    heap: list[tuple[int, int, int, int, int]] = [(h0, counter, sx, sy, -1)]
    g_scores: dict[Cell, int] = {start: 0}
    parents: dict[Cell, Cell] = {}
    closed: set[Cell] = set()
    iterations = 0

    while heap and iterations < max_iterations:
        _f, _cnt, cx, cy, direction = heapq.heappop(heap)
        cur = (cx, cy)
        if cur in closed:
            continue
        closed.add(cur)
        iterations += 1

        if cur == end:
            path = [cur]
            while path[-1] in parents:
                path.append(parents[path[-1]])
            path.reverse()
            return PathResult(
                path=simplify_path(path),
                fallback=False,
                iterations=iterations,
                cost=g_scores[cur],
            )

        cur_g = g_scores[cur]

        for d, (dx, dy) in enumerate(DIRS):
            nx, ny = cx + dx, cy + dy
            if not bounds.contains(nx, ny):
                continue
            nxt = (nx, ny)
            if nxt in closed:
                continue
            if nxt in blocked and nxt != end:
                continue

            cost = step_cost
            if direction != -1 and direction != d:
                cost += turn_penalty
            tentative_g = cur_g + cost

            if nxt not in g_scores or tentative_g < g_scores[nxt]:
                g_scores[nxt] = tentative_g
                parents[nxt] = cur
                h = (abs(nx - tx) + abs(ny - ty)) * heuristic_weight
                counter += 1
                heapq.heappush(heap, (tentative_g + h, counter, nx, ny, d))

    log.warning("Pathfinder: no path %s -> %s after %d iterations, using fallback",
                start, end, iterations)
    return PathResult(
        path=fallback_path(start, end),
        fallback=True,
        iterations=iterations,
        cost=None,
    )


# ── Path shaping ───────────────────────────────────────────────────


def fallback_path(start: Cell, end: Cell) -> list[Cell]:
    """Horizontal-then-vertical path that ignores obstacles."""
    corner = (end[0], start[1])
    path = [start]
    for p in (corner, end):
        if p != path[-1]:
            path.append(p)
    return path


def simplify_path(path: list[Cell]) -> list[Cell]:
    """Drop every interior point that is collinear with both neighbours."""
    if len(path) <= 2:
        return list(path)
    out = [path[0]]
    for i in range(1, len(path) - 1):
        prev, cur, nxt = path[i - 1], path[i], path[i + 1]
        if prev[0] == cur[0] == nxt[0] or prev[1] == cur[1] == nxt[1]:
            continue
        out.append(cur)
    out.append(path[-1])
    return out
