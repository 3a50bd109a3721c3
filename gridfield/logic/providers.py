"""logic/providers.py — Ready-made neighbourhood and move-cost callables.

The solvers never look at a grid; they call back into the caller for
topology and costs.  These helpers cover the common square-grid cases:

    passable = within(40, 20, blocked=walls)
    heat = PotentialField(octile_neighborhood(passable), octile_cost)

Move costs are also used by the repulsion term with *non-adjacent*
pairs (cell → repulsion centre), so each one is a full distance
function, not just a lookup for unit steps.
"""

from __future__ import annotations
from typing import Callable, Iterable

from gridfield.core.point import Point


Neighborhood = Callable[[Point], Iterable[Point]]
MoveCost = Callable[[Point, Point], float]
Passable = Callable[[Point], bool]


# ── Topology ─────────────────────────────────────────────────────────

def within(width: int, height: int,
           blocked: Iterable[Point] = ()) -> Passable:
    """Passability test for a ``width``×``height`` rectangle at the origin."""
    walls = frozenset(blocked)

    def passable(p: Point) -> bool:
        if p.x < 0 or p.y < 0 or p.x >= width or p.y >= height:
            return False
        return p not in walls

    return passable


def cardinal_neighborhood(passable: Passable | None = None) -> Neighborhood:
    """Up, down, left, right — filtered by *passable* when given."""
    def neighborhood(p: Point) -> list[Point]:
        if passable is None:
            return p.cardinals()
        return [n for n in p.cardinals() if passable(n)]
    return neighborhood


def octile_neighborhood(passable: Passable | None = None,
                        cut_corners: bool = False) -> Neighborhood:
    """All 8 neighbours, cardinals first.

    Unless *cut_corners* is set, a diagonal step is dropped when either
    orthogonal cell it squeezes between is impassable.
    """
    def neighborhood(p: Point) -> list[Point]:
        if passable is None:
            return p.neighborhood()
        out = [n for n in p.cardinals() if passable(n)]
        for n in p.diagonals():
            if not passable(n):
                continue
            if not cut_corners and (
                    not passable(Point(n.x, p.y))
                    or not passable(Point(p.x, n.y))):
                continue
            out.append(n)
        return out
    return neighborhood


# ── Move costs ───────────────────────────────────────────────────────

CARDINAL_COST = 1.0
DIAGONAL_COST = 1.414


def uniform_cost(a: Point, b: Point) -> float:
    return 1.0


def manhattan_cost(a: Point, b: Point) -> float:
    return float(a.distance(b))


def chebyshev_cost(a: Point, b: Point) -> float:
    return float(a.chebyshev(b))


def octile_cost(a: Point, b: Point) -> float:
    """1.0 per straight step, 1.414 per diagonal step."""
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    lo, hi = min(dx, dy), max(dx, dy)
    return DIAGONAL_COST * lo + CARDINAL_COST * (hi - lo)
