"""logic/potential.py — Multi-source Dijkstra maps ("potential fields").

A ``PotentialField`` assigns every cell of a domain the cheapest
accumulated cost from a set of attraction sources.  Agents call
``chase`` to step downhill toward the nearest source.

Sources
-------
Attraction  ``add_attraction_point(pos, force)`` seeds ``follow[pos] = force``.
            Lower seeds win; use 0 (or negative) for goals.
Repulsion   ``add_repulsion_point(pos, radius, force)`` seeds nothing.  It
            makes every edge that steps *closer* to ``pos`` (with both ends
            inside ``radius``) cost ``cost * force + (d_u - d_v)``, where
            ``d_*`` is the move cost from each end to ``pos``.  Several
            repulsions compose in registration order.

Derived maps
------------
``make_flee_map``   re-seeds the cells farthest from the goals with a
                    negative multiple of their value, so rolling downhill
                    leads *away* from the goals, around obstacles.
``make_range_map``  re-seeds the band ``range ≤ v < range + 1`` so agents
                    settle at that distance.

Both add a tiny random jitter to each seed so equal cells don't form a
plateau.  The random source is injected (``rand``), never the module
global, so tests can pass a deterministic stream.

Unreached or walled-off cells hold ``INF``.

Public API
----------
``PotentialField(neighborhood, move_cost, rand=None, *, name, log)``
``.calculate(cells)`` → ``follow``
``.chase(point)`` → ``Point`` or ``None``
``.descend(start)`` → ``list[Point]``
"""

from __future__ import annotations
import heapq
import itertools
import math
import random
import time
from typing import Callable, Iterable, Optional

from gridfield.core.point import Point
from gridfield.core.tuning import get as _tun
from gridfield.components.dev_log import DevLog
from gridfield.components.sources import Repulsion
from gridfield.logic.providers import MoveCost, Neighborhood


INF = math.inf


class PotentialField:
    """Multi-source Dijkstra map over a caller-supplied domain."""

    def __init__(
        self,
        neighborhood: Neighborhood,
        move_cost: MoveCost,
        rand: Optional[Callable[[], float]] = None,
        *,
        name: str = "potential",
        log: Optional[DevLog] = None,
    ) -> None:
        self.neighborhood = neighborhood
        self.move_cost = move_cost
        self.rand = rand if rand is not None else random.Random().random
        self.name = name
        self.log = log

        self.follow: dict[Point, float] = {}
        self.max: float = 0.0
        self.attraction_points: dict[Point, float] = {}
        self.repulsion_points: dict[Point, Repulsion] = {}
        self.flee_map: PotentialField | None = None
        self.range_map: PotentialField | None = None

    # ── Sources ──────────────────────────────────────────────────────

    def add_attraction_point(self, pos: Point,
                             force: float | None = None) -> None:
        if force is None:
            force = _tun("potential", "attraction_force", 0.0)
        self.attraction_points[pos] = force

    def add_repulsion_point(self, pos: Point,
                            radius: float | None = None,
                            force: float | None = None) -> None:
        if radius is None:
            radius = _tun("potential.repulsion", "radius", 3)
        if force is None:
            force = _tun("potential.repulsion", "force", 1.2)
        self.repulsion_points[pos] = Repulsion(radius=radius, force=force)

    def clear(self) -> None:
        """Drop the solved field, derived maps and every source."""
        self.follow = {}
        self.max = 0.0
        self.attraction_points = {}
        self.repulsion_points = {}
        self.flee_map = None
        self.range_map = None

    # ── Costs ────────────────────────────────────────────────────────

    def neighbors(self, pos: Point) -> list[Point]:
        """Neighbours of *pos* that belong to the solved domain."""
        follow = self.follow
        return [n for n in self.neighborhood(pos) if n in follow]

    def cost(self, source: Point, dest: Point) -> float:
        """Edge cost from *source* to *dest*, including repulsion."""
        cost = self.move_cost(source, dest)
        for center, rep in self.repulsion_points.items():
            d_source = source.distance(center)
            d_dest = dest.distance(center)
            if d_source <= rep.radius and d_dest <= rep.radius \
                    and d_dest < d_source:
                cost = (cost * rep.force
                        + (self.move_cost(source, center)
                           - self.move_cost(dest, center)))
        return cost

    # ── Solve ────────────────────────────────────────────────────────

    def calculate(self, cells: Iterable[Point]) -> dict[Point, float]:
        """Solve the field over *cells* (the domain) and return it."""
        t0 = time.perf_counter()
        self.follow = {pos: INF for pos in cells}
        for pos, force in self.attraction_points.items():
            if pos in self.follow:
                self.follow[pos] = force
        self._relax()
        self._record("calculate", t0)
        return self.follow

    def _relax(self) -> None:
        """Dijkstra over the domain, starting from every finite cell.

        Improved cells are pushed again; the stale heap entry is skipped
        once the cell is closed.  ``max`` is the largest settled value
        that relaxation assigned; seeds alone never raise it.
        """
        follow = self.follow
        self.max = 0.0

        tie = itertools.count()
        # Open set: (potential, seq, point).  INF cells relax nothing.
        open_set = [(v, next(tie), pos) for pos, v in follow.items() if v < INF]
        heapq.heapify(open_set)
        closed: set[Point] = set()
        relaxed: set[Point] = set()

        while open_set:
            value, _seq, u = heapq.heappop(open_set)
            if u in closed:
                continue
            closed.add(u)
            if u in relaxed and value > self.max:
                self.max = value

            for v in self.neighbors(u):
                if v in closed:
                    continue
                alt = value + self.cost(u, v)
                if alt < follow[v]:
                    follow[v] = alt
                    relaxed.add(v)
                    heapq.heappush(open_set, (alt, next(tie), v))

    # ── Following ────────────────────────────────────────────────────

    def chase(self, point: Point) -> Point | None:
        """Lowest-valued in-domain neighbour of *point*.

        ``None`` when *point* is outside the domain or boxed in.  Ties go
        to whichever neighbour the neighbourhood callable lists first.
        """
        if point not in self.follow:
            return None
        neighbors = self.neighbors(point)
        if not neighbors:
            return None
        return min(neighbors, key=self.follow.__getitem__)

    def descend(self, start: Point,
                max_steps: int | None = None) -> list[Point]:
        """Chase downhill from *start* until no neighbour is strictly lower.

        Returns the cells stepped onto (excluding *start*).  Values fall
        strictly along the walk, so it ends within ``len(follow)`` steps.
        """
        path: list[Point] = []
        if start not in self.follow:
            return path
        limit = len(self.follow) if max_steps is None else max_steps
        current = start
        for _ in range(limit):
            nxt = self.chase(current)
            if nxt is None or not self.follow[nxt] < self.follow[current]:
                break
            path.append(nxt)
            current = nxt
        return path

    # ── Derived maps ─────────────────────────────────────────────────

    def make_range_map(self, force: float | None = None,
                       range_: float | None = None) -> PotentialField:
        """Field whose minima sit at distance ``range_`` from the goals."""
        if force is None:
            force = _tun("potential.range", "force", -1.2)
        if range_ is None:
            range_ = _tun("potential.range", "range", 3)
        jitter = _tun("potential.range", "jitter", 0.001)

        seeds: dict[Point, float] = {}
        for pos, val in self.follow.items():
            if val < INF and range_ <= val < range_ + 1:
                seeds[pos] = force * val + jitter * self.rand()
            else:
                seeds[pos] = INF
        self.range_map = self._derive("range", seeds)
        return self.range_map

    def make_flee_map(self, force: float | None = None,
                      cut: float | None = None) -> PotentialField:
        """Field whose minima are the cells farthest from the goals."""
        if force is None:
            force = _tun("potential.flee", "force", -1.2)
        if cut is None:
            cut = _tun("potential.flee", "cut", 0.9)
        jitter = _tun("potential.flee", "jitter", 0.01)

        threshold = self.max * cut
        seeds: dict[Point, float] = {}
        for pos, val in self.follow.items():
            if val < INF and val >= threshold:
                seeds[pos] = force * val + jitter * self.rand()
            else:
                seeds[pos] = INF
        self.flee_map = self._derive("flee", seeds)
        return self.flee_map

    def _derive(self, kind: str, seeds: dict[Point, float]) -> PotentialField:
        t0 = time.perf_counter()
        field = PotentialField(self.neighborhood, self.move_cost, self.rand,
                               name=f"{self.name}.{kind}", log=self.log)
        field.follow = seeds
        field._relax()
        field._record(kind, t0)
        return field

    # ── Logging ──────────────────────────────────────────────────────

    def _record(self, msg: str, t0: float) -> None:
        if self.log is None:
            return
        reached = sum(1 for v in self.follow.values() if v < INF)
        self.log.record("potential", msg, name=self.name, details={
            "cells": len(self.follow),
            "reached": reached,
            "max": self.max,
            "ms": (time.perf_counter() - t0) * 1000.0,
        })
