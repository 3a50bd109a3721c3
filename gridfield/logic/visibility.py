"""logic/visibility.py — Shadow-casting field of view with light falloff.

``VisibilityField.calculate(center)`` fills ``light_map`` with every cell
visible from *center* within ``radius``, valued ``1 - dist / radius``
under the chosen falloff metric:

    circle   Euclidean  √(dx² + dy²)
    square   Chebyshev  max(|dx|, |dy|)
    diamond  Manhattan  |dx| + |dy|      (default)

The center is always lit at 1.0; cells whose brightness would be ≤ 0
are left out.  Opaque cells are lit themselves (walls are seen) but
shadow everything behind them.

Octants
-------
Each diagonal unit vector ``(x, y)`` yields two octant bases,
``(0, x, y, 0)`` and ``(x, 0, 0, y)``.  A basis ``(xx, xy, yx, yy)`` maps
the scan coordinate ``(dx, dy)`` — ``dy = -row``, ``dx`` running from
``-row`` to 0 — to the world cell
``(cx + dx*xx + dy*xy, cy + dx*yx + dy*yy)``.

Every octant scan narrows a slope window ``[end, start]`` as walls are
met and queues a sub-scan for the part of the window above each wall
run.  The sub-scans live on an explicit stack, so a large radius never
runs into the interpreter's recursion limit.

Caching
-------
The map is rebuilt only when the field is dirty or *center* moved.
Changing ``radius``, ``metric`` or ``opaque`` marks it dirty; if the
world behind the ``opaque`` callable changes, call ``mark_dirty()``.
"""

from __future__ import annotations
import math
import time
from typing import Callable, Optional

from gridfield.core.point import Point
from gridfield.core.tuning import get as _tun
from gridfield.components.dev_log import DevLog


Opaque = Callable[[Point], bool]
Bounds = tuple[int, int, int, int]       # min_x, min_y, max_x, max_y (max exclusive)

METRICS: dict[str, Callable[[int, int], float]] = {
    "circle":  lambda dx, dy: math.hypot(dx, dy),
    "square":  lambda dx, dy: max(abs(dx), abs(dy)),
    "diamond": lambda dx, dy: abs(dx) + abs(dy),
}


def _never_opaque(pos: Point) -> bool:
    return False


def _octants() -> list[tuple[int, int, int, int]]:
    bases = []
    for d in Point.diagonal_offsets():
        bases.append((0, d.x, d.y, 0))
        bases.append((d.x, 0, 0, d.y))
    return bases


class VisibilityField:
    """Shadow-cast light map around a single viewer, cached until dirty."""

    def __init__(
        self,
        radius: int,
        opaque: Optional[Opaque] = None,
        metric: str | None = None,
        *,
        bounds: Bounds | None = None,
        name: str = "view",
        log: Optional[DevLog] = None,
    ) -> None:
        if metric is None:
            metric = _tun("visibility", "metric", "diamond")
        self._check_metric(metric)

        self._radius = radius
        self._opaque = opaque if opaque is not None else _never_opaque
        self._metric = metric
        self.bounds = bounds
        self.name = name
        self.log = log

        self.is_dirty = True
        self.center: Point | None = None
        self.light_map: dict[Point, float] = {}
        self.revealed: set[Point] = set()

    # ── Configuration ────────────────────────────────────────────────

    @staticmethod
    def _check_metric(metric: str) -> None:
        if metric not in METRICS:
            raise ValueError(
                f"Unknown falloff metric {metric!r} "
                f"(expected one of {', '.join(METRICS)})")

    @property
    def radius(self) -> int:
        return self._radius

    @radius.setter
    def radius(self, value: int) -> None:
        self._radius = value
        self.is_dirty = True

    @property
    def metric(self) -> str:
        return self._metric

    @metric.setter
    def metric(self, value: str) -> None:
        self._check_metric(value)
        self._metric = value
        self.is_dirty = True

    @property
    def opaque(self) -> Opaque:
        return self._opaque

    @opaque.setter
    def opaque(self, fn: Opaque) -> None:
        self._opaque = fn
        self.is_dirty = True

    def mark_dirty(self) -> None:
        self.is_dirty = True

    # ── Queries ──────────────────────────────────────────────────────

    def brightness(self, pos: Point) -> float:
        return self.light_map.get(pos, 0.0)

    def is_visible(self, pos: Point) -> bool:
        return pos in self.light_map

    def forget(self) -> None:
        """Clear the fog-of-war memory in ``revealed``."""
        self.revealed.clear()

    # ── Compute ──────────────────────────────────────────────────────

    def calculate(self, center: Point) -> dict[Point, float]:
        """Light map seen from *center*; cached until dirty or moved."""
        if not self.is_dirty and center == self.center:
            return self.light_map

        t0 = time.perf_counter()
        self.center = center
        light: dict[Point, float] = {center: 1.0}
        if self._radius > 0:
            self._cast(light)

        self.light_map = light
        self.revealed.update(light)
        self.is_dirty = False

        if self.log is not None:
            self.log.record("visibility", "calculate", name=self.name, details={
                "center": str(center),
                "radius": self._radius,
                "lit": len(light),
                "ms": (time.perf_counter() - t0) * 1000.0,
            })
        return light

    def _in_bounds(self, x: int, y: int) -> bool:
        if self.bounds is None:
            return True
        min_x, min_y, max_x, max_y = self.bounds
        return min_x <= x < max_x and min_y <= y < max_y

    def _cast(self, light: dict[Point, float]) -> None:
        cx, cy = self.center.x, self.center.y
        radius = self._radius
        falloff = METRICS[self._metric]
        opaque = self._opaque

        # Scan frames: (row, start slope, end slope, xx, xy, yx, yy)
        stack = [(1, 1.0, 0.0, *basis) for basis in _octants()]
        while stack:
            row, start, end, xx, xy, yx, yy = stack.pop()
            if start < end:
                continue

            new_start = 0.0
            blocked = False
            distance = row
            while distance <= radius and not blocked:
                dy = -distance
                for dx in range(-distance, 1):
                    x = cx + dx * xx + dy * xy
                    y = cy + dx * yx + dy * yy
                    left_slope = (dx - 0.5) / (dy + 0.5)
                    right_slope = (dx + 0.5) / (dy - 0.5)

                    if not self._in_bounds(x, y) or start < right_slope:
                        continue
                    if end > left_slope:
                        break

                    pos = Point(x, y)
                    dist = falloff(dx, dy)
                    if dist <= radius:
                        bright = 1.0 - dist / radius
                        if bright > 0:
                            light[pos] = bright

                    if blocked:
                        if opaque(pos):
                            new_start = right_slope
                            continue
                        blocked = False
                        start = new_start
                    elif opaque(pos) and distance < radius:
                        # Wall inside the sight line: scan above it later
                        blocked = True
                        stack.append((distance + 1, start, left_slope,
                                      xx, xy, yx, yy))
                        new_start = right_slope
                distance += 1
