"""core/point.py — Immutable integer grid coordinate.

All field maps are keyed by ``Point``.  Equality and hashing are by
value, so a ``Point`` built by a neighbourhood callable finds the same
dict entry as one built by the caller.

Directions follow screen convention: ``up`` is ``y - 1``.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: int = 0
    y: int = 0

    # ── Arithmetic ───────────────────────────────────────────────────

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"

    # ── Metrics ──────────────────────────────────────────────────────

    def distance(self, other: Point) -> int:
        """Manhattan distance.  Used for repulsion-radius membership."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def chebyshev(self, other: Point) -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y))

    # ── Steps ────────────────────────────────────────────────────────

    def up(self, times: int = 1) -> Point:
        return Point(self.x, self.y - times)

    def down(self, times: int = 1) -> Point:
        return Point(self.x, self.y + times)

    def left(self, times: int = 1) -> Point:
        return Point(self.x - times, self.y)

    def right(self, times: int = 1) -> Point:
        return Point(self.x + times, self.y)

    def up_left(self, times: int = 1) -> Point:
        return Point(self.x - times, self.y - times)

    def up_right(self, times: int = 1) -> Point:
        return Point(self.x + times, self.y - times)

    def down_left(self, times: int = 1) -> Point:
        return Point(self.x - times, self.y + times)

    def down_right(self, times: int = 1) -> Point:
        return Point(self.x + times, self.y + times)

    def cardinals(self, times: int = 1) -> list[Point]:
        return [self.up(times), self.down(times),
                self.left(times), self.right(times)]

    def diagonals(self, times: int = 1) -> list[Point]:
        return [self.up_left(times), self.up_right(times),
                self.down_left(times), self.down_right(times)]

    def neighborhood(self, times: int = 1) -> list[Point]:
        """All 8 surrounding cells, cardinals first."""
        return self.cardinals(times) + self.diagonals(times)

    @staticmethod
    def diagonal_offsets() -> list[Point]:
        """The four ``(±1, ±1)`` unit vectors.

        The shadow caster derives two octant bases from each one.
        """
        return Point().diagonals()
