"""components.sources — Field source records."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Repulsion:
    """A cell that makes approaching it expensive.

    ``radius`` — Manhattan reach; both ends of an edge must be inside it.
    ``force``  — multiplier applied to the base cost of approaching edges.
                 Values above 1 push paths away; a radius ≤ 0 never applies.
    """
    radius: float = 3
    force: float = 1.2
