"""gridfield — Dijkstra maps and shadow-casting light fields for grid games.

Submodules
----------
core.point           Point (immutable integer coordinate)
core.tuning          TOML-backed default parameters
components.sources   Repulsion
components.dev_log   DevLog (ring buffer of solve events)
logic.providers      neighbourhood / move-cost callables
logic.potential      PotentialField (attraction, repulsion, flee, range)
logic.visibility     VisibilityField (octant shadow-casting)

All public names are re-exported here so callers can simply
``from gridfield import PotentialField, Point``.
"""

# ── Core ─────────────────────────────────────────────────────────────
from gridfield.core.point import Point

# ── Components ───────────────────────────────────────────────────────
from gridfield.components.sources import Repulsion
from gridfield.components.dev_log import DevLog

# ── Logic ────────────────────────────────────────────────────────────
from gridfield.logic.providers import (
    within, cardinal_neighborhood, octile_neighborhood,
    uniform_cost, manhattan_cost, chebyshev_cost, octile_cost,
)
from gridfield.logic.potential import PotentialField, INF
from gridfield.logic.visibility import VisibilityField, METRICS

__version__ = "0.1.0"
