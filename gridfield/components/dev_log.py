"""components.dev_log — Structured solve/scan event log.

A ring-buffer shared by any number of fields.  Each ``PotentialField``
or ``VisibilityField`` given a log records one entry per solve, so a
debug overlay or a test can see what ran, on how many cells, and how
long it took.

Usage:
    log = DevLog()
    heat = PotentialField(nbrs, cost, name="heat", log=log)
    heat.calculate(cells)
    log.for_cat("potential")[-1]["details"]["cells"]

Each entry is a dict:
    {"t": float, "name": str, "cat": str,
     "msg": str, "details": dict | None}
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field

from gridfield.core.tuning import get as _tun


@dataclass
class DevLog:
    """Ring-buffer of field events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = field(
        default_factory=lambda: int(_tun("log", "max_entries", 500)))
    _paused: bool = False

    # If non-empty, only entries whose ``cat`` is in the set are kept.
    cat_filter: set[str] = field(default_factory=set)

    def record(self, cat: str, msg: str, *,
               name: str = "", t: float | None = None,
               details: dict | None = None) -> None:
        if self._paused:
            return
        if self.cat_filter and cat not in self.cat_filter:
            return
        entry = {
            "t": time.monotonic() if t is None else t,
            "name": name,
            "cat": cat,
            "msg": msg,
            "details": details,
        }
        self.entries.append(entry)
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def clear(self):
        self.entries.clear()

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_name(self, name: str, n: int = 30) -> list[dict]:
        """Return last *n* entries recorded by one named field."""
        return [e for e in self.entries if e["name"] == name][-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]
