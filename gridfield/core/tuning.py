"""core/tuning.py — Data-driven default parameters.

Every tunable number (repulsion radius, flee cut, jitter sizes, the
default falloff metric…) lives in ``gridfield/data/tuning.toml``.  Any
module can read a value with::

    from gridfield.core.tuning import get
    cut = get("potential.flee", "cut", 0.9)

Nothing is loaded at import time; until ``load()`` runs every ``get``
returns its inline default, and the shipped file holds the same values.
Set ``GRIDFIELD_TUNING`` to point ``load()`` at another file.

Hot-reload: call ``reload()`` to re-read the file.  Values are looked up
at call time, so the next solve picks them up.
"""

from __future__ import annotations
import os
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib


ENV_VAR = "GRIDFIELD_TUNING"

_data: dict = {}
_path: Path | None = None


def default_path() -> Path:
    """``$GRIDFIELD_TUNING`` if set, else the packaged ``data/tuning.toml``."""
    env = os.environ.get(ENV_VAR)
    if env:
        return Path(env)
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning values from *path*.

    A missing, unreadable or malformed file is not an error: the store is
    emptied, the problem is reported and inline defaults apply.
    """
    global _data, _path

    path = default_path() if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    try:
        with open(path, "rb") as f:
            _data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"[TUNING] {path} unreadable ({e}) — using defaults")
        _data = {}
        return

    print(f"[TUNING] Loaded {_count_values(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def reset() -> None:
    """Forget all loaded values; every ``get`` falls back to its default."""
    global _data, _path
    _data = {}
    _path = None


def _table(dotted: str) -> dict | None:
    # "potential.flee" → _data["potential"]["flee"], or None if any hop is missing
    node = _data
    for part in dotted.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, dict) else None


def get(section: str, key: str, default=None):
    """Read ``key`` from the ``[section]`` table, or *default*.

    >>> get("potential.flee", "cut", 0.9)
    0.9
    """
    table = _table(section)
    if table is None:
        return default
    return table.get(key, default)


def section(dotted: str) -> dict:
    """Shallow copy of a whole table; ``{}`` when it is absent."""
    table = _table(dotted)
    return dict(table) if table is not None else {}


def _count_values(table: dict) -> int:
    return sum(_count_values(v) if isinstance(v, dict) else 1
               for v in table.values())
