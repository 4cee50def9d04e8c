"""core/tuning.py — Data-driven beam defaults.

Process-wide beam and particle defaults live in ``data/tuning.toml`` and
are loaded once at startup.  Any system can read a value with::

    from core.tuning import get
    width = get("beams", "beam_width", 4.0)

Whole tables are merged over hard-coded fallbacks with ``overlay()``::

    opts = overlay("beams.particles", {"size": 6.0, "rate": 0.8})

Hot-reload: call ``reload()`` to re-read the file.  In the demo, press F5.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    try:
        import tomli as tomllib            # pip install tomli
    except ModuleNotFoundError:
        tomllib = None                     # type: ignore[assignment]


_data: dict = {}
_path: Path | None = None


def default_path() -> Path:
    """``data/tuning.toml`` relative to the project root."""
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    Missing files are not an error: every reader supplies a default.
    """
    global _data, _path

    path = default_path() if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found, using built-in defaults")
        _data = {}
        return

    if tomllib is None:
        print("[TUNING] No TOML parser available (need Python 3.11+ or `pip install tomli`)")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk (hot-reload)."""
    load(_path)


def _node(section_path: str):
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"beams.particles"`` looks up ``[beams.particles]``.
    """
    node = _node(section)
    if isinstance(node, dict):
        return node.get(key, default)
    return default


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _node(section_path)
    if isinstance(node, dict):
        return dict(node)
    return {}


def overlay(section_path: str, defaults: dict) -> dict:
    """Return *defaults* with any matching keys from the section applied.

    Keys the caller doesn't know about are skipped; nested tables are
    left to their own ``overlay()`` call.
    """
    merged = dict(defaults)
    for key, value in section(section_path).items():
        if key in merged and not isinstance(value, dict):
            merged[key] = value
    return merged


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
