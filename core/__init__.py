"""core package initialization.

Making `core` an explicit package so imports like `import core.canvas`
work reliably when running `main.py` from the project root.
"""

__all__ = ["app", "scene", "canvas", "surface_canvas", "tuning", "events",
           "constants"]
