"""
main.py — Bootstrap

1. Load beam defaults from data/tuning.toml
2. Create the app
3. Push the beam sandbox scene
4. Run

Any ``--key=value`` arguments become constructor options for the beam
manager, e.g. ``python main.py --beam_style=plasma --beam_width=6``.
Point options take ``x,y``: ``--coords1=0,300``.
"""

from __future__ import annotations
import sys
from core import tuning
from core.app import App
from core.constants import SCREEN_W, SCREEN_H
from scenes.beam_scene import BeamScene


def _parse_options(argv: list[str]) -> dict:
    opts: dict = {}
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            print(f"[MAIN] ignoring argument {arg!r}")
            continue
        key, value = arg[2:].split("=", 1)
        if "," in value:
            try:
                x, y = (float(v) for v in value.split(","))
            except ValueError:
                print(f"[MAIN] ignoring {key}={value!r}: expected x,y")
                continue
            opts[key] = (x, y)
            continue
        try:
            opts[key] = float(value)
        except ValueError:
            opts[key] = value
    return opts


def main(argv: list[str] | None = None):
    tuning.load()
    options = _parse_options(sys.argv[1:] if argv is None else argv)
    if options:
        print(f"[MAIN] beam options: {options}")

    app = App(title="Beams", width=SCREEN_W, height=SCREEN_H)
    app.push_scene(BeamScene(options))
    app.run()


if __name__ == "__main__":
    main()
