"""core/events.py — Lightweight event bus for beam lifecycle notices.

Decouples the beam manager (which *signals* lifecycle changes) from
whatever wants to *react* to them (HUD, sound, logging)::

    from core.events import EventBus
    bus = EventBus()
    manager = BeamManager(canvas, bus=bus)

Consumers subscribe with a callable::

    bus.subscribe("BeamExpired", my_handler)

And the host drains once per frame, after ``manager.update(dt)``::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
import traceback
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class BeamAdded:
    """A beam was created by ``add_laser`` / ``fire``."""
    beam_id: int
    direction: float = 1.0
    style: str = "solid"


@dataclass
class BeamFading:
    """A beam finished shooting and started to fade."""
    beam_id: int


@dataclass
class BeamExpired:
    """A beam's fade completed; it leaves the collection next update."""
    beam_id: int
    particles_left: int = 0


@dataclass
class BeamRemoved:
    """A beam was dropped explicitly (``remove_laser`` / ``clear_all_lasers``)."""
    beam_id: int
    reason: str = "removed"    # "removed" or "cleared"


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus owned by the host scene."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"BeamExpired"``.
        """
        self._subs[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: Callable) -> bool:
        handlers = self._subs.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        Handlers may emit new events — those are processed in the
        same drain pass (breadth-first).
        """
        processed = 0
        safety = 1000  # prevent infinite loops
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                self._stats[name] += 1
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        """Number of events waiting to be drained."""
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
