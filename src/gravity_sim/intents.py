"""
Requests from outside the simulation.

Collaborators (input handlers, timers, menus) never touch the particle list
directly. They enqueue intents, and the simulation drains the queue once at
the start of each step, so nothing mutates the list while the tree or the
collision scan is iterating over it.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Union

from .types import CollisionMode


@dataclass(frozen=True)
class AddParticle:
    """Add a particle at (x, y) on an orbit around the viewport center."""

    x: float
    y: float
    radius: float = 5.0
    mass: float = 10.0


@dataclass(frozen=True)
class SetCollisionMode:
    mode: CollisionMode


@dataclass(frozen=True)
class ToggleCollisionMode:
    pass


@dataclass(frozen=True)
class SetShowTree:
    """Display-only flag, no effect on the physics."""

    show: bool


@dataclass(frozen=True)
class ToggleShowTree:
    pass


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class Regenerate:
    """Replace all particles with a random system around a central body."""

    count: int = 50


@dataclass(frozen=True)
class SetViewport:
    width: float
    height: float


Intent = Union[
    AddParticle,
    SetCollisionMode,
    ToggleCollisionMode,
    SetShowTree,
    ToggleShowTree,
    ClearAll,
    Regenerate,
    SetViewport,
]

INTENT_TYPES = (
    AddParticle,
    SetCollisionMode,
    ToggleCollisionMode,
    SetShowTree,
    ToggleShowTree,
    ClearAll,
    Regenerate,
    SetViewport,
)


class IntentQueue:
    """FIFO of pending intents with a single consumer."""

    def __init__(self) -> None:
        self._pending: Deque[Intent] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def put(self, intent: Intent) -> None:
        if not isinstance(intent, INTENT_TYPES):
            raise TypeError(f"Unknown intent: {intent!r}")
        self._pending.append(intent)

    def drain(self) -> Iterator[Intent]:
        """
        Yield pending intents in submission order.

        Intents submitted while draining are yielded too.
        """
        while self._pending:
            yield self._pending.popleft()

    def pending(self) -> List[Intent]:
        """Snapshot of the queue without consuming it."""
        return list(self._pending)

    def clear(self) -> None:
        self._pending.clear()


__all__ = [
    "AddParticle",
    "SetCollisionMode",
    "ToggleCollisionMode",
    "SetShowTree",
    "ToggleShowTree",
    "ClearAll",
    "Regenerate",
    "SetViewport",
    "Intent",
    "IntentQueue",
]
