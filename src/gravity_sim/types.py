"""
Common types for the gravity simulation.

This module provides the fundamental types used across the package:
- Particle: Point mass with position, velocity and force accumulator
- Rect: Axis-aligned rectangle used for tree boundaries
- CollisionMode: Elastic impulse or mass-conserving merge
- ParticleView: Read-only particle snapshot for display
- EventType: Simulation lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, NamedTuple, Sequence, TypedDict, Union


class EventType(IntEnum):
    """
    Simulation lifecycle events.

    - start: run() has begun
    - tick: Fired once per completed step
    - end: run() has finished
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    tick: int
    particle_count: int
    collisions: int
    reflections: int


class CollisionMode(IntEnum):
    """How overlapping particles are reconciled at the end of a step."""

    elastic = 0
    merge = 1


@dataclass
class Particle:
    """
    Point mass.

    Attributes:
        x, y: Position
        vx, vy: Velocity
        mass: Mass (must be positive)
        radius: Collision radius (non-negative)
        ax, ay: Acceleration accumulated from forces during the current tick
    """

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    mass: float = 1.0
    radius: float = 0.0
    ax: float = 0.0
    ay: float = 0.0

    def apply_force(self, fx: float, fy: float) -> None:
        """Accumulate a force contribution as acceleration."""
        self.ax += fx / self.mass
        self.ay += fy / self.mass

    def advance(self, dt: float) -> None:
        """
        Semi-implicit Euler step.

        Velocity is updated first and the new velocity moves the particle.
        The acceleration buffer is cleared afterwards for the next tick.
        """
        self.vx += self.ax * dt
        self.vy += self.ay * dt
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.ax = 0.0
        self.ay = 0.0

    @property
    def momentum(self) -> tuple[float, float]:
        return self.mass * self.vx, self.mass * self.vy

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * (self.vx * self.vx + self.vy * self.vy)

    def view(self) -> ParticleView:
        """Read-only copy of the displayable state."""
        return ParticleView(self.x, self.y, self.radius, self.mass)


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle with its top-left corner at (x, y).

    Containment is half-open: x <= px < x + width and y <= py < y + height,
    so the four quadrants of a rectangle never share a point.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def contains(self, px: float, py: float) -> bool:
        """Check if point (px, py) is within this rectangle."""
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height

    @classmethod
    def bounding(cls, particles: Sequence[Particle], margin: float = 0.0) -> Rect:
        """
        Smallest rectangle enclosing every particle position, expanded by margin.

        A positive margin is widened to a small fraction of the largest
        coordinate, so it never vanishes in rounding far from the origin.
        """
        if not particles:
            return cls(-margin, -margin, 2 * margin, 2 * margin)

        min_x = min(p.x for p in particles)
        min_y = min(p.y for p in particles)
        max_x = max(p.x for p in particles)
        max_y = max(p.y for p in particles)

        if margin > 0:
            scale = max(abs(min_x), abs(min_y), abs(max_x), abs(max_y))
            margin = max(margin, scale * 1e-12)

        min_x -= margin
        min_y -= margin
        max_x += margin
        max_y += margin
        return cls(min_x, min_y, max_x - min_x, max_y - min_y)


class ParticleView(NamedTuple):
    """Point-in-time particle state handed to renderers."""

    x: float
    y: float
    radius: float
    mass: float


# Type aliases for Pythonic API
ParticleLike = Union[Particle, dict[str, Any], Any]
"""Input type for particles: Particle objects, dicts, or objects with particle attributes."""

SizeType = Union[tuple[float, float], list[float], Sequence[float]]
"""Viewport size: (width, height) tuple, list, or sequence."""


__all__ = [
    "EventType",
    "Event",
    "CollisionMode",
    "Particle",
    "Rect",
    "ParticleView",
    "ParticleLike",
    "SizeType",
]
