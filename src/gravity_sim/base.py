"""
Base class for particle simulations.

This module provides the abstract base that defines the common interface
and shared functionality of a tick-driven simulation:

- Event system (start/tick/end events)
- Particle management via properties
- Viewport size management
- Tick loop
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import (
    Event,
    EventType,
    Particle,
    ParticleLike,
    ParticleView,
    SizeType,
)
from .validation import validate_count, validate_particle, validate_viewport_size

PARTICLE_ATTRS = ("x", "y", "vx", "vy", "mass", "radius")


class BaseSimulation(ABC):
    """
    Abstract base class for tick-driven particle simulations.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Particle list management via properties
    - Viewport size management
    - run() loop around step()

    Example:
        sim = SomeSimulation(
            particles=[{"x": 100, "y": 100, "mass": 10, "radius": 5}],
            size=(800, 600),
        )
        sim.run(100)

        for view in sim.snapshot():
            print(view.x, view.y)
    """

    def __init__(
        self,
        *,
        particles: Optional[Sequence[ParticleLike]] = None,
        size: SizeType = (800.0, 600.0),
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize simulation with configuration.

        Args:
            particles: Initial particles (Particle objects, dicts, or objects
                with particle attributes)
            size: Viewport size as (width, height)
            random_seed: Random seed for reproducible scenario generation
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
        """
        self._particles: list[Particle] = []
        self._viewport_size: tuple[float, float] = (800.0, 600.0)
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}
        self._random_seed: Optional[int] = random_seed
        self._rng = random.Random(random_seed)
        self._tick_count = 0

        # Set initial values via properties (triggers validation)
        if particles is not None:
            self.particles = particles
        self.size = size

        # Register event callbacks
        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def particles(self) -> list[Particle]:
        """Get the live particle list (owned by the simulation)."""
        return self._particles

    @particles.setter
    def particles(self, value: Sequence[ParticleLike]) -> None:
        """
        Set particles from a sequence of Particle objects, dicts, or objects.

        Raises:
            InvalidParticleError: If any particle is malformed.
        """
        particles: list[Particle] = []
        for i, data in enumerate(value):
            if isinstance(data, Particle):
                particle = data
            elif isinstance(data, dict):
                particle = Particle(**data)
            else:
                # Generic object - copy attributes
                particle = Particle(x=0.0, y=0.0)
                for attr in PARTICLE_ATTRS:
                    if hasattr(data, attr):
                        setattr(particle, attr, float(getattr(data, attr)))
            particles.append(validate_particle(particle, i))
        self._particles = particles

    @property
    def size(self) -> tuple[float, float]:
        """Get viewport size as (width, height)."""
        return self._viewport_size

    @size.setter
    def size(self, value: SizeType) -> None:
        """
        Set viewport size.

        Raises:
            InvalidViewportError: If width or height is not positive.
        """
        self._viewport_size = validate_viewport_size(value)

    @property
    def center(self) -> tuple[float, float]:
        """Center of the viewport."""
        return self._viewport_size[0] / 2, self._viewport_size[1] / 2

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible scenarios."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set random seed and restart the random source."""
        self._random_seed = value
        self._rng = random.Random(value)

    @property
    def tick_count(self) -> int:
        """Number of completed steps."""
        return self._tick_count

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a simulation event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def step(self) -> Self:
        """
        Advance the simulation by one tick.

        Returns:
            self (for chaining)
        """
        pass

    def run(self, ticks: int = 1) -> Self:
        """
        Run `ticks` steps, firing start and end events around them.

        Returns:
            self (for chaining)
        """
        ticks = validate_count(ticks)
        self.trigger({"type": EventType.start, "tick": self._tick_count})
        for _ in range(ticks):
            self.step()
        self.trigger({"type": EventType.end, "tick": self._tick_count})
        return self

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def snapshot(self) -> list[ParticleView]:
        """Point-in-time copy of every particle's position, radius and mass."""
        return [p.view() for p in self._particles]


__all__ = ["BaseSimulation"]
