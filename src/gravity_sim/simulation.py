"""
Barnes-Hut N-body gravity simulation.

Each call to step() runs a fixed pipeline over the particle list:

1. Drain intents queued since the previous step
2. Bounding box of all positions, expanded by a margin
3. Rebuild the quadtree from empty and insert every particle
4. Aggregate mass and center of mass bottom-up
5. Accumulate gravity on every particle
6. Integrate (semi-implicit Euler) and bounce off the viewport edges
7. Resolve collisions in the selected mode

The tree only lives for the duration of one step. Given the same particle
ordering and mode flags a step is fully deterministic.
"""

from __future__ import annotations

import math
import warnings
from typing import TYPE_CHECKING, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .base import BaseSimulation
from .intents import (
    AddParticle,
    ClearAll,
    Intent,
    IntentQueue,
    Regenerate,
    SetCollisionMode,
    SetShowTree,
    SetViewport,
    ToggleCollisionMode,
    ToggleShowTree,
)
from .physics.collisions import CollisionResolver
from .physics.gravity import accumulate_forces, apply_direct_forces
from .physics.integrator import integrate
from .scenarios import orbital_velocity, random_system
from .spatial.quadtree import QuadTree
from .types import (
    CollisionMode,
    Event,
    EventType,
    Particle,
    ParticleLike,
    Rect,
    SizeType,
)
from .validation import (
    validate_capacity,
    validate_count,
    validate_particle,
    validate_position,
    validate_positive,
    validate_restitution,
    validate_theta,
    validate_time_step,
    validate_viewport_size,
)

# Clicks closer than this to the center would get an extreme orbital speed
MIN_ADD_DISTANCE = 20.0


class SimulationWarning(UserWarning):
    """Warning for requests the simulation ignored."""

    pass


class Simulation(BaseSimulation):
    """
    2D gravitational N-body simulation with Barnes-Hut force approximation.

    Forces are evaluated through a quadtree rebuilt every step. Overlapping
    particles either bounce (elastic mode) or coalesce (merge mode).
    External requests are queued and applied at the start of the next step.

    Example:
        sim = Simulation(
            particles=binary_star_system((400, 300)),
            size=(800, 600),
            theta=0.5,
        )
        sim.add_particle_at(600, 300)
        sim.set_collision_mode(CollisionMode.merge)
        sim.run(1000)

        for view in sim.snapshot():
            print(f"({view.x:.1f}, {view.y:.1f}) m={view.mass}")
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
        # Simulation-specific parameters
        G: float = 6.6743e-3,
        theta: float = 0.1,
        time_step: float = 0.1,
        capacity: int = 4,
        margin: float = 100.0,
        restitution: float = 0.8,
        wall_restitution: float = 0.8,
        collision_mode: CollisionMode = CollisionMode.elastic,
        reference_mass: float = 2000.0,
        use_barnes_hut: bool = True,
        show_tree: bool = False,
    ) -> None:
        """
        Initialize simulation.

        Args:
            particles: Initial particles
            size: Viewport size as (width, height)
            random_seed: Random seed for regenerated systems
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            G: Gravitational constant
            theta: Barnes-Hut opening angle (0 = exact, higher = coarser)
            time_step: Integration time step
            capacity: Particles per quadtree leaf before it subdivides
            margin: Padding added around the particles' bounding box
            restitution: Restitution of particle-particle contacts
            wall_restitution: Fraction of speed kept when bouncing off an edge
            collision_mode: Elastic impulse or merge
            reference_mass: Central mass used to derive the orbital speed of
                added particles
            use_barnes_hut: Use the quadtree for forces. When False forces are
                summed exactly over all pairs (the tree is still built).
            show_tree: Display-only flag for renderers
        """
        super().__init__(
            particles=particles,
            size=size,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )

        self._G: float = validate_positive("G", G)
        self._theta: float = validate_theta(theta)
        self._time_step: float = validate_time_step(time_step)
        self._capacity: int = validate_capacity(capacity)
        self._margin: float = validate_positive("margin", margin)
        self._wall_restitution: float = validate_restitution(wall_restitution)
        self._reference_mass: float = validate_positive("reference_mass", reference_mass)
        self._use_barnes_hut: bool = bool(use_barnes_hut)
        self._show_tree: bool = bool(show_tree)
        self._resolver = CollisionResolver(collision_mode, restitution)

        self._intents = IntentQueue()
        self._tree_boundaries: list[Rect] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def G(self) -> float:
        """Get gravitational constant."""
        return self._G

    @G.setter
    def G(self, value: float) -> None:
        """Set gravitational constant (must be positive)."""
        self._G = validate_positive("G", value)

    @property
    def theta(self) -> float:
        """Get Barnes-Hut opening angle."""
        return self._theta

    @theta.setter
    def theta(self, value: float) -> None:
        """Set Barnes-Hut opening angle (must be >= 0)."""
        self._theta = validate_theta(value)

    @property
    def time_step(self) -> float:
        """Get integration time step."""
        return self._time_step

    @time_step.setter
    def time_step(self, value: float) -> None:
        """Set integration time step (must be positive)."""
        self._time_step = validate_time_step(value)

    @property
    def capacity(self) -> int:
        """Get quadtree leaf capacity."""
        return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        self._capacity = validate_capacity(value)

    @property
    def margin(self) -> float:
        """Get padding around the root boundary."""
        return self._margin

    @margin.setter
    def margin(self, value: float) -> None:
        self._margin = validate_positive("margin", value)

    @property
    def reference_mass(self) -> float:
        return self._reference_mass

    @reference_mass.setter
    def reference_mass(self, value: float) -> None:
        self._reference_mass = validate_positive("reference_mass", value)

    @property
    def use_barnes_hut(self) -> bool:
        """Get whether Barnes-Hut approximation is enabled."""
        return self._use_barnes_hut

    @use_barnes_hut.setter
    def use_barnes_hut(self, value: bool) -> None:
        """Enable or disable Barnes-Hut approximation."""
        self._use_barnes_hut = bool(value)

    @property
    def collision_mode(self) -> CollisionMode:
        """Get active collision mode."""
        return self._resolver.mode

    @property
    def restitution(self) -> float:
        """Get restitution of particle-particle contacts."""
        return self._resolver.restitution

    @property
    def show_tree(self) -> bool:
        """Display-only: whether renderers should draw the tree overlay."""
        return self._show_tree

    @property
    def pending_intents(self) -> int:
        """Number of intents waiting for the next step."""
        return len(self._intents)

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def submit(self, intent: Intent) -> Self:
        """
        Queue a request for the start of the next step.

        Input is validated here, before it can reach the physics core.

        Raises:
            InvalidParticleError: Non-finite position or bad mass/radius
            InvalidViewportError: Non-positive viewport size
            InvalidParameterError: Negative regenerate count
            TypeError: Unknown intent type
        """
        if isinstance(intent, AddParticle):
            validate_position(intent.x, intent.y)
            validate_particle(Particle(intent.x, intent.y, mass=intent.mass, radius=intent.radius))
        elif isinstance(intent, Regenerate):
            validate_count(intent.count)
        elif isinstance(intent, SetViewport):
            validate_viewport_size((intent.width, intent.height))
        elif isinstance(intent, SetCollisionMode):
            CollisionMode(intent.mode)

        self._intents.put(intent)
        return self

    def add_particle_at(self, x: float, y: float, radius: float = 5.0, mass: float = 10.0) -> Self:
        """Queue a particle on an orbit around the viewport center."""
        return self.submit(AddParticle(x, y, radius, mass))

    def set_collision_mode(self, mode: CollisionMode) -> Self:
        return self.submit(SetCollisionMode(mode))

    def toggle_collision_mode(self) -> Self:
        return self.submit(ToggleCollisionMode())

    def set_show_tree(self, show: bool) -> Self:
        return self.submit(SetShowTree(show))

    def toggle_show_tree(self) -> Self:
        return self.submit(ToggleShowTree())

    def clear(self) -> Self:
        return self.submit(ClearAll())

    def regenerate(self, count: int = 50) -> Self:
        return self.submit(Regenerate(count))

    def resize(self, width: float, height: float) -> Self:
        return self.submit(SetViewport(width, height))

    def _apply(self, intent: Intent) -> None:
        """Apply a single drained intent."""
        if isinstance(intent, AddParticle):
            self._add_orbiting(intent)
        elif isinstance(intent, SetCollisionMode):
            self._resolver.mode = intent.mode
        elif isinstance(intent, ToggleCollisionMode):
            self._resolver.mode = (
                CollisionMode.elastic
                if self._resolver.mode == CollisionMode.merge
                else CollisionMode.merge
            )
        elif isinstance(intent, SetShowTree):
            self._show_tree = bool(intent.show)
        elif isinstance(intent, ToggleShowTree):
            self._show_tree = not self._show_tree
        elif isinstance(intent, ClearAll):
            self._particles.clear()
        elif isinstance(intent, Regenerate):
            self._particles[:] = random_system(self.center, intent.count, self._rng, self._G)
        elif isinstance(intent, SetViewport):
            self.size = (intent.width, intent.height)

    def _add_orbiting(self, intent: AddParticle) -> None:
        cx, cy = self.center
        dx = intent.x - cx
        dy = intent.y - cy
        distance = math.sqrt(dx * dx + dy * dy)

        if distance < MIN_ADD_DISTANCE:
            warnings.warn(
                f"Ignoring particle at ({intent.x:.1f}, {intent.y:.1f}): "
                f"closer than {MIN_ADD_DISTANCE} to the center.",
                SimulationWarning,
                stacklevel=4,
            )
            return

        # Perpendicular to the radius vector, at 70% of circular speed
        vx, vy = orbital_velocity(dx, dy, self._G, self._reference_mass)
        self._particles.append(
            Particle(
                intent.x,
                intent.y,
                vx=vx,
                vy=vy,
                mass=intent.mass,
                radius=intent.radius,
            )
        )

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def step(self) -> Self:
        """
        Advance the simulation by one tick.

        Returns:
            self (for chaining)
        """
        for intent in self._intents.drain():
            self._apply(intent)

        particles = self._particles

        tree = self.build_tree()

        if self._use_barnes_hut:
            accumulate_forces(tree, particles, self._G, self._theta)
        else:
            apply_direct_forces(particles, self._G)

        width, height = self._viewport_size
        reflections = integrate(
            particles, self._time_step, width, height, self._wall_restitution
        )

        collisions = self._resolver.resolve(particles)

        self._tree_boundaries = tree.boundaries()

        self._tick_count += 1
        self.trigger(
            {
                "type": EventType.tick,
                "tick": self._tick_count,
                "particle_count": len(particles),
                "collisions": collisions,
                "reflections": reflections,
            }
        )
        return self

    def build_tree(self) -> QuadTree:
        """
        Build and aggregate a quadtree over the current particles.

        Raises:
            AssertionError: If a particle falls outside the computed root
                boundary (the bounding box was not computed from the same
                particle list)
        """
        return QuadTree.from_particles(self._particles, self._margin, self._capacity)

    def tree_boundaries(self) -> list[Rect]:
        """
        Boundaries of every node of the tree built by the last step.

        Empty before the first step.
        """
        return list(self._tree_boundaries)

    def validate(self) -> Self:
        """
        Validate every particle currently in the simulation.

        Particles are validated on entry, but the live list can be mutated
        directly through the `particles` property.

        Raises:
            InvalidParticleError: If any particle is malformed.
        """
        for i, particle in enumerate(self._particles):
            validate_particle(particle, i)
        return self


__all__ = ["Simulation", "SimulationWarning", "MIN_ADD_DISTANCE"]
