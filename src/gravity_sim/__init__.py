"""
gravity-sim: Approximate 2D N-body gravity with Barnes-Hut quadtrees.

This package provides a tick-driven particle simulation whose pairwise
gravity is accelerated with a quadtree rebuilt every step.

Available components:
- spatial: Barnes-Hut quadtree (arena of nodes, rebuilt per step)
- physics: Gravity evaluation, semi-implicit Euler, collision resolution
- simulation: The per-tick pipeline and the request queue it drains
- scenarios: Ready-made initial systems
- metrics: Mass, momentum and energy diagnostics
"""

__version__ = "0.1.0"

# Base class for building simulations
from .base import BaseSimulation

# Requests from collaborators
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

# Conservation diagnostics
from .metrics import (
    center_of_mass,
    kinetic_energy,
    potential_energy,
    separation,
    system_summary,
    total_energy,
    total_mass,
    total_momentum,
)

# Physics stages
from .physics import (
    CollisionResolver,
    accumulate_forces,
    direct_forces,
    integrate,
    merge_pair,
    reflect_at_bounds,
)

# Initial systems
from .scenarios import binary_star_system, orbital_velocity, random_system

# The simulation itself
from .simulation import Simulation, SimulationWarning

# Spatial data structures
from .spatial import QuadTree, QuadTreeNode
from .types import (
    CollisionMode,
    Event,
    EventType,
    Particle,
    ParticleLike,
    ParticleView,
    Rect,
    SizeType,
)

# Validation utilities
from .validation import (
    InvalidParameterError,
    InvalidParticleError,
    InvalidViewportError,
    ValidationError,
    validate_particle,
    validate_viewport_size,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Particle",
    "Rect",
    "ParticleView",
    "CollisionMode",
    "EventType",
    "Event",
    # Type aliases for API
    "ParticleLike",
    "SizeType",
    # Simulation
    "BaseSimulation",
    "Simulation",
    "SimulationWarning",
    # Requests
    "Intent",
    "IntentQueue",
    "AddParticle",
    "SetCollisionMode",
    "ToggleCollisionMode",
    "SetShowTree",
    "ToggleShowTree",
    "ClearAll",
    "Regenerate",
    "SetViewport",
    # Physics
    "CollisionResolver",
    "merge_pair",
    "accumulate_forces",
    "direct_forces",
    "integrate",
    "reflect_at_bounds",
    # Spatial data structures
    "QuadTree",
    "QuadTreeNode",
    # Scenarios
    "binary_star_system",
    "random_system",
    "orbital_velocity",
    # Metrics
    "total_mass",
    "total_momentum",
    "center_of_mass",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "separation",
    "system_summary",
    # Validation
    "ValidationError",
    "InvalidViewportError",
    "InvalidParticleError",
    "InvalidParameterError",
    "validate_particle",
    "validate_viewport_size",
]
