"""
Particle dynamics for the gravity simulation.

This module provides the per-step physics stages:
- gravity: Barnes-Hut and direct-summation force evaluation
- integrator: Semi-implicit Euler with viewport reflection
- collisions: Elastic impulse or merge resolution of overlaps
"""

from .collisions import CollisionResolver, merge_pair, overlapping
from .gravity import accumulate_forces, apply_direct_forces, direct_forces
from .integrator import WALL_RESTITUTION, integrate, reflect_at_bounds

__all__ = [
    "CollisionResolver",
    "merge_pair",
    "overlapping",
    "accumulate_forces",
    "apply_direct_forces",
    "direct_forces",
    "WALL_RESTITUTION",
    "integrate",
    "reflect_at_bounds",
]
