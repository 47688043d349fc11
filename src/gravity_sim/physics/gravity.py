"""
Gravitational force evaluation.

Two strategies share the same Newtonian kernel F = G * m1 * m2 / d^2:
- Barnes-Hut: traverse a freshly built QuadTree for each particle
- Direct summation: exact O(n^2) pairwise sum, vectorized with numpy

Direct summation is the reference the Barnes-Hut results converge to
as theta goes to 0.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..spatial.quadtree import EPSILON, QuadTree
from ..types import Particle


def accumulate_forces(
    tree: QuadTree,
    particles: Sequence[Particle],
    G: float,
    theta: float,
) -> np.ndarray:
    """
    Accumulate Barnes-Hut gravity on every particle.

    The tree must have been aggregated. Forces are added to each
    particle's acceleration buffer.

    Returns:
        (n, 2) array with the force applied to each particle
    """
    forces = np.zeros((len(particles), 2), dtype=np.float64)
    for i, particle in enumerate(particles):
        forces[i] = tree.compute_force(particle, G, theta)
    return forces


def direct_forces(
    particles: Sequence[Particle],
    G: float,
    epsilon: float = EPSILON,
) -> np.ndarray:
    """
    Exact pairwise gravitational forces.

    Pairs closer than `epsilon` contribute nothing, matching the tree
    traversal. Particles are not modified.

    Args:
        particles: Bodies to evaluate
        G: Gravitational constant
        epsilon: Minimum separation that still produces a force

    Returns:
        (n, 2) array of forces
    """
    n = len(particles)
    if n < 2:
        return np.zeros((n, 2), dtype=np.float64)

    pos = np.array([(p.x, p.y) for p in particles], dtype=np.float64)
    mass = np.array([p.mass for p in particles], dtype=np.float64)

    # delta[i, j] points from i towards j
    delta = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
    dist = np.sqrt(np.sum(delta * delta, axis=2))

    mask = dist >= epsilon
    safe = np.where(mask, dist, 1.0)
    magnitude = np.where(mask, G * np.outer(mass, mass) / (safe * safe), 0.0)

    return np.sum(delta * (magnitude / safe)[:, :, np.newaxis], axis=1)


def apply_direct_forces(particles: Sequence[Particle], G: float) -> np.ndarray:
    """Add exact pairwise gravity to every particle's acceleration buffer."""
    forces = direct_forces(particles, G)
    for particle, (fx, fy) in zip(particles, forces):
        particle.apply_force(float(fx), float(fy))
    return forces


__all__ = ["accumulate_forces", "direct_forces", "apply_direct_forces"]
