"""
Conservation diagnostics.

Provides quantitative measures of a particle system:
- Total mass and center of mass
- Total linear momentum
- Kinetic, potential and total energy

Useful for checking that a step conserved what it should: mass in every
mode, momentum across collisions that do not touch the viewport edges.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np

from .types import Particle


def _arrays(particles: Sequence[Particle]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    pos = np.array([(p.x, p.y) for p in particles], dtype=np.float64).reshape(-1, 2)
    vel = np.array([(p.vx, p.vy) for p in particles], dtype=np.float64).reshape(-1, 2)
    mass = np.array([p.mass for p in particles], dtype=np.float64)
    return pos, vel, mass


def total_mass(particles: Sequence[Particle]) -> float:
    """Sum of all particle masses."""
    return float(sum(p.mass for p in particles))


def total_momentum(particles: Sequence[Particle]) -> Tuple[float, float]:
    """Total linear momentum (px, py)."""
    if not particles:
        return 0.0, 0.0
    _, vel, mass = _arrays(particles)
    px, py = (vel * mass[:, np.newaxis]).sum(axis=0)
    return float(px), float(py)


def center_of_mass(particles: Sequence[Particle]) -> Tuple[float, float]:
    """Mass-weighted average position, (0, 0) for an empty system."""
    if not particles:
        return 0.0, 0.0
    pos, _, mass = _arrays(particles)
    cx, cy = (pos * mass[:, np.newaxis]).sum(axis=0) / mass.sum()
    return float(cx), float(cy)


def kinetic_energy(particles: Sequence[Particle]) -> float:
    """Sum of 1/2 m v^2."""
    if not particles:
        return 0.0
    _, vel, mass = _arrays(particles)
    return float(0.5 * np.sum(mass * np.sum(vel * vel, axis=1)))


def potential_energy(particles: Sequence[Particle], G: float, epsilon: float = 0.1) -> float:
    """
    Gravitational potential energy -sum_{i<j} G m_i m_j / d_ij.

    Pairs closer than `epsilon` are skipped, as in the force evaluation.

    Time Complexity: O(n^2)
    """
    n = len(particles)
    if n < 2:
        return 0.0

    pos, _, mass = _arrays(particles)
    delta = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
    dist = np.sqrt(np.sum(delta * delta, axis=2))

    upper = np.triu(np.ones((n, n), dtype=bool), k=1) & (dist >= epsilon)
    pair_mass = np.outer(mass, mass)
    return float(-G * np.sum(pair_mass[upper] / dist[upper]))


def total_energy(particles: Sequence[Particle], G: float) -> float:
    """Kinetic plus potential energy."""
    return kinetic_energy(particles) + potential_energy(particles, G)


def separation(p1: Particle, p2: Particle) -> float:
    """Distance between two particle centers."""
    return float(np.hypot(p2.x - p1.x, p2.y - p1.y))


def system_summary(particles: Sequence[Particle], G: float) -> dict[str, Any]:
    """
    Compute all diagnostics at once.

    Returns:
        Dictionary with count, mass, center of mass, momentum and energies
    """
    kinetic = kinetic_energy(particles)
    potential = potential_energy(particles, G)
    return {
        "particle_count": len(particles),
        "total_mass": total_mass(particles),
        "center_of_mass": center_of_mass(particles),
        "momentum": total_momentum(particles),
        "kinetic_energy": kinetic,
        "potential_energy": potential,
        "total_energy": kinetic + potential,
    }


__all__ = [
    "total_mass",
    "total_momentum",
    "center_of_mass",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "separation",
    "system_summary",
]
