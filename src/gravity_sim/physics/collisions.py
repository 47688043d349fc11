"""
Collision resolution between overlapping particles.

Two particles overlap when the distance between their centers is less
than the sum of their radii. Exactly one of two modes is active:

- Elastic: exchange an impulse along the contact normal (restitution 0.8)
  and push the pair apart so they stop interpenetrating.
- Merge: replace the pair with a single particle that conserves mass,
  momentum, center of mass and (disc) volume.
"""

from __future__ import annotations

import math
from typing import Dict, List, Set

from ..types import CollisionMode, Particle
from ..validation import validate_restitution


def merge_pair(p1: Particle, p2: Particle) -> Particle:
    """
    Combine two particles into one.

    Mass is summed, velocity and position are mass-weighted averages
    and radius is (r1^3 + r2^3)^(1/3).
    """
    total_mass = p1.mass + p2.mass
    return Particle(
        x=(p1.x * p1.mass + p2.x * p2.mass) / total_mass,
        y=(p1.y * p1.mass + p2.y * p2.mass) / total_mass,
        vx=(p1.vx * p1.mass + p2.vx * p2.mass) / total_mass,
        vy=(p1.vy * p1.mass + p2.vy * p2.mass) / total_mass,
        mass=total_mass,
        radius=(p1.radius**3 + p2.radius**3) ** (1.0 / 3.0),
    )


def overlapping(p1: Particle, p2: Particle) -> bool:
    """True if the two discs interpenetrate."""
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    reach = p1.radius + p2.radius
    return dx * dx + dy * dy < reach * reach


class CollisionResolver:
    """
    Detects and resolves overlapping particle pairs.

    Pairs are scanned in ascending index order (i < j), so results are
    deterministic for a given particle ordering.

    Example:
        resolver = CollisionResolver(mode=CollisionMode.merge)
        merges = resolver.resolve(particles)  # list is updated in place
    """

    def __init__(
        self,
        mode: CollisionMode = CollisionMode.elastic,
        restitution: float = 0.8,
    ) -> None:
        """
        Initialize resolver.

        Args:
            mode: Elastic impulse or merge
            restitution: Fraction of the approaching normal velocity kept
                after an elastic contact (0 = inelastic, 1 = elastic)
        """
        self._mode = CollisionMode(mode)
        self._restitution = validate_restitution(restitution)

    @property
    def mode(self) -> CollisionMode:
        """Get active collision mode."""
        return self._mode

    @mode.setter
    def mode(self, value: CollisionMode) -> None:
        """Set active collision mode."""
        self._mode = CollisionMode(value)

    @property
    def restitution(self) -> float:
        """Get restitution coefficient for elastic contacts."""
        return self._restitution

    @restitution.setter
    def restitution(self, value: float) -> None:
        """Set restitution coefficient, must be in [0, 1]."""
        self._restitution = validate_restitution(value)

    def resolve(self, particles: List[Particle]) -> int:
        """
        Resolve all overlaps using the active mode.

        Args:
            particles: Particle list, modified in place

        Returns:
            Number of contacts resolved (impulses applied or merges made)
        """
        if self._mode == CollisionMode.merge:
            return self.resolve_merge(particles)
        return self.resolve_elastic(particles)

    def resolve_elastic(self, particles: List[Particle]) -> int:
        """
        Apply impulses to every approaching overlapping pair.

        Later pairs see the velocities and positions already updated by
        earlier pairs in the same pass.
        """
        e = self._restitution
        contacts = 0
        n = len(particles)

        for i in range(n):
            p1 = particles[i]
            for j in range(i + 1, n):
                p2 = particles[j]

                dx = p2.x - p1.x
                dy = p2.y - p1.y
                distance = math.sqrt(dx * dx + dy * dy)
                if distance >= p1.radius + p2.radius:
                    continue

                # Collision normal, from p1 towards p2
                if distance > 0:
                    nx = dx / distance
                    ny = dy / distance
                else:
                    nx, ny = 1.0, 0.0

                vel_along_normal = (p2.vx - p1.vx) * nx + (p2.vy - p1.vy) * ny
                if vel_along_normal >= 0:
                    # Separating or resting
                    continue

                impulse = -(1 + e) * vel_along_normal / (1 / p1.mass + 1 / p2.mass)
                p1.vx -= impulse * nx / p1.mass
                p1.vy -= impulse * ny / p1.mass
                p2.vx += impulse * nx / p2.mass
                p2.vy += impulse * ny / p2.mass

                # Push apart, the lighter body moves further
                penetration = (p1.radius + p2.radius - distance) * 0.5
                total_mass = p1.mass + p2.mass
                p1.x -= nx * penetration * (p2.mass / total_mass)
                p1.y -= ny * penetration * (p2.mass / total_mass)
                p2.x += nx * penetration * (p1.mass / total_mass)
                p2.y += ny * penetration * (p1.mass / total_mass)

                contacts += 1

        return contacts

    def resolve_merge(self, particles: List[Particle]) -> int:
        """
        Merge overlapping pairs.

        Pairs are collected in one ascending scan before the list changes.
        A particle takes part in at most one merge per call; the merged
        particle replaces the lower index and the higher index is removed.
        Overlaps involving a freshly merged particle are picked up on the
        next call.
        """
        n = len(particles)
        consumed: Set[int] = set()
        merged: Dict[int, Particle] = {}

        for i in range(n):
            if i in consumed:
                continue
            for j in range(i + 1, n):
                if j in consumed:
                    continue
                if overlapping(particles[i], particles[j]):
                    merged[i] = merge_pair(particles[i], particles[j])
                    consumed.add(i)
                    consumed.add(j)
                    break

        if merged:
            particles[:] = [
                merged.get(i, p) for i, p in enumerate(particles) if i not in consumed or i in merged
            ]

        return len(merged)


__all__ = ["CollisionResolver", "merge_pair", "overlapping"]
