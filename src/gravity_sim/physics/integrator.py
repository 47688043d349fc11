"""
Time integration and viewport boundary handling.

Particles are advanced with semi-implicit Euler (see Particle.advance) and
then bounced off the viewport edges, losing part of their speed.
"""

from __future__ import annotations

from typing import Sequence

from ..types import Particle

# Fraction of the normal velocity kept after bouncing off a viewport edge
WALL_RESTITUTION = 0.8


def reflect_at_bounds(
    particle: Particle,
    width: float,
    height: float,
    restitution: float = WALL_RESTITUTION,
) -> bool:
    """
    Bounce a particle that left the [0, width] x [0, height] viewport.

    The velocity component on the offending axis is reversed and scaled by
    `restitution`, and the position is clamped back onto the edge.

    Returns:
        True if the particle was reflected on either axis.
    """
    reflected = False

    if particle.x < 0 or particle.x > width:
        particle.vx = -particle.vx * restitution
        particle.x = max(0.0, min(particle.x, width))
        reflected = True

    if particle.y < 0 or particle.y > height:
        particle.vy = -particle.vy * restitution
        particle.y = max(0.0, min(particle.y, height))
        reflected = True

    return reflected


def integrate(
    particles: Sequence[Particle],
    dt: float,
    width: float,
    height: float,
    restitution: float = WALL_RESTITUTION,
) -> int:
    """
    Advance every particle by `dt` and apply boundary reflection.

    Returns:
        Number of particles that bounced off the viewport
    """
    reflections = 0
    for particle in particles:
        particle.advance(dt)
        if reflect_at_bounds(particle, width, height, restitution):
            reflections += 1
    return reflections


__all__ = ["WALL_RESTITUTION", "reflect_at_bounds", "integrate"]
