"""
Initial particle configurations.

These are setup-time helpers and the only source of randomness in the
package. Pass a seeded ``random.Random`` for reproducible systems.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from .types import Particle

# Default gravitational constant, scaled for screen units
G = 6.6743e-3

# Mass used to derive orbital speeds for planets and clicked particles
REFERENCE_MASS = 2000.0

CENTRAL_MASS = 5000.0
CENTRAL_RADIUS = 20.0

# Offset of each binary star from the center
STAR_OFFSET = 100.0


def orbital_velocity(
    dx: float,
    dy: float,
    G: float = G,
    reference_mass: float = REFERENCE_MASS,
    factor: float = 0.7,
) -> Tuple[float, float]:
    """
    Velocity perpendicular to the radius vector (dx, dy).

    Speed is sqrt(G * reference_mass / distance) * factor; factor 1
    gives a circular orbit around a fixed reference mass.

    Returns:
        (vx, vy), or (0, 0) when (dx, dy) is the origin
    """
    distance = math.sqrt(dx * dx + dy * dy)
    if distance == 0:
        return 0.0, 0.0

    speed = math.sqrt(G * reference_mass / distance) * factor
    return -dy / distance * speed, dx / distance * speed


def binary_star_system(
    center: Tuple[float, float],
    rng: Optional[random.Random] = None,
    G: float = G,
    planets: int = 5,
) -> List[Particle]:
    """
    Two stars orbiting each other plus a few light planets further out.

    Args:
        center: Center of the system
        rng: Random source for planet placement
        G: Gravitational constant used for planet speeds
        planets: Number of planets

    Returns:
        New particle list, stars first
    """
    rng = rng or random.Random()
    cx, cy = center

    particles = [
        Particle(cx - STAR_OFFSET, cy, vx=0.0, vy=1.0, mass=1000.0, radius=15.0),
        Particle(cx + STAR_OFFSET, cy, vx=0.0, vy=-1.0, mass=1000.0, radius=15.0),
    ]

    for _ in range(planets):
        angle = rng.random() * 2 * math.pi
        distance = STAR_OFFSET * 2 + rng.random() * 100
        dx = math.cos(angle) * distance
        dy = math.sin(angle) * distance
        # Clockwise on screen, opposite to orbital_velocity
        vx, vy = orbital_velocity(dx, dy, G, REFERENCE_MASS)
        particles.append(
            Particle(
                cx + dx,
                cy + dy,
                vx=-vx,
                vy=-vy,
                mass=10.0,
                radius=5.0,
            )
        )

    return particles


def random_system(
    center: Tuple[float, float],
    count: int = 50,
    rng: Optional[random.Random] = None,
    G: float = G,
) -> List[Particle]:
    """
    A heavy central body surrounded by `count` small orbiting bodies.

    Each small body gets a random radius in [2, 7], mass radius^2 * 0.1
    and a roughly circular speed (0.8 to 1.2 of circular).
    """
    rng = rng or random.Random()
    cx, cy = center

    particles = [Particle(cx, cy, mass=CENTRAL_MASS, radius=CENTRAL_RADIUS)]

    for _ in range(count):
        angle = rng.random() * 2 * math.pi
        distance = 50 + rng.random() * 300
        dx = math.cos(angle) * distance
        dy = math.sin(angle) * distance
        vx, vy = orbital_velocity(dx, dy, G, CENTRAL_MASS, 0.8 + rng.random() * 0.4)
        radius = 2 + rng.randint(0, 5)
        particles.append(
            Particle(
                cx + dx,
                cy + dy,
                vx=-vx,
                vy=-vy,
                mass=radius * radius * 0.1,
                radius=float(radius),
            )
        )

    return particles


__all__ = [
    "G",
    "REFERENCE_MASS",
    "CENTRAL_MASS",
    "CENTRAL_RADIUS",
    "STAR_OFFSET",
    "orbital_velocity",
    "binary_star_system",
    "random_system",
]
