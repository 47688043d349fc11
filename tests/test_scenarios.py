"""Tests for initial particle systems."""

import math
import random

import pytest

from gravity_sim.metrics import total_momentum
from gravity_sim.scenarios import (
    CENTRAL_MASS,
    G,
    binary_star_system,
    orbital_velocity,
    random_system,
)


class TestOrbitalVelocity:
    """Tests for orbital_velocity."""

    def test_perpendicular(self):
        """Velocity is perpendicular to the radius vector."""
        vx, vy = orbital_velocity(30.0, 40.0)
        assert vx * 30.0 + vy * 40.0 == pytest.approx(0.0, abs=1e-12)

    def test_speed(self):
        """Speed is 0.7 of circular around the reference mass."""
        vx, vy = orbital_velocity(200.0, 0.0)
        assert vx == pytest.approx(0.0)
        assert vy == pytest.approx(math.sqrt(G * 2000.0 / 200.0) * 0.7)
        assert vy == pytest.approx(0.18084, abs=1e-4)

    def test_factor(self):
        vx, vy = orbital_velocity(0.0, -50.0, G=1.0, reference_mass=50.0, factor=1.0)
        assert (vx, vy) == pytest.approx((1.0, 0.0))

    def test_origin(self):
        """No direction at the origin."""
        assert orbital_velocity(0.0, 0.0) == (0.0, 0.0)


class TestBinaryStarSystem:
    """Tests for the binary star scenario."""

    def test_stars(self):
        """Two 1000-mass stars with opposite velocities."""
        particles = binary_star_system((400.0, 300.0), random.Random(0))
        star1, star2 = particles[:2]

        assert (star1.x, star1.y) == (300.0, 300.0)
        assert (star2.x, star2.y) == (500.0, 300.0)
        assert (star1.vx, star1.vy) == (0.0, 1.0)
        assert (star2.vx, star2.vy) == (0.0, -1.0)
        assert star1.mass == star2.mass == 1000.0
        assert star1.radius == star2.radius == 15.0

    def test_stars_have_zero_momentum(self):
        px, py = total_momentum(binary_star_system((0.0, 0.0), planets=0))
        assert (px, py) == (0.0, 0.0)

    def test_planets(self):
        """Planets orbit between 200 and 300 from the center."""
        particles = binary_star_system((400.0, 300.0), random.Random(1), planets=8)
        assert len(particles) == 10

        for p in particles[2:]:
            d = math.hypot(p.x - 400.0, p.y - 300.0)
            assert 200.0 <= d <= 300.0
            assert p.mass == 10.0
            assert p.radius == 5.0
            # Tangential motion
            assert (p.x - 400.0) * p.vx + (p.y - 300.0) * p.vy == pytest.approx(0.0, abs=1e-9)

    def test_planets_orbit_clockwise(self):
        """Planet velocity is the reverse of orbital_velocity at 70% of circular."""
        particles = binary_star_system((400.0, 300.0), random.Random(5), planets=4)

        for p in particles[2:]:
            vx, vy = orbital_velocity(p.x - 400.0, p.y - 300.0)
            assert p.vx == pytest.approx(-vx)
            assert p.vy == pytest.approx(-vy)

    def test_seeded_reproducible(self):
        a = binary_star_system((0.0, 0.0), random.Random(7))
        b = binary_star_system((0.0, 0.0), random.Random(7))
        assert a == b


class TestRandomSystem:
    """Tests for the random scenario."""

    def test_central_body(self):
        """The first particle is the heavy central body at rest."""
        particles = random_system((400.0, 300.0), 10, random.Random(0))
        center = particles[0]

        assert len(particles) == 11
        assert (center.x, center.y) == (400.0, 300.0)
        assert center.mass == CENTRAL_MASS
        assert (center.vx, center.vy) == (0.0, 0.0)

    def test_orbiting_bodies(self):
        """Orbiting bodies respect the radius, mass and distance ranges."""
        particles = random_system((0.0, 0.0), 100, random.Random(3))

        for p in particles[1:]:
            assert 2.0 <= p.radius <= 7.0
            assert p.radius == int(p.radius)
            assert p.mass == pytest.approx(p.radius**2 * 0.1)

            d = math.hypot(p.x, p.y)
            assert 50.0 <= d <= 350.0

            circular = math.sqrt(G * CENTRAL_MASS / d)
            speed = math.hypot(p.vx, p.vy)
            assert 0.8 * circular - 1e-9 <= speed <= 1.2 * circular + 1e-9

    def test_empty(self):
        """count=0 yields only the central body."""
        assert len(random_system((0.0, 0.0), 0)) == 1
