"""Tests for input validation module."""

import math

import pytest

from gravity_sim import Particle, Simulation
from gravity_sim.validation import (
    InvalidParameterError,
    InvalidParticleError,
    InvalidViewportError,
    ValidationError,
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


class TestViewportSizeValidation:
    """Tests for viewport size validation."""

    def test_valid_size(self):
        """Valid viewport size returns tuple."""
        w, h = validate_viewport_size([800, 600])
        assert w == 800.0
        assert h == 600.0

    def test_negative_width_raises(self):
        """Negative width raises InvalidViewportError."""
        with pytest.raises(InvalidViewportError, match="width must be positive"):
            validate_viewport_size([-100, 600])

    def test_zero_height_raises(self):
        """Zero height raises InvalidViewportError."""
        with pytest.raises(InvalidViewportError, match="height must be positive"):
            validate_viewport_size([800, 0])

    def test_infinite_width_raises(self):
        """Non-finite width raises InvalidViewportError."""
        with pytest.raises(InvalidViewportError, match="width must be positive"):
            validate_viewport_size([math.inf, 600])

    def test_single_element_raises(self):
        """Single element raises InvalidViewportError."""
        with pytest.raises(InvalidViewportError, match="must have 2 elements"):
            validate_viewport_size([800])


class TestParticleValidation:
    """Tests for particle validation."""

    def test_valid_particle(self):
        """Valid particle is returned unchanged."""
        p = Particle(1.0, 2.0, mass=3.0, radius=0.0)
        assert validate_particle(p) is p

    def test_zero_mass_raises(self):
        """Mass must be strictly positive."""
        with pytest.raises(InvalidParticleError, match="Particle 3: mass must be positive"):
            validate_particle(Particle(0, 0, mass=0.0), 3)

    def test_negative_radius_raises(self):
        with pytest.raises(InvalidParticleError, match="radius must be non-negative"):
            validate_particle(Particle(0, 0, radius=-1.0))

    def test_nan_position_raises(self):
        with pytest.raises(InvalidParticleError, match="x must be finite"):
            validate_particle(Particle(math.nan, 0))

    def test_infinite_velocity_raises(self):
        with pytest.raises(InvalidParticleError, match="vy must be finite"):
            validate_particle(Particle(0, 0, vy=math.inf))

    def test_position_validation(self):
        """Positions must be finite."""
        assert validate_position(1, 2) == (1.0, 2.0)
        with pytest.raises(InvalidParticleError, match="Position must be finite"):
            validate_position(math.inf, 0)


class TestParameterValidation:
    """Tests for numeric simulation parameters."""

    def test_theta_zero_allowed(self):
        """theta = 0 means exact summation."""
        assert validate_theta(0) == 0.0

    def test_negative_theta_raises(self):
        with pytest.raises(InvalidParameterError, match="theta must be >= 0"):
            validate_theta(-0.1)

    def test_time_step(self):
        assert validate_time_step(0.1) == 0.1
        with pytest.raises(InvalidParameterError, match="time_step must be positive"):
            validate_time_step(0)

    def test_positive(self):
        with pytest.raises(InvalidParameterError, match="G must be positive"):
            validate_positive("G", -1)

    def test_capacity(self):
        assert validate_capacity(1) == 1
        with pytest.raises(InvalidParameterError, match="capacity must be >= 1"):
            validate_capacity(0)

    def test_count(self):
        assert validate_count(0) == 0
        with pytest.raises(InvalidParameterError, match="count must be >= 0"):
            validate_count(-1)

    def test_restitution_bounds(self):
        """Restitution 0 and 1 are both valid."""
        assert validate_restitution(0) == 0.0
        assert validate_restitution(1) == 1.0
        with pytest.raises(InvalidParameterError, match="restitution must be in"):
            validate_restitution(-0.5)

    def test_restitution_nan_raises(self):
        """NaN restitution is rejected."""
        with pytest.raises(InvalidParameterError, match="restitution must be in"):
            validate_restitution(math.nan)
        with pytest.raises(InvalidParameterError):
            Simulation(wall_restitution=math.nan)

    def test_errors_are_value_errors(self):
        """All validation errors derive from ValueError."""
        assert issubclass(InvalidParameterError, ValidationError)
        assert issubclass(InvalidParticleError, ValidationError)
        assert issubclass(ValidationError, ValueError)


class TestSimulationValidation:
    """Tests that the simulation validates its configuration."""

    def test_size_validation_rejects_negative(self):
        """Simulation rejects negative viewport size."""
        with pytest.raises(InvalidViewportError):
            Simulation(size=(-100, 600))

    def test_bad_initial_particle_rejected(self):
        """Malformed particles are rejected with their index."""
        with pytest.raises(InvalidParticleError, match="Particle 1"):
            Simulation(particles=[Particle(0, 0), Particle(1, 1, mass=-2.0)])

    def test_bad_theta_rejected(self):
        with pytest.raises(InvalidParameterError):
            Simulation(theta=-1)

    def test_bad_setter_rejected(self):
        """Property setters validate too."""
        sim = Simulation()
        with pytest.raises(InvalidParameterError):
            sim.time_step = -0.1
        assert sim.time_step == 0.1

    def test_validate_method_catches_mutation(self):
        """validate() catches particles corrupted through the live list."""
        sim = Simulation(particles=[Particle(10, 10)])
        sim.particles[0].mass = 0.0
        with pytest.raises(InvalidParticleError):
            sim.validate()
