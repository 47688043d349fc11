"""
Input validation utilities for the gravity simulation.

Provides centralized validation for particles, viewport size and the
numeric parameters of a simulation. Everything that enters the physics core
passes through here first; the core itself assumes validated input.
Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Sequence


class ValidationError(ValueError):
    """Base exception for simulation validation errors."""

    pass


class InvalidViewportError(ValidationError):
    """Raised when viewport dimensions are invalid."""

    pass


class InvalidParticleError(ValidationError):
    """Raised when a particle is malformed."""

    pass


class InvalidParameterError(ValidationError):
    """Raised when a simulation parameter is out of range."""

    pass


def validate_viewport_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate viewport size dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidViewportError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidViewportError(
            f"Viewport size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if not math.isfinite(width) or width <= 0:
        raise InvalidViewportError(f"Viewport width must be positive, got {width}")
    if not math.isfinite(height) or height <= 0:
        raise InvalidViewportError(f"Viewport height must be positive, got {height}")

    return width, height


def validate_particle(particle: Any, index: int = 0) -> Any:
    """
    Validate a particle's mass, radius, position and velocity.

    Args:
        particle: Particle (or any object with the same attributes)
        index: Position in the particle list, used in error messages

    Returns:
        The particle, unchanged

    Raises:
        InvalidParticleError: If any attribute is out of range
    """
    for attr in ("x", "y", "vx", "vy"):
        value = getattr(particle, attr)
        if not math.isfinite(value):
            raise InvalidParticleError(f"Particle {index}: {attr} must be finite, got {value}")

    if not math.isfinite(particle.mass) or particle.mass <= 0:
        raise InvalidParticleError(
            f"Particle {index}: mass must be positive, got {particle.mass}"
        )
    if not math.isfinite(particle.radius) or particle.radius < 0:
        raise InvalidParticleError(
            f"Particle {index}: radius must be non-negative, got {particle.radius}"
        )

    return particle


def validate_position(x: float, y: float) -> tuple[float, float]:
    """
    Validate a requested world position.

    Raises:
        InvalidParticleError: If either coordinate is not finite
    """
    x, y = float(x), float(y)
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidParticleError(f"Position must be finite, got ({x}, {y})")
    return x, y


def validate_theta(theta: float) -> float:
    """
    Validate the Barnes-Hut opening angle.

    Raises:
        InvalidParameterError: If theta is negative or not finite
    """
    theta = float(theta)
    if not math.isfinite(theta) or theta < 0:
        raise InvalidParameterError(f"theta must be >= 0, got {theta}")
    return theta


def validate_time_step(dt: float) -> float:
    """
    Validate integration time step.

    Raises:
        InvalidParameterError: If dt is not a positive finite number
    """
    dt = float(dt)
    if not math.isfinite(dt) or dt <= 0:
        raise InvalidParameterError(f"time_step must be positive, got {dt}")
    return dt


def validate_positive(name: str, value: float) -> float:
    """Validate that a named parameter is a positive finite number."""
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value


def validate_capacity(capacity: int) -> int:
    """
    Validate quadtree leaf capacity.

    Raises:
        InvalidParameterError: If capacity < 1
    """
    if capacity < 1:
        raise InvalidParameterError(f"capacity must be >= 1, got {capacity}")
    return int(capacity)


def validate_count(count: int) -> int:
    """
    Validate a particle count.

    Raises:
        InvalidParameterError: If count < 0
    """
    if count < 0:
        raise InvalidParameterError(f"count must be >= 0, got {count}")
    return int(count)


def validate_restitution(restitution: float) -> float:
    """
    Validate a restitution coefficient.

    Raises:
        InvalidParameterError: If restitution is not a finite value in [0, 1]
    """
    restitution = float(restitution)
    if not math.isfinite(restitution) or restitution < 0 or restitution > 1:
        raise InvalidParameterError(f"restitution must be in [0, 1], got {restitution}")
    return restitution


__all__ = [
    "ValidationError",
    "InvalidViewportError",
    "InvalidParticleError",
    "InvalidParameterError",
    "validate_viewport_size",
    "validate_particle",
    "validate_position",
    "validate_theta",
    "validate_time_step",
    "validate_positive",
    "validate_capacity",
    "validate_count",
    "validate_restitution",
]
