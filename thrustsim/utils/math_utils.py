# thrustsim/utils/math_utils.py
"""Scalar and vector helpers with NaN/Inf guards."""

import math
import logging

import numpy as np

logger = logging.getLogger(__name__)

# Bounds used when recovering a rigid body state that blew up
MAX_LINEAR_VELOCITY = 1e6    # m/s
MAX_ANGULAR_VELOCITY = 1e5   # rad/s


def is_valid_number(value):
    """Check if a number is finite and not NaN.

    Args:
        value: Number to check

    Returns:
        bool: True if value is a valid finite number
    """
    return not (math.isnan(value) or math.isinf(value))


def fix_nan(value, default=0.0):
    """Replace NaN with ``default``; infinities pass through untouched."""
    if math.isnan(value):
        return default
    return value


def clamp(value, min_value, max_value):
    """Clamp a value between min and max.

    Args:
        value: Value to clamp
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_value, min(max_value, value))


def sign(value):
    """Return 1.0 for strictly positive values and -1.0 otherwise."""
    return 1.0 if value > 0 else -1.0


def to_vector3(value, name="vector"):
    """Convert a list-like to a float numpy 3-vector.

    Raises:
        ValueError: if the input does not have exactly three components
    """
    vec = np.array(value, dtype=float).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got {len(vec)}")
    return vec


def normalize_vector(vector):
    """Return ``vector`` scaled to unit length.

    A zero-length vector is returned unchanged (all zeros).
    """
    vec = np.array(vector, dtype=float)
    mag = np.linalg.norm(vec)
    if mag < 1e-12:
        return vec
    return vec / mag


def sanitize_vector(vector, max_magnitude, label="vector", owner="unknown"):
    """Recover a state vector from NaN/Inf and clamp its magnitude.

    Args:
        vector (np.ndarray): Vector to check
        max_magnitude (float): Largest allowed norm
        label (str): What the vector is, for logging
        owner (str): Name of the body owning it, for logging

    Returns:
        tuple: (sanitized_vector, recovered)
    """
    vec = np.array(vector, dtype=float)
    if not np.all(np.isfinite(vec)):
        logger.error(f"{owner}: invalid {label} detected, resetting to zero")
        return np.zeros(3), True

    mag = np.linalg.norm(vec)
    if mag > max_magnitude:
        logger.warning(f"{owner}: {label} magnitude {mag} exceeds bounds, clamping")
        return vec * (max_magnitude / mag), True

    return vec, False
