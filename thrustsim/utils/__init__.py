# thrustsim/utils/__init__.py
"""Utility modules for the thruster simulation."""

from .math_utils import clamp, fix_nan, is_valid_number, normalize_vector, sign
from .quaternion import Quaternion
from .errors import (
    ConfigurationError,
    JointNotFoundError,
    LinkNotFoundError,
    MissingParameterError,
    ScenarioError,
    ThrusterError,
)

__all__ = [
    'clamp',
    'fix_nan',
    'is_valid_number',
    'normalize_vector',
    'sign',
    'Quaternion',
    'ConfigurationError',
    'JointNotFoundError',
    'LinkNotFoundError',
    'MissingParameterError',
    'ScenarioError',
    'ThrusterError',
]
