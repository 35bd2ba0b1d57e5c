# thrustsim/scenarios/__init__.py
"""Scene description loading."""

from .loader import ScenarioLoader, build_simulator

__all__ = ['ScenarioLoader', 'build_simulator']
