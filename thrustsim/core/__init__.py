# thrustsim/core/__init__.py
"""Core building blocks shared by all systems."""

from thrustsim.core.base_system import BaseSystem, UpdateInfo
from thrustsim.core.event_bus import EventBus, as_valid_topic

__all__ = ['BaseSystem', 'UpdateInfo', 'EventBus', 'as_valid_topic']
