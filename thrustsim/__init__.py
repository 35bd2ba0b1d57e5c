# thrustsim/__init__.py
"""
Propeller thruster actuator for rigid body simulations.
Thrust commands arrive on a message transport; a PID servoes the propeller
rate every simulation tick.
"""

from thrustsim.core.base_system import BaseSystem, UpdateInfo
from thrustsim.core.event_bus import EventBus
from thrustsim.config import SimConfig, ThrusterConfig
from thrustsim.model import Joint, Link, Model
from thrustsim.simulator import Simulator
from thrustsim.systems.thruster_system import ThrusterSystem, Wrench

__version__ = "0.1.0"

__all__ = [
    'BaseSystem',
    'UpdateInfo',
    'EventBus',
    'SimConfig',
    'ThrusterConfig',
    'Joint',
    'Link',
    'Model',
    'Simulator',
    'ThrusterSystem',
    'Wrench',
]
