# thrustsim/systems/__init__.py
"""
Systems that can be attached to a model.
"""

def get_system_class(system_type):
    """
    Get the appropriate system class for a given system type

    Args:
        system_type (str): Type of system to create

    Returns:
        class: The system class, or None if not found
    """
    system_map = {
        "thruster": ThrusterSystem,
    }

    return system_map.get(system_type)

# Import system implementations
from thrustsim.systems.pid import PID
from thrustsim.systems.thrust_model import ThrustModel
from thrustsim.systems.thruster_system import ThrusterSystem, Wrench
__all__ = [
    'PID',
    'ThrustModel',
    'ThrusterSystem',
    'Wrench',
    'get_system_class',
]
