import logging
import math

from thrustsim.config import DEFAULT_DT
from thrustsim.core.base_system import UpdateInfo
from thrustsim.core.event_bus import EventBus
from thrustsim.systems import get_system_class
from thrustsim.utils.errors import ConfigurationError, invalid_range_message

logger = logging.getLogger(__name__)

class Simulator:
    """
    Fixed-step simulator that owns models, their systems and the transport.
    """

    def __init__(self, dt=DEFAULT_DT, transport=None):
        """
        Initialize the simulator

        Args:
            dt (float): Simulation time step in seconds
            transport (EventBus, optional): Message transport shared with
                command publishers. A new one is created if omitted.
        """
        if not (dt > 0 and math.isfinite(dt)):
            raise ConfigurationError(invalid_range_message("dt", min_val=0, current_val=dt))
        self.models = {}
        self.systems = []
        self.transport = transport or EventBus()
        self.dt = dt
        self.running = False
        self.paused = False
        self.time = 0.0
        self.iterations = 0

    def add_model(self, model):
        """
        Add a model to the simulation

        Args:
            model (Model): Model to add

        Returns:
            Model: The added model
        """
        if model.name in self.models:
            raise ValueError(f"Duplicate model [{model.name}]")
        self.models[model.name] = model
        return model

    def get_model(self, model_name):
        return self.models.get(model_name)

    def add_system(self, model_name, system_type, params=None):
        """
        Create a system, attach it to a model and configure it

        A system whose configuration fails is still attached, disabled.

        Args:
            model_name (str): Name of the owning model
            system_type (str): Registered system type, e.g. ``"thruster"``
            params (dict): System parameters

        Returns:
            BaseSystem: The created system, or None if the model or the
            system type is unknown
        """
        model = self.models.get(model_name)
        if model is None:
            logger.error(f"Unknown model [{model_name}], cannot attach {system_type}")
            return None

        system_class = get_system_class(system_type)
        if system_class is None:
            logger.error(f"Unknown system type: {system_type}")
            return None

        params = params or {}
        system = system_class(params)
        if system.configure(model, params, self.transport):
            logger.info(f"Loaded system: {system_type} on model [{model_name}]")
        else:
            logger.error(f"System {system_type} on model [{model_name}] is disabled")
        self.systems.append((model, system))
        return system

    def get_systems(self, system_type=None):
        """Return attached systems, optionally filtered by type."""
        return [system for _, system in self.systems
                if system_type is None or system.system_type == system_type]

    def start(self):
        if self.running:
            return False
        self.running = True
        logger.info(f"Simulation started with {len(self.models)} models and {len(self.systems)} systems")
        return True

    def stop(self):
        if not self.running:
            return False
        self.running = False
        logger.info(f"Simulation stopped at t={self.time:.3f}s")
        return True

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def tick(self):
        """
        Run a single simulation tick

        Systems run first and queue wrenches on their links; links then
        integrate. A paused tick still notifies systems (so they can skip)
        but neither integrates nor advances time.

        Returns:
            float: Simulation time after the tick
        """
        paused = self.paused
        info = UpdateInfo(dt=self.dt, sim_time=self.time, iterations=self.iterations, paused=paused)

        for model, system in self.systems:
            system.tick(info, model)

        if paused:
            return self.time

        for model in self.models.values():
            model.integrate(self.dt)

        self.iterations += 1
        self.time = self.iterations * self.dt
        return self.time

    def run(self, duration):
        """
        Run the simulation for ``duration`` simulated seconds

        Args:
            duration (float): Simulated time to advance

        Returns:
            float: Simulation time after the run
        """
        if not self.running:
            self.start()
        for _ in range(int(round(duration / self.dt))):
            self.tick()
        return self.time

    def get_state(self):
        return {
            "time": self.time,
            "iterations": self.iterations,
            "paused": self.paused,
            "running": self.running,
            "models": {name: model.get_state() for name, model in self.models.items()},
            "systems": [dict(system.get_state(), model=model.name) for model, system in self.systems],
        }
