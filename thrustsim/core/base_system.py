# thrustsim/core/base_system.py

"""Common interface for systems attached to a simulated model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UpdateInfo:
    """Per-tick information handed to every system."""

    dt: float           # simulated time since the previous tick [s]
    sim_time: float     # simulated time at the start of this tick [s]
    iterations: int     # number of unpaused ticks completed so far
    paused: bool = False


class BaseSystem:
    """Base class providing shared fields and helpers for model systems."""

    system_type = "base"

    def __init__(self, config=None):
        config = config or {}
        self.name = config.get("name", self.system_type)
        # A system only steps once it has been configured successfully
        self.enabled = False

    def configure(self, model, params, transport):
        """Bind the system to ``model``. Returns True on success."""
        raise NotImplementedError("configure must be implemented by subclasses")

    def tick(self, info, model):
        """Run once per simulation step, before physics integration."""
        raise NotImplementedError("tick must be implemented by subclasses")

    # ----- Command Helpers -----
    def command(self, action, params):
        return {"error": f"Command '{action}' not supported by this system"}

    def get_state(self):
        return {
            "name": self.name,
            "type": self.system_type,
            "enabled": self.enabled,
        }
