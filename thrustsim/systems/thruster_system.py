# thrustsim/systems/thruster_system.py
"""Propeller thruster actuator.

Commanded thrust arrives asynchronously on the transport and is stored in a
lock-guarded scalar. Once per tick the thruster:
- applies the commanded thrust directly as a force along the spin axis
- servoes the propeller's angular rate toward the rate implied by that
  thrust with a PID, and applies the PID output as a torque along the axis
"""

from collections import namedtuple
from collections.abc import Mapping
import logging
import threading

import numpy as np

from thrustsim.config import ThrusterConfig
from thrustsim.core.base_system import BaseSystem
from thrustsim.core.event_bus import as_valid_topic
from thrustsim.systems.pid import PID
from thrustsim.systems.thrust_model import ThrustModel
from thrustsim.utils.errors import (
    ConfigurationError,
    JointNotFoundError,
    LinkNotFoundError,
)
from thrustsim.utils.math_utils import clamp, fix_nan, normalize_vector

logger = logging.getLogger(__name__)

# Rate error [rad/s] below which no corrective torque is applied
ANGULAR_ERROR_DEADBAND = 0.1

# Every alias is routed to the same handler. cmd_pos is kept for backwards
# compatibility; the commands are not positions.
COMMAND_TOPIC_SUFFIXES = ("cmd_pos", "cmd_thrust")

Wrench = namedtuple("Wrench", ["force", "torque"])


def command_topic(namespace, joint_name, suffix="cmd_thrust"):
    """Topic a thruster listens on for thrust commands."""
    return as_valid_topic(f"/model/{namespace}/joint/{joint_name}/{suffix}")


def _extract_command_value(message):
    """Pull the scalar out of a transport message; unreadable input is NaN."""
    payload = message
    while isinstance(payload, Mapping):
        payload = payload.get("data")
    try:
        return float(payload)
    except (TypeError, ValueError):
        return float("nan")


class ThrusterSystem(BaseSystem):
    """Thrust-commanded propeller with closed-loop rate control."""

    system_type = "thruster"

    def __init__(self, config=None):
        super().__init__(config)
        # Guards _thrust only; never held across the control law
        self._lock = threading.Lock()
        self._thrust = 0.0

        self.config = None
        self.thrust_model = None
        self.rpm_controller = PID()
        self.link_name = None
        self.joint_axis = np.array([0.0, 0.0, 1.0])
        self.topics = []
        self._link_lost = False

        # Telemetry, written by the tick context only
        self.status = "unconfigured"
        self.target_rate = 0.0
        self.measured_rate = 0.0
        self.last_torque = 0.0
        self.last_force = 0.0

    def configure(self, model, params, transport):
        """Validate parameters, bind to the joint's child link and subscribe.

        Args:
            model: Owning model, used for the joint/link lookup and the
                default namespace
            params (dict): Thruster parameters
            transport: EventBus delivering thrust commands

        Returns:
            bool: True if the thruster is now enabled. On any configuration
            error the error is logged and the thruster stays disabled.
        """
        if self.enabled:
            logger.warning(f"Thruster [{self.name}] is already configured, ignoring")
            return False

        try:
            config = ThrusterConfig.from_params(params, default_namespace=model.name)

            joint = model.joint_by_name(config.joint_name)
            if joint is None:
                raise JointNotFoundError(config.joint_name, model.name)
            if model.link_by_name(joint.child) is None:
                raise LinkNotFoundError(joint.child, model.name)
            if np.linalg.norm(joint.axis) < 1e-12:
                raise ConfigurationError(f"Joint [{joint.name}] has a zero-length axis")

            thrust_model = ThrustModel.from_config(config)
        except ConfigurationError as e:
            logger.error(str(e))
            return False

        logger.debug(f"Setting fluid density to: {config.fluid_density}")

        self.config = config
        self.thrust_model = thrust_model
        self.link_name = joint.child
        self.joint_axis = normalize_vector(joint.axis)

        # Controller output bounds are the rates matching the thrust limits
        self.rpm_controller.init(
            config.p_gain,
            config.i_gain,
            config.d_gain,
            config.i_max,
            config.i_min,
            thrust_model.rate_from_thrust(config.max_thrust_cmd),
            thrust_model.rate_from_thrust(config.min_thrust_cmd),
            0.0,
        )

        with self._lock:
            self._thrust = clamp(0.0, config.min_thrust_cmd, config.max_thrust_cmd)

        self.enabled = True
        self.status = "idle"

        self.topics = [command_topic(config.namespace, config.joint_name, suffix)
                       for suffix in COMMAND_TOPIC_SUFFIXES]
        for topic in self.topics:
            transport.subscribe(topic, self.on_cmd_thrust)
        logger.info(f"Thruster listening to commands in [{self.topics[-1]}]")
        return True

    # ----- Command intake (any thread) -----
    def on_cmd_thrust(self, message):
        """Store a thrust command: NaN becomes 0, then clamp to the limits."""
        if not self.enabled:
            return

        value = _extract_command_value(message)
        thrust = clamp(fix_nan(value), self.config.min_thrust_cmd, self.config.max_thrust_cmd)
        if thrust != value:
            logger.debug(f"Thruster [{self.name}] command {value} sanitized to {thrust}")

        with self._lock:
            self._thrust = thrust

    @property
    def desired_thrust(self):
        with self._lock:
            return self._thrust

    # ----- Control loop (tick context) -----
    def step(self, dt, measured_rate, axis, paused=False):
        """
        Run the control law once.

        Args:
            dt (float): Time since the previous step [s]
            measured_rate (float): Propeller angular rate about ``axis`` [rad/s]
            axis (array-like): World-frame unit spin axis
            paused (bool): Simulation paused; nothing is computed

        Returns:
            Wrench: Force and torque to apply, or None when the thruster is
            disabled or the simulation is paused.
        """
        if not self.enabled:
            return None
        if paused:
            self.status = "paused"
            return None

        with self._lock:
            desired_thrust = self._thrust

        target_rate = self.thrust_model.rate_from_thrust(desired_thrust)
        angular_error = measured_rate - target_rate

        torque = 0.0
        if abs(angular_error) > ANGULAR_ERROR_DEADBAND:
            torque = self.rpm_controller.update(angular_error, dt)
            self.status = "active"
        else:
            self.status = "deadband"

        unit_vector = np.asarray(axis, dtype=float)
        self.target_rate = target_rate
        self.measured_rate = measured_rate
        self.last_torque = torque
        self.last_force = desired_thrust

        return Wrench(unit_vector * desired_thrust, unit_vector * torque)

    def tick(self, info, model):
        """Read the driven link's state, step the controller and apply the wrench."""
        if not self.enabled:
            return None
        if info.paused:
            self.status = "paused"
            return None

        link = model.link_by_name(self.link_name)
        if link is None:
            if not self._link_lost:
                logger.warning(f"Thruster [{self.name}] lost link [{self.link_name}]")
                self._link_lost = True
            return None
        self._link_lost = False

        _, orientation = link.world_pose()
        unit_vector = orientation.rotate_vector(self.joint_axis)
        measured_rate = float(np.dot(link.world_angular_velocity, unit_vector))

        wrench = self.step(info.dt, measured_rate, unit_vector)
        link.add_world_wrench(wrench.force, wrench.torque)
        return wrench

    # ----- Commands -----
    def command(self, action, params):
        if action == "set_thrust":
            if not self.enabled:
                return {"error": "Thruster is not configured"}
            self.on_cmd_thrust(params.get("thrust"))
            return {"status": "Thrust command accepted", "desired_thrust": self.desired_thrust}
        if action == "status":
            return self.get_state()
        return super().command(action, params)

    def get_state(self):
        state = super().get_state()
        state.update({
            "status": self.status,
            "desired_thrust": self.desired_thrust,
            "target_rate": self.target_rate,
            "measured_rate": self.measured_rate,
            "torque": self.last_torque,
            "force": self.last_force,
            "topics": list(self.topics),
            "config": self.config.to_dict() if self.config else None,
        })
        return state
