# thrustsim/model.py
"""
Minimal rigid body host for systems.

A ``Model`` is a named set of ``Link`` bodies connected by ``Joint`` s. Links
accumulate world-frame wrenches during a tick and integrate them afterwards.
Joint constraints are not enforced; a joint only names an axis and the child
link it drives.
"""

import logging

import numpy as np

from thrustsim.utils.math_utils import (
    MAX_ANGULAR_VELOCITY,
    MAX_LINEAR_VELOCITY,
    sanitize_vector,
    to_vector3,
)
from thrustsim.utils.quaternion import Quaternion

logger = logging.getLogger(__name__)


class Link:
    """A rigid body with a world pose and world-frame velocities."""

    def __init__(self, name, config=None):
        """
        Initialize a link.

        Args:
            name (str): Link name, unique inside its model
            config (dict): Optional keys ``mass`` [kg], ``inertia`` (principal
                moments [kg m^2], body frame), ``position`` [m],
                ``orientation`` (roll/pitch/yaw degrees), ``linear_velocity``,
                ``angular_velocity`` (world frame)
        """
        config = config or {}
        self.name = name
        self.mass = float(config.get("mass", 1.0))
        self.inertia = to_vector3(config.get("inertia", [1.0, 1.0, 1.0]), "inertia")
        if self.mass <= 0 or np.any(self.inertia <= 0):
            raise ValueError(f"Link {name}: mass and inertia must be positive")

        self.position = to_vector3(config.get("position", [0.0, 0.0, 0.0]), "position")
        rpy = config.get("orientation", [0.0, 0.0, 0.0])
        if isinstance(rpy, dict):
            rpy = [rpy.get("roll", 0.0), rpy.get("pitch", 0.0), rpy.get("yaw", 0.0)]
        self.orientation = Quaternion.from_euler(*to_vector3(rpy, "orientation"))
        self.linear_velocity = to_vector3(config.get("linear_velocity", [0.0, 0.0, 0.0]), "linear_velocity")
        self.angular_velocity = to_vector3(config.get("angular_velocity", [0.0, 0.0, 0.0]), "angular_velocity")

        self.force = np.zeros(3)
        self.torque = np.zeros(3)

    # ----- Queries -----
    def world_pose(self):
        """Return ``(position, orientation)`` in the world frame."""
        return self.position.copy(), self.orientation

    @property
    def world_angular_velocity(self):
        return self.angular_velocity.copy()

    # ----- Actuation -----
    def add_world_wrench(self, force, torque):
        """Accumulate a world-frame force and torque for the current tick."""
        self.force += to_vector3(force, "force")
        self.torque += to_vector3(torque, "torque")

    def clear_wrench(self):
        self.force = np.zeros(3)
        self.torque = np.zeros(3)

    def integrate(self, dt):
        """
        Apply the accumulated wrench over ``dt`` and clear it.

        Semi-implicit Euler: velocities first, then pose. The gyroscopic
        term omega x (I omega) is neglected.
        """
        self.linear_velocity = self.linear_velocity + (self.force / self.mass) * dt

        # Angular acceleration in body frame: alpha = I^-1 * tau
        torque_body = self.orientation.conjugate().rotate_vector(self.torque)
        alpha_world = self.orientation.rotate_vector(torque_body / self.inertia)
        self.angular_velocity = self.angular_velocity + alpha_world * dt

        self.linear_velocity, _ = sanitize_vector(
            self.linear_velocity, MAX_LINEAR_VELOCITY, "linear velocity", self.name)
        self.angular_velocity, _ = sanitize_vector(
            self.angular_velocity, MAX_ANGULAR_VELOCITY, "angular velocity", self.name)

        self.position = self.position + self.linear_velocity * dt
        self.orientation = self.orientation.integrate(self.angular_velocity, dt)
        self.clear_wrench()

    def get_state(self):
        roll, pitch, yaw = self.orientation.to_euler()
        return {
            "position": self.position.tolist(),
            "orientation": {"roll": roll, "pitch": pitch, "yaw": yaw},
            "linear_velocity": self.linear_velocity.tolist(),
            "angular_velocity": self.angular_velocity.tolist(),
        }


class Joint:
    """Names the axis (in the child link frame) a system acts along."""

    def __init__(self, name, child, parent=None, axis=(0.0, 0.0, 1.0)):
        self.name = name
        self.child = child
        self.parent = parent
        self.axis = to_vector3(axis, "axis")


class Model:
    """A named collection of links and joints."""

    def __init__(self, name, links=None, joints=None):
        self.name = name
        self.links = {}
        self.joints = {}
        for link in links or []:
            self.add_link(link)
        for joint in joints or []:
            self.add_joint(joint)

    @classmethod
    def from_config(cls, config):
        """
        Build a model from a scenario entry.

        Args:
            config (dict): ``name``, ``links`` (list of dicts with ``name``)
                and ``joints`` (list of dicts with ``name``, ``child``,
                optional ``parent`` and ``axis``)
        """
        model = cls(config["name"])
        for link_cfg in config.get("links", []):
            model.add_link(Link(link_cfg["name"], link_cfg))
        for joint_cfg in config.get("joints", []):
            model.add_joint(Joint(
                joint_cfg["name"],
                joint_cfg["child"],
                parent=joint_cfg.get("parent"),
                axis=joint_cfg.get("axis", [0.0, 0.0, 1.0]),
            ))
        return model

    def add_link(self, link):
        if link.name in self.links:
            raise ValueError(f"Duplicate link [{link.name}] in model [{self.name}]")
        self.links[link.name] = link
        return link

    def add_joint(self, joint):
        if joint.name in self.joints:
            raise ValueError(f"Duplicate joint [{joint.name}] in model [{self.name}]")
        self.joints[joint.name] = joint
        return joint

    def joint_by_name(self, name):
        return self.joints.get(name)

    def link_by_name(self, name):
        return self.links.get(name)

    def integrate(self, dt):
        for link in self.links.values():
            link.integrate(dt)

    def get_state(self):
        return {
            "name": self.name,
            "links": {name: link.get_state() for name, link in self.links.items()},
        }
