"""
Unit quaternions for rigid body orientation.

Used to rotate a thruster's joint axis from the link frame into the world
frame and to integrate link orientation from angular velocity.

References:
- https://en.wikipedia.org/wiki/Quaternions_and_spatial_rotation
- https://en.wikipedia.org/wiki/Conversion_between_quaternions_and_Euler_angles
"""

import math
import numpy as np
from typing import Tuple, Union

VectorLike = Union[np.ndarray, Tuple[float, float, float], list]


class Quaternion:
    """
    Rotation quaternion (w, x, y, z).

    Attributes:
        w (float): Scalar component
        x (float): i component
        y (float): j component
        z (float): k component
    """

    def __init__(self, w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.w = float(w)
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def identity(cls) -> 'Quaternion':
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_euler(cls, roll: float, pitch: float, yaw: float) -> 'Quaternion':
        """
        Create a quaternion from roll/pitch/yaw in degrees.

        Rotations are applied in ZYX order (yaw, then pitch, then roll),
        the same convention SDF poses use.

        Args:
            roll: Rotation about X (degrees)
            pitch: Rotation about Y (degrees)
            yaw: Rotation about Z (degrees)
        """
        cr = math.cos(math.radians(roll) * 0.5)
        sr = math.sin(math.radians(roll) * 0.5)
        cp = math.cos(math.radians(pitch) * 0.5)
        sp = math.sin(math.radians(pitch) * 0.5)
        cy = math.cos(math.radians(yaw) * 0.5)
        sy = math.sin(math.radians(yaw) * 0.5)

        return cls(
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        )

    @classmethod
    def from_axis_angle(cls, axis: VectorLike, angle: float) -> 'Quaternion':
        """
        Create a quaternion rotating ``angle`` degrees about ``axis``.

        A zero axis yields the identity rotation.
        """
        axis = np.array(axis, dtype=float)
        magnitude = np.linalg.norm(axis)
        if magnitude < 1e-10:
            return cls.identity()

        axis = axis / magnitude
        half_angle = math.radians(angle) * 0.5
        s = math.sin(half_angle)
        return cls(math.cos(half_angle), axis[0] * s, axis[1] * s, axis[2] * s)

    def to_euler(self) -> Tuple[float, float, float]:
        """Return (roll, pitch, yaw) in degrees."""
        sinr_cosp = 2 * (self.w * self.x + self.y * self.z)
        cosr_cosp = 1 - 2 * (self.x * self.x + self.y * self.y)
        roll = math.degrees(math.atan2(sinr_cosp, cosr_cosp))

        sinp = 2 * (self.w * self.y - self.z * self.x)
        if abs(sinp) >= 1:
            pitch = math.degrees(math.copysign(math.pi / 2, sinp))
        else:
            pitch = math.degrees(math.asin(sinp))

        siny_cosp = 2 * (self.w * self.z + self.x * self.y)
        cosy_cosp = 1 - 2 * (self.y * self.y + self.z * self.z)
        yaw = math.degrees(math.atan2(siny_cosp, cosy_cosp))

        return (roll, pitch, yaw)

    def magnitude(self) -> float:
        return math.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)

    def normalized(self) -> 'Quaternion':
        """
        Return a unit-length copy.

        A degenerate (near zero) quaternion normalizes to identity.
        """
        magnitude = self.magnitude()
        if magnitude < 1e-10:
            return Quaternion.identity()
        return Quaternion(
            self.w / magnitude,
            self.x / magnitude,
            self.y / magnitude,
            self.z / magnitude
        )

    def conjugate(self) -> 'Quaternion':
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':
        """Hamilton product: ``q1 * q2`` applies q2 first, then q1."""
        w = self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z
        x = self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y
        y = self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x
        z = self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w
        return Quaternion(w, x, y, z)

    def rotate_vector(self, vector: VectorLike) -> np.ndarray:
        """
        Rotate a 3D vector by this quaternion (v' = q v q*).

        Args:
            vector: Vector to rotate as (x, y, z)

        Returns:
            Rotated vector as numpy array
        """
        v = np.array(vector, dtype=float)
        q = self.normalized()
        result = q * Quaternion(0.0, v[0], v[1], v[2]) * q.conjugate()
        return np.array([result.x, result.y, result.z])

    def integrate(self, angular_velocity: VectorLike, dt: float) -> 'Quaternion':
        """
        Advance the orientation by a world-frame angular velocity.

        Uses the exact rotation for a constant rate over ``dt``
        (q' = exp(omega * dt / 2) * q), so large steps stay unit length.

        Args:
            angular_velocity: World-frame angular velocity (rad/s)
            dt: Time step (s)

        Returns:
            New orientation quaternion
        """
        omega = np.array(angular_velocity, dtype=float)
        rate = np.linalg.norm(omega)
        if rate * dt < 1e-12:
            return self.normalized()
        delta = Quaternion.from_axis_angle(omega / rate, math.degrees(rate * dt))
        return (delta * self).normalized()

    def is_unit(self, epsilon: float = 1e-6) -> bool:
        return abs(self.magnitude() - 1.0) < epsilon

    def __eq__(self, other: object) -> bool:
        """Component-wise equality within 1e-6 (q and -q compare unequal)."""
        if not isinstance(other, Quaternion):
            return False
        epsilon = 1e-6
        return (abs(self.w - other.w) < epsilon and
                abs(self.x - other.x) < epsilon and
                abs(self.y - other.y) < epsilon and
                abs(self.z - other.z) < epsilon)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Quaternion(w={self.w:.4f}, x={self.x:.4f}, y={self.y:.4f}, z={self.z:.4f})"
