"""
Configuration for thrusters and for the simulation host.

``ThrusterConfig`` is parsed once from a plain mapping (a scenario entry or
an SDF-like dict) and is immutable afterwards. ``SimConfig`` carries host
settings and can be built from the environment.
"""

from dataclasses import dataclass, asdict
from typing import Any, Mapping, Optional
import math
import os

from thrustsim.utils.errors import (
    ConfigurationError,
    MissingParameterError,
    invalid_range_message,
)

# Thruster defaults
DEFAULT_FLUID_DENSITY = 1000.0   # kg/m^3, water
DEFAULT_MAX_THRUST_CMD = 1000.0  # N
DEFAULT_MIN_THRUST_CMD = -1000.0 # N
DEFAULT_P_GAIN = 0.1
DEFAULT_I_GAIN = 0.0
DEFAULT_D_GAIN = 0.0
DEFAULT_I_MAX = 1.0
DEFAULT_I_MIN = -1.0

# Simulation defaults
DEFAULT_DT = 0.01                # 100 Hz physics
DEFAULT_LOG_LEVEL = "INFO"

REQUIRED_THRUSTER_PARAMS = ("joint_name", "thrust_coefficient", "propeller_diameter")


def _get_float(params, key, default=None):
    """Read ``key`` as a finite float, falling back to ``default`` if absent."""
    if key not in params or params[key] is None:
        if default is None:
            raise MissingParameterError(key)
        return float(default)
    try:
        value = float(params[key])
    except (TypeError, ValueError):
        raise ConfigurationError(invalid_range_message(key, current_val=params[key]))
    if not math.isfinite(value):
        raise ConfigurationError(invalid_range_message(key, current_val=value))
    return value


def _require_positive(key, value):
    if value <= 0:
        raise ConfigurationError(invalid_range_message(key, min_val=0, current_val=value))


@dataclass(frozen=True)
class ThrusterConfig:
    """Physical parameters and controller gains of a single thruster."""

    joint_name: str
    thrust_coefficient: float
    propeller_diameter: float
    namespace: str
    fluid_density: float = DEFAULT_FLUID_DENSITY
    max_thrust_cmd: float = DEFAULT_MAX_THRUST_CMD
    min_thrust_cmd: float = DEFAULT_MIN_THRUST_CMD
    p_gain: float = DEFAULT_P_GAIN
    i_gain: float = DEFAULT_I_GAIN
    d_gain: float = DEFAULT_D_GAIN
    i_max: float = DEFAULT_I_MAX
    i_min: float = DEFAULT_I_MIN

    @classmethod
    def from_params(cls, params: Mapping[str, Any], default_namespace: str) -> "ThrusterConfig":
        """
        Parse and validate thruster parameters.

        Args:
            params: Mapping with the thruster's configuration fields
            default_namespace: Namespace used when ``namespace`` is absent,
                normally the owning model's name

        Returns:
            Validated, immutable configuration

        Raises:
            MissingParameterError: a required field is absent
            ConfigurationError: a field is malformed or out of range
        """
        params = params or {}

        # Required fields first, in the order they are documented
        for key in REQUIRED_THRUSTER_PARAMS:
            if key not in params or params[key] is None:
                raise MissingParameterError(key)

        joint_name = str(params["joint_name"]).strip()
        if not joint_name:
            raise ConfigurationError("<joint_name> must not be empty")

        thrust_coefficient = _get_float(params, "thrust_coefficient")
        propeller_diameter = _get_float(params, "propeller_diameter")
        fluid_density = _get_float(params, "fluid_density", DEFAULT_FLUID_DENSITY)
        _require_positive("thrust_coefficient", thrust_coefficient)
        _require_positive("propeller_diameter", propeller_diameter)
        _require_positive("fluid_density", fluid_density)

        max_thrust_cmd = _get_float(params, "max_thrust_cmd", DEFAULT_MAX_THRUST_CMD)
        min_thrust_cmd = _get_float(params, "min_thrust_cmd", DEFAULT_MIN_THRUST_CMD)
        if min_thrust_cmd >= max_thrust_cmd:
            raise ConfigurationError(
                f"<min_thrust_cmd> ({min_thrust_cmd}) must be less than "
                f"<max_thrust_cmd> ({max_thrust_cmd})"
            )

        i_max = _get_float(params, "i_max", DEFAULT_I_MAX)
        i_min = _get_float(params, "i_min", DEFAULT_I_MIN)
        if i_min > i_max:
            raise ConfigurationError(f"<i_min> ({i_min}) must not exceed <i_max> ({i_max})")

        namespace = params.get("namespace") or default_namespace

        return cls(
            joint_name=joint_name,
            thrust_coefficient=thrust_coefficient,
            propeller_diameter=propeller_diameter,
            namespace=str(namespace),
            fluid_density=fluid_density,
            max_thrust_cmd=max_thrust_cmd,
            min_thrust_cmd=min_thrust_cmd,
            # Gains are read when present, defaults otherwise
            p_gain=_get_float(params, "p_gain", DEFAULT_P_GAIN),
            i_gain=_get_float(params, "i_gain", DEFAULT_I_GAIN),
            d_gain=_get_float(params, "d_gain", DEFAULT_D_GAIN),
            i_max=i_max,
            i_min=i_min,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SimConfig:
    """
    Host simulation settings.

    Can be constructed directly, from CLI args or from the environment.
    """

    dt: float = DEFAULT_DT
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    # 0 runs as fast as possible, 1.0 paces ticks to wall-clock time
    realtime_factor: float = 0.0

    def __post_init__(self):
        if not (self.dt > 0 and math.isfinite(self.dt)):
            raise ConfigurationError(invalid_range_message("dt", min_val=0, current_val=self.dt))
        if self.realtime_factor < 0:
            raise ConfigurationError(
                invalid_range_message("realtime_factor", current_val=self.realtime_factor)
            )
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls) -> "SimConfig":
        """Create config from environment variables."""
        try:
            return cls(
                dt=float(os.environ.get("THRUSTSIM_DT", DEFAULT_DT)),
                log_level=os.environ.get("THRUSTSIM_LOG_LEVEL", DEFAULT_LOG_LEVEL),
                log_file=os.environ.get("THRUSTSIM_LOG_FILE"),
                realtime_factor=float(os.environ.get("THRUSTSIM_REALTIME", 0.0)),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}")


def get_default_config() -> SimConfig:
    """Get the default simulation configuration."""
    return SimConfig()
