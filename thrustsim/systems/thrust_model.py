# thrustsim/systems/thrust_model.py
"""Propeller thrust to angular velocity relation.

Thrust is proportional to the rotation rate squared
(Fossen, "Guidance and Control of Ocean Vehicles", p. 246):

    T = rho * K_T * D^4 * omega * |omega|
"""

import math
import logging

from thrustsim.utils.errors import ConfigurationError, invalid_range_message
from thrustsim.utils.math_utils import sign

logger = logging.getLogger(__name__)


class ThrustModel:
    """Maps signed thrust [N] to signed propeller angular velocity [rad/s]."""

    def __init__(self, fluid_density, thrust_coefficient, propeller_diameter):
        """Build the model, rejecting non-physical coefficients.

        Args:
            fluid_density (float): Fluid density [kg/m^3]
            thrust_coefficient (float): Dimensionless thrust coefficient K_T
            propeller_diameter (float): Propeller diameter [m]

        Raises:
            ConfigurationError: if any coefficient is not a positive finite number
        """
        for name, value in (("fluid_density", fluid_density),
                            ("thrust_coefficient", thrust_coefficient),
                            ("propeller_diameter", propeller_diameter)):
            if not (math.isfinite(value) and value > 0):
                raise ConfigurationError(invalid_range_message(name, min_val=0, current_val=value))

        self.fluid_density = float(fluid_density)
        self.thrust_coefficient = float(thrust_coefficient)
        self.propeller_diameter = float(propeller_diameter)
        # rho * K_T * D^4, fixed for the model's lifetime
        self._gain = self.fluid_density * self.thrust_coefficient * self.propeller_diameter ** 4

    @classmethod
    def from_config(cls, config):
        return cls(config.fluid_density, config.thrust_coefficient, config.propeller_diameter)

    def rate_from_thrust(self, thrust):
        """Angular velocity [rad/s] needed to produce ``thrust`` [N].

        The sign of the result follows the sign of the thrust; zero thrust
        maps to zero rate.
        """
        magnitude = math.sqrt(abs(thrust / self._gain))
        return magnitude * sign(thrust)

    def thrust_from_rate(self, rate):
        """Thrust [N] produced when spinning at ``rate`` [rad/s]."""
        return self._gain * rate * abs(rate)
