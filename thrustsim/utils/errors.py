# thrustsim/utils/errors.py
"""Exception types raised while configuring thrusters and loading scenarios."""


class ThrusterError(Exception):
    """Base class for all thrustsim errors."""
    pass


class ConfigurationError(ThrusterError):
    """Invalid or inconsistent configuration. Fatal to initialization."""
    pass


class MissingParameterError(ConfigurationError):
    """A required configuration parameter is absent."""

    def __init__(self, param_name):
        self.param_name = param_name
        super().__init__(f"Missing <{param_name}>. Plugin won't be initialized.")


class JointNotFoundError(ConfigurationError):
    """The driven joint does not exist in the owning model."""

    def __init__(self, joint_name, model_name):
        self.joint_name = joint_name
        self.model_name = model_name
        super().__init__(
            f"Failed to find joint [{joint_name}] in model [{model_name}]. "
            "Plugin not initialized."
        )


class LinkNotFoundError(ConfigurationError):
    """The child link of the driven joint does not exist."""

    def __init__(self, link_name, model_name):
        self.link_name = link_name
        self.model_name = model_name
        super().__init__(
            f"Failed to find link [{link_name}] in model [{model_name}]. "
            "Plugin not initialized."
        )


class ScenarioError(ThrusterError):
    """A scenario file could not be read or is malformed."""
    pass


def invalid_range_message(param_name, min_val=None, max_val=None, current_val=None):
    """Format a parameter range message.

    Args:
        param_name (str): Parameter name
        min_val: Lower bound (exclusive), optional
        max_val: Upper bound, optional
        current_val: The rejected value, optional

    Returns:
        str: Message suitable for a ConfigurationError
    """
    if min_val is not None and max_val is not None:
        message = f"<{param_name}> must be between {min_val} and {max_val}"
    elif min_val is not None:
        message = f"<{param_name}> must be greater than {min_val}"
    else:
        message = f"<{param_name}> must be a finite number"
    if current_val is not None:
        message += f" (got {current_val})"
    return message
