# thrustsim/systems/pid.py
"""Generic PID controller with integral and output clamping."""

import math


class PID:
    """
    Proportional-integral-derivative controller.

    The error convention is ``error = measured - target`` and the command is
    ``offset - p*e - i_term - d*de/dt``, so a positive error drives the output
    negative. The integral term already includes the integral gain and is
    clamped to [i_min, i_max]; the command is clamped to [cmd_min, cmd_max].
    Either clamp is disabled when its max is below its min.
    """

    def __init__(self, p_gain=0.0, i_gain=0.0, d_gain=0.0,
                 i_max=-1.0, i_min=0.0, cmd_max=-1.0, cmd_min=0.0, cmd_offset=0.0):
        self.init(p_gain, i_gain, d_gain, i_max, i_min, cmd_max, cmd_min, cmd_offset)

    def init(self, p_gain, i_gain, d_gain, i_max, i_min, cmd_max, cmd_min, cmd_offset=0.0):
        """Set gains and limits and clear the accumulated state."""
        self.p_gain = float(p_gain)
        self.i_gain = float(i_gain)
        self.d_gain = float(d_gain)
        self.i_max = float(i_max)
        self.i_min = float(i_min)
        self.cmd_max = float(cmd_max)
        self.cmd_min = float(cmd_min)
        self.cmd_offset = float(cmd_offset)
        self.reset()

    def reset(self):
        self.p_err_last = 0.0
        self.p_err = 0.0
        self.i_err = 0.0
        self.d_err = 0.0
        self.cmd = 0.0

    def update(self, error, dt):
        """
        Advance the controller by one step.

        Args:
            error (float): measured - target
            dt (float): Time since the previous update [s]

        Returns:
            float: The clamped command. A zero ``dt`` or a non-finite error
            returns 0.0 and leaves the state untouched.
        """
        if dt == 0 or not math.isfinite(error):
            return 0.0

        self.p_err = error
        p_term = self.p_gain * self.p_err

        self.i_err = self.i_err + self.i_gain * dt * self.p_err
        if self.i_max >= self.i_min:
            self.i_err = max(self.i_min, min(self.i_max, self.i_err))

        self.d_err = (self.p_err - self.p_err_last) / dt
        self.p_err_last = self.p_err
        d_term = self.d_gain * self.d_err

        self.cmd = self.cmd_offset - p_term - self.i_err - d_term
        if self.cmd_max >= self.cmd_min:
            self.cmd = max(self.cmd_min, min(self.cmd_max, self.cmd))

        return self.cmd

    def snapshot(self):
        """Copy of the internal accumulators, for telemetry and tests."""
        return {
            "p_err": self.p_err,
            "i_err": self.i_err,
            "d_err": self.d_err,
            "p_err_last": self.p_err_last,
            "cmd": self.cmd,
        }
