# tests/test_config.py
"""Tests for thruster and simulation configuration."""

import dataclasses
import math

import pytest

from thrustsim.config import SimConfig, ThrusterConfig, get_default_config
from thrustsim.utils.errors import ConfigurationError, MissingParameterError


def base_params(**overrides):
    params = {
        "joint_name": "propeller_joint",
        "thrust_coefficient": 0.004422,
        "propeller_diameter": 0.2,
    }
    params.update(overrides)
    return params


class TestThrusterConfig:

    def test_defaults(self):
        config = ThrusterConfig.from_params(base_params(), default_namespace="tethys")

        assert config.namespace == "tethys"
        assert config.fluid_density == 1000.0
        assert config.max_thrust_cmd == 1000.0
        assert config.min_thrust_cmd == -1000.0
        assert (config.p_gain, config.i_gain, config.d_gain) == (0.1, 0.0, 0.0)
        assert (config.i_max, config.i_min) == (1.0, -1.0)

    def test_all_fields_read(self):
        config = ThrusterConfig.from_params(base_params(
            namespace="auv1", fluid_density=1025, max_thrust_cmd=50, min_thrust_cmd=-10,
            p_gain=0.3, i_gain=0.02, d_gain=0.001, i_max=5, i_min=-5,
        ), default_namespace="tethys")

        assert config.namespace == "auv1"
        assert config.fluid_density == 1025.0
        assert (config.max_thrust_cmd, config.min_thrust_cmd) == (50.0, -10.0)
        assert (config.p_gain, config.i_gain, config.d_gain) == (0.3, 0.02, 0.001)
        assert (config.i_max, config.i_min) == (5.0, -5.0)

    @pytest.mark.parametrize("missing", ["joint_name", "thrust_coefficient", "propeller_diameter"])
    def test_missing_required(self, missing):
        params = base_params()
        params[missing] = None

        with pytest.raises(MissingParameterError) as excinfo:
            ThrusterConfig.from_params(params, default_namespace="tethys")

        assert excinfo.value.param_name == missing
        assert "won't be initialized" in str(excinfo.value)

    @pytest.mark.parametrize("overrides", [
        {"joint_name": "  "},
        {"thrust_coefficient": 0.0},
        {"propeller_diameter": -0.2},
        {"fluid_density": 0.0},
        {"thrust_coefficient": "fast"},
        {"propeller_diameter": math.nan},
        {"max_thrust_cmd": 10.0, "min_thrust_cmd": 10.0},
        {"max_thrust_cmd": -10.0, "min_thrust_cmd": 10.0},
        {"i_max": -2.0, "i_min": 2.0},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError):
            ThrusterConfig.from_params(base_params(**overrides), default_namespace="tethys")

    def test_frozen(self):
        config = ThrusterConfig.from_params(base_params(), default_namespace="tethys")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.p_gain = 1.0

    def test_to_dict(self):
        config = ThrusterConfig.from_params(base_params(), default_namespace="tethys")

        data = config.to_dict()

        assert data["joint_name"] == "propeller_joint"
        assert data["thrust_coefficient"] == 0.004422


class TestSimConfig:

    def test_defaults(self):
        config = get_default_config()

        assert config.dt == 0.01
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.realtime_factor == 0.0

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("THRUSTSIM_DT", "0.002")
        monkeypatch.setenv("THRUSTSIM_LOG_LEVEL", "debug")
        monkeypatch.setenv("THRUSTSIM_LOG_FILE", "/tmp/thrustsim.log")
        monkeypatch.setenv("THRUSTSIM_REALTIME", "1.0")

        config = SimConfig.from_env()

        assert config.dt == 0.002
        assert config.log_level == "DEBUG"
        assert config.log_file == "/tmp/thrustsim.log"
        assert config.realtime_factor == 1.0

    def test_from_env_rejects_garbage(self, monkeypatch):
        monkeypatch.setenv("THRUSTSIM_DT", "soon")

        with pytest.raises(ConfigurationError):
            SimConfig.from_env()

    @pytest.mark.parametrize("dt", [0.0, -0.01, math.inf, math.nan])
    def test_invalid_dt(self, dt):
        with pytest.raises(ConfigurationError):
            SimConfig(dt=dt)
