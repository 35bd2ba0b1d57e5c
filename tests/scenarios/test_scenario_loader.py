# tests/scenarios/test_scenario_loader.py
"""Loading scenarios and building simulators from them."""

import json
import os

import pytest
import yaml

from thrustsim.scenarios.loader import ScenarioLoader, build_simulator
from thrustsim.utils.errors import ScenarioError

SCENARIOS_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "scenarios")

SCENARIO = {
    "name": "test_scene",
    "dt": 0.005,
    "models": [{
        "name": "auv",
        "links": [{"name": "propeller", "mass": 2.0, "inertia": [0.01, 0.01, 0.01]}],
        "joints": [{"name": "prop_joint", "child": "propeller", "axis": [1, 0, 0]}],
        "systems": [{
            "type": "thruster",
            "joint_name": "prop_joint",
            "thrust_coefficient": 0.004,
            "propeller_diameter": 0.2,
        }],
    }],
    "commands": [{"topic": "/model/auv/joint/prop_joint/cmd_thrust", "thrust": 25.0}],
}


def write_yaml(tmp_path, data, name="scene.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data))
    return str(path)


class TestScenarioLoader:

    def test_load_yaml(self, tmp_path):
        scenario = ScenarioLoader.load(write_yaml(tmp_path, SCENARIO))

        assert scenario["name"] == "test_scene"
        assert scenario["dt"] == 0.005
        assert scenario["models"][0]["name"] == "auv"
        assert scenario["commands"] == [
            {"topic": "/model/auv/joint/prop_joint/cmd_thrust", "thrust": 25.0}
        ]

    def test_load_json(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(SCENARIO))

        scenario = ScenarioLoader.load(str(path))

        assert scenario["models"][0]["systems"][0]["type"] == "thruster"

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "scene.txt"
        path.write_text("name: nope")

        with pytest.raises(ScenarioError):
            ScenarioLoader.load(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioError):
            ScenarioLoader.load(str(tmp_path / "absent.yaml"))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("models: [unclosed\n")

        with pytest.raises(ScenarioError):
            ScenarioLoader.load(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ScenarioError):
            ScenarioLoader.load(write_yaml(tmp_path, ["not", "a", "mapping"]))

    def test_model_without_name(self):
        with pytest.raises(ScenarioError):
            ScenarioLoader.parse({"models": [{"links": []}]})

    @pytest.mark.parametrize("dt", ["fast", None, [0.01]])
    def test_malformed_time_step(self, dt):
        with pytest.raises(ScenarioError):
            ScenarioLoader.parse({"dt": dt})

    def test_command_without_topic_skipped(self):
        scenario = ScenarioLoader.parse({"commands": [{"thrust": 5.0}]})

        assert scenario["commands"] == []

    def test_defaults(self):
        scenario = ScenarioLoader.parse({})

        assert scenario["name"] == "Untitled Scenario"
        assert scenario["dt"] == 0.01
        assert scenario["models"] == []

    def test_shipped_scenario_listed(self):
        scenarios = ScenarioLoader.list_scenarios(SCENARIOS_DIR)

        assert any(path.endswith("single_propeller.yaml") for path in scenarios)

    def test_list_missing_directory(self, tmp_path):
        assert ScenarioLoader.list_scenarios(str(tmp_path / "nowhere")) == []


class TestBuildSimulator:

    def test_build(self):
        sim = build_simulator(ScenarioLoader.parse(SCENARIO))

        thruster = sim.get_systems("thruster")[0]
        assert sim.dt == 0.005
        assert thruster.enabled
        assert thruster.desired_thrust == 25.0

    def test_dt_override(self):
        sim = build_simulator(ScenarioLoader.parse(SCENARIO), dt=0.02)

        assert sim.dt == 0.02

    @pytest.mark.parametrize("dt", [0.0, -0.01, float("inf")])
    def test_invalid_time_step(self, dt):
        scenario = ScenarioLoader.parse(dict(SCENARIO, dt=dt))

        with pytest.raises(ScenarioError):
            build_simulator(scenario)

    def test_invalid_dt_override(self):
        with pytest.raises(ScenarioError):
            build_simulator(ScenarioLoader.parse(SCENARIO), dt=-0.01)

    def test_invalid_link(self):
        data = json.loads(json.dumps(SCENARIO))
        data["models"][0]["links"][0]["mass"] = -1.0

        with pytest.raises(ScenarioError):
            build_simulator(ScenarioLoader.parse(data))

    def test_misconfigured_thruster_stays_disabled(self):
        data = json.loads(json.dumps(SCENARIO))
        del data["models"][0]["systems"][0]["thrust_coefficient"]

        sim = build_simulator(ScenarioLoader.parse(data))
        sim.run(0.1)

        thruster = sim.get_systems("thruster")[0]
        link = sim.get_model("auv").link_by_name("propeller")
        assert not thruster.enabled
        assert link.linear_velocity.tolist() == [0.0, 0.0, 0.0]
        assert link.angular_velocity.tolist() == [0.0, 0.0, 0.0]

    def test_shipped_scenario_builds(self):
        scenario = ScenarioLoader.load(os.path.join(SCENARIOS_DIR, "single_propeller.yaml"))

        sim = build_simulator(scenario)

        thruster = sim.get_systems("thruster")[0]
        assert thruster.enabled
        assert thruster.config.fluid_density == 1025.0
        assert thruster.desired_thrust == 100.0
