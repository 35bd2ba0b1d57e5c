# tests/test_runner.py
"""Background runner with commands published from the test thread."""

import time

import pytest

from thrustsim.model import Joint, Link, Model
from thrustsim.runner import SimulationRunner
from thrustsim.simulator import Simulator

THRUST_TOPIC = "/model/tethys/joint/propeller_joint/cmd_thrust"


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def runner():
    sim = Simulator(dt=0.01)
    sim.add_model(Model(
        "tethys",
        links=[Link("propeller", {"mass": 50.0, "inertia": [0.002, 0.001, 0.001]})],
        joints=[Joint("propeller_joint", "propeller", axis=(1, 0, 0))],
    ))
    sim.add_system("tethys", "thruster", {
        "joint_name": "propeller_joint",
        "thrust_coefficient": 0.004422,
        "propeller_diameter": 0.2,
    })
    runner = SimulationRunner(sim, state_interval=5)
    yield runner
    runner.stop()


def test_start_twice(runner):
    assert runner.start()
    assert not runner.start()


def test_runs_in_background(runner):
    runner.start()

    assert wait_for(lambda: runner.simulator.iterations > 20)
    assert wait_for(lambda: runner.get_state().get("iterations", 0) > 0)


def test_command_from_another_thread(runner):
    thruster = runner.simulator.get_systems("thruster")[0]
    runner.start()

    delivered = runner.publish_thrust(THRUST_TOPIC, 50.0, source="test")

    assert delivered == 1
    assert wait_for(lambda: thruster.last_force == 50.0)
    assert wait_for(lambda: thruster.status == "deadband")


def test_stop_stops_simulator(runner):
    runner.start()
    assert wait_for(lambda: runner.simulator.running)

    runner.stop()

    assert not runner.simulator.running
    iterations = runner.simulator.iterations
    time.sleep(0.05)
    assert runner.simulator.iterations == iterations
    assert runner.get_state()["iterations"] == iterations


def test_pause_and_resume(runner):
    runner.start()
    runner.pause()
    time.sleep(0.05)
    frozen = runner.simulator.time
    time.sleep(0.05)

    assert runner.simulator.time == frozen

    runner.resume()
    assert wait_for(lambda: runner.simulator.time > frozen)
