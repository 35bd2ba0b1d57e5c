# thrustsim/cli.py
"""
Command-line interface for the thruster simulation.
Loads a scenario, optionally overrides the commanded thrust and runs it.
"""

import argparse
import json
import logging
import sys
import time

from thrustsim.config import SimConfig
from thrustsim.runner import SimulationRunner
from thrustsim.scenarios.loader import ScenarioLoader, build_simulator
from thrustsim.utils.errors import ThrusterError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(config):
    """Configure root logging from a SimConfig"""
    handlers = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT, handlers=handlers, force=True)


def print_thruster_state(sim_time, state):
    """Print one thruster's telemetry in a readable format"""
    if not state.get("enabled"):
        print(f"[{sim_time:8.3f}s] {state['model']}/{state['name']}: disabled")
        return
    print(
        f"[{sim_time:8.3f}s] {state['model']}/{state['name']}: "
        f"thrust {state['desired_thrust']:.2f} N, "
        f"rate {state['measured_rate']:.2f}/{state['target_rate']:.2f} rad/s, "
        f"torque {state['torque']:.4f}, {state['status']}"
    )


def build_parser():
    parser = argparse.ArgumentParser(description="Run a thruster simulation scenario")
    parser.add_argument("scenario",
                        help="Scenario file (.yaml, .yml or .json), e.g. scenarios/single_propeller.yaml")
    parser.add_argument("--duration", type=float, default=5.0,
                        help="Simulated seconds to run")
    parser.add_argument("--dt", type=float, default=None,
                        help="Override the scenario time step")
    parser.add_argument("--thrust", type=float, default=None,
                        help="Thrust command [N] sent to every thruster at start")
    parser.add_argument("--print-every", type=float, default=0.5,
                        help="Telemetry print period in simulated seconds")
    parser.add_argument("--realtime", action="store_true",
                        help="Run on a background thread paced to wall-clock time")
    parser.add_argument("--json", action="store_true",
                        help="Print the final simulator state as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level")
    return parser


def run_cli(argv=None):
    """Run the simulator in CLI mode. Returns a process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = SimConfig.from_env()
        if args.log_level:
            config = SimConfig(dt=config.dt, log_level=args.log_level,
                               log_file=config.log_file, realtime_factor=config.realtime_factor)
        setup_logging(config)

        scenario = ScenarioLoader.load(args.scenario)
        simulator = build_simulator(scenario, dt=args.dt)
    except ThrusterError as e:
        logger.error(str(e))
        return 1

    thrusters = simulator.get_systems("thruster")
    if not any(thruster.enabled for thruster in thrusters):
        logger.error(f"No thruster could be configured in {args.scenario}")
        return 1

    if args.thrust is not None:
        for thruster in thrusters:
            if thruster.topics:
                simulator.transport.publish(thruster.topics[-1], args.thrust, "cli")

    if args.realtime:
        runner = SimulationRunner(simulator, realtime_factor=max(config.realtime_factor, 1.0))
        runner.start()
        try:
            time.sleep(args.duration)
        except KeyboardInterrupt:
            logger.info("Simulation interrupted by user")
        finally:
            runner.stop()
    else:
        simulator.start()
        print_ticks = max(1, int(round(args.print_every / simulator.dt)))
        for _ in range(int(round(args.duration / simulator.dt))):
            simulator.tick()
            if simulator.iterations % print_ticks == 0:
                for state in simulator.get_state()["systems"]:
                    print_thruster_state(simulator.time, state)
        simulator.stop()

    if args.json:
        print(json.dumps(simulator.get_state(), indent=2))
    return 0


def main():
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
