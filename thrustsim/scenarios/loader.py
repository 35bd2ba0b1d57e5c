# thrustsim/scenarios/loader.py
"""Scenario loader for scene descriptions."""

import yaml
import json
import os
import logging
from typing import Dict, List

from thrustsim.config import DEFAULT_DT
from thrustsim.model import Model
from thrustsim.simulator import Simulator
from thrustsim.utils.errors import ConfigurationError, ScenarioError

logger = logging.getLogger(__name__)

class ScenarioLoader:
    """Loads scenarios from YAML or JSON files."""

    @staticmethod
    def load(filepath: str) -> Dict:
        """Load a scenario from file.

        Args:
            filepath: Path to scenario file (.yaml, .yml or .json)

        Returns:
            dict: Scenario data with name, dt, models and initial commands

        Raises:
            ScenarioError: unsupported extension, unreadable or malformed file
        """
        _, ext = os.path.splitext(filepath)
        if ext not in ['.yaml', '.yml', '.json']:
            raise ScenarioError(f"Unsupported file format: {ext}")

        try:
            with open(filepath, 'r') as f:
                if ext == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except OSError as e:
            raise ScenarioError(f"Cannot read scenario {filepath}: {e}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ScenarioError(f"Cannot parse scenario {filepath}: {e}")

        if not isinstance(data, dict):
            raise ScenarioError(f"Scenario {filepath} must contain a mapping at top level")

        logger.info(f"Loaded scenario: {data.get('name', 'Unknown')}")
        return ScenarioLoader.parse(data)

    @staticmethod
    def parse(data: Dict) -> Dict:
        """Normalize raw scenario data."""
        try:
            dt = float(data.get("dt", DEFAULT_DT))
        except (TypeError, ValueError):
            raise ScenarioError(f"Invalid time step: {data.get('dt')!r}")

        return {
            "name": data.get("name", "Untitled Scenario"),
            "description": data.get("description", ""),
            "dt": dt,
            "models": ScenarioLoader._parse_models(data.get("models", [])),
            "commands": ScenarioLoader._parse_commands(data.get("commands", [])),
        }

    @staticmethod
    def _parse_models(models_data: List[Dict]) -> List[Dict]:
        """Parse model definitions.

        Args:
            models_data: List of model configuration dicts

        Returns:
            list: Model configs, each with ``links``, ``joints`` and ``systems``
        """
        models = []
        for index, model_def in enumerate(models_data or []):
            if not isinstance(model_def, dict) or "name" not in model_def:
                raise ScenarioError(f"Model #{index} needs a name")
            models.append({
                "name": str(model_def["name"]),
                "links": model_def.get("links", []),
                "joints": model_def.get("joints", []),
                "systems": model_def.get("systems", []),
            })
        return models

    @staticmethod
    def _parse_commands(commands_data: List[Dict]) -> List[Dict]:
        """Parse initial thrust commands (``topic`` and ``thrust`` per entry)."""
        commands = []
        for command in commands_data or []:
            if "topic" not in command:
                logger.warning(f"Ignoring command without topic: {command}")
                continue
            commands.append({"topic": command["topic"], "thrust": command.get("thrust", 0.0)})
        return commands

    @staticmethod
    def list_scenarios(scenarios_dir: str = "scenarios") -> List[str]:
        """List available scenario files.

        Args:
            scenarios_dir: Directory containing scenarios

        Returns:
            list: List of scenario file paths
        """
        if not os.path.exists(scenarios_dir):
            return []

        scenarios = []
        for filename in os.listdir(scenarios_dir):
            if filename.endswith(('.yaml', '.yml', '.json')):
                scenarios.append(os.path.join(scenarios_dir, filename))

        return sorted(scenarios)


def build_simulator(scenario: Dict, dt: float = None) -> Simulator:
    """Instantiate a Simulator from a parsed scenario.

    Models are created first, then every system is attached and configured.
    Systems that fail to configure stay attached but disabled. Initial
    commands are published last.

    Args:
        scenario: Output of ``ScenarioLoader.load`` or ``ScenarioLoader.parse``
        dt: Override the scenario time step

    Raises:
        ScenarioError: the time step or a model definition is malformed
    """
    try:
        simulator = Simulator(dt=scenario["dt"] if dt is None else dt)
    except ConfigurationError as e:
        raise ScenarioError(f"Invalid scenario {scenario['name']}: {e}")

    for model_cfg in scenario["models"]:
        try:
            simulator.add_model(Model.from_config(model_cfg))
        except (KeyError, TypeError, ValueError) as e:
            raise ScenarioError(f"Invalid model [{model_cfg.get('name')}]: {e}")

    for model_cfg in scenario["models"]:
        for system_cfg in model_cfg["systems"]:
            params = dict(system_cfg)
            system_type = params.pop("type", None)
            if system_type is None:
                logger.warning(f"Ignoring system without type on model [{model_cfg['name']}]")
                continue
            simulator.add_system(model_cfg["name"], system_type, params)

    for command in scenario["commands"]:
        simulator.transport.publish(command["topic"], command["thrust"], "scenario")

    return simulator
