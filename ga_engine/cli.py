"""
CLI module for the GA engine.

Handles run configuration loading, validation, engine construction and
mode dispatching.
"""

from typing import Any, Dict, Optional
from pathlib import Path
import yaml

from problems.infinite_monkeys import validate_target

from .crossover import CROSSOVER_STRATEGIES
from .data_models import InvalidConfiguration
from .engine import EngineConfig
from .selection import SELECTION_STRATEGIES, create_selector
from .termination import FitnessThreshold, FixedGenerationCount, SteadyState, TerminationPolicy


MODES = ['infinite_monkeys', 'resource_planning', 'resource_planning_pareto', 'brute_force']

TERMINATION_KEYS = ['fixed_generations', 'fitness_threshold', 'steady_state']


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration must be a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    # Check mode field
    if 'mode' not in config:
        raise ConfigValidationError("Missing required field: 'mode'")

    mode = config['mode']
    if mode not in MODES:
        raise ConfigValidationError(
            f"Invalid mode: '{mode}'. Must be one of: {', '.join(MODES)}"
        )

    seed = config.get('random_seed')
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
        raise ConfigValidationError(f"'random_seed' must be a non-negative integer, got: {seed}")

    report_every = config.get('report_every', 1)
    if not isinstance(report_every, int) or isinstance(report_every, bool) or report_every <= 0:
        raise ConfigValidationError(f"'report_every' must be a positive integer, got: {report_every}")

    for section in ['problem', 'output', 'brute_force']:
        if section in config and not isinstance(config[section], dict):
            raise ConfigValidationError(f"'{section}' must be a dictionary")

    if 'output' in config and 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    # Mode-specific validation
    if mode == 'brute_force':
        _validate_brute_force_config(config)
    else:
        _validate_engine_config(config)
        _validate_termination_config(config)

    target = config.get('problem', {}).get('target')
    if target is not None:
        if mode not in ['infinite_monkeys', 'brute_force']:
            raise ConfigValidationError(f"'problem.target' is not supported in mode '{mode}'")
        if not isinstance(target, str):
            raise ConfigValidationError(f"'problem.target' must be a string, got: {target!r}")
        try:
            validate_target(target)
        except InvalidConfiguration as e:
            raise ConfigValidationError(f"Invalid 'problem.target': {e}")

    tables = config.get('problem', {}).get('tables')
    if tables is not None:
        if mode not in ['resource_planning', 'resource_planning_pareto']:
            raise ConfigValidationError(f"'problem.tables' is not supported in mode '{mode}'")
        if not Path(tables).exists():
            raise ConfigValidationError(f"Table file not found: {tables}")


def _validate_brute_force_config(config: Dict[str, Any]) -> None:
    """
    Validate brute force mode configuration.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    max_iterations = config.get('brute_force', {}).get('max_iterations')
    if max_iterations is not None and (not isinstance(max_iterations, int) or max_iterations <= 0):
        raise ConfigValidationError(
            f"'brute_force.max_iterations' must be a positive integer, got: {max_iterations}"
        )


def _validate_engine_config(config: Dict[str, Any]) -> None:
    """
    Validate the engine section.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'engine' not in config:
        raise ConfigValidationError("Missing required field: 'engine'")

    engine = config['engine']
    if not isinstance(engine, dict):
        raise ConfigValidationError("'engine' must be a dictionary")

    for field in ['population_size', 'mutation_rate']:
        if field not in engine:
            raise ConfigValidationError(f"Missing required field: 'engine.{field}'")

    population_size = engine['population_size']
    if not isinstance(population_size, int) or isinstance(population_size, bool) or population_size <= 0:
        raise ConfigValidationError(
            f"'engine.population_size' must be a positive integer, got: {population_size}"
        )

    mutation_rate = engine['mutation_rate']
    if not isinstance(mutation_rate, (int, float)) or not 0 <= mutation_rate <= 1:
        raise ConfigValidationError(
            f"'engine.mutation_rate' must be a number in [0, 1], got: {mutation_rate}"
        )

    strategy = engine.get('crossover_strategy', 'midpoint')
    if strategy not in CROSSOVER_STRATEGIES:
        raise ConfigValidationError(
            f"Invalid 'engine.crossover_strategy': '{strategy}'. "
            f"Must be one of: {', '.join(CROSSOVER_STRATEGIES)}"
        )

    selection = engine.get('selection')
    if selection is not None and selection not in SELECTION_STRATEGIES:
        raise ConfigValidationError(
            f"Invalid 'engine.selection': '{selection}'. "
            f"Must be one of: {', '.join(SELECTION_STRATEGIES)}"
        )

    if selection == 'nsga2' and config['mode'] != 'resource_planning_pareto':
        raise ConfigValidationError("'nsga2' selection requires mode 'resource_planning_pareto'")
    if selection in ['roulette', 'roulette_normalized'] and config['mode'] == 'resource_planning_pareto':
        raise ConfigValidationError(f"'{selection}' selection requires a single-objective mode")

    for field in ['max_workers', 'archive_max_size']:
        value = engine.get(field)
        if value is not None and (not isinstance(value, int) or value <= 0):
            raise ConfigValidationError(f"'engine.{field}' must be a positive integer, got: {value}")


def _validate_termination_config(config: Dict[str, Any]) -> None:
    """
    Validate that exactly one termination policy is configured.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'termination' not in config:
        raise ConfigValidationError("Missing required field: 'termination'")

    termination = config['termination']
    if not isinstance(termination, dict):
        raise ConfigValidationError("'termination' must be a dictionary")

    keys = [key for key in termination if key in TERMINATION_KEYS]
    unknown = [key for key in termination if key not in TERMINATION_KEYS]
    if unknown:
        raise ConfigValidationError(f"Unknown termination policy: {', '.join(unknown)}")
    if len(keys) != 1:
        raise ConfigValidationError(
            f"Exactly one termination policy is required, got: {len(keys)}"
        )

    key = keys[0]
    value = termination[key]
    if key == 'fitness_threshold':
        if not isinstance(value, (int, float)):
            raise ConfigValidationError(f"'termination.{key}' must be a number, got: {value}")
        if config['mode'] == 'resource_planning_pareto':
            raise ConfigValidationError("'fitness_threshold' requires a single-objective mode")
    elif not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigValidationError(f"'termination.{key}' must be a positive integer, got: {value}")


def build_termination(termination: Dict[str, Any]) -> TerminationPolicy:
    """Create the termination policy described by a validated section."""
    if 'fixed_generations' in termination:
        return FixedGenerationCount(termination['fixed_generations'])
    if 'fitness_threshold' in termination:
        return FitnessThreshold(termination['fitness_threshold'])
    return SteadyState(termination['steady_state'])


def build_engine_config(config: Dict[str, Any], seed: Optional[int] = None) -> EngineConfig:
    """
    Create an EngineConfig from a validated run configuration.

    Args:
        config: Run configuration dictionary
        seed: Random seed for the run

    Returns:
        EngineConfig
    """
    engine = config['engine']
    selection = engine.get('selection')

    return EngineConfig(
        population_size=engine['population_size'],
        mutation_rate=engine['mutation_rate'],
        termination=build_termination(config['termination']),
        crossover_strategy=engine.get('crossover_strategy', 'midpoint'),
        selector=create_selector(selection) if selection else None,
        seed=seed,
        elitism=bool(engine.get('elitism', False)),
        max_workers=engine.get('max_workers'),
        archive_max_size=engine.get('archive_max_size'),
    )


def run_from_config(config_path: str) -> None:
    """
    Load run configuration and execute appropriate mode.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from mode implementations
    """
    # Load and validate config
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    mode = config['mode']
    print(f"Mode: {mode}\n")

    from . import orchestration

    if mode == 'infinite_monkeys':
        orchestration.run_infinite_monkeys(config)
    elif mode == 'resource_planning':
        orchestration.run_resource_planning(config)
    elif mode == 'resource_planning_pareto':
        orchestration.run_resource_planning_pareto(config)
    elif mode == 'brute_force':
        orchestration.run_brute_force(config)
    else:
        # Should never reach here due to validation
        raise ConfigValidationError(f"Invalid mode: {mode}")

    print("\nRun completed successfully!")
