"""
Resource/task table loading

Loads YAML table files and converts them to the Resource and Task
structures of the resource planning problem.

Table format:

    resources:
      - items_per_minute: 10
        costs_per_minute: 1      # optional, defaults to items_per_minute ** 1.1
      - items_per_minute: 100
    tasks:
      - workload: 100
      - workload: 1000
"""

import yaml
from typing import Any, Dict, List, Optional, Tuple

from ga_engine.data_models import InvalidConfiguration

from .resource_planning import (
    COST_EXPONENT, Resource, Task, default_resources, default_tasks
)


class ConfigurationError(Exception):
    """Raised when a table configuration is invalid"""
    pass


def load_config(config_path: str) -> Dict[str, Any]:
    """Load a table configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigurationError(f"Configuration file is empty: {config_path}")
    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate a table configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    for section in ["resources", "tasks"]:
        if section not in config:
            issues.append(f"Missing required section: {section}")
        elif not isinstance(config[section], list) or not config[section]:
            issues.append(f"Section '{section}' must be a non-empty list")

    for i, entry in enumerate(config.get("resources") or []):
        if not isinstance(entry, dict) or "items_per_minute" not in entry:
            issues.append(f"Resource {i} requires 'items_per_minute'")
            continue
        if not _is_number(entry["items_per_minute"]) or entry["items_per_minute"] <= 0:
            issues.append(f"Resource {i} items_per_minute must be a positive number")
        cost = entry.get("costs_per_minute")
        if cost is not None and (not _is_number(cost) or cost < 0):
            issues.append(f"Resource {i} costs_per_minute must be a non-negative number")

    for i, entry in enumerate(config.get("tasks") or []):
        if not isinstance(entry, dict) or "workload" not in entry:
            issues.append(f"Task {i} requires 'workload'")
            continue
        if not _is_number(entry["workload"]) or entry["workload"] < 0:
            issues.append(f"Task {i} workload must be a non-negative number")

    return issues


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def create_tables_from_config(config: Dict[str, Any]) -> Tuple[List[Resource], List[Task]]:
    """
    Create resource and task tables from a configuration dictionary

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    issues = validate_config(config)
    if issues:
        raise ConfigurationError("; ".join(issues))

    try:
        resources = [
            Resource(
                items_per_minute=entry["items_per_minute"],
                costs_per_minute=entry.get(
                    "costs_per_minute", entry["items_per_minute"] ** COST_EXPONENT
                )
            )
            for entry in config["resources"]
        ]
        tasks = [Task(workload=entry["workload"]) for entry in config["tasks"]]
    except InvalidConfiguration as e:
        raise ConfigurationError(str(e))

    return resources, tasks


def load_tables(config_path: Optional[str] = None) -> Tuple[List[Resource], List[Task]]:
    """
    Load resource and task tables

    Args:
        config_path: YAML table file, or None for the built-in demo tables

    Returns:
        Tuple of (resources, tasks)
    """
    if config_path is None:
        return default_resources(), default_tasks()

    return create_tables_from_config(load_config(config_path))
