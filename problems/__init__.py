"""
Demo problems for the GA engine.

- infinite_monkeys: recover a target phrase over {space, a-z}
- resource_planning: assign tasks to resources, minimizing time and/or cost
"""

__version__ = "1.0.0"
__author__ = "GA Engine Team"

from .infinite_monkeys import create_problem as create_string_problem
from .resource_planning import (
    Resource,
    Task,
    default_resources,
    default_tasks,
    create_single_objective_problem,
    create_multi_objective_problem,
)
from .config_loader import load_tables, ConfigurationError

__all__ = [
    'create_string_problem',
    'Resource',
    'Task',
    'default_resources',
    'default_tasks',
    'create_single_objective_problem',
    'create_multi_objective_problem',
    'load_tables',
    'ConfigurationError',
]
