#!/usr/bin/env python3
"""
GA Engine CLI - Minimal entry point.

This is the command-line interface for the genetic algorithm engine.
All configuration is specified in YAML files.

Usage:
    python3 ga_cli.py run_config.yaml
    python3 ga_cli.py --config run_config.yaml
    python3 ga_cli.py --help

Examples:
    # Evolve the phrase "to be or not to be"
    python3 ga_cli.py configs/infinite_monkeys.yaml

    # Schedule tasks minimizing time + cost
    python3 ga_cli.py configs/resource_planning.yaml

    # Time/cost Pareto frontier of task schedules
    python3 ga_cli.py configs/resource_planning_pareto.yaml

    # Random guessing baseline
    python3 ga_cli.py configs/brute_force.yaml
"""

import logging
import sys


def main():
    """Main entry point for GA CLI."""
    # Handle help
    if len(sys.argv) < 2 or sys.argv[1] in ['-h', '--help', 'help']:
        print(__doc__)
        sys.exit(0 if len(sys.argv) > 1 else 1)

    # Parse config path
    config_path = sys.argv[1]

    if config_path.startswith('--config='):
        config_path = config_path.split('=', 1)[1]
    elif config_path == '--config':
        if len(sys.argv) < 3:
            print("Error: --config requires an argument")
            print(__doc__)
            sys.exit(1)
        config_path = sys.argv[2]

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    # Import and run
    try:
        from ga_engine.cli import run_from_config
        run_from_config(config_path)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
