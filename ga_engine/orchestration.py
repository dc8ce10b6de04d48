"""
Orchestration module for the GA engine.

Implements the console runs of the demo problems: string search, single-
and multi-objective resource planning, and the brute-force baseline.
All text formatting happens here; the engine only reports through its
progress callback and returns structured results.
"""

from typing import Dict, List, Optional
from pathlib import Path
import numpy as np

from problems.config_loader import load_tables
from problems.infinite_monkeys import DEFAULT_TARGET, brute_force_search, create_problem
from problems.resource_planning import (
    compute_costs,
    compute_time,
    create_multi_objective_problem,
    create_single_objective_problem,
    schedule_breakdown,
)

from .cli import build_engine_config
from .engine import EvolutionEngine
from .io_utils import (
    create_output_folder,
    save_history_csv,
    save_metadata,
    save_pareto_csv,
    save_schedule_csv,
)


def _banner(title: str) -> None:
    print("=" * 70)
    print(title)
    print("=" * 70)


def _resolve_seed(run_config: Dict) -> int:
    seed = run_config.get('random_seed')
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    print(f"Random seed: {seed}")
    return seed


def _output_root(run_config: Dict) -> Optional[Path]:
    output = run_config.get('output')
    if not output:
        return None
    root = create_output_folder(output['root'], overwrite=output.get('overwrite', False))
    print(f"Output directory: {root}")
    return root


def _plots_enabled(run_config: Dict) -> bool:
    return bool(run_config.get('output', {}).get('plots', True))


def _evolve_with_history(engine: EvolutionEngine, report_every: int, render) -> tuple:
    """Run a single-objective engine, recording (generation, fitness, phenotype) rows."""
    history: List[tuple] = []

    def on_generation(generation: int, best_fitness: float) -> None:
        phenotype = engine.state.best.chromosome.phenotype()
        history.append((generation, best_fitness, phenotype))
        if generation % report_every == 0:
            render(generation, best_fitness, engine.state.best)

    result = engine.run(on_generation)
    return result, history


def run_infinite_monkeys(run_config: Dict) -> None:
    """
    Evolve a random string towards the target phrase.

    Args:
        run_config: Run configuration dict from YAML

    Returns:
        None (prints progress, optionally writes to disk)
    """
    _banner("INFINITE MONKEYS")

    target = run_config.get('problem', {}).get('target', DEFAULT_TARGET)
    print(f"Target: '{target}'")
    seed = _resolve_seed(run_config)
    problem = create_problem(target)
    engine = EvolutionEngine(problem, build_engine_config(run_config, seed))
    output_root = _output_root(run_config)
    print()

    def render(generation, fitness, best):
        print(f"Generation: {generation} Fitness: {fitness:.4f} Best: '{best.chromosome.phenotype()}'")

    result, history = _evolve_with_history(engine, run_config.get('report_every', 1), render)

    print()
    _banner("SUMMARY")
    print(f"Best: '{result.best.chromosome.phenotype()}'")
    print(f"Fitness: {result.fitness:.4f}")
    print(f"Found in generation: {result.generation}")
    print(f"Generations run: {result.generations_run}")

    if output_root is not None:
        overwrite = run_config['output'].get('overwrite', False)
        save_history_csv(history, output_root / "history.csv", overwrite=overwrite)
        save_metadata({
            'mode': 'infinite_monkeys',
            'target': target,
            'seed': seed,
            'best': result.best.chromosome.phenotype(),
            'fitness': float(result.fitness),
            'generation': result.generation,
            'generations_run': result.generations_run,
        }, output_root / "result.yaml", overwrite=overwrite)
        if _plots_enabled(run_config):
            _plot_history(history, output_root / "history.png", target)


def run_resource_planning(run_config: Dict) -> None:
    """
    Schedule tasks on resources minimizing time + cost.

    Args:
        run_config: Run configuration dict from YAML

    Returns:
        None (prints progress and the final schedule, optionally writes to disk)
    """
    _banner("RESOURCE PLANNING")

    tables_path = run_config.get('problem', {}).get('tables')
    resources, tasks = load_tables(tables_path)
    print(f"Resources: {len(resources)}  Tasks: {len(tasks)}")
    seed = _resolve_seed(run_config)
    problem = create_single_objective_problem(resources, tasks)
    engine = EvolutionEngine(problem, build_engine_config(run_config, seed))
    output_root = _output_root(run_config)
    print()

    def render(generation, fitness, best):
        print(f"Generation: {generation} Best Fitness: {fitness:.2f}")

    result, history = _evolve_with_history(engine, run_config.get('report_every', 1), render)

    chromosome = result.best.chromosome
    breakdown = schedule_breakdown(chromosome, resources, tasks)
    time = compute_time(chromosome, resources, tasks)
    cost = compute_costs(chromosome, resources, tasks)

    print()
    _banner("SUMMARY")
    print(f"Generation: {result.generation}")
    print(f"Fitness: {result.fitness:.2f}")
    print(f"Cost: {cost:.2f}")
    print(f"Time: {time:.2f} Minutes")
    for resource_index, entry in breakdown.items():
        resource = entry['resource']
        print(f"Details: Resource {resource_index} "
              f"[itemsPerMinute: {resource.items_per_minute} costsPerMinute: {resource.costs_per_minute:.2f}] "
              f"tasks: {entry['tasks']}")
        print(f"  Time: {entry['time']:.2f}")
        print(f"  Cost: {entry['cost']:.2f}")

    if output_root is not None:
        overwrite = run_config['output'].get('overwrite', False)
        save_history_csv(history, output_root / "history.csv", overwrite=overwrite)
        save_schedule_csv(breakdown, output_root / "schedule.csv", overwrite=overwrite)
        save_metadata({
            'mode': 'resource_planning',
            'seed': seed,
            'fitness': float(result.fitness),
            'time': float(time),
            'cost': float(cost),
            'generation': result.generation,
            'generations_run': result.generations_run,
        }, output_root / "result.yaml", overwrite=overwrite)
        if _plots_enabled(run_config):
            _plot_history(history, output_root / "history.png", "resource planning")


def run_resource_planning_pareto(run_config: Dict) -> None:
    """
    Compute the time/cost Pareto frontier of task schedules.

    Args:
        run_config: Run configuration dict from YAML

    Returns:
        None (prints progress and the frontier, optionally writes to disk)
    """
    _banner("RESOURCE PLANNING (PARETO)")

    tables_path = run_config.get('problem', {}).get('tables')
    resources, tasks = load_tables(tables_path)
    print(f"Resources: {len(resources)}  Tasks: {len(tasks)}")
    seed = _resolve_seed(run_config)
    problem = create_multi_objective_problem(resources, tasks)
    engine = EvolutionEngine(problem, build_engine_config(run_config, seed))
    output_root = _output_root(run_config)
    print()
    report_every = run_config.get('report_every', 1)

    def on_generation(generation, front):
        if generation % report_every == 0:
            print(f"\rGeneration: {generation} Front: {len(front)}", end="", flush=True)

    result = engine.run(on_generation)

    print("\n")
    _banner("PARETO FRONTIER")
    for member in result.pareto_set:
        time, cost = member.fitness
        print(f"Time: {time:.2f} Costs: {cost:.2f}")
    print(f"\nSolutions: {len(result.pareto_set)}")
    print(f"Generations run: {result.generations_run}")

    if output_root is not None:
        overwrite = run_config['output'].get('overwrite', False)
        save_pareto_csv(result.pareto_set, output_root / "pareto.csv", overwrite=overwrite)
        save_metadata({
            'mode': 'resource_planning_pareto',
            'seed': seed,
            'solutions': len(result.pareto_set),
            'generations_run': result.generations_run,
        }, output_root / "result.yaml", overwrite=overwrite)
        if _plots_enabled(run_config):
            import matplotlib
            matplotlib.use('Agg')
            from .visualization_utils import plot_pareto_front
            plot_pareto_front(result.pareto_set, output_root / "pareto.png")


def run_brute_force(run_config: Dict) -> None:
    """
    Draw random strings until the target phrase appears.

    Args:
        run_config: Run configuration dict from YAML

    Returns:
        None (prints progress)
    """
    _banner("BRUTE FORCE")

    target = run_config.get('problem', {}).get('target', DEFAULT_TARGET)
    max_iterations = run_config.get('brute_force', {}).get('max_iterations')
    print(f"Target: '{target}'")
    seed = _resolve_seed(run_config)
    print()

    rng = np.random.default_rng(seed)
    iterations, found = brute_force_search(
        target, rng,
        max_iterations=max_iterations,
        on_progress=lambda n: print(f"Iteration: {n}")
    )

    if found:
        print(f"Solution found after {iterations} iterations!")
    else:
        print(f"No solution after {iterations} iterations")


def _plot_history(history: List[tuple], output_path: Path, title: str) -> None:
    # Set matplotlib to non-interactive backend to avoid display issues
    import matplotlib
    matplotlib.use('Agg')
    from .visualization_utils import plot_fitness_history

    plot_fitness_history(history, output_path, title=f"Best fitness: {title}")
