"""
Fitness evaluation for the GA engine.

Evaluates the unevaluated individuals of one generation on a bounded
thread pool and caches the result on each individual.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from .data_models import Chromosome, Fitness, Individual, Problem

logger = logging.getLogger(__name__)


def normalize_fitness(value, problem: Problem) -> Fitness:
    """
    Convert a raw fitness function result to the engine representation.

    Scalar problems get a float, multi-objective problems a tuple of floats.

    Args:
        value: Raw value returned by the fitness function
        problem: Problem declaring the objective count

    Returns:
        Normalized fitness

    Raises:
        ValueError: If the number of objectives does not match the problem
    """
    if not problem.is_multi_objective:
        if isinstance(value, (tuple, list)):
            if len(value) != 1:
                raise ValueError(
                    f"Fitness function returned {len(value)} objectives, expected 1"
                )
            value = value[0]
        return float(value)

    values = tuple(float(v) for v in value)
    if len(values) != problem.objective_count:
        raise ValueError(
            f"Fitness function returned {len(values)} objectives, "
            f"expected {problem.objective_count}"
        )
    return values


def evaluate(chromosome: Chromosome, problem: Problem) -> Fitness:
    """Evaluate a single chromosome."""
    return normalize_fitness(problem.fitness_function(chromosome), problem)


def evaluate_population(
    individuals: Sequence[Individual],
    problem: Problem,
    max_workers: Optional[int] = None
) -> int:
    """
    Evaluate every unevaluated individual exactly once.

    Identical chromosomes share one evaluation. The call blocks until all
    evaluations are complete; an exception raised by the fitness function
    propagates to the caller.

    Args:
        individuals: Individuals of one generation
        problem: Problem providing the fitness function
        max_workers: Worker pool size (None lets the executor decide, 1 runs inline)

    Returns:
        Number of fitness function calls made
    """
    pending: Dict[Chromosome, List[Individual]] = {}
    for individual in individuals:
        if not individual.is_evaluated:
            pending.setdefault(individual.chromosome, []).append(individual)

    if not pending:
        return 0

    chromosomes = list(pending)

    if max_workers == 1 or len(chromosomes) == 1:
        results = [evaluate(c, problem) for c in chromosomes]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda c: evaluate(c, problem), chromosomes))

    for chromosome, fitness in zip(chromosomes, results):
        for individual in pending[chromosome]:
            individual.fitness = fitness

    logger.debug("Evaluated %d distinct chromosomes for %d individuals",
                 len(chromosomes), sum(len(v) for v in pending.values()))

    return len(chromosomes)
