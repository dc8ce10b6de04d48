"""
Infinite monkeys problem.

Evolve a string over the alphabet {space, a-z} towards a target phrase.
Also provides the brute-force baseline that draws whole random strings
until the target appears.
"""

import string
from typing import Callable, Optional, Tuple

import numpy as np

from ga_engine.data_models import Chromosome, Direction, InvalidConfiguration, Problem


DEFAULT_TARGET = "to be or not to be"

ALPHABET: Tuple[str, ...] = (" ",) + tuple(string.ascii_lowercase)


def validate_target(target: str) -> str:
    """
    Check that a target phrase can be spelled with the alphabet.

    Raises:
        InvalidConfiguration: If the target is empty or has unknown characters
    """
    if not target:
        raise InvalidConfiguration("Target phrase must not be empty")

    unknown = sorted(set(target) - set(ALPHABET))
    if unknown:
        raise InvalidConfiguration(f"Target contains characters outside the alphabet: {unknown}")
    return target


def match_fitness(target: str) -> Callable[[Chromosome], float]:
    """
    Build the fitness function for a target phrase.

    The fitness is the fraction of positions whose gene equals the target
    character, so a perfect match scores 1.0.

    Args:
        target: Phrase to recover

    Returns:
        Fitness function
    """
    def fitness(chromosome: Chromosome) -> float:
        matches = sum(1 for gene, char in zip(chromosome.genes, target) if gene == char)
        return matches / len(target)

    return fitness


def create_problem(target: str = DEFAULT_TARGET) -> Problem:
    """
    Create the string-search problem for `target`.

    Args:
        target: Phrase to recover

    Returns:
        Single-objective, maximizing Problem
    """
    validate_target(target)
    return Problem(
        alphabet=ALPHABET,
        length=len(target),
        fitness_function=match_fitness(target),
        directions=(Direction.MAXIMIZE,),
        name="infinite_monkeys"
    )


def brute_force_search(
    target: str,
    rng: np.random.Generator,
    max_iterations: Optional[int] = None,
    on_progress: Optional[Callable[[int], None]] = None,
    progress_every: int = 10000
) -> Tuple[int, bool]:
    """
    Draw uniformly random strings until one equals the target.

    Args:
        target: Phrase to recover
        rng: Random number generator
        max_iterations: Give up after this many draws (None means never)
        on_progress: Called with the iteration count every `progress_every` draws
        progress_every: Progress reporting interval

    Returns:
        Tuple of (iterations, found)
    """
    validate_target(target)

    iterations = 0
    while max_iterations is None or iterations < max_iterations:
        iterations += 1
        proposal = Chromosome.random(ALPHABET, len(target), rng).phenotype()
        if proposal == target:
            return iterations, True
        if on_progress is not None and iterations % progress_every == 0:
            on_progress(iterations)

    return iterations, False
