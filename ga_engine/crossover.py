"""
Crossover operators for the GA engine.

Implements midpoint and random-cut single-point crossover. Both operators
derive a new chromosome and leave their parents untouched.
"""

from typing import Callable, Dict, Optional

import numpy as np

from .data_models import Chromosome, InvalidConfiguration


def _check_compatible(parent_a: Chromosome, parent_b: Chromosome) -> None:
    if len(parent_a) != len(parent_b):
        raise InvalidConfiguration(
            f"Crossover requires equal chromosome lengths, got {len(parent_a)} and {len(parent_b)}"
        )


def midpoint_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: Optional[np.random.Generator] = None
) -> Chromosome:
    """
    Combine two parents at the fixed midpoint.

    Genes [0, L//2) come from `parent_a` and genes [L//2, L) from `parent_b`.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Unused, accepted for a uniform operator signature

    Returns:
        Child chromosome

    Raises:
        InvalidConfiguration: If the parents differ in length
    """
    _check_compatible(parent_a, parent_b)

    cut = len(parent_a) // 2
    return Chromosome(
        genes=parent_a.genes[:cut] + parent_b.genes[cut:],
        alphabet=parent_a.alphabet
    )


def single_point_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    rng: np.random.Generator
) -> Chromosome:
    """
    Combine two parents at a random cut point.

    The cut is drawn from [1, L) so the child always carries genes of both
    parents. Chromosomes shorter than two genes cannot be cut and the child
    is a copy of `parent_a`.

    Args:
        parent_a: First parent
        parent_b: Second parent
        rng: Random number generator

    Returns:
        Child chromosome

    Raises:
        InvalidConfiguration: If the parents differ in length
    """
    _check_compatible(parent_a, parent_b)

    length = len(parent_a)
    if length < 2:
        return Chromosome(genes=parent_a.genes, alphabet=parent_a.alphabet)

    cut = int(rng.integers(1, length))
    return Chromosome(
        genes=parent_a.genes[:cut] + parent_b.genes[cut:],
        alphabet=parent_a.alphabet
    )


CROSSOVER_STRATEGIES: Dict[str, Callable[..., Chromosome]] = {
    'midpoint': midpoint_crossover,
    'single_point': single_point_crossover,
}


def apply_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    strategy: str,
    rng: np.random.Generator
) -> Chromosome:
    """
    Apply crossover using the named strategy.

    Args:
        parent_a: First parent
        parent_b: Second parent
        strategy: Strategy name ('midpoint' or 'single_point')
        rng: Random number generator

    Returns:
        Child chromosome

    Raises:
        ValueError: If strategy is unknown
    """
    try:
        operator = CROSSOVER_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown crossover strategy: {strategy}") from None

    return operator(parent_a, parent_b, rng)
