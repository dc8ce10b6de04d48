"""
Mutation operators for the GA engine.

Implements per-gene mutation: every position gets its own Bernoulli trial
and, on success, a freshly drawn uniform allele.
"""

from typing import Dict

import numpy as np

from .data_models import Chromosome, InvalidConfiguration


def validate_mutation_rate(rate: float) -> float:
    """
    Check that a mutation rate is a probability.

    Args:
        rate: Mutation rate to check

    Returns:
        The rate as float

    Raises:
        InvalidConfiguration: If rate is outside [0, 1]
    """
    try:
        rate = float(rate)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"Mutation rate must be a number, got: {rate!r}") from None

    if not 0.0 <= rate <= 1.0:
        raise InvalidConfiguration(f"Mutation rate must be in [0, 1], got: {rate}")
    return rate


def per_gene_mutation(
    chromosome: Chromosome,
    rate: float,
    rng: np.random.Generator
) -> Chromosome:
    """
    Mutate a chromosome gene by gene.

    Each position is redrawn independently with probability `rate`. A
    redrawn gene may coincide with the original allele.

    Args:
        chromosome: Chromosome to mutate (left unchanged)
        rate: Per-gene mutation probability in [0, 1]
        rng: Random number generator

    Returns:
        New chromosome

    Raises:
        InvalidConfiguration: If rate is outside [0, 1]
    """
    rate = validate_mutation_rate(rate)

    trials = rng.random(size=len(chromosome))
    positions = [i for i, draw in enumerate(trials) if draw < rate]
    if not positions:
        return Chromosome(genes=chromosome.genes, alphabet=chromosome.alphabet)

    alphabet = chromosome.alphabet
    replacements = rng.integers(0, len(alphabet), size=len(positions))

    genes = list(chromosome.genes)
    for position, allele_index in zip(positions, replacements):
        genes[position] = alphabet[int(allele_index)]

    return Chromosome(genes=tuple(genes), alphabet=alphabet)


def mutation_statistics(original: Chromosome, mutated: Chromosome) -> Dict:
    """
    Calculate statistics about a mutation.

    Args:
        original: Chromosome before mutation
        mutated: Chromosome after mutation

    Returns:
        Dictionary with mutation statistics
    """
    changed = sum(1 for a, b in zip(original.genes, mutated.genes) if a != b)

    return {
        'length': len(mutated),
        'positions_changed': changed,
        'change_rate': changed / max(len(mutated), 1),
    }
