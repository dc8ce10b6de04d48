"""
Data models for the GA engine.

Core data structures representing chromosomes, individuals and problem
definitions, plus the configuration error raised across the engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Hashable, Optional, Sequence, Union

import numpy as np


Fitness = Union[float, tuple[float, ...]]


class InvalidConfiguration(ValueError):
    """Raised when engine parameters or operator inputs are invalid."""
    pass


class Direction(Enum):
    """Optimization direction of a single objective."""
    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"


def integer_alphabet(low: int, high: int) -> tuple[int, ...]:
    """
    Build an integer alphabet covering [low, high].

    Args:
        low: Smallest allele (inclusive)
        high: Largest allele (inclusive)

    Returns:
        Tuple of admissible integer alleles
    """
    if high < low:
        raise InvalidConfiguration(f"Empty integer range: [{low}, {high}]")
    return tuple(range(low, high + 1))


@dataclass(frozen=True)
class Chromosome:
    """
    Fixed-length, immutable sequence of genes over a finite alphabet.

    Attributes:
        genes: Gene values, one allele per position
        alphabet: Admissible alleles for every position
    """
    genes: tuple
    alphabet: tuple

    def __post_init__(self):
        """Normalize sequences to tuples so chromosomes stay hashable."""
        if not isinstance(self.genes, tuple):
            object.__setattr__(self, "genes", tuple(self.genes))
        if not isinstance(self.alphabet, tuple):
            object.__setattr__(self, "alphabet", tuple(self.alphabet))

    @classmethod
    def random(
        cls,
        alphabet: Sequence[Hashable],
        length: int,
        rng: np.random.Generator
    ) -> "Chromosome":
        """
        Create a chromosome whose genes are drawn independently and uniformly.

        Args:
            alphabet: Admissible alleles
            length: Number of genes
            rng: Random number generator

        Returns:
            New random chromosome

        Raises:
            InvalidConfiguration: If the alphabet is empty or length is not positive
        """
        alphabet = tuple(alphabet)
        if not alphabet:
            raise InvalidConfiguration("Alphabet must contain at least one allele")
        if length <= 0:
            raise InvalidConfiguration(f"Chromosome length must be positive, got: {length}")

        indices = rng.integers(0, len(alphabet), size=length)
        return cls(genes=tuple(alphabet[int(i)] for i in indices), alphabet=alphabet)

    def crossover(self, other: "Chromosome") -> "Chromosome":
        """Midpoint crossover: first half from self, second half from other."""
        from .crossover import midpoint_crossover
        return midpoint_crossover(self, other)

    def mutate(self, rate: float, rng: np.random.Generator) -> "Chromosome":
        """Redraw each gene independently with probability `rate`."""
        from .mutation import per_gene_mutation
        return per_gene_mutation(self, rate, rng)

    def phenotype(self) -> str:
        """
        Decoded view of the genes.

        Returns:
            Genes joined into a single string
        """
        return "".join(str(gene) for gene in self.genes)

    def __len__(self) -> int:
        return len(self.genes)

    def __getitem__(self, index):
        return self.genes[index]


@dataclass
class Individual:
    """
    A chromosome paired with its cached fitness.

    Attributes:
        chromosome: Genetic material of this individual
        fitness: Scalar or vector fitness, None until evaluated
        metadata: Additional information (origin, generation, etc.)
    """
    chromosome: Chromosome
    fitness: Optional[Fitness] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_evaluated(self) -> bool:
        return self.fitness is not None

    def copy(self) -> "Individual":
        """
        Copy this individual, sharing the immutable chromosome.

        Returns:
            New Individual with copied metadata
        """
        return Individual(
            chromosome=self.chromosome,
            fitness=self.fitness,
            metadata=self.metadata.copy()
        )


@dataclass(frozen=True)
class Problem:
    """
    Problem plug-in consumed by the engine.

    Attributes:
        alphabet: Admissible alleles for every gene
        length: Chromosome length
        fitness_function: Pure function mapping a chromosome to a float
            (one objective) or a sequence of floats (several objectives)
        directions: Optimization direction per objective
        name: Human readable problem name
    """
    alphabet: tuple
    length: int
    fitness_function: Callable[[Chromosome], Any]
    directions: tuple = (Direction.MAXIMIZE,)
    name: str = "problem"

    def __post_init__(self):
        """Validate problem definition."""
        if not isinstance(self.alphabet, tuple):
            object.__setattr__(self, "alphabet", tuple(self.alphabet))
        if not isinstance(self.directions, tuple):
            object.__setattr__(self, "directions", tuple(self.directions))

        if not self.alphabet:
            raise InvalidConfiguration("Problem alphabet must contain at least one allele")
        if not isinstance(self.length, int) or self.length <= 0:
            raise InvalidConfiguration(f"Chromosome length must be a positive integer, got: {self.length}")
        if not self.directions:
            raise InvalidConfiguration("Problem must declare at least one objective direction")
        for direction in self.directions:
            if not isinstance(direction, Direction):
                raise InvalidConfiguration(f"Invalid objective direction: {direction!r}")

    @property
    def objective_count(self) -> int:
        return len(self.directions)

    @property
    def is_multi_objective(self) -> bool:
        return len(self.directions) > 1

    def random_chromosome(self, rng: np.random.Generator) -> Chromosome:
        return Chromosome.random(self.alphabet, self.length, rng)


def oriented(fitness: Fitness, directions: Sequence[Direction]) -> tuple[float, ...]:
    """
    Orient a fitness value so that smaller is better in every objective.

    Args:
        fitness: Scalar or vector fitness
        directions: Optimization direction per objective

    Returns:
        Tuple of floats, maximized objectives negated
    """
    values = fitness if isinstance(fitness, tuple) else (fitness,)
    return tuple(
        -value if direction is Direction.MAXIMIZE else value
        for value, direction in zip(values, directions)
    )


def is_better(a: float, b: float, direction: Direction) -> bool:
    """True if scalar fitness `a` is strictly better than `b`."""
    if direction is Direction.MAXIMIZE:
        return a > b
    return a < b
