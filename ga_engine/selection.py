"""
Selection strategies for the GA engine.

A selector turns an evaluated population into a parent source for one
generation step:

- RouletteWheelSelector: fitness-proportional mating pool (single objective)
- NSGA2Selector: non-dominated fronts + crowding distance, crowded tournament

Survivor selection (only used with elitism) lives here as well.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from .data_models import Direction, Individual, InvalidConfiguration, Problem, oriented
from .pareto import crowding_distance, non_dominated_sort

logger = logging.getLogger(__name__)

_EPSILON = 1e-9


class MatingPool:
    """
    Transient multiset of individuals sampled for crossover parents.

    When the weighted pool is empty, parents are drawn uniformly from the
    whole population instead.
    """

    def __init__(self, pool: List[Individual], population: Sequence[Individual]):
        if not population:
            raise ValueError("Cannot build a mating pool from an empty population")
        self.pool = pool
        self.population = list(population)

    @property
    def is_degenerate(self) -> bool:
        return not self.pool

    def draw(self, rng: np.random.Generator) -> Individual:
        """Draw one parent uniformly, with replacement."""
        source = self.pool if self.pool else self.population
        return source[int(rng.integers(0, len(source)))]

    def __len__(self) -> int:
        return len(self.pool)


class Selector:
    """Base class for parent selectors."""

    def validate(self, problem: Problem) -> None:
        """Reject problems the selector cannot rank."""
        pass

    def prepare(self, population: Sequence[Individual], problem: Problem):
        raise NotImplementedError


class RouletteWheelSelector(Selector):
    """
    Fitness-proportional selection through a replicated mating pool.

    Each individual appears floor(fitness * scale) times in the pool.
    """

    def __init__(self, scale: Optional[float] = None, normalize: bool = False):
        """
        Args:
            scale: Replication constant K (defaults to the chromosome length)
            normalize: Min-max scale fitness to [0, 1] within the population
                before replicating, so negative fitness values still select
        """
        if scale is not None and scale <= 0:
            raise ValueError(f"Roulette scale must be positive, got: {scale}")
        self.scale = scale
        self.normalize = normalize

    def validate(self, problem: Problem) -> None:
        if problem.is_multi_objective:
            raise InvalidConfiguration("Roulette wheel selection requires a single-objective problem")

    def prepare(self, population: Sequence[Individual], problem: Problem) -> MatingPool:
        """
        Build the mating pool for one generation step.

        Args:
            population: Evaluated individuals
            problem: Problem (provides direction and default scale)

        Returns:
            MatingPool
        """
        self.validate(problem)

        scale = self.scale if self.scale is not None else problem.length
        direction = problem.directions[0]
        values = [
            ind.fitness if direction is Direction.MAXIMIZE else -ind.fitness
            for ind in population
        ]

        if self.normalize:
            low, high = min(values), max(values)
            span = high - low
            values = [(v - low) / span if span > 0 else 0.0 for v in values]

        pool = []
        for individual, value in zip(population, values):
            # 5/18 * 18 must give 5 copies, not 4
            copies = math.floor(value * scale + _EPSILON) if value > 0 else 0
            pool.extend([individual] * copies)

        mating_pool = MatingPool(pool, population)
        if mating_pool.is_degenerate:
            logger.debug("Mating pool empty, falling back to uniform sampling")
        return mating_pool


class RankedPopulation:
    """
    Population annotated with front index and crowding distance.

    Parents are drawn by crowded binary tournament: the lower front wins,
    then the larger crowding distance, ties go to the first contender.
    """

    def __init__(self, fronts: List[List[Individual]], directions: Sequence[Direction]):
        self.fronts = fronts
        self.members: List[Individual] = []
        self.rank: List[int] = []
        self.distance: List[float] = []

        for front_index, front in enumerate(fronts):
            distances = crowding_distance(front, directions)
            self.members.extend(front)
            self.rank.extend([front_index] * len(front))
            self.distance.extend(distances)

        if not self.members:
            raise ValueError("Cannot rank an empty population")

    def draw(self, rng: np.random.Generator) -> Individual:
        first = int(rng.integers(0, len(self.members)))
        second = int(rng.integers(0, len(self.members)))
        return self.members[self._winner(first, second)]

    def _winner(self, first: int, second: int) -> int:
        if self.rank[second] < self.rank[first]:
            return second
        if self.rank[second] == self.rank[first] and self.distance[second] > self.distance[first]:
            return second
        return first


class NSGA2Selector(Selector):
    """Non-dominated sorting + crowding distance parent selection."""

    def prepare(self, population: Sequence[Individual], problem: Problem) -> RankedPopulation:
        fronts = non_dominated_sort(population, problem.directions)
        return RankedPopulation(fronts, problem.directions)


def select_by_rank_and_crowding(
    individuals: Sequence[Individual],
    quota: int,
    directions: Sequence[Direction]
) -> List[Individual]:
    """
    Fill a quota with whole fronts, splitting the last one by crowding.

    Fronts are taken in increasing index order. When a front does not fit,
    its members with the largest crowding distance are kept first.

    Args:
        individuals: Evaluated individuals
        quota: Number of individuals to select
        directions: Optimization direction per objective

    Returns:
        Selected individuals
    """
    selected: List[Individual] = []

    for front in non_dominated_sort(individuals, directions):
        remaining = quota - len(selected)
        if remaining <= 0:
            break
        if len(front) <= remaining:
            selected.extend(front)
            continue

        distances = crowding_distance(front, directions)
        order = sorted(range(len(front)), key=lambda i: distances[i], reverse=True)
        selected.extend(front[i] for i in order[:remaining])
        break

    return selected


def select_survivors(
    individuals: Sequence[Individual],
    quota: int,
    problem: Problem
) -> List[Individual]:
    """
    Pick the individuals carried into the next generation under elitism.

    Args:
        individuals: Parents and children, all evaluated
        quota: Population size to keep
        problem: Problem (objective count and directions)

    Returns:
        Selected individuals
    """
    if problem.is_multi_objective:
        return select_by_rank_and_crowding(individuals, quota, problem.directions)

    ranked = sorted(individuals, key=lambda ind: oriented(ind.fitness, problem.directions))
    return ranked[:quota]


SELECTION_STRATEGIES = {
    'roulette': lambda: RouletteWheelSelector(),
    'roulette_normalized': lambda: RouletteWheelSelector(normalize=True),
    'nsga2': lambda: NSGA2Selector(),
}


def create_selector(name: str):
    """
    Create a selector by name.

    Raises:
        ValueError: If name is unknown
    """
    try:
        return SELECTION_STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"Unknown selection strategy: {name}") from None
