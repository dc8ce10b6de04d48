"""
Pareto dominance, non-dominated sorting and the run-wide Pareto archive.

All comparisons orient objectives so that smaller is better; the
objective directions of the problem decide which values get negated.
"""

import logging
from typing import List, Optional, Sequence, Set

from .data_models import Chromosome, Direction, Individual, oriented

logger = logging.getLogger(__name__)


def dominates(a, b, directions: Sequence[Direction]) -> bool:
    """
    Check whether fitness `a` Pareto-dominates fitness `b`.

    `a` dominates `b` iff it is no worse in every objective and strictly
    better in at least one.

    Args:
        a: Fitness (scalar or vector) of the first individual
        b: Fitness (scalar or vector) of the second individual
        directions: Optimization direction per objective

    Returns:
        True if `a` dominates `b`
    """
    strictly_better = False
    for value_a, value_b in zip(oriented(a, directions), oriented(b, directions)):
        if value_a > value_b:
            return False
        if value_a < value_b:
            strictly_better = True
    return strictly_better


def non_dominated_sort(
    individuals: Sequence[Individual],
    directions: Sequence[Direction]
) -> List[List[Individual]]:
    """
    Partition individuals into successive non-dominated fronts.

    Front 0 holds the individuals dominated by no one; front k holds the
    non-dominated set once fronts 0..k-1 are removed.

    Args:
        individuals: Evaluated individuals
        directions: Optimization direction per objective

    Returns:
        List of fronts, each a list of individuals in input order
    """
    count = len(individuals)
    dominated_by_me: List[List[int]] = [[] for _ in range(count)]
    domination_count = [0] * count

    for i in range(count):
        for j in range(i + 1, count):
            if dominates(individuals[i].fitness, individuals[j].fitness, directions):
                dominated_by_me[i].append(j)
                domination_count[j] += 1
            elif dominates(individuals[j].fitness, individuals[i].fitness, directions):
                dominated_by_me[j].append(i)
                domination_count[i] += 1

    fronts: List[List[int]] = [[i for i in range(count) if domination_count[i] == 0]]
    while fronts[-1]:
        next_front = []
        for i in fronts[-1]:
            for j in dominated_by_me[i]:
                domination_count[j] -= 1
                if domination_count[j] == 0:
                    next_front.append(j)
        fronts.append(sorted(next_front))
    fronts.pop()

    return [[individuals[i] for i in front] for front in fronts]


def crowding_distance(
    front: Sequence[Individual],
    directions: Sequence[Direction]
) -> List[float]:
    """
    Compute the crowding distance of every member of a front.

    For each objective the front is sorted by that objective; boundary
    members get an infinite distance and interior members accumulate the
    gap between their two neighbours, normalized by the objective range.

    Args:
        front: Members of one front
        directions: Optimization direction per objective

    Returns:
        Distances aligned with `front`
    """
    size = len(front)
    if size == 0:
        return []

    distances = [0.0] * size
    if size <= 2:
        return [float('inf')] * size

    values = [oriented(member.fitness, directions) for member in front]

    for objective in range(len(directions)):
        order = sorted(range(size), key=lambda i: values[i][objective])
        low = values[order[0]][objective]
        high = values[order[-1]][objective]

        distances[order[0]] = float('inf')
        distances[order[-1]] = float('inf')

        span = high - low
        if span == 0:
            continue

        for position in range(1, size - 1):
            index = order[position]
            gap = values[order[position + 1]][objective] - values[order[position - 1]][objective]
            distances[index] += gap / span

    return distances


class ParetoArchive:
    """
    Non-dominated individuals accumulated across a whole run.

    Merging is idempotent: feeding the same front twice leaves the archive
    unchanged. Genotypes are unique within the archive.
    """

    def __init__(self, directions: Sequence[Direction], max_size: Optional[int] = None):
        """
        Args:
            directions: Optimization direction per objective
            max_size: Optional bound; the most crowded members are pruned first
        """
        if max_size is not None and max_size <= 0:
            raise ValueError(f"Archive max_size must be positive, got: {max_size}")

        self.directions = tuple(directions)
        self.max_size = max_size
        self._members: List[Individual] = []
        self._genotypes: Set[Chromosome] = set()

    def merge(self, individuals: Sequence[Individual]) -> int:
        """
        Merge candidates into the archive.

        A candidate is skipped if its genotype is already archived or an
        archived member dominates it; archived members dominated by an
        accepted candidate are discarded.

        Args:
            individuals: Evaluated candidates (typically a generation's front)

        Returns:
            Number of candidates accepted
        """
        accepted = 0
        for candidate in individuals:
            if candidate.fitness is None:
                raise ValueError("Cannot archive an unevaluated individual")

            if candidate.chromosome in self._genotypes:
                continue
            if any(dominates(m.fitness, candidate.fitness, self.directions) for m in self._members):
                continue

            kept = []
            for m in self._members:
                if dominates(candidate.fitness, m.fitness, self.directions):
                    self._genotypes.discard(m.chromosome)
                else:
                    kept.append(m)
            self._members = kept
            self._members.append(candidate.copy())
            self._genotypes.add(candidate.chromosome)
            accepted += 1

        if self.max_size is not None and len(self._members) > self.max_size:
            self._prune()

        return accepted

    def _prune(self) -> None:
        while len(self._members) > self.max_size:
            distances = crowding_distance(self._members, self.directions)
            most_crowded = min(range(len(distances)), key=lambda i: distances[i])
            self._genotypes.discard(self._members.pop(most_crowded).chromosome)
        logger.debug("Pruned Pareto archive to %d members", len(self._members))

    def members(self) -> List[Individual]:
        """
        Archived individuals sorted by the first objective ascending.

        Returns:
            Sorted list of members
        """
        return sorted(self._members, key=lambda m: m.fitness[0])

    def fitness_set(self) -> tuple:
        """Sorted tuple of archived fitness vectors."""
        return tuple(sorted(m.fitness for m in self._members))

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self):
        return iter(self.members())
