"""
Evolution engine.

Drives the generation loop: evaluate, select, vary, evaluate, check
termination. `EvolutionEngine.stream()` yields one EvolutionState per
generation; `EvolutionEngine.run()` consumes it until the termination
policy is satisfied and returns a structured result.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Union

import numpy as np

from .crossover import CROSSOVER_STRATEGIES, apply_crossover
from .data_models import Individual, InvalidConfiguration, Problem, is_better
from .fitness import evaluate_population
from .mutation import per_gene_mutation, validate_mutation_rate
from .pareto import ParetoArchive, non_dominated_sort
from .selection import NSGA2Selector, RouletteWheelSelector, Selector, select_survivors
from .termination import TerminationPolicy

logger = logging.getLogger(__name__)


ProgressCallback = Callable[[int, Any], Any]


@dataclass
class EngineConfig:
    """
    Engine parameters for one run.

    Attributes:
        population_size: Number of individuals per generation
        mutation_rate: Per-gene mutation probability in [0, 1]
        termination: Policy deciding when to stop
        crossover_strategy: Name of the crossover operator
        selector: Parent selector (None picks roulette or NSGA-II by objective count)
        seed: Seed for the run's random number generator
        elitism: Keep the best of parents + children instead of children only
        max_workers: Fitness evaluation pool size
        archive_max_size: Optional bound on the Pareto archive
    """
    population_size: int
    mutation_rate: float
    termination: TerminationPolicy
    crossover_strategy: str = 'midpoint'
    selector: Optional[Selector] = None
    seed: Optional[int] = None
    elitism: bool = False
    max_workers: Optional[int] = None
    archive_max_size: Optional[int] = None

    def __post_init__(self):
        """Validate configuration."""
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, int) \
                or self.population_size <= 0:
            raise InvalidConfiguration(
                f"Population size must be a positive integer, got: {self.population_size}"
            )

        self.mutation_rate = validate_mutation_rate(self.mutation_rate)

        if self.crossover_strategy not in CROSSOVER_STRATEGIES:
            raise InvalidConfiguration(f"Unknown crossover strategy: {self.crossover_strategy}")

        if not isinstance(self.termination, TerminationPolicy):
            raise InvalidConfiguration(f"Invalid termination policy: {self.termination!r}")

        if self.max_workers is not None and self.max_workers <= 0:
            raise InvalidConfiguration(f"max_workers must be positive, got: {self.max_workers}")


@dataclass
class Population:
    """
    Individuals of one generation.

    Attributes:
        generation: Generation index (0 for the random initial population)
        individuals: Ordered individuals
    """
    generation: int
    individuals: List[Individual]

    def best(self, problem: Problem) -> Individual:
        """
        Best individual of a single-objective population.

        Ties go to the earliest individual.
        """
        direction = problem.directions[0]
        best = self.individuals[0]
        for individual in self.individuals[1:]:
            if is_better(individual.fitness, best.fitness, direction):
                best = individual
        return best

    def front(self, problem: Problem) -> List[Individual]:
        """Current non-dominated front of the population."""
        fronts = non_dominated_sort(self.individuals, problem.directions)
        return fronts[0] if fronts else []

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self):
        return iter(self.individuals)


@dataclass
class EvolutionState:
    """
    Bookkeeping after one generation.

    Attributes:
        problem: Problem being optimized
        population: Current population
        best: Best individual of the run so far (single-objective)
        best_generation: Generation at which `best` was recorded
        steady_value: Latest run-best value (archive fitness set for
            multi-objective runs)
        steady_generations: Consecutive generations, the current one
            included, over which `steady_value` has not changed
        front: Non-dominated front of the current population (multi-objective)
        archive: Pareto archive (multi-objective)
        evaluations: Total fitness function calls so far
    """
    problem: Problem
    population: Population
    best: Optional[Individual] = None
    best_generation: Optional[int] = None
    steady_value: Any = None
    steady_generations: int = 0
    front: List[Individual] = field(default_factory=list)
    archive: Optional[ParetoArchive] = None
    evaluations: int = 0

    @property
    def generation(self) -> int:
        return self.population.generation

    @property
    def best_fitness(self):
        return self.best.fitness if self.best is not None else None


@dataclass
class SingleObjectiveResult:
    """Best individual of a single-objective run."""
    best: Individual
    generation: int
    generations_run: int

    @property
    def fitness(self) -> float:
        return self.best.fitness


@dataclass
class MultiObjectiveResult:
    """Pareto set of a multi-objective run, sorted by the first objective."""
    pareto_set: List[Individual]
    generations_run: int


EvolutionResult = Union[SingleObjectiveResult, MultiObjectiveResult]


class EvolutionEngine:
    """
    Generational GA over a fixed-length, fixed-alphabet encoding.

    Each engine instance owns its random number generator, generation
    counter and archive; separate runs share no state.
    """

    def __init__(
        self,
        problem: Problem,
        config: EngineConfig,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Args:
            problem: Problem plug-in
            config: Engine configuration
            rng: Injected random number generator (defaults to one seeded from config.seed)
        """
        config.termination.validate(problem)

        self.problem = problem
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self._evaluations = 0
        self.state: Optional[EvolutionState] = None

        if config.selector is not None:
            self.selector = config.selector
        elif problem.is_multi_objective:
            self.selector = NSGA2Selector()
        else:
            self.selector = RouletteWheelSelector()
        self.selector.validate(problem)

    def initial_population(self) -> Population:
        """
        Create and evaluate the random generation-0 population.

        Returns:
            Evaluated population
        """
        individuals = [
            Individual(chromosome=self.problem.random_chromosome(self.rng))
            for _ in range(self.config.population_size)
        ]
        self._evaluations += evaluate_population(individuals, self.problem, self.config.max_workers)
        return Population(generation=0, individuals=individuals)

    def step(self, population: Population) -> Population:
        """
        Produce and evaluate the next generation.

        Args:
            population: Evaluated current population

        Returns:
            Evaluated next population of the same size
        """
        parents = self.selector.prepare(population.individuals, self.problem)

        children = []
        for _ in range(self.config.population_size):
            parent_a = parents.draw(self.rng)
            parent_b = parents.draw(self.rng)
            child = apply_crossover(
                parent_a.chromosome, parent_b.chromosome,
                self.config.crossover_strategy, self.rng
            )
            child = per_gene_mutation(child, self.config.mutation_rate, self.rng)
            children.append(Individual(chromosome=child))

        self._evaluations += evaluate_population(children, self.problem, self.config.max_workers)

        if self.config.elitism:
            children = select_survivors(
                population.individuals + children,
                self.config.population_size,
                self.problem
            )

        return Population(generation=population.generation + 1, individuals=children)

    def stream(self) -> Iterator[EvolutionState]:
        """
        Evolve indefinitely, yielding the state after every generation.

        Generation 0 is yielded first. The consumer decides when to stop.

        Yields:
            EvolutionState shared across yields and updated in place
        """
        population = self.initial_population()
        state = EvolutionState(problem=self.problem, population=population)
        if self.problem.is_multi_objective:
            state.archive = ParetoArchive(self.problem.directions, self.config.archive_max_size)
        self.state = state

        self._record(state, population)
        yield state

        while True:
            population = self.step(population)
            self._record(state, population)
            yield state

    def _record(self, state: EvolutionState, population: Population) -> None:
        state.population = population
        state.evaluations = self._evaluations

        if self.problem.is_multi_objective:
            state.front = population.front(self.problem)
            accepted = state.archive.merge(state.front)
            # the archive only changes when it accepts a candidate
            if accepted or state.steady_generations == 0:
                self._track(state, state.archive.fitness_set())
            else:
                state.steady_generations += 1
            logger.debug("Generation %d: front=%d archive=%d",
                         population.generation, len(state.front), len(state.archive))
            return

        candidate = population.best(self.problem)
        if state.best is None or is_better(candidate.fitness, state.best.fitness,
                                           self.problem.directions[0]):
            state.best = candidate.copy()
            state.best_generation = population.generation
        self._track(state, state.best.fitness)
        logger.debug("Generation %d: best=%s", population.generation, state.best.fitness)

    @staticmethod
    def _track(state: EvolutionState, value) -> None:
        if state.steady_generations and value == state.steady_value:
            state.steady_generations += 1
        else:
            state.steady_value = value
            state.steady_generations = 1

    def run(self, on_generation: Optional[ProgressCallback] = None) -> EvolutionResult:
        """
        Evolve until the termination policy is satisfied.

        Args:
            on_generation: Progress callback invoked once per generation with
                (generation, run-best fitness) or (generation, current front);
                its return value is ignored

        Returns:
            SingleObjectiveResult or MultiObjectiveResult
        """
        logger.info("Starting %s: population=%d mutation_rate=%s termination=%r",
                    self.problem.name, self.config.population_size,
                    self.config.mutation_rate, self.config.termination)

        state = None
        for state in self.stream():
            if on_generation is not None:
                if self.problem.is_multi_objective:
                    on_generation(state.generation, list(state.front))
                else:
                    on_generation(state.generation, state.best_fitness)

            if self.config.termination.is_satisfied(state):
                break

        logger.info("Terminated %s after generation %d (%d evaluations)",
                    self.problem.name, state.generation, state.evaluations)

        if self.problem.is_multi_objective:
            return MultiObjectiveResult(
                pareto_set=state.archive.members(),
                generations_run=state.generation
            )

        return SingleObjectiveResult(
            best=state.best,
            generation=state.best_generation,
            generations_run=state.generation
        )
