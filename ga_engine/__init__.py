"""
GA Engine

A population-based genetic algorithm engine for fixed-length,
fixed-alphabet encodings, with single- and multi-objective (Pareto) runs.

Key Features:
- Immutable chromosomes; operators always derive new ones
- Explicit, seedable random number generator per run
- Parallel fitness evaluation on a bounded worker pool
- Roulette wheel and NSGA-II (front + crowding) selection
- Pluggable termination policies
- Run-wide Pareto archive for multi-objective problems

Modules:
- data_models: Chromosome, Individual, Problem, Direction
- crossover: Midpoint and random-cut single-point crossover
- mutation: Per-gene mutation
- fitness: Cached, parallel fitness evaluation
- selection: Mating pool, NSGA-II ranking, survivor selection
- pareto: Dominance, non-dominated sorting, crowding distance, archive
- termination: Generation count, fitness threshold, steady state
- engine: Engine configuration, generation loop, results
- io_utils: CSV/YAML export of run results
- visualization_utils: Fitness history and Pareto front plots
- orchestration: Console runs of the demo problems
- cli: Run configuration loading, validation and dispatch
"""

__version__ = "0.1.0"
__author__ = "GA Engine Team"

from .data_models import Chromosome, Individual, Problem, Direction, InvalidConfiguration
from .engine import (
    EngineConfig,
    EvolutionEngine,
    EvolutionState,
    Population,
    SingleObjectiveResult,
    MultiObjectiveResult,
)
from .pareto import ParetoArchive
from .termination import FixedGenerationCount, FitnessThreshold, SteadyState, AnyOf

__all__ = [
    "Chromosome",
    "Individual",
    "Problem",
    "Direction",
    "InvalidConfiguration",
    "EngineConfig",
    "EvolutionEngine",
    "EvolutionState",
    "Population",
    "SingleObjectiveResult",
    "MultiObjectiveResult",
    "ParetoArchive",
    "FixedGenerationCount",
    "FitnessThreshold",
    "SteadyState",
    "AnyOf",
]
