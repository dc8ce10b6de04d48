"""
Termination policies for the GA engine.

Policies are stateless predicates over the bookkeeping the engine keeps in
its EvolutionState (generation index, run-best fitness, steady counter).
The engine checks the policy after every generation.
"""

from .data_models import Direction, InvalidConfiguration, Problem


class TerminationPolicy:
    """Base class for termination policies."""

    def validate(self, problem: Problem) -> None:
        """Reject problems the policy cannot judge."""
        pass

    def is_satisfied(self, state) -> bool:
        raise NotImplementedError

    def __call__(self, state) -> bool:
        return self.is_satisfied(state)


class FixedGenerationCount(TerminationPolicy):
    """Stop once the generation index reaches `generations`."""

    def __init__(self, generations: int):
        if not isinstance(generations, int) or generations < 0:
            raise InvalidConfiguration(
                f"Generation count must be a non-negative integer, got: {generations}"
            )
        self.generations = generations

    def is_satisfied(self, state) -> bool:
        return state.generation >= self.generations

    def __repr__(self) -> str:
        return f"FixedGenerationCount({self.generations})"


class FitnessThreshold(TerminationPolicy):
    """
    Stop once the run-best scalar fitness reaches `threshold`.

    Reaching means >= for a maximized objective and <= for a minimized one.
    """

    def __init__(self, threshold: float):
        self.threshold = float(threshold)

    def validate(self, problem: Problem) -> None:
        if problem.is_multi_objective:
            raise InvalidConfiguration("FitnessThreshold requires a single-objective problem")

    def is_satisfied(self, state) -> bool:
        best = state.best_fitness
        if best is None:
            return False
        if state.problem.directions[0] is Direction.MAXIMIZE:
            return best >= self.threshold
        return best <= self.threshold

    def __repr__(self) -> str:
        return f"FitnessThreshold({self.threshold})"


class SteadyState(TerminationPolicy):
    """
    Stop once the best fitness is unchanged for `window` consecutive generations.

    For multi-objective runs the tracked value is the archive's fitness set.
    """

    def __init__(self, window: int):
        if not isinstance(window, int) or window <= 0:
            raise InvalidConfiguration(f"Steady state window must be a positive integer, got: {window}")
        self.window = window

    def is_satisfied(self, state) -> bool:
        return state.steady_generations >= self.window

    def __repr__(self) -> str:
        return f"SteadyState({self.window})"


class AnyOf(TerminationPolicy):
    """Stop as soon as any of the wrapped policies is satisfied."""

    def __init__(self, *policies: TerminationPolicy):
        if not policies:
            raise InvalidConfiguration("AnyOf requires at least one policy")
        self.policies = policies

    def validate(self, problem: Problem) -> None:
        for policy in self.policies:
            policy.validate(problem)

    def is_satisfied(self, state) -> bool:
        return any(policy.is_satisfied(state) for policy in self.policies)

    def __repr__(self) -> str:
        return f"AnyOf({', '.join(repr(p) for p in self.policies)})"
