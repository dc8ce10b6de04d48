"""
Resource planning problem.

Assign every task to one resource. Gene i holds the index of the resource
executing task i. A task takes workload / items_per_minute minutes and
costs that time multiplied by the resource's costs_per_minute.

Two configurations of the same domain are provided:
- single objective: maximize -(total time + total cost)
- multi objective: minimize (total time, total cost)
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ga_engine.data_models import (
    Chromosome, Direction, InvalidConfiguration, Problem, integer_alphabet
)


@dataclass(frozen=True)
class Resource:
    """
    A resource which executes tasks.

    Attributes:
        items_per_minute: Items produced per minute
        costs_per_minute: Cost of one minute of work
    """
    items_per_minute: float
    costs_per_minute: float

    def __post_init__(self):
        if self.items_per_minute <= 0:
            raise InvalidConfiguration(
                f"items_per_minute must be positive, got: {self.items_per_minute}"
            )
        if self.costs_per_minute < 0:
            raise InvalidConfiguration(
                f"costs_per_minute must be non-negative, got: {self.costs_per_minute}"
            )

    def time_for(self, task: "Task") -> float:
        return task.workload / self.items_per_minute

    def cost_for(self, task: "Task") -> float:
        return self.time_for(task) * self.costs_per_minute


@dataclass(frozen=True)
class Task:
    """A task to schedule; workload is the number of items to produce."""
    workload: float

    def __post_init__(self):
        if self.workload < 0:
            raise InvalidConfiguration(f"workload must be non-negative, got: {self.workload}")


# 20 resources; faster resources are disproportionately more expensive
ITEMS_PER_MINUTE = (10, 10, 10, 10, 10, 10, 25, 25, 25, 25, 30, 30, 30, 50, 50, 50, 50, 100, 100, 250)

COST_EXPONENT = 1.1

TASK_COUNT = 100


def default_resources() -> List[Resource]:
    """
    Create the 20 demo resources.

    Returns:
        Resources with costs_per_minute = items_per_minute ** 1.1
    """
    return [
        Resource(items_per_minute=ipm, costs_per_minute=ipm ** COST_EXPONENT)
        for ipm in ITEMS_PER_MINUTE
    ]


def default_workload(index: int) -> int:
    """Workload of demo task `index`, cycling with period 8."""
    slot = index % 8
    if slot < 4:
        return 250
    if slot < 6:
        return 1000
    return 2500


def default_tasks(count: int = TASK_COUNT) -> List[Task]:
    """Create the demo tasks."""
    return [Task(workload=default_workload(i)) for i in range(count)]


def _assigned(chromosome: Chromosome, resources: Sequence[Resource], tasks: Sequence[Task]):
    if len(chromosome) != len(tasks):
        raise ValueError(
            f"Chromosome length {len(chromosome)} does not match task count {len(tasks)}"
        )
    for task, resource_index in zip(tasks, chromosome.genes):
        yield resources[resource_index], task


def compute_time(
    chromosome: Chromosome,
    resources: Sequence[Resource],
    tasks: Sequence[Task]
) -> float:
    """
    Total minutes needed to execute the schedule.

    Args:
        chromosome: Task-to-resource assignment
        resources: Resource table
        tasks: Task table

    Returns:
        Sum of the execution times of all tasks
    """
    return sum(resource.time_for(task) for resource, task in _assigned(chromosome, resources, tasks))


def compute_costs(
    chromosome: Chromosome,
    resources: Sequence[Resource],
    tasks: Sequence[Task]
) -> float:
    """
    Total cost of executing the schedule.

    Args:
        chromosome: Task-to-resource assignment
        resources: Resource table
        tasks: Task table

    Returns:
        Sum of the costs of all tasks
    """
    return sum(resource.cost_for(task) for resource, task in _assigned(chromosome, resources, tasks))


def objective_vector(chromosome, resources, tasks):
    """(total time, total cost) of a schedule."""
    return (compute_time(chromosome, resources, tasks), compute_costs(chromosome, resources, tasks))


def scalar_fitness(chromosome, resources, tasks) -> float:
    """Negated sum of total time and total cost, to be maximized."""
    time, cost = objective_vector(chromosome, resources, tasks)
    return -time - cost


def _check_tables(resources: Sequence[Resource], tasks: Sequence[Task]) -> None:
    if not resources:
        raise InvalidConfiguration("At least one resource is required")
    if not tasks:
        raise InvalidConfiguration("At least one task is required")


def create_single_objective_problem(
    resources: Sequence[Resource],
    tasks: Sequence[Task]
) -> Problem:
    """
    Scheduling problem scalarizing time and cost.

    Args:
        resources: Resource table
        tasks: Task table

    Returns:
        Single-objective, maximizing Problem
    """
    _check_tables(resources, tasks)
    resources, tasks = tuple(resources), tuple(tasks)

    return Problem(
        alphabet=integer_alphabet(0, len(resources) - 1),
        length=len(tasks),
        fitness_function=lambda c: scalar_fitness(c, resources, tasks),
        directions=(Direction.MAXIMIZE,),
        name="resource_planning"
    )


def create_multi_objective_problem(
    resources: Sequence[Resource],
    tasks: Sequence[Task]
) -> Problem:
    """
    Scheduling problem trading off time against cost.

    Args:
        resources: Resource table
        tasks: Task table

    Returns:
        Two-objective, minimizing Problem
    """
    _check_tables(resources, tasks)
    resources, tasks = tuple(resources), tuple(tasks)

    return Problem(
        alphabet=integer_alphabet(0, len(resources) - 1),
        length=len(tasks),
        fitness_function=lambda c: objective_vector(c, resources, tasks),
        directions=(Direction.MINIMIZE, Direction.MINIMIZE),
        name="resource_planning_pareto"
    )


def schedule_breakdown(
    chromosome: Chromosome,
    resources: Sequence[Resource],
    tasks: Sequence[Task]
) -> Dict[int, Dict]:
    """
    Group a schedule by resource.

    Args:
        chromosome: Task-to-resource assignment
        resources: Resource table
        tasks: Task table

    Returns:
        Mapping resource index -> {'resource', 'tasks' (task indices), 'time', 'cost'}
    """
    breakdown: Dict[int, Dict] = {}

    for task_index, (resource, task) in enumerate(_assigned(chromosome, resources, tasks)):
        resource_index = chromosome.genes[task_index]
        entry = breakdown.setdefault(resource_index, {
            'resource': resource,
            'tasks': [],
            'time': 0.0,
            'cost': 0.0,
        })
        entry['tasks'].append(task_index)
        entry['time'] += resource.time_for(task)
        entry['cost'] += resource.cost_for(task)

    return dict(sorted(breakdown.items()))
