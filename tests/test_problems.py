"""
Tests for the demo problems: string search and resource planning.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

import numpy as np

from ga_engine.data_models import Chromosome, Direction, InvalidConfiguration
from problems.config_loader import (
    ConfigurationError,
    create_tables_from_config,
    load_config,
    load_tables,
    validate_config,
)
from problems.infinite_monkeys import (
    ALPHABET,
    DEFAULT_TARGET,
    brute_force_search,
    create_problem,
    match_fitness,
)
from problems.resource_planning import (
    ITEMS_PER_MINUTE,
    Resource,
    Task,
    compute_costs,
    compute_time,
    create_multi_objective_problem,
    create_single_objective_problem,
    default_resources,
    default_tasks,
    default_workload,
    objective_vector,
    scalar_fitness,
    schedule_breakdown,
)


SMALL_TABLES = Path(__file__).resolve().parent.parent / "configs" / "small_tables.yaml"


class TestInfiniteMonkeys(unittest.TestCase):
    """Test the string-search problem."""

    def test_alphabet(self):
        self.assertEqual(len(ALPHABET), 27)
        self.assertEqual(ALPHABET[0], " ")

    def test_problem_definition(self):
        problem = create_problem()

        self.assertEqual(problem.length, len(DEFAULT_TARGET))
        self.assertEqual(problem.directions, (Direction.MAXIMIZE,))
        self.assertFalse(problem.is_multi_objective)

    def test_target_scores_one(self):
        """Test the target itself has fitness 1.0."""
        problem = create_problem("to be or not to be")
        chromosome = Chromosome(genes="to be or not to be", alphabet=ALPHABET)

        self.assertEqual(problem.fitness_function(chromosome), 1.0)

    def test_partial_match(self):
        fitness = match_fitness("to be")

        self.assertAlmostEqual(fitness(Chromosome("to xx", ALPHABET)), 3 / 5)
        self.assertEqual(fitness(Chromosome("xxxxx", ALPHABET)), 0.0)

    def test_invalid_target(self):
        with self.assertRaises(InvalidConfiguration):
            create_problem("")
        with self.assertRaises(InvalidConfiguration):
            create_problem("To Be!")

    def test_brute_force_finds_short_target(self):
        iterations, found = brute_force_search("ab", np.random.default_rng(0), max_iterations=100000)

        self.assertTrue(found)
        self.assertGreaterEqual(iterations, 1)

    def test_brute_force_gives_up(self):
        """Test the iteration cap ends a hopeless search."""
        progress = []

        iterations, found = brute_force_search(
            DEFAULT_TARGET, np.random.default_rng(0),
            max_iterations=50, on_progress=progress.append, progress_every=20
        )

        self.assertFalse(found)
        self.assertEqual(iterations, 50)
        self.assertEqual(progress, [20, 40])


class TestResourcePlanning(unittest.TestCase):
    """Test scheduling objectives on tables small enough to enumerate."""

    def setUp(self):
        self.resources = [Resource(10, 1), Resource(100, 5)]
        self.tasks = [Task(100), Task(1000)]

    def schedule(self, *genes):
        return Chromosome(genes=genes, alphabet=(0, 1))

    def test_enumerated_objectives(self):
        """Test time and cost of every assignment of two tasks to two resources."""
        expected = {
            (0, 0): (110.0, 110.0),
            (0, 1): (20.0, 60.0),
            (1, 0): (101.0, 105.0),
            (1, 1): (11.0, 55.0),
        }

        for genes, (time, cost) in expected.items():
            chromosome = self.schedule(*genes)
            self.assertAlmostEqual(compute_time(chromosome, self.resources, self.tasks), time)
            self.assertAlmostEqual(compute_costs(chromosome, self.resources, self.tasks), cost)
            self.assertAlmostEqual(scalar_fitness(chromosome, self.resources, self.tasks), -time - cost)

    def test_objective_vector(self):
        vector = objective_vector(self.schedule(0, 1), self.resources, self.tasks)
        self.assertEqual(vector, (20.0, 60.0))

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            compute_time(self.schedule(0), self.resources, self.tasks)

    def test_single_objective_problem(self):
        problem = create_single_objective_problem(self.resources, self.tasks)

        self.assertEqual(problem.alphabet, (0, 1))
        self.assertEqual(problem.length, 2)
        self.assertEqual(problem.directions, (Direction.MAXIMIZE,))
        self.assertAlmostEqual(problem.fitness_function(self.schedule(1, 1)), -66.0)

    def test_multi_objective_problem(self):
        problem = create_multi_objective_problem(self.resources, self.tasks)

        self.assertEqual(problem.directions, (Direction.MINIMIZE, Direction.MINIMIZE))
        self.assertEqual(problem.fitness_function(self.schedule(1, 0)), (101.0, 105.0))

    def test_empty_tables(self):
        with self.assertRaises(InvalidConfiguration):
            create_single_objective_problem([], self.tasks)
        with self.assertRaises(InvalidConfiguration):
            create_multi_objective_problem(self.resources, [])

    def test_invalid_entries(self):
        with self.assertRaises(InvalidConfiguration):
            Resource(0, 1)
        with self.assertRaises(InvalidConfiguration):
            Resource(10, -1)
        with self.assertRaises(InvalidConfiguration):
            Task(-5)

    def test_schedule_breakdown(self):
        breakdown = schedule_breakdown(self.schedule(1, 0), self.resources, self.tasks)

        self.assertEqual(list(breakdown), [0, 1])
        self.assertEqual(breakdown[0]['tasks'], [1])
        self.assertAlmostEqual(breakdown[0]['time'], 100.0)
        self.assertAlmostEqual(breakdown[1]['cost'], 5.0)
        self.assertIs(breakdown[1]['resource'], self.resources[1])


class TestDefaultTables(unittest.TestCase):
    """Test the built-in demo tables."""

    def test_resources(self):
        resources = default_resources()

        self.assertEqual(len(resources), 20)
        self.assertEqual([r.items_per_minute for r in resources], list(ITEMS_PER_MINUTE))
        self.assertEqual(ITEMS_PER_MINUTE.count(10), 6)
        self.assertEqual(ITEMS_PER_MINUTE.count(250), 1)
        self.assertAlmostEqual(resources[-1].costs_per_minute, 250 ** 1.1)

    def test_tasks(self):
        tasks = default_tasks()

        self.assertEqual(len(tasks), 100)
        self.assertEqual([default_workload(i) for i in range(8)],
                         [250, 250, 250, 250, 1000, 1000, 2500, 2500])
        self.assertEqual(tasks[8].workload, 250)
        self.assertEqual(tasks[99].workload, 250)

    def test_load_default_tables(self):
        resources, tasks = load_tables()

        self.assertEqual(len(resources), 20)
        self.assertEqual(len(tasks), 100)


class TestTableLoading(unittest.TestCase):
    """Test YAML resource/task tables."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_load_small_tables(self):
        resources, tasks = load_tables(str(SMALL_TABLES))

        self.assertEqual(resources, [Resource(10, 1), Resource(100, 5)])
        self.assertEqual(tasks, [Task(100), Task(1000)])

    def test_default_cost(self):
        """Test a missing cost falls back to the power law."""
        resources, _ = create_tables_from_config({
            'resources': [{'items_per_minute': 25}],
            'tasks': [{'workload': 10}],
        })

        self.assertAlmostEqual(resources[0].costs_per_minute, 25 ** 1.1)

    def test_validation_issues(self):
        issues = validate_config({
            'resources': [{'items_per_minute': 0}, {'costs_per_minute': 3}],
            'tasks': [],
        })

        self.assertEqual(len(issues), 3)

        with self.assertRaises(ConfigurationError):
            create_tables_from_config({'resources': [{'items_per_minute': -1}], 'tasks': [{'workload': 1}]})

    def test_load_errors(self):
        with self.assertRaises(ConfigurationError):
            load_config(str(self.temp_dir / "missing.yaml"))

        empty = self.temp_dir / "empty.yaml"
        empty.write_text("")
        with self.assertRaises(ConfigurationError):
            load_config(str(empty))

        broken = self.temp_dir / "broken.yaml"
        broken.write_text("resources: [unclosed\n")
        with self.assertRaises(ConfigurationError):
            load_tables(str(broken))


if __name__ == '__main__':
    unittest.main()
