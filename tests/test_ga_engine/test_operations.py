"""
Tests for GA operations: chromosome creation, crossover, and mutation.
"""

import dataclasses
import unittest

import numpy as np

from ga_engine.data_models import Chromosome, InvalidConfiguration, integer_alphabet
from ga_engine.crossover import (
    apply_crossover,
    midpoint_crossover,
    single_point_crossover,
)
from ga_engine.mutation import mutation_statistics, per_gene_mutation

from tests.test_ga_engine.scripted_rng import ScriptedRandom


ALPHABET = tuple(" abcdefghijklmnopqrstuvwxyz")


class TestChromosome(unittest.TestCase):
    """Test chromosome creation and immutability."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_random_chromosome(self):
        """Test random chromosome has the requested length and valid alleles."""
        chromosome = Chromosome.random(ALPHABET, 18, self.rng)

        self.assertEqual(len(chromosome), 18)
        for gene in chromosome.genes:
            self.assertIn(gene, ALPHABET)

    def test_random_chromosome_integer_alphabet(self):
        """Test integer alphabets cover the inclusive range."""
        alphabet = integer_alphabet(0, 19)
        self.assertEqual(alphabet, tuple(range(20)))

        chromosome = Chromosome.random(alphabet, 100, self.rng)
        self.assertTrue(all(0 <= gene <= 19 for gene in chromosome.genes))

    def test_random_chromosome_uses_one_draw_per_gene(self):
        """Test that genes are drawn from the alphabet by index."""
        rng = ScriptedRandom(integers=[2, 0, 1])
        chromosome = Chromosome.random(('x', 'y', 'z'), 3, rng)

        self.assertEqual(chromosome.genes, ('z', 'x', 'y'))
        self.assertTrue(rng.exhausted)

    def test_invalid_random_chromosome(self):
        """Test empty alphabet and non-positive length are rejected."""
        with self.assertRaises(InvalidConfiguration):
            Chromosome.random((), 5, self.rng)
        with self.assertRaises(InvalidConfiguration):
            Chromosome.random(ALPHABET, 0, self.rng)
        with self.assertRaises(InvalidConfiguration):
            integer_alphabet(5, 4)

    def test_chromosome_is_immutable(self):
        """Test chromosomes cannot be modified in place."""
        chromosome = Chromosome(genes="abc", alphabet="abc")

        self.assertEqual(chromosome.genes, ('a', 'b', 'c'))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            chromosome.genes = ('c', 'b', 'a')

    def test_phenotype(self):
        """Test decoded phenotype of a character chromosome."""
        chromosome = Chromosome(genes="to be", alphabet=ALPHABET)
        self.assertEqual(chromosome.phenotype(), "to be")

    def test_equal_chromosomes_hash_equal(self):
        """Test chromosomes with the same genes are interchangeable as keys."""
        a = Chromosome(genes="ab", alphabet="ab")
        b = Chromosome(genes=['a', 'b'], alphabet=['a', 'b'])

        self.assertEqual(a, b)
        self.assertEqual(len({a, b}), 1)


class TestCrossover(unittest.TestCase):
    """Test crossover operators."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_midpoint_crossover_property(self):
        """Test first L//2 genes come from a, the rest from b, for even and odd L."""
        for length in [1, 2, 5, 18, 19]:
            a = Chromosome.random(ALPHABET, length, self.rng)
            b = Chromosome.random(ALPHABET, length, self.rng)

            child = a.crossover(b)

            self.assertEqual(len(child), length)
            self.assertEqual(child.genes[:length // 2], a.genes[:length // 2])
            self.assertEqual(child.genes[length // 2:], b.genes[length // 2:])

    def test_midpoint_crossover_literal(self):
        """Test a literal midpoint crossover."""
        a = Chromosome(genes="aaaaa", alphabet="ab")
        b = Chromosome(genes="bbbbb", alphabet="ab")

        self.assertEqual(midpoint_crossover(a, b).phenotype(), "aabbb")

    def test_crossover_leaves_parents_unchanged(self):
        """Test parents keep their genes after producing a child."""
        a = Chromosome(genes="aaaa", alphabet="ab")
        b = Chromosome(genes="bbbb", alphabet="ab")

        a.crossover(b)

        self.assertEqual(a.phenotype(), "aaaa")
        self.assertEqual(b.phenotype(), "bbbb")

    def test_crossover_length_mismatch(self):
        """Test crossover of different lengths fails fast."""
        a = Chromosome(genes="aaaa", alphabet="ab")
        b = Chromosome(genes="bbb", alphabet="ab")

        with self.assertRaises(InvalidConfiguration):
            a.crossover(b)
        with self.assertRaises(InvalidConfiguration):
            single_point_crossover(a, b, self.rng)

    def test_single_point_crossover_cut(self):
        """Test random-cut crossover splits at the drawn index."""
        a = Chromosome(genes="aaaaa", alphabet="ab")
        b = Chromosome(genes="bbbbb", alphabet="ab")

        child = single_point_crossover(a, b, ScriptedRandom(integers=[1]))
        self.assertEqual(child.phenotype(), "abbbb")

        child = single_point_crossover(a, b, ScriptedRandom(integers=[4]))
        self.assertEqual(child.phenotype(), "aaaab")

    def test_single_point_crossover_always_mixes(self):
        """Test the cut never falls on the chromosome boundary."""
        a = Chromosome(genes="aaaaaa", alphabet="ab")
        b = Chromosome(genes="bbbbbb", alphabet="ab")

        for _ in range(50):
            child = single_point_crossover(a, b, self.rng)
            self.assertEqual(child.genes[0], 'a')
            self.assertEqual(child.genes[-1], 'b')

    def test_single_point_crossover_single_gene(self):
        """Test a one-gene chromosome yields a copy of the first parent."""
        a = Chromosome(genes="a", alphabet="ab")
        b = Chromosome(genes="b", alphabet="ab")

        self.assertEqual(single_point_crossover(a, b, self.rng).phenotype(), "a")

    def test_apply_crossover_dispatch(self):
        """Test strategy dispatch and unknown strategy rejection."""
        a = Chromosome(genes="aaaa", alphabet="ab")
        b = Chromosome(genes="bbbb", alphabet="ab")

        self.assertEqual(apply_crossover(a, b, 'midpoint', self.rng).phenotype(), "aabb")
        with self.assertRaises(ValueError):
            apply_crossover(a, b, 'uniform', self.rng)


class TestMutation(unittest.TestCase):
    """Test per-gene mutation."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_zero_rate_is_identity(self):
        """Test mutate(c, 0) == c."""
        for _ in range(20):
            chromosome = Chromosome.random(ALPHABET, 18, self.rng)
            self.assertEqual(chromosome.mutate(0.0, self.rng), chromosome)

    def test_full_rate_redraws_every_gene(self):
        """Test rate 1 differs per gene with probability 1 - 1/|alphabet|."""
        alphabet = ('a', 'b')
        original = Chromosome(genes=('a',) * 20000, alphabet=alphabet)

        mutated = per_gene_mutation(original, 1.0, self.rng)

        stats = mutation_statistics(original, mutated)
        self.assertAlmostEqual(stats['change_rate'], 0.5, delta=0.03)

    def test_independent_trial_per_gene(self):
        """Test only positions whose trial succeeds are redrawn."""
        original = Chromosome(genes="aaaa", alphabet="ab")
        rng = ScriptedRandom(floats=[0.9, 0.05, 0.9, 0.01], integers=[1, 1])

        mutated = per_gene_mutation(original, 0.1, rng)

        self.assertEqual(mutated.phenotype(), "abab")
        self.assertTrue(rng.exhausted)

    def test_mutation_leaves_original_unchanged(self):
        """Test the source chromosome is not modified."""
        original = Chromosome(genes="aaaa", alphabet="ab")
        per_gene_mutation(original, 1.0, self.rng)

        self.assertEqual(original.phenotype(), "aaaa")

    def test_invalid_rate(self):
        """Test rates outside [0, 1] are rejected."""
        chromosome = Chromosome(genes="aaaa", alphabet="ab")

        for rate in [-0.1, 1.5, "high"]:
            with self.assertRaises(InvalidConfiguration):
                chromosome.mutate(rate, self.rng)

    def test_mutation_statistics(self):
        """Test changed position counting."""
        original = Chromosome(genes="aaaa", alphabet="ab")
        mutated = Chromosome(genes="abba", alphabet="ab")

        stats = mutation_statistics(original, mutated)

        self.assertEqual(stats['positions_changed'], 2)
        self.assertEqual(stats['length'], 4)
        self.assertAlmostEqual(stats['change_rate'], 0.5)


if __name__ == '__main__':
    unittest.main()
