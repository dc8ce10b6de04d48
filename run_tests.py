#!/usr/bin/env python3
"""
Test runner for the GA engine
"""

import unittest
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))


def run_all_tests():
    """Discover and run all test modules"""
    loader = unittest.TestLoader()
    suite = loader.discover(str(Path(__file__).parent / "tests"), top_level_dir=str(Path(__file__).parent))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return result.wasSuccessful()


def run_integration_test():
    """Run a short seeded string-search run end to end"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    try:
        from ga_engine import EngineConfig, EvolutionEngine, FixedGenerationCount
        from problems.infinite_monkeys import create_problem

        problem = create_problem("to be or not to be")
        config = EngineConfig(
            population_size=100,
            mutation_rate=0.01,
            termination=FixedGenerationCount(200),
            seed=42,
        )

        print("Running 200 generations...")
        result = EvolutionEngine(problem, config).run()

        print(f"Best: '{result.best.chromosome.phenotype()}'")
        print(f"Fitness: {result.fitness:.3f} (generation {result.generation})")

        success = result.generations_run == 200 and result.fitness > 0.5

        if success:
            print("✓ Integration test PASSED")
        else:
            print("✗ Integration test FAILED")

        return success

    except Exception as e:
        print(f"✗ Integration test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    print("Running GA Engine Tests")
    print("=" * 60)

    # Run unit tests
    print("Running unit tests...")
    unit_success = run_all_tests()

    # Run integration test
    integration_success = run_integration_test()

    # Summary
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
