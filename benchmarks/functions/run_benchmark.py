"""Benchmark runner comparing cne-optim and Pymoo's GA on single-objective problems.

This script minimizes the sphere, Rosenbrock and Rastrigin functions with CNE
and with Pymoo's real-coded genetic algorithm, using the same population size
and generation budget, and reports the best fitness reached and run time.

Usage:
    python benchmarks/functions/run_benchmark.py
"""

import json
import logging
import sys
import time
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
from pymoo.algorithms.soo.nonconvex.ga import GA
from pymoo.core.problem import Problem as PymooProblem
from pymoo.optimize import minimize
from pymoo.termination import get_termination

from benchmarks.functions.problems import BOUNDS, PROBLEMS, SHAPE

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
POP_SIZE = 100
N_GENERATIONS = 300
MUTATION_PROB = 0.1
MUTATION_SIZE = 0.05
SELECT_PERCENT = 0.2
N_RUNS = 10
SEEDS = list(range(N_RUNS))
LIBRARIES = ["cne-optim", "pymoo"]


def run_cne(problem_name: str, problem_fn: callable, seed: int) -> tuple[float, float]:
    """Run CNE using cne-optim.

    Args:
        problem_name: Name of the problem (for logging).
        problem_fn: The benchmark function.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (best_fitness, elapsed_time_seconds).
    """
    from cne_optim import CNE

    start = np.random.default_rng(seed).uniform(BOUNDS[0], BOUNDS[1], size=SHAPE)
    optimizer = CNE(
        population_size=POP_SIZE,
        max_generations=N_GENERATIONS,
        mutation_prob=MUTATION_PROB,
        mutation_size=MUTATION_SIZE,
        select_percent=SELECT_PERCENT,
        tolerance=-1.0,
        init_scale=(BOUNDS[1] - BOUNDS[0]) / 2,
        seed=seed,
    )

    start_time = time.perf_counter()
    best_fitness = optimizer.optimize(problem_fn, start)
    elapsed = time.perf_counter() - start_time

    return best_fitness, elapsed


class PymooFunctionProblem(PymooProblem):
    """Wrapper to use matrix-valued benchmark functions with Pymoo."""

    def __init__(self, problem_fn: callable) -> None:
        super().__init__(n_var=int(np.prod(SHAPE)), n_obj=1, xl=BOUNDS[0], xu=BOUNDS[1])
        self._problem_fn = problem_fn

    def _evaluate(self, x: np.ndarray, out: dict, *args, **kwargs) -> None:
        out["F"] = np.array([self._problem_fn(xi.reshape(SHAPE)) for xi in x])


def run_pymoo(problem_name: str, problem_fn: callable, seed: int) -> tuple[float, float]:
    """Run a real-coded GA using Pymoo.

    Args:
        problem_name: Name of the problem (for logging).
        problem_fn: The benchmark function.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (best_fitness, elapsed_time_seconds).
    """
    problem = PymooFunctionProblem(problem_fn)
    algorithm = GA(pop_size=POP_SIZE, eliminate_duplicates=False)
    termination = get_termination("n_gen", N_GENERATIONS)

    start_time = time.perf_counter()
    result = minimize(problem, algorithm, termination, seed=seed, verbose=False)
    elapsed = time.perf_counter() - start_time

    return float(np.min(result.F)), elapsed


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    timestamp = datetime.now(UTC).isoformat()

    metadata = {
        "timestamp": timestamp,
        "parameters": {
            "pop_size": POP_SIZE,
            "n_generations": N_GENERATIONS,
            "shape": list(SHAPE),
            "bounds": list(BOUNDS),
            "mutation_prob": MUTATION_PROB,
            "mutation_size": MUTATION_SIZE,
            "select_percent": SELECT_PERCENT,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    runners = [
        ("cne-optim", run_cne),
        ("pymoo", run_pymoo),
    ]

    total_runs = len(PROBLEMS) * len(runners) * N_RUNS
    current_run = 0

    for problem_name, problem_fn in PROBLEMS.items():
        for library_name, runner in runners:
            for seed in SEEDS:
                current_run += 1
                logger.info(f"Running [{current_run}/{total_runs}]: {library_name} on {problem_name} (seed={seed})")

                best_fitness, elapsed = runner(problem_name, problem_fn, seed)

                results.append(
                    {
                        "library": library_name,
                        "problem": problem_name,
                        "seed": seed,
                        "best_fitness": best_fitness,
                        "time_seconds": elapsed,
                    }
                )

                logger.info(f"  Best: {best_fitness:.4e}, Time: {elapsed:.2f}s")

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    fitness_data = defaultdict(lambda: defaultdict(list))
    time_data = defaultdict(lambda: defaultdict(list))
    for r in results["results"]:
        fitness_data[r["problem"]][r["library"]].append(r["best_fitness"])
        time_data[r["problem"]][r["library"]].append(r["time_seconds"])

    problems = sorted(fitness_data.keys())

    print("\n" + "=" * 70)
    print("BENCHMARK SUMMARY")
    print("=" * 70)
    print(f"\nParameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")
    print("\nMedian best fitness (lower is better):")

    header = f"{'Problem':<12}" + "".join(f"{lib:>22}" for lib in LIBRARIES)
    print(header)
    print("-" * 56)
    for problem in problems:
        row = f"{problem:<12}"
        for lib in LIBRARIES:
            values = fitness_data[problem][lib]
            row += f"{np.median(values):>22.4e}" if values else f"{'N/A':>22}"
        print(row)

    print("\nTiming (mean seconds per run):")
    print(header)
    print("-" * 56)
    for problem in problems:
        row = f"{problem:<12}"
        for lib in LIBRARIES:
            times = time_data[problem][lib]
            row += f"{np.mean(times):>22.2f}" if times else f"{'N/A':>22}"
        print(row)

    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting function benchmark suite")
    logger.info(f"Parameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")

    results = run_benchmark()

    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")

    print_summary(results)


if __name__ == "__main__":
    main()
