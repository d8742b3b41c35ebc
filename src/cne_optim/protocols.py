"""Protocol definitions for the collaborators of the CNE optimizer.

The optimizer itself is fixed, but it talks to three kinds of user-supplied
objects through these interfaces:

1. **Objective**: Scores a candidate parameter matrix. Lower is better.
   Plain callables ``f(x) -> float`` are accepted as well.

2. **Initializer**: Seeds the population by producing perturbed copies of the
   starting iterate. Built-in initializers are registered by name in
   ``InitializerRegistry``.

3. **Callback**: Observes the run at its start, after each generation, and at
   its end, and may request an early stop. See ``cne_optim.callbacks``.

Example usage:
    ```python
    class Sphere:
        def evaluate(self, x: np.ndarray) -> float:
            return float(np.sum(x**2))

    optimizer = CNE(population_size=50, max_generations=200)
    best = optimizer.optimize(Sphere(), iterate)
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Objective(Protocol):
    """Protocol for objective functions optimized by CNE.

    The objective is called once per candidate per generation. It receives a
    read-only view of the candidate and must not modify it. It may be
    stochastic.

    Example:
        ```python
        class Rosenbrock:
            def evaluate(self, x: np.ndarray) -> float:
                x = x.ravel()
                return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1 - x[:-1]) ** 2))
        ```
    """

    def evaluate(self, x: np.ndarray) -> float:
        """Return the fitness of a parameter matrix (lower is better)."""
        ...


@runtime_checkable
class Initializer(Protocol):
    """Protocol for population seeding strategies.

    An initializer receives the starting iterate, the number of extra
    candidates to produce and the run's random generator. It returns an
    array of shape (n, *iterate.shape) of new candidates; it must not modify
    the iterate.

    Example:
        ```python
        def jitter(iterate: np.ndarray, n: int, rng: np.random.Generator) -> np.ndarray:
            return iterate + rng.standard_normal((n, *iterate.shape)) * 0.1
        ```
    """

    def __call__(
        self,
        iterate: np.ndarray,
        n: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Produce n candidates around iterate.

        Args:
            iterate: The starting parameter matrix.
            n: Number of candidates to produce.
            rng: NumPy random number generator for reproducibility.

        Returns:
            Array of shape (n, *iterate.shape).
        """
        ...
