"""Single-objective test functions for benchmarking CNE.

All functions take a parameter matrix of any shape (flattened internally) and
return a scalar to minimize. Each has its global minimum value 0.

References:
    Jamil, M., & Yang, X. S. (2013). A literature survey of benchmark functions
    for global optimisation problems. International Journal of Mathematical
    Modelling and Numerical Optimisation, 4(2), 150-194.
"""

from collections.abc import Callable

import numpy as np

# Problem configuration
SHAPE: tuple[int, int] = (10, 1)
BOUNDS: tuple[float, float] = (-2.0, 2.0)


def sphere(x: np.ndarray) -> float:
    """Sphere: sum of squares, unimodal and separable. Minimum at x = 0."""
    return float(np.sum(x**2))


def rosenbrock(x: np.ndarray) -> float:
    """Rosenbrock: curved narrow valley. Minimum at x = 1."""
    v = x.ravel()
    return float(np.sum(100.0 * (v[1:] - v[:-1] ** 2) ** 2 + (1.0 - v[:-1]) ** 2))


def rastrigin(x: np.ndarray) -> float:
    """Rastrigin: highly multimodal. Minimum at x = 0."""
    v = x.ravel()
    return float(10.0 * v.size + np.sum(v**2 - 10.0 * np.cos(2.0 * np.pi * v)))


# Registry of all benchmark problems
PROBLEMS: dict[str, Callable[[np.ndarray], float]] = {
    "sphere": sphere,
    "rosenbrock": rosenbrock,
    "rastrigin": rastrigin,
}
