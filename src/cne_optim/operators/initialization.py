"""Population seeding strategies.

Both strategies are factories returning an Initializer compatible with
``InitializerRegistry``:

- uniform_init: per-element noise drawn from U(-scale, scale)
- normal_init: per-element noise drawn from N(0, scale^2)

The optimizer keeps the caller's iterate itself in slot 0 and fills the
remaining slots with the output of the configured initializer.
"""

from collections.abc import Callable

import numpy as np


def uniform_init(scale: float = 0.02) -> Callable[[np.ndarray, int, np.random.Generator], np.ndarray]:
    """Create an initializer adding uniform noise to copies of the iterate.

    Args:
        scale: Half-width of the noise interval (default 0.02). Every element
            of every new candidate lies within ``scale`` of the iterate.

    Returns:
        An initializer with signature (iterate, n, rng) -> (n, *iterate.shape).

    Example:
        >>> init = uniform_init(scale=0.5)
        >>> extra = init(np.zeros((2, 2)), 3, np.random.default_rng(0))
        >>> extra.shape
        (3, 2, 2)
    """
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")

    def initializer(iterate: np.ndarray, n: int, rng: np.random.Generator) -> np.ndarray:
        noise = rng.uniform(-scale, scale, size=(n, *iterate.shape))
        return (iterate[np.newaxis] + noise).astype(iterate.dtype, copy=False)

    return initializer


def normal_init(scale: float = 0.02) -> Callable[[np.ndarray, int, np.random.Generator], np.ndarray]:
    """Create an initializer adding Gaussian noise to copies of the iterate.

    Args:
        scale: Standard deviation of the noise (default 0.02).

    Returns:
        An initializer with signature (iterate, n, rng) -> (n, *iterate.shape).
    """
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")

    def initializer(iterate: np.ndarray, n: int, rng: np.random.Generator) -> np.ndarray:
        noise = rng.normal(0.0, scale, size=(n, *iterate.shape))
        return (iterate[np.newaxis] + noise).astype(iterate.dtype, copy=False)

    return initializer
