"""Additive weight mutation for CNE."""

import numpy as np


def mutate(
    candidates: np.ndarray,
    mutation_prob: float,
    mutation_size: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Perturb randomly chosen weights of every candidate, in place.

    Every element of every candidate is selected independently with
    probability ``mutation_prob``. A selected element is shifted by a
    magnitude drawn from U(0, mutation_size) with a random sign, so each
    change lies in [-mutation_size, mutation_size].

    Args:
        candidates: Population buffer, shape (n, *shape). Modified in place.
        mutation_prob: Per-element mutation probability in [0, 1].
        mutation_size: Upper bound of the perturbation magnitude.
        rng: Random generator for the mutation mask, magnitude and sign.

    Returns:
        Boolean mask of the mutated elements, same shape as candidates.

    Example:
        >>> buf = np.zeros((4, 2))
        >>> mask = mutate(buf, 1.0, 0.1, np.random.default_rng(0))
        >>> bool(mask.all()) and bool(np.all(np.abs(buf) <= 0.1))
        True
    """
    mask = rng.random(candidates.shape) < mutation_prob
    if not np.any(mask):
        return mask

    magnitude = rng.uniform(0.0, mutation_size, size=candidates.shape)
    sign = np.where(rng.random(candidates.shape) < 0.5, -1.0, 1.0)
    candidates += np.where(mask, sign * magnitude, 0.0).astype(candidates.dtype, copy=False)
    return mask
