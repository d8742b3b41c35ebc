"""Uniform crossover and reproduction for CNE.

- uniform_crossover: Mix two parent matrices element by element into two children
- reproduce: Pair up elites and overwrite the worst dropout slots with their children
"""

import numpy as np

from cne_optim.exceptions import PopulationInvariantError
from cne_optim.selection import Partition


def uniform_crossover(
    mom: np.ndarray,
    dad: np.ndarray,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Create two complementary children from two parents.

    Each element of the first child is taken from mom or dad with equal
    probability; the second child takes the element from the other parent.
    The parents are not modified.

    Args:
        mom: First parent matrix.
        dad: Second parent matrix, same shape as mom.
        rng: Random generator used to draw the inheritance mask.

    Returns:
        Tuple (child1, child2), each a new array of the parents' shape.

    Raises:
        ValueError: If the parents differ in shape.

    Example:
        >>> rng = np.random.default_rng(0)
        >>> c1, c2 = uniform_crossover(np.zeros((2, 2)), np.ones((2, 2)), rng)
        >>> bool(np.all(c1 + c2 == 1.0))
        True
    """
    if mom.shape != dad.shape:
        raise ValueError(f"parents must have the same shape, got {mom.shape} and {dad.shape}")

    from_mom = rng.random(mom.shape) < 0.5
    child1 = np.where(from_mom, mom, dad)
    child2 = np.where(from_mom, dad, mom)
    return child1, child2


def reproduce(
    candidates: np.ndarray,
    partition: Partition,
    rng: np.random.Generator,
) -> np.ndarray:
    """Overwrite dropout slots with children of paired elites, in place.

    Elites are paired in rank order (rank 0 with rank 1, rank 2 with rank 3,
    ...). An odd elite left without a partner does not reproduce. Each pair
    writes its two children into the next two dropout slots taken from the
    worst end of the ranking, so the best dropouts are the last to be replaced.

    Args:
        candidates: Population buffer, shape (n, *shape). Modified in place.
        partition: Elite/dropout split of the current generation.
        rng: Random generator for the crossover masks.

    Returns:
        Indices of the slots that were overwritten, in write order.

    Raises:
        PopulationInvariantError: If there are fewer dropout slots than children.
    """
    n_pairs = partition.num_elite // 2
    n_children = 2 * n_pairs
    if partition.dropout.shape[0] < n_children:
        raise PopulationInvariantError(
            f"{n_pairs} elite pairs need {n_children} dropout slots, only {partition.dropout.shape[0]} available"
        )

    targets = partition.dropout[::-1][:n_children].copy()

    for pair in range(n_pairs):
        mom = partition.elite[2 * pair]
        dad = partition.elite[2 * pair + 1]
        child1, child2 = uniform_crossover(candidates[mom], candidates[dad], rng)
        candidates[targets[2 * pair]] = child1
        candidates[targets[2 * pair + 1]] = child2

    return targets
