"""Rank-based elite selection for CNE.

This module provides the selector used by the generational loop:

- num_elite: Number of elite candidates for a population size and select percent
- rank_partition: Split population indices into elites and dropouts by fitness
- Partition: The materialized elite/dropout split for one generation

Lower fitness is better (minimization). Ranking uses a stable sort so that
candidates with equal fitness keep their original index order.
"""

from dataclasses import dataclass

import numpy as np

from cne_optim.exceptions import PopulationInvariantError


def num_elite(population_size: int, select_percent: float) -> int:
    """Compute how many candidates survive as elites each generation.

    The count is ``round(select_percent * population_size)`` (half rounds up),
    decremented by one when odd because crossover consumes elites in pairs,
    capped at half the population so that every pair has two dropout slots to
    write into, and never less than 2.

    Args:
        population_size: Number of candidates in the population (>= 4).
        select_percent: Fraction of the population kept as elites, in (0, 1].

    Returns:
        An even elite count in [2, population_size // 2].

    Example:
        >>> num_elite(500, 0.2)
        100
        >>> num_elite(10, 0.3)
        2
    """
    count = int(select_percent * population_size + 0.5)
    if count % 2 != 0:
        count -= 1

    cap = population_size // 2
    cap -= cap % 2

    return max(2, min(count, cap))


@dataclass(frozen=True)
class Partition:
    """Elite/dropout split of the population for one generation.

    All arrays are owned copies so that later in-place writes to the
    population buffer cannot alter the index assignment.

    Attributes:
        rank: Population indices sorted by ascending fitness, shape (n,).
        elite: The first ``num_elite`` entries of rank (best first).
        dropout: The remaining entries of rank (best first, worst last).
    """

    rank: np.ndarray
    elite: np.ndarray
    dropout: np.ndarray

    def __post_init__(self) -> None:
        n = self.rank.shape[0]
        if self.elite.shape[0] + self.dropout.shape[0] != n:
            raise PopulationInvariantError(
                f"partition sizes {self.elite.shape[0]} + {self.dropout.shape[0]} do not cover {n} candidates"
            )
        covered = np.zeros(n, dtype=bool)
        covered[self.elite] = True
        if np.any(covered[self.dropout]):
            raise PopulationInvariantError("elite and dropout indices overlap")
        covered[self.dropout] = True
        if not np.all(covered):
            raise PopulationInvariantError("elite and dropout indices do not cover the population")

        object.__setattr__(self, "rank", self.rank.copy())
        object.__setattr__(self, "elite", self.elite.copy())
        object.__setattr__(self, "dropout", self.dropout.copy())

    @property
    def num_elite(self) -> int:
        """Number of elite candidates."""
        return self.elite.shape[0]


def rank_partition(fitness: np.ndarray, n_elite: int) -> Partition:
    """Rank candidates by fitness and split them into elites and dropouts.

    Args:
        fitness: Fitness value per candidate, shape (n,). Lower is better.
        n_elite: Number of elites to keep, in [1, n].

    Returns:
        Partition with rank, elite and dropout index arrays.

    Raises:
        ValueError: If fitness is not 1D.
        PopulationInvariantError: If n_elite does not fit the population.

    Example:
        >>> p = rank_partition(np.array([3.0, 1.0, 2.0, 1.0]), 2)
        >>> p.elite
        array([1, 3])
        >>> p.dropout
        array([2, 0])
    """
    if fitness.ndim != 1:
        raise ValueError(f"fitness must be 1D, got shape {fitness.shape}")

    n = fitness.shape[0]
    if n_elite < 1 or n_elite > n:
        raise PopulationInvariantError(f"cannot select {n_elite} elites from {n} candidates")

    rank = np.argsort(fitness, kind="stable").astype(np.intp)
    return Partition(rank=rank, elite=rank[:n_elite], dropout=rank[n_elite:])
