"""Population data structures for CNE optimization.

This module provides the population store used by the generational loop:

- Population: A fixed-size buffer of candidate parameter matrices and their fitness
- CandidateView: A read-only view of a single candidate

Unlike a per-generation snapshot, a Population is mutated in place: crossover
and mutation write into ``candidates`` directly and ``fitness`` is overwritten
after every evaluation pass. Its size and candidate shape never change.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class CandidateView:
    """Read-only view of a single candidate in a population.

    Attributes:
        x: Parameter matrix of this candidate (not writeable).
        fitness: Fitness of this candidate, or None if not evaluated.

    Example:
        >>> pop = Population(candidates=np.zeros((4, 2, 3)))
        >>> pop[0].x.shape
        (2, 3)
    """

    x: np.ndarray
    fitness: float | None


@dataclass
class Population:
    """Fixed-size population of candidate parameter matrices.

    Candidates are stored as one array whose first axis is the population
    index. The array is copied on construction so that the population owns
    its buffer exclusively.

    Attributes:
        candidates: Candidate matrices, shape (n, *shape). Must be floating point.
        fitness: Fitness per candidate, shape (n,), or None if not evaluated.

    Example:
        >>> pop = Population(candidates=np.zeros((6, 5, 1)))
        >>> len(pop)
        6
        >>> pop.shape
        (5, 1)
    """

    candidates: np.ndarray
    fitness: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and take ownership of the arrays.

        Raises:
            TypeError: If candidates is not a numpy array.
            ValueError: If array shapes or dtypes are invalid.
        """
        if not isinstance(self.candidates, np.ndarray):
            raise TypeError(f"candidates must be a numpy array, got {type(self.candidates).__name__}")
        if self.candidates.ndim < 2:
            raise ValueError(f"candidates must have a population axis and a parameter axis, got shape {self.candidates.shape}")
        if not np.issubdtype(self.candidates.dtype, np.floating):
            raise ValueError(f"candidates must have float dtype, got {self.candidates.dtype}")

        self.candidates = self.candidates.copy()

        if self.fitness is not None:
            self.set_fitness(self.fitness)

    def set_fitness(self, fitness: np.ndarray) -> None:
        """Replace the fitness vector after an evaluation pass.

        Args:
            fitness: Fitness values aligned with the candidates, shape (n,).

        Raises:
            TypeError: If fitness is not a numpy array.
            ValueError: If fitness is not 1D or has the wrong length.
        """
        if not isinstance(fitness, np.ndarray):
            raise TypeError(f"fitness must be a numpy array, got {type(fitness).__name__}")
        if fitness.ndim != 1:
            raise ValueError(f"fitness must be 1D, got shape {fitness.shape}")
        if fitness.shape[0] != len(self):
            raise ValueError(f"fitness has {fitness.shape[0]} elements, expected {len(self)} to match candidates")
        self.fitness = fitness.astype(np.float64, copy=True)

    def __len__(self) -> int:
        """Return the number of candidates in the population."""
        return self.candidates.shape[0]

    def __getitem__(self, idx: int) -> CandidateView:
        """Get a read-only view of a single candidate.

        Args:
            idx: Index of the candidate (supports negative indexing).

        Returns:
            CandidateView for the specified candidate.

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} candidates")

        x = self.candidates[idx].view()
        x.flags.writeable = False
        return CandidateView(
            x=x,
            fitness=float(self.fitness[idx]) if self.fitness is not None else None,
        )

    @property
    def n_candidates(self) -> int:
        """Return the number of candidates (same as len(self))."""
        return self.candidates.shape[0]

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of a single candidate matrix."""
        return self.candidates.shape[1:]

    @property
    def best_idx(self) -> int | None:
        """Index of the lowest-fitness candidate (first on ties), or None if not evaluated."""
        if self.fitness is None:
            return None
        return int(np.argmin(self.fitness))
