"""Result type for CNE optimization runs.

CNEResult is an immutable (frozen dataclass) summary of a finished run. All
numpy arrays are copied on construction so the result does not alias the
optimizer's internal buffers.
"""

from dataclasses import dataclass

import numpy as np

from cne_optim.population import Population
from cne_optim.termination import TerminationStatus


@dataclass(frozen=True)
class CNEResult:
    """Results from a CNE optimization run.

    Attributes:
        best_x: Best parameter matrix observed during the whole run.
        best_fitness: Fitness of best_x (lowest observed).
        status: Why the run stopped.
        generations: Number of generations completed.
        evaluations: Total number of objective function evaluations performed.
        history: Best-so-far fitness after each generation, shape (generations,).
            Non-increasing.
        population: The population at the end of the run, with the fitness of
            its last evaluation pass.

    Example:
        >>> result = cne(lambda x: float(np.sum(x**2)), np.ones((5, 1)), population_size=20, seed=0)
        >>> best_x, best_fitness = result.best
        >>> result.status
        <TerminationStatus.MAX_GENERATIONS_REACHED: 'max_generations_reached'>
    """

    best_x: np.ndarray
    best_fitness: float
    status: TerminationStatus
    generations: int
    evaluations: int
    history: np.ndarray
    population: Population

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If best_x or history are not numpy arrays.
            ValueError: If shapes are inconsistent with the population.
        """
        if not isinstance(self.best_x, np.ndarray):
            raise TypeError(f"best_x must be a numpy array, got {type(self.best_x).__name__}")
        if self.best_x.shape != self.population.shape:
            raise ValueError(
                f"best_x has shape {self.best_x.shape}, expected {self.population.shape} to match population"
            )

        if not isinstance(self.history, np.ndarray):
            raise TypeError(f"history must be a numpy array, got {type(self.history).__name__}")
        if self.history.ndim != 1:
            raise ValueError(f"history must be 1D, got shape {self.history.shape}")
        if self.history.shape[0] != self.generations:
            raise ValueError(
                f"history has {self.history.shape[0]} entries, expected {self.generations} to match generations"
            )

        object.__setattr__(self, "best_x", self.best_x.copy())
        object.__setattr__(self, "best_fitness", float(self.best_fitness))
        object.__setattr__(self, "history", self.history.copy())

    @property
    def best(self) -> tuple[np.ndarray, float]:
        """Extract the best parameter matrix and its fitness value.

        Returns:
            Tuple of (x, fitness).
        """
        return (self.best_x, self.best_fitness)

    @property
    def converged(self) -> bool:
        """True if the run reached the configured tolerance."""
        return self.status is TerminationStatus.CONVERGED_BY_TOLERANCE
