"""Callbacks invoked around a CNE run.

A callback is any object implementing some of these methods; missing methods
are skipped:

- begin_optimization(optimizer, function, iterate): before the first generation
- end_generation(optimizer, function, iterate, generation, best_fitness) -> bool | None:
  after each generation's termination check; ``iterate`` is the run's best
  candidate so far (changes to it carry into the result). Returning True stops
  the run.
- end_optimization(optimizer, function, iterate): after the best candidate has
  been written back into the caller's iterate

Built-in callbacks:
- PrintFitness: Log the best fitness every few generations
- EarlyStopAtMinFitness: Stop when the best fitness stalls for a number of generations
- StoreBestCoordinates: Keep a copy of the best candidate and its fitness
- TimerStop: Stop after a wall-clock time budget
"""

import logging
import time

import numpy as np

logger = logging.getLogger(__name__)


class Callback:
    """Base class with no-op hooks. Subclass and override what you need."""

    def begin_optimization(self, optimizer, function, iterate: np.ndarray) -> None:
        pass

    def end_generation(
        self,
        optimizer,
        function,
        iterate: np.ndarray,
        generation: int,
        best_fitness: float,
    ) -> bool | None:
        return False

    def end_optimization(self, optimizer, function, iterate: np.ndarray) -> None:
        pass


class PrintFitness(Callback):
    """Log the best fitness at INFO level.

    Args:
        every: Log every ``every`` generations (default 1).
        log: Logger to write to. Defaults to this module's logger.
    """

    def __init__(self, every: int = 1, log: logging.Logger | None = None) -> None:
        if every <= 0:
            raise ValueError(f"every must be positive, got {every}")
        self.every = every
        self.log = log if log is not None else logger

    def end_generation(self, optimizer, function, iterate, generation, best_fitness):
        if generation % self.every == 0:
            self.log.info(f"Generation {generation}: best fitness {best_fitness:.6g}")
        return False


class EarlyStopAtMinFitness(Callback):
    """Stop the run when the best fitness has not improved for ``patience`` generations.

    Args:
        patience: Number of generations without improvement to tolerate.
        min_delta: Minimum decrease of the best fitness that counts as an improvement.

    Example:
        >>> optimizer.optimize(objective, x, EarlyStopAtMinFitness(patience=20))
    """

    def __init__(self, patience: int = 10, min_delta: float = 0.0) -> None:
        if patience <= 0:
            raise ValueError(f"patience must be positive, got {patience}")
        self.patience = patience
        self.min_delta = min_delta
        self.best_fitness = np.inf
        self.stalled = 0

    def begin_optimization(self, optimizer, function, iterate):
        self.best_fitness = np.inf
        self.stalled = 0

    def end_generation(self, optimizer, function, iterate, generation, best_fitness):
        if self.best_fitness - best_fitness > self.min_delta:
            self.best_fitness = best_fitness
            self.stalled = 0
            return False

        self.stalled += 1
        if self.stalled >= self.patience:
            logger.info(f"No improvement for {self.stalled} generations, stopping at generation {generation}")
            return True
        return False


class StoreBestCoordinates(Callback):
    """Keep a copy of the best candidate observed during the run.

    Attributes:
        best_coordinates: Copy of the best parameter matrix, or None before the run.
        best_fitness: Fitness of best_coordinates.
    """

    def __init__(self) -> None:
        self.best_coordinates: np.ndarray | None = None
        self.best_fitness = np.inf

    def begin_optimization(self, optimizer, function, iterate):
        self.best_coordinates = None
        self.best_fitness = np.inf

    def end_generation(self, optimizer, function, iterate, generation, best_fitness):
        if self.best_coordinates is None or best_fitness < self.best_fitness:
            self.best_coordinates = iterate.copy()
            self.best_fitness = best_fitness
        return False


class TimerStop(Callback):
    """Stop the run once ``seconds`` of wall-clock time have elapsed."""

    def __init__(self, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError(f"seconds must be positive, got {seconds}")
        self.seconds = seconds
        self._start: float | None = None

    def begin_optimization(self, optimizer, function, iterate):
        self._start = time.perf_counter()

    def end_generation(self, optimizer, function, iterate, generation, best_fitness):
        if self._start is None:
            self._start = time.perf_counter()
            return False
        return time.perf_counter() - self._start >= self.seconds
