"""Configuration snapshot for a CNE run.

CNEConfig is an immutable (frozen dataclass) copy of the optimizer settings,
taken at the start of every optimize() call and passed by value into the run.
Changing optimizer attributes mid-run therefore has no effect on the run in
progress.
"""

import numbers
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from cne_optim.exceptions import InvalidConfiguration
from cne_optim.selection import num_elite

MIN_POPULATION_SIZE = 4


@dataclass(frozen=True)
class CNEConfig:
    """Settings for one CNE optimization run.

    Attributes:
        population_size: Number of candidates in the population (>= 4).
        max_generations: Maximum number of generations (>= 1).
        mutation_prob: Probability that a single weight is mutated, in [0, 1].
        mutation_size: Upper bound of the mutation noise magnitude (>= 0).
        select_percent: Fraction of candidates kept as elites, in (0, 1].
        tolerance: Stop once the best fitness is <= tolerance. Negative disables.
        min_improvement: Stop once the best fitness improves by less than this
            between two consecutive generations. None or negative disables.
        init_strategy: Name of a registered initializer or an initializer
            callable used to seed the population around the starting iterate.
        init_scale: Spread of the initial population noise. None uses
            mutation_size.
        n_workers: Number of joblib workers for fitness evaluation. None
            evaluates sequentially; -1 uses all cores.
        seed: Seed for the run's random generator. None uses system entropy.
    """

    population_size: int = 500
    max_generations: int = 5000
    mutation_prob: float = 0.1
    mutation_size: float = 0.02
    select_percent: float = 0.2
    tolerance: float = 1e-5
    min_improvement: float | None = None
    init_strategy: str | Callable = "uniform"
    init_scale: float | None = None
    n_workers: int | None = None
    seed: int | None = None

    def validate(self) -> None:
        """Check every setting, raising on the first invalid one.

        Raises:
            InvalidConfiguration: If any setting is out of range.
        """
        if not isinstance(self.population_size, (int, np.integer)) or isinstance(self.population_size, bool):
            raise InvalidConfiguration(
                f"population_size must be an integer, got {type(self.population_size).__name__}"
            )
        if self.population_size < MIN_POPULATION_SIZE:
            raise InvalidConfiguration(
                f"population_size must be at least {MIN_POPULATION_SIZE}, got {self.population_size}"
            )
        if not isinstance(self.max_generations, (int, np.integer)) or isinstance(self.max_generations, bool):
            raise InvalidConfiguration(
                f"max_generations must be an integer, got {type(self.max_generations).__name__}"
            )
        if self.max_generations < 1:
            raise InvalidConfiguration(f"max_generations must be positive, got {self.max_generations}")
        for name in ("mutation_prob", "mutation_size", "select_percent", "tolerance"):
            _check_real(name, getattr(self, name))
        for name in ("min_improvement", "init_scale"):
            if getattr(self, name) is not None:
                _check_real(name, getattr(self, name))
        if not 0.0 <= self.mutation_prob <= 1.0:
            raise InvalidConfiguration(f"mutation_prob must be in [0, 1], got {self.mutation_prob}")
        if not self.mutation_size >= 0.0:
            raise InvalidConfiguration(f"mutation_size must be non-negative, got {self.mutation_size}")
        if not 0.0 < self.select_percent <= 1.0:
            raise InvalidConfiguration(f"select_percent must be in (0, 1], got {self.select_percent}")
        if np.isnan(self.tolerance):
            raise InvalidConfiguration("tolerance must not be NaN")
        if self.min_improvement is not None and np.isnan(self.min_improvement):
            raise InvalidConfiguration("min_improvement must not be NaN")
        if self.init_scale is not None and not self.init_scale >= 0.0:
            raise InvalidConfiguration(f"init_scale must be non-negative, got {self.init_scale}")
        if not isinstance(self.init_strategy, str) and not callable(self.init_strategy):
            raise InvalidConfiguration(
                f"init_strategy must be a strategy name or a callable, got {type(self.init_strategy).__name__}"
            )
        if self.n_workers is not None and self.n_workers == 0:
            raise InvalidConfiguration("n_workers must be non-zero (use None for sequential evaluation)")

    @property
    def num_elite(self) -> int:
        """Number of elites per generation derived from population_size and select_percent."""
        return num_elite(self.population_size, self.select_percent)

    @property
    def effective_init_scale(self) -> float:
        """Spread of the initial population noise."""
        return self.mutation_size if self.init_scale is None else self.init_scale

    @property
    def tolerance_enabled(self) -> bool:
        return self.tolerance >= 0.0

    @property
    def min_improvement_enabled(self) -> bool:
        return self.min_improvement is not None and self.min_improvement >= 0.0


def _check_real(name: str, value) -> None:
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        raise InvalidConfiguration(f"{name} must be a real number, got {type(value).__name__}")
