"""Conventional Neural Evolution (CNE) optimizer.

CNE minimizes an arbitrary (black-box) objective over a fixed-shape parameter
matrix by evolving a population of candidate matrices:

- The population is seeded with the caller's iterate plus perturbed copies of it
- Every generation, all candidates are scored by the objective
- The best ``num_elite`` candidates (by stable fitness ranking) become parents
- Elites are paired in rank order; each pair writes two uniform-crossover
  children over the worst dropout candidates
- Every weight of every candidate is then mutated with a small probability

The loop stops when the best fitness reaches the tolerance, when the generation
budget is spent, optionally when the best fitness stops improving, or when a
callback asks to stop. The best candidate seen over the whole run (not just the
last generation) is the result.

Example:
    >>> import numpy as np
    >>> from cne_optim import CNE
    >>>
    >>> class Sphere:
    ...     def evaluate(self, x):
    ...         return float(np.sum(x**2))
    >>>
    >>> optimizer = CNE(population_size=50, max_generations=200, tolerance=1e-5, seed=42)
    >>> x = np.random.default_rng(0).uniform(-1, 1, size=(5, 1))
    >>> best_fitness = optimizer.optimize(Sphere(), x)  # x now holds the best candidate
    >>> optimizer.last_result.status
    >>>
    >>> # Functional form, leaves the starting point untouched
    >>> from cne_optim import cne
    >>> result = cne(lambda x: float(np.sum(x**2)), x, population_size=50, max_generations=200, seed=42)
    >>> best_x, best_fitness = result.best
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import fields

import numpy as np

# Import operators to trigger initializer registration
import cne_optim.operators  # noqa: F401
from cne_optim.callbacks import Callback
from cne_optim.config import CNEConfig
from cne_optim.evaluation import as_objective, evaluate_population
from cne_optim.exceptions import InvalidConfiguration
from cne_optim.operators import mutate, reproduce
from cne_optim.population import Population
from cne_optim.protocols import Initializer
from cne_optim.registry import InitializerRegistry
from cne_optim.results import CNEResult
from cne_optim.selection import rank_partition
from cne_optim.termination import TerminationStatus, check_termination

logger = logging.getLogger(__name__)

_CONFIG_FIELDS = tuple(f.name for f in fields(CNEConfig))


class CNE:
    """Conventional Neural Evolution optimizer.

    All settings are plain attributes that may be read and changed between
    runs. Each call to optimize() takes an immutable CNEConfig snapshot of
    them, so changing an attribute during a run (e.g. from a callback) only
    affects later runs.

    The default values are not necessarily suitable for a given function; it
    is highly recommended to adjust them to the problem.

    Args:
        population_size: Number of candidates in the population. At least 4.
        max_generations: Maximum number of generations. At least 1.
        mutation_prob: Probability that a single weight is mutated.
        mutation_size: Upper bound of the mutation noise magnitude.
        select_percent: Fraction of candidates kept as elites each generation.
        tolerance: Stop once the best fitness is <= tolerance. A negative value
            disables this criterion.
        min_improvement: Stop once the best fitness improves by less than this
            between two consecutive generations. None (default) disables it.
        init_strategy: Initializer used to seed the population, either a name
            registered in InitializerRegistry ("uniform", "normal") or an
            Initializer callable.
        init_scale: Spread of the initial population around the iterate.
            None uses mutation_size.
        n_workers: joblib workers for fitness evaluation. None (default)
            evaluates sequentially.
        seed: Seed of the run's random generator. None uses system entropy.

    Attributes:
        last_result: CNEResult of the most recent optimize() call, or None.
    """

    def __init__(
        self,
        population_size: int = 500,
        max_generations: int = 5000,
        mutation_prob: float = 0.1,
        mutation_size: float = 0.02,
        select_percent: float = 0.2,
        tolerance: float = 1e-5,
        *,
        min_improvement: float | None = None,
        init_strategy: str | Initializer = "uniform",
        init_scale: float | None = None,
        n_workers: int | None = None,
        seed: int | None = None,
    ) -> None:
        self.population_size = population_size
        self.max_generations = max_generations
        self.mutation_prob = mutation_prob
        self.mutation_size = mutation_size
        self.select_percent = select_percent
        self.tolerance = tolerance
        self.min_improvement = min_improvement
        self.init_strategy = init_strategy
        self.init_scale = init_scale
        self.n_workers = n_workers
        self.seed = seed
        self.last_result: CNEResult | None = None

    def config(self) -> CNEConfig:
        """Return an immutable snapshot of the current settings."""
        return CNEConfig(**{name: getattr(self, name) for name in _CONFIG_FIELDS})

    def optimize(self, function, iterate: np.ndarray, *callbacks: Callback) -> float:
        """Minimize function starting from iterate.

        The iterate is overwritten with the best candidate found; it is left
        untouched if the configuration is rejected or an evaluation fails.

        Args:
            function: Objective with an ``evaluate(x) -> float`` method, or a
                callable ``f(x) -> float``. Lower is better.
            iterate: Starting point, a writeable floating point array of any
                shape. Modified in place.
            *callbacks: Objects implementing any of the hooks described in
                cne_optim.callbacks.

        Returns:
            The best fitness observed during the run.

        Raises:
            InvalidConfiguration: If a setting or the iterate is invalid. Raised
                before any evaluation.
            EvaluatorFailure: If the objective fails for any candidate.
        """
        return self._optimize(function, iterate, callbacks).best_fitness

    def _optimize(self, function, iterate: np.ndarray, callbacks: Sequence[Callback]) -> CNEResult:
        config = self.config()
        config.validate()
        _validate_iterate(iterate)
        if not iterate.flags.writeable:
            raise InvalidConfiguration("iterate must be writeable")
        evaluate = as_objective(function)
        initializer = _resolve_initializer(config)

        for callback in callbacks:
            _invoke(callback, "begin_optimization", self, function, iterate)

        result = _run(config, evaluate, initializer, iterate, callbacks, self, function)

        iterate[...] = result.best_x
        self.last_result = result

        for callback in callbacks:
            _invoke(callback, "end_optimization", self, function, iterate)

        return result


def cne(
    evaluate: Callable[[np.ndarray], float],
    iterate: np.ndarray,
    population_size: int = 500,
    max_generations: int = 5000,
    mutation_prob: float = 0.1,
    mutation_size: float = 0.02,
    select_percent: float = 0.2,
    tolerance: float = 1e-5,
    min_improvement: float | None = None,
    init_strategy: str | Initializer = "uniform",
    init_scale: float | None = None,
    n_workers: int | None = None,
    seed: int | None = None,
    callbacks: Sequence[Callback] = (),
) -> CNEResult:
    """Run CNE and return the full result without modifying iterate.

    Takes the same settings as CNE. The starting point is copied (converted
    to float64 if it is not floating point already).

    Returns:
        CNEResult with the best candidate, its fitness, the termination
        status, generation and evaluation counts, the best-fitness history and
        the final population.

    Example:
        >>> result = cne(lambda x: float(np.sum(x**2)), np.ones((5, 1)),
        ...              population_size=50, max_generations=200, seed=42)
        >>> result.best_fitness < 5.0
        True
    """
    x = np.array(iterate, copy=True)
    if not np.issubdtype(x.dtype, np.floating):
        x = x.astype(np.float64)

    optimizer = CNE(
        population_size=population_size,
        max_generations=max_generations,
        mutation_prob=mutation_prob,
        mutation_size=mutation_size,
        select_percent=select_percent,
        tolerance=tolerance,
        min_improvement=min_improvement,
        init_strategy=init_strategy,
        init_scale=init_scale,
        n_workers=n_workers,
        seed=seed,
    )
    return optimizer._optimize(evaluate, x, callbacks)


def _validate_iterate(iterate: np.ndarray) -> None:
    if not isinstance(iterate, np.ndarray):
        raise InvalidConfiguration(f"iterate must be a numpy array, got {type(iterate).__name__}")
    if not np.issubdtype(iterate.dtype, np.floating):
        raise InvalidConfiguration(f"iterate must have float dtype, got {iterate.dtype}")
    if iterate.size == 0:
        raise InvalidConfiguration("iterate must not be empty")


def _resolve_initializer(config: CNEConfig) -> Initializer:
    if not isinstance(config.init_strategy, str):
        return config.init_strategy
    try:
        return InitializerRegistry.get(config.init_strategy, scale=config.effective_init_scale)
    except KeyError as exc:
        raise InvalidConfiguration(exc.args[0]) from exc


def _invoke(callback, hook: str, *args) -> bool:
    method = getattr(callback, hook, None)
    if method is None:
        return False
    return bool(method(*args))


def _seed_population(config: CNEConfig, initializer: Initializer, iterate: np.ndarray, rng: np.random.Generator) -> Population:
    n = config.population_size
    extra = np.asarray(initializer(iterate, n - 1, rng))
    if extra.shape != (n - 1, *iterate.shape):
        raise InvalidConfiguration(
            f"initializer returned shape {extra.shape}, expected {(n - 1, *iterate.shape)}"
        )

    candidates = np.empty((n, *iterate.shape), dtype=iterate.dtype)
    candidates[0] = iterate
    candidates[1:] = extra
    return Population(candidates=candidates)


def _run(
    config: CNEConfig,
    evaluate: Callable[[np.ndarray], float],
    initializer: Initializer,
    iterate: np.ndarray,
    callbacks: Sequence[Callback],
    optimizer: CNE,
    function,
) -> CNEResult:
    """Run the generational loop on a validated configuration."""
    rng = np.random.default_rng(config.seed)
    n_elite = config.num_elite
    pop = _seed_population(config, initializer, iterate, rng)

    logger.info(
        f"Starting CNE: population_size={config.population_size}, num_elite={n_elite}, "
        f"max_generations={config.max_generations}, shape={pop.shape}"
    )

    best_x = iterate.copy()
    best_fitness = np.inf
    history: list[float] = []
    generation = 0
    evaluations = 0
    status = TerminationStatus.RUNNING

    while status is TerminationStatus.RUNNING:
        fitness = evaluate_population(evaluate, pop.candidates, config.n_workers)
        pop.set_fitness(fitness)
        evaluations += len(pop)

        previous_best = best_fitness if generation > 0 else None
        gen_best_idx = int(np.argmin(fitness))
        if fitness[gen_best_idx] < best_fitness:
            best_fitness = float(fitness[gen_best_idx])
            best_x = pop.candidates[gen_best_idx].copy()

        generation += 1
        history.append(best_fitness)
        logger.debug(
            f"Generation {generation}: best fitness {best_fitness:.6g} (generation best {fitness[gen_best_idx]:.6g})"
        )

        status = check_termination(config, generation, best_fitness, previous_best)

        # Callbacks see every generation, including the last one
        stop_requested = False
        for callback in callbacks:
            stop_requested |= _invoke(callback, "end_generation", optimizer, function, best_x, generation, best_fitness)
        if stop_requested and status is TerminationStatus.RUNNING:
            status = TerminationStatus.STOPPED_BY_CALLBACK

        if status is not TerminationStatus.RUNNING:
            break

        partition = rank_partition(fitness, n_elite)
        reproduce(pop.candidates, partition, rng)
        mutate(pop.candidates, config.mutation_prob, config.mutation_size, rng)

    logger.info(
        f"CNE finished after {generation} generations ({status.value}): best fitness {best_fitness:.6g}, "
        f"{evaluations} evaluations"
    )

    return CNEResult(
        best_x=best_x,
        best_fitness=best_fitness,
        status=status,
        generations=generation,
        evaluations=evaluations,
        history=np.array(history, dtype=np.float64),
        population=pop,
    )
