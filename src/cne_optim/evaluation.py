"""Fitness evaluation of a whole population.

This module adapts user objectives to the optimizer and scores every
candidate of a generation:

- as_objective: Accept an object with ``evaluate`` or a plain callable
- evaluate_population: Score all candidates, sequentially or with joblib workers

Evaluation failures are never skipped: the first failing candidate aborts the
pass with an EvaluatorFailure chained to the original exception.
"""

from collections.abc import Callable

import numpy as np

from cne_optim.exceptions import EvaluatorFailure


def as_objective(function) -> Callable[[np.ndarray], float]:
    """Return the scoring callable of an objective.

    Args:
        function: An object with an ``evaluate(x)`` method, or a callable
            ``f(x) -> float``.

    Returns:
        A callable mapping a parameter matrix to a fitness value.

    Raises:
        TypeError: If function provides neither form.
    """
    evaluate = getattr(function, "evaluate", None)
    if callable(evaluate):
        return evaluate
    if callable(function):
        return function
    raise TypeError(f"objective must be callable or provide an evaluate() method, got {type(function).__name__}")


def _read_only(x: np.ndarray) -> np.ndarray:
    view = x.view()
    view.flags.writeable = False
    return view


def _to_fitness(value, index: int | None) -> float:
    if np.ndim(value) != 0:
        raise EvaluatorFailure(
            f"objective returned a non-scalar value of shape {np.shape(value)} for candidate {index}",
            index=index,
        )
    try:
        fitness = float(value)
    except (TypeError, ValueError) as exc:
        raise EvaluatorFailure(
            f"objective returned a non-numeric value {value!r} for candidate {index}",
            index=index,
        ) from exc
    if np.isnan(fitness):
        raise EvaluatorFailure(f"objective returned NaN for candidate {index}", index=index)
    return fitness


def evaluate_candidate(evaluate: Callable[[np.ndarray], float], x: np.ndarray, index: int | None = None) -> float:
    """Score a single candidate.

    Args:
        evaluate: Objective callable.
        x: Candidate parameter matrix. Passed to the objective read-only.
        index: Population index, used in error messages.

    Returns:
        The candidate's fitness as a float.

    Raises:
        EvaluatorFailure: If the objective raises or returns a non-scalar or NaN.
    """
    try:
        value = evaluate(_read_only(x))
    except Exception as exc:
        raise EvaluatorFailure(f"objective failed for candidate {index}: {exc}", index=index) from exc
    return _to_fitness(value, index)


def evaluate_population(
    evaluate: Callable[[np.ndarray], float],
    candidates: np.ndarray,
    n_workers: int | None = None,
) -> np.ndarray:
    """Score every candidate of the population.

    Args:
        evaluate: Objective callable.
        candidates: Population buffer, shape (n, *shape).
        n_workers: Number of joblib workers. None evaluates sequentially in the
            calling thread; -1 uses all CPU cores. For parallel evaluation the
            objective must be picklable.

    Returns:
        Fitness array of shape (n,), index-aligned with candidates.

    Raises:
        EvaluatorFailure: If any evaluation fails.

    Example:
        >>> evaluate_population(lambda x: float(x.sum()), np.ones((3, 2, 2)))
        array([4., 4., 4.])
    """
    n = candidates.shape[0]

    if n_workers is None:
        return np.array([evaluate_candidate(evaluate, candidates[i], i) for i in range(n)], dtype=np.float64)

    from joblib import Parallel, delayed

    try:
        values = Parallel(n_jobs=n_workers)(delayed(evaluate_candidate)(evaluate, candidates[i], i) for i in range(n))
    except EvaluatorFailure:
        raise
    except Exception as exc:
        raise EvaluatorFailure(f"objective failed during parallel evaluation: {exc}") from exc

    return np.array(values, dtype=np.float64)
