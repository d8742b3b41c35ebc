"""Termination criteria for the CNE generational loop."""

from enum import Enum

from cne_optim.config import CNEConfig


class TerminationStatus(str, Enum):
    """State of a CNE run.

    A run starts as RUNNING and ends in exactly one of the other states.
    """

    RUNNING = "running"
    CONVERGED_BY_TOLERANCE = "converged_by_tolerance"
    MAX_GENERATIONS_REACHED = "max_generations_reached"
    MIN_IMPROVEMENT_REACHED = "min_improvement_reached"
    STOPPED_BY_CALLBACK = "stopped_by_callback"


def check_termination(
    config: CNEConfig,
    generation: int,
    best_fitness: float,
    previous_best: float | None = None,
) -> TerminationStatus:
    """Decide whether the run stops after the given generation.

    Conditions are checked in priority order:

    1. Tolerance: enabled when ``tolerance >= 0``; stops once
       ``best_fitness <= tolerance``.
    2. Generation budget: stops once ``generation >= max_generations``.
    3. Minimum improvement: enabled when ``min_improvement >= 0``; stops once
       the best fitness dropped by less than ``min_improvement`` since the
       previous generation. Never fires without a previous generation.

    Args:
        config: Run configuration.
        generation: Number of generations completed, counting this one.
        best_fitness: Best fitness observed so far in the run.
        previous_best: Best fitness observed up to the previous generation, or
            None on the first generation.

    Returns:
        RUNNING if no condition holds, otherwise the status of the first one that does.

    Example:
        >>> cfg = CNEConfig(tolerance=0.01, max_generations=10)
        >>> check_termination(cfg, 1, 0.0)
        <TerminationStatus.CONVERGED_BY_TOLERANCE: 'converged_by_tolerance'>
    """
    if config.tolerance_enabled and best_fitness <= config.tolerance:
        return TerminationStatus.CONVERGED_BY_TOLERANCE

    if generation >= config.max_generations:
        return TerminationStatus.MAX_GENERATIONS_REACHED

    if config.min_improvement_enabled and previous_best is not None:
        if previous_best - best_fitness < config.min_improvement:
            return TerminationStatus.MIN_IMPROVEMENT_REACHED

    return TerminationStatus.RUNNING
