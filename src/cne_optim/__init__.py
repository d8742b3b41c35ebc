"""cne-optim: Conventional Neural Evolution for numpy parameter matrices.

A pure numpy implementation of the CNE evolutionary optimizer: a population of
candidate parameter matrices is evolved by elite selection, uniform crossover
and sparse additive mutation to minimize an arbitrary objective.

Example (optimizer object, mutates the iterate):
    >>> from cne_optim import CNE
    >>> import numpy as np
    >>> x = np.ones((5, 1))
    >>> optimizer = CNE(population_size=50, max_generations=200, tolerance=1e-5, seed=42)
    >>> best = optimizer.optimize(lambda m: float(np.sum(m**2)), x)
    >>> best <= 5.0
    True

Example (functional, returns a CNEResult):
    >>> from cne_optim import cne
    >>> result = cne(lambda m: float(np.sum(m**2)), np.ones((5, 1)), population_size=50, max_generations=20, seed=42)
    >>> result.generations <= 20
    True
"""

from cne_optim.algorithms import CNE, cne
from cne_optim.callbacks import (
    Callback,
    EarlyStopAtMinFitness,
    PrintFitness,
    StoreBestCoordinates,
    TimerStop,
)
from cne_optim.config import CNEConfig
from cne_optim.evaluation import as_objective, evaluate_population
from cne_optim.exceptions import (
    CNEError,
    EvaluatorFailure,
    InvalidConfiguration,
    PopulationInvariantError,
)
from cne_optim.operators import mutate, normal_init, reproduce, uniform_crossover, uniform_init
from cne_optim.population import CandidateView, Population
from cne_optim.protocols import Initializer, Objective
from cne_optim.registry import InitializerRegistry, list_initializers
from cne_optim.results import CNEResult
from cne_optim.selection import Partition, num_elite, rank_partition
from cne_optim.termination import TerminationStatus, check_termination
from cne_optim.update_policies import AdaGradPolicy, AdaGradUpdate

__all__ = [
    # Optimizer
    "CNE",
    "cne",
    "CNEConfig",
    # Callbacks
    "Callback",
    "PrintFitness",
    "EarlyStopAtMinFitness",
    "StoreBestCoordinates",
    "TimerStop",
    # Evaluation
    "as_objective",
    "evaluate_population",
    # Operators
    "uniform_init",
    "normal_init",
    "uniform_crossover",
    "reproduce",
    "mutate",
    # Selection and termination
    "num_elite",
    "rank_partition",
    "Partition",
    "check_termination",
    "TerminationStatus",
    # Registry
    "InitializerRegistry",
    "list_initializers",
    # Data structures
    "Population",
    "CandidateView",
    "CNEResult",
    # Protocols
    "Objective",
    "Initializer",
    # Errors
    "CNEError",
    "InvalidConfiguration",
    "EvaluatorFailure",
    "PopulationInvariantError",
    # Update policies
    "AdaGradUpdate",
    "AdaGradPolicy",
]
