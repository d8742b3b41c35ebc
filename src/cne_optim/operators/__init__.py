"""Evolutionary operators for CNE.

This module provides:
- uniform_init, normal_init: population seeding strategy factories
- uniform_crossover: complementary element-wise crossover of two parents
- reproduce: write children of paired elites into dropout slots
- mutate: sparse additive weight perturbation
"""

from cne_optim.operators.crossover import reproduce, uniform_crossover
from cne_optim.operators.initialization import normal_init, uniform_init
from cne_optim.operators.mutation import mutate
from cne_optim.registry import InitializerRegistry

# Register built-in initialization strategies
InitializerRegistry.register("uniform", uniform_init)
InitializerRegistry.register("normal", normal_init)

__all__ = ["uniform_init", "normal_init", "uniform_crossover", "reproduce", "mutate"]
