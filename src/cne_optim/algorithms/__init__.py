"""Optimizer implementations.

This module provides the CNE optimizer class and its functional entry point.
"""

from cne_optim.algorithms.optimizer import CNE, cne

__all__ = ["CNE", "cne"]
