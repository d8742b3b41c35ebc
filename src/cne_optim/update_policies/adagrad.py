"""AdaGrad update policy for gradient-based optimizers.

AdaGrad adapts the step size of every parameter by the accumulated squared
gradient, performing larger updates for rarely-updated parameters and smaller
updates for frequently-updated ones:

    G <- G + g * g
    x <- x - step_size * g / (sqrt(G) + epsilon)

The policy is split in two parts. AdaGradUpdate holds the (rarely changing)
configuration; AdaGradPolicy holds the per-run squared gradient. A policy is
created for each run and copies epsilon at construction, so later changes to
the AdaGradUpdate do not affect a run in progress.

References:
    Duchi, J., Hazan, E., & Singer, Y. (2011). Adaptive subgradient methods for
    online learning and stochastic optimization. Journal of Machine Learning
    Research, 12, 2121-2159.
"""

from dataclasses import dataclass, field

import numpy as np


@dataclass
class AdaGradPolicy:
    """Per-run AdaGrad state.

    Attributes:
        epsilon: Constant added to the denominator for numerical stability.
        squared_gradient: Running sum of squared gradients, same shape as the iterate.
    """

    epsilon: float
    squared_gradient: np.ndarray = field(repr=False)

    def update(self, iterate: np.ndarray, step_size: float, gradient: np.ndarray) -> None:
        """Apply one AdaGrad step to iterate, in place.

        Args:
            iterate: Parameters being optimized. Modified in place.
            step_size: Base learning rate.
            gradient: Gradient of the objective at iterate.

        Raises:
            ValueError: If gradient does not match the policy's shape.
        """
        if gradient.shape != self.squared_gradient.shape:
            raise ValueError(
                f"gradient has shape {gradient.shape}, expected {self.squared_gradient.shape}"
            )
        self.squared_gradient += gradient * gradient
        iterate -= (step_size * gradient) / (np.sqrt(self.squared_gradient) + self.epsilon)


class AdaGradUpdate:
    """AdaGrad update rule configuration.

    Args:
        epsilon: Value added to the denominator for numerical stability (default 1e-8).

    Example:
        >>> update = AdaGradUpdate(epsilon=1e-8)
        >>> policy = update.initialize((2, 1))
        >>> x = np.array([[1.0], [1.0]])
        >>> policy.update(x, 0.1, np.array([[2.0], [-2.0]]))
        >>> x
        array([[0.9],
               [1.1]])
    """

    def __init__(self, epsilon: float = 1e-8) -> None:
        if epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {epsilon}")
        self.epsilon = epsilon

    def initialize(self, shape: tuple[int, ...], dtype=np.float64) -> AdaGradPolicy:
        """Create the per-run policy with a zero squared-gradient accumulator.

        Args:
            shape: Shape of the iterate the policy will update.
            dtype: Floating point dtype of the accumulator.

        Returns:
            A fresh AdaGradPolicy.
        """
        return AdaGradPolicy(epsilon=float(self.epsilon), squared_gradient=np.zeros(shape, dtype=dtype))
