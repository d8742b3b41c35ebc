"""Update policies for gradient-based optimizers."""

from cne_optim.update_policies.adagrad import AdaGradPolicy, AdaGradUpdate

__all__ = ["AdaGradUpdate", "AdaGradPolicy"]
