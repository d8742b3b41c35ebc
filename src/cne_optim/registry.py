"""Registry for population initialization strategies.

Instead of hardcoding how the starting population is spread around the
caller's iterate, initializer factories are registered by name and retrieved
with their configuration:

    ```python
    from cne_optim.registry import InitializerRegistry, list_initializers

    # Register a strategy factory
    def constant_factory(scale: float = 0.1):
        def initializer(iterate, n, rng):
            return np.broadcast_to(iterate + scale, (n, *iterate.shape)).copy()
        return initializer

    InitializerRegistry.register("constant", constant_factory)

    # Get a configured initializer
    init = InitializerRegistry.get("constant", scale=0.5)

    # List available strategies
    available = list_initializers()  # ["constant", "normal", "uniform"]
    ```

Built-in strategies ("uniform", "normal") are registered when
``cne_optim.operators`` is imported.
"""

from collections.abc import Callable

from cne_optim.protocols import Initializer


class InitializerRegistry:
    """Registry for population initialization strategies.

    The registry stores factory functions that accept keyword arguments and
    return Initializer callables, so that strategies can be configured at
    retrieval time.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions.
    """

    _registry: dict[str, Callable[..., Initializer]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., Initializer]) -> None:
        """Register an initializer factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns an Initializer. Should accept
                keyword arguments for configuration.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> Initializer:
        """Get a configured initializer by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Returns:
            A configured Initializer callable.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.

        Example:
            ```python
            init = InitializerRegistry.get("normal", scale=0.05)
            extra = init(iterate, n=49, rng=rng)
            ```
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Initialization strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


def list_initializers() -> list[str]:
    """List all registered initialization strategies.

    Convenience function that returns InitializerRegistry.list().
    """
    return InitializerRegistry.list()
