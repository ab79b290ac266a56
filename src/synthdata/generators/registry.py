"""Generator Registry for managing available entity builders."""

from typing import Any, Type

from synthdata.generators.base import Generator, GeneratorState
from synthdata.params.base import EntityKind


class GeneratorRegistry:
    """Registry for entity builders.

    Maps each EntityKind to the builder class that produces it and creates
    builder instances bound to a request's GeneratorState.
    """

    def __init__(self):
        self._generators: dict[EntityKind, Type[Generator]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the default generators."""
        from synthdata.generators.user_generator import UserGenerator
        from synthdata.generators.product_generator import ProductGenerator
        from synthdata.generators.company_generator import CompanyGenerator
        from synthdata.generators.transaction_generator import TransactionGenerator
        from synthdata.generators.dataset_generator import DatasetGenerator
        from synthdata.generators.timeseries_generator import TimeSeriesGenerator
        from synthdata.generators.custom_generator import CustomGenerator

        self.register(EntityKind.USERS, UserGenerator)
        self.register(EntityKind.PRODUCTS, ProductGenerator)
        self.register(EntityKind.COMPANIES, CompanyGenerator)
        self.register(EntityKind.TRANSACTIONS, TransactionGenerator)
        self.register(EntityKind.DATASET, DatasetGenerator)
        self.register(EntityKind.TIMESERIES, TimeSeriesGenerator)
        self.register(EntityKind.CUSTOM, CustomGenerator)

    def register(self, kind: EntityKind, generator_class: Type[Generator]) -> None:
        """Register a generator for an entity kind.

        Args:
            kind: The kind of record this generator produces
            generator_class: The generator class to register
        """
        self._generators[kind] = generator_class

    def get(self, kind: EntityKind | str) -> Type[Generator] | None:
        """Get a generator class by entity kind.

        Args:
            kind: The entity kind (can be string or enum)

        Returns:
            The generator class or None if not found
        """
        if isinstance(kind, str):
            try:
                kind = EntityKind(kind)
            except ValueError:
                return None

        return self._generators.get(kind)

    def create(
        self,
        kind: EntityKind | str,
        state: GeneratorState,
        **kwargs: Any,
    ) -> Generator | None:
        """Create a generator instance.

        Args:
            kind: The kind of generator to create
            state: Request-scoped random state
            **kwargs: Extra constructor arguments (the pool, for linked kinds)

        Returns:
            A generator instance or None if kind not found
        """
        generator_class = self.get(kind)
        if generator_class is None:
            return None
        return generator_class(state, **kwargs)

    def list_kinds(self) -> list[EntityKind]:
        """List all registered entity kinds."""
        return list(self._generators.keys())

    def __contains__(self, kind: EntityKind | str) -> bool:
        """Check if an entity kind is registered."""
        return self.get(kind) is not None


_global_registry: GeneratorRegistry | None = None


def get_global_generator_registry() -> GeneratorRegistry:
    """Get the global generator registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
    return _global_registry
