"""Generation Engine - runs one generation request end to end.

The engine orchestrates:
- Resolving raw parameters into a GenerationConfig
- Creating the request's GeneratorState
- Building entity pools for linked kinds
- Handing back a lazy record sequence for the serializer
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Iterator

from synthdata.errors import InternalGenerationError, InvalidParameter, SynthDataError
from synthdata.generators.base import GeneratorState
from synthdata.generators.pool import POOL_USER_FIELDS, PoolManager
from synthdata.generators.registry import GeneratorRegistry, get_global_generator_registry
from synthdata.logging_config import get_logger
from synthdata.params.base import EntityKind, GenerationConfig
from synthdata.params.resolver import ParameterResolver

logger = get_logger(__name__)


class GeneratedDataset:
    """Result of a generation run.

    ``records`` is a one-shot iterator; records are built as it is consumed.
    Everything that can reject the request has already run by the time a
    GeneratedDataset exists.
    """

    def __init__(
        self,
        kind: EntityKind,
        config: GenerationConfig,
        records: Iterator[dict[str, Any]],
        columns: list[str] | None = None,
        envelope: dict[str, Any] | None = None,
        records_key: str | None = None,
    ):
        self.kind = kind
        self.config = config
        self.records = records
        self.columns = columns
        self.envelope = envelope
        self.records_key = records_key

    @property
    def count(self) -> int:
        return self.config.count

    def materialize(self) -> list[dict[str, Any]]:
        """Consume the record iterator into a list."""
        return list(self.records)

    def to_payload(self) -> list[dict[str, Any]] | dict[str, Any]:
        """Materialize the full response body as Python objects."""
        records = self.materialize()
        if self.envelope is None:
            return records
        return {**self.envelope, self.records_key: records}


class GenerationEngine:
    """Engine for orchestrating record generation.

    The GenerationEngine:
    - Resolves parameters before anything is generated
    - Threads a per-request GeneratorState through every builder
    - Builds pools once for kinds that link to users and products
    """

    def __init__(
        self,
        resolver: ParameterResolver | None = None,
        generator_registry: GeneratorRegistry | None = None,
    ):
        self.resolver = resolver or ParameterResolver()
        self.generator_registry = generator_registry or get_global_generator_registry()

    def generate(
        self,
        kind: EntityKind | str,
        params: Mapping[str, Any],
        body: Any = None,
        now: datetime | None = None,
    ) -> GeneratedDataset:
        """Resolve raw parameters and generate a dataset.

        Args:
            kind: Entity kind to generate
            params: Raw parameters (query string or CLI options)
            body: Parsed request body, for custom generation
            now: Reference time override

        Returns:
            A GeneratedDataset whose records are produced lazily
        """
        try:
            kind = EntityKind(kind)
        except ValueError:
            raise InvalidParameter("kind", f"unknown kind {kind!r}") from None

        config = self.resolver.resolve(kind, params, body)
        return self.generate_from_config(kind, config, now=now)

    def generate_from_config(
        self,
        kind: EntityKind,
        config: GenerationConfig,
        now: datetime | None = None,
    ) -> GeneratedDataset:
        """Generate a dataset from an already resolved configuration."""
        generator_class = self.generator_registry.get(kind)
        if generator_class is None:
            raise InternalGenerationError(f"No generator registered for {kind.value}")

        state = GeneratorState.from_config(config, now=now)

        options: dict[str, Any] = {}
        if generator_class.uses_pool:
            options["pool"] = self._build_pool(kind, config, state)

        generator = self.generator_registry.create(kind, state, **options)

        logger.debug(
            "generation_started",
            kind=kind.value,
            count=config.count,
            seed=config.seed,
            locale=config.locale,
        )

        return GeneratedDataset(
            kind=kind,
            config=config,
            records=self._guard(generator.stream(config), kind),
            columns=generator.columns(config),
            envelope=generator.envelope(config),
            records_key=generator.records_key,
        )

    def _build_pool(
        self,
        kind: EntityKind,
        config: GenerationConfig,
        state: GeneratorState,
    ) -> PoolManager:
        pool = PoolManager(state)
        if kind == EntityKind.DATASET:
            pool.build_users(config.count, config.fields, config.age_range)
        else:
            pool.build_users(config.count, POOL_USER_FIELDS)
        pool.build_products(config.count)
        return pool

    def _guard(
        self,
        records: Iterator[dict[str, Any]],
        kind: EntityKind,
    ) -> Iterator[dict[str, Any]]:
        """Convert unexpected builder failures into InternalGenerationError."""
        try:
            yield from records
        except SynthDataError:
            raise
        except Exception as e:
            logger.exception("generation_failed", kind=kind.value)
            raise InternalGenerationError(f"Failed to generate {kind.value}: {e}") from e

    def list_kinds(self) -> list[EntityKind]:
        """List all available entity kinds."""
        return self.generator_registry.list_kinds()
