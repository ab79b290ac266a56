"""Base classes for Generators.

Generators are responsible for:
- Composing field generators into one structured record
- Honoring the requested field subset and bounds of a GenerationConfig
- Producing records lazily, one at a time

All randomness flows through a GeneratorState created per request, so two
requests never share random state.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Iterator
import random
import uuid

from faker import Faker
from pydantic import BaseModel

from synthdata.params.base import DEFAULT_LOCALE, EntityKind, GenerationConfig


class GeneratorState:
    """Request-scoped random state threaded through every field generator.

    With a seed, the Faker instance and the ``random.Random`` are both seeded
    from it and the reference time is pinned to the start of the current UTC
    day, so identical seeded requests produce identical records.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = DEFAULT_LOCALE,
        now: datetime | None = None,
    ):
        self.seed = seed
        self.locale = locale
        self.rng = random.Random(seed)
        self.faker = Faker(locale)
        self.faker.seed_instance(seed)

        reference = now or datetime.now(timezone.utc)
        if seed is not None:
            reference = reference.replace(hour=0, minute=0, second=0, microsecond=0)
        self.reference_time = reference

    @classmethod
    def from_config(cls, config: GenerationConfig, now: datetime | None = None) -> "GeneratorState":
        return cls(seed=config.seed, locale=config.locale, now=now)

    def uuid4(self) -> str:
        """Random version 4 UUID drawn from this state's generator."""
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))


class Generator(ABC):
    """Abstract base class for all entity builders.

    A builder returns exactly one fully formed record per ``build`` call;
    ``stream`` turns that into a lazy sequence of output dictionaries.
    """

    kind: EntityKind
    uses_pool: bool = False
    # Key the records sit under when the output has an envelope
    records_key: str | None = None

    def __init__(self, state: GeneratorState):
        """Initialize the generator.

        Args:
            state: Request-scoped random state
        """
        self.state = state
        self._rng = state.rng
        self._faker = state.faker

    @abstractmethod
    def build(self, config: GenerationConfig) -> BaseModel | dict[str, Any]:
        """Build a single record.

        Args:
            config: The resolved generation configuration

        Returns:
            One record, as a model or a plain mapping
        """
        pass

    def to_output(
        self,
        record: BaseModel | dict[str, Any],
        config: GenerationConfig,
    ) -> dict[str, Any]:
        """Render a record as the dictionary sent to the client."""
        if isinstance(record, BaseModel):
            return record.model_dump(by_alias=True, mode="json")
        return dict(record)

    def columns(self, config: GenerationConfig) -> list[str] | None:
        """CSV header for this kind, or None to derive it from the records."""
        return None

    def envelope(self, config: GenerationConfig) -> dict[str, Any] | None:
        """Top level values emitted around the records, if any."""
        return None

    def stream(self, config: GenerationConfig) -> Iterator[dict[str, Any]]:
        """Yield ``config.count`` output records one at a time.

        Args:
            config: The resolved generation configuration

        Yields:
            Output dictionaries, built on demand
        """
        for _ in range(config.count):
            yield self.to_output(self.build(config), config)
