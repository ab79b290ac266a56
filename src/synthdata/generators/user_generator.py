"""User Generator - builds users holding only the requested fields."""

from typing import Any, Callable

from synthdata.generators import fields
from synthdata.generators.base import Generator, GeneratorState
from synthdata.generators.models import Address, User
from synthdata.params.base import (
    DEFAULT_AGE_RANGE,
    EntityKind,
    GenerationConfig,
)


class UserGenerator(Generator):
    """Generator for user records.

    Every user gets an ``id`` (pools link to it); the remaining fields are
    filled only when requested. ``job`` seniority depends on age, so an age is
    drawn whenever ``age`` or ``job`` is requested, and only emitted for
    ``age``.
    """

    kind = EntityKind.USERS

    def __init__(self, state: GeneratorState):
        super().__init__(state)
        self._field_builders: dict[str, Callable[[], Any]] = {
            "name": lambda: fields.full_name(state),
            "email": lambda: fields.email(state),
            "phone": lambda: fields.phone(state),
            "address": self._build_address,
        }

    def build(self, config: GenerationConfig) -> User:
        return self.build_user(config.fields, config.age_range)

    def build_user(
        self,
        requested: tuple[str, ...],
        age_range: tuple[int, int] = DEFAULT_AGE_RANGE,
    ) -> User:
        """Build one user with the requested optional fields populated.

        Args:
            requested: Field names to populate
            age_range: Inclusive bounds for the age

        Returns:
            The user record
        """
        age_value = None
        if "age" in requested or "job" in requested:
            age_value = fields.age(self.state, age_range)

        values: dict[str, Any] = {"id": fields.uuid4(self.state)}
        for name in requested:
            if name == "age":
                values["age"] = age_value
            elif name == "job":
                values["job"] = fields.job_title(self.state, age_value)
            else:
                values[name] = self._field_builders[name]()

        return User(**values)

    def to_output(self, record: User, config: GenerationConfig) -> dict[str, Any]:
        dumped = record.model_dump(by_alias=True, mode="json")
        return {name: dumped[name] for name in config.fields}

    def columns(self, config: GenerationConfig) -> list[str]:
        return list(config.fields)

    def _build_address(self) -> Address:
        return Address(
            street=fields.street_address(self.state),
            city=fields.city(self.state),
            country=fields.country(self.state),
            zip_code=fields.zip_code(self.state),
        )
