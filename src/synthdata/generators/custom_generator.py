"""Custom Generator - builds records from a caller supplied schema."""

from typing import Any, Callable

from synthdata.errors import InternalGenerationError
from synthdata.generators import fields
from synthdata.generators.base import Generator, GeneratorState
from synthdata.params.base import CustomFieldType, EntityKind, GenerationConfig


NUMBER_MIN = 1
NUMBER_MAX = 100

TYPE_GENERATORS: dict[CustomFieldType, Callable[[GeneratorState], Any]] = {
    CustomFieldType.NAME: fields.full_name,
    CustomFieldType.EMAIL: fields.email,
    CustomFieldType.NUMBER: lambda state: fields.integer(state, NUMBER_MIN, NUMBER_MAX),
    CustomFieldType.ADDRESS: fields.street_address,
}


class CustomGenerator(Generator):
    """Generator for schema driven records.

    The schema's type tags were already checked against CustomFieldType by
    the resolver; each field is dispatched through TYPE_GENERATORS in schema
    order.
    """

    kind = EntityKind.CUSTOM

    def build(self, config: GenerationConfig) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for name, field_type in config.custom_schema.items():
            generate = TYPE_GENERATORS.get(field_type)
            if generate is None:
                raise InternalGenerationError(f"No generator for type {field_type!r}")
            record[name] = generate(self.state)
        return record

    def columns(self, config: GenerationConfig) -> list[str]:
        return list(config.custom_schema)
