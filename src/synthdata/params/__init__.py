"""Params module - resolves raw request parameters into a GenerationConfig."""

from synthdata.params.base import (
    CustomFieldType,
    EntityKind,
    GenerationConfig,
    Interval,
    OutputFormat,
)
from synthdata.params.resolver import ParameterResolver
from synthdata.params.loader import SchemaLoader, load_schema

__all__ = [
    "CustomFieldType",
    "EntityKind",
    "GenerationConfig",
    "Interval",
    "OutputFormat",
    "ParameterResolver",
    "SchemaLoader",
    "load_schema",
]
