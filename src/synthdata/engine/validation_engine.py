"""Validation Engine - checks generated records against their published shapes.

The Validation Engine ensures:
- Records of each kind match the entity JSON Schema
- Linked datasets only reference users and products they contain
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

import jsonschema

from synthdata.params.base import (
    CustomFieldType,
    EntityKind,
    GenerationConfig,
    USER_FIELDS,
)


class ValidationSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """One problem found in a record, located by a ``records[i].field`` path."""

    severity: ValidationSeverity
    message: str
    path: str = ""


@dataclass
class ValidationResult:
    """Issues collected over a batch of records.

    A result is valid as long as it holds no error; warnings do not count.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    validated_count: int = 0

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_issue(self, severity: ValidationSeverity, message: str, path: str = "") -> None:
        self.issues.append(ValidationIssue(severity=severity, message=message, path=path))

    def extend(self, other: "ValidationResult") -> None:
        """Fold another batch's issues and count into this one."""
        self.issues.extend(other.issues)
        self.validated_count += other.validated_count


_UUID = {"type": "string", "format": "uuid"}
_MONEY = {"type": "number", "minimum": 0}
_TIMESTAMP = {
    "type": "string",
    "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$",
}

ADDRESS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "street": {"type": "string"},
        "city": {"type": "string"},
        "country": {"type": "string"},
        "zipCode": {"type": "string"},
    },
    "required": ["street", "city", "country", "zipCode"],
    "additionalProperties": False,
}

USER_PROPERTIES: dict[str, Any] = {
    "id": _UUID,
    "name": {"type": "string"},
    "email": {"type": "string", "pattern": "@"},
    "age": {"type": "integer", "minimum": 0},
    "address": ADDRESS_SCHEMA,
    "phone": {"type": "string"},
    "job": {"type": "string"},
}

PRODUCT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": _UUID,
        "name": {"type": "string"},
        "price": _MONEY,
        "category": {"type": "string"},
        "inStock": {"type": "boolean"},
        "variants": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "size": {"enum": ["S", "M", "L", "XL"]},
                    "color": {"type": "string"},
                    "stock": {"type": "integer", "minimum": 0, "maximum": 100},
                },
                "required": ["size", "color", "stock"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["id", "name", "price", "category", "inStock", "variants"],
    "additionalProperties": False,
}

COMPANY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "industry": {"type": "string"},
        "catchPhrase": {"type": "string"},
        "employees": {"type": "integer", "minimum": 10, "maximum": 10000},
        "location": {"type": "string"},
        "departments": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "head": {"type": "string"},
                    "budget": _MONEY,
                },
                "required": ["name", "head", "budget"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["name", "industry", "catchPhrase", "employees", "location", "departments"],
    "additionalProperties": False,
}

TRANSACTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": _UUID,
        "user": {
            "type": "object",
            "properties": {"id": _UUID, "name": {"type": "string"}},
            "required": ["id", "name"],
            "additionalProperties": False,
        },
        "product": {
            "type": "object",
            "properties": {"id": _UUID, "name": {"type": "string"}, "price": _MONEY},
            "required": ["id", "name", "price"],
            "additionalProperties": False,
        },
        "amount": _MONEY,
        "currency": {"type": "string", "minLength": 3, "maxLength": 3},
        "date": _TIMESTAMP,
        "status": {"enum": ["completed", "pending", "failed"]},
    },
    "required": ["id", "user", "product", "amount", "currency", "date", "status"],
    "additionalProperties": False,
}

TIMESERIES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "timestamp": _TIMESTAMP,
        "value": {"type": "number", "minimum": 0},
    },
    "required": ["timestamp", "value"],
    "additionalProperties": False,
}

CUSTOM_TYPE_SCHEMAS: dict[CustomFieldType, dict[str, Any]] = {
    CustomFieldType.NAME: {"type": "string"},
    CustomFieldType.EMAIL: {"type": "string", "pattern": "@"},
    CustomFieldType.NUMBER: {"type": "integer", "minimum": 1, "maximum": 100},
    CustomFieldType.ADDRESS: {"type": "string"},
}


def user_schema(requested: Iterable[str] = USER_FIELDS) -> dict[str, Any]:
    """JSON Schema for users carrying exactly the requested fields."""
    requested = list(requested)
    return {
        "type": "object",
        "properties": {name: USER_PROPERTIES[name] for name in requested},
        "required": requested,
        "additionalProperties": False,
    }


def custom_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """JSON Schema for records generated from a custom schema."""
    properties = {
        name: CUSTOM_TYPE_SCHEMAS[CustomFieldType(tag)] for name, tag in schema.items()
    }
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


ENTITY_SCHEMAS: dict[EntityKind, dict[str, Any]] = {
    EntityKind.USERS: user_schema(),
    EntityKind.PRODUCTS: PRODUCT_SCHEMA,
    EntityKind.COMPANIES: COMPANY_SCHEMA,
    EntityKind.TRANSACTIONS: TRANSACTION_SCHEMA,
    EntityKind.DATASET: TRANSACTION_SCHEMA,
    EntityKind.TIMESERIES: TIMESERIES_SCHEMA,
}


class ValidationEngine:
    """Engine for validating generated records.

    Enforces:
    - Entity shapes and bounds
    - Referential containment of linked datasets
    """

    def schema_for(
        self,
        kind: EntityKind | str,
        config: GenerationConfig | None = None,
        sample: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Pick the JSON Schema records of ``kind`` must satisfy.

        Users and custom records depend on the request; without a config the
        user schema only constrains known fields, and the custom schema is
        inferred from a sample record.
        """
        kind = EntityKind(kind)

        if kind == EntityKind.USERS:
            if config is not None:
                return user_schema(config.fields)
            schema = user_schema()
            schema["required"] = []
            return schema

        if kind == EntityKind.CUSTOM:
            if config is not None:
                return custom_schema(config.custom_schema)
            return self.create_schema_from_sample(sample or {})

        return ENTITY_SCHEMAS[kind]

    def validate_records(
        self,
        kind: EntityKind | str,
        records: list[dict[str, Any]],
        config: GenerationConfig | None = None,
        prefix: str = "records",
    ) -> ValidationResult:
        """Validate a list of records of one kind.

        Args:
            kind: Entity kind of the records
            records: Records as sent to clients
            config: The configuration they were generated from, if known
            prefix: Name used for the list in issue paths

        Returns:
            Validation result covering every record
        """
        result = ValidationResult(validated_count=len(records))

        if not records:
            result.add_issue(ValidationSeverity.WARNING, "No records to validate", path=prefix)
            return result

        validator = jsonschema.Draft7Validator(self.schema_for(kind, config, sample=records[0]))
        for i, record in enumerate(records):
            for issue in self.validate_record(record, validator):
                issue.path = f"{prefix}[{i}].{issue.path}" if issue.path else f"{prefix}[{i}]"
                result.issues.append(issue)

        return result

    def validate_dataset(self, payload: dict[str, Any]) -> ValidationResult:
        """Validate a linked dataset bundle.

        Checks the pooled products and transactions against their schemas and
        that every transaction references an entity of the bundle.
        """
        users = payload.get("users", [])
        products = payload.get("products", [])
        transactions = payload.get("transactions", [])

        result = self.validate_records(EntityKind.PRODUCTS, products, prefix="products")
        result.extend(
            self.validate_records(EntityKind.TRANSACTIONS, transactions, prefix="transactions")
        )

        user_ids = {user.get("id") for user in users}
        product_ids = {product.get("id") for product in products}
        for i, transaction in enumerate(transactions):
            if transaction.get("user", {}).get("id") not in user_ids:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    "Transaction references a user outside the dataset",
                    path=f"transactions[{i}].user.id",
                )
            if transaction.get("product", {}).get("id") not in product_ids:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    "Transaction references a product outside the dataset",
                    path=f"transactions[{i}].product.id",
                )

        return result

    def validate_record(
        self,
        record: dict[str, Any],
        validator: jsonschema.Draft7Validator,
    ) -> list[ValidationIssue]:
        """Every schema violation in one record, with record-relative paths."""
        return [
            ValidationIssue(
                severity=ValidationSeverity.ERROR,
                message=error.message,
                path=".".join(str(p) for p in error.absolute_path),
            )
            for error in validator.iter_errors(record)
        ]

    def create_schema_from_sample(self, sample: dict[str, Any]) -> dict[str, Any]:
        """Infer an object schema requiring exactly the keys of ``sample``."""
        return {
            "type": "object",
            "properties": {key: infer_type(value) for key, value in sample.items()},
            "required": list(sample),
        }


# bool before int: bool is an int subclass
_SCALAR_TYPES = (
    (bool, "boolean"),
    (int, "integer"),
    (float, "number"),
    (str, "string"),
)


def infer_type(value: Any) -> dict[str, Any]:
    """JSON Schema fragment describing a decoded JSON value."""
    if value is None:
        return {"type": "null"}
    for python_type, json_type in _SCALAR_TYPES:
        if isinstance(value, python_type):
            return {"type": json_type}
    if isinstance(value, dict):
        return {"type": "object", "properties": {k: infer_type(v) for k, v in value.items()}}
    if isinstance(value, list):
        return {"type": "array", "items": infer_type(value[0])} if value else {"type": "array"}
    return {}
