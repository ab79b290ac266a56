"""Static description of the HTTP contract, served at ``/docs``."""

from typing import Any

from synthdata.generators.custom_generator import NUMBER_MAX, NUMBER_MIN
from synthdata.params.base import (
    DEFAULT_AGE_RANGE,
    DEFAULT_COUNT,
    DEFAULT_USER_FIELDS,
    MAX_COUNT,
    MIN_COUNT,
    USER_FIELDS,
)


COMMON_PARAMETERS: dict[str, str] = {
    "count": (
        f"Number of records, default {DEFAULT_COUNT}, clamped to "
        f"[{MIN_COUNT}, {MAX_COUNT}]; non-numeric values are rejected"
    ),
    "format": "json (default) or csv; unknown values fall back to json",
    "seed": "Integer; identical seed and parameters reproduce identical output",
    "locale": "Faker locale such as en_US or de_DE; unsupported locales fall back to en_US",
}

USER_PARAMETERS: dict[str, str] = {
    "fields": (
        f"Comma separated subset of {', '.join(USER_FIELDS)}; "
        f"default {','.join(DEFAULT_USER_FIELDS)}"
    ),
    "ageRange": f"min-max, default {DEFAULT_AGE_RANGE[0]}-{DEFAULT_AGE_RANGE[1]}",
}

API_DOCS: dict[str, Any] = {
    "description": "Synthetic data API generating plausible records as JSON or CSV.",
    "endpoints": {
        "GET /users": {
            "description": "Users holding exactly the requested fields",
            "parameters": {**COMMON_PARAMETERS, **USER_PARAMETERS},
        },
        "GET /products": {
            "description": "Products with price, category, stock flag and size variants",
            "parameters": COMMON_PARAMETERS,
        },
        "GET /companies": {
            "description": "Companies with industry, head count, location and departments",
            "parameters": COMMON_PARAMETERS,
        },
        "GET /transactions": {
            "description": (
                "Transactions referencing pooled users (at most 100) "
                "and products (at most 50)"
            ),
            "parameters": COMMON_PARAMETERS,
        },
        "GET /dataset": {
            "description": "Bundle of pooled users, pooled products and transactions linking them",
            "parameters": {**COMMON_PARAMETERS, **USER_PARAMETERS},
        },
        "GET /timeseries": {
            "description": "Evenly spaced points following a random walk",
            "parameters": {
                **COMMON_PARAMETERS,
                "interval": "day (default), hour or minute",
                "start": "ISO-8601 date of the first point; default a random date in the past year",
            },
        },
        "POST /custom": {
            "description": "Records shaped by the schema in the request body",
            "body": {"schema": {"<field>": "name | email | number | address"}},
            "notes": f"number produces integers in [{NUMBER_MIN}, {NUMBER_MAX}]",
            "parameters": COMMON_PARAMETERS,
        },
        "GET /stats": {"description": "Request counts per endpoint"},
        "GET /health": {"description": "Liveness check"},
    },
    "errors": {
        "400": "Invalid parameter or missing schema, body {\"error\": message}",
        "500": "Unexpected generation failure, body {\"error\": message}",
    },
}
