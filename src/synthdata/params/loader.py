"""Schema Loader for reading custom record schemas from YAML or JSON files."""

from pathlib import Path
from typing import Any

import yaml


class SchemaLoader:
    """Loads custom schemas from files.

    Accepts either a bare ``{field: type}`` mapping or the request body shape
    ``{"schema": {field: type}}``. YAML is a superset of JSON, so both file
    kinds go through the same parser.
    """

    def load_file(self, path: Path | str) -> dict[str, Any]:
        """Load a request body from a schema file.

        Args:
            path: Path to the YAML or JSON file

        Returns:
            A body mapping with a ``schema`` key, ready for the resolver
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Schema file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return self._to_body(data)

    def load_from_string(self, content: str) -> dict[str, Any]:
        """Load a request body from YAML/JSON text."""
        return self._to_body(yaml.safe_load(content))

    def _to_body(self, data: Any) -> dict[str, Any]:
        if isinstance(data, dict) and isinstance(data.get("schema"), dict):
            return data
        return {"schema": data}


def load_schema(path: Path | str) -> dict[str, Any]:
    """Convenience function to load a schema file."""
    return SchemaLoader().load_file(path)
