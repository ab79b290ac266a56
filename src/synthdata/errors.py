"""Error taxonomy for the generation layer.

Every error carries the HTTP status the API maps it to, so the endpoint
boundary converts them without knowing the individual types.
"""


class SynthDataError(Exception):
    """Base class for all generation errors."""

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class InvalidParameter(SynthDataError):
    """A supplied parameter failed validation."""

    def __init__(self, name: str, detail: str | None = None):
        self.name = name
        self.detail = detail
        message = f"Invalid parameter: {name}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MissingSchema(SynthDataError):
    """The custom endpoint received no usable schema."""

    def __init__(self, message: str = "Missing or empty schema"):
        super().__init__(message)


class InternalGenerationError(SynthDataError):
    """Unexpected failure while building a record."""

    status_code = 500

    def __init__(self, message: str = "Internal generation error"):
        super().__init__(message)
