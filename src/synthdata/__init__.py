"""
synthdata - Synthetic data generation over HTTP and the command line.

Produces plausible users, products, companies, transactions, linked datasets,
time series and schema-driven records as JSON or CSV.
"""

__version__ = "0.1.0"

from synthdata.errors import InternalGenerationError, InvalidParameter, MissingSchema, SynthDataError
from synthdata.params.base import EntityKind, GenerationConfig, OutputFormat
from synthdata.engine.generation_engine import GeneratedDataset, GenerationEngine
from synthdata.engine.validation_engine import ValidationEngine

__all__ = [
    "EntityKind",
    "GenerationConfig",
    "OutputFormat",
    "GeneratedDataset",
    "GenerationEngine",
    "ValidationEngine",
    "SynthDataError",
    "InvalidParameter",
    "MissingSchema",
    "InternalGenerationError",
]
