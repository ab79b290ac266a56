"""Engine module - Runtime layer.

Contains:
- Generation Engine: resolves parameters and produces lazy record sequences
- Validation Engine: checks records against entity schemas
"""

from synthdata.engine.generation_engine import GenerationEngine, GeneratedDataset
from synthdata.engine.validation_engine import ValidationEngine, ValidationResult

__all__ = [
    "GenerationEngine",
    "GeneratedDataset",
    "ValidationEngine",
    "ValidationResult",
]
