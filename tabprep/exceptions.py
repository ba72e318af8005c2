"""
Error taxonomy for feature selection and data processing.

Every failure raised by a processing stage derives from ProcessingError so
callers can catch the whole family in one place:
- SchemaError: a required column is missing or has an incompatible layout
- UnsupportedColumnTypeError: a column type the statistics cannot handle
- TransformError: numerical failure during concatenation/normalization/projection
- ConfigurationError: invalid settings that cannot be clamped automatically
"""

from typing import Optional


class ProcessingError(Exception):
    """Base class for all processing failures."""


class SchemaError(ProcessingError):
    """Raised when a column is missing from the dataset schema."""

    def __init__(self, message: str, column: Optional[str] = None):
        super().__init__(message)
        self.column = column


class UnsupportedColumnTypeError(ProcessingError):
    """Raised when a column is neither numeric nor boolean."""

    def __init__(self, column: str, kind: str):
        super().__init__(
            f"Column '{column}' has unsupported type '{kind}' "
            f"(expected numeric or boolean)"
        )
        self.column = column
        self.kind = kind


class TransformError(ProcessingError):
    """Raised when a numerical transformation fails."""


class ConfigurationError(ProcessingError):
    """Raised for invalid configuration values."""
