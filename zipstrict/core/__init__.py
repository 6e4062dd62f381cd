"""Core types, errors and the combiner for zipstrict."""

from zipstrict.core.types import Record
from zipstrict.core.errors import LengthMismatchError, Mismatch
from zipstrict.core.combine import StrictZip, combine
from zipstrict.core.step import Step, Pipeline

__all__ = [
    "Record",
    "LengthMismatchError",
    "Mismatch",
    "StrictZip",
    "combine",
    "Step",
    "Pipeline",
]
