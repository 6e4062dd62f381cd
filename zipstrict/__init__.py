"""zipstrict - element-wise combination of lazy producers with strict length checking."""

from zipstrict.core.types import Record
from zipstrict.core.errors import LengthMismatchError, Mismatch
from zipstrict.core.combine import StrictZip, combine
from zipstrict.core.config import RunConfig, ZipConfig, configure_logging
from zipstrict.core.step import Step, Pipeline
from zipstrict.core.runner import Runner, run_pipeline
from zipstrict.sources.source import Source, ListSource, IterSource, FileSource
from zipstrict.sources.seed import Seed, SeedDimension
from zipstrict.transforms.data_ops import Map, Zip

__all__ = [
    "Record",
    "LengthMismatchError",
    "Mismatch",
    "StrictZip",
    "combine",
    "RunConfig",
    "ZipConfig",
    "configure_logging",
    "Step",
    "Pipeline",
    "Runner",
    "run_pipeline",
    "Source",
    "ListSource",
    "IterSource",
    "FileSource",
    "Seed",
    "SeedDimension",
    "Map",
    "Zip",
]
