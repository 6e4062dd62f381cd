"""Source and Seed classes for zipstrict."""

from zipstrict.sources.source import Source, ListSource, IterSource, FileSource
from zipstrict.sources.seed import Seed, SeedDimension, SeedSource

__all__ = [
    "Source", "ListSource", "IterSource", "FileSource",
    "Seed", "SeedDimension", "SeedSource",
]
