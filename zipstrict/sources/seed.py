"""Seed builders for creating initial records from column values."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from zipstrict.core.combine import combine
from zipstrict.core.errors import LengthMismatchError
from zipstrict.core.step import Step
from zipstrict.core.types import Record


@dataclass
class SeedDimension:
    """A single column of seed values."""

    columns: list[str]
    values: list[dict[str, Any]]

    def __len__(self) -> int:
        return len(self.values)


class SeedSource(Step):
    """A source step that yields pre-built seed records."""

    def __init__(self, records: list[Record]) -> None:
        super().__init__()
        self._records = records

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Yield the seed records."""
        logger.info(f"Generating {len(self._records)} seed records")
        yield from self._records

    def __len__(self) -> int:
        return len(self._records)


class Seed:
    """Factory class for building initial records from column values."""

    @staticmethod
    def values(column: str, values: Iterable[Any]) -> SeedDimension:
        """
        Create a dimension with explicit values.

        Example:
            >>> Seed.values("city", ["Paris", "Berlin"])
            # {"city": "Paris"}, {"city": "Berlin"}
        """
        return SeedDimension(columns=[column], values=[{column: v} for v in values])

    @staticmethod
    def range(column: str, start: int, end: int, step: int = 1) -> SeedDimension:
        """
        Create a dimension from an inclusive numeric range.

        Example:
            >>> Seed.range("grade_level", 1, 12)
            # 12 values, grade_level 1 through 12
        """
        return Seed.values(column, range(start, end + 1, step))

    @staticmethod
    def zip(*dimensions: SeedDimension, strict: bool = True) -> SeedSource:
        """
        Combine dimensions row by row into one record per position.

        Args:
            *dimensions: SeedDimension objects to combine, left to right.
                Later dimensions win on overlapping columns.
            strict: Require every dimension to have the same length. When
                False, extra values beyond the shortest dimension are dropped.

        Returns:
            A SeedSource step that can be used to start a pipeline.

        Raises:
            LengthMismatchError: If ``strict`` and the dimensions differ in
                length. ``position`` is the 1-based index of the first
                dimension whose length differs from the first one.

        Example:
            >>> Seed.zip(
            ...     Seed.values("question", ["Q1", "Q2", "Q3"]),
            ...     Seed.values("answer", ["A1", "A2", "A3"]),
            ... )
            # 3 records: (Q1, A1), (Q2, A2), (Q3, A3)
        """
        rows = combine(*(dim.values for dim in dimensions), strict=strict)

        records: list[Record] = []
        try:
            for row in rows:
                record: Record = {}
                for item in row:
                    record.update(item)
                records.append(record)
        except LengthMismatchError as e:
            lengths = [len(dim) for dim in dimensions]
            logger.warning(f"Seed.zip: {e} (dimension lengths: {lengths})")
            raise

        logger.debug(
            f"Seed.zip created {len(records)} records from "
            f"{len(dimensions)} dimensions"
        )
        return SeedSource(records)
