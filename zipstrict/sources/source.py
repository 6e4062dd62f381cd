"""Source steps that produce records lazily."""

import csv
import json
from collections.abc import Iterable, Iterator
from pathlib import Path

from loguru import logger

from zipstrict.core.step import Step
from zipstrict.core.types import Record

FORMATS = frozenset(["jsonl", "csv", "tsv", "txt"])

EXTENSIONS = {
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
    ".csv": "csv",
    ".tsv": "tsv",
    ".txt": "txt",
}


class ListSource(Step):
    """Yield records from an in-memory list."""

    def __init__(self, records: list[Record]) -> None:
        super().__init__()
        self._records = records

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        logger.debug(f"ListSource: {len(self._records)} records")
        yield from self._records

    def __len__(self) -> int:
        return len(self._records)


class IterSource(Step):
    """Yield records from an arbitrary iterable, possibly a single-use one.

    A generator passed here can only be drained once; a second run of the
    pipeline will see it empty.
    """

    def __init__(self, records: Iterable[Record]) -> None:
        super().__init__()
        self._records = records

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        yield from self._records


class FileSource(Step):
    """Stream records from a local JSONL, CSV, TSV or TXT file.

    The file is opened when iteration starts and read one line at a time, so
    a consumer that stops early leaves the rest of the file unread.
    ``records_read`` reports how many records the last iteration produced.
    """

    def __init__(
        self,
        path: str | Path,
        format: str | None = None,
        text_column: str = "text",
    ) -> None:
        """
        Initialize a file source.

        Args:
            path: Path to the file to read.
            format: One of "jsonl", "csv", "tsv", "txt". Detected from the
                file extension when None.
            text_column: Column holding each line of a TXT file.

        Raises:
            ValueError: If the format is unsupported or cannot be detected.
        """
        super().__init__()
        self._path = Path(path)
        self._format = format or self._detect_format()
        self._text_column = text_column
        self.records_read = 0

        if self._format not in FORMATS:
            raise ValueError(
                f"Unsupported format: {self._format}. "
                f"Supported formats: {sorted(FORMATS)}"
            )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def format(self) -> str:
        return self._format

    def _detect_format(self) -> str:
        suffix = self._path.suffix.lower()
        if suffix not in EXTENSIONS:
            raise ValueError(
                f"Cannot auto-detect format from extension: {suffix!r}. "
                "Please specify format explicitly."
            )
        return EXTENSIONS[suffix]

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Read the file, yielding one record per row or line."""
        logger.info(f"Reading {self._path} (format: {self._format})")
        self.records_read = 0
        for record in self._read():
            self.records_read += 1
            yield record

    def _read(self) -> Iterator[Record]:
        if self._format == "jsonl":
            yield from self._read_jsonl()
        elif self._format == "txt":
            yield from self._read_txt()
        else:
            delimiter = "\t" if self._format == "tsv" else ","
            yield from self._read_delimited(delimiter)

    def _read_jsonl(self) -> Iterator[Record]:
        with open(self._path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping invalid JSON at line {line_num}: {e}")

    def _read_delimited(self, delimiter: str) -> Iterator[Record]:
        with open(self._path, "r", encoding="utf-8", newline="") as f:
            for row in csv.DictReader(f, delimiter=delimiter):
                yield dict(row)

    def _read_txt(self) -> Iterator[Record]:
        with open(self._path, "r", encoding="utf-8") as f:
            for line in f:
                text = line.rstrip("\n")
                if text:
                    yield {self._text_column: text}


class Source:
    """Factory class for creating source steps."""

    @staticmethod
    def file(path: str | Path, format: str | None = None, **kwargs) -> FileSource:
        """
        Stream records from a local file, detecting the format by extension.

        Examples:
            >>> Source.file("questions.jsonl")
            >>> Source.file("answers.dat", format="tsv")
        """
        return FileSource(path=path, format=format, **kwargs)

    @staticmethod
    def jsonl(path: str | Path) -> FileSource:
        """Stream records from a JSONL file (invalid lines are skipped)."""
        return FileSource(path=path, format="jsonl")

    @staticmethod
    def csv(path: str | Path) -> FileSource:
        """Stream rows of a CSV file with a header line."""
        return FileSource(path=path, format="csv")

    @staticmethod
    def tsv(path: str | Path) -> FileSource:
        """Stream rows of a tab-separated file with a header line."""
        return FileSource(path=path, format="tsv")

    @staticmethod
    def txt(path: str | Path, text_column: str = "text") -> FileSource:
        """Stream non-empty lines of a text file as ``{text_column: line}``."""
        return FileSource(path=path, format="txt", text_column=text_column)

    @staticmethod
    def list(records: list[Record]) -> ListSource:
        """
        Yield records from a Python list.

        Example:
            >>> Source.list([{"q": "2+2?"}, {"q": "3*3?"}])
        """
        return ListSource(records)

    @staticmethod
    def iterable(records: Iterable[Record]) -> IterSource:
        """
        Yield records from any iterable, including generators.

        Example:
            >>> Source.iterable({"n": i} for i in range(3))
        """
        return IterSource(records)
