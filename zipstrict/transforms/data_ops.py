"""Data operation steps: Map and Zip."""

from collections.abc import Callable, Iterable

from loguru import logger

from zipstrict.core.combine import combine
from zipstrict.core.config import ZipConfig
from zipstrict.core.errors import LengthMismatchError
from zipstrict.core.step import Step
from zipstrict.core.types import Record


class Map(Step):
    """Transform each record one-to-one."""

    def __init__(self, fn: Callable[[Record], Record]) -> None:
        """
        Initialize a Map step.

        Args:
            fn: Function that takes a record and returns a transformed record.

        Example:
            >>> Map(lambda r: {**r, "pair": f"{r['question']} -> {r['answer']}"})
        """
        super().__init__()
        self._fn = fn

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Apply the transformation to each record."""
        for record in records:
            yield self._fn(record)


class Zip(Step):
    """Combine several record streams side by side, one record from each per row.

    Each source is a Step or Pipeline whose output is read lazily, in
    lockstep with the others. Upstream records, if any, are ignored: Zip
    starts a pipeline the way a source does.

    With ``strict=True`` every source must produce the same number of
    records; otherwise ``LengthMismatchError`` is raised as soon as the
    difference is seen, after the rows before it have been yielded. No
    source is read more than one record past the shortest one.

    Examples:
        >>> # Pair questions with answers from two files
        >>> Zip(Source.jsonl("questions.jsonl"), Source.jsonl("answers.jsonl"), strict=True)

        >>> # Keep each side under its own key
        >>> Zip(chosen, rejected, output_format="nested")
        >>> # Output: {"source_1": {...}, "source_2": {...}}
    """

    VALID_OUTPUT_FORMATS = frozenset(["merge", "nested"])

    def __init__(
        self,
        *sources: Step,
        strict: bool | None = None,
        output_format: str = "merge",
        config: ZipConfig | None = None,
    ) -> None:
        """
        Initialize a Zip step.

        Args:
            *sources: Steps or pipelines whose outputs are combined.
            strict: Require all sources to produce the same number of
                records. When None, ``config.strict`` is used, else False.
            output_format: ``"merge"`` merges each row's records left to
                right (later sources win on shared keys); ``"nested"`` keeps
                them apart under ``source_1``, ``source_2``, ...
            config: Optional ZipConfig supplying the default strictness.

        Raises:
            ValueError: If no sources are given or the output format is unknown.
            TypeError: If a source is not a Step.
        """
        super().__init__()

        if not sources:
            raise ValueError("Zip requires at least one source")

        for position, source in enumerate(sources, start=1):
            if not isinstance(source, Step):
                raise TypeError(
                    f"Zip source {position} must be a Step, got "
                    f"{type(source).__name__}. Wrap plain data with Source.list "
                    "or Source.iterable."
                )

        if output_format not in self.VALID_OUTPUT_FORMATS:
            raise ValueError(
                f"Invalid output_format '{output_format}'. "
                f"Valid formats: {sorted(self.VALID_OUTPUT_FORMATS)}"
            )

        if strict is None:
            strict = config.strict if config is not None else False

        self._sources = sources
        self._strict = strict
        self._output_format = output_format

    @property
    def strict(self) -> bool:
        return self._strict

    def _format_output(self, row: tuple[Record, ...]) -> Record:
        if self._output_format == "nested":
            return {f"source_{i}": record for i, record in enumerate(row, start=1)}

        output: Record = {}
        for record in row:
            output.update(record)
        return output

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Read all sources in lockstep and yield one combined record per row."""
        streams = [source.process(iter([])) for source in self._sources]
        rows = combine(*streams, strict=self._strict)

        total = 0
        try:
            for row in rows:
                total += 1
                yield self._format_output(row)
        except LengthMismatchError as e:
            failed = self._sources[e.position - 1].name
            logger.warning(
                f"Zip: {e} ({failed} vs {self._sources[0].name}) after {total} rows"
            )
            raise

        logger.info(f"Zip: {total} rows from {len(self._sources)} sources")
