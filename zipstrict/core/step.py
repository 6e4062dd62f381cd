"""Lazy record steps and their composition into pipelines."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from zipstrict.core.types import Record


class Step(ABC):
    """A stage that turns a stream of records into another stream.

    Sources such as ``Zip`` or ``Seed.zip`` ignore their input and produce
    records of their own. ``process`` should stay lazy so that a consumer
    which stops early never forces more reads from file or generator inputs.
    """

    def __init__(self) -> None:
        self._name: str | None = None

    @abstractmethod
    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Return the output stream for ``records``, pulled on demand."""
        ...

    def as_step(self, name: str) -> "Step":
        """
        Name this step.

        The name shows up in runner logs, in ``Zip`` mismatch warnings (to say
        which source ran short) and is accepted by ``run(stop_after=...)``.
        """
        self._name = name
        return self

    def __rshift__(self, other: "Step") -> "Pipeline":
        """Chain ``other`` after this step: ``source >> Map(fn)``."""
        return Pipeline([self, other])

    @property
    def name(self) -> str:
        """The name given with ``as_step``, else the class name."""
        return self._name or self.__class__.__name__


class Pipeline(Step):
    """Steps run in order, each reading the previous one's output.

    Chaining a pipeline onto a pipeline flattens the two step lists.
    """

    def __init__(self, steps: list[Step]) -> None:
        super().__init__()
        self._steps: list[Step] = steps

    def __rshift__(self, other: Step) -> "Pipeline":
        """Append a step, or every step of another pipeline."""
        if isinstance(other, Pipeline):
            return Pipeline(self._steps + other._steps)
        return Pipeline(self._steps + [other])

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Compose the steps lazily; nothing is read until the result is iterated."""
        current = records
        for step in self._steps:
            current = step.process(current)
        return current

    @property
    def steps(self) -> list[Step]:
        """Steps in execution order."""
        return self._steps

    def run(
        self,
        limit: int | None = None,
        stop_after: int | str | None = None,
        log_level: str | None = None,
    ) -> list[Record]:
        """
        Execute the pipeline and return all records.

        Args:
            limit: Process only first N source records.
            stop_after: Stop after step (index or name).
            log_level: Reconfigure loguru's stderr handler to this level.

        Returns:
            List of output records.
        """
        from zipstrict.core.runner import run_pipeline

        return run_pipeline(
            self,
            limit=limit,
            stop_after=stop_after,
            log_level=log_level,
        )
