"""Element-wise combination of producers with optional length checking."""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from loguru import logger

from zipstrict.core.errors import LengthMismatchError, Mismatch
from zipstrict.core.types import Producer

if TYPE_CHECKING:
    from zipstrict.core.config import ZipConfig

_EXHAUSTED = object()


class StrictZip(Iterator[tuple[Any, ...]]):
    """
    Lazily combine producers into tuples, one value from each per round.

    With ``strict=False`` this behaves like the builtin ``zip``: the output
    ends as soon as any producer runs out. With ``strict=True`` the producers
    must all run out in the same round, otherwise ``LengthMismatchError`` is
    raised naming the first argument (1-based) whose length differs from the
    first one.

    No producer is ever pulled more than one value past the length of the
    shortest producer, including while a mismatch is being detected.

    Example:
        >>> list(StrictZip([1, 2], "ab", strict=True))
        [(1, 'a'), (2, 'b')]
        >>> list(StrictZip([1, 2, 3], [1, 2], strict=True))
        Traceback (most recent call last):
        zipstrict.core.errors.LengthMismatchError: argument 2 is too short
    """

    def __init__(self, *producers: Producer, strict: bool = False) -> None:
        iterators = [iter(p) for p in producers]
        self._first: Iterator[Any] | None = iterators[0] if iterators else None
        self._rest: tuple[Iterator[Any], ...] = tuple(iterators[1:])
        self._arity = len(iterators)
        self._strict = strict
        self._rounds = 0
        self._finished = not iterators
        logger.debug(
            f"StrictZip: combining {self._arity} producers (strict={strict})"
        )

    @property
    def strict(self) -> bool:
        """Whether differing lengths raise instead of truncating."""
        return self._strict

    @property
    def rounds(self) -> int:
        """Number of tuples produced so far."""
        return self._rounds

    def __iter__(self) -> "StrictZip":
        return self

    def __next__(self) -> tuple[Any, ...]:
        if self._finished:
            raise StopIteration

        value = next(self._first, _EXHAUSTED)
        if value is _EXHAUSTED:
            if self._strict:
                self._probe_remaining()
            self._finish()
            raise StopIteration

        values = [value]
        for position, iterator in enumerate(self._rest, start=2):
            value = next(iterator, _EXHAUSTED)
            if value is _EXHAUSTED:
                if self._strict:
                    self._fail(position, Mismatch.TOO_SHORT)
                self._finish()
                raise StopIteration
            values.append(value)

        self._rounds += 1
        return tuple(values)

    def _probe_remaining(self) -> None:
        """Pull once from each later producer, failing on the first with a value left."""
        for position, iterator in enumerate(self._rest, start=2):
            if next(iterator, _EXHAUSTED) is not _EXHAUSTED:
                self._fail(position, Mismatch.TOO_LONG)

    def _fail(self, position: int, mismatch: Mismatch) -> None:
        self._release()
        raise LengthMismatchError(position, mismatch)

    def _finish(self) -> None:
        logger.debug(f"StrictZip: exhausted after {self._rounds} rounds")
        self._release()

    def _release(self) -> None:
        # Once ended or failed, no producer is touched again.
        self._finished = True
        self._first = None
        self._rest = ()

    def _producers(self) -> tuple[Iterator[Any], ...]:
        if self._first is None:
            return ()
        return (self._first, *self._rest)

    def __reduce__(self):
        return (
            self.__class__,
            self._producers(),
            {"_arity": self._arity, "_strict": self._strict, "_rounds": self._rounds},
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}"
            f"(arity={self._arity}, strict={self._strict})"
        )


def combine(
    *producers: Producer,
    strict: bool | None = None,
    config: "ZipConfig | None" = None,
) -> StrictZip:
    """
    Combine producers element-wise into a lazy iterator of tuples.

    Args:
        *producers: Zero or more iterables. Each is consumed at most one value
            past the shortest one's length.
        strict: Require all producers to have the same length. When None, the
            value from ``config`` is used, falling back to False.
        config: Optional ZipConfig supplying the default strictness.

    Returns:
        A StrictZip iterator yielding one tuple per round.

    Raises:
        LengthMismatchError: During iteration, if ``strict`` and the producers
            run out in different rounds.

    Example:
        >>> list(combine([1, 2], [3, 4], strict=True))
        [(1, 3), (2, 4)]
        >>> list(combine([1, 2, 3], "ab"))
        [(1, 'a'), (2, 'b')]
    """
    if strict is None:
        strict = config.strict if config is not None else False
    return StrictZip(*producers, strict=strict)
