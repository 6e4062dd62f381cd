"""Errors raised by zipstrict."""

from enum import Enum


class Mismatch(Enum):
    """Which way an argument differs in length from the first one."""

    TOO_SHORT = "short"
    """The argument ran out while the first one still had values."""

    TOO_LONG = "long"
    """The first argument ran out while this one still had values."""


class LengthMismatchError(ValueError):
    """Raised when strict combination finds inputs of differing lengths.

    Subclasses ``ValueError`` so code written against ``zip(strict=True)``
    catches it unchanged.

    Attributes:
        position: 1-based index of the offending argument, in the order the
            arguments were supplied.
        mismatch: Whether that argument was too short or too long relative to
            the first argument.
    """

    def __init__(self, position: int, mismatch: Mismatch) -> None:
        self.position = position
        self.mismatch = mismatch
        super().__init__(f"argument {position} is too {mismatch.value}")

    def __reduce__(self):
        return (self.__class__, (self.position, self.mismatch))
