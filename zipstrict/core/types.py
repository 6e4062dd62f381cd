"""Shared type aliases for zipstrict."""

from collections.abc import Iterable
from typing import Any

Record = dict[str, Any]
"""A single row flowing through a pipeline."""

Producer = Iterable[Any]
"""Anything ``iter()`` accepts: lists, generators, open files, other iterators."""
