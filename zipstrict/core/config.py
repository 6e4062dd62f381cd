"""Configuration for combination and pipeline execution."""

import sys
from dataclasses import dataclass

from loguru import logger
from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = frozenset(
    ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
)

# Stderr handler owned by configure_logging; 0 is loguru's default handler.
_handler_id: int | None = 0


def _normalize_log_level(level: str) -> str:
    normalized = level.upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(
            f"Unknown log level '{level}'. Valid levels: {sorted(LOG_LEVELS)}"
        )
    return normalized


class ZipConfig(BaseModel):
    """
    Defaults applied when combining producers.
    """

    strict: bool = Field(
        default=False,
        description="Require all producers to run out in the same round",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum loguru level written to stderr",
    )

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        """Validate the level against loguru's built-in levels."""
        return _normalize_log_level(v)

    def setup_logging(self) -> int:
        """Apply ``log_level`` to loguru. Returns the new handler id."""
        return configure_logging(self.log_level)


@dataclass
class RunConfig:
    """Configuration for pipeline execution."""

    limit: int | None = None
    """Process only first N records from source."""

    stop_after: int | str | None = None
    """Stop after this step (index or name)."""

    log_level: str | None = None
    """Logging level. None leaves loguru's handlers untouched."""


def configure_logging(level: str = "INFO") -> int:
    """
    Replace loguru's stderr handler with one at the given level.

    Only the handler installed here (initially loguru's default one) is
    replaced. Sinks added by the application are left alone.

    Args:
        level: A loguru level name, case-insensitive.

    Returns:
        The id of the new handler, usable with ``logger.remove``.
    """
    global _handler_id

    level = _normalize_log_level(level)
    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            logger.debug(f"Handler {_handler_id} was already removed")
    _handler_id = logger.add(sys.stderr, level=level)
    return _handler_id
