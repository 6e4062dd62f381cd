"""Pipeline execution engine."""

import time
from itertools import islice
from typing import TYPE_CHECKING

from loguru import logger

from zipstrict.core.config import RunConfig, configure_logging
from zipstrict.core.types import Record

if TYPE_CHECKING:
    from zipstrict.core.step import Pipeline


class Runner:
    """
    Execution engine for pipelines.

    Handles:
    - Step-by-step execution with materialization between steps
    - Truncating the source output to ``limit`` records
    - Stopping early after a named or indexed step
    """

    def __init__(self, pipeline: "Pipeline", config: RunConfig | None = None) -> None:
        """
        Initialize the runner.

        Args:
            pipeline: The pipeline to execute.
            config: Execution configuration. Uses defaults if None.
        """
        self.pipeline = pipeline
        self.config = config or RunConfig()

    def _resolve_stop_index(self, step_names: list[str]) -> int | None:
        """Turn ``stop_after`` into a step index, validating it."""
        stop_after = self.config.stop_after
        if stop_after is None:
            return None
        if isinstance(stop_after, int):
            if not 0 <= stop_after < len(step_names):
                raise ValueError(
                    f"stop_after index {stop_after} out of range "
                    f"for pipeline with {len(step_names)} steps"
                )
            return stop_after
        if stop_after not in step_names:
            raise ValueError(
                f"Unknown step '{stop_after}'. Steps: {step_names}"
            )
        return step_names.index(stop_after)

    def execute(self) -> list[Record]:
        """
        Execute the pipeline.

        Returns:
            List of output records.
        """
        if self.config.log_level is not None:
            configure_logging(self.config.log_level)

        steps = self.pipeline.steps
        step_names = [s.name for s in steps]
        stop_index = self._resolve_stop_index(step_names)

        records: list[Record] = []

        for i, step in enumerate(steps):
            step_name = step.name
            records_in = len(records)

            logger.info(f"Executing step {i}: {step_name}")
            start_time = time.time()

            output = step.process(iter(records))
            if i == 0 and self.config.limit is not None:
                # Pull lazily so the source is never read past the limit.
                output = islice(output, self.config.limit)
            records = list(output)

            elapsed = time.time() - start_time
            logger.info(
                f"Step {i} ({step_name}): {records_in} → {len(records)} records "
                f"({elapsed:.2f}s)"
            )

            if stop_index is not None and i == stop_index:
                logger.info(f"Stopping after step {i} ({step_name})")
                break

        return records


def run_pipeline(
    pipeline: "Pipeline",
    limit: int | None = None,
    stop_after: int | str | None = None,
    log_level: str | None = None,
) -> list[Record]:
    """
    Execute a pipeline with the runner.

    Args:
        pipeline: Pipeline to execute.
        limit: Process only first N source records.
        stop_after: Stop after step (index or name).
        log_level: Reconfigure loguru's stderr handler to this level.

    Returns:
        List of output records.
    """
    config = RunConfig(limit=limit, stop_after=stop_after, log_level=log_level)
    runner = Runner(pipeline, config)
    return runner.execute()
