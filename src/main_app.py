"""Serves as the entry point and integrator for the level generator."""

from __future__ import annotations

import logging
import sys

import numpy as np
import structlog
from structlog.stdlib import add_log_level, add_logger_name

import constants
from enums import AttemptOutcome
from model.generation_controller import GenerationController
from model.level_settings import LevelSettings
from model.module_catalog import ModuleCatalog

log = structlog.get_logger()


def setup_logging(level: int = logging.INFO) -> None:
    """Configures structlog for console output."""
    logging.basicConfig(level=level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def main(settings: LevelSettings | None = None) -> int:
    """Generates a level from the example sample catalog.

    Wires the controller's signals to logging, runs attempts until the budget is used up or one succeeds and logs
    the final tilemap (as tile indices, top row first).

    Returns:
        0 if the final attempt succeeded, 1 otherwise.
    """
    setup_logging()

    catalog = ModuleCatalog.from_sample_array(np.array(constants.EXAMPLE_SAMPLE_ARRAY, dtype=np.int_))
    if settings is None:
        settings = LevelSettings(start_module=constants.EXAMPLE_START_MODULE, max_attempts=10)

    controller = GenerationController(catalog, settings)
    controller.attempt_finished.connect(
        lambda outcome: log.info("Attempt concluded", attempt=controller.attempts_run, outcome=outcome.value)
    )
    controller.grid_size_changed.connect(lambda width, height: log.info("Level size", width=width, height=height))

    result = controller.run_until_budget_or_success()
    if result is None:
        return 1

    # Transpose [x, z] to rows and flip so that the top row is printed first.
    tilemap = np.array(
        [[catalog.get_modules()[index].payload for index in column] for column in result.module_indices]
    ).T[::-1]
    log.info("Generated tilemap", tilemap="\n" + "\n".join(" ".join(str(tile) for tile in row) for row in tilemap))

    return 0 if result.outcome == AttemptOutcome.SUCCESS else 1


if __name__ == "__main__":
    sys.exit(main())
