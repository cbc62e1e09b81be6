"""Contains the class that runs generation attempts and reports their results."""

from __future__ import annotations

from dataclasses import dataclass
import random
import time
from typing import TYPE_CHECKING

import numpy as np
from PyQt6 import QtCore as qtc
import structlog

import constants
from enums import AttemptOutcome, InitialConstraintType
from model.errors import ConfigurationError
from model.grid import Grid
from model.initial_constraints import BorderOutsideConstraint, StartGoalConstraint
from model.level_settings import LevelSettings
from model.wfc import WFC

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from model.initial_constraints import InitialConstraint
    from model.module_catalog import Module, ModuleCatalog

log = structlog.get_logger()


@dataclass
class AttemptResult:
    """The result of a single generation attempt.

    Attributes:
        outcome: Whether the attempt succeeded or failed.
        seed: The RNG seed the attempt was run with.
        elapsed_ms: Wall-clock duration of the attempt in milliseconds.
        attempt_number: 1-based number of the attempt within the current run.
        module_indices: The (width, height) array of the catalog indices of the materialized modules.
        grid: The grid of the attempt, after materialization.
    """

    outcome: AttemptOutcome
    seed: int
    elapsed_ms: float
    attempt_number: int
    module_indices: NDArray[np.int_]
    grid: Grid

    @property
    def succeeded(self) -> bool:
        return self.outcome == AttemptOutcome.SUCCESS


class GenerationController(qtc.QObject):
    """Orchestrates generation attempts and owns the retry policy.

    Every attempt runs on a fresh grid with its own random source and runs to completion before control returns to
    the caller. Attempts are repeated until the attempt budget is used up (or, if configured, until one succeeds).
    A new attempt cannot be started while another one is in progress.

    Signals:
        attempt_finished: Emitted with the outcome of every attempt.
        cell_materialized: Emitted once per cell after an attempt has concluded, with the cell's x and z coordinates
            and its chosen module.
        grid_size_changed: Emitted with the grid width and height after the final attempt of a run.
        finished: Emitted with the AttemptResult of the final attempt of a run.

    Attributes:
        attempts_run: The number of attempts run since the controller was created or last reset.
        is_generating: True while an attempt is in progress.
    """

    attempt_finished = qtc.pyqtSignal(AttemptOutcome)
    cell_materialized = qtc.pyqtSignal(int, int, object)
    grid_size_changed = qtc.pyqtSignal(int, int)
    finished = qtc.pyqtSignal(object)

    attempts_run: int
    is_generating: bool

    # The read-only module catalog shared by all attempts.
    _catalog: ModuleCatalog
    # The settings shared by all attempts.
    _settings: LevelSettings
    # The result of the most recent attempt.
    _last_result: AttemptResult | None

    def __init__(self, catalog: ModuleCatalog, settings: LevelSettings | None = None) -> None:
        """Initializes the controller.

        Args:
            catalog: The read-only module catalog shared by all attempts.
            settings: The settings shared by all attempts. Defaults to LevelSettings().
        """
        super().__init__()

        self._catalog = catalog
        self._settings = settings if settings is not None else LevelSettings()
        self._last_result = None

        self.attempts_run = 0
        self.is_generating = False

    @property
    def settings(self) -> LevelSettings:
        return self._settings

    @property
    def last_result(self) -> AttemptResult | None:
        return self._last_result

    def validate(self) -> None:
        """Checks that the catalog and the settings allow an attempt to start.

        Raises:
            ConfigurationError: If the catalog is empty, the grid dimensions or the attempt budget are not positive, a
                configured module name is not in the catalog, or the start/goal constraint cannot be applied.
        """
        settings = self._settings
        if len(self._catalog) == 0:
            raise ConfigurationError("The module catalog is empty")
        if settings.width <= 0 or settings.height <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive, got {settings.width}x{settings.height}")
        if settings.max_attempts < 1:
            raise ConfigurationError(f"The attempt budget must be at least 1, got {settings.max_attempts}")

        for name in (settings.start_module, settings.goal_module, settings.fallback_module):
            if name is not None and name not in self._catalog:
                raise ConfigurationError(f"Unknown module '{name}'")

        if InitialConstraintType.START_GOAL in settings.initial_constraints:
            if settings.start_module is None or settings.goal_module is None:
                raise ConfigurationError("The start/goal constraint needs both a start and a goal module")
            if settings.height < 2:
                raise ConfigurationError("The start/goal constraint needs a grid with at least 2 rows")

    def reset(self) -> None:
        """Starts a new run by clearing the attempt counter."""
        self.attempts_run = 0
        self._last_result = None

    def has_remaining_attempts(self) -> bool:
        """Checks whether the current run allows another attempt."""
        if self.attempts_run >= self._settings.max_attempts:
            return False
        if self._settings.stop_on_success and self._last_result is not None and self._last_result.succeeded:
            return False
        return True

    def tick(self) -> AttemptResult | None:
        """Starts the next attempt if none is running and the run is not over yet.

        Returns:
            The result of the attempt, or None if no attempt was started.
        """
        if self.is_generating or not self.has_remaining_attempts():
            return None
        return self.generate_level()

    def run_until_budget_or_success(self) -> AttemptResult | None:
        """Runs attempts until the attempt budget is used up or the run ends with a success.

        Returns:
            The result of the final attempt, or None if no attempt was run.
        """
        if self.is_generating:
            log.warning("Generation run requested while an attempt is in progress")
            return None

        self.validate()
        result = None
        while self.has_remaining_attempts():
            result = self.tick()
        return result

    def generate_level(self) -> AttemptResult | None:
        """Runs one complete generation attempt on a fresh grid and reports its result.

        Returns:
            The result of the attempt, or None if an attempt is already in progress or the run is over.

        Raises:
            ConfigurationError: If the catalog or the settings do not allow an attempt to start.
        """
        if self.is_generating:
            log.warning("Generation requested while an attempt is in progress")
            return None

        try:
            self.validate()
        except ConfigurationError as error:
            log.warning("Rejected generation attempt", reason=str(error))
            raise

        if not self.has_remaining_attempts():
            log.warning("Generation requested after the run is over", attempts_run=self.attempts_run)
            return None

        self.is_generating = True
        try:
            result = self._run_attempt()
        finally:
            self.is_generating = False
        return result

    def _run_attempt(self) -> AttemptResult:
        """Builds the grid, runs the collapse loop and materializes the outcome."""
        settings = self._settings
        seed = settings.random_seed if settings.uses_fixed_seed else self._derive_seed()
        rng = random.Random(seed)

        grid = Grid(settings.width, settings.height, self._catalog)
        wfc = WFC(grid, self._catalog, rng, self._build_initial_constraints())

        # Timing covers the initial constraints and the collapse loop, not the grid setup.
        start_time = time.perf_counter()
        outcome = wfc.run()
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        self.attempts_run += 1

        if outcome == AttemptOutcome.FAILURE:
            self._assign_fallback_module(grid)

        result = AttemptResult(
            outcome, seed, elapsed_ms, self.attempts_run, grid.get_module_index_array(self._catalog), grid
        )
        self._last_result = result
        log.debug("Attempt finished", attempt=self.attempts_run, outcome=outcome.value, seed=seed)

        self.attempt_finished.emit(outcome)

        for cell in grid:
            self.cell_materialized.emit(cell.x, cell.z, cell.domain[0])

        if not self.has_remaining_attempts():
            self.grid_size_changed.emit(settings.width, settings.height)
            log.info("Wave-function-collapse algorithm finished", elapsed_ms=round(elapsed_ms, 3), seed=seed)
            self.finished.emit(result)

        return result

    def _build_initial_constraints(self) -> list[InitialConstraint]:
        """Creates the enabled initial constraints in their configured order."""
        initial_constraints: list[InitialConstraint] = []
        for constraint_type in self._settings.initial_constraints:
            match constraint_type:
                case InitialConstraintType.BORDER_OUTSIDE:
                    initial_constraints.append(BorderOutsideConstraint())
                case InitialConstraintType.START_GOAL:
                    assert self._settings.start_module is not None
                    assert self._settings.goal_module is not None
                    initial_constraints.append(
                        StartGoalConstraint(
                            self._catalog.get_module(self._settings.start_module),
                            self._catalog.get_module(self._settings.goal_module),
                        )
                    )
        return initial_constraints

    def _get_fallback_module(self) -> Module:
        """Returns the module force-assigned to empty cells of a failed attempt."""
        name = self._settings.fallback_module or self._settings.start_module
        if name is not None:
            return self._catalog.get_module(name)
        return self._catalog.get_modules()[0]

    def _assign_fallback_module(self, grid: Grid) -> None:
        """Gives every cell with an empty domain the fallback module, so that every cell can be materialized."""
        fallback_module = self._get_fallback_module()
        for cell in grid:
            if not cell.domain:
                cell.set_module(fallback_module)

    def _derive_seed(self) -> int:
        """Derives a fresh seed from the clock."""
        return time.time_ns() % (constants.RANDOM_SEED_MAX + 1)
