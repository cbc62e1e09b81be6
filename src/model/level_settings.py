"""Contains the configurable state of the level generator."""

from __future__ import annotations

from dataclasses import dataclass

import constants
from enums import InitialConstraintType


@dataclass
class LevelSettings:
    """Settings shared by all generation attempts of a run.

    Attributes:
        width: The number of grid columns.
        height: The number of grid rows.
        random_seed: The seed of every attempt, or constants.RANDOM_SEED_UNSET to derive a fresh seed from the clock
            for each attempt.
        max_attempts: The attempt budget. No further attempt is started once this many attempts have run.
        stop_on_success: If True, the run also ends with the first successful attempt.
        start_module: Name of the module placed by the start/goal constraint. Also the default fallback module.
        goal_module: Name of the module placed as the goal by the start/goal constraint.
        fallback_module: Name of the module force-assigned to empty cells of a failed attempt so that every cell can
            be materialized. Defaults to the start module, or the first catalog module if no start module is set.
        initial_constraints: The initial constraints to apply before collapsing, in order. Disabled by default.
    """

    width: int = constants.GRID_WIDTH_DEFAULT
    height: int = constants.GRID_HEIGHT_DEFAULT
    random_seed: int = constants.RANDOM_SEED_UNSET
    max_attempts: int = constants.MAX_ATTEMPTS_DEFAULT
    stop_on_success: bool = True
    start_module: str | None = None
    goal_module: str | None = None
    fallback_module: str | None = None
    initial_constraints: tuple[InitialConstraintType, ...] = ()

    @property
    def uses_fixed_seed(self) -> bool:
        return self.random_seed != constants.RANDOM_SEED_UNSET
