"""Implements the core WFC collapse loop for a single generation attempt."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from enums import AttemptOutcome
from model.errors import DomainExhaustedError
from model.ordered_cells import OrderedCells
from model.propagation import adapt_neighbours

if TYPE_CHECKING:
    import random

    from model.cell import Cell
    from model.grid import Grid
    from model.initial_constraints import InitialConstraint
    from model.module_catalog import ModuleCatalog

log = structlog.get_logger()


class WFC:
    """Executes the WFC algorithm on one grid.

    The loop always picks the cell that is closest to being solved. A cell with a single possible module is finalized
    and its module is propagated to its neighbours. Otherwise one of its possible modules is chosen at random and the
    cell is collapsed to it, to be finalized in a later iteration. A random choice is never revisited: when some cell
    runs out of possible modules, the whole attempt fails and a new attempt has to be started on a fresh grid.

    Attributes:
        outcome: The result of the attempt, or None while it has not concluded yet.
    """

    outcome: AttemptOutcome | None

    # The grid of the current attempt.
    _grid: Grid
    # The catalog holding the adjacency rules.
    _catalog: ModuleCatalog
    # Random source of the current attempt (already seeded).
    _rng: random.Random
    # Constraints applied once before the first iteration.
    _initial_constraints: list[InitialConstraint]
    # True once the initial constraints have been applied.
    _initialized: bool
    # The cells that have not been finalized yet, ordered by domain size.
    _ordered_cells: OrderedCells

    def __init__(
        self,
        grid: Grid,
        catalog: ModuleCatalog,
        rng: random.Random,
        initial_constraints: Iterable[InitialConstraint] = (),
    ) -> None:
        """Prepares an attempt on a fresh grid.

        Args:
            grid: The fresh grid of the attempt. Every cell is queued for collapsing.
            catalog: The catalog holding the adjacency rules.
            rng: The seeded random source of the attempt.
            initial_constraints: Constraints applied once before the first iteration, in the given order.
        """
        self._grid = grid
        self._catalog = catalog
        self._rng = rng
        self._initial_constraints = list(initial_constraints)
        self._initialized = False
        self.outcome = None

        self._ordered_cells = OrderedCells()
        for cell in grid:
            self._ordered_cells.add(cell)

    @property
    def remaining_cells(self) -> int:
        """The number of cells that have not been finalized yet."""
        return len(self._ordered_cells)

    def run(self) -> AttemptOutcome:
        """Runs the collapse loop until every cell is final or a cell runs out of possible modules.

        Returns:
            AttemptOutcome.SUCCESS if every cell was finalized, AttemptOutcome.FAILURE otherwise.
        """
        try:
            while self.step():
                pass
        except DomainExhaustedError as error:
            log.debug("Attempt failed", exhausted_cell=error.coords, remaining_cells=self.remaining_cells)
            self.outcome = AttemptOutcome.FAILURE
        else:
            self.outcome = AttemptOutcome.SUCCESS
        return self.outcome

    def step(self) -> bool:
        """Performs a single iteration of the collapse loop.

        The first call also applies the initial constraints.

        Returns:
            True if cells are left to process after this iteration, False once every cell is final.

        Raises:
            DomainExhaustedError: If the selected cell has no possible modules left.
        """
        if not self._initialized:
            self._apply_initial_constraints()

        if not self._ordered_cells:
            return False

        # Domain sizes have changed since the last iteration, so the order has to be re-derived first.
        self._ordered_cells.resort()
        cell = self._ordered_cells.get_first()

        if len(cell.domain) == 1:
            cell.is_final = True
            self._ordered_cells.remove_first()
            adapt_neighbours(cell, self._catalog)
        elif cell.domain:
            self._collapse(cell)
        else:
            raise DomainExhaustedError(cell.coords)

        return bool(self._ordered_cells)

    def _apply_initial_constraints(self) -> None:
        """Narrows the fresh grid with every initial constraint and propagates from the narrowed cells."""
        self._initialized = True
        for constraint in self._initial_constraints:
            for cell in constraint.apply(self._grid, self._rng):
                adapt_neighbours(cell, self._catalog)

    def _collapse(self, cell: Cell) -> None:
        """Collapses a cell to one of its possible modules, chosen uniformly at random."""
        cell.set_module(cell.domain[self._rng.randrange(len(cell.domain))])
