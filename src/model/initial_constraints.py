"""Contains the optional constraints applied to a fresh grid before the collapse loop starts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import structlog

from enums import Direction, EdgeConnectionType
from model.errors import ConfigurationError

if TYPE_CHECKING:
    import random

    from model.cell import Cell
    from model.grid import Grid
    from model.module_catalog import Module

log = structlog.get_logger()


class EdgeFilter:
    """Accepts or rejects modules by the connection type of one of their edges.

    Attributes:
        direction: The edge of the module to inspect.
        connection_type: The connection type to compare the edge against.
        is_inclusive: If True, only modules whose edge has the connection type pass. If False, exactly those modules
            are rejected.
    """

    direction: Direction
    connection_type: EdgeConnectionType
    is_inclusive: bool

    def __init__(self, direction: Direction, connection_type: EdgeConnectionType, is_inclusive: bool = True) -> None:
        self.direction = direction
        self.connection_type = connection_type
        self.is_inclusive = is_inclusive

    def check_module(self, module: Module) -> bool:
        """Returns True if the module passes the filter."""
        matches = module.get_edge_type(self.direction) == self.connection_type
        return matches if self.is_inclusive else not matches


class InitialConstraint(ABC):
    """Abstract base class for constraints that narrow cell domains once, before collapsing starts."""

    @abstractmethod
    def apply(self, grid: Grid, rng: random.Random) -> list[Cell]:
        """Narrows the domains of the affected cells.

        Args:
            grid: The fresh grid of the current attempt.
            rng: The random source of the current attempt.

        Returns:
            The cells whose domains were narrowed, in the order they were changed. The caller propagates from them.
        """
        pass


class BorderOutsideConstraint(InitialConstraint):
    """Restricts the outer ring of cells to modules whose outward edges are blocked.

    A corner cell is filtered twice, once for each of its two outward edges.
    """

    def apply(self, grid: Grid, rng: random.Random) -> list[Cell]:
        narrowed: list[Cell] = []
        outward_filters = (
            (Direction.BOTTOM, lambda cell: cell.z == 0),
            (Direction.UP, lambda cell: cell.z == grid.height - 1),
            (Direction.LEFT, lambda cell: cell.x == 0),
            (Direction.RIGHT, lambda cell: cell.x == grid.width - 1),
        )
        for direction, is_on_edge in outward_filters:
            edge_filter = EdgeFilter(direction, EdgeConnectionType.BLOCK)
            for cell in grid.get_border_cells():
                if is_on_edge(cell) and cell.filter_cell(edge_filter) and cell not in narrowed:
                    narrowed.append(cell)

        log.debug("Applied border constraint", narrowed_cells=len(narrowed))
        return narrowed


class StartGoalConstraint(InitialConstraint):
    """Places one start module and one goal module at random, distinct positions.

    The start cell is drawn from every row but the top one and the goal cell from every row but the bottom one.

    Attributes:
        start_module: The module placed in the start cell.
        goal_module: The module placed in the goal cell.
    """

    start_module: Module
    goal_module: Module

    def __init__(self, start_module: Module, goal_module: Module) -> None:
        self.start_module = start_module
        self.goal_module = goal_module

    def apply(self, grid: Grid, rng: random.Random) -> list[Cell]:
        if grid.height < 2:
            raise ConfigurationError("The start/goal constraint needs a grid with at least 2 rows")

        start_cell = grid.get_cell(rng.randrange(grid.width), rng.randrange(grid.height - 1))
        start_cell.set_module(self.start_module)

        goal_cell = start_cell
        while goal_cell is start_cell:
            goal_cell = grid.get_cell(rng.randrange(grid.width), rng.randrange(1, grid.height))
        goal_cell.set_module(self.goal_module)

        log.debug("Placed start and goal modules", start=start_cell.coords, goal=goal_cell.coords)
        return [start_cell, goal_cell]
