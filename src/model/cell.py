"""Contains the class representing one position of the level grid."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from enums import Direction

if TYPE_CHECKING:
    from model.initial_constraints import EdgeFilter
    from model.module_catalog import Module


class Cell:
    """A single grid position holding the modules that are still possible for it.

    A cell whose domain holds exactly one module is solved, but it only becomes final once the collapse loop has
    processed it and propagated its module to its neighbours. After that its domain never changes again.

    Attributes:
        x: The column of the cell in the grid.
        z: The row of the cell in the grid (growing upwards).
        domain: The modules still possible for this cell. An empty domain means the attempt has failed.
        neighbours: The adjacent cells, indexed by Direction value (None at the grid boundary).
        is_final: True once the cell has been finalized by the collapse loop.
    """

    x: int
    z: int
    domain: list[Module]
    neighbours: list[Cell | None]
    is_final: bool

    def __init__(self, x: int, z: int, modules: Iterable[Module]) -> None:
        """Creates an unconnected, undecided cell.

        Args:
            x: The column of the cell in the grid.
            z: The row of the cell in the grid.
            modules: The initial domain of the cell (usually the whole catalog).
        """
        self.x = x
        self.z = z
        self.domain = list(modules)
        self.neighbours = [None] * len(Direction)
        self.is_final = False

    def __repr__(self) -> str:
        return f"Cell(x={self.x}, z={self.z}, domain={[module.name for module in self.domain]}, final={self.is_final})"

    @property
    def coords(self) -> tuple[int, int]:
        return self.x, self.z

    def get_neighbour(self, direction: Direction) -> Cell | None:
        return self.neighbours[direction.value]

    def set_module(self, module: Module) -> None:
        """Collapses the domain to the given module. The choice is final and is never undone."""
        self._ensure_not_final()
        self.domain = [module]

    def remove_modules(self, modules: Iterable[Module]) -> int:
        """Removes the given modules from the domain.

        Returns:
            The number of modules that were actually removed.
        """
        self._ensure_not_final()
        removed = 0
        for module in modules:
            if module in self.domain:
                self.domain.remove(module)
                removed += 1
        return removed

    def filter_cell(self, edge_filter: EdgeFilter) -> int:
        """Removes every module rejected by the given edge filter.

        Returns:
            The number of modules that were removed.
        """
        return self.remove_modules([module for module in self.domain if not edge_filter.check_module(module)])

    def _ensure_not_final(self) -> None:
        if self.is_final:
            raise RuntimeError(f"Cell {self.coords} is final, its domain can no longer change")
