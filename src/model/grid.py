"""Contains the level grid and the wiring of its cells."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TYPE_CHECKING

import numpy as np

from enums import Direction
from model.cell import Cell
from model.errors import ConfigurationError

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from model.module_catalog import ModuleCatalog


class Grid:
    """A width x height array of cells, each wired to its four direct neighbours.

    Cells are addressed as [x, z] with z growing upwards. A grid is built fresh for every generation attempt and
    discarded afterwards.

    Attributes:
        width: The number of cell columns.
        height: The number of cell rows.
    """

    width: int
    height: int

    # 2D array of 'Cell' objects, indexed [x, z].
    _cells: NDArray[Any]

    def __init__(self, width: int, height: int, catalog: ModuleCatalog) -> None:
        """Creates all cells with the full catalog as their domain and connects them.

        Args:
            width: The number of cell columns.
            height: The number of cell rows.
            catalog: The module catalog providing the initial domain of every cell.

        Raises:
            ConfigurationError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height

        modules = catalog.get_modules()
        self._cells = np.empty((width, height), dtype=object)
        for x in range(width):
            for z in range(height):
                self._cells[x, z] = Cell(x, z, modules)

        for cell in self:
            for direction in Direction:
                dx, dz = direction.to_vector()
                neighbour_x = cell.x + dx
                neighbour_z = cell.z + dz
                if 0 <= neighbour_x < width and 0 <= neighbour_z < height:
                    cell.neighbours[direction.value] = self._cells[neighbour_x, neighbour_z]

    @property
    def shape(self) -> tuple[int, int]:
        return self.width, self.height

    def __iter__(self) -> Iterator[Cell]:
        """Iterates over all cells column by column (x-major), which is also the collapse loop's tie-break order."""
        for x in range(self.width):
            for z in range(self.height):
                yield self._cells[x, z]

    def __len__(self) -> int:
        return self.width * self.height

    def get_cell(self, x: int, z: int) -> Cell:
        return self._cells[x, z]

    def get_border_cells(self) -> list[Cell]:
        """Returns every cell on the outer ring of the grid, each exactly once."""
        return [cell for cell in self if cell.x in (0, self.width - 1) or cell.z in (0, self.height - 1)]

    def get_module_index_array(self, catalog: ModuleCatalog) -> NDArray[np.int_]:
        """Converts the grid into an array of catalog indices.

        Each element holds the catalog index of the first module in the corresponding cell's domain, or -1 if the
        domain is empty.

        Args:
            catalog: The catalog the cells' modules belong to.

        Returns:
            A (width, height) array of module indices.
        """
        module_indices = np.full(self.shape, -1, dtype=np.int_)
        for cell in self:
            if cell.domain:
                module_indices[cell.x, cell.z] = catalog.index_of(cell.domain[0])
        return module_indices
