"""Tests for cells and the grid."""

import pytest

from enums import Direction, EdgeConnectionType
from model.cell import Cell
from model.errors import ConfigurationError
from model.grid import Grid
from model.initial_constraints import EdgeFilter
from model.module_catalog import Module, ModuleCatalog


class TestCell:
    def test_new_cell(self, mutual_catalog):
        cell = Cell(2, 3, mutual_catalog)

        assert cell.coords == (2, 3)
        assert [module.name for module in cell.domain] == ["A", "B"]
        assert cell.neighbours == [None, None, None, None]
        assert not cell.is_final

    def test_set_module(self, mutual_catalog):
        cell = Cell(0, 0, mutual_catalog)
        cell.set_module(mutual_catalog.get_module("B"))

        assert [module.name for module in cell.domain] == ["B"]

    def test_remove_modules_counts_actual_removals(self, mutual_catalog):
        cell = Cell(0, 0, mutual_catalog)
        a = mutual_catalog.get_module("A")

        assert cell.remove_modules([a]) == 1
        assert cell.remove_modules([a]) == 0
        assert [module.name for module in cell.domain] == ["B"]

    def test_final_cell_cannot_change(self, mutual_catalog):
        cell = Cell(0, 0, mutual_catalog)
        cell.set_module(mutual_catalog.get_module("A"))
        cell.is_final = True

        with pytest.raises(RuntimeError):
            cell.set_module(mutual_catalog.get_module("B"))
        with pytest.raises(RuntimeError):
            cell.remove_modules(cell.domain)

    def test_filter_cell(self):
        blocked = Module("blocked", edge_types={Direction.LEFT: EdgeConnectionType.BLOCK})
        cell = Cell(0, 0, [Module("open"), blocked])

        removed = cell.filter_cell(EdgeFilter(Direction.LEFT, EdgeConnectionType.BLOCK))

        assert removed == 1
        assert cell.domain == [blocked]


class TestGrid:
    def test_dimensions(self, mutual_catalog):
        grid = Grid(4, 3, mutual_catalog)

        assert grid.shape == (4, 3)
        assert len(grid) == 12
        assert len(list(grid)) == 12

    @pytest.mark.parametrize("width, height", [(0, 3), (3, 0), (-1, 2)])
    def test_non_positive_dimensions_are_rejected(self, mutual_catalog, width, height):
        with pytest.raises(ConfigurationError):
            Grid(width, height, mutual_catalog)

    def test_iteration_is_x_major(self, mutual_catalog):
        grid = Grid(2, 3, mutual_catalog)

        assert [cell.coords for cell in grid] == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_neighbour_wiring(self, mutual_catalog):
        grid = Grid(3, 3, mutual_catalog)
        center = grid.get_cell(1, 1)

        assert center.get_neighbour(Direction.UP) is grid.get_cell(1, 2)
        assert center.get_neighbour(Direction.LEFT) is grid.get_cell(0, 1)
        assert center.get_neighbour(Direction.BOTTOM) is grid.get_cell(1, 0)
        assert center.get_neighbour(Direction.RIGHT) is grid.get_cell(2, 1)

    def test_boundary_slots_are_empty(self, mutual_catalog):
        grid = Grid(3, 3, mutual_catalog)
        corner = grid.get_cell(0, 0)

        assert corner.get_neighbour(Direction.LEFT) is None
        assert corner.get_neighbour(Direction.BOTTOM) is None
        assert corner.get_neighbour(Direction.UP) is grid.get_cell(0, 1)
        assert corner.get_neighbour(Direction.RIGHT) is grid.get_cell(1, 0)

    def test_cells_start_with_the_full_catalog(self, mutual_catalog):
        grid = Grid(2, 2, mutual_catalog)

        for cell in grid:
            assert cell.domain == mutual_catalog.get_modules()

        # Every cell owns its own domain list.
        grid.get_cell(0, 0).remove_modules([mutual_catalog.get_module("A")])
        assert len(grid.get_cell(1, 1).domain) == 2

    def test_border_cells(self, mutual_catalog):
        assert len(Grid(3, 3, mutual_catalog).get_border_cells()) == 8
        assert len(Grid(4, 1, mutual_catalog).get_border_cells()) == 4
        assert len(Grid(1, 1, mutual_catalog).get_border_cells()) == 1

    def test_module_index_array(self, mutual_catalog):
        grid = Grid(2, 2, mutual_catalog)
        grid.get_cell(0, 0).set_module(mutual_catalog.get_module("B"))
        grid.get_cell(1, 1).remove_modules(mutual_catalog.get_modules())

        module_indices = grid.get_module_index_array(mutual_catalog)

        assert module_indices.shape == (2, 2)
        assert module_indices.tolist() == [[1, 0], [0, -1]]


def test_single_module_grid(single_catalog: ModuleCatalog):
    grid = Grid(1, 1, single_catalog)

    assert grid.get_cell(0, 0).neighbours == [None, None, None, None]
