"""Tests for the ordered cell structure."""

import pytest

from model.grid import Grid
from model.ordered_cells import OrderedCells


@pytest.fixture
def grid(mutual_catalog):
    return Grid(2, 2, mutual_catalog)


def test_empty():
    ordered_cells = OrderedCells()

    assert len(ordered_cells) == 0
    assert not ordered_cells
    with pytest.raises(IndexError):
        ordered_cells.get_first()


def test_ties_keep_insertion_order(grid):
    ordered_cells = OrderedCells()
    for cell in grid:
        ordered_cells.add(cell)

    removed = [ordered_cells.remove_first().coords for _ in range(len(grid))]

    assert removed == [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert len(ordered_cells) == 0


def test_resort_picks_up_domain_changes(grid, mutual_catalog):
    ordered_cells = OrderedCells()
    for cell in grid:
        ordered_cells.add(cell)

    assert ordered_cells.get_first() is grid.get_cell(0, 0)

    grid.get_cell(1, 0).set_module(mutual_catalog.get_module("A"))
    ordered_cells.resort()

    assert ordered_cells.get_first() is grid.get_cell(1, 0)
    assert len(ordered_cells) == 4


def test_empty_domain_comes_first(grid, mutual_catalog):
    ordered_cells = OrderedCells()
    for cell in grid:
        ordered_cells.add(cell)

    grid.get_cell(0, 1).set_module(mutual_catalog.get_module("A"))
    grid.get_cell(1, 1).remove_modules(mutual_catalog.get_modules())
    ordered_cells.resort()

    assert ordered_cells.remove_first() is grid.get_cell(1, 1)
    assert ordered_cells.remove_first() is grid.get_cell(0, 1)


def test_repeated_resort_keeps_insertion_order_among_ties(grid, mutual_catalog):
    ordered_cells = OrderedCells()
    for cell in grid:
        ordered_cells.add(cell)

    grid.get_cell(1, 1).set_module(mutual_catalog.get_module("A"))
    ordered_cells.resort()
    grid.get_cell(0, 1).set_module(mutual_catalog.get_module("B"))
    ordered_cells.resort()
    ordered_cells.resort()

    removed = [ordered_cells.remove_first().coords for _ in range(len(grid))]

    assert removed == [(0, 1), (1, 1), (0, 0), (1, 0)]
