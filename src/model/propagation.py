"""Implements the edge-compatibility constraint propagation between neighbouring cells."""

from __future__ import annotations

from typing import TYPE_CHECKING

from enums import Direction

if TYPE_CHECKING:
    from model.cell import Cell
    from model.module_catalog import ModuleCatalog


def adapt_neighbours(cell: Cell, catalog: ModuleCatalog) -> int:
    """Narrows the domains of a cell's neighbours to the modules its own domain allows next to it.

    For each open neighbour in direction d, the neighbour's own neighbours in the two directions orthogonal to d are
    filtered first (using the neighbour's domain before it is narrowed), then the neighbour itself is filtered. This
    is a single pass: changes do not cascade any further and the source cell is never revisited. A neighbour may be
    left with an empty domain, which the collapse loop detects once that neighbour is selected.

    Args:
        cell: The cell whose domain was just fixed or narrowed.
        catalog: The catalog holding the adjacency rules.

    Returns:
        The total number of modules removed from any cell.
    """
    removed = 0
    for direction in Direction:
        neighbour = cell.get_neighbour(direction)
        if not _is_open(neighbour):
            continue
        assert neighbour is not None

        for orthogonal_direction in direction.orthogonal():
            removed += filter_neighbour(neighbour, orthogonal_direction, catalog)

        removed += _restrict_to_allowed(cell, neighbour, direction, catalog)
    return removed


def filter_neighbour(cell: Cell, direction: Direction, catalog: ModuleCatalog) -> int:
    """Narrows the domain of the cell's neighbour in one direction, without touching any other cell.

    Returns:
        The number of modules removed from the neighbour (0 if the neighbour is missing, final or already solved).
    """
    neighbour = cell.get_neighbour(direction)
    if not _is_open(neighbour):
        return 0
    assert neighbour is not None
    return _restrict_to_allowed(cell, neighbour, direction, catalog)


def _is_open(cell: Cell | None) -> bool:
    """Checks whether a cell can still be narrowed by propagation (exists, not final, more than one module)."""
    return cell is not None and not cell.is_final and len(cell.domain) > 1


def _restrict_to_allowed(source: Cell, target: Cell, direction: Direction, catalog: ModuleCatalog) -> int:
    """Removes every module from 'target' that no module of 'source' accepts in 'direction'."""
    allowed_mask = catalog.get_allowed_mask(source.domain, direction)
    rejected = [module for module in target.domain if not allowed_mask[catalog.index_of(module)]]
    return target.remove_modules(rejected)
