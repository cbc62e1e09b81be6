"""Contains the priority structure that orders cells by how close they are to being solved."""

from __future__ import annotations

from dataclasses import dataclass, field
import heapq
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from model.cell import Cell


class OrderedCells:
    """Min-heap of the cells still waiting to be finalized, ordered by ascending domain size.

    Domain sizes change outside of the heap (during collapse and propagation), so the order has to be re-derived with
    'resort()' before the first cell is read. Cells with equally sized domains keep the order in which they were
    added.
    """

    # Heap of cells, keyed by (domain size, insertion order).
    _heap: list[_HeapItem]
    # Number of cells added so far, used as the tie-break.
    _added_count: int

    def __init__(self) -> None:
        self._heap = []
        self._added_count = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def add(self, cell: Cell) -> None:
        """Inserts a cell, keyed by its current domain size."""
        heapq.heappush(self._heap, _HeapItem((len(cell.domain), self._added_count), cell))
        self._added_count += 1

    def resort(self) -> None:
        """Re-derives the heap order from the current domain sizes of all contained cells."""
        self._heap = [_HeapItem((len(item._cell.domain), item._priority[1]), item._cell) for item in self._heap]
        heapq.heapify(self._heap)

    def get_first(self) -> Cell:
        """Returns the cell with the smallest domain without removing it.

        Raises:
            IndexError: If the structure is empty.
        """
        return self._heap[0]._cell

    def remove_first(self) -> Cell:
        """Removes and returns the cell with the smallest domain.

        Raises:
            IndexError: If the structure is empty.
        """
        return heapq.heappop(self._heap)._cell


@dataclass(order=True)
class _HeapItem:
    """Dataclass storing a cell for the priority queue."""

    # (domain size, insertion order) of the cell.
    _priority: tuple[int, int]
    # The cell itself.
    _cell: Cell = field(compare=False)
