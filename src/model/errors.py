"""Contains the exception types raised by the level generator."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when the module catalog or the level settings cannot be used to start a generation attempt."""


class DomainExhaustedError(RuntimeError):
    """Raised when a cell selected by the collapse loop has no possible modules left.

    Attributes:
        coords: The (x, z) grid coordinates of the exhausted cell.
    """

    coords: tuple[int, int]

    def __init__(self, coords: tuple[int, int]) -> None:
        super().__init__(f"Cell {coords} has no possible modules left")
        self.coords = coords
