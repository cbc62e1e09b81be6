"""Contains all global enumeration classes used throughout the project."""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Defines the four edge directions of a cell, in the order of its neighbour slots."""

    UP = 0
    """Upward direction (towards greater z)."""
    LEFT = 1
    """Left direction (towards smaller x)."""
    BOTTOM = 2
    """Downward direction (towards smaller z)."""
    RIGHT = 3
    """Right direction (towards greater x)."""

    def reverse(self) -> Direction:
        """Returns the opposite direction of the current direction."""
        match self:
            case Direction.UP:
                return Direction.BOTTOM
            case Direction.LEFT:
                return Direction.RIGHT
            case Direction.BOTTOM:
                return Direction.UP
            case Direction.RIGHT:
                return Direction.LEFT

    def to_vector(self) -> tuple[int, int]:
        """Returns the (dx, dz) grid vector for the direction."""
        match self:
            case Direction.UP:
                return (0, 1)
            case Direction.LEFT:
                return (-1, 0)
            case Direction.BOTTOM:
                return (0, -1)
            case Direction.RIGHT:
                return (1, 0)

    def orthogonal(self) -> tuple[Direction, Direction]:
        """Returns the two directions perpendicular to the current direction."""
        match self:
            case Direction.UP | Direction.BOTTOM:
                return (Direction.LEFT, Direction.RIGHT)
            case Direction.LEFT | Direction.RIGHT:
                return (Direction.UP, Direction.BOTTOM)


class EdgeConnectionType(Enum):
    """Defines how the edge of a module connects to whatever lies beyond it."""

    OPEN = "Open"
    """The edge continues into the neighbouring cell (e.g. a street leading out)."""
    BLOCK = "Block"
    """The edge is closed off, so the module may sit on the outer border of the level."""


class InitialConstraintType(Enum):
    """Defines the optional constraints applied to a fresh grid before the collapse loop starts."""

    BORDER_OUTSIDE = "Border Outside"
    """Cells on the outer ring may only hold modules whose outward edge is blocked."""
    START_GOAL = "Start and Goal"
    """Places exactly one start module and one goal module at random, non-overlapping positions."""


class AttemptOutcome(Enum):
    """Defines the binary result of a single generation attempt."""

    SUCCESS = "Success"
    """Every cell was finalized with exactly one module."""
    FAILURE = "Failure"
    """A cell ran out of possible modules before it could be finalized."""
