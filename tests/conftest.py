"""Shared pytest fixtures for the level generator tests."""

import random

import pytest

from enums import Direction
from model.module_catalog import Module, ModuleCatalog


def _everywhere(*names: str) -> dict[Direction, frozenset[str]]:
    return {direction: frozenset(names) for direction in Direction}


# =============================================================================
# Catalogs
# =============================================================================


@pytest.fixture
def single_catalog() -> ModuleCatalog:
    """One module, compatible with itself in every direction."""
    return ModuleCatalog([Module("A", _everywhere("A"))])


@pytest.fixture
def mutual_catalog() -> ModuleCatalog:
    """Two modules, compatible with each other and with themselves in every direction."""
    return ModuleCatalog([Module("A", _everywhere("A", "B")), Module("B", _everywhere("A", "B"))])


@pytest.fixture
def checkerboard_catalog() -> ModuleCatalog:
    """Two modules that may only be placed next to the other one."""
    return ModuleCatalog([Module("A", _everywhere("B")), Module("B", _everywhere("A"))])


@pytest.fixture
def no_stacking_catalog() -> ModuleCatalog:
    """Two modules that accept nothing above them, so every grid with at least two rows fails."""
    compatible = {
        Direction.UP: frozenset(),
        Direction.LEFT: frozenset({"X", "Y"}),
        Direction.BOTTOM: frozenset({"X", "Y"}),
        Direction.RIGHT: frozenset({"X", "Y"}),
    }
    return ModuleCatalog([Module("X", compatible), Module("Y", compatible)])


# =============================================================================
# Random sources
# =============================================================================


class RecordingRandom(random.Random):
    """A seeded random source that records the arguments of every 'randrange' call."""

    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self.randrange_calls: list[tuple] = []

    def randrange(self, *args, **kwargs):
        self.randrange_calls.append(args)
        return super().randrange(*args, **kwargs)


@pytest.fixture
def recording_rng() -> RecordingRandom:
    return RecordingRandom(12345)
