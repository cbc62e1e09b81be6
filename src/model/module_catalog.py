"""Manages the module catalog and its adjacency rules."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

import numpy as np
import structlog

from constants import SAMPLE_MODULE_NAME_PREFIX
from enums import Direction, EdgeConnectionType
from model.errors import ConfigurationError

if TYPE_CHECKING:
    from numpy.typing import NDArray

log = structlog.get_logger()


@dataclass(frozen=True)
class Module:
    """A placeable tile type together with its per-direction edge compatibility rules.

    Two modules are equal exactly if their names are equal, so a module can be used as its own identity handle.

    Attributes:
        name: The unique name identifying the module in its catalog.
        compatible: For each direction, the names of all modules that may be placed on the other side of that edge.
            Missing directions allow no module at all.
        edge_types: For each direction, how the edge connects to the outside. Missing directions count as open.
        payload: Opaque reference handed to the instantiation sink (e.g. a tile index or a prefab). Never inspected
            by the solver.
    """

    name: str
    compatible: Mapping[Direction, frozenset[str]] = field(default_factory=dict, compare=False)
    edge_types: Mapping[Direction, EdgeConnectionType] = field(default_factory=dict, compare=False)
    payload: Any = field(default=None, compare=False)

    def get_compatible(self, direction: Direction) -> frozenset[str]:
        """Returns the names of all modules allowed on the other side of the edge in the given direction."""
        return self.compatible.get(direction, frozenset())

    def get_edge_type(self, direction: Direction) -> EdgeConnectionType:
        """Returns the connection type of the edge in the given direction."""
        return self.edge_types.get(direction, EdgeConnectionType.OPEN)


class ModuleCatalog:
    """Read-only, ordered collection of modules and the adjacency rules between them.

    The per-module compatibility sets are compiled into a boolean tensor so that the union of everything a whole
    domain allows in one direction can be computed in a single vectorized step.

    Attributes:
        module_count: The number of modules in the catalog.
    """

    module_count: int

    # The modules in catalog order (the index of a module is its position in this list).
    _modules: list[Module]
    # Maps module names to their catalog index.
    _indices_by_name: dict[str, int]
    # The 3D boolean array defining compatibility: [m1, m2, direction] is True exactly if module m2 may be placed next
    # to module m1 in the specified direction.
    _adjacency_rules: NDArray[np.bool_]

    def __init__(self, modules: Iterable[Module]) -> None:
        """Compiles the catalog from the given modules.

        Args:
            modules: The modules of the catalog, in catalog order.

        Raises:
            ConfigurationError: If two modules share a name or a compatibility set names an unknown module.
        """
        self._modules = list(modules)
        self.module_count = len(self._modules)

        self._indices_by_name = {}
        for index, module in enumerate(self._modules):
            if module.name in self._indices_by_name:
                raise ConfigurationError(f"Duplicate module name '{module.name}'")
            self._indices_by_name[module.name] = index

        self._determine_adjacency_rules()

    @classmethod
    def from_sample_array(cls, sample_array: NDArray[np.int_]) -> ModuleCatalog:
        """Derives a catalog from a 2D sample array of tile indices.

        Each distinct tile index becomes one module. Two tiles are compatible in a direction if they occur directly
        next to each other that way at least once in the sample. Row 0 of the sample is its top row.

        Args:
            sample_array: The 2D sample array of tile indices.

        Returns:
            A catalog with one module per distinct tile, ordered by first occurrence (row by row).
        """
        sample_array = np.asarray(sample_array, dtype=np.int_)
        if sample_array.ndim != 2:
            raise ConfigurationError(f"Sample array must be 2D, got shape {sample_array.shape}")

        tile_indices: list[int] = []
        compatible: dict[int, dict[Direction, set[str]]] = {}

        for row in range(sample_array.shape[0]):
            for col in range(sample_array.shape[1]):
                tile_index = int(sample_array[row, col])
                if tile_index not in compatible:
                    tile_indices.append(tile_index)
                    compatible[tile_index] = {direction: set() for direction in Direction}

                for direction in Direction:
                    dx, dz = direction.to_vector()
                    # The grid's z axis points up while sample rows grow downwards.
                    neighbor_row = row - dz
                    neighbor_col = col + dx
                    if 0 <= neighbor_row < sample_array.shape[0] and 0 <= neighbor_col < sample_array.shape[1]:
                        neighbor_tile_index = int(sample_array[neighbor_row, neighbor_col])
                        compatible[tile_index][direction].add(f"{SAMPLE_MODULE_NAME_PREFIX}{neighbor_tile_index}")

        modules = [
            Module(
                f"{SAMPLE_MODULE_NAME_PREFIX}{tile_index}",
                {direction: frozenset(names) for direction, names in compatible[tile_index].items()},
                payload=tile_index,
            )
            for tile_index in tile_indices
        ]
        log.debug("Derived module catalog from sample array", shape=sample_array.shape, modules=len(modules))
        return cls(modules)

    def __len__(self) -> int:
        return self.module_count

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules)

    def __contains__(self, name: object) -> bool:
        return name in self._indices_by_name

    def get_module(self, name: str) -> Module:
        """Returns the module with the given name.

        Raises:
            ConfigurationError: If the catalog contains no module with that name.
        """
        try:
            return self._modules[self._indices_by_name[name]]
        except KeyError:
            raise ConfigurationError(f"Unknown module '{name}'") from None

    def get_modules(self) -> list[Module]:
        """Returns a new list of all modules in catalog order."""
        return list(self._modules)

    def index_of(self, module: Module) -> int:
        """Returns the catalog index of the given module."""
        return self._indices_by_name[module.name]

    def get_compatible_modules(self, name: str, direction: Direction) -> list[str]:
        """Returns the names of all modules that can be placed next to the named module in the given direction.

        Args:
            name: The name of the module to check compatibility for.
            direction: The direction to check compatibility for.

        Returns:
            The compatible module names, in catalog order.
        """
        index = self._indices_by_name[name]
        return [
            self._modules[other_index].name
            for other_index in np.flatnonzero(self._adjacency_rules[index, :, direction.value])
        ]

    def get_allowed_mask(self, modules: Iterable[Module], direction: Direction) -> NDArray[np.bool_]:
        """Returns the union of everything the given modules allow on the other side of an edge.

        Args:
            modules: The modules whose allowed sets are combined (typically a cell's domain).
            direction: The direction of the edge, seen from the given modules.

        Returns:
            A boolean array indexed by catalog index, True for every module that at least one of the given modules
                accepts as its neighbour in the given direction.
        """
        indices = np.array([self._indices_by_name[module.name] for module in modules], dtype=np.int_)
        return self._adjacency_rules[indices, :, direction.value].any(axis=0)

    def _determine_adjacency_rules(self) -> None:
        """Compiles the per-module compatibility sets into the adjacency rules tensor."""
        self._adjacency_rules = np.full((self.module_count, self.module_count, len(Direction)), False, dtype=bool)

        for index, module in enumerate(self._modules):
            for direction in Direction:
                for other_name in module.get_compatible(direction):
                    if other_name not in self._indices_by_name:
                        raise ConfigurationError(
                            f"Module '{module.name}' references unknown module '{other_name}' ({direction.name})"
                        )
                    self._adjacency_rules[index, self._indices_by_name[other_name], direction.value] = True
