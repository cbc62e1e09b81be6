"""Contains global constants and default values used throughout the project."""

# === LEVEL CONSTANTS ===

GRID_WIDTH_DEFAULT: int = 10
GRID_HEIGHT_DEFAULT: int = 10

# Sentinel seed value: a fresh, time-derived seed is drawn for every generation attempt.
RANDOM_SEED_UNSET: int = -1
RANDOM_SEED_MAX: int = 999999999

MAX_ATTEMPTS_DEFAULT: int = 1

# Name prefix of the modules derived from a sample array, followed by the tile index.
SAMPLE_MODULE_NAME_PREFIX: str = "tile_"

# === EXAMPLE DATA ===

# A small street layout (0 = grass, 1 = horizontal street, 2 = vertical street, 3 = crossing) used by the demo run.
EXAMPLE_SAMPLE_ARRAY: list[list[int]] = [
    [0, 0, 2, 0, 0, 2, 0],
    [1, 1, 3, 1, 1, 3, 1],
    [0, 0, 2, 0, 0, 2, 0],
    [0, 0, 2, 0, 0, 2, 0],
    [1, 1, 3, 1, 1, 3, 1],
    [0, 0, 2, 0, 0, 2, 0],
]
EXAMPLE_START_MODULE: str = "tile_0"
