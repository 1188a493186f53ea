"""
Grid classification into water, parks, parking and buildings.

Classification runs in three passes over the whole grid:
- Terrain: ground where the general field is at or below the ground threshold
- Land use: ground cells above the park threshold become buildings
- Open space: remaining ground becomes a park when few buildings surround it,
  otherwise parking

The open space pass reads the finished building map of all neighbors, so
the grid must be fully classified before any per-cell generation starts.
"""

import numpy as np
import structlog
from enum import IntEnum
from typing import Dict, Tuple

from .noise_field import NoiseFields

logger = structlog.get_logger()


class CellType(IntEnum):
    """Classification of a grid cell."""

    WATER = 0
    PARK = 1
    PARKING = 2
    BUILDING = 3


# Open space surrounded by fewer buildings than this becomes a park
DEFAULT_PARK_NEIGHBOR_THRESHOLD = 5


def neighborhood_bounds(i: int, j: int, grid_size: int) -> Tuple[int, int, int, int]:
    """
    Inclusive bounds of the 3x3 neighborhood of (i, j), clamped to the grid.

    Returns:
        (i_min, i_max, j_min, j_max)
    """
    return (
        max(0, i - 1),
        min(i + 1, grid_size - 1),
        max(0, j - 1),
        min(j + 1, grid_size - 1),
    )


def neighborhood_size(i: int, j: int, grid_size: int) -> int:
    """Number of cells sampled for (i, j): 9 inside the grid, 4 in a corner."""
    i_min, i_max, j_min, j_max = neighborhood_bounds(i, j, grid_size)
    return (i_max - i_min + 1) * (j_max - j_min + 1)


def count_surrounding_buildings(building_map: np.ndarray, i: int, j: int) -> int:
    """
    Count building cells in the clamped 3x3 neighborhood of (i, j).

    The cell itself is part of its neighborhood.
    """
    i_min, i_max, j_min, j_max = neighborhood_bounds(i, j, building_map.shape[0])
    return int(np.count_nonzero(building_map[i_min:i_max + 1, j_min:j_max + 1]))


class GridClassifier:
    """Labels every grid cell from the two normalized noise fields."""

    def __init__(
        self,
        fields: NoiseFields,
        ground_threshold: float,
        park_threshold: float,
        park_neighbor_threshold: int = DEFAULT_PARK_NEIGHBOR_THRESHOLD,
    ):
        """
        Initialize the classifier.

        Thresholds are used as given; range checks belong to the options.

        Args:
            fields: Normalized general and ground noise fields
            ground_threshold: General field values at or below this are ground
            park_threshold: Ground field values above this are buildings
            park_neighbor_threshold: Building count below which open space is a park
        """
        if fields.general.shape != fields.ground.shape:
            raise ValueError("Noise fields must share the same shape")
        self.fields = fields
        self.grid_size = fields.general.shape[0]
        self.ground_threshold = ground_threshold
        self.park_threshold = park_threshold
        self.park_neighbor_threshold = park_neighbor_threshold

    def classify_terrain(self) -> np.ndarray:
        """Boolean ground map; False marks water."""
        return self.fields.general <= self.ground_threshold

    def classify_land_use(self, ground_map: np.ndarray) -> np.ndarray:
        """Boolean building map; only ground cells can hold buildings."""
        return ground_map & (self.fields.ground > self.park_threshold)

    def classify_open_space(self, ground_map: np.ndarray, building_map: np.ndarray) -> np.ndarray:
        """Assign parks and parking to ground cells without buildings."""
        n = self.grid_size
        grid = np.full((n, n), CellType.WATER, dtype=np.int8)
        grid[building_map] = CellType.BUILDING

        for i in range(n):
            for j in range(n):
                if not ground_map[i, j] or building_map[i, j]:
                    continue
                if count_surrounding_buildings(building_map, i, j) < self.park_neighbor_threshold:
                    grid[i, j] = CellType.PARK
                else:
                    grid[i, j] = CellType.PARKING

        return grid

    def classify(self) -> np.ndarray:
        """
        Run all passes and return the read-only N x N grid of CellType values.
        """
        ground_map = self.classify_terrain()
        building_map = self.classify_land_use(ground_map)
        grid = self.classify_open_space(ground_map, building_map)
        grid.flags.writeable = False

        logger.info("Classified grid", grid_size=self.grid_size, **cell_type_counts(grid))
        return grid


def cell_type_counts(grid: np.ndarray) -> Dict[str, int]:
    """Number of cells per type, keyed by lower-case type name."""
    return {
        cell_type.name.lower(): int(np.count_nonzero(grid == cell_type))
        for cell_type in CellType
    }
