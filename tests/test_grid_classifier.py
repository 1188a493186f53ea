"""Tests for grid classification."""

import numpy as np
import pytest
from py_citygen.core.grid_classifier import (
    CellType,
    GridClassifier,
    cell_type_counts,
    count_surrounding_buildings,
    neighborhood_size,
)
from py_citygen.core.noise_field import NoiseFields


def make_fields(general, ground):
    return NoiseFields(general=np.asarray(general, dtype=float), ground=np.asarray(ground, dtype=float))


class TestNeighborhood:
    """Test the clamped 3x3 neighborhood."""

    def test_interior_cell_samples_nine(self):
        assert neighborhood_size(2, 2, 5) == 9

    @pytest.mark.parametrize("i,j", [(0, 0), (0, 4), (4, 0), (4, 4)])
    def test_corner_cell_samples_four(self, i, j):
        assert neighborhood_size(i, j, 5) == 4

    def test_edge_cell_samples_six(self):
        assert neighborhood_size(0, 2, 5) == 6

    def test_single_cell_grid(self):
        assert neighborhood_size(0, 0, 1) == 1

    def test_count_includes_cell_itself(self):
        building_map = np.ones((5, 5), dtype=bool)
        assert count_surrounding_buildings(building_map, 2, 2) == 9
        assert count_surrounding_buildings(building_map, 0, 0) == 4
        assert count_surrounding_buildings(building_map, 4, 2) == 6

    def test_count_ignores_cells_outside_neighborhood(self):
        building_map = np.zeros((5, 5), dtype=bool)
        building_map[0, 0] = True
        building_map[4, 4] = True
        assert count_surrounding_buildings(building_map, 1, 1) == 1
        assert count_surrounding_buildings(building_map, 2, 2) == 0


class TestGridClassifier:
    """Test the terrain, land use and open space passes."""

    def test_water_above_ground_threshold(self):
        fields = make_fields([[0.9, 0.5]], [[1.0, 1.0]])
        grid = GridClassifier(fields, ground_threshold=0.85, park_threshold=0.2).classify()
        assert grid[0, 0] == CellType.WATER
        assert grid[0, 1] == CellType.BUILDING

    def test_threshold_boundaries(self):
        """Ground is inclusive of its threshold; buildings exclusive of theirs."""
        fields = make_fields([[0.85, 0.85]], [[0.2, 0.21]])
        grid = GridClassifier(fields, ground_threshold=0.85, park_threshold=0.2).classify()
        assert grid[0, 0] != CellType.WATER
        assert grid[0, 0] != CellType.BUILDING
        assert grid[0, 1] == CellType.BUILDING

    def test_water_never_becomes_building(self):
        fields = make_fields(np.ones((3, 3)), np.ones((3, 3)))
        grid = GridClassifier(fields, ground_threshold=0.5, park_threshold=0.0).classify()
        assert np.all(grid == CellType.WATER)

    def test_parking_when_surrounded_by_buildings(self):
        ground = np.ones((3, 3))
        ground[1, 1] = 0.0
        fields = make_fields(np.zeros((3, 3)), ground)
        grid = GridClassifier(fields, ground_threshold=0.85, park_threshold=0.2).classify()
        assert grid[1, 1] == CellType.PARKING
        assert np.count_nonzero(grid == CellType.BUILDING) == 8

    def test_park_when_few_buildings(self):
        ground = np.zeros((3, 3))
        ground[0, 0] = 1.0
        ground[0, 1] = 1.0
        fields = make_fields(np.zeros((3, 3)), ground)
        grid = GridClassifier(fields, ground_threshold=0.85, park_threshold=0.2).classify()
        assert grid[1, 1] == CellType.PARK
        assert grid[2, 2] == CellType.PARK

    def test_park_neighbor_threshold_boundary(self):
        """Exactly five surrounding buildings make parking, four make a park."""
        ground = np.zeros((3, 3))
        for i, j in [(0, 0), (0, 1), (0, 2), (1, 0)]:
            ground[i, j] = 1.0
        fields = make_fields(np.zeros((3, 3)), ground)
        grid = GridClassifier(fields, ground_threshold=0.85, park_threshold=0.2).classify()
        assert grid[1, 1] == CellType.PARK

        ground[2, 0] = 1.0
        grid = GridClassifier(fields, ground_threshold=0.85, park_threshold=0.2).classify()
        assert grid[1, 1] == CellType.PARKING

    def test_configurable_park_neighbor_threshold(self):
        ground = np.ones((3, 3))
        ground[1, 1] = 0.0
        fields = make_fields(np.zeros((3, 3)), ground)
        grid = GridClassifier(
            fields, ground_threshold=0.85, park_threshold=0.2, park_neighbor_threshold=9
        ).classify()
        assert grid[1, 1] == CellType.PARK

    def test_single_building_cell(self):
        """A one-cell grid with thresholds forcing a building."""
        fields = make_fields([[0.0]], [[0.0]])
        grid = GridClassifier(fields, ground_threshold=1.0, park_threshold=-1.0).classify()
        assert grid.shape == (1, 1)
        assert grid[0, 0] == CellType.BUILDING

    def test_classification_is_pure(self):
        rng = np.random.default_rng(7)
        fields = make_fields(rng.random((10, 10)), rng.random((10, 10)))
        a = GridClassifier(fields, 0.85, 0.2).classify()
        b = GridClassifier(fields, 0.85, 0.2).classify()
        np.testing.assert_array_equal(a, b)

    def test_grid_is_read_only(self):
        fields = make_fields(np.zeros((2, 2)), np.zeros((2, 2)))
        grid = GridClassifier(fields, 0.85, 0.2).classify()
        with pytest.raises(ValueError):
            grid[0, 0] = CellType.BUILDING

    def test_mismatched_fields(self):
        fields = make_fields(np.zeros((2, 2)), np.zeros((3, 3)))
        with pytest.raises(ValueError):
            GridClassifier(fields, 0.85, 0.2)

    def test_cell_type_counts(self):
        grid = np.array([[0, 1], [3, 3]], dtype=np.int8)
        assert cell_type_counts(grid) == {"water": 1, "park": 1, "parking": 0, "building": 2}
