"""
Tests for hole terrain lookups and tree collision volumes.
"""

import numpy as np
import pytest

from golfcaddy.errors import HoleConfigError
from golfcaddy.terrain import (
    HoleData,
    Slope,
    TerrainType,
    TerrainZone,
    get_elevation_at,
    get_elevation_change,
    get_slope_at,
    get_terrain_at,
    is_point_in_polygon,
)
from golfcaddy.trees import Tree, TreeType, check_tree_collision

SQUARE = ((10.0, 10.0), (20.0, 10.0), (20.0, 20.0), (10.0, 20.0))


class TestTerrainZones:

    def test_point_in_polygon(self):
        assert is_point_in_polygon(15, 15, SQUARE)
        assert not is_point_in_polygon(25, 15, SQUARE)
        assert not is_point_in_polygon(15, 5, SQUARE)

    def test_first_zone_wins(self):
        hole = HoleData(hole=(15, 15), zones=[
            TerrainZone(TerrainType.GREEN, SQUARE),
            TerrainZone(TerrainType.FAIRWAY, ((0, 0), (50, 0), (50, 50), (0, 50))),
        ])
        assert get_terrain_at(hole, 15, 15) == TerrainType.GREEN
        assert get_terrain_at(hole, 30, 30) == TerrainType.FAIRWAY
        assert get_terrain_at(hole, 80, 80) == TerrainType.ROUGH

    def test_default_terrain(self):
        hole = HoleData(hole=(50, 50), default_terrain=TerrainType.GREEN)
        assert get_terrain_at(hole, 1, 1) == TerrainType.GREEN


class TestElevation:

    def test_flat_without_grid(self):
        hole = HoleData(hole=(50, 50))
        assert get_elevation_at(hole, 10, 10) == 0.0
        assert get_slope_at(hole, 10, 10) == Slope(0.0, 0.0)

    def test_constant_slope_plane_through_hole(self):
        hole = HoleData(hole=(50, 50), slope=Slope(0.0, 0.48))
        assert get_elevation_at(hole, 50, 50) == pytest.approx(0.0)
        assert get_elevation_at(hole, 50, 60) == pytest.approx(4.8)
        assert get_elevation_change(hole, 50, 60, 50, 50) == pytest.approx(-4.8)
        assert get_slope_at(hole, 10, 90) == Slope(0.0, 0.48)

    def test_grid_interpolation(self):
        # Rows span y: ground rises 10 ft from y=0 to y=100
        grid = np.array([[0.0, 0.0], [10.0, 10.0]])
        hole = HoleData(hole=(50, 50), elevation_grid=grid)
        assert get_elevation_at(hole, 30, 50) == pytest.approx(5.0)
        assert get_elevation_at(hole, 30, 25) == pytest.approx(2.5)
        slope = get_slope_at(hole, 40, 40)
        assert slope.x == pytest.approx(0.0)
        assert slope.y == pytest.approx(0.1)

    def test_grid_clamps_outside_bounds(self):
        grid = np.array([[0.0, 0.0], [10.0, 10.0]])
        hole = HoleData(hole=(50, 50), elevation_grid=grid)
        assert get_elevation_at(hole, 50, 150) == pytest.approx(10.0)

    def test_slope_points_uphill(self):
        grid = np.array([[0.0, 20.0], [0.0, 20.0]])  # Rises toward +x
        hole = HoleData(hole=(50, 50), elevation_grid=grid)
        slope = get_slope_at(hole, 50, 50)
        assert slope.x > 0
        assert slope.magnitude == pytest.approx(0.2)


class TestHoleValidation:

    def test_missing_hole(self):
        with pytest.raises(HoleConfigError):
            HoleData(hole=None)

    def test_bad_bounds(self):
        with pytest.raises(HoleConfigError):
            HoleData(hole=(5, 5), bounds=(0, 0, 0, 100))

    def test_bad_grid(self):
        with pytest.raises(HoleConfigError):
            HoleData(hole=(5, 5), elevation_grid=np.zeros(10))

    def test_clamp(self):
        hole = HoleData(hole=(5, 5))
        assert hole.clamp(-3, 120) == (0.0, 100.0)


class TestTreeCollision:
    """Deciduous 1 at defaults: 18.5 yd tall, trunk 6.475 yd, canopy 8 yd."""

    @pytest.fixture
    def tree(self):
        return Tree(TreeType.DECIDUOUS_1, 10.0, 10.0)

    def test_resolved_dimensions(self, tree):
        assert tree.resolved_height == pytest.approx(18.5)
        assert tree.resolved_canopy_radius == pytest.approx(8.0)
        assert Tree(TreeType.DECIDUOUS_1, 0, 0, height=20.0).resolved_height == 20.0

    def test_trunk_hit(self, tree):
        hit = check_tree_collision([tree], 10.05, 10.0, 3.0)
        assert hit.hit_type == "trunk"
        assert hit.deflection[0] == pytest.approx(0.5)  # 2 yd away from the trunk
        assert hit.deflection[1] == pytest.approx(0.0)

    def test_foliage_hit(self, tree):
        hit = check_tree_collision([tree], 10.5, 10.0, 10.0)
        assert hit.hit_type == "foliage"
        assert hit.deflection[0] == pytest.approx(0.075)

    def test_over_the_top(self, tree):
        assert check_tree_collision([tree], 10.05, 10.0, 25.0) is None

    def test_wide_of_the_tree(self, tree):
        assert check_tree_collision([tree], 12.0, 10.0, 10.0) is None

    def test_under_the_canopy(self, tree):
        # Beside the trunk, below the foliage
        assert check_tree_collision([tree], 10.5, 10.0, 2.0) is None

    def test_first_tree_wins(self, tree):
        pine = Tree(TreeType.TALL_PINE_1, 10.0, 10.0)
        hit = check_tree_collision([pine, tree], 10.05, 10.0, 3.0)
        assert hit.tree is pine
