"""Shared pytest fixtures."""

import random

import pytest

from golfcaddy.terrain import HoleData, Slope, TerrainType
from golfcaddy.utils.config import Config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point Config at a temporary directory and drop the cached instance."""
    monkeypatch.setenv("GOLFCADDY_HOME", str(tmp_path / "golfcaddy"))
    monkeypatch.setattr(Config, "_instance", None)
    yield


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def flat_green():
    return HoleData(hole=(90.0, 90.0), default_terrain=TerrainType.GREEN,
                    slope=Slope(0.0, 0.0))


@pytest.fixture
def make_green():
    """Factory for planar greens; slope is feet of rise per world unit."""
    def factory(slope_x=0.0, slope_y=0.0, hole=(90.0, 90.0)):
        return HoleData(hole=hole, default_terrain=TerrainType.GREEN,
                        slope=Slope(slope_x, slope_y))
    return factory
