"""
Tests for persisted engine settings.
"""

import json
import os

import pytest

from golfcaddy.errors import HoleConfigError
from golfcaddy.models.putt import HoleGeometry
from golfcaddy.utils.config import Config
from golfcaddy.utils.constants import HOLE_RADIUS_WORLD


def _reset():
    Config._instance = None


class TestConfig:

    def test_singleton(self):
        assert Config() is Config()

    def test_defaults(self):
        config = Config()
        assert config.get("green_speed") == 12
        assert config.get("missing", "fallback") == "fallback"
        assert Config.get_green_speed() == 12.0
        assert Config.get_hole_geometry() == HoleGeometry()

    def test_default_geometry_values(self):
        geometry = Config.get_hole_geometry()
        assert geometry.capture_radius == pytest.approx(HOLE_RADIUS_WORLD)
        assert geometry.max_capture_speed == pytest.approx(0.015)
        assert geometry.lip_out_chance == pytest.approx(0.3)
        assert geometry.edge_tolerance == pytest.approx(1.2)

    def test_load_does_not_create_directory(self):
        Config()
        assert not os.path.exists(os.environ["GOLFCADDY_HOME"])

    def test_set_persists(self):
        Config().set("green_speed", 10)
        path = Config().config_file
        with open(path) as f:
            assert json.load(f)["green_speed"] == 10

        _reset()
        assert Config.get_green_speed() == 10.0
        # Unsaved keys still come from defaults
        assert Config().get("putter_spread") == 1.5

    def test_corrupt_file_uses_defaults(self):
        app_dir = Config.get_app_dir()
        (app_dir / "config.json").write_text("{not json")
        _reset()
        assert Config.get_green_speed() == 12.0

    def test_invalid_geometry_rejected(self):
        Config().set("hole_lip_out_chance", 1.5)
        with pytest.raises(HoleConfigError):
            Config.get_hole_geometry()

    def test_app_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GOLFCADDY_HOME", str(tmp_path / "elsewhere"))
        app_dir = Config.get_app_dir()
        assert app_dir == tmp_path / "elsewhere"
        assert app_dir.is_dir()


class TestHoleGeometry:

    @pytest.mark.parametrize("kwargs", [
        {"capture_radius": 0.0},
        {"max_capture_speed": -0.01},
        {"lip_out_chance": -0.1},
        {"edge_tolerance": 0.5},
    ])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(HoleConfigError):
            HoleGeometry(**kwargs)
