"""
Application configuration management for Golf Caddy.

Handles green speed, hole capture geometry and golfer defaults.
Settings are persisted to ~/.golfcaddy/config.json; set GOLFCADDY_HOME to
use another directory.
"""

import json
import os
from pathlib import Path
from typing import Optional

from golfcaddy.models.putt import HoleGeometry
from golfcaddy.utils.constants import (
    GREEN_SPEED_STIMP,
    HOLE_EDGE_TOLERANCE,
    HOLE_LIP_OUT_CHANCE,
    HOLE_MAX_CAPTURE_SPEED,
    HOLE_RADIUS_WORLD,
    PUTTER_BIAS,
    PUTTER_SPREAD,
    SHOT_HISTORY_SIZE,
)


class Config:
    """Manages engine settings with JSON file persistence."""

    _CONFIG_NAME = "config.json"

    _defaults = {
        "green_speed": GREEN_SPEED_STIMP,
        "hole_capture_radius": HOLE_RADIUS_WORLD,
        "hole_max_capture_speed": HOLE_MAX_CAPTURE_SPEED,
        "hole_lip_out_chance": HOLE_LIP_OUT_CHANCE,
        "hole_edge_tolerance": HOLE_EDGE_TOLERANCE,
        "putter_bias": PUTTER_BIAS,
        "putter_spread": PUTTER_SPREAD,
        "shot_history_size": SHOT_HISTORY_SIZE,
    }

    _instance: Optional["Config"] = None
    _settings: dict

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._settings = {}
            cls._instance._load()
        return cls._instance

    @staticmethod
    def _app_dir() -> Path:
        env_dir = os.environ.get("GOLFCADDY_HOME", "")
        if env_dir:
            return Path(env_dir)
        return Path.home() / ".golfcaddy"

    @property
    def config_file(self) -> Path:
        return self._app_dir() / self._CONFIG_NAME

    def _load(self):
        """Load settings from disk, merging with defaults."""
        if self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    saved = json.load(f)
                # Merge: defaults first, then saved values override
                self._settings = {**self._defaults, **saved}
            except (json.JSONDecodeError, IOError):
                self._settings = dict(self._defaults)
        else:
            self._settings = dict(self._defaults)

    def save(self):
        """Persist current settings to disk."""
        self._app_dir().mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self._settings, f, indent=2)

    def get(self, key: str, default=None):
        """Get a setting value."""
        return self._settings.get(key, default)

    def set(self, key: str, value):
        """Set a setting value and save."""
        self._settings[key] = value
        self.save()

    @classmethod
    def get_hole_geometry(cls) -> HoleGeometry:
        """Cup capture configuration; raises HoleConfigError if invalid."""
        instance = cls()
        return HoleGeometry(
            capture_radius=float(instance.get("hole_capture_radius")),
            max_capture_speed=float(instance.get("hole_max_capture_speed")),
            lip_out_chance=float(instance.get("hole_lip_out_chance")),
            edge_tolerance=float(instance.get("hole_edge_tolerance")),
        )

    @classmethod
    def get_green_speed(cls) -> float:
        """Green speed as a stimp reading."""
        return float(cls().get("green_speed"))

    @classmethod
    def get_app_dir(cls) -> Path:
        """Get the application data directory."""
        instance = cls()
        app_dir = instance._app_dir()
        app_dir.mkdir(parents=True, exist_ok=True)
        return app_dir
