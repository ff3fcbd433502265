"""
Terrain lookups for Golf Caddy holes.

The physics engine only needs four questions answered about a hole:
what surface is at a point, which way is uphill, how high is a point, and
how much does the ground rise between two points. HoleData answers them
from terrain polygons and an optional elevation grid.

Coordinates are world units (1 unit = 4 yards). Elevations are in feet,
so a slope of 0.48 (feet of rise per world unit = 12 ft) is a 4% grade.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from golfcaddy.errors import HoleConfigError
from golfcaddy.trees import Tree


class TerrainType(str, Enum):
    TEE = "tee"
    FAIRWAY = "fairway"
    ROUGH = "rough"
    GREEN = "green"
    BUNKER = "bunker"
    WATER = "water"
    OUT_OF_BOUNDS = "oob"


@dataclass(frozen=True)
class Slope:
    """Elevation gradient; points uphill."""
    x: float = 0.0
    y: float = 0.0

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class TerrainZone:
    """A polygon of one surface type (world coordinates)."""
    terrain: TerrainType
    points: tuple[tuple[float, float], ...]


def is_point_in_polygon(x: float, y: float,
                        points: tuple[tuple[float, float], ...]) -> bool:
    """Ray-casting point-in-polygon test."""
    inside = False
    j = len(points) - 1
    for i in range(len(points)):
        xi, yi = points[i]
        xj, yj = points[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


@dataclass
class HoleData:
    """Geometry of one hole.

    Attributes:
        hole: Cup position (world x, y).
        bounds: (min_x, min_y, max_x, max_y) of the playable area.
        tee: Tee position, if known.
        zones: Terrain polygons, checked in order; first match wins.
        default_terrain: Surface outside every zone.
        elevation_grid: Elevations in feet; rows span y and columns span x
                        evenly across bounds.
        slope: Constant slope for a planar hole. Takes precedence over
               elevation_grid.
        trees: Trees that can stop a flight.
    """
    hole: Optional[tuple[float, float]]
    bounds: tuple[float, float, float, float] = (0.0, 0.0, 100.0, 100.0)
    tee: Optional[tuple[float, float]] = None
    zones: list[TerrainZone] = field(default_factory=list)
    default_terrain: TerrainType = TerrainType.ROUGH
    elevation_grid: Optional[np.ndarray] = None
    slope: Optional[Slope] = None
    trees: list[Tree] = field(default_factory=list)

    def __post_init__(self):
        if self.hole is None:
            raise HoleConfigError("Hole data has no hole position")
        min_x, min_y, max_x, max_y = self.bounds
        if max_x <= min_x or max_y <= min_y:
            raise HoleConfigError(f"Invalid hole bounds: {self.bounds}")

        self._interpolator = None
        if self.elevation_grid is not None:
            grid = np.asarray(self.elevation_grid, dtype=float)
            if grid.ndim != 2 or min(grid.shape) < 2:
                raise HoleConfigError(
                    f"Elevation grid must be 2-D with at least 2x2 samples, got {grid.shape}"
                )
            rows, cols = grid.shape
            ys = np.linspace(min_y, max_y, rows)
            xs = np.linspace(min_x, max_x, cols)
            self._interpolator = RegularGridInterpolator(
                (ys, xs), grid, method="linear", bounds_error=False, fill_value=None
            )

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        min_x, min_y, max_x, max_y = self.bounds
        return min(max(x, min_x), max_x), min(max(y, min_y), max_y)


def get_terrain_at(hole: HoleData, x: float, y: float) -> TerrainType:
    """Surface type at a world position."""
    for zone in hole.zones:
        if is_point_in_polygon(x, y, zone.points):
            return zone.terrain
    return hole.default_terrain


def get_elevation_at(hole: HoleData, x: float, y: float) -> float:
    """Ground elevation (feet) at a world position."""
    if hole.slope is not None:
        hx, hy = hole.hole
        return hole.slope.x * (x - hx) + hole.slope.y * (y - hy)
    if hole._interpolator is None:
        return 0.0
    x, y = hole.clamp(x, y)
    return float(hole._interpolator([[y, x]])[0])


def get_elevation_change(hole: HoleData, from_x: float, from_y: float,
                         to_x: float, to_y: float) -> float:
    """Rise in feet from one point to another (negative = downhill)."""
    return get_elevation_at(hole, to_x, to_y) - get_elevation_at(hole, from_x, from_y)


def get_slope_at(hole: HoleData, x: float, y: float) -> Slope:
    """Elevation gradient at a point, by central difference over one unit."""
    if hole.slope is not None:
        return hole.slope
    if hole._interpolator is None:
        return Slope()

    min_x, min_y, max_x, max_y = hole.bounds
    delta = 1.0
    left = get_elevation_at(hole, max(min_x, x - delta), y)
    right = get_elevation_at(hole, min(max_x, x + delta), y)
    up = get_elevation_at(hole, x, max(min_y, y - delta))
    down = get_elevation_at(hole, x, min(max_y, y + delta))

    return Slope(x=(right - left) / (2 * delta), y=(down - up) / (2 * delta))
