"""
Data models for rolling balls in Golf Caddy.

HoleGeometry: Cup size and capture thresholds.
RollPoint: One sampled point of a roll path.
RollResult: Output of the roll simulator.
PuttResult: A putt (roll result plus playback and dispersion metadata).

Distances are in world units (1 unit = 4 yards) unless noted.
"""

from dataclasses import dataclass

from golfcaddy.errors import HoleConfigError
from golfcaddy.utils.constants import (
    HOLE_RADIUS_WORLD,
    HOLE_MAX_CAPTURE_SPEED,
    HOLE_LIP_OUT_CHANCE,
    HOLE_EDGE_TOLERANCE,
    WORLD_TO_YARDS,
    FEET_PER_YARD,
)


@dataclass(frozen=True)
class HoleGeometry:
    """Cup capture configuration.

    Attributes:
        capture_radius: Radius inside which a slow ball drops (world units).
        max_capture_speed: Below this speed a ball over the cup always drops
                           (world units/s). Up to twice this, it may lip out.
        lip_out_chance: Probability that a ball in the lip-out band lips out.
        edge_tolerance: Multiple of capture_radius within which the cup is
                        checked every step.
    """
    capture_radius: float = HOLE_RADIUS_WORLD
    max_capture_speed: float = HOLE_MAX_CAPTURE_SPEED
    lip_out_chance: float = HOLE_LIP_OUT_CHANCE
    edge_tolerance: float = HOLE_EDGE_TOLERANCE

    def __post_init__(self):
        if self.capture_radius <= 0:
            raise HoleConfigError(f"capture_radius must be positive, got {self.capture_radius}")
        if self.max_capture_speed <= 0:
            raise HoleConfigError(f"max_capture_speed must be positive, got {self.max_capture_speed}")
        if not 0.0 <= self.lip_out_chance <= 1.0:
            raise HoleConfigError(f"lip_out_chance must be in [0, 1], got {self.lip_out_chance}")
        if self.edge_tolerance < 1.0:
            raise HoleConfigError(f"edge_tolerance must be >= 1, got {self.edge_tolerance}")


@dataclass(frozen=True)
class RollPoint:
    x: float
    y: float
    speed: float
    t: float
    holed: bool = False


@dataclass(frozen=True)
class RollResult:
    """Output of one roll simulation.

    Attributes:
        path: Sampled points; the last one is the resting state.
        final_position: Resting position (the hole position if holed).
        holed: Ball dropped into the cup.
        distance: Path length travelled (world units).
        elapsed: Simulated time (s).
        lip_outs: Number of times the ball lipped out.
    """
    path: tuple[RollPoint, ...]
    final_position: tuple[float, float]
    holed: bool
    distance: float
    elapsed: float
    lip_outs: int = 0

    @property
    def distance_yards(self) -> float:
        return self.distance * WORLD_TO_YARDS

    @property
    def distance_feet(self) -> float:
        return self.distance_yards * FEET_PER_YARD


@dataclass(frozen=True)
class PuttResult:
    """A simulated putt.

    Attributes:
        roll: The underlying roll simulation.
        duration_ms: Suggested playback duration.
        angle_offset: Aim offset used for this simulation (degrees).
        is_center: This is the center line of a dispersion preview.
    """
    roll: RollResult
    duration_ms: float
    angle_offset: float = 0.0
    is_center: bool = True

    @property
    def path(self) -> tuple[RollPoint, ...]:
        return self.roll.path

    @property
    def final_position(self) -> tuple[float, float]:
        return self.roll.final_position

    @property
    def holed(self) -> bool:
        return self.roll.holed

    @property
    def distance_feet(self) -> float:
        return self.roll.distance_feet
