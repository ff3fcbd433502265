"""
Data models for a single shot in Golf Caddy.

ShotVariability: Per-shot strike-quality perturbation.
LaunchConditions: Ball state at impact (derived from club + power + shape).
FlightResult: Sampled aerial trajectory and landing summary.
LandingBehavior: Bounce/check/roll outcome of the first ground contact.
FullShot: Everything simulate_full_shot produces.
ShotRecord: Statistics record handed to the golfer's shot history.
ShotOutcome: A resolved shot or putt placed on the hole.

All models are frozen: results are produced once per shot and handed to
the caller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from golfcaddy.models.putt import RollResult


@dataclass(frozen=True)
class ShotVariability:
    """Strike-quality perturbation applied to the club's launch profile.

    Attributes:
        speed_variance: Fractional ball speed change (-0.3 = 30% slower).
        launch_angle_variance: Degrees added to the launch angle.
        spin_variance: Fractional spin rate change.
        spin_axis_offset: Degrees added to the spin axis (+ = fade).
        launch_direction_offset: Horizontal launch direction (degrees, + = right).
        is_miss: Shot was a mishit.
        is_disaster: Shot was a topped/fat/big-curve disaster (implies is_miss).
    """
    speed_variance: float = 0.0
    launch_angle_variance: float = 0.0
    spin_variance: float = 0.0
    spin_axis_offset: float = 0.0
    launch_direction_offset: float = 0.0
    is_miss: bool = False
    is_disaster: bool = False


@dataclass(frozen=True)
class LaunchConditions:
    """Ball launch conditions at impact.

    Attributes:
        ball_speed: Ball speed (m/s).
        ball_speed_mph: Ball speed (mph), kept for display.
        launch_angle: Vertical launch angle (degrees).
        launch_direction: Horizontal launch angle (degrees, positive = right).
        spin_rate: Total spin (RPM).
        spin_axis: Spin axis tilt (degrees, positive = fade, negative = draw).
        club_name: Club that produced the launch.
        power: Swing power (0-100).
    """
    ball_speed: float
    ball_speed_mph: float
    launch_angle: float
    launch_direction: float
    spin_rate: float
    spin_axis: float
    club_name: str = ""
    power: float = 100.0


@dataclass(frozen=True)
class TrajectorySample:
    """One sampled point of the flight, in yards relative to the tee point.

    x = lateral (positive = right), y = height, z = downrange.
    """
    x: float
    y: float
    z: float
    t: float
    spin_rpm: float
    speed_mph: float


@dataclass(frozen=True)
class FlightResult:
    """Complete ball flight output.

    Attributes:
        trajectory: Samples every 10 ms, starting at the origin and ending
                    on the ground.
        carry_yards: Downrange distance at landing.
        lateral_yards: Lateral displacement at landing (positive = right).
        max_height_yards: Apex height.
        apex_time: Time of apex (s).
        flight_time: Time of landing (s).
        landing_angle: Descent angle at landing (degrees below horizontal).
        landing_spin_rpm: Spin remaining at landing.
        landing_speed_mph: Ball speed at landing.
    """
    trajectory: tuple[TrajectorySample, ...]
    carry_yards: float
    lateral_yards: float
    max_height_yards: float
    apex_time: float
    flight_time: float
    landing_angle: float
    landing_spin_rpm: float
    landing_speed_mph: float

    @property
    def playback_duration_ms(self) -> float:
        """Suggested animation length for the flight."""
        return max(1500.0, min(self.flight_time * 800.0, 2500.0))


class RollDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class LandingBehavior:
    """What the ball does on first contact with the ground.

    Attributes:
        bounce_height: First bounce height (yards).
        roll_yards: Roll after landing; negative means the ball spins back.
        roll_direction: Forward release or backward spin-back.
        spin_effect: (landing spin / 10000) x terrain softness.
        checks_up: Ball grabs and stops quickly.
        spins_back: Ball rolls back toward the golfer.
    """
    bounce_height: float
    roll_yards: float
    roll_direction: RollDirection
    spin_effect: float
    checks_up: bool
    spins_back: bool


@dataclass(frozen=True)
class ShotSummary:
    """Headline numbers for a full shot (yards / seconds / degrees)."""
    carry_yards: float
    total_yards: float
    lateral_yards: float
    max_height_yards: float
    flight_time: float
    landing_angle: float


@dataclass(frozen=True)
class FullShot:
    """Result of simulate_full_shot."""
    launch: LaunchConditions
    flight: FlightResult
    landing: LandingBehavior
    result: ShotSummary
    variability: ShotVariability


@dataclass(frozen=True)
class TreeHit:
    """A flight interrupted by a tree.

    Attributes:
        tree_type: Type of the tree that was hit.
        hit_type: "trunk" or "foliage".
        sample_index: Index of the first trajectory sample inside the tree.
        hit_point: World position of the hit (x, y).
        hit_height: Ball height at the hit (yards).
        drop_point: Where the ball comes to rest (world x, y).
        drop_samples: (x, y, height, t) points of the fall from the tree.
    """
    tree_type: str
    hit_type: str
    sample_index: int
    hit_point: tuple[float, float]
    hit_height: float
    drop_point: tuple[float, float]
    drop_samples: tuple[tuple[float, float, float, float], ...] = ()


def classify_shot_shape(launch: Optional[LaunchConditions]) -> str:
    """Classify the shot shape based on launch direction and spin axis."""
    if launch is None:
        return "Unknown"

    direction = launch.launch_direction
    spin_axis = launch.spin_axis

    # Determine curvature from spin axis
    if abs(spin_axis) < 2:
        curve = "Straight"
    elif spin_axis > 0:
        curve = "Fade" if spin_axis < 15 else "Slice"
    else:
        curve = "Draw" if spin_axis > -15 else "Hook"

    # Determine start direction
    if abs(direction) < 2:
        start = "center"
    elif direction > 0:
        start = "right"
    else:
        start = "left"

    if curve == "Straight" and start == "center":
        return "Straight"
    elif curve == "Straight":
        return "Push" if start == "right" else "Pull"
    else:
        return curve


@dataclass(frozen=True)
class ShotRecord:
    """Statistics record for one completed shot or putt.

    Consumed by the golfer's shot history (distance_error, direction_error,
    is_miss) and by anything that reports on the round.

    Attributes:
        club_name: Club used.
        intended_yards: Yardage the golfer was playing for.
        actual_yards: Carry plus roll (yards); for putts, distance rolled.
        distance_error: Yards long (+) or short (-); carry-based for full shots,
                        feet for putts.
        direction_error: Yards right (+) or left (-) at landing.
        is_miss: Shot was a mishit or disaster.
        is_putt: Record comes from a putt.
        holed: Ball finished in the hole.
        lie_type: Lie the shot was played from.
        shot_shape: Descriptive shape ("Draw", "Push", ...).
        carry_yards, max_height_yards, flight_time, landing_angle: Flight summary.
        roll_yards, checks_up, spins_back: Landing summary.
        hit_tree: Flight was stopped by a tree.
        final_position: World position where the ball came to rest.
    """
    club_name: str
    intended_yards: float
    actual_yards: float
    distance_error: float
    direction_error: float
    is_miss: bool
    is_putt: bool = False
    holed: bool = False
    lie_type: Optional[str] = None
    shot_shape: str = ""
    carry_yards: float = 0.0
    max_height_yards: float = 0.0
    flight_time: float = 0.0
    landing_angle: float = 0.0
    roll_yards: float = 0.0
    checks_up: bool = False
    spins_back: bool = False
    hit_tree: bool = False
    final_position: tuple[float, float] = field(default=(0.0, 0.0))


# (x, y, height, t): world position, height in yards, time in seconds
WorldSample = tuple[float, float, float, float]


@dataclass(frozen=True)
class ShotOutcome:
    """A shot or putt resolved on a hole by ShotSimulator.

    Flight fields are None for putts. A flight stopped by a tree has
    tree_hit set and no landing or roll.
    """
    record: ShotRecord
    start: tuple[float, float]
    final_position: tuple[float, float]
    launch: Optional[LaunchConditions] = None
    variability: Optional[ShotVariability] = None
    flight: Optional[FlightResult] = None
    world_trajectory: tuple[WorldSample, ...] = ()
    landing_point: Optional[tuple[float, float]] = None
    landing: Optional[LandingBehavior] = None
    roll: Optional[RollResult] = None
    tree_hit: Optional[TreeHit] = None

    @property
    def holed(self) -> bool:
        return self.record.holed
