"""
Slope-aware rolling physics for Golf Caddy.

Used for putts and for the roll-out after a full shot lands. Each step:

  1. The cup is checked before the stop test, so a ball that comes to
     rest over the hole still drops.
  2. Gravity along the slope is split into a component along the line of
     travel (changes speed, strong) and one across it (break, weaker).
     The strong along-line term lets a nearly stopped ball accelerate off
     a two-tier green; the weak cross term keeps break subtle.
  3. Rolling friction opposes motion, ramping from 30% to 100% of its base
     value as speed rises to 0.15 units/s, so gravity wins on a slow ball
     on a steep slope.

Cup interaction over the capture radius:
  speed < max_capture_speed        → drops
  speed < 2 x max_capture_speed    → drops or lips out (random)
  otherwise                        → rolls over

Units are world units (1 unit = 4 yards) and seconds.
"""

import logging
import math
import random
from concurrent.futures import Executor
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from golfcaddy.models.golfer import Golfer
from golfcaddy.models.putt import HoleGeometry, PuttResult, RollPoint, RollResult
from golfcaddy.terrain import HoleData, TerrainType, get_slope_at
from golfcaddy.utils.constants import (
    BASE_ROLLING_RESISTANCE,
    DEFAULT_ROLLOUT,
    FEET_PER_YARD,
    GREEN_SPEED_STIMP,
    LIP_OUT_SPEED_RETAINED,
    LOW_SPEED_FRICTION_FLOOR,
    LOW_SPEED_THRESHOLD,
    PARALLEL_SLOPE_EFFECT,
    PERP_SLOPE_EFFECT,
    PUTT_MAX_TIME,
    ROLL_DT,
    ROLL_SAMPLE_INTERVAL,
    ROLL_STOP_SPEED,
    ROLLOUT_TERRAIN,
    YARDS_TO_WORLD,
)

logger = logging.getLogger(__name__)


class RollState(str, Enum):
    ROLLING = "rolling"
    STOPPED = "stopped"
    CAPTURED = "captured"
    LIPPED_OUT = "lipped_out"


@dataclass(frozen=True)
class RollSurface:
    """How a surface resists and redirects a rolling ball.

    Attributes:
        rolling_resistance: Base friction deceleration (units/s²).
        parallel_effect: Slope acceleration along the line of travel, per
                         unit of slope.
        perp_effect: Slope acceleration across the line of travel.
    """
    rolling_resistance: float
    parallel_effect: float
    perp_effect: float

    @classmethod
    def green(cls, stimp: float = GREEN_SPEED_STIMP) -> "RollSurface":
        """Putting surface; faster greens roll further and break more."""
        stimp_factor = stimp / 10
        return cls(
            rolling_resistance=BASE_ROLLING_RESISTANCE / stimp_factor,
            parallel_effect=PARALLEL_SLOPE_EFFECT * stimp_factor,
            perp_effect=PERP_SLOPE_EFFECT * stimp_factor,
        )

    @classmethod
    def for_terrain(cls, terrain: TerrainType | str,
                    stimp: float = GREEN_SPEED_STIMP) -> "RollSurface":
        terrain = TerrainType(terrain)
        if terrain == TerrainType.GREEN:
            return cls.green(stimp)
        resistance, slope_scale = ROLLOUT_TERRAIN.get(terrain.value, DEFAULT_ROLLOUT)
        return cls(
            rolling_resistance=resistance,
            parallel_effect=PARALLEL_SLOPE_EFFECT * slope_scale,
            perp_effect=PERP_SLOPE_EFFECT * slope_scale,
        )

    def speed_for_distance(self, distance: float) -> float:
        """Launch speed that rolls about `distance` units on flat ground."""
        return math.sqrt(2 * self.rolling_resistance * max(distance, 0.0))


class RollSimulator:
    """Steps a rolling ball across a hole until it stops or drops.

    A simulator holds no per-roll state between calls; each roll() builds
    its own path and returns it.
    """

    def __init__(
        self,
        hole_data: HoleData,
        surface: Optional[RollSurface] = None,
        geometry: Optional[HoleGeometry] = None,
        rng: Optional[random.Random] = None,
        dt: float = ROLL_DT,
        max_time: float = PUTT_MAX_TIME,
    ):
        """
        Args:
            hole_data: Hole for slope lookups and the cup position.
            surface: Rolling surface; defaults to a stimp-12 green.
            geometry: Cup capture configuration.
            rng: Random source for lip-outs.
            dt: Time step (s).
            max_time: Hard cap on simulated time (s).
        """
        self.hole_data = hole_data
        self.surface = surface or RollSurface.green()
        self.geometry = geometry or HoleGeometry()
        self.rng = rng or random.Random()
        self.dt = dt
        self.max_time = max_time
        self._hole = np.array(hole_data.hole, dtype=float)

    def acceleration(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        """Net slope + friction acceleration for a moving ball."""
        speed = float(np.linalg.norm(velocity))
        direction = velocity / speed
        perp = np.array([-direction[1], direction[0]])

        # Slope points uphill; gravity pulls the other way
        slope = get_slope_at(self.hole_data, float(position[0]), float(position[1]))
        downhill = np.array([-slope.x, -slope.y])

        parallel_accel = float(downhill @ direction) * self.surface.parallel_effect
        perp_accel = float(downhill @ perp) * self.surface.perp_effect

        speed_factor = min(1.0, speed / LOW_SPEED_THRESHOLD)
        friction = self.surface.rolling_resistance * (
            LOW_SPEED_FRICTION_FLOOR + (1 - LOW_SPEED_FRICTION_FLOOR) * speed_factor
        )

        return direction * (parallel_accel - friction) + perp * perp_accel

    def _check_hole(self, position: np.ndarray, speed: float,
                    near_lip_out: bool) -> RollState:
        dist = float(np.linalg.norm(position - self._hole))
        geometry = self.geometry

        if near_lip_out or dist >= geometry.capture_radius:
            return RollState.ROLLING

        if speed < geometry.max_capture_speed:
            return RollState.CAPTURED
        if speed < geometry.max_capture_speed * 2:
            if self.rng.random() > geometry.lip_out_chance:
                return RollState.CAPTURED
            return RollState.LIPPED_OUT
        # Too fast: rolls straight over
        return RollState.ROLLING

    def roll(self, start: tuple[float, float],
             velocity: tuple[float, float]) -> RollResult:
        """Roll a ball from `start` with an initial velocity (units/s)."""
        pos = np.array(start, dtype=float)
        vel = np.array(velocity, dtype=float)
        path = [RollPoint(float(pos[0]), float(pos[1]), float(np.linalg.norm(vel)), 0.0)]

        t = 0.0
        step = 0
        distance = 0.0
        lip_outs = 0
        # After a lip-out the cup is ignored until the ball leaves its edge
        near_lip_out = False
        state = RollState.ROLLING
        edge_radius = self.geometry.capture_radius * self.geometry.edge_tolerance

        while t < self.max_time:
            speed = float(np.linalg.norm(vel))

            if float(np.linalg.norm(pos - self._hole)) < edge_radius:
                state = self._check_hole(pos, speed, near_lip_out)
            else:
                near_lip_out = False
                state = RollState.ROLLING

            if state == RollState.CAPTURED:
                logger.debug(f"Ball dropped at speed {speed:.4f} after {t:.2f}s")
                break
            if state == RollState.LIPPED_OUT:
                lip_outs += 1
                near_lip_out = True
                logger.debug(f"Lip out at speed {speed:.4f}")
                away = pos - self._hole
                angle = math.atan2(away[1], away[0])
                deflect_speed = speed * LIP_OUT_SPEED_RETAINED
                vel = np.array([math.cos(angle), math.sin(angle)]) * deflect_speed
                speed = deflect_speed
                state = RollState.ROLLING

            if speed < ROLL_STOP_SPEED:
                state = RollState.STOPPED
                break

            vel = vel + self.acceleration(pos, vel) * self.dt
            move = vel * self.dt
            pos = pos + move
            distance += float(np.linalg.norm(move))

            step += 1
            if step % ROLL_SAMPLE_INTERVAL == 0:
                path.append(RollPoint(float(pos[0]), float(pos[1]), speed, t))

            t += self.dt

        holed = state == RollState.CAPTURED
        if not holed and float(np.linalg.norm(pos - self._hole)) < self.geometry.capture_radius:
            # Came to rest over the cup
            logger.debug("Ball stopped over the hole and dropped")
            holed = True

        if holed:
            pos = self._hole.copy()
        path.append(RollPoint(float(pos[0]), float(pos[1]), 0.0, t, holed=holed))

        return RollResult(
            path=tuple(path),
            final_position=(float(pos[0]), float(pos[1])),
            holed=holed,
            distance=distance,
            elapsed=t,
            lip_outs=lip_outs,
        )


# =============================================================================
# Putting
# =============================================================================

def putt_speed(distance_feet: float, surface: RollSurface) -> float:
    """Initial speed for a putt that rolls `distance_feet` on a flat green.

    Longer putts get slightly more speed to offset the low-speed friction
    ramp.
    """
    units = distance_feet / FEET_PER_YARD * YARDS_TO_WORLD
    distance_scale = min(0.90 + units * 0.02, 1.0)
    return surface.speed_for_distance(units) * distance_scale


def simulate_single_putt(
    start: tuple[float, float],
    aim_angle: float,
    distance_feet: float,
    hole_data: HoleData,
    geometry: Optional[HoleGeometry] = None,
    green_speed: float = GREEN_SPEED_STIMP,
    rng: Optional[random.Random] = None,
) -> PuttResult:
    """Simulate one putt.

    Args:
        start: Ball position (world units).
        aim_angle: Aim in degrees; 0 rolls toward -y, 90 toward +x.
        distance_feet: How far the putt would roll on a flat green.
        hole_data: Hole for slopes and the cup.
        geometry: Cup capture configuration.
        green_speed: Stimp rating.
        rng: Random source for lip-outs.

    Returns:
        PuttResult with path, playback duration, final position and holed flag.
    """
    surface = RollSurface.green(green_speed)
    speed = putt_speed(distance_feet, surface)
    aim_rad = math.radians(aim_angle)
    velocity = (math.sin(aim_rad) * speed, -math.cos(aim_rad) * speed)

    simulator = RollSimulator(hole_data, surface=surface, geometry=geometry, rng=rng)
    roll = simulator.roll(start, velocity)

    duration_ms = max(800.0, min(5000.0, roll.elapsed * 450))
    return PuttResult(roll=roll, duration_ms=duration_ms)


def calculate_dispersion_angles(pressure: float, bias: float,
                                spread: float) -> list[float]:
    """Aim offsets (degrees) for a putt dispersion preview.

    Center, half spread either side, full spread either side. Pressure
    0-100 widens the spread up to 2x; bias shifts every line.
    """
    total_spread = spread * (1 + pressure / 100)
    bias_offset = bias * total_spread * 0.5
    return [
        bias_offset,
        -total_spread * 0.5 + bias_offset,
        total_spread * 0.5 + bias_offset,
        -total_spread + bias_offset,
        total_spread + bias_offset,
    ]


def run_putt_simulations(
    start: tuple[float, float],
    base_aim_angle: float,
    distance_feet: float,
    hole_data: HoleData,
    golfer: Optional[Golfer] = None,
    geometry: Optional[HoleGeometry] = None,
    green_speed: float = GREEN_SPEED_STIMP,
    rng: Optional[random.Random] = None,
    executor: Optional[Executor] = None,
) -> list[PuttResult]:
    """Simulate a fan of putts around the aim line.

    Every simulation gets its own random stream drawn from `rng`, so the
    batch is reproducible from one seed and may run on any executor,
    including a process pool.

    Returns:
        One PuttResult per offset, the center line first.
    """
    golfer = golfer or Golfer()
    rng = rng or random.Random()
    offsets = calculate_dispersion_angles(golfer.pressure, golfer.putter_bias,
                                          golfer.putter_spread)
    jobs = [
        (start, base_aim_angle, distance_feet, hole_data, geometry, green_speed,
         rng.getrandbits(64), offset, index == 0)
        for index, offset in enumerate(offsets)
    ]

    if executor is not None:
        return list(executor.map(_simulate_offset, jobs))
    return [_simulate_offset(job) for job in jobs]


def _simulate_offset(job: tuple) -> PuttResult:
    # Module level and seeded from an int so process pools can pickle it
    (start, base_aim_angle, distance_feet, hole_data, geometry, green_speed,
     seed, offset, is_center) = job
    result = simulate_single_putt(start, base_aim_angle + offset, distance_feet,
                                  hole_data, geometry, green_speed, random.Random(seed))
    return PuttResult(
        roll=result.roll,
        duration_ms=result.duration_ms,
        angle_offset=offset,
        is_center=is_center,
    )


# =============================================================================
# Roll-out after landing
# =============================================================================

def simulate_roll_out(
    land: tuple[float, float],
    direction: tuple[float, float],
    roll_yards: float,
    hole_data: HoleData,
    terrain: TerrainType | str,
    geometry: Optional[HoleGeometry] = None,
    green_speed: float = GREEN_SPEED_STIMP,
    rng: Optional[random.Random] = None,
) -> RollResult:
    """Roll a landed ball.

    Args:
        land: Landing position (world units).
        direction: Direction of the shot (need not be normalized).
        roll_yards: Roll from the landing model; negative rolls back
                    toward the golfer.
        hole_data: Hole for slopes and the cup.
        terrain: Surface at the landing point.
        geometry: Cup capture configuration.
        green_speed: Stimp rating, used when landing on the green.
        rng: Random source for lip-outs.
    """
    surface = RollSurface.for_terrain(terrain, green_speed)
    heading = np.array(direction, dtype=float)
    norm = float(np.linalg.norm(heading))
    heading = heading / norm if norm > 0 else np.array([0.0, -1.0])
    if roll_yards < 0:
        heading = -heading

    speed = surface.speed_for_distance(abs(roll_yards) * YARDS_TO_WORLD)
    simulator = RollSimulator(hole_data, surface=surface, geometry=geometry, rng=rng)
    return simulator.roll(land, tuple(heading * speed))
