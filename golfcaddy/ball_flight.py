"""
Ball flight physics engine for Golf Caddy.

Two-stage model:
  1. Club + power + shape + variability → ball launch conditions
     (generate_launch_conditions)
  2. Ball launch → 3D trajectory via explicit Euler integration
     (simulate_trajectory)

Forces on the ball:
  - Gravity
  - Aerodynamic drag (piecewise-quadratic fit in Reynolds number)
  - Magnus lift, split into vertical lift (backspin) and curve (sidespin)

Crosswind and sidespin are coupled: a crosswind matching the sidespin
amplifies the curve by up to 40%, an opposing one cancels up to 60%,
scaled by crosswind strength relative to 15 mph. This coupling is tuned
for game feel and is kept as-is.
"""

import logging
import math
import random
from typing import Optional

from golfcaddy.models.club import ShotShape, get_club_profile
from golfcaddy.models.shot import (
    FlightResult,
    LaunchConditions,
    ShotVariability,
    TrajectorySample,
)
from golfcaddy.utils.constants import (
    AIR_DENSITY,
    BALL_AREA,
    BALL_MASS,
    BALL_RADIUS,
    DRAG_CRISIS_RE,
    FLIGHT_DT,
    FLIGHT_MAX_TIME,
    FLIGHT_SAMPLE_INTERVAL,
    FLIGHT_START_HEIGHT,
    GRAVITY,
    KINEMATIC_VISCOSITY,
    LIFT_SPIN_FACTOR_CAP,
    METERS_TO_YARDS,
    MIN_RELATIVE_SPEED,
    MPH_TO_MS,
    MS_TO_MPH,
    RPM_TO_RAD_S,
    SIDESPIN_LIFT_FACTOR,
    SPIN_DECAY_RATE,
    WIND_CURVE_MAX_AMPLIFY,
    WIND_CURVE_MAX_CANCEL,
    WIND_CURVE_REFERENCE_MPH,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Stage 1: Club + Swing → Ball Launch Conditions
# =============================================================================

def power_to_speed_factor(power: float) -> float:
    """Map swing power (0-100) to a ball-speed multiplier.

    The aerodynamic simulation loses proportionally more distance at low
    ball speeds, so low powers get *more* ball speed than a straight line
    would give. Three bands:

      >= 80%:  0.88 → 1.00
      50-79%:  0.70 → 0.88
      <  50%:  0.50 → 0.70
    """
    power = max(0.0, min(100.0, power))
    if power >= 80:
        return 0.88 + (power - 80) * 0.006
    elif power >= 50:
        return 0.70 + (power - 50) * 0.006
    else:
        return 0.50 + power * 0.004


def generate_launch_conditions(
    club_name: str,
    power: float,
    shape: ShotShape | str,
    variability: Optional[ShotVariability] = None,
    rng: Optional[random.Random] = None,
) -> Optional[LaunchConditions]:
    """Build launch conditions for a swing, like a launch monitor at impact.

    Args:
        club_name: Club name (e.g. "7 Iron").
        power: Swing power, 0-100.
        shape: Intended shape (Draw, Straight, Fade).
        variability: Strike-quality perturbation; None for a perfect strike.
        rng: Random source for the shape's spin-axis offset.

    Returns:
        LaunchConditions, or None if the club has no launch profile.
    """
    club = get_club_profile(club_name)
    if club is None:
        logger.warning(f"No launch profile for club {club_name!r}")
        return None

    rng = rng or random.Random()
    variability = variability or ShotVariability()
    shape = ShotShape(shape)

    power_factor = power_to_speed_factor(power)

    # Strike quality
    ball_speed_mph = club.ball_speed_mph * power_factor * (1 + variability.speed_variance)
    launch_angle = club.launch_angle_deg + variability.launch_angle_variance

    # Spin doesn't scale linearly with speed
    spin_rate = club.spin_rate_rpm * power_factor ** 0.7 * (1 + variability.spin_variance)

    # Spin axis: 0 = pure backspin, + = fade/slice, - = draw/hook
    spin_axis = variability.spin_axis_offset
    if shape == ShotShape.DRAW:
        spin_axis -= 8 + rng.random() * 4
    elif shape == ShotShape.FADE:
        spin_axis += 8 + rng.random() * 4
    else:
        spin_axis += (rng.random() - 0.5) * 4

    return LaunchConditions(
        ball_speed=ball_speed_mph * MPH_TO_MS,
        ball_speed_mph=ball_speed_mph,
        launch_angle=launch_angle,
        launch_direction=variability.launch_direction_offset,
        spin_rate=spin_rate,
        spin_axis=spin_axis,
        club_name=club.name,
        power=power,
    )


# =============================================================================
# Stage 2: Trajectory Simulation (Euler Integration)
# =============================================================================

def simulate_trajectory(
    launch: LaunchConditions,
    wind_speed_mph: float = 0.0,
    wind_direction_deg: float = 0.0,
) -> FlightResult:
    """Simulate full 3D ball flight.

    Coordinate system (yards, relative to the launch point):
        x = lateral (positive = right of target line)
        y = vertical (height above ground)
        z = downrange

    Args:
        launch: Ball launch conditions.
        wind_speed_mph: Wind speed.
        wind_direction_deg: Direction the wind comes FROM, relative to the
            shot: 0 = headwind, 90 = from the right, 180 = tailwind,
            270 = from the left.

    Returns:
        FlightResult sampled every 10 ms, ending on the ground.
    """
    launch_rad = math.radians(launch.launch_angle)
    direction_rad = math.radians(launch.launch_direction)

    # Initial velocity (m/s)
    vx = launch.ball_speed * math.sin(direction_rad) * math.cos(launch_rad)
    vy = launch.ball_speed * math.sin(launch_rad)
    vz = launch.ball_speed * math.cos(direction_rad) * math.cos(launch_rad)

    # Position (m)
    x, y, z = 0.0, FLIGHT_START_HEIGHT, 0.0

    # Spin components decay independently
    spin = launch.spin_rate
    axis_rad = math.radians(launch.spin_axis)
    backspin = spin * math.cos(axis_rad)
    sidespin = spin * math.sin(axis_rad)

    # Wind FROM a direction pushes the ball the opposite way
    wind_rad = math.radians(wind_direction_deg + 180)
    wind_x = wind_speed_mph * MPH_TO_MS * math.sin(wind_rad)
    wind_z = wind_speed_mph * MPH_TO_MS * math.cos(wind_rad)

    curve_scale = _wind_curve_multiplier(sidespin, wind_speed_mph, wind_direction_deg)

    trajectory = [TrajectorySample(0.0, 0.0, 0.0, 0.0, spin, launch.ball_speed * MS_TO_MPH)]
    step = 0
    t = 0.0
    max_height = 0.0
    apex_time = 0.0

    while y > 0 and t < FLIGHT_MAX_TIME:
        step += 1
        if step % FLIGHT_SAMPLE_INTERVAL == 0:
            trajectory.append(TrajectorySample(
                x * METERS_TO_YARDS,
                y * METERS_TO_YARDS,
                z * METERS_TO_YARDS,
                t,
                spin,
                math.sqrt(vx * vx + vy * vy + vz * vz) * MS_TO_MPH,
            ))

        if y > max_height:
            max_height = y
            apex_time = t

        # Velocity relative to the air
        vrx = vx - wind_x
        vry = vy
        vrz = vz - wind_z
        v_rel = math.sqrt(vrx * vrx + vry * vry + vrz * vrz)

        if v_rel < MIN_RELATIVE_SPEED:
            break

        cd = _drag_coefficient(_reynolds_number(v_rel))
        cl = _lift_coefficient(_spin_factor(spin, v_rel))

        # --- Drag force (opposes relative velocity, so wind is included) ---
        drag = 0.5 * AIR_DENSITY * v_rel * v_rel * BALL_AREA * cd
        ax = -drag * (vrx / v_rel) / BALL_MASS
        ay = -drag * (vry / v_rel) / BALL_MASS
        az = -drag * (vrz / v_rel) / BALL_MASS

        # --- Magnus lift force ---
        # Backspin lifts; sidespin curves the ball sideways, perpendicular
        # to the horizontal direction of travel.
        lift = 0.5 * AIR_DENSITY * v_rel * v_rel * BALL_AREA * cl
        horizontal_speed = math.sqrt(vrx * vrx + vrz * vrz)

        if horizontal_speed > 0.1:
            spin_norm = max(spin, 1.0)
            ay += lift * (backspin / spin_norm) / BALL_MASS

            curve = lift * (sidespin / spin_norm) * SIDESPIN_LIFT_FACTOR * curve_scale
            ax += curve * (vrz / horizontal_speed) / BALL_MASS
            az -= curve * (vrx / horizontal_speed) / BALL_MASS

        ay -= GRAVITY

        vx += ax * FLIGHT_DT
        vy += ay * FLIGHT_DT
        vz += az * FLIGHT_DT

        x += vx * FLIGHT_DT
        y += vy * FLIGHT_DT
        z += vz * FLIGHT_DT

        spin = decay_spin(spin, FLIGHT_DT)
        backspin = decay_spin(backspin, FLIGHT_DT)
        sidespin = decay_spin(sidespin, FLIGHT_DT)

        t += FLIGHT_DT

    landing_speed = math.sqrt(vx * vx + vy * vy + vz * vz) * MS_TO_MPH
    trajectory.append(TrajectorySample(
        x * METERS_TO_YARDS, 0.0, z * METERS_TO_YARDS, t, spin, landing_speed
    ))

    result = FlightResult(
        trajectory=tuple(trajectory),
        carry_yards=z * METERS_TO_YARDS,
        lateral_yards=x * METERS_TO_YARDS,
        max_height_yards=max_height * METERS_TO_YARDS,
        apex_time=apex_time,
        flight_time=t,
        landing_angle=math.degrees(math.atan2(-vy, math.sqrt(vx * vx + vz * vz))),
        landing_spin_rpm=spin,
        landing_speed_mph=landing_speed,
    )

    logger.debug(
        f"Flight: carry={result.carry_yards:.1f}yd, "
        f"lateral={result.lateral_yards:.1f}yd, "
        f"apex={result.max_height_yards:.1f}yd, "
        f"time={result.flight_time:.2f}s"
    )
    return result


def decay_spin(spin_rpm: float, dt: float) -> float:
    """Spin lost to air friction: 1.5% per second, compounded."""
    return spin_rpm * (1 - SPIN_DECAY_RATE) ** dt


def _wind_curve_multiplier(sidespin: float, wind_speed_mph: float,
                           wind_direction_deg: float) -> float:
    """Scale applied to sidespin curve under a crosswind.

    The crosswind's from-side is compared with the sidespin sign: a fade
    (+) with wind from the right (+) curves more, a draw (-) with wind
    from the right curves less.

    Args:
        sidespin: Signed sidespin (+ = fade).
        wind_speed_mph: Wind speed.
        wind_direction_deg: Direction the wind comes FROM, shot-relative.

    Returns:
        Multiplier in [0.4, 1.4].
    """
    crosswind = wind_speed_mph * math.sin(math.radians(wind_direction_deg))
    if sidespin == 0 or abs(crosswind) < 1e-9:
        return 1.0

    strength = min(1.0, abs(crosswind) / WIND_CURVE_REFERENCE_MPH)
    if (sidespin > 0) == (crosswind > 0):
        return 1.0 + WIND_CURVE_MAX_AMPLIFY * strength
    return 1.0 - WIND_CURVE_MAX_CANCEL * strength


def _reynolds_number(velocity: float) -> float:
    """Re = V * D / ν"""
    return velocity * BALL_RADIUS * 2 / KINEMATIC_VISCOSITY


def _spin_factor(spin_rpm: float, velocity: float) -> float:
    """Non-dimensional spin S = ω r / V."""
    omega = spin_rpm * RPM_TO_RAD_S
    return omega * BALL_RADIUS / max(velocity, 1.0)


def _drag_coefficient(reynolds: float) -> float:
    """Drag coefficient for a dimpled golf ball.

    Two quadratic fits in Re, split at the drag crisis (Re = 1e5).

    Args:
        reynolds: Reynolds number of the relative airflow.

    Returns:
        Drag coefficient C_D.
    """
    if reynolds < DRAG_CRISIS_RE:
        return 1.29e-10 * reynolds * reynolds - 2.59e-5 * reynolds + 1.50
    return 1.91e-11 * reynolds * reynolds - 5.40e-6 * reynolds + 0.56


def _lift_coefficient(spin_factor: float) -> float:
    """Lift coefficient: CL = -3.25 S² + 1.99 S, with S capped at 0.3."""
    s = min(spin_factor, LIFT_SPIN_FACTOR_CAP)
    return -3.25 * s * s + 1.99 * s
