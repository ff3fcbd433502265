"""
Landing model for Golf Caddy.

Turns the end of a flight into bounce and roll. Spin effect (landing spin
scaled by how soft the surface is) sorts the landing into four regimes:

  strong spin, steep descent  → checks hard or spins back (negative roll)
  moderate spin, steep descent → checks up, a few yards of roll
  moderate spin               → partial roll, scaled by landing energy
  low spin                    → full release, scaled by landing energy

Landing energy is (landing speed / 55 mph)², 55 mph being a full-power
driver landing. Terrain then adjusts the result: rough kills roll,
bunkers stop the ball, greens exaggerate spin-back and damp release.
"""

import math
import random
from typing import Optional

from golfcaddy.lie import Lie
from golfcaddy.models.shot import FlightResult, LandingBehavior, RollDirection
from golfcaddy.terrain import TerrainType
from golfcaddy.utils.constants import (
    DEFAULT_FRICTION,
    DEFAULT_SOFTNESS,
    FULL_POWER_LANDING_MPH,
    TERRAIN_FRICTION,
    TERRAIN_SOFTNESS,
)


def calculate_landing_behavior(
    flight: FlightResult,
    terrain: TerrainType | str = TerrainType.FAIRWAY,
    lie: Optional[Lie] = None,
    rng: Optional[random.Random] = None,
) -> LandingBehavior:
    """Compute bounce, check and roll for a landed ball.

    Args:
        flight: The completed flight.
        terrain: Surface the ball lands on.
        lie: Lie the shot was played from. Its penalties are already in the
             flight's launch, so it does not change the landing.
        rng: Random source for roll spread within a regime.

    Returns:
        LandingBehavior; roll_yards is negative when the ball spins back.
    """
    rng = rng or random.Random()
    terrain = TerrainType(terrain).value

    friction = TERRAIN_FRICTION.get(terrain, DEFAULT_FRICTION)
    softness = TERRAIN_SOFTNESS.get(terrain, DEFAULT_SOFTNESS)

    landing_angle = flight.landing_angle
    landing_speed = flight.landing_speed_mph

    # Steeper = more vertical bounce
    bounce_angle_factor = math.sin(math.radians(landing_angle))
    bounce_height = landing_speed * 0.3 * bounce_angle_factor * (1 - friction * 0.5)

    # Kinetic energy scales with v²
    energy_factor = (landing_speed / FULL_POWER_LANDING_MPH) ** 2
    speed_factor = landing_speed / FULL_POWER_LANDING_MPH

    spin_effect = min(1.0, (flight.landing_spin_rpm / 10000) * softness)
    direction = RollDirection.FORWARD

    if spin_effect > 0.6 and landing_angle > 40:
        # Checks hard and spins back; more speed, more spin-back
        roll_yards = (-2 - rng.random() * 4) * speed_factor
        direction = RollDirection.BACKWARD
    elif spin_effect > 0.4 and landing_angle > 30:
        roll_yards = (1 + rng.random() * 3) * speed_factor
    elif spin_effect > 0.2:
        roll_yards = (3 + rng.random() * 5) * energy_factor
    else:
        # Full release: a full driver rolls 15-30 yards on fairway
        base_roll = 15 + rng.random() * 15
        roll_yards = base_roll * (1 - spin_effect * 0.5) * energy_factor

    if terrain == TerrainType.ROUGH.value:
        roll_yards *= 0.3
    elif terrain == TerrainType.BUNKER.value:
        roll_yards = 0.0
    elif terrain == TerrainType.GREEN.value:
        # Greens are fast but spin grabs
        roll_yards *= 1.2 if direction == RollDirection.BACKWARD else 0.7

    return LandingBehavior(
        bounce_height=bounce_height,
        roll_yards=roll_yards,
        roll_direction=direction,
        spin_effect=spin_effect,
        checks_up=spin_effect > 0.4 and landing_angle > 30,
        spins_back=direction == RollDirection.BACKWARD,
    )
