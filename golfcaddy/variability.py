"""
Shot variability model for Golf Caddy.

Rolls the quality of a strike from the golfer's recent history for the
club and turns it into a ShotVariability:

  - disaster (~1%, more from bad lies): topped, fat, big slice or big hook
  - miss (history miss rate, plus lie penalty): short-skewed speed loss
    with moderate direction and spin noise
  - good: tight noise, under 3% speed variance

One uniform draw decides the class; the class then selects its own noise
recipe. All randomness comes from the injected rng.
"""

import random
from typing import Optional

from golfcaddy.lie import Lie, get_lie_miss_chance
from golfcaddy.models.golfer import GolferClubStats
from golfcaddy.models.shot import ShotVariability

BASE_DISASTER_RATE = 0.01
MAX_MISS_RATE = 0.5


def generate_shot_variability(stats: GolferClubStats, club_name: str,
                              lie: Optional[Lie] = None,
                              rng: Optional[random.Random] = None) -> ShotVariability:
    """Roll shot quality and build the matching perturbation.

    Args:
        stats: Dispersion statistics for the club being hit.
        club_name: Club being hit (long clubs suffer more from bad lies).
        lie: Lie the ball is sitting in, if known.
        rng: Random source.

    Returns:
        A fresh ShotVariability.
    """
    rng = rng or random.Random()
    lie_miss_increase = get_lie_miss_chance(lie, club_name)

    miss_rate = min(MAX_MISS_RATE, stats.miss_rate + lie_miss_increase)
    quality_roll = rng.random()
    is_disaster = quality_roll < BASE_DISASTER_RATE + lie_miss_increase * 0.5
    is_miss = quality_roll < miss_rate

    if is_disaster:
        return _disaster(rng)
    if is_miss:
        return _miss(rng)
    return _good(rng)


def _disaster(rng: random.Random) -> ShotVariability:
    kind = rng.random()
    if kind < 0.3:
        # Topped: low launch, low spin, short
        return ShotVariability(
            speed_variance=-0.3 - rng.random() * 0.2,
            launch_angle_variance=-8 - rng.random() * 5,
            spin_variance=-0.5,
            is_miss=True,
            is_disaster=True,
        )
    if kind < 0.5:
        # Fat: very short, ballooning
        return ShotVariability(
            speed_variance=-0.4 - rng.random() * 0.3,
            launch_angle_variance=5 + rng.random() * 5,
            spin_variance=0.3,
            is_miss=True,
            is_disaster=True,
        )
    if kind < 0.75:
        # Big slice
        return ShotVariability(
            speed_variance=-0.1,
            spin_axis_offset=25 + rng.random() * 15,
            launch_direction_offset=5 + rng.random() * 5,
            is_miss=True,
            is_disaster=True,
        )
    # Big hook
    return ShotVariability(
        speed_variance=-0.05,
        spin_axis_offset=-25 - rng.random() * 15,
        launch_direction_offset=-5 - rng.random() * 5,
        is_miss=True,
        is_disaster=True,
    )


def _miss(rng: random.Random) -> ShotVariability:
    # Mishits lose distance
    return ShotVariability(
        speed_variance=-abs(rng.gauss(0, 1) * 0.04) - 0.02,
        launch_angle_variance=rng.gauss(0, 1) * 2,
        spin_variance=rng.gauss(0, 1) * 0.10,
        spin_axis_offset=rng.gauss(0, 1) * 6,
        launch_direction_offset=rng.gauss(0, 1) * 3,
        is_miss=True,
    )


def _good(rng: random.Random) -> ShotVariability:
    # Max ~1.5% gain, typically a 0-3% loss
    speed_roll = rng.gauss(0, 1) * 0.015
    return ShotVariability(
        speed_variance=min(speed_roll, 0.02) - 0.005,
        launch_angle_variance=rng.gauss(0, 1) * 0.8,
        spin_variance=rng.gauss(0, 1) * 0.05,
        spin_axis_offset=rng.gauss(0, 1) * 2,
        launch_direction_offset=rng.gauss(0, 1) * 1,
    )
