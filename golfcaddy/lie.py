"""
Ball lie classification and lie penalties.

A lie is sampled from the terrain under the ball before each shot. Its
effects reduce ball speed and spin, add launch angle, widen direction
noise, and raise the miss chance. Long clubs suffer more from bad lies.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from golfcaddy.models.shot import LaunchConditions
from golfcaddy.terrain import Slope, TerrainType
from golfcaddy.utils.constants import CLUB_LIE_DIFFICULTY, DEFAULT_LIE_DIFFICULTY

logger = logging.getLogger(__name__)


class LieType(str, Enum):
    PERFECT = "perfect"                 # Tee or ball sitting up
    GOOD = "good"                       # Clean lie, ball visible
    SITTING_DOWN = "sitting"            # Nestled in grass
    BURIED = "buried"                   # Deep in grass
    BUNKER_CLEAN = "bunker_clean"       # On top of the sand
    BUNKER_PLUGGED = "bunker_plugged"   # Fried egg
    GREEN = "green"


@dataclass(frozen=True)
class LieEffects:
    """Penalties a lie applies to a shot.

    Attributes:
        distance_multiplier: Fraction of ball speed kept (before club difficulty).
        spin_multiplier: Fraction of spin kept.
        accuracy_penalty: Scale of extra launch-direction noise (degrees).
        launch_angle_adjust: Degrees added to launch angle.
        miss_chance_increase: Added to the golfer's miss rate.
        curve_adjust: Degrees added to the spin axis.
        random_curve: Ball is muddy; curve and start line are unpredictable.
    """
    distance_multiplier: float = 1.0
    spin_multiplier: float = 1.0
    accuracy_penalty: float = 0.0
    launch_angle_adjust: float = 0.0
    miss_chance_increase: float = 0.0
    curve_adjust: float = 0.0
    random_curve: bool = False


@dataclass(frozen=True)
class LieInfo:
    name: str
    description: str
    effects: LieEffects


@dataclass(frozen=True)
class Lie:
    type: LieType
    info: LieInfo

    @property
    def effects(self) -> LieEffects:
        return self.info.effects


LIE_DATA = {
    LieType.PERFECT: LieInfo("PL", "Ball sitting up perfectly - full contact", LieEffects()),
    LieType.GOOD: LieInfo("FL", "Ball visible, clean contact expected", LieEffects(
        distance_multiplier=0.95, spin_multiplier=0.9, accuracy_penalty=2,
        miss_chance_increase=0.03)),
    LieType.SITTING_DOWN: LieInfo("RL", "Ball nestled in grass - some interference", LieEffects(
        distance_multiplier=0.85, spin_multiplier=0.7, accuracy_penalty=5,
        launch_angle_adjust=2, miss_chance_increase=0.08)),
    LieType.BURIED: LieInfo("BL", "Ball deep in grass - wedge recommended", LieEffects(
        distance_multiplier=0.6, spin_multiplier=0.5, accuracy_penalty=10,
        launch_angle_adjust=4, miss_chance_increase=0.18)),
    LieType.BUNKER_CLEAN: LieInfo("SL", "Ball sitting on top of sand", LieEffects(
        distance_multiplier=0.85, spin_multiplier=1.1, accuracy_penalty=5,
        launch_angle_adjust=2, miss_chance_increase=0.1)),
    LieType.BUNKER_PLUGGED: LieInfo("PG", "Ball buried in sand - dig it out", LieEffects(
        distance_multiplier=0.55, spin_multiplier=0.3, accuracy_penalty=12,
        launch_angle_adjust=5, miss_chance_increase=0.22)),
    LieType.GREEN: LieInfo("GR", "Ball on the putting surface", LieEffects()),
}


def make_lie(lie_type: LieType) -> Lie:
    return Lie(lie_type, LIE_DATA[lie_type])


def determine_lie(terrain: TerrainType | str, slope: Optional[Slope] = None,
                  rng: Optional[random.Random] = None) -> Lie:
    """Sample the lie for a ball resting on the given terrain.

    Slope is accepted for interface compatibility and does not change the
    distribution.
    """
    rng = rng or random.Random()
    terrain = TerrainType(terrain)
    roll = rng.random()

    if terrain == TerrainType.TEE:
        lie_type = LieType.PERFECT
    elif terrain == TerrainType.FAIRWAY:
        lie_type = LieType.PERFECT if roll < 0.7 else LieType.GOOD
    elif terrain == TerrainType.ROUGH:
        if roll < 0.25:
            lie_type = LieType.GOOD
        elif roll < 0.70:
            lie_type = LieType.SITTING_DOWN
        else:
            lie_type = LieType.BURIED
    elif terrain == TerrainType.BUNKER:
        lie_type = LieType.BUNKER_CLEAN if roll < 0.6 else LieType.BUNKER_PLUGGED
    elif terrain == TerrainType.GREEN:
        lie_type = LieType.GREEN
    else:
        lie_type = LieType.SITTING_DOWN

    return make_lie(lie_type)


def get_club_lie_difficulty(club_name: str) -> float:
    return CLUB_LIE_DIFFICULTY.get(club_name, DEFAULT_LIE_DIFFICULTY)


def get_lie_miss_chance(lie: Optional[Lie], club_name: str) -> float:
    """Extra miss probability from the lie, worse with long clubs."""
    if lie is None:
        return 0.0
    difficulty = get_club_lie_difficulty(club_name)
    return lie.effects.miss_chance_increase * (1 + difficulty * 0.5)


def apply_lie_to_launch(launch: LaunchConditions, lie: Optional[Lie],
                        club_name: str,
                        rng: Optional[random.Random] = None) -> LaunchConditions:
    """Return launch conditions with the lie's penalties applied."""
    if lie is None:
        return launch

    rng = rng or random.Random()
    effects = lie.effects
    difficulty = get_club_lie_difficulty(club_name)

    # Distance penalty grows with club length
    dist_penalty = (1 - effects.distance_multiplier) * (1 + difficulty * 0.3)
    speed_scale = 1 - dist_penalty

    spin_axis = launch.spin_axis + effects.curve_adjust
    direction = launch.launch_direction

    if effects.random_curve:
        spin_axis += (rng.random() - 0.5) * 20
        direction += (rng.random() - 0.5) * 8

    if effects.accuracy_penalty > 0:
        direction += rng.gauss(0, 1) * (effects.accuracy_penalty * 0.3)

    logger.debug(
        f"Lie {lie.info.name}: speed x{speed_scale:.2f}, "
        f"spin x{effects.spin_multiplier:.2f}, "
        f"launch {effects.launch_angle_adjust:+.1f}°"
    )

    return replace(
        launch,
        ball_speed=launch.ball_speed * speed_scale,
        ball_speed_mph=launch.ball_speed_mph * speed_scale,
        spin_rate=launch.spin_rate * effects.spin_multiplier,
        launch_angle=launch.launch_angle + effects.launch_angle_adjust,
        launch_direction=direction,
        spin_axis=spin_axis,
    )
