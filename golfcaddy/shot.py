"""
Shot orchestration for Golf Caddy.

Resolves one shot end to end:
  lie → variability → launch → lie penalties → flight → (tree check)
  → elevation adjustment → landing → roll-out → statistics record

simulate_full_shot() is the stateless core for callers that manage their
own golfer and hole. ShotSimulator wraps it with golfer history, terrain
lookups, trees and putting on a concrete hole.
"""

import logging
import math
import random
from concurrent.futures import Executor
from typing import Optional

from golfcaddy.ball_flight import generate_launch_conditions, simulate_trajectory
from golfcaddy.errors import ClubNotFoundError
from golfcaddy.landing import calculate_landing_behavior
from golfcaddy.lie import Lie, apply_lie_to_launch, determine_lie
from golfcaddy.models.club import ClubType, ShotShape, get_club_profile, is_putter
from golfcaddy.models.golfer import Golfer, GolferClubStats
from golfcaddy.models.putt import HoleGeometry, PuttResult
from golfcaddy.models.shot import (
    FlightResult,
    FullShot,
    LaunchConditions,
    ShotOutcome,
    ShotRecord,
    ShotSummary,
    ShotVariability,
    TrajectorySample,
    TreeHit,
    WorldSample,
    classify_shot_shape,
)
from golfcaddy.roll import run_putt_simulations, simulate_roll_out, simulate_single_putt
from golfcaddy.terrain import (
    HoleData,
    TerrainType,
    get_elevation_change,
    get_slope_at,
    get_terrain_at,
)
from golfcaddy.trees import check_tree_collision
from golfcaddy.variability import generate_shot_variability
from golfcaddy.utils.config import Config
from golfcaddy.utils.constants import (
    ELEVATION_CARRY_FACTOR,
    FEET_PER_YARD,
    TREE_DROP_DURATION,
    TREE_DROP_SAMPLES,
    TREE_FOLIAGE_SPEED_RETAINED,
    TREE_TRUNK_SPEED_RETAINED,
    WORLD_TO_YARDS,
    YARDS_TO_WORLD,
)

logger = logging.getLogger(__name__)

DEFAULT_PUTT_FEET = 30.0

# The ball stays where it lands on these
NO_ROLL_TERRAIN = (TerrainType.WATER, TerrainType.OUT_OF_BOUNDS)

FlownShot = tuple[ShotVariability, LaunchConditions, FlightResult]


def simulate_full_shot(
    club: ClubType | str,
    power: float,
    shape: ShotShape | str,
    golfer_stats: Optional[GolferClubStats] = None,
    terrain: TerrainType | str = TerrainType.FAIRWAY,
    wind_speed_mph: float = 0.0,
    wind_direction_deg: float = 0.0,
    lie: Optional[Lie] = None,
    rng: Optional[random.Random] = None,
) -> Optional[FullShot]:
    """Simulate a complete shot from club selection to landing.

    Args:
        club: Club name.
        power: Swing power, 0-100.
        shape: Intended shape.
        golfer_stats: The golfer's statistics for this club.
        terrain: Surface the ball lands on.
        wind_speed_mph: Wind speed.
        wind_direction_deg: Direction the wind comes from, relative to the
                            target line (0 = headwind).
        lie: Lie the shot is played from.
        rng: Random source.

    Returns:
        FullShot, or None if the club has no launch profile.
    """
    rng = rng or random.Random()
    club_name = club.value if isinstance(club, ClubType) else str(club)

    launched = _fly(club_name, power, shape, golfer_stats or GolferClubStats(),
                    wind_speed_mph, wind_direction_deg, lie, rng)
    if launched is None:
        return None
    variability, launch, flight = launched
    landing = calculate_landing_behavior(flight, terrain, lie, rng)

    result = ShotSummary(
        carry_yards=flight.carry_yards,
        total_yards=flight.carry_yards + landing.roll_yards,
        lateral_yards=flight.lateral_yards,
        max_height_yards=flight.max_height_yards,
        flight_time=flight.flight_time,
        landing_angle=flight.landing_angle,
    )
    return FullShot(launch, flight, landing, result, variability)


def _fly(club_name: str, power: float, shape: ShotShape | str,
         stats: GolferClubStats, wind_speed_mph: float, wind_direction_deg: float,
         lie: Optional[Lie], rng: random.Random,
         ) -> Optional[FlownShot]:
    variability = generate_shot_variability(stats, club_name, lie, rng)
    launch = generate_launch_conditions(club_name, power, shape, variability, rng)
    if launch is None:
        return None
    launch = apply_lie_to_launch(launch, lie, club_name, rng)

    # Wind is given relative to the target line; the flight frame follows
    # the start direction.
    flight_wind_dir = (wind_direction_deg - launch.launch_direction) % 360
    flight = simulate_trajectory(launch, wind_speed_mph, flight_wind_dir)
    return variability, launch, flight


def flight_to_world(start: tuple[float, float], aim_angle: float,
                    downrange_yards: float, lateral_yards: float) -> tuple[float, float]:
    """Place a (downrange, lateral) offset in yards on the hole.

    Aim 0 plays toward -y; lateral is positive to the right of the aim line.
    """
    aim_rad = math.radians(aim_angle)
    down = downrange_yards * YARDS_TO_WORLD
    side = lateral_yards * YARDS_TO_WORLD
    return (
        start[0] + math.sin(aim_rad) * down + math.cos(aim_rad) * side,
        start[1] - math.cos(aim_rad) * down + math.sin(aim_rad) * side,
    )


def trajectory_to_world(start: tuple[float, float], aim_angle: float,
                        trajectory: tuple[TrajectorySample, ...]) -> tuple[WorldSample, ...]:
    """Convert flight samples to (x, y, height, t) on the hole."""
    samples = []
    for point in trajectory:
        x, y = flight_to_world(start, aim_angle, point.z, point.x)
        samples.append((x, y, point.y, point.t))
    return tuple(samples)


def find_tree_hit(world_trajectory: tuple[WorldSample, ...],
                  hole_data: HoleData) -> Optional[TreeHit]:
    """First point where the flight enters a tree, with the resulting drop."""
    if not hole_data.trees:
        return None

    for index, (x, y, height, t) in enumerate(world_trajectory):
        collision = check_tree_collision(hole_data.trees, x, y, height)
        if collision is None:
            continue

        retained = (TREE_TRUNK_SPEED_RETAINED if collision.hit_type == "trunk"
                    else TREE_FOLIAGE_SPEED_RETAINED)
        drop_x, drop_y = hole_data.clamp(
            x + collision.deflection[0] * retained,
            y + collision.deflection[1] * retained,
        )

        drop = []
        for i in range(1, TREE_DROP_SAMPLES + 1):
            frac = i / TREE_DROP_SAMPLES
            ease = frac * frac  # Falls under gravity
            drop.append((
                x + (drop_x - x) * ease,
                y + (drop_y - y) * ease,
                height * (1 - ease),
                t + frac * TREE_DROP_DURATION,
            ))

        return TreeHit(
            tree_type=collision.tree.type.value,
            hit_type=collision.hit_type,
            sample_index=index,
            hit_point=(x, y),
            hit_height=height,
            drop_point=(drop_x, drop_y),
            drop_samples=tuple(drop),
        )
    return None


class ShotSimulator:
    """Plays shots for one golfer on a hole.

    The golfer's shot history is read to shape each shot and appended to
    once the shot is complete.
    """

    def __init__(self, golfer: Optional[Golfer] = None,
                 config: Optional[Config] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or Config()
        self.golfer = golfer or Golfer(
            putter_bias=self.config.get("putter_bias"),
            putter_spread=self.config.get("putter_spread"),
            history_size=self.config.get("shot_history_size"),
        )
        self.rng = rng or random.Random()
        self.current_lie: Optional[Lie] = None

    def update_lie(self, hole_data: HoleData, position: tuple[float, float]) -> Lie:
        """Sample the lie at a ball position and keep it for the next shot."""
        x, y = position
        terrain = get_terrain_at(hole_data, x, y)
        slope = get_slope_at(hole_data, x, y)
        self.current_lie = determine_lie(terrain, slope, self.rng)
        return self.current_lie

    def get_club_stats(self, club_name: str) -> GolferClubStats:
        return self.golfer.get_club_stats(club_name)

    def hit(
        self,
        club: ClubType | str,
        power: float,
        shape: ShotShape | str,
        aim_angle: float,
        position: tuple[float, float],
        hole_data: HoleData,
        wind_speed_mph: float = 0.0,
        wind_direction_deg: float = 0.0,
        putt_distance_feet: Optional[float] = None,
    ) -> ShotOutcome:
        """Hit a shot from `position`.

        Args:
            club: Club name. A putter plays a putt of putt_distance_feet.
            power: Swing power, 0-100.
            shape: Intended shape.
            aim_angle: Aim in degrees; 0 plays toward -y.
            position: Ball position (world units).
            hole_data: The hole being played.
            wind_speed_mph: Wind speed.
            wind_direction_deg: Wind direction relative to the aim line.
            putt_distance_feet: Putt strength when club is the putter.

        Raises:
            ClubNotFoundError: The club has no launch profile. Raised before
                anything is simulated or recorded.
            HoleConfigError: The configured hole geometry is invalid. Also
                raised before anything is simulated or recorded.
        """
        club_name = club.value if isinstance(club, ClubType) else str(club)
        if is_putter(club_name):
            return self.putt(position, aim_angle, putt_distance_feet or DEFAULT_PUTT_FEET,
                             hole_data)

        profile = get_club_profile(club_name)
        if profile is None:
            logger.error(f"Cannot hit unknown club {club_name!r}")
            raise ClubNotFoundError(club_name)

        # An invalid hole config must stop the shot before anything is drawn
        geometry = self.config.get_hole_geometry()
        green_speed = self.config.get_green_speed()

        if self.current_lie is None:
            self.update_lie(hole_data, position)
        lie = self.current_lie

        shot = _fly(
            club_name, power, shape, self.get_club_stats(club_name),
            wind_speed_mph, wind_direction_deg, lie, self.rng,
        )
        flight = shot[2]
        world_trajectory = trajectory_to_world(position, aim_angle, flight.trajectory)
        intended_yards = profile.carry_yards * (power / 100)

        tree_hit = find_tree_hit(world_trajectory, hole_data)
        if tree_hit is not None:
            logger.warning(f"Ball hit a {tree_hit.tree_type} ({tree_hit.hit_type})")
            outcome = self._tree_outcome(shot, position, world_trajectory, tree_hit,
                                         intended_yards, lie)
        else:
            outcome = self._landed_outcome(shot, position, aim_angle, world_trajectory,
                                           hole_data, intended_yards, lie,
                                           geometry, green_speed)

        self.golfer.record_shot(club_name, outcome.record)
        # The ball has moved; the next shot samples a new lie
        self.current_lie = None

        logger.info(
            f"Shot: {club_name}, carry {outcome.record.carry_yards:.0f}y, "
            f"total {outcome.record.actual_yards:.0f}y, lie {lie.info.name}"
        )
        return outcome

    def _landed_outcome(self, shot: FlownShot, start: tuple[float, float],
                        aim_angle: float, world_trajectory: tuple[WorldSample, ...],
                        hole_data: HoleData, intended_yards: float,
                        lie: Lie, geometry: HoleGeometry,
                        green_speed: float) -> ShotOutcome:
        variability, launch, flight = shot
        land = flight_to_world(start, aim_angle, flight.carry_yards, flight.lateral_yards)

        # Uphill shots land short, downhill shots run long
        elevation_change_yards = get_elevation_change(
            hole_data, start[0], start[1], land[0], land[1]
        ) / FEET_PER_YARD
        elevation_adjust = elevation_change_yards * ELEVATION_CARRY_FACTOR
        land = flight_to_world(land, aim_angle, -elevation_adjust, 0.0)
        land = hole_data.clamp(*land)

        land_terrain = get_terrain_at(hole_data, *land)
        landing = calculate_landing_behavior(flight, land_terrain, lie, self.rng)

        roll = None
        final = land
        roll_yards = 0.0
        if land_terrain not in NO_ROLL_TERRAIN:
            direction = (land[0] - start[0], land[1] - start[1])
            roll = simulate_roll_out(
                land, direction, landing.roll_yards, hole_data, land_terrain,
                geometry=geometry,
                green_speed=green_speed,
                rng=self.rng,
            )
            final = hole_data.clamp(*roll.final_position)
            roll_yards = math.copysign(roll.distance_yards, landing.roll_yards)
            if roll.holed:
                logger.info(f"Holed out from {intended_yards:.0f}y!")

        actual_carry = flight.carry_yards - elevation_adjust
        record = self._record(shot, intended_yards, actual_carry,
                              actual_carry + roll_yards, lie, final,
                              holed=roll is not None and roll.holed,
                              roll_yards=roll_yards,
                              checks_up=landing.checks_up,
                              spins_back=landing.spins_back)

        return ShotOutcome(
            record=record,
            start=start,
            final_position=final,
            launch=launch,
            variability=variability,
            flight=flight,
            world_trajectory=world_trajectory,
            landing_point=land,
            landing=landing,
            roll=roll,
        )

    def _tree_outcome(self, shot: FlownShot, start: tuple[float, float],
                      world_trajectory: tuple[WorldSample, ...], tree_hit: TreeHit,
                      intended_yards: float, lie: Lie) -> ShotOutcome:
        variability, launch, flight = shot
        drop = tree_hit.drop_point
        actual_yards = math.hypot(drop[0] - start[0], drop[1] - start[1]) * WORLD_TO_YARDS
        record = self._record(shot, intended_yards, flight.carry_yards,
                              actual_yards, lie, drop, hit_tree=True)
        return ShotOutcome(
            record=record,
            start=start,
            final_position=drop,
            launch=launch,
            variability=variability,
            flight=flight,
            world_trajectory=world_trajectory[:tree_hit.sample_index + 1],
            tree_hit=tree_hit,
        )

    @staticmethod
    def _record(shot: FlownShot, intended_yards: float,
                carry_yards: float, actual_yards: float, lie: Lie,
                final_position: tuple[float, float], **kwargs) -> ShotRecord:
        variability, launch, flight = shot
        return ShotRecord(
            club_name=launch.club_name,
            intended_yards=intended_yards,
            actual_yards=actual_yards,
            # Carry drives dispersion, not total
            distance_error=carry_yards - intended_yards,
            direction_error=flight.lateral_yards,
            is_miss=variability.is_miss or variability.is_disaster,
            lie_type=lie.type.value,
            shot_shape=classify_shot_shape(launch),
            carry_yards=carry_yards,
            max_height_yards=flight.max_height_yards,
            flight_time=flight.flight_time,
            landing_angle=flight.landing_angle,
            final_position=final_position,
            **kwargs,
        )

    def putt(self, position: tuple[float, float], aim_angle: float,
             distance_feet: float, hole_data: HoleData) -> ShotOutcome:
        """Putt from `position`. Putts do not enter the shot history."""
        geometry = self.config.get_hole_geometry()
        green_speed = self.config.get_green_speed()

        result = simulate_single_putt(
            position, aim_angle, distance_feet, hole_data,
            geometry=geometry,
            green_speed=green_speed,
            rng=self.rng,
        )
        actual_feet = result.distance_feet
        record = ShotRecord(
            club_name=ClubType.PUTTER.value,
            intended_yards=distance_feet / FEET_PER_YARD,
            actual_yards=actual_feet / FEET_PER_YARD,
            distance_error=actual_feet - distance_feet,
            direction_error=0.0,
            is_miss=False,
            is_putt=True,
            holed=result.holed,
            lie_type="green",
            final_position=result.final_position,
        )
        self.current_lie = None

        logger.info(
            f"Putt: {distance_feet:.0f} ft intended, rolled {actual_feet:.1f} ft"
            f"{' (holed)' if result.holed else ''}"
        )
        return ShotOutcome(
            record=record,
            start=tuple(position),
            final_position=result.final_position,
            roll=result.roll,
        )

    def preview_putts(self, position: tuple[float, float], aim_angle: float,
                      distance_feet: float, hole_data: HoleData,
                      executor: Optional[Executor] = None) -> list[PuttResult]:
        """Dispersion preview: a fan of putts around the aim line."""
        return run_putt_simulations(
            position, aim_angle, distance_feet, hole_data,
            golfer=self.golfer,
            geometry=self.config.get_hole_geometry(),
            green_speed=self.config.get_green_speed(),
            rng=self.rng,
            executor=executor,
        )
