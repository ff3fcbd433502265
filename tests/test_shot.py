"""
Tests for shot orchestration: full shots, placement on the hole, trees,
elevation, hazards and putting through ShotSimulator.

Shots start at (50, 190) on a 100 x 200 hole aiming at 0°, which plays
toward -y.
"""

import math
import random
from unittest.mock import Mock

import pytest

from golfcaddy.errors import ClubNotFoundError, HoleConfigError
from golfcaddy.models.golfer import Golfer
from golfcaddy.shot import (
    ShotSimulator,
    find_tree_hit,
    flight_to_world,
    simulate_full_shot,
)
from golfcaddy.terrain import HoleData, Slope, TerrainType
from golfcaddy.trees import Tree, TreeType
from golfcaddy.utils.config import Config

TEE = (50.0, 190.0)
BOUNDS = (0.0, 0.0, 100.0, 200.0)


def _hole(**kwargs):
    kwargs.setdefault("default_terrain", TerrainType.FAIRWAY)
    return HoleData(hole=(50.0, 10.0), bounds=BOUNDS, **kwargs)


def _simulator(seed=5):
    return ShotSimulator(golfer=Golfer(), rng=random.Random(seed))


class TestSimulateFullShot:

    def test_unknown_club_returns_none(self, rng):
        assert simulate_full_shot("Spoon", 100, "Straight", rng=rng) is None

    def test_same_seed_same_shot(self):
        first = simulate_full_shot("7 Iron", 100, "Straight", rng=random.Random(9))
        second = simulate_full_shot("7 Iron", 100, "Straight", rng=random.Random(9))
        assert first == second

    def test_total_is_carry_plus_roll(self, rng):
        shot = simulate_full_shot("Driver", 100, "Straight", rng=rng)
        assert shot.result.total_yards == pytest.approx(
            shot.flight.carry_yards + shot.landing.roll_yards
        )
        assert shot.result.carry_yards == shot.flight.carry_yards
        assert shot.launch.club_name == "Driver"

    def test_bunker_landing_does_not_roll(self, rng):
        shot = simulate_full_shot("7 Iron", 100, "Straight", terrain="bunker", rng=rng)
        assert shot.landing.roll_yards == 0.0

    def test_accepts_enum_club(self, rng):
        from golfcaddy.models.club import ClubType
        shot = simulate_full_shot(ClubType.PW, 80, "Fade", rng=rng)
        assert shot.launch.club_name == "PW"


class TestFlightToWorld:

    def test_downrange_plays_toward_negative_y(self):
        x, y = flight_to_world((50.0, 50.0), 0.0, 40.0, 0.0)
        assert x == pytest.approx(50.0)
        assert y == pytest.approx(40.0)  # 40 yards = 10 units

    def test_lateral_is_right_of_aim(self):
        x, y = flight_to_world((50.0, 50.0), 0.0, 0.0, 8.0)
        assert x == pytest.approx(52.0)
        assert y == pytest.approx(50.0)

    def test_rotates_with_aim(self):
        x, y = flight_to_world((50.0, 50.0), 90.0, 40.0, 8.0)
        assert x == pytest.approx(60.0)
        assert y == pytest.approx(52.0)


class TestFindTreeHit:

    def test_no_trees(self):
        assert find_tree_hit(((50.0, 50.0, 5.0, 0.1),), _hole()) is None

    def test_trunk_hit_drops_beside_the_tree(self):
        tree = Tree(TreeType.TALL_PINE_1, 50.0, 100.0, height=30.0)
        trajectory = (
            (50.0, 110.0, 3.0, 0.10),
            (50.0, 100.02, 4.0, 0.20),
            (50.0, 90.0, 5.0, 0.30),
        )
        hit = find_tree_hit(trajectory, _hole(trees=[tree]))

        assert hit.hit_type == "trunk"
        assert hit.sample_index == 1
        assert hit.hit_point == (50.0, 100.02)
        # Knocked back toward the side the ball came from, at 20% speed
        assert hit.drop_point[0] == pytest.approx(50.0)
        assert hit.drop_point[1] == pytest.approx(100.02 + 0.5 * 0.2)

    def test_drop_samples_fall_to_the_ground(self):
        tree = Tree(TreeType.DECIDUOUS_1, 50.0, 100.0, height=20.0, canopy_radius=10.0)
        trajectory = ((50.0, 100.5, 15.0, 1.0),)
        hit = find_tree_hit(trajectory, _hole(trees=[tree]))

        assert hit.hit_type == "foliage"
        assert len(hit.drop_samples) == 12
        heights = [sample[2] for sample in hit.drop_samples]
        assert heights == sorted(heights, reverse=True)
        assert heights[-1] == pytest.approx(0.0)
        assert hit.drop_samples[-1][3] == pytest.approx(1.7)
        assert hit.drop_samples[-1][:2] == pytest.approx(hit.drop_point)

    def test_drop_point_clamped_to_bounds(self):
        tree = Tree(TreeType.TALL_PINE_1, 0.0, 100.0, height=30.0)
        trajectory = ((-0.01, 100.0, 3.0, 0.5),)
        hit = find_tree_hit(trajectory, _hole(trees=[tree]))
        assert hit.drop_point[0] == 0.0


class TestShotSimulatorHit:

    def test_unknown_club_raises_without_recording(self):
        sim = _simulator()
        with pytest.raises(ClubNotFoundError):
            sim.hit("Spoon", 100, "Straight", 0.0, TEE, _hole())
        assert sim.golfer.shot_history == {}
        assert sim.current_lie is None

    def test_invalid_hole_config_stops_the_shot(self):
        Config().set("hole_lip_out_chance", 1.5)
        sim = _simulator()
        state = sim.rng.getstate()

        with pytest.raises(HoleConfigError):
            sim.hit("7 Iron", 100, "Straight", 0.0, TEE, _hole())

        assert sim.rng.getstate() == state
        assert sim.current_lie is None
        assert sim.golfer.shot_history == {}

    def test_invalid_hole_config_stops_shots_that_never_roll(self):
        Config().set("hole_capture_radius", 0)
        sim = _simulator()
        with pytest.raises(HoleConfigError):
            sim.hit("7 Iron", 100, "Straight", 0.0, TEE,
                    _hole(default_terrain=TerrainType.WATER))
        assert sim.golfer.shot_history == {}

    def test_shot_lands_downrange_and_is_recorded(self):
        sim = _simulator()
        outcome = sim.hit("7 Iron", 100, "Straight", 0.0, TEE, _hole())

        assert outcome.landing_point[1] < TEE[1]
        assert outcome.record.carry_yards == pytest.approx(
            (TEE[1] - outcome.landing_point[1]) * 4, rel=0.2
        )
        assert outcome.record.intended_yards == pytest.approx(165)
        assert outcome.record.distance_error == pytest.approx(
            outcome.record.carry_yards - 165
        )
        assert len(sim.golfer.shot_history["7 Iron"]) == 1
        assert sim.current_lie is None

    def test_world_trajectory_starts_at_the_ball(self):
        outcome = _simulator().hit("PW", 100, "Straight", 0.0, TEE, _hole())
        x, y, height, t = outcome.world_trajectory[0]
        assert (x, y) == pytest.approx(TEE)
        assert height == pytest.approx(0.0)
        assert t == pytest.approx(0.0)

    def test_final_position_stays_in_bounds(self):
        outcome = _simulator().hit("Driver", 100, "Straight", 0.0, TEE, _hole())
        x, y = outcome.final_position
        assert BOUNDS[0] <= x <= BOUNDS[2]
        assert BOUNDS[1] <= y <= BOUNDS[3]

    def test_total_adds_roll_to_carry(self):
        outcome = _simulator().hit("Driver", 100, "Straight", 0.0, TEE, _hole())
        record = outcome.record
        assert record.actual_yards == pytest.approx(record.carry_yards + record.roll_yards)
        assert record.roll_yards == pytest.approx(
            math.copysign(outcome.roll.distance_yards, outcome.landing.roll_yards)
        )

    def test_water_stops_the_ball(self):
        outcome = _simulator().hit("7 Iron", 100, "Straight", 0.0, TEE,
                                   _hole(default_terrain=TerrainType.WATER))
        assert outcome.roll is None
        assert outcome.final_position == outcome.landing_point
        assert outcome.record.roll_yards == 0.0

    def test_uphill_shot_carries_shorter(self):
        flat = _simulator().hit("7 Iron", 100, "Straight", 0.0, TEE, _hole())
        # Elevation rises 1 ft per unit toward -y
        uphill = _simulator().hit("7 Iron", 100, "Straight", 0.0, TEE,
                                  _hole(slope=Slope(0.0, -1.0)))

        rise_feet = TEE[1] - flat.landing_point[1]
        expected_loss = rise_feet / 3 * 0.9
        assert flat.record.carry_yards - uphill.record.carry_yards == pytest.approx(
            expected_loss, rel=1e-6
        )
        assert uphill.landing_point[1] == pytest.approx(
            flat.landing_point[1] + expected_loss / 4
        )

    def test_tree_stops_the_flight(self):
        clear = _simulator().hit("7 Iron", 100, "Straight", 0.0, TEE, _hole())
        apex = max(clear.world_trajectory, key=lambda sample: sample[2])
        tree = Tree(TreeType.BUSHY_PINE_2, apex[0], apex[1],
                    height=apex[2] * 2, canopy_radius=20.0)

        sim = _simulator()
        outcome = sim.hit("7 Iron", 100, "Straight", 0.0, TEE, _hole(trees=[tree]))

        assert outcome.tree_hit is not None
        assert outcome.tree_hit.hit_type == "foliage"
        assert outcome.record.hit_tree
        assert outcome.landing is None
        assert outcome.roll is None
        assert outcome.final_position == outcome.tree_hit.drop_point
        assert len(outcome.world_trajectory) == outcome.tree_hit.sample_index + 1
        assert len(sim.golfer.shot_history["7 Iron"]) == 1

    def test_lie_is_sampled_once_per_shot(self):
        sim = _simulator()
        lie = sim.update_lie(_hole(), TEE)
        assert sim.current_lie is lie
        outcome = sim.hit("7 Iron", 100, "Straight", 0.0, TEE, _hole())
        assert outcome.record.lie_type == lie.type.value


class TestShotSimulatorPutt:

    def test_putter_plays_a_putt(self, flat_green):
        sim = _simulator()
        outcome = sim.hit("Putter", 0, "Straight", 0.0, (50.0, 50.0), flat_green,
                          putt_distance_feet=10)

        assert outcome.record.is_putt
        assert outcome.record.club_name == "Putter"
        assert outcome.flight is None
        assert outcome.record.actual_yards * 3 == pytest.approx(10, rel=0.1)

    def test_putts_are_not_recorded(self, flat_green):
        sim = _simulator()
        sim.putt((50.0, 50.0), 0.0, 10, flat_green)
        assert sim.golfer.shot_history == {}

    def test_invalid_hole_config_stops_the_putt(self, flat_green):
        Config().set("hole_lip_out_chance", 1.5)
        sim = _simulator()
        state = sim.rng.getstate()
        with pytest.raises(HoleConfigError):
            sim.hit("Putter", 0, "Straight", 0.0, (50.0, 50.0), flat_green,
                    putt_distance_feet=10)
        assert sim.rng.getstate() == state

    def test_holed_putt(self, flat_green, make_green):
        rest = _simulator().putt((50.0, 50.0), 0.0, 10, flat_green).final_position
        rng = Mock()
        rng.random.return_value = 0.9  # Never lips out
        sim = ShotSimulator(golfer=Golfer(), rng=rng)

        outcome = sim.putt((50.0, 50.0), 0.0, 10, make_green(hole=rest))
        assert outcome.holed
        assert outcome.record.holed
        assert outcome.final_position == rest

    def test_preview_fans_five_lines(self, flat_green):
        results = _simulator().preview_putts((50.0, 50.0), 0.0, 10, flat_green)
        assert len(results) == 5
        assert results[0].is_center
        assert not any(r.is_center for r in results[1:])


class TestConfiguredSimulator:

    def test_golfer_defaults_come_from_config(self):
        config = Config()
        config.set("putter_spread", 2.5)
        sim = ShotSimulator(config=config)
        assert sim.golfer.putter_spread == 2.5

    def test_green_speed_from_config(self, flat_green):
        Config().set("green_speed", 9)
        slow = _simulator().putt((50.0, 50.0), 0.0, 20, flat_green)
        assert slow.record.actual_yards * 3 == pytest.approx(20, rel=0.1)
