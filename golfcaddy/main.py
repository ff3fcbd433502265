"""
Golf Caddy physics engine: command-line entry point.

Usage:
    golfcaddy shot --club Driver --power 100 --shape Straight
    golfcaddy shot --club "7 Iron" --wind-speed 15 --wind-dir 90 --seed 7
    golfcaddy putt --feet 20 --slope-y 0.48
    golfcaddy putt --feet 12 --aim 3 --preview
"""

import argparse
import logging
import math
import random
import sys

from golfcaddy.models.club import SHOT_CLUBS, ShotShape
from golfcaddy.models.golfer import Golfer
from golfcaddy.roll import run_putt_simulations, simulate_single_putt
from golfcaddy.shot import simulate_full_shot
from golfcaddy.terrain import HoleData, Slope, TerrainType
from golfcaddy.utils.config import Config
from golfcaddy.utils.constants import FEET_PER_YARD, WORLD_TO_YARDS, YARDS_TO_WORLD

# Putts are played on an open green with the ball in the middle
PUTT_START = (50.0, 50.0)


def setup_logging(verbose: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def run_shot(args):
    """Simulate one full shot and print the launch monitor readout."""
    rng = random.Random(args.seed)
    golfer = Golfer()
    golfer.initialize_history(rng)

    shot = simulate_full_shot(
        args.club, args.power, args.shape,
        golfer_stats=golfer.get_club_stats(args.club),
        terrain=args.terrain,
        wind_speed_mph=args.wind_speed,
        wind_direction_deg=args.wind_dir,
        rng=rng,
    )
    if shot is None:
        print(f"\n❌ Error: unknown club {args.club!r}")
        print(f"   Clubs: {', '.join(SHOT_CLUBS)}")
        sys.exit(1)

    launch, flight, landing = shot.launch, shot.flight, shot.landing
    quality = ("disaster" if shot.variability.is_disaster
               else "miss" if shot.variability.is_miss else "good")

    print(f"\n{'='*60}")
    print(f"  {launch.club_name} @ {args.power:.0f}% ({args.shape}, {quality} strike)")
    print(f"{'='*60}")
    print(f"  Ball Speed:    {launch.ball_speed_mph:.1f} mph")
    print(f"  Launch Angle:  {launch.launch_angle:.1f}°")
    print(f"  Spin:          {launch.spin_rate:.0f} rpm, axis {launch.spin_axis:+.1f}°")
    print(f"  Carry:         {flight.carry_yards:.1f} yd")
    print(f"  Lateral:       {flight.lateral_yards:+.1f} yd "
          f"({'right' if flight.lateral_yards > 0 else 'left'})")
    print(f"  Apex:          {flight.max_height_yards:.1f} yd at {flight.apex_time:.2f}s")
    print(f"  Landing:       {flight.landing_angle:.1f}° at {flight.landing_speed_mph:.1f} mph")
    print(f"  Roll:          {landing.roll_yards:+.1f} yd"
          f"{' (checks up)' if landing.checks_up else ''}"
          f"{' (spins back)' if landing.spins_back else ''}")
    print(f"  Total:         {shot.result.total_yards:.1f} yd")
    print(f"{'='*60}")


def run_putt(args):
    """Simulate a putt (or a dispersion preview) on a planar green."""
    config = Config()
    rng = random.Random(args.seed)

    hole_feet = args.hole_feet if args.hole_feet is not None else args.feet
    hole_units = hole_feet / FEET_PER_YARD * YARDS_TO_WORLD
    aim_rad = math.radians(args.aim)
    hole = (PUTT_START[0] + math.sin(aim_rad) * hole_units,
            PUTT_START[1] - math.cos(aim_rad) * hole_units)

    green = HoleData(
        hole=hole,
        default_terrain=TerrainType.GREEN,
        slope=Slope(args.slope_x, args.slope_y),
    )
    geometry = config.get_hole_geometry()
    green_speed = config.get_green_speed()

    if args.preview:
        results = run_putt_simulations(
            PUTT_START, args.aim, args.feet, green,
            golfer=Golfer(pressure=args.pressure),
            geometry=geometry, green_speed=green_speed, rng=rng,
        )
    else:
        results = [simulate_single_putt(PUTT_START, args.aim, args.feet, green,
                                        geometry, green_speed, rng)]

    print(f"\n{'='*60}")
    print(f"  Putt: {args.feet:.0f} ft, hole at {hole_feet:.0f} ft, "
          f"slope ({args.slope_x:+.2f}, {args.slope_y:+.2f}), stimp {green_speed:.0f}")
    print(f"{'='*60}")
    for result in results:
        miss_feet = math.dist(result.final_position, hole) * WORLD_TO_YARDS * FEET_PER_YARD
        label = "center" if result.is_center else f"{result.angle_offset:+.2f}°"
        outcome = "HOLED" if result.holed else f"{miss_feet:.1f} ft from hole"
        print(f"  {label:>8}: rolled {result.distance_feet:5.1f} ft, {outcome} "
              f"({result.duration_ms:.0f} ms)")
    print(f"{'='*60}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Golf Caddy ball-flight and roll physics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Full shot
    shot_parser = subparsers.add_parser("shot", help="Simulate a full shot")
    shot_parser.add_argument(
        "--club", type=str, default="7 Iron",
        help="Club to hit (default: 7 Iron)",
    )
    shot_parser.add_argument(
        "--power", type=float, default=100.0,
        help="Swing power 0-100 (default: 100)",
    )
    shot_parser.add_argument(
        "--shape", type=str, default=ShotShape.STRAIGHT.value,
        choices=[s.value for s in ShotShape],
        help="Intended shot shape (default: Straight)",
    )
    shot_parser.add_argument(
        "--terrain", type=str, default=TerrainType.FAIRWAY.value,
        choices=[t.value for t in TerrainType],
        help="Landing surface (default: fairway)",
    )
    shot_parser.add_argument(
        "--wind-speed", type=float, default=0.0,
        help="Wind speed in mph (default: 0)",
    )
    shot_parser.add_argument(
        "--wind-dir", type=float, default=0.0,
        help="Direction the wind comes from: 0=head, 90=from right, 180=tail",
    )
    shot_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    shot_parser.set_defaults(func=run_shot)

    # Putt
    putt_parser = subparsers.add_parser("putt", help="Simulate a putt")
    putt_parser.add_argument(
        "--feet", type=float, default=20.0,
        help="Putt strength: roll distance on a flat green (default: 20)",
    )
    putt_parser.add_argument(
        "--hole-feet", type=float, default=None,
        help="Distance to the hole along the aim line (default: --feet)",
    )
    putt_parser.add_argument(
        "--aim", type=float, default=0.0,
        help="Aim angle in degrees (default: 0)",
    )
    putt_parser.add_argument("--slope-x", type=float, default=0.0,
                             help="Green slope in x (feet per world unit, + = uphill right)")
    putt_parser.add_argument("--slope-y", type=float, default=0.0,
                             help="Green slope in y (feet per world unit)")
    putt_parser.add_argument(
        "--preview", action="store_true",
        help="Show the five-line dispersion preview",
    )
    putt_parser.add_argument(
        "--pressure", type=float, default=30.0,
        help="Golfer pressure 0-100 for the preview (default: 30)",
    )
    putt_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    putt_parser.set_defaults(func=run_putt)

    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
