"""
Physics constants, unit conversions, and static lookup tables for Golf Caddy.

Club launch profiles are calibrated for a scratch golfer so that a full
swing with zero variability in calm air carries the yardage-book distance.
Terrain tables drive the landing model and post-landing roll-out.
"""

import math

# =============================================================================
# Ball Physics Constants
# =============================================================================

GRAVITY = 9.81                 # m/s²
AIR_DENSITY = 1.225            # kg/m³ at sea level
KINEMATIC_VISCOSITY = 1.48e-5  # m²/s for air at ~15°C

# Golf ball properties
BALL_MASS = 0.0459             # kg (45.9 g)
BALL_RADIUS = 0.02135          # m (42.7 mm diameter)
BALL_AREA = math.pi * BALL_RADIUS ** 2  # Cross-sectional area (m²)

# Unit conversions
MPH_TO_MS = 0.44704            # mph → m/s
MS_TO_MPH = 2.23694            # m/s → mph
YARDS_TO_METERS = 0.9144       # yards → m
METERS_TO_YARDS = 1.09361      # m → yards
RPM_TO_RAD_S = math.pi / 30    # RPM → rad/s

# World coordinates: 1 world unit = 4 yards, 1 yard = 3 feet
WORLD_TO_YARDS = 4.0
YARDS_TO_WORLD = 1.0 / WORLD_TO_YARDS
FEET_PER_YARD = 3.0

# =============================================================================
# Flight Integration
# =============================================================================

FLIGHT_DT = 0.001              # s, explicit Euler step
FLIGHT_SAMPLE_INTERVAL = 10    # store every Nth step
FLIGHT_MAX_TIME = 15.0         # s
FLIGHT_START_HEIGHT = 0.01     # m, ball starts just above the turf
MIN_RELATIVE_SPEED = 0.1       # m/s, below this the ball is considered stopped

SPIN_DECAY_RATE = 0.015        # 1.5% per second
SIDESPIN_LIFT_FACTOR = 0.7     # Sidespin produces less lift than backspin
LIFT_SPIN_FACTOR_CAP = 0.3     # Spin factor is clamped before the CL fit
DRAG_CRISIS_RE = 1e5           # Reynolds number breakpoint for the CD fit

# Wind / sidespin coupling
WIND_CURVE_REFERENCE_MPH = 15.0
WIND_CURVE_MAX_AMPLIFY = 0.40  # Crosswind with the curve
WIND_CURVE_MAX_CANCEL = 0.60   # Crosswind against the curve

# =============================================================================
# Club Data
# =============================================================================

# Launch parameters for a scratch golfer at full power.
# Ball speeds tuned to carry the yardage-book distances in calm air:
#   Driver 280, 3 Wood 250, 5 Wood 230, 4 Iron 210, 5 Iron 195, 6 Iron 180,
#   7 Iron 165, 8 Iron 150, 9 Iron 135, PW 120, GW 105, SW 90, LW 70
# Launch angles give a ~28-32 yard apex (PGA Tour average).
CLUB_PHYSICS = {
    "Driver": {"loft": 10.5, "launch_angle": 10.9, "spin_rate": 2686, "ball_speed": 139, "smash_factor": 1.48},
    "3 Wood": {"loft": 15.0, "launch_angle": 11.5, "spin_rate": 3655, "ball_speed": 119, "smash_factor": 1.46},
    "5 Wood": {"loft": 18.0, "launch_angle": 13.0, "spin_rate": 4350, "ball_speed": 110, "smash_factor": 1.44},
    "4 Iron": {"loft": 21.0, "launch_angle": 14.5, "spin_rate": 4836, "ball_speed": 104, "smash_factor": 1.42},
    "5 Iron": {"loft": 24.0, "launch_angle": 15.5, "spin_rate": 5361, "ball_speed": 100, "smash_factor": 1.40},
    "6 Iron": {"loft": 27.0, "launch_angle": 17.0, "spin_rate": 6231, "ball_speed": 96, "smash_factor": 1.38},
    "7 Iron": {"loft": 31.0, "launch_angle": 18.5, "spin_rate": 7097, "ball_speed": 92, "smash_factor": 1.36},
    "8 Iron": {"loft": 35.0, "launch_angle": 20.0, "spin_rate": 7998, "ball_speed": 88, "smash_factor": 1.34},
    "9 Iron": {"loft": 39.0, "launch_angle": 22.0, "spin_rate": 8647, "ball_speed": 84, "smash_factor": 1.32},
    "PW":     {"loft": 44.0, "launch_angle": 25.0, "spin_rate": 9304, "ball_speed": 79, "smash_factor": 1.30},
    "GW":     {"loft": 50.0, "launch_angle": 28.0, "spin_rate": 9800, "ball_speed": 74, "smash_factor": 1.27},
    "SW":     {"loft": 54.0, "launch_angle": 31.0, "spin_rate": 10200, "ball_speed": 70, "smash_factor": 1.24},
    "LW":     {"loft": 58.0, "launch_angle": 34.0, "spin_rate": 10500, "ball_speed": 64, "smash_factor": 1.20},
}

# Scratch golfer carry distances (yards) - the "intended" yardage at 100% power
CLUB_CARRY_YARDS = {
    "Driver": 280,
    "3 Wood": 250,
    "5 Wood": 230,
    "4 Iron": 210,
    "5 Iron": 195,
    "6 Iron": 180,
    "7 Iron": 165,
    "8 Iron": 150,
    "9 Iron": 135,
    "PW": 120,
    "GW": 105,
    "SW": 90,
    "LW": 70,
    "Putter": 0,
}

# Long clubs are harder to hit from bad lies
CLUB_LIE_DIFFICULTY = {
    "Driver": 1.0,
    "3 Wood": 0.9,
    "5 Wood": 0.8,
    "4 Iron": 0.7,
    "5 Iron": 0.6,
    "6 Iron": 0.5,
    "7 Iron": 0.4,
    "8 Iron": 0.3,
    "9 Iron": 0.2,
    "PW": 0.15,
    "GW": 0.1,
    "SW": 0.05,
    "LW": 0.1,
    "Putter": 0.0,
}
DEFAULT_LIE_DIFFICULTY = 0.5

# =============================================================================
# Landing Model
# =============================================================================

# Higher = more friction/stopping power
TERRAIN_FRICTION = {
    "green": 0.95,
    "fairway": 0.7,
    "rough": 0.85,
    "bunker": 0.98,
    "tee": 0.7,
}

# How much spin "grabs" on landing
TERRAIN_SOFTNESS = {
    "green": 0.9,
    "fairway": 0.6,
    "rough": 0.4,
    "bunker": 0.95,
    "tee": 0.6,
}

DEFAULT_FRICTION = 0.7
DEFAULT_SOFTNESS = 0.6
FULL_POWER_LANDING_MPH = 55.0  # Reference landing speed for energy scaling

# =============================================================================
# Rolling / Putting
# =============================================================================

GREEN_SPEED_STIMP = 12         # 11-13 = PGA Tour speed
BASE_ROLLING_RESISTANCE = 0.035
PARALLEL_SLOPE_EFFECT = 0.016  # Uphill/downhill, changes speed
PERP_SLOPE_EFFECT = 0.005      # Cross-slope, produces break

ROLL_DT = 0.016                # s (~60 fps)
PUTT_MAX_TIME = 20.0           # s
ROLL_STOP_SPEED = 0.0003       # world units/s
LOW_SPEED_THRESHOLD = 0.15     # world units/s, friction ramps below this
LOW_SPEED_FRICTION_FLOOR = 0.3 # Fraction of friction left at zero speed
ROLL_SAMPLE_INTERVAL = 2

LIP_OUT_SPEED_RETAINED = 0.6

# Roll-out after landing: (rolling resistance, slope scale) per terrain.
# The green entry is replaced by the stimp-derived putting values at runtime.
ROLLOUT_TERRAIN = {
    "fairway": (0.06, 1.0),
    "tee": (0.06, 1.0),
    "rough": (0.12, 0.8),
    "bunker": (0.5, 0.5),
}
DEFAULT_ROLLOUT = (0.12, 0.8)

# Hole geometry (world units)
HOLE_RADIUS_WORLD = 0.059 / 4  # 4.25" cup = 0.059 yd radius
HOLE_MAX_CAPTURE_SPEED = 0.015
HOLE_LIP_OUT_CHANCE = 0.3
HOLE_EDGE_TOLERANCE = 1.2

# Putter dispersion
PUTTER_BIAS = 0.3              # Positive = tends to miss right
PUTTER_SPREAD = 1.5            # Base spread in degrees

# =============================================================================
# Shot Orchestration
# =============================================================================

SHOT_HISTORY_SIZE = 30
ELEVATION_CARRY_FACTOR = 0.9
TREE_TRUNK_SPEED_RETAINED = 0.20
TREE_FOLIAGE_SPEED_RETAINED = 0.10
TREE_DROP_SAMPLES = 12
TREE_DROP_DURATION = 0.7       # s
