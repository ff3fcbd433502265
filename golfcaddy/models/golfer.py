"""
Golfer model for Golf Caddy.

Holds the per-club shot history (a bounded window of recent results)
that drives shot variability, plus the few golfer attributes the
physics engine consumes (miss tendencies, putting dispersion, pressure).
"""

import random
from collections import deque
from dataclasses import dataclass, field
from statistics import mean, pstdev
from typing import Optional

from golfcaddy.models.club import SHOT_CLUBS, get_club_profile
from golfcaddy.models.shot import ShotRecord
from golfcaddy.utils.constants import PUTTER_BIAS, PUTTER_SPREAD, SHOT_HISTORY_SIZE

# Relative likelihood of each miss type
MISS_PATTERN = {
    "push_fade": 0.35,
    "pull_draw": 0.25,
    "push": 0.15,
    "pull": 0.10,
    "block": 0.10,
    "hook": 0.05,
}

# How far outside normal dispersion each miss lands: (x, y) multipliers
MISS_OFFSETS = {
    "push_fade": (1.5, -0.8),   # Right and short
    "pull_draw": (-1.5, 0.6),   # Left and long
    "push": (1.8, 0.0),
    "pull": (-1.8, 0.0),
    "block": (2.2, -1.0),       # Way right, short
    "hook": (-2.0, 0.5),        # Hard left, slightly long
}


@dataclass
class HistoryShot:
    """One remembered shot.

    Attributes:
        x: Yards off target laterally (positive = right).
        y: Yards off target in distance (positive = long).
        this_round: Shot was hit during the current round.
        miss: Shot was a mishit.
    """
    x: float
    y: float
    this_round: bool = False
    miss: bool = False


@dataclass(frozen=True)
class GolferClubStats:
    """Dispersion statistics for one club, derived from its shot history."""
    dist_avg: float = 0.0
    dir_avg: float = 0.0
    dist_std: float = 5.0
    dir_std: float = 5.0
    miss_rate: float = 0.12
    miss_dist_avg: Optional[float] = None
    miss_dir_avg: Optional[float] = None


def roll_miss_type(miss_pattern: dict[str, float], rng: random.Random) -> str:
    """Pick a miss type with probability proportional to its weight."""
    total = sum(miss_pattern.values())
    roll = rng.random() * total
    for miss_type, weight in miss_pattern.items():
        roll -= weight
        if roll <= 0:
            return miss_type
    return "push"


@dataclass
class Golfer:
    """A golfer and their recent shot history.

    Attributes:
        name: Display name.
        miss_rate: Base miss tendency used to seed the history.
        pressure: Mental pressure 0-100 (widens putting dispersion).
        putter_bias: Putting miss bias (positive = right).
        putter_spread: Base putting spread in degrees.
        miss_pattern: Relative weights of miss types.
        history_size: Shots remembered per club.
        shot_history: Club name -> recent shots, oldest first.
    """
    name: str = "Player"
    miss_rate: float = 0.12
    pressure: float = 30.0
    putter_bias: float = PUTTER_BIAS
    putter_spread: float = PUTTER_SPREAD
    miss_pattern: dict[str, float] = field(default_factory=lambda: dict(MISS_PATTERN))
    history_size: int = SHOT_HISTORY_SIZE
    shot_history: dict[str, deque] = field(default_factory=dict)

    def _history(self, club_name: str) -> deque:
        if club_name not in self.shot_history:
            self.shot_history[club_name] = deque(maxlen=self.history_size)
        return self.shot_history[club_name]

    def initialize_history(self, rng: Optional[random.Random] = None,
                           count: int = 20):
        """Seed every club with synthetic shots for a scratch golfer.

        Dispersion scales with club length and carries a slight right
        bias (scratch golfers tend to fade the ball).
        """
        rng = rng or random.Random()
        for club_name in SHOT_CLUBS:
            history = self._history(club_name)
            history.clear()
            history.extend(self._generate_initial_shots(club_name, count, rng))

    def _generate_initial_shots(self, club_name: str, count: int,
                                rng: random.Random) -> list[HistoryShot]:
        spread_factor = get_club_profile(club_name).carry_yards / 280

        normal_dist_spread = 4 * spread_factor + 1.5
        normal_dir_spread = 4 * spread_factor + 1.5
        miss_dist_spread = 8 * spread_factor + 4
        miss_dir_spread = 10 * spread_factor + 5
        right_bias = 1.5 + spread_factor * 2  # ~3.5y for driver, ~2y for wedges

        shots = []
        for _ in range(count):
            if rng.random() < self.miss_rate:
                miss_type = roll_miss_type(self.miss_pattern, rng)
                off_x, off_y = MISS_OFFSETS.get(miss_type, (0.0, 0.0))
                x = miss_dir_spread * off_x * (0.5 + rng.random() * 0.5)
                y = miss_dist_spread * off_y * (0.5 + rng.random() * 0.5)
                shots.append(HistoryShot(x + right_bias * 0.5, y, miss=True))
            else:
                dist_error = rng.gauss(0, 1) * normal_dist_spread
                dir_error = rng.gauss(0, 1) * normal_dir_spread + right_bias
                # Occasionally push one further right
                if rng.random() < 0.2:
                    dir_error += 2 + rng.random() * 3
                shots.append(HistoryShot(dir_error, dist_error))
        return shots

    def record_shot(self, club_name: str, record: ShotRecord):
        """Append a completed shot; the oldest drops off past history_size."""
        self._history(club_name).append(HistoryShot(
            x=record.direction_error,
            y=record.distance_error,
            this_round=True,
            miss=record.is_miss,
        ))

    def new_round(self):
        """Mark all remembered shots as belonging to previous rounds."""
        for history in self.shot_history.values():
            for shot in history:
                shot.this_round = False

    def get_club_stats(self, club_name: str) -> GolferClubStats:
        """Compute dispersion statistics for a club from its history."""
        shots = self.shot_history.get(club_name)
        if not shots:
            return GolferClubStats()

        normal = [s for s in shots if not s.miss]
        misses = [s for s in shots if s.miss]
        miss_rate = len(misses) / len(shots)

        miss_dist_avg = mean(s.y for s in misses) if misses else None
        miss_dir_avg = mean(s.x for s in misses) if misses else None

        if not normal:
            return GolferClubStats(
                miss_rate=miss_rate,
                miss_dist_avg=miss_dist_avg,
                miss_dir_avg=miss_dir_avg,
            )

        dists = [s.y for s in normal]
        dirs = [s.x for s in normal]

        return GolferClubStats(
            dist_avg=mean(dists),
            dir_avg=mean(dirs),
            dist_std=pstdev(dists) or 3.0,
            dir_std=pstdev(dirs) or 3.0,
            miss_rate=miss_rate,
            miss_dist_avg=miss_dist_avg,
            miss_dir_avg=miss_dir_avg,
        )
