"""
Club definitions for Golf Caddy.

Provides the club enumeration and the immutable launch-profile table used
by the launch condition generator.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional

from golfcaddy.errors import ClubNotFoundError
from golfcaddy.utils.constants import CLUB_PHYSICS, CLUB_CARRY_YARDS


class ClubType(str, Enum):
    """Clubs in the bag."""
    DRIVER = "Driver"
    WOOD_3 = "3 Wood"
    WOOD_5 = "5 Wood"
    IRON_4 = "4 Iron"
    IRON_5 = "5 Iron"
    IRON_6 = "6 Iron"
    IRON_7 = "7 Iron"
    IRON_8 = "8 Iron"
    IRON_9 = "9 Iron"
    PW = "PW"
    GW = "GW"
    SW = "SW"
    LW = "LW"
    PUTTER = "Putter"


class ShotShape(str, Enum):
    """Intended curve of a full shot."""
    DRAW = "Draw"
    STRAIGHT = "Straight"
    FADE = "Fade"


@dataclass(frozen=True)
class ClubProfile:
    """Full-power launch parameters for one club."""

    name: str
    loft_deg: float
    launch_angle_deg: float
    spin_rate_rpm: float
    ball_speed_mph: float
    smash_factor: float
    carry_yards: float

    @classmethod
    def from_name(cls, club: ClubType | str) -> "ClubProfile":
        """Look up a club profile, raising ClubNotFoundError if unknown."""
        profile = get_club_profile(club)
        if profile is None:
            raise ClubNotFoundError(_club_name(club))
        return profile


def _club_name(club: ClubType | str) -> str:
    return club.value if isinstance(club, ClubType) else str(club)


def _build_profiles() -> MappingProxyType:
    profiles = {}
    for name, data in CLUB_PHYSICS.items():
        profiles[name] = ClubProfile(
            name=name,
            loft_deg=data["loft"],
            launch_angle_deg=data["launch_angle"],
            spin_rate_rpm=data["spin_rate"],
            ball_speed_mph=data["ball_speed"],
            smash_factor=data["smash_factor"],
            carry_yards=CLUB_CARRY_YARDS[name],
        )
    return MappingProxyType(profiles)


CLUB_PROFILES = _build_profiles()

# Clubs used for full shots and shot history (everything but the putter)
SHOT_CLUBS = tuple(CLUB_PROFILES)


def get_club_profile(club: ClubType | str) -> Optional[ClubProfile]:
    """Return the launch profile for a club, or None if it has none."""
    return CLUB_PROFILES.get(_club_name(club))


def is_putter(club: ClubType | str) -> bool:
    return _club_name(club) == ClubType.PUTTER.value
