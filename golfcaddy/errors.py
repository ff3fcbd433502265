"""
Exceptions raised by the Golf Caddy physics engine.

Only configuration problems are surfaced as errors. Capture, lip-out, and
loop caps are ordinary outcomes and never raise.
"""


class ClubNotFoundError(KeyError):
    """Raised when a shot is attempted with a club that has no launch profile."""

    def __init__(self, club_name: str):
        super().__init__(club_name)
        self.club_name = club_name

    def __str__(self) -> str:
        return f"Unknown club: {self.club_name!r}"


class HoleConfigError(ValueError):
    """Raised when hole data or hole geometry cannot support a shot."""
