"""Leaderboard and random-selection domain modules."""

from domain.common import Match, Member, PlayerStats, WinningTeam
from domain.leaderboard import compute_leaderboard
from domain.selector import NO_CANDIDATES, NoCandidates, select_random

__all__ = [
    "Match",
    "Member",
    "NO_CANDIDATES",
    "NoCandidates",
    "PlayerStats",
    "WinningTeam",
    "compute_leaderboard",
    "select_random",
]
