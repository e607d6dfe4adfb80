"""Shared snapshot types for members, matches and standings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class WinningTeam(IntEnum):
    """Which side of a 2v2 match won."""

    TEAM1 = 1
    TEAM2 = 2


@dataclass(frozen=True)
class Member:
    """Read-only snapshot of one group member."""

    id: str
    name: str
    is_present: bool = True


@dataclass(frozen=True)
class Match:
    """Read-only snapshot of one recorded 2v2 match.

    ``winning_team`` is kept as a raw int: stored data is not guaranteed to hold
    only 1 or 2, and the leaderboard decides how to treat other values.
    """

    id: str
    team1_player1_id: str
    team1_player2_id: str
    team2_player1_id: str
    team2_player2_id: str
    winning_team: int

    @property
    def team1(self) -> tuple[str, str]:
        return (self.team1_player1_id, self.team1_player2_id)

    @property
    def team2(self) -> tuple[str, str]:
        return (self.team2_player1_id, self.team2_player2_id)


@dataclass(frozen=True)
class PlayerStats:
    """Derived standings row for one player."""

    id: str
    name: str
    wins: int = 0
    losses: int = 0
    total_matches: int = 0
    win_rate: float = 0.0


__all__ = ["Match", "Member", "PlayerStats", "WinningTeam"]
