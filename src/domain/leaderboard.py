"""Fold a match log into per-player win/loss standings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import Match, Member, PlayerStats, WinningTeam


@dataclass
class _Tally:
    id: str
    name: str
    wins: int = 0
    losses: int = 0

    @property
    def total_matches(self) -> int:
        return self.wins + self.losses


def calculate_win_rate(wins: int, total_matches: int) -> float:
    """Return the win percentage in [0, 100], or 0.0 when nothing was played."""
    if total_matches <= 0:
        return 0.0
    return (wins / total_matches) * 100.0


def match_sides(
    match: Match, *, strict: bool = False
) -> tuple[tuple[str, str], tuple[str, str]]:
    """Return (winners, losers) for one match.

    Any ``winning_team`` other than 1 counts as a team 2 win unless ``strict``
    is set, in which case values outside {1, 2} are rejected.
    """
    if strict and match.winning_team not in (WinningTeam.TEAM1, WinningTeam.TEAM2):
        raise ValueError(
            f"match_id={match.id} has invalid winning_team={match.winning_team!r}; "
            "expected 1 or 2"
        )
    if match.winning_team == WinningTeam.TEAM1:
        return match.team1, match.team2
    return match.team2, match.team1


def compute_leaderboard(
    players: Iterable[Member],
    matches: Iterable[Match],
    *,
    strict_winning_team: bool = False,
) -> list[PlayerStats]:
    """Rank players by wins, then win rate.

    Every player appears exactly once, including players without matches.
    Match references to ids outside ``players`` are ignored.
    """
    tallies: dict[str, _Tally] = {}
    for player in players:
        tallies[player.id] = _Tally(id=player.id, name=player.name)

    for match in matches:
        winners, losers = match_sides(match, strict=strict_winning_team)
        for player_id in winners:
            tally = tallies.get(player_id)
            if tally is not None:
                tally.wins += 1
        for player_id in losers:
            tally = tallies.get(player_id)
            if tally is not None:
                tally.losses += 1

    leaderboard = [
        PlayerStats(
            id=tally.id,
            name=tally.name,
            wins=tally.wins,
            losses=tally.losses,
            total_matches=tally.total_matches,
            win_rate=calculate_win_rate(tally.wins, tally.total_matches),
        )
        for tally in tallies.values()
    ]
    # sorted() is stable, so full ties keep the players' input order.
    return sorted(leaderboard, key=lambda stats: (-stats.wins, -stats.win_rate))


__all__ = ["calculate_win_rate", "compute_leaderboard", "match_sides"]
