"""Fetch snapshots, run the pure core, and report the outcome."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from domain.common import Member, PlayerStats
from domain.config import LeaderboardSettings
from domain.leaderboard import compute_leaderboard
from domain.selector import NoCandidates, RandomSource, present_members, select_random
from repositories.matches import fetch_matches
from repositories.members import fetch_members


@dataclass(frozen=True)
class LeaderboardSummary:
    """Standings plus the size of the snapshots they were built from."""

    standings: list[PlayerStats]
    loaded_players: int
    loaded_matches: int


@dataclass(frozen=True)
class PickSummary:
    """Outcome of one payer draw."""

    selection: Member | NoCandidates
    loaded_members: int
    present_members: int

    @property
    def has_selection(self) -> bool:
        return isinstance(self.selection, Member)


def load_leaderboard(
    *,
    session_factory: sessionmaker[Session],
    settings: LeaderboardSettings = LeaderboardSettings(),
    echo: Callable[[str], None] | None = None,
) -> LeaderboardSummary:
    """Build standings from the current members and match log."""
    with session_factory() as session:
        players = fetch_members(session)
        matches = fetch_matches(session)

    standings = compute_leaderboard(
        players,
        matches,
        strict_winning_team=settings.strict_winning_team,
    )
    if settings.top_n > 0:
        standings = standings[: settings.top_n]

    if echo is not None:
        echo(
            f"loaded_players={len(players)} "
            f"loaded_matches={len(matches)} "
            f"strict_winning_team={settings.strict_winning_team} "
            f"shown={len(standings)}"
        )

    return LeaderboardSummary(
        standings=standings,
        loaded_players=len(players),
        loaded_matches=len(matches),
    )


def pick_payer(
    *,
    session_factory: sessionmaker[Session],
    rng: RandomSource = random.random,
    echo: Callable[[str], None] | None = None,
) -> PickSummary:
    """Draw one present member from a fresh snapshot."""
    with session_factory() as session:
        members = fetch_members(session)

    present_count = len(present_members(members))
    selection = select_random(members, rng)

    if echo is not None:
        echo(f"loaded_members={len(members)} present={present_count}")

    return PickSummary(
        selection=selection,
        loaded_members=len(members),
        present_members=present_count,
    )


__all__ = ["LeaderboardSummary", "PickSummary", "load_leaderboard", "pick_payer"]
