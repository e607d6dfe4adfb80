"""Persistence helpers for recorded matches."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.common import Match, WinningTeam
from models import MatchRecord, TeamMember


def _to_match(row: MatchRecord) -> Match:
    return Match(
        id=row.id,
        team1_player1_id=row.team1_player1_id,
        team1_player2_id=row.team1_player2_id,
        team2_player1_id=row.team2_player1_id,
        team2_player2_id=row.team2_player2_id,
        winning_team=int(row.winning_team),
    )


def _validate_match(
    team1: tuple[str, str],
    team2: tuple[str, str],
    winning_team: int,
) -> WinningTeam:
    if len(team1) != 2 or len(team2) != 2:
        raise ValueError(f"Each team needs exactly two players, got {team1!r} vs {team2!r}")
    player_ids = [*team1, *team2]
    if len(set(player_ids)) != len(player_ids):
        raise ValueError(f"A player cannot appear twice in one match: {player_ids}")
    try:
        return WinningTeam(winning_team)
    except ValueError as exc:
        raise ValueError(f"winning_team={winning_team!r} must be 1 or 2") from exc


def _require_known_players(session: Session, player_ids: list[str]) -> None:
    known = set(
        session.execute(select(TeamMember.id).where(TeamMember.id.in_(player_ids))).scalars()
    )
    missing = [player_id for player_id in player_ids if player_id not in known]
    if missing:
        raise LookupError(f"Unknown member ids: {missing}")


def fetch_matches(session: Session) -> list[Match]:
    """Return a snapshot of the full match log, oldest first."""
    rows = session.execute(
        select(MatchRecord).order_by(MatchRecord.created_at.asc(), MatchRecord.id.asc())
    ).scalars()
    return [_to_match(row) for row in rows]


def record_match(
    session: Session,
    *,
    team1: tuple[str, str],
    team2: tuple[str, str],
    winning_team: int,
    created_at: datetime | None = None,
) -> Match:
    """Append one match to the log; all four players must be current members."""
    winner = _validate_match(team1, team2, winning_team)
    _require_known_players(session, [*team1, *team2])
    row = MatchRecord(
        id=str(uuid.uuid4()),
        team1_player1_id=team1[0],
        team1_player2_id=team1[1],
        team2_player1_id=team2[0],
        team2_player2_id=team2[1],
        winning_team=int(winner),
        created_at=created_at or datetime.now(UTC).replace(tzinfo=None),
    )
    session.add(row)
    session.flush()
    return _to_match(row)


__all__ = ["fetch_matches", "record_match"]
