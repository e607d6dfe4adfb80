"""Persistence helpers for team members."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from domain.common import Member
from models import TeamMember


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def _to_member(row: TeamMember) -> Member:
    return Member(id=row.id, name=row.name, is_present=bool(row.is_present))


def fetch_members(session: Session) -> list[Member]:
    """Return a snapshot of all members, oldest first."""
    rows = session.execute(
        select(TeamMember).order_by(TeamMember.created_at.asc(), TeamMember.id.asc())
    ).scalars()
    return [_to_member(row) for row in rows]


def add_member(
    session: Session,
    name: str,
    *,
    is_present: bool = True,
    created_at: datetime | None = None,
) -> Member:
    """Insert one member; new members start out present."""
    cleaned_name = name.strip()
    if not cleaned_name:
        raise ValueError("Member name cannot be blank")

    row = TeamMember(
        id=str(uuid.uuid4()),
        name=cleaned_name,
        is_present=is_present,
        created_at=created_at or _utcnow(),
    )
    session.add(row)
    session.flush()
    return _to_member(row)


def remove_member(session: Session, member_id: str) -> None:
    """Delete one member. Their recorded matches are left untouched."""
    result = session.execute(delete(TeamMember).where(TeamMember.id == member_id))
    if result.rowcount == 0:
        raise LookupError(f"member_id={member_id} not found")


def toggle_presence(session: Session, member_id: str) -> Member:
    """Flip one member's present flag and return the updated snapshot."""
    row = session.get(TeamMember, member_id)
    if row is None:
        raise LookupError(f"member_id={member_id} not found")
    row.is_present = not row.is_present
    session.flush()
    return _to_member(row)


__all__ = ["add_member", "fetch_members", "remove_member", "toggle_presence"]
