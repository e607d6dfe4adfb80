"""matches table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class MatchRecord(Base):
    """One recorded 2v2 match.

    Player columns are plain ids rather than foreign keys: deleting a member
    leaves their past matches in place.
    """

    __tablename__ = "matches"
    __table_args__ = (Index("idx_matches_created", "created_at", "id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    team1_player1_id: Mapped[str] = mapped_column(String(36), nullable=False)
    team1_player2_id: Mapped[str] = mapped_column(String(36), nullable=False)
    team2_player1_id: Mapped[str] = mapped_column(String(36), nullable=False)
    team2_player2_id: Mapped[str] = mapped_column(String(36), nullable=False)
    winning_team: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
