"""ORM models."""

from models.base import Base
from models.match import MatchRecord
from models.member import TeamMember

__all__ = ["Base", "MatchRecord", "TeamMember"]
