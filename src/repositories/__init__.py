"""Database repository helpers."""

from repositories.matches import fetch_matches, record_match
from repositories.members import add_member, fetch_members, remove_member, toggle_presence
from repositories.schema import ensure_schema

__all__ = [
    "add_member",
    "ensure_schema",
    "fetch_matches",
    "fetch_members",
    "record_match",
    "remove_member",
    "toggle_presence",
]
