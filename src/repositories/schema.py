"""Schema bootstrap for the lunch picker tables."""

from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from models import MatchRecord, TeamMember

_MODELS = (TeamMember, MatchRecord)


def ensure_schema(engine: Engine) -> list[str]:
    """Create missing tables and indexes; return the names of tables created."""
    created: list[str] = []
    with engine.begin() as connection:
        existing_tables = set(inspect(connection).get_table_names())
        for model in _MODELS:
            table = getattr(model, "__table__")
            if table.name in existing_tables:
                continue
            table.create(bind=connection, checkfirst=True)
            created.append(table.name)
    return created


__all__ = ["ensure_schema"]
