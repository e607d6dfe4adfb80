from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from repositories import ensure_schema


@pytest.fixture
def session_factory(tmp_path: Path) -> sessionmaker[Session]:
    engine = create_db_engine(f"sqlite+pysqlite:///{tmp_path / 'lunch.db'}")
    ensure_schema(engine)
    yield create_session_factory(engine)
    engine.dispose()
