"""CLI tests for scripts/members.py and scripts/leaderboard.py."""

from __future__ import annotations

import importlib.util
from datetime import datetime
from pathlib import Path
from types import ModuleType

import pytest
from typer.testing import CliRunner

from db import create_db_engine, create_session_factory, session_scope
from repositories import add_member, ensure_schema, fetch_matches, toggle_presence

SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "scripts"

runner = CliRunner()


def _load_script(name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"{name}_script", SCRIPTS_DIR / f"{name}.py")
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def members_cli() -> ModuleType:
    return _load_script("members")


@pytest.fixture(scope="module")
def leaderboard_cli() -> ModuleType:
    return _load_script("leaderboard")


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+pysqlite:///{tmp_path / 'cli.db'}"


@pytest.fixture
def config_path(tmp_path: Path, db_url: str) -> Path:
    path = tmp_path / "lunch.toml"
    path.write_text(f'[database]\nurl = "{db_url}"\n\n[selector]\ndelay_seconds = 0\n')
    return path


def _seed_members(db_url: str, *names: str) -> list[str]:
    engine = create_db_engine(db_url)
    ensure_schema(engine)
    with session_scope(create_session_factory(engine)) as session:
        ids = [
            add_member(session, name, created_at=datetime(2026, 1, 1, 12, index, 0)).id
            for index, name in enumerate(names)
        ]
    engine.dispose()
    return ids


def test_pick_with_nobody_present_exits_with_notice(
    members_cli: ModuleType, config_path: Path, db_url: str
) -> None:
    (asha,) = _seed_members(db_url, "Asha")
    engine = create_db_engine(db_url)
    with session_scope(create_session_factory(engine)) as session:
        toggle_presence(session, asha)
    engine.dispose()

    result = runner.invoke(members_cli.app, ["pick", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "No one is present!" in result.output
    assert "will pay today" not in result.output


def test_pick_with_zero_delay_skips_selecting_line(
    members_cli: ModuleType, config_path: Path, db_url: str
) -> None:
    _seed_members(db_url, "Asha")

    result = runner.invoke(
        members_cli.app,
        ["pick", "--config", str(config_path), "--delay-seconds", "0"],
    )

    assert result.exit_code == 0, result.output
    assert "Selecting..." not in result.output
    assert "Asha will pay today!" in result.output


def test_pick_draws_before_the_delay(
    members_cli: ModuleType,
    config_path: Path,
    db_url: str,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _seed_members(db_url, "Asha", "Ben")
    calls: list[str] = []
    real_pick_payer = members_cli.pick_payer

    def recording_pick_payer(**kwargs):
        calls.append("draw")
        return real_pick_payer(**kwargs)

    monkeypatch.setattr(members_cli, "pick_payer", recording_pick_payer)
    monkeypatch.setattr(members_cli.time, "sleep", lambda seconds: calls.append(f"sleep={seconds}"))

    result = runner.invoke(
        members_cli.app,
        ["pick", "--config", str(config_path), "--delay-seconds", "1.5", "--seed", "3"],
    )

    assert result.exit_code == 0, result.output
    assert calls == ["draw", "sleep=1.5"]
    assert result.output.index("Selecting...") < result.output.index("will pay today!")


@pytest.mark.parametrize("delay", ["inf", "nan", "-1"])
def test_pick_rejects_bad_delay_option(
    members_cli: ModuleType, config_path: Path, db_url: str, delay: str
) -> None:
    _seed_members(db_url, "Asha")

    result = runner.invoke(
        members_cli.app,
        ["pick", "--config", str(config_path), "--delay-seconds", delay],
    )

    assert result.exit_code == 2
    assert not isinstance(result.exception, OverflowError)


def test_pick_rejects_infinite_delay_from_config(
    members_cli: ModuleType, tmp_path: Path, db_url: str
) -> None:
    _seed_members(db_url, "Asha")
    config_path = tmp_path / "infinite.toml"
    config_path.write_text(f'[database]\nurl = "{db_url}"\n\n[selector]\ndelay_seconds = inf\n')

    result = runner.invoke(members_cli.app, ["pick", "--config", str(config_path)])

    assert result.exit_code == 2
    assert "will pay today" not in result.output


def test_show_rejects_negative_top_n(leaderboard_cli: ModuleType, config_path: Path) -> None:
    result = runner.invoke(
        leaderboard_cli.app,
        ["show", "--config", str(config_path), "--top-n", "-1"],
    )

    assert result.exit_code == 2


def test_record_rejects_invalid_winning_team(
    leaderboard_cli: ModuleType, config_path: Path, db_url: str
) -> None:
    ids = _seed_members(db_url, "A", "B", "C", "D")

    result = runner.invoke(
        leaderboard_cli.app,
        ["record", *ids, "--winning-team", "3", "--config", str(config_path)],
    )

    assert result.exit_code == 2
    engine = create_db_engine(db_url)
    with create_session_factory(engine)() as session:
        assert fetch_matches(session) == []
    engine.dispose()


def test_record_rejects_unknown_member_id(
    leaderboard_cli: ModuleType, config_path: Path, db_url: str
) -> None:
    a, b, c = _seed_members(db_url, "A", "B", "C")

    result = runner.invoke(
        leaderboard_cli.app,
        ["record", a, b, c, "typo", "--winning-team", "1", "--config", str(config_path)],
    )

    assert result.exit_code == 2


def test_record_then_show_ranks_winners_first(
    leaderboard_cli: ModuleType, config_path: Path, db_url: str
) -> None:
    ids = _seed_members(db_url, "Asha", "Ben", "Chloe", "Dev")

    recorded = runner.invoke(
        leaderboard_cli.app,
        ["record", *ids, "--winning-team", "2", "--config", str(config_path)],
    )
    assert recorded.exit_code == 0, recorded.output
    assert "winning_team=2" in recorded.output

    shown = runner.invoke(leaderboard_cli.app, ["show", "--config", str(config_path)])

    assert shown.exit_code == 0, shown.output
    lines = [line for line in shown.output.splitlines() if "wins=" in line]
    assert [line.split()[1] for line in lines] == ["Chloe", "Dev", "Asha", "Ben"]
    assert "loaded_players=4 loaded_matches=1" in shown.output
