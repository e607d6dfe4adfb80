#!/usr/bin/env python3
"""Record 2v2 matches and show the standings table."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import create_db_engine, create_session_factory, session_scope
from domain.common import PlayerStats
from domain.config import DEFAULT_CONFIG_PATH, AppConfig, load_app_config
from domain.pipeline import load_leaderboard
from repositories import ensure_schema, record_match

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Record matches and query the leaderboard.",
)

ConfigOption = Annotated[
    Path,
    typer.Option("--config", help="TOML config file."),
]
DbUrlOption = Annotated[
    str | None,
    typer.Option("--db-url", help="Database URL. Overrides [database].url from the config."),
]


def _load_config(config_path: Path, db_url: str | None) -> AppConfig:
    try:
        config = load_app_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if db_url is not None:
        config = replace(config, db_url=db_url)
    return config


def _session_factory(config: AppConfig):
    engine = create_db_engine(config.db_url)
    ensure_schema(engine)
    return create_session_factory(engine)


def _render_row(index: int, stats: PlayerStats) -> str:
    return (
        f"{index:2d}. {stats.name:<20} "
        f"wins={stats.wins:3d} losses={stats.losses:3d} "
        f"matches={stats.total_matches:3d} win_rate={stats.win_rate:6.2f}%"
    )


@app.command()
def record(
    team1_player1: Annotated[str, typer.Argument(help="Member id, team 1.")],
    team1_player2: Annotated[str, typer.Argument(help="Member id, team 1.")],
    team2_player1: Annotated[str, typer.Argument(help="Member id, team 2.")],
    team2_player2: Annotated[str, typer.Argument(help="Member id, team 2.")],
    winning_team: Annotated[
        int,
        typer.Option("--winning-team", help="Winning side (1 or 2)."),
    ],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Append one match result to the log."""
    session_factory = _session_factory(_load_config(config_path, db_url))
    try:
        with session_scope(session_factory) as session:
            match = record_match(
                session,
                team1=(team1_player1, team1_player2),
                team2=(team2_player1, team2_player2),
                winning_team=winning_team,
            )
    except (LookupError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"recorded match_id={match.id} winning_team={match.winning_team}")


@app.command()
def show(
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
    top_n: Annotated[
        int | None,
        typer.Option("--top-n", help="Rows to show; 0 shows everyone. Overrides [leaderboard].top_n."),
    ] = None,
) -> None:
    """Print players ranked by wins, then win rate."""
    if top_n is not None and top_n < 0:
        raise typer.BadParameter("--top-n must be >= 0")

    config = _load_config(config_path, db_url)
    settings = config.leaderboard if top_n is None else replace(config.leaderboard, top_n=top_n)

    try:
        summary = load_leaderboard(
            session_factory=_session_factory(config),
            settings=settings,
            echo=typer.echo,
        )
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not summary.standings:
        typer.echo("No players yet.")
        return

    for index, stats in enumerate(summary.standings, start=1):
        typer.echo(_render_row(index, stats))


if __name__ == "__main__":
    app()
