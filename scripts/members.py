#!/usr/bin/env python3
"""Manage the lunch group and pick who pays today."""

from __future__ import annotations

import math
import random
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import create_db_engine, create_session_factory, session_scope
from domain.common import Member
from domain.config import DEFAULT_CONFIG_PATH, AppConfig, load_app_config
from domain.pipeline import pick_payer
from domain.selector import present_members, seeded_rng
from repositories import (
    add_member,
    ensure_schema,
    fetch_members,
    remove_member,
    toggle_presence,
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Track who is present and pick a random payer.",
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


def _render_member(index: int, member: Member) -> str:
    status = "present" if member.is_present else "absent "
    return f"{index:2d}. [{status}] {member.name:<20} id={member.id}"


@app.command("init-db")
def init_db(
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Create the team_members and matches tables when missing."""
    config = _load_config(config_path, db_url)
    created = ensure_schema(create_db_engine(config.db_url))
    typer.echo(f"db_url={config.db_url} created_tables={created}")


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Display name of the new member.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Add a member; new members start out present."""
    if not name.strip():
        raise typer.BadParameter("Please enter a name", param_hint="name")

    session_factory = _session_factory(_load_config(config_path, db_url))
    with session_scope(session_factory) as session:
        member = add_member(session, name)
    typer.echo(f"added name={member.name} id={member.id}")


@app.command()
def remove(
    member_id: Annotated[str, typer.Argument(help="Id of the member to remove.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Remove a member. Their past matches stay in the log."""
    session_factory = _session_factory(_load_config(config_path, db_url))
    try:
        with session_scope(session_factory) as session:
            remove_member(session, member_id)
    except LookupError as exc:
        raise typer.BadParameter(str(exc), param_hint="member_id") from exc
    typer.echo(f"removed id={member_id}")


@app.command()
def toggle(
    member_id: Annotated[str, typer.Argument(help="Id of the member to mark present/absent.")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Flip one member between present and absent."""
    session_factory = _session_factory(_load_config(config_path, db_url))
    try:
        with session_scope(session_factory) as session:
            member = toggle_presence(session, member_id)
    except LookupError as exc:
        raise typer.BadParameter(str(exc), param_hint="member_id") from exc
    typer.echo(f"name={member.name} is_present={member.is_present}")


@app.command("list")
def list_members(
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
) -> None:
    """Print every member in the order they were added."""
    session_factory = _session_factory(_load_config(config_path, db_url))
    with session_factory() as session:
        members = fetch_members(session)

    if not members:
        typer.echo("No team members yet. Add your lunch group to get started.")
        return

    typer.echo(f"members={len(members)} present={len(present_members(members))}")
    for index, member in enumerate(members, start=1):
        typer.echo(_render_member(index, member))


@app.command()
def pick(
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    db_url: DbUrlOption = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed for a reproducible draw. Overrides [selector].seed."),
    ] = None,
    delay_seconds: Annotated[
        float | None,
        typer.Option(
            "--delay-seconds",
            help="Suspense pause before revealing the payer. Overrides [selector].delay_seconds.",
        ),
    ] = None,
) -> None:
    """Pick one present member at random to pay today."""
    config = _load_config(config_path, db_url)
    delay = config.selector.delay_seconds if delay_seconds is None else delay_seconds
    if not math.isfinite(delay) or delay < 0:
        raise typer.BadParameter("--delay-seconds must be finite and >= 0")

    resolved_seed = config.selector.seed if seed is None else seed
    rng = random.random if resolved_seed is None else seeded_rng(resolved_seed)

    summary = pick_payer(
        session_factory=_session_factory(config),
        rng=rng,
        echo=typer.echo,
    )
    if not summary.has_selection:
        typer.echo(summary.selection.reason, err=True)
        raise typer.Exit(code=1)

    # The draw is already made; the pause is presentation only.
    if delay > 0:
        typer.echo("Selecting...")
        time.sleep(delay)
    typer.echo(f"{summary.selection.name} will pay today!")


if __name__ == "__main__":
    app()
