"""Load application settings from a TOML file."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

DEFAULT_DB_URL = "sqlite+pysqlite:///lunch_picker.db"
DEFAULT_DELAY_SECONDS = 2.0
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "default.toml"


@dataclass(frozen=True)
class LeaderboardSettings:
    strict_winning_team: bool = False
    top_n: int = 0


@dataclass(frozen=True)
class SelectorSettings:
    delay_seconds: float = DEFAULT_DELAY_SECONDS
    seed: int | None = None


@dataclass(frozen=True)
class AppConfig:
    """Settings for the CLI and the persistence boundary."""

    file_path: Path | None
    db_url: str = DEFAULT_DB_URL
    leaderboard: LeaderboardSettings = LeaderboardSettings()
    selector: SelectorSettings = SelectorSettings()

    def as_config_json(self) -> dict[str, Any]:
        return {
            "db_url": self.db_url,
            "strict_winning_team": self.leaderboard.strict_winning_team,
            "top_n": self.leaderboard.top_n,
            "delay_seconds": self.selector.delay_seconds,
            "seed": self.selector.seed,
        }


def load_app_config(file_path: Path) -> AppConfig:
    """Read and validate one TOML config file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Config path is not a file: {file_path}")

    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return parse_app_config(raw, file_path)


def parse_app_config(raw: dict[str, Any], file_path: Path | None = None) -> AppConfig:
    database_raw = raw.get("database", {})
    leaderboard_raw = raw.get("leaderboard", {})
    selector_raw = raw.get("selector", {})

    db_url = str(database_raw.get("url", DEFAULT_DB_URL)).strip()
    if not db_url:
        raise ValueError(f"{file_path}: [database].url must not be empty")

    strict_value = leaderboard_raw.get("strict_winning_team", False)
    if not isinstance(strict_value, bool):
        raise ValueError(f"{file_path}: [leaderboard].strict_winning_team must be a boolean")

    top_n = leaderboard_raw.get("top_n", 0)
    if isinstance(top_n, bool) or not isinstance(top_n, int):
        raise ValueError(f"{file_path}: [leaderboard].top_n must be an integer")
    if top_n < 0:
        raise ValueError(f"{file_path}: [leaderboard].top_n must be >= 0")

    delay_value = selector_raw.get("delay_seconds", DEFAULT_DELAY_SECONDS)
    if isinstance(delay_value, bool) or not isinstance(delay_value, (int, float)):
        raise ValueError(f"{file_path}: [selector].delay_seconds must be a number")
    delay_seconds = float(delay_value)
    if not math.isfinite(delay_seconds) or delay_seconds < 0.0:
        raise ValueError(f"{file_path}: [selector].delay_seconds must be finite and >= 0")

    seed_value = selector_raw.get("seed")
    if seed_value is not None and (isinstance(seed_value, bool) or not isinstance(seed_value, int)):
        raise ValueError(f"{file_path}: [selector].seed must be an integer")

    return AppConfig(
        file_path=file_path,
        db_url=db_url,
        leaderboard=LeaderboardSettings(
            strict_winning_team=strict_value,
            top_n=top_n,
        ),
        selector=SelectorSettings(
            delay_seconds=delay_seconds,
            seed=seed_value,
        ),
    )


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_DB_URL",
    "LeaderboardSettings",
    "SelectorSettings",
    "load_app_config",
    "parse_app_config",
]
