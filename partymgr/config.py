"""Runtime configuration read from the environment (and ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project root directory (repo root)
ROOT_DIR = Path(__file__).resolve().parents[1]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be a number") from exc


@dataclass(frozen=True)
class Settings:
    """Settings snapshot.

    Attributes
    ----------
    db_url : str
        SQLAlchemy URL of the local store. Relative ``sqlite:///./`` URLs are
        resolved against the project root by :mod:`partymgr.db.engine`.
    storage_key : str
        Well-known key the application state document is stored under.
    default_table_capacity : int
        Seats per table offered when the caller does not choose one.
    max_draw_batch : int
        Largest number of winners a single draw may select.
    spin_duration_seconds : float
        Length of the cosmetic spin phase before winners are committed.
    spin_fps : int
        Frame rate of the spin phase.
    log_level : str
        Level name passed to ``logging.basicConfig`` by the scripts.
    """

    db_url: str = "sqlite:///./party.db"
    storage_key: str = "party_manager_db_v1"
    default_table_capacity: int = 10
    max_draw_batch: int = 10
    spin_duration_seconds: float = 3.0
    spin_fps: int = 30
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        return cls(
            db_url=os.getenv("DB_URL", cls.db_url),
            storage_key=os.getenv("PARTY_STORAGE_KEY", cls.storage_key),
            default_table_capacity=_env_int(
                "DEFAULT_TABLE_CAPACITY", cls.default_table_capacity
            ),
            max_draw_batch=_env_int("MAX_DRAW_BATCH", cls.max_draw_batch),
            spin_duration_seconds=_env_float(
                "SPIN_DURATION_SECONDS", cls.spin_duration_seconds
            ),
            spin_fps=_env_int("SPIN_FPS", cls.spin_fps),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )


settings = Settings.from_env()
