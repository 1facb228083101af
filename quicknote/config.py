from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

DEFAULT_DB_PATH = Path.home() / ".quicknote" / "quicknote.db"


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    db_path: Path = DEFAULT_DB_PATH
    log_level: str = "WARNING"
    autosave: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        env_path = os.getenv("QUICKNOTE_DB_PATH")
        return cls(
            db_path=Path(env_path) if env_path else DEFAULT_DB_PATH,
            log_level=os.getenv("QUICKNOTE_LOG_LEVEL", "WARNING").upper(),
            autosave=_flag(os.getenv("QUICKNOTE_AUTOSAVE"), True),
        )

    @property
    def db_url(self) -> str:
        return sqlite_url(self.db_path)


def sqlite_url(db_path: Path | str) -> str:
    """Build the SQLAlchemy URL for a database file, creating its folder."""
    path = Path(db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"
