"""Application settings loaded from environment variables (+ optional .env).

A single Settings object is built at startup and handed to create_app();
nothing else reads the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import List

from dotenv import load_dotenv


def _env(name: str, default: str) -> str:
    v = os.environ.get(name)
    return default if v is None or v.strip() == "" else v


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


@dataclass(frozen=True)
class Settings:
    # Default to local SQLite for dev/tests; override via env in Docker/Prod
    database_url: str = "sqlite:///./taskmanager.db"
    secret_key: str = "CHANGE_ME_DEV_SECRET_KEY"
    algorithm: str = "HS256"
    access_token_expire_minutes: float = 24 * 60
    bcrypt_rounds: int = 10
    static_dir: str = str(Path(__file__).resolve().parent / "frontend")
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.access_token_expire_minutes)

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "Settings":
        if load_dotenv_file:
            load_dotenv(override=False)
        return cls(
            database_url=_env("DATABASE_URL", cls.database_url),
            secret_key=_env("SECRET_KEY", cls.secret_key),
            algorithm=_env("ALGORITHM", cls.algorithm),
            access_token_expire_minutes=_env_float(
                "ACCESS_TOKEN_EXPIRE_MINUTES", cls.access_token_expire_minutes
            ),
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", cls.bcrypt_rounds),
            static_dir=_env("STATIC_DIR", cls.static_dir),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
            log_level=_env("LOG_LEVEL", cls.log_level).upper(),
            host=_env("HOST", cls.host),
            port=_env_int("PORT", cls.port),
        )
