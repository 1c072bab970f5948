from __future__ import annotations

from logging import getLogger
from os import getenv
from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import Difficulty

LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

logger = getLogger(__name__)


def default_logger() -> dict:
    return {
        "disable_existing_loggers": False,
        "version": 1,
        "handlers": {
            "default": {"class": "logging.StreamHandler", "formatter": "default"}
        },
        "formatters": {
            "default": {
                "format": "%(levelname)s %(name)s:%(funcName)s:%(lineno)d :: %(message)s"
            }
        },
        "root": {"level": "INFO", "handlers": ["default"]},
        "loggers": {"typerace_api": {"level": LOG_LEVEL}},
    }


class DBSetting(BaseModel):
    """
    PostgreSQL by default.
    - sqlite_path: use a SQLite file instead (local runs, tests)
    """

    username: str = "user"
    password: str = "password"
    host: str = "localhost"
    port: int = 5432
    db: str = "typerace"
    pool_size: int = 5
    echo: bool = False
    sqlite_path: str | None = None
    migration_dir: str = "migration"

    @property
    def is_sqlite(self) -> bool:
        return self.sqlite_path is not None

    @property
    def dsn(self) -> str:
        if self.sqlite_path is not None:
            return f"sqlite:///{self.sqlite_path}"
        return f"postgresql://{self.username}:{self.password}@{self.host}:{self.port}/{self.db}"

    @property
    def async_dsn(self) -> str:
        if self.sqlite_path is not None:
            return f"sqlite+aiosqlite:///{self.sqlite_path}"
        return f"postgresql+asyncpg://{self.username}:{self.password}@{self.host}:{self.port}/{self.db}"


class CORSSetting(BaseModel):
    allow_origins: list[str] = Field(default_factory=list)


class ServerSetting(BaseModel):
    port: int = 8080


class TokenSetting(BaseModel):
    """
    JWT access token issued by the identity provider
    - public_key: verifies the token signature (RS256)
    - private_key: only needed to issue tokens (local runs, tests)
    - access_duration: (seconds)
    """

    public_key: str = ""
    private_key: str = ""
    access_duration: int = 60 * 15


def default_passages() -> dict[Difficulty, str]:
    return {
        Difficulty.EASY: (
            "The cat sat on the mat. It was a sunny day and the birds were singing "
            "in the trees. Children played in the park while their parents watched "
            "from nearby benches."
        ),
        Difficulty.MEDIUM: (
            "Technology has revolutionized the way we communicate with each other. "
            "Social media platforms allow us to connect instantly with people around "
            "the world, sharing our thoughts and experiences in real-time."
        ),
        Difficulty.HARD: (
            "Quantum mechanics represents one of the most fascinating and "
            "counterintuitive branches of physics, challenging our fundamental "
            "understanding of reality through phenomena like superposition and "
            "entanglement."
        ),
        Difficulty.EXPERT: (
            "The implementation of sophisticated algorithms in machine learning "
            "requires careful consideration of computational complexity, "
            "optimization techniques, and the mathematical foundations underlying "
            "neural network architectures."
        ),
    }


class GameSetting(BaseModel):
    """
    Attributes:
    - code_retry: attempts to find an unused room code
    - passages: text to type, one per difficulty
    """

    code_retry: int = 5
    passages: dict[Difficulty, str] = Field(default_factory=default_passages)


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Setting(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    db: DBSetting = Field(default_factory=DBSetting)
    cors: CORSSetting = Field(default_factory=CORSSetting)
    server: ServerSetting = Field(default_factory=ServerSetting)
    logger: dict = Field(default_factory=default_logger)
    token: TokenSetting = Field(default_factory=TokenSetting)
    game: GameSetting = Field(default_factory=GameSetting)

    @classmethod
    def from_file(
        cls,
        base: str = "setting.yaml",
        secret: str = "setting.secret.yaml",
    ) -> Self:
        loaded: dict = {}
        for path in (base, secret):
            setting_file = Path(path)
            if not setting_file.exists():
                logger.warning("setting file not found at: %s, skipped.", path)
                continue

            with setting_file.open("r") as f:
                loaded = _merge(loaded, yaml.safe_load(f) or {})

        return cls.model_validate(loaded)


if __name__ == "__main__":
    print(yaml.safe_dump(Setting().model_dump()))
