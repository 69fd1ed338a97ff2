"""Game store configuration via environment variables."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LogFormat = Literal["console", "json"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class RoundsSettings(BaseSettings):
    model_config = {"env_prefix": "ROUNDS_"}

    # Directory holding the *.game files and players.json
    data_dir: str = Field(default="data/gameData", min_length=1)

    # Directory for datetime-stamped log files; stdout only when unset
    log_dir: str | None = None

    # "json" for machine-readable lines, "console" for human-readable output
    log_format: LogFormat = "console"

    log_level: LogLevel = "INFO"

    # Number of most recent distinct game dates whose players are suggested first
    recent_game_threshold: int = Field(default=3, ge=1)

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v
