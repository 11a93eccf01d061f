"""Configuration management."""

from pathlib import Path
import os

import yaml
from pydantic import BaseModel, Field

from .engine_core.deck import ShuffleMode


CONFIG_ENV_VAR = "CONCENTRATION_CONFIG"


class GameConfig(BaseModel):
    """Game configuration."""

    # Seconds a mismatched pair stays face up
    mismatch_delay: float = Field(1.0, gt=0)
    shuffle: ShuffleMode = ShuffleMode.UNIFORM
    seed: int | None = None


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    # Idle sessions older than this are dropped
    session_max_age: int = 3600


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, falls back to the
            CONCENTRATION_CONFIG environment variable, then defaults.

    Returns:
        Config object.
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR)
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return Config.model_validate(data or {})
