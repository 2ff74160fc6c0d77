from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    default_turn: int = 7
    base_wall_size: int = 69
    shanten_decay: float = 20.0
    candidate_workers: int = 1
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="ADVISOR_")


settings = Settings()
