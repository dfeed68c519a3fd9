"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GIT_SOURCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: str = "development"
    log_level: str = "INFO"

    # Working copies live under <cache_dir>/gatsby-source-git/<name>
    cache_dir: str = ".cache"

    # Git
    git_binary: str = "git"
    clone_depth: int = 1

    # --- Node store ---
    node_store: str = "memory"  # "memory" | "sqlite"
    sqlite_path: str = "~/.git-source/nodes.db"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cache_dir = str(Path(self.cache_dir).expanduser())
        self.sqlite_path = str(Path(self.sqlite_path).expanduser())

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
