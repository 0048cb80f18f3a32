"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    github_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "GITHUB_TOKEN_SECRET"),
    )
    github_api_url: str = "https://api.github.com"
    ai_model: str = "gpt-4o-mini"
    ai_base_url: str | None = None
    health_check_key: str = "health-check"
    manifest_path: str = "package.json"
    max_manifest_chars: int = 5_000
    max_readme_chars: int = 15_000
    max_tree_entries: int = 200
    dataset_path: Path = Path("storage/datasets/default/results.jsonl")
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
