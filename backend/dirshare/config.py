"""dirshare configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "dirshare"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "0.0.0.0"
    port: int = 3000
    api_prefix: str = "/api"

    # Shared directory (resolved to an absolute path at startup)
    root_dir: str = "."

    # Small-file cache
    cache_capacity: int = 100  # entries
    cache_threshold_bytes: int = 1024 * 1024  # 1 MiB

    # Streaming
    chunk_size: int = 8 * 1024  # 8 KiB

    # Admission gate
    max_concurrent_requests: int = 64

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="DIRSHARE_",
        extra="ignore",
    )

    @field_validator(
        "cache_capacity", "cache_threshold_bytes", "chunk_size", "max_concurrent_requests"
    )
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @model_validator(mode="after")
    def _resolve_root(self) -> "Settings":
        """Pin the shared directory to an absolute canonical path."""
        root = os.path.realpath(os.path.abspath(os.path.expanduser(self.root_dir)))
        if not os.path.isdir(root):
            raise ValueError(f"root_dir is not a directory: {self.root_dir}")
        self.root_dir = root
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
