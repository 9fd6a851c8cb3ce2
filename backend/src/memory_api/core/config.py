from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_ROOT = Path(__file__).resolve().parents[3]
ENV_PATH = BACKEND_ROOT / ".env"

# Load environment variables as early as possible so Settings picks them up.
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Memory Trainer API"
    app_version: str = "0.1.0"
    docs_url: str = "/docs"
    host: str = "127.0.0.1"
    port: int = 8001
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Key-value storage: "memory" (process local), "sql" (sqlmodel table) or
    # "rest" (Redis REST API, e.g. Vercel KV / Upstash).
    kv_backend: Literal["memory", "sql", "rest"] = "sql"
    database_url: str = f"sqlite:///{(BACKEND_ROOT / 'memory_trainer.db').as_posix()}"
    database_echo: bool = False
    kv_rest_api_url: Optional[str] = None
    kv_rest_api_token: Optional[str] = None
    kv_timeout_seconds: float = 10.0

    jwt_secret_key: str = "dev-jwt-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7


@lru_cache
def get_settings() -> Settings:
    return Settings()
