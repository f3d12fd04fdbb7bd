# app/core/settings.py
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[2]
ENV_PATH = BASE_DIR / ".env"


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.environ.get(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}


def _build_amqp_url() -> str:
    # собираем из окружения (совместимо с docker-compose)
    user = os.getenv("RABBITMQ_USER", "guest")
    pwd = os.getenv("RABBITMQ_PASSWORD", "guest")
    host = os.getenv("RABBITMQ_HOST", "rabbitmq")
    port = os.getenv("RABBITMQ_PORT", "5672")
    return f"amqp://{user}:{pwd}@{host}:{port}/"


class Settings(BaseSettings):
    # === App ===
    APP_NAME: str = "auth-service"
    APP_VERSION: str = "0.1.0"
    ROOT_PATH: str = ""  # если API висит за префиксом у gateway (например, /api/v1/auth)
    DEBUG: bool = _env_bool("DEBUG", False)
    TESTING: bool = _env_bool("TESTING") or ("PYTEST_CURRENT_TEST" in os.environ)
    LOG_LEVEL: str = "INFO"

    # === Security (JWT) ===
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # === Client (ссылка подтверждения e-mail ведёт сюда) ===
    CLIENT_URL: str = "http://localhost:3000"

    # === CORS / Hosts ===
    CORS_ALLOW_ORIGINS: str = "*"  # список через запятую
    TRUSTED_HOSTS: str = "*"       # список через запятую

    # === Database (async) ===
    DB_HOST: str = "database"
    DB_PORT: int = 5432
    DB_USER: str = "user"
    DB_PASS: str = "password"
    DB_NAME: str = "auth_db"
    DATABASE_URL: Optional[str] = None

    DB_ECHO: bool = _env_bool("DB_ECHO", False)
    DB_POOL_SIZE: Optional[int] = None
    DB_MAX_OVERFLOW: Optional[int] = None
    DB_POOL_RECYCLE: Optional[int] = None  # seconds
    DB_POOL_TIMEOUT: Optional[int] = None  # seconds

    # === DB Init flags ===
    INIT_DB_ON_START: bool = _env_bool("INIT_DB_ON_START", True)
    INIT_DB_DROP_ALL: bool = _env_bool("INIT_DB_DROP_ALL", False)

    # === AMQP ===
    AMQP_URL: str = os.getenv("AMQP_URL") or _build_amqp_url()
    EMAIL_EXCHANGE: str = "jobber-email-notification"
    EMAIL_ROUTING_KEY: str = "auth-email"
    PUBLISH_RETRIES: int = 3
    PUBLISH_RETRY_DELAY: float = 0.5

    # === Cloudinary ===
    CLOUD_NAME: str = ""
    CLOUD_API_KEY: str = ""
    CLOUD_API_SECRET: str = ""

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def model_post_init(self, __context) -> None:
        """
        Нормализуем DATABASE_URL:
        1) приоритет у DATABASE_URL (если задана);
        2) иначе собираем строку для asyncpg из компонент.
        """
        env_du = (self.DATABASE_URL or "").strip()
        if env_du:
            self.DATABASE_URL = env_du
        else:
            self.DATABASE_URL = (
                f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASS}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )

        # ссылка подтверждения собирается конкатенацией, хвостовой "/" не нужен
        self.CLIENT_URL = self.CLIENT_URL.rstrip("/")

        # Тестовое окружение: схема создаётся при старте
        if self.TESTING:
            self.INIT_DB_ON_START = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
