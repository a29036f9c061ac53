"""Application configuration for Rollcall."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Dict, List, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

load_dotenv()


def _engine_options_from_uri(uri: str) -> dict:
    url = make_url(uri)
    # Always keep pool_pre_ping, vary connect_args by dialect.
    if url.get_backend_name() == "sqlite":
        return {"pool_pre_ping": True, "connect_args": {"timeout": 30}}
    if url.get_backend_name() in {"postgresql", "postgres"}:
        timeout = int(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "10"))
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}
    return {"pool_pre_ping": True}


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _env_list(name: str) -> List[str]:
    return [item.strip() for item in os.environ.get(name, "").split(",") if item.strip()]


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///instance/rollcall.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    JSON_SORT_KEYS = False

    # Access and refresh tokens are signed with independent secrets.
    JWT_ACCESS_SECRET = os.environ.get("JWT_ACCESS_SECRET", "")
    JWT_REFRESH_SECRET = os.environ.get("JWT_REFRESH_SECRET", "")
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.environ.get("JWT_ACCESS_TTL_MINUTES", "15")))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.environ.get("JWT_REFRESH_TTL_DAYS", "30")))

    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "1000/minute")
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", "true")
    AUTH_RATE_LIMIT = os.environ.get("AUTH_RATE_LIMIT", "100/15 minutes")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Areas offered to clients even before anyone is assigned to them.
    KNOWN_AREAS = _env_list("KNOWN_AREAS") or ["area-1", "area-2", "area-3"]

    # Firebase Cloud Messaging. Falls back to Application Default Credentials.
    FIREBASE_SERVICE_ACCOUNT_JSON = os.environ.get("FIREBASE_SERVICE_ACCOUNT_JSON", "")
    FIREBASE_CREDENTIALS_PATH = os.environ.get("FIREBASE_CREDENTIALS_PATH", "")
    PUSH_TITLE = os.environ.get("PUSH_TITLE", "Emergency roll-call")
    PUSH_BODY = os.environ.get("PUSH_BODY", "Please report your status: OK or HELP")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(BaseConfig):
    TESTING = True
    # Use file-backed SQLite so Alembic migrations and app share the same DB.
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///instance/test.db")
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    RATELIMIT_ENABLED = False
    JWT_ACCESS_SECRET = "test-access-secret"
    JWT_REFRESH_SECRET = "test-refresh-secret"
    KNOWN_AREAS = ["area-1", "area-2", "area-3"]


class ProductionConfig(BaseConfig):
    ENV = "production"
    AUTH_RATE_LIMIT = os.environ.get("AUTH_RATE_LIMIT", "15/15 minutes")
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "300/minute")


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
