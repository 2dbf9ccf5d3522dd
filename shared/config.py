"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


DEFAULT_DATASET_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
_DEFAULT_DATASET_TIMEOUT_SECONDS = 10.0
_DEFAULT_PORT = 5000


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env with safe environment defaults."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed_origins:
        return parsed_origins

    if app_env().strip().lower() in {"dev", "local"}:
        return ["*"]

    ui_origin = (get_env("UI_ORIGIN", "") or "").strip()
    if ui_origin:
        return [ui_origin]

    logger.warning(
        "cors_allow_origins_empty_in_prod app_env=%s; define CORS_ALLOW_ORIGINS or UI_ORIGIN",
        app_env(),
    )

    return []


def dataset_url() -> str:
    """Return the remote product transactions dataset URL."""
    return (get_env("TRANSACTIONS_DATASET_URL", "") or "").strip() or DEFAULT_DATASET_URL


def dataset_timeout_seconds() -> float:
    """Return the dataset fetch timeout, falling back to the default on invalid values."""
    raw_value = (get_env("TRANSACTIONS_DATASET_TIMEOUT_SECONDS", "") or "").strip()
    if not raw_value:
        return _DEFAULT_DATASET_TIMEOUT_SECONDS

    try:
        timeout = float(raw_value)
    except ValueError:
        logger.warning("dataset_timeout_invalid value=%s", raw_value)
        return _DEFAULT_DATASET_TIMEOUT_SECONDS

    if timeout <= 0:
        logger.warning("dataset_timeout_invalid value=%s", raw_value)
        return _DEFAULT_DATASET_TIMEOUT_SECONDS
    return timeout


def host() -> str:
    """Return the interface the HTTP server binds to."""
    return (get_env("HOST", "0.0.0.0") or "0.0.0.0").strip() or "0.0.0.0"


def port() -> int:
    """Return the HTTP server port with safe default."""
    raw_value = (get_env("PORT", "") or "").strip()
    try:
        return int(raw_value) if raw_value else _DEFAULT_PORT
    except ValueError:
        return _DEFAULT_PORT


def log_level() -> str:
    """Return configured root log level name."""
    return (get_env("LOG_LEVEL", "INFO") or "INFO").strip().upper() or "INFO"
