import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    customers_api_url: str
    customers_api_timeout: int


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name} value '{raw}'. Must be an integer.") from None


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        # No default: an unset DATABASE_URL is reported to clients, never papered over.
        database_url=_getenv("DATABASE_URL", ""),
        customers_api_url=_getenv("CUSTOMERS_API_URL", ""),
        customers_api_timeout=_getenv_int("CUSTOMERS_API_TIMEOUT", 30),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "CUSTOMERS_API_URL": s.customers_api_url,
        "CUSTOMERS_API_TIMEOUT": s.customers_api_timeout,
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
        # customer payloads are tiny
        "MAX_CONTENT_LENGTH": 64 * 1024,
    }
