"""Application settings read from the environment.

PROTEAN_ENV picks an overlay of defaults, the same variable that selects the
domain's database overlay in ``domain.toml``. Any variable set explicitly in
the environment (or in a ``.env`` file) wins over the overlay:
  - "development" → schema auto-created, fake email
  - "test"        → fake email, cheap bcrypt
  - "production"  → secure cookies, SMTP email, no schema auto-creation
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

_ENV_DEFAULTS = {
    "development": {
        "SESSION_COOKIE_SECURE": "false",
        "AUTO_CREATE_SCHEMA": "true",
        "EMAIL_BACKEND": "fake",
    },
    "test": {
        "SESSION_COOKIE_SECURE": "false",
        "AUTO_CREATE_SCHEMA": "true",
        "EMAIL_BACKEND": "fake",
        "BCRYPT_ROUNDS": "4",
    },
    "staging": {
        "SESSION_COOKIE_SECURE": "true",
        "AUTO_CREATE_SCHEMA": "false",
        "EMAIL_BACKEND": "smtp",
    },
    "production": {
        "SESSION_COOKIE_SECURE": "true",
        "AUTO_CREATE_SCHEMA": "false",
        "EMAIL_BACKEND": "smtp",
    },
}


def current_env() -> str:
    return os.getenv("PROTEAN_ENV", "development").lower()


def _get(key: str, default: str | None = None) -> str | None:
    overlay = _ENV_DEFAULTS.get(current_env(), {})
    return os.getenv(key, overlay.get(key, default))


def _get_bool(key: str, default: str = "false") -> bool:
    return (_get(key, default) or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    env: str
    auto_create_schema: bool
    session_cookie_name: str
    session_ttl_hours: int
    session_cookie_secure: bool
    database_url: str | None = None
    cors_origins: list[str] = field(default_factory=list)
    admin_email: str | None = None
    admin_password: str | None = None
    email_backend: str = "fake"
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    mail_from: str = "no-reply@storefront.local"
    store_inbox: str = "orders@storefront.local"
    frontend_url: str = "http://localhost:5173"
    bcrypt_rounds: int = 12
    password_reset_ttl_minutes: int = 60
    tax_rate: Decimal = Decimal("0.18")
    shipping_fee: Decimal = Decimal("100.00")
    free_shipping_city: str = "ahmedabad"

    @property
    def is_production(self) -> bool:
        return self.env in ("production", "staging")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process."""
    load_dotenv()

    origins = _get("CORS_ORIGINS", "*") or "*"
    smtp_user = _get("SMTP_USER")

    return Settings(
        env=current_env(),
        database_url=_get("DATABASE_URL"),
        auto_create_schema=_get_bool("AUTO_CREATE_SCHEMA"),
        session_cookie_name=_get("SESSION_COOKIE_NAME", "sid"),
        session_ttl_hours=int(_get("SESSION_TTL_HOURS", "24")),
        session_cookie_secure=_get_bool("SESSION_COOKIE_SECURE"),
        cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        admin_email=_get("ADMIN_EMAIL"),
        admin_password=_get("ADMIN_PASSWORD"),
        email_backend=_get("EMAIL_BACKEND", "fake"),
        smtp_host=_get("SMTP_HOST"),
        smtp_port=int(_get("SMTP_PORT", "587")),
        smtp_user=smtp_user,
        smtp_password=_get("SMTP_PASSWORD"),
        mail_from=_get("MAIL_FROM", "no-reply@storefront.local"),
        # Form relays land in the mailbox the relay logs in as
        store_inbox=_get("STORE_INBOX", smtp_user or "orders@storefront.local"),
        frontend_url=_get("FRONTEND_URL", "http://localhost:5173"),
        bcrypt_rounds=int(_get("BCRYPT_ROUNDS", "12")),
        password_reset_ttl_minutes=int(_get("PASSWORD_RESET_TTL_MINUTES", "60")),
        tax_rate=Decimal(_get("TAX_RATE", "0.18")),
        shipping_fee=Decimal(_get("SHIPPING_FEE", "100.00")),
        free_shipping_city=(_get("FREE_SHIPPING_CITY", "ahmedabad") or "").lower(),
    )


def reset_settings() -> None:
    """Forget cached settings (tests switch environments between sessions)."""
    get_settings.cache_clear()
