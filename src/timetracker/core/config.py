# File: src/timetracker/core/config.py
"""Environment configuration.

Everything is read from the process environment. The static user accounts
are loaded once at startup by ``load_accounts`` and never change afterwards.
"""

import os
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from timetracker.core.errors import ConfigError

if TYPE_CHECKING:
    from timetracker.models.user import UserAccount

DEFAULT_DATABASE_URL = "postgresql+asyncpg://timetracker:dev_password_change_in_prod@db:5432/timetracker_dev"
DEFAULT_CORS_ORIGINS = "http://localhost:5173"
DEFAULT_CONTRACTED_HOURS = 60


def get_database_url() -> str:
    """Return an async SQLAlchemy URL built from DATABASE_URL."""
    url = os.getenv("DATABASE_URL", "")

    # Hosting providers hand out postgres:// or postgresql:// but asyncpg needs postgresql+asyncpg://
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url or DEFAULT_DATABASE_URL


def get_cors_origins() -> list[str]:
    """Comma-separated CORS_ALLOWED_ORIGINS as a list."""
    raw = os.getenv("CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_contracted_hours() -> int:
    """Contracted hours reported next to the total worked."""
    raw = os.getenv("CONTRACTED_HOURS")
    if not raw:
        return DEFAULT_CONTRACTED_HOURS
    try:
        hours = int(raw)
    except ValueError as exc:
        raise ConfigError(f"CONTRACTED_HOURS must be an integer, got {raw!r}") from exc
    if hours < 0:
        raise ConfigError("CONTRACTED_HOURS cannot be negative")
    return hours


def get_environment() -> str:
    return os.getenv("ENVIRONMENT", "development")


def _account_password_hash(prefix: str) -> str:
    """Resolve <PREFIX>_PASSWORD_HASH, falling back to hashing <PREFIX>_PASSWORD."""
    from timetracker.core.security import hash_password, is_supported_hash

    password_hash = os.getenv(f"{prefix}_PASSWORD_HASH", "").strip()
    if password_hash:
        if not is_supported_hash(password_hash):
            raise ConfigError(f"{prefix}_PASSWORD_HASH is not an Argon2 or bcrypt hash")
        return password_hash

    password = os.getenv(f"{prefix}_PASSWORD")
    if password:
        return hash_password(password)

    raise ConfigError(f"Set {prefix}_PASSWORD_HASH or {prefix}_PASSWORD to configure the account")


def load_accounts() -> Mapping[str, "UserAccount"]:
    """Build the read-only username -> account mapping for the two static accounts."""
    from timetracker.models.user import UserAccount, UserRole

    accounts = {}
    for prefix, default_username, role in (
        ("ADMIN", "admin", UserRole.ADMIN),
        ("CLIENT", "client", UserRole.CLIENT),
    ):
        username = os.getenv(f"{prefix}_USERNAME", default_username).strip()
        if not username:
            raise ConfigError(f"{prefix}_USERNAME cannot be empty")
        if username in accounts:
            raise ConfigError(f"Duplicate username configured: {username}")
        accounts[username] = UserAccount(
            username=username,
            role=role,
            password_hash=_account_password_hash(prefix),
        )

    return MappingProxyType(accounts)
