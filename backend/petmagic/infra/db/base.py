"""Database base configuration."""
import os
import ssl
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from petmagic.settings import settings


def normalize_async_pg_url(url: str) -> str:
    """Ensure URL uses asyncpg driver; cloud often gives postgresql:// (sync)."""
    u = (url or "").strip()
    if u.startswith("postgresql://"):
        return u.replace("postgresql://", "postgresql+asyncpg://", 1)
    return u


def _ssl_context_no_verify() -> ssl.SSLContext:
    """SSL context that skips certificate verification."""
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def async_pg_connect_args(url: str) -> dict:
    """Build connect_args for asyncpg: use ssl when URL has sslmode=require (asyncpg does not accept sslmode).
    Set DATABASE_SSL_VERIFY=true to enable strict certificate verification."""
    parsed = urlparse(url)
    qs = parse_qs(parsed.query, keep_blank_values=True)
    if qs.get("sslmode") != ["require"]:
        return {}
    verify = os.environ.get("DATABASE_SSL_VERIFY", "false").strip().lower()
    if verify in ("true", "1"):
        return {"ssl": True}
    return {"ssl": _ssl_context_no_verify()}


def async_pg_url_without_sslmode(url: str) -> str:
    """Return URL with sslmode removed so asyncpg does not get unknown kwarg sslmode."""
    parsed = urlparse(url)
    qs = parse_qs(parsed.query, keep_blank_values=True)
    qs.pop("sslmode", None)
    return urlunparse(parsed._replace(query=urlencode(qs, doseq=True)))


def build_engine(database_url: str, echo: bool = False):
    """Create the async engine for a database URL (Postgres via asyncpg, SQLite via aiosqlite)."""
    url = normalize_async_pg_url(database_url)
    if not url.startswith("postgresql"):
        return create_async_engine(url, echo=echo, poolclass=NullPool)
    return create_async_engine(
        async_pg_url_without_sslmode(url),
        connect_args=async_pg_connect_args(url),
        echo=echo,
        poolclass=NullPool,
    )


engine = build_engine(settings.database_url, echo=settings.database_echo)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# Models are imported in petmagic/main.py to avoid circular imports
# (base.py -> models/__init__.py -> user.py -> base.py).
