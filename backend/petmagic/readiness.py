"""Readiness checks: config, packages, database."""
import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# Result: (passed: bool, message: str)
CheckResult = tuple[bool, str]
ChecksDict = dict[str, CheckResult]

REQUIRED_CHECKS = {"config", "packages", "database"}


def check_config() -> CheckResult:
    """Load settings and read the keys the app cannot start without."""
    try:
        from petmagic.settings import get_settings
        s = get_settings()
        if not s.database_url:
            return False, "database_url is empty"
        if s.chat_poll_interval_seconds <= 0:
            return False, "chat_poll_interval_seconds must be positive"
        return True, "ok"
    except Exception as e:
        return False, str(e)


def check_packages() -> CheckResult:
    """Import critical modules: uvicorn, sqlalchemy, petmagic.main."""
    missing = []
    try:
        import uvicorn  # noqa: F401
    except ImportError:
        missing.append("uvicorn")
    try:
        import sqlalchemy  # noqa: F401
    except ImportError:
        missing.append("sqlalchemy")
    try:
        import petmagic.main  # noqa: F401
    except ImportError as e:
        missing.append(f"petmagic.main ({e})")
    if missing:
        return False, f"missing: {', '.join(missing)}"
    return True, "ok"


async def _check_database_async(database_url: str) -> CheckResult:
    """Run a trivial query against the database."""
    from petmagic.infra.db.base import build_engine
    engine = build_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return True, "ok"
    except (SQLAlchemyError, OSError) as e:
        return False, str(e)
    finally:
        await engine.dispose()


def check_database() -> CheckResult:
    """Check database connectivity using settings.database_url."""
    from petmagic.settings import get_settings
    return asyncio.run(_check_database_async(get_settings().database_url))


def run_all_checks() -> ChecksDict:
    """Run all readiness checks (sync). Returns dict of check_name -> (passed, message)."""
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": check_database(),
    }


async def run_all_checks_async() -> ChecksDict:
    """Run all readiness checks from async context (e.g. GET /ready) without a nested event loop."""
    from petmagic.settings import get_settings
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": await _check_database_async(get_settings().database_url),
    }


def is_ready(checks: ChecksDict | None = None) -> tuple[bool, dict[str, str]]:
    """True if all required checks pass. Returns (ready, name -> "ok" | error message)."""
    if checks is None:
        checks = run_all_checks()
    summary = {name: msg for name, (passed, msg) in checks.items()}
    ready = all(checks[n][0] for n in REQUIRED_CHECKS if n in checks)
    if not ready:
        logger.warning("Not ready: %s", {n: m for n, m in summary.items() if not checks[n][0]})
    return ready, summary
