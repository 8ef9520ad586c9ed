"""Readiness tests: config, packages and database checks."""
import os

import pytest

from petmagic.readiness import _check_database_async, check_config, check_packages, is_ready


def test_config_and_packages_pass():
    for name, check in (("config", check_config), ("packages", check_packages)):
        ok, msg = check()
        assert ok, f"readiness {name}: {msg}"


async def test_database_check_against_sqlite():
    assert await _check_database_async("sqlite+aiosqlite:///:memory:") == (True, "ok")


async def test_database_check_reports_failure():
    ok, msg = await _check_database_async("sqlite+aiosqlite:////nonexistent-dir/petmagic.db")
    assert ok is False
    assert msg


def test_is_ready_requires_all_required_checks():
    ready, summary = is_ready({"config": (True, "ok"), "packages": (True, "ok"), "database": (False, "down")})
    assert ready is False
    assert summary["database"] == "down"

    ready, _ = is_ready({"config": (True, "ok"), "packages": (True, "ok"), "database": (True, "ok")})
    assert ready is True


async def test_ready_endpoint(client):
    r = await client.get("/ready")
    # The app's own engine points at an in-memory SQLite database in tests.
    assert r.status_code == 200
    assert r.json()["ready"] is True


@pytest.mark.integration
async def test_readiness_against_real_database():
    """Needs INTEGRATION_DATABASE_URL pointing at a reachable database."""
    url = os.environ.get("INTEGRATION_DATABASE_URL")
    if not url:
        pytest.skip("INTEGRATION_DATABASE_URL not set")
    ok, msg = await _check_database_async(url)
    assert ok, msg
