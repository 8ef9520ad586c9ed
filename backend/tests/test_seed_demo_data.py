"""Tests for scripts/seed_demo_data.py against the in-memory database."""
import importlib.util
from pathlib import Path

from sqlalchemy import func, select

from petmagic.domain.notifications.services import NotificationService
from petmagic.infra.db.models import PetModel, UserModel

backend_dir = Path(__file__).parent.parent


def _load_script_module(name: str):
    spec = importlib.util.spec_from_file_location(name, backend_dir / "scripts" / f"{name}.py")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


seed_module = _load_script_module("seed_demo_data")


async def test_seed_creates_users_pets_and_pending_interest(db_session):
    result = await seed_module.run_seed(db_session)
    await db_session.commit()

    assert set(result["user_ids"]) == {"john", "jane", "ajay"}
    assert set(result["pet_ids"]) == {"Buddy", "Whiskers", "Max", "Daisy"}
    assert (await db_session.execute(select(func.count()).select_from(UserModel))).scalar() == 3
    assert (await db_session.execute(select(func.count()).select_from(PetModel))).scalar() == 4

    service = NotificationService(db_session)
    john_id = result["user_ids"]["john"]
    assert await service.count_unread(john_id) == 1
    pending = (await service.list_notifications(john_id, unread_only=True))[0]
    assert pending.from_user_id == result["user_ids"]["jane"]
    assert pending.pet_id == result["pet_ids"]["Buddy"]


async def test_seed_is_skipped_when_demo_users_exist(db_session):
    assert await seed_module.run_seed(db_session) is not None
    await db_session.commit()
    assert await seed_module.run_seed(db_session) is None
