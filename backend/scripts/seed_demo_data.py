"""
Seed demo users, pet listings and a few notifications so the marketplace is
not empty on first run. Run after migrations (or after the app has created
the tables at startup).

Usage (from repo root):
  cd backend && python scripts/seed_demo_data.py
"""
import asyncio
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.types import generate_id, utcnow
from petmagic.domain.notifications.models import NotificationType
from petmagic.infra.db.base import AsyncSessionLocal
from petmagic.infra.db.models import NotificationModel, PetModel, UserModel

DEMO_PASSWORD = "password"

USERS = [
    {
        "key": "john",
        "name": "John Doe",
        "email": "john@gmail.com",
        "profile_image": "https://randomuser.me/api/portraits/men/1.jpg",
    },
    {
        "key": "jane",
        "name": "Jane Smith",
        "email": "jane@gmail.com",
        "profile_image": "https://randomuser.me/api/portraits/women/1.jpg",
    },
    {
        "key": "ajay",
        "name": "Ajay",
        "email": "ajay@gmail.com",
        "profile_image": None,
    },
]

# owner is a USERS key; age_days is how long ago the listing went up
PETS = [
    {
        "name": "Buddy",
        "age": 3,
        "breed": "Golden Retriever",
        "type": "dog",
        "description": "Buddy is a friendly and energetic dog who loves to play and go for walks. "
        "He is great with children and other pets.",
        "location": "New York, NY",
        "image": "https://images.unsplash.com/photo-1543466835-00a7907e9de1?auto=format&fit=crop&q=80&w=500",
        "owner": "john",
        "age_days": 7,
    },
    {
        "name": "Whiskers",
        "age": 2,
        "breed": "Siamese",
        "type": "cat",
        "description": "Whiskers is a curious and affectionate cat. She enjoys lounging in sunny spots "
        "and is fully litter trained.",
        "location": "Boston, MA",
        "image": "https://images.unsplash.com/photo-1535268647677-300dbf3d78d1?auto=format&fit=crop&q=80&w=500",
        "owner": "jane",
        "age_days": 3,
    },
    {
        "name": "Max",
        "age": 1,
        "breed": "Beagle",
        "type": "dog",
        "description": "Max is a playful puppy with lots of energy. He has mastered basic commands.",
        "location": "San Francisco, CA",
        "image": "https://images.unsplash.com/photo-1582562124811-c09040d0a901?auto=format&fit=crop&q=80&w=500",
        "owner": "jane",
        "age_days": 5,
    },
    {
        "name": "Daisy",
        "age": 4,
        "breed": "Persian",
        "type": "cat",
        "description": "Daisy is a gentle and calm cat who enjoys peaceful environments.",
        "location": "Chicago, IL",
        "image": "https://images.unsplash.com/photo-1596854372407-baba7fef6e51?auto=format&fit=crop&q=80&w=500",
        "owner": "john",
        "age_days": 2,
    },
]

DEMO_EMAILS = [u["email"] for u in USERS]


async def run_seed(session: AsyncSession) -> dict | None:
    """Seed demo data into the given session. Caller must commit.
    Returns dict with user_ids and pet_ids; None if skipped (a demo user already exists)."""
    existing = await session.execute(select(UserModel.id).where(UserModel.email.in_(DEMO_EMAILS)))
    if existing.first() is not None:
        return None

    now = utcnow()
    users = {}
    for u in USERS:
        model = UserModel(
            name=u["name"],
            email=u["email"],
            password=DEMO_PASSWORD,
            profile_image=u["profile_image"],
            created_at=now,
        )
        session.add(model)
        users[u["key"]] = model
    await session.flush()

    pets = {}
    for p in PETS:
        model = PetModel(
            name=p["name"],
            age=p["age"],
            breed=p["breed"],
            type=p["type"],
            description=p["description"],
            location=p["location"],
            image=p["image"],
            owner_id=users[p["owner"]].id,
            created_at=now - timedelta(days=p["age_days"]),
        )
        session.add(model)
        pets[p["name"]] = model
    await session.flush()

    # Jane is waiting to hear back about Buddy; John has an old welcome message.
    session.add_all(
        [
            NotificationModel(
                id=generate_id(),
                type=NotificationType.INTEREST.value,
                message="Jane Smith expressed interest in adopting Buddy.",
                pet_id=pets["Buddy"].id,
                from_user_id=users["jane"].id,
                user_id=users["john"].id,
                is_read=False,
                created_at=now - timedelta(hours=12),
            ),
            NotificationModel(
                id=generate_id(),
                type=NotificationType.SYSTEM.value,
                message="Welcome to PetMagic! Start by adding a pet or browsing available pets.",
                user_id=users["john"].id,
                is_read=True,
                created_at=now - timedelta(days=2),
            ),
        ]
    )
    await session.flush()

    return {
        "user_ids": {key: m.id for key, m in users.items()},
        "pet_ids": {name: m.id for name, m in pets.items()},
    }


async def seed_demo_data():
    """CLI entrypoint: open session, run_seed, commit, print."""
    async with AsyncSessionLocal() as session:
        result = await run_seed(session)
        if result is None:
            print("A demo user already exists; nothing to do.")
            return
        await session.commit()
        print("\nDemo data seeded successfully.")
        print(f"   User IDs: {result['user_ids']}")
        print(f"   Pet IDs: {result['pet_ids']}")
        print(f"   All demo users log in with password '{DEMO_PASSWORD}'.")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
