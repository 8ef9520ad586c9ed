"""Tests for 1:1 chat: service and /api/messages routes."""
import pytest
from sqlalchemy import func, select

from petmagic.domain.common.errors import ConflictError, NotFoundError, ValidationError
from petmagic.domain.conversations.services import SEND_ATTEMPTS, ConversationService
from petmagic.infra.db.models import MessageModel, UserModel
from petmagic.infra.db.repositories import message_repo


@pytest.fixture
def service(db_session):
    return ConversationService(db_session)


@pytest.fixture
async def third_user(db_session):
    bob = UserModel(name="Bob Lee", email="bob@example.com", password="pw", profile_image="https://example.com/bob.png")
    db_session.add(bob)
    await db_session.commit()
    return bob.to_entity()


async def test_send_then_fetch_in_insertion_order(service, users):
    john, jane = users
    first = await service.send_message(john.id, jane.id, "Is Buddy still available?")
    second = await service.send_message(jane.id, john.id, "Yes he is!")

    forward = await service.fetch_conversation(john.id, jane.id)
    backward = await service.fetch_conversation(jane.id, john.id)

    assert [m.id for m in forward] == [first.id, second.id]
    assert forward == backward
    assert [m.sequence for m in forward] == [1, 2]


async def test_order_is_stable_when_timestamps_collide(service, db_session, users):
    john, jane = users
    first = await service.send_message(john.id, jane.id, "a")
    second = await service.send_message(jane.id, john.id, "b")
    # Force identical timestamps; sequence decides.
    await db_session.execute(
        MessageModel.__table__.update().values(created_at=first.created_at)
    )
    await db_session.commit()

    fetched = await service.fetch_conversation(jane.id, john.id)
    assert [m.id for m in fetched] == [first.id, second.id]


async def test_fetch_after_sequence(service, users):
    john, jane = users
    for text in ("one", "two", "three"):
        await service.send_message(john.id, jane.id, text)
    newer = await service.fetch_conversation(john.id, jane.id, after_sequence=1)
    assert [m.content for m in newer] == ["two", "three"]


@pytest.mark.parametrize("content", ["", "   ", None])
async def test_send_empty_content_persists_nothing(service, db_session, users, content):
    john, jane = users
    with pytest.raises(ValidationError):
        await service.send_message(john.id, jane.id, content)
    count = (await db_session.execute(select(func.count()).select_from(MessageModel))).scalar()
    assert count == 0


async def test_send_to_self_rejected(service, users):
    john, _ = users
    with pytest.raises(ValidationError):
        await service.send_message(john.id, john.id, "talking to myself")


async def test_send_to_unknown_user(service, users):
    john, _ = users
    with pytest.raises(NotFoundError):
        await service.send_message(john.id, 999, "hello?")


async def test_sequence_collision_is_retried(service, users, monkeypatch):
    john, jane = users
    await service.send_message(john.id, jane.id, "first")
    original = message_repo._next_sequence
    calls = []

    async def _racing_next_sequence(session, key):
        calls.append(key)
        if len(calls) == 1:
            return 1  # a concurrent sender already stored sequence 1
        return await original(session, key)

    monkeypatch.setattr(message_repo, "_next_sequence", _racing_next_sequence)
    second = await service.send_message(jane.id, john.id, "second")

    assert second.sequence == 2
    assert len(calls) == 2
    conversation = await service.fetch_conversation(john.id, jane.id)
    assert [(m.content, m.sequence) for m in conversation] == [("first", 1), ("second", 2)]


async def test_sequence_collision_gives_up_after_retries(service, db_session, users, monkeypatch):
    john, jane = users
    await service.send_message(john.id, jane.id, "first")
    calls = []

    async def _always_taken(session, key):
        calls.append(key)
        return 1

    monkeypatch.setattr(message_repo, "_next_sequence", _always_taken)
    with pytest.raises(ConflictError):
        await service.send_message(jane.id, john.id, "second")

    assert len(calls) == SEND_ATTEMPTS
    count = (await db_session.execute(select(func.count()).select_from(MessageModel))).scalar()
    assert count == 1


async def test_threads_one_entry_per_counterpart(service, users, third_user):
    john, jane = users
    bob = third_user
    await service.send_message(john.id, jane.id, "1")
    await service.send_message(jane.id, john.id, "2")
    await service.send_message(jane.id, john.id, "3")
    await service.send_message(bob.id, john.id, "hi from bob")

    threads = await service.list_threads(john.id)
    assert [t.counterpart_id for t in threads] == [bob.id, jane.id]
    assert threads[0].name == "Bob Lee"
    assert threads[0].profile_image == "https://example.com/bob.png"

    assert [t.counterpart_id for t in await service.list_threads(bob.id)] == [john.id]
    assert await service.list_threads(12345) == []


async def test_messages_api_round_trip(client, users):
    john, jane = users
    r = await client.post(
        "/api/messages", json={"senderId": john.id, "receiverId": jane.id, "content": "Hello Jane"}
    )
    assert r.status_code == 201, r.text
    assert r.json()["message"] == "Message sent"
    message_id = r.json()["id"]

    r = await client.get(f"/api/messages/{jane.id}/{john.id}")
    assert r.status_code == 200
    body = r.json()
    assert [m["id"] for m in body] == [message_id]
    assert body[0]["senderId"] == john.id
    assert body[0]["receiverId"] == jane.id
    assert body[0]["content"] == "Hello Jane"

    r = await client.get(f"/api/messages/threads/{jane.id}")
    assert r.status_code == 200
    assert [(t["counterpartId"], t["name"]) for t in r.json()] == [(john.id, "John Doe")]


async def test_messages_api_empty_content_returns_400(client, users):
    john, jane = users
    r = await client.post("/api/messages", json={"senderId": john.id, "receiverId": jane.id, "content": ""})
    assert r.status_code == 400
    assert "content" in r.json()["error"]
    assert (await client.get(f"/api/messages/{john.id}/{jane.id}")).json() == []
