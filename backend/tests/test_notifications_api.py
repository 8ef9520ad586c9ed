"""HTTP tests for /api/notifications and /api/pets/{id}/interest."""
import pytest


def _as(user) -> dict:
    return {"X-User-Id": str(user.id)}


async def test_interest_scenario_end_to_end(client, users, buddy):
    """Jane asks for Buddy, John accepts, Jane gets a confirmation."""
    john, jane = users

    r = await client.post(f"/api/pets/{buddy.id}/interest", headers=_as(jane))
    assert r.status_code == 201, r.text
    interest_id = r.json()["id"]

    r = await client.get(f"/api/notifications/{john.id}")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 1
    assert body[0]["petId"] == buddy.id
    assert body[0]["fromUserId"] == jane.id
    assert body[0]["toUserId"] == john.id
    assert body[0]["type"] == "interest"
    assert body[0]["isRead"] is False

    r = await client.post(
        f"/api/notifications/{interest_id}/respond", json={"decision": "accept"}, headers=_as(john)
    )
    assert r.status_code == 201, r.text
    assert r.json()["type"] == "confirmation"

    r = await client.get(f"/api/notifications/{jane.id}")
    confirmation = r.json()[0]
    assert confirmation["type"] == "confirmation"
    assert confirmation["toUserId"] == jane.id
    assert confirmation["petId"] == buddy.id

    r = await client.get(f"/api/notifications/{john.id}")
    assert r.json()[0]["isRead"] is True


async def test_respond_twice_returns_409(client, users, buddy):
    john, jane = users
    r = await client.post(f"/api/pets/{buddy.id}/interest", headers=_as(jane))
    interest_id = r.json()["id"]
    path = f"/api/notifications/{interest_id}/respond"

    assert (await client.post(path, json={"decision": "reject"}, headers=_as(john))).status_code == 201
    r = await client.post(path, json={"decision": "accept"}, headers=_as(john))
    assert r.status_code == 409
    assert "already been handled" in r.json()["error"]


async def test_respond_by_someone_else_returns_403(client, users, buddy):
    _, jane = users
    r = await client.post(f"/api/pets/{buddy.id}/interest", headers=_as(jane))
    r = await client.post(
        f"/api/notifications/{r.json()['id']}/respond", json={"decision": "accept"}, headers=_as(jane)
    )
    assert r.status_code == 403


async def test_respond_with_bad_decision_returns_400(client, users, buddy):
    john, jane = users
    r = await client.post(f"/api/pets/{buddy.id}/interest", headers=_as(jane))
    r = await client.post(
        f"/api/notifications/{r.json()['id']}/respond", json={"decision": "maybe"}, headers=_as(john)
    )
    assert r.status_code == 400
    assert "error" in r.json()


async def test_interest_in_own_pet_returns_409_and_creates_nothing(client, users, buddy):
    john, _ = users
    r = await client.post(f"/api/pets/{buddy.id}/interest", headers=_as(john))
    assert r.status_code == 409
    assert r.json() == {"error": "You cannot express interest in your own pet"}
    assert (await client.get(f"/api/notifications/{john.id}")).json() == []


async def test_interest_without_user_header_returns_401(client, users, buddy):
    r = await client.post(f"/api/pets/{buddy.id}/interest")
    assert r.status_code == 401


async def test_duplicate_interest_via_create_returns_409(client, users, buddy):
    john, jane = users
    payload = {
        "type": "interest",
        "message": "Jane Smith is interested in adopting Buddy.",
        "petId": buddy.id,
        "fromUserId": jane.id,
        "toUserId": john.id,
    }
    r = await client.post("/api/notifications", json=payload)
    assert r.status_code == 201
    assert r.json()["message"] == "Notification sent"
    assert r.json()["id"]

    r = await client.post("/api/notifications", json=payload)
    assert r.status_code == 409


async def test_create_without_message_returns_400(client, users):
    john, _ = users
    r = await client.post("/api/notifications", json={"type": "system", "toUserId": john.id})
    assert r.status_code == 400
    assert "message" in r.json()["error"]


async def test_create_for_unknown_user_returns_404(client, users):
    r = await client.post("/api/notifications", json={"type": "system", "message": "hi", "toUserId": 999})
    assert r.status_code == 404


@pytest.mark.parametrize("field", ["petId", "fromUserId"])
async def test_create_with_unknown_reference_returns_404(client, users, buddy, field):
    john, jane = users
    payload = {"message": "hi", "toUserId": john.id, "petId": buddy.id, "fromUserId": jane.id}
    payload[field] = 999
    r = await client.post("/api/notifications", json=payload)
    assert r.status_code == 404
    assert (await client.get(f"/api/notifications/{john.id}")).json() == []


async def test_mark_read_and_unread_count(client, users):
    john, _ = users
    ids = []
    for text in ("one", "two"):
        r = await client.post(
            "/api/notifications", json={"type": "system", "message": text, "toUserId": john.id}
        )
        ids.append(r.json()["id"])

    assert (await client.get(f"/api/notifications/{john.id}/unread-count")).json() == {"unread": 2}

    r = await client.put(f"/api/notifications/{ids[0]}")
    assert r.status_code == 200
    assert r.json()["message"] == "Marked as read"
    # Second call is a no-op.
    assert (await client.put(f"/api/notifications/{ids[0]}")).status_code == 200

    assert (await client.get(f"/api/notifications/{john.id}/unread-count")).json() == {"unread": 1}
    r = await client.get(f"/api/notifications/{john.id}", params={"unreadOnly": "true"})
    assert [n["id"] for n in r.json()] == [ids[1]]


async def test_mark_read_unknown_returns_404(client, users):
    r = await client.put("/api/notifications/nope")
    assert r.status_code == 404
    assert r.json()["error"] == "Notification with id nope not found"


async def test_mark_all_read(client, users):
    john, jane = users
    for to in (john, john, jane):
        await client.post("/api/notifications", json={"type": "system", "message": "x", "toUserId": to.id})

    r = await client.put(f"/api/notifications/mark-all/{john.id}")
    assert r.status_code == 200
    assert r.json()["updated"] == 2

    assert all(n["isRead"] for n in (await client.get(f"/api/notifications/{john.id}")).json())
    assert not any(n["isRead"] for n in (await client.get(f"/api/notifications/{jane.id}")).json())


async def test_list_for_user_without_notifications_is_empty(client, users):
    r = await client.get("/api/notifications/4242")
    assert r.status_code == 200
    assert r.json() == []
