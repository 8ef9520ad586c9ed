"""HTTP tests for /api/pets."""
import pytest

NEW_PET = {
    "name": "Whiskers",
    "age": 2,
    "breed": "Siamese",
    "type": "cat",
    "description": "Curious and affectionate.",
    "location": "Boston, MA",
    "image": "https://example.com/whiskers.jpg",
}


def _as(user) -> dict:
    return {"X-User-Id": str(user.id)}


async def test_create_and_get_pet(client, users):
    _, jane = users
    r = await client.post("/api/pets", json={**NEW_PET, "ownerId": jane.id})
    assert r.status_code == 201, r.text
    pet = r.json()
    assert pet["ownerId"] == jane.id
    assert pet["type"] == "cat"
    assert "createdAt" in pet

    r = await client.get(f"/api/pets/{pet['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Whiskers"


@pytest.mark.parametrize("missing", ["name", "breed", "location"])
async def test_create_pet_missing_field_returns_400(client, users, missing):
    payload = {k: v for k, v in NEW_PET.items() if k != missing}
    r = await client.post("/api/pets", json=payload)
    assert r.status_code == 400
    assert missing in r.json()["error"]


async def test_create_pet_unknown_type_returns_400(client, users):
    r = await client.post("/api/pets", json={**NEW_PET, "type": "dragon"})
    assert r.status_code == 400


async def test_get_unknown_pet_returns_404(client):
    r = await client.get("/api/pets/999")
    assert r.status_code == 404
    assert r.json() == {"error": "Pet with id 999 not found"}


async def test_list_filters(client, users, buddy):
    _, jane = users
    await client.post("/api/pets", json={**NEW_PET, "ownerId": jane.id})

    all_pets = (await client.get("/api/pets")).json()
    assert {p["name"] for p in all_pets} == {"Buddy", "Whiskers"}

    assert [p["name"] for p in (await client.get("/api/pets", params={"type": "dog"})).json()] == ["Buddy"]
    assert len((await client.get("/api/pets", params={"type": "all"})).json()) == 2
    assert [p["name"] for p in (await client.get("/api/pets", params={"q": "boston"})).json()] == ["Whiskers"]
    assert [p["name"] for p in (await client.get("/api/pets", params={"q": "golden"})).json()] == ["Buddy"]
    assert [p["name"] for p in (await client.get("/api/pets", params={"ownerId": jane.id})).json()] == ["Whiskers"]


async def test_owner_can_update_and_delete(client, users, buddy):
    john, _ = users
    r = await client.put(f"/api/pets/{buddy.id}", json={"age": 4, "location": "Chicago, IL"}, headers=_as(john))
    assert r.status_code == 200, r.text
    assert r.json()["age"] == 4
    assert r.json()["location"] == "Chicago, IL"
    assert r.json()["name"] == "Buddy"

    r = await client.delete(f"/api/pets/{buddy.id}", headers=_as(john))
    assert r.status_code == 200
    assert (await client.get(f"/api/pets/{buddy.id}")).status_code == 404


async def test_non_owner_update_and_delete_return_403(client, users, buddy):
    _, jane = users
    r = await client.put(f"/api/pets/{buddy.id}", json={"name": "Mine now"}, headers=_as(jane))
    assert r.status_code == 403
    r = await client.delete(f"/api/pets/{buddy.id}", headers=_as(jane))
    assert r.status_code == 403
    assert (await client.get(f"/api/pets/{buddy.id}")).json()["name"] == "Buddy"


async def test_update_without_user_returns_401(client, users, buddy):
    r = await client.put(f"/api/pets/{buddy.id}", json={"age": 5})
    assert r.status_code == 401
    r = await client.put(f"/api/pets/{buddy.id}", json={"age": 5}, headers={"X-User-Id": "777"})
    assert r.status_code == 401
