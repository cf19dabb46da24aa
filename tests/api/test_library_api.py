"""Tests for the template, exercise and preference endpoints."""


def test_template_crud(client) -> None:
    created = client.post("/api/templates", json={"name": "5x5", "data": {"weeks": []}}).json()

    updated = client.put(f"/api/templates/{created['id']}", json={"name": "5x5 v2", "data": {"weeks": []}})
    assert updated.json()["name"] == "5x5 v2"
    assert [t["name"] for t in client.get("/api/templates").json()] == ["5x5 v2"]

    assert client.put("/api/templates/9999", json={"name": "x"}).status_code == 404
    assert client.delete(f"/api/templates/{created['id']}").json() == {"ok": True}
    assert client.get("/api/templates").json() == []


def test_exercise_find_or_create(client) -> None:
    first = client.post("/api/exercises", json={"name": "Bench Press"}).json()
    second = client.post("/api/exercises", json={"name": "BENCH PRESS"}).json()

    assert first["id"] == second["id"]
    assert client.post("/api/exercises", json={"name": "  "}).json() is None
    assert [e["name"] for e in client.get("/api/exercises").json()] == ["Bench Press"]

    assert client.delete(f"/api/exercises/{first['id']}").json() == {"ok": True}
    assert client.get("/api/exercises").json() == []


def test_prefs_round_trip(client, test_user_id: str) -> None:
    assert client.get("/api/prefs").json() is None

    client.put("/api/prefs", json={"last_plan_id": 3, "last_week_id": "w2", "last_day_id": "d1"})

    assert client.get("/api/prefs").json() == {
        "user_id": test_user_id,
        "last_plan_id": 3,
        "last_week_id": "w2",
        "last_day_id": "d1",
    }


def test_exercise_lookup_by_name(client) -> None:
    created = client.post("/api/exercises", json={"name": "Romanian Deadlift"}).json()
    client.post("/api/exercises", json={"name": "Squat"})

    found = client.get("/api/exercises", params={"name": " romanian deadlift "})
    assert found.status_code == 200
    assert found.json() == [{"id": created["id"], "name": "Romanian Deadlift"}]
    assert client.get("/api/exercises", params={"name": "Bench"}).json() == []
