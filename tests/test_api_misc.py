import pytest

from config import Config


def test_root(client):
    assert client.get("/").json() == {"message": "Backend server is running!"}


def test_achievement_defaults(client):
    achievements = client.get("/api/achievements").json()
    assert [a["id"] for a in achievements] == [
        "first_humanize", "power_user", "ai_master", "perfect_score", "text_wizard",
    ]


def test_process_achievements_without_state(client):
    res = client.post("/api/achievements/process", json={
        "action": "humanize_text",
        "data": {"aiDetection": {"gptDetector": 4, "zeroGPT": 6, "contentDetective": 2}},
    })
    assert res.status_code == 200
    by_id = {a["id"]: a for a in res.json()}
    assert by_id["first_humanize"]["unlocked"] is True
    assert by_id["power_user"]["progress"] == 1


def test_process_achievements_round_trips_client_state(client):
    state = client.get("/api/achievements").json()
    for _ in range(3):
        state = client.post("/api/achievements/process", json={
            "action": "use_option",
            "achievements": state,
        }).json()
    wizard = next(a for a in state if a["id"] == "text_wizard")
    assert wizard["progress"] == 3
    assert wizard["maxProgress"] == 5
    assert wizard["unlocked"] is False


def test_process_achievements_rejects_unknown_action(client):
    res = client.post("/api/achievements/process", json={"action": "dance"})
    assert res.status_code == 400


def test_admin_login_disabled_without_config(client):
    res = client.post("/api/auth/admin", json={"email": "a@b.c", "password": "x"})
    assert res.status_code == 403


@pytest.fixture
def admin_configured(monkeypatch):
    monkeypatch.setattr(Config, "ADMIN_EMAIL", "admin@example.com")
    monkeypatch.setattr(Config, "ADMIN_PASSWORD", "s3cret")


def test_admin_login(client, admin_configured):
    res = client.post("/api/auth/admin", json={"email": "Admin@Example.com", "password": "s3cret"})
    assert res.status_code == 200
    assert res.json() == {"username": "Admin", "email": "Admin@Example.com", "isAdmin": True}


def test_admin_login_wrong_password(client, admin_configured):
    res = client.post("/api/auth/admin", json={"email": "admin@example.com", "password": "nope"})
    assert res.status_code == 401


@pytest.mark.parametrize("data", [
    {"aiDetection": 5},
    {"plagiarismScore": {"uniqueness": "abc"}},
    {"plagiarismScore": [99]},
])
def test_process_achievements_rejects_malformed_scores(client, data):
    res = client.post("/api/achievements/process", json={"action": "humanize_text", "data": data})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid request data"


def test_process_achievements_accepts_numeric_strings(client):
    res = client.post("/api/achievements/process", json={
        "action": "humanize_text",
        "data": {"plagiarismScore": {"uniqueness": "99"}},
    })
    assert res.status_code == 200
    by_id = {a["id"]: a for a in res.json()}
    assert by_id["perfect_score"]["unlocked"] is True
