from tests.helpers import OTHER_TOKEN, auth

PNG = "data:image/png;base64,iVBORw0KGgo="


def test_log_period(client):
    r = client.post(
        "/api/period/log",
        json={"startDate": "2024-03-01", "endDate": "2024-03-05", "flow": "Medium", "symptoms": ["cramps", " "]},
        headers=auth(),
    )
    assert r.status_code == 200
    period = r.json["period"]
    assert period["startDate"] == "2024-03-01"
    assert period["flow"] == "medium"
    assert period["symptoms"] == ["cramps"]
    assert period["userId"] == "user-1"


def test_log_period_validation(client):
    r = client.post("/api/period/log", json={"startDate": "03/01/2024", "flow": "torrential"}, headers=auth())
    assert r.status_code == 400
    assert "startDate must be a YYYY-MM-DD date." in r.json["errors"]
    assert any(e.startswith("Invalid flow") for e in r.json["errors"])

    r = client.post("/api/period/log", json={"startDate": "2024-03-05", "endDate": "2024-03-01"}, headers=auth())
    assert r.status_code == 400
    assert "endDate cannot be before startDate." in r.json["errors"]

    r = client.post("/api/period/log", json={}, headers=auth())
    assert "startDate is required." in r.json["errors"]


def test_history_newest_first_and_upserts_by_start_date(client):
    for start in ("2024-01-03", "2024-03-01", "2024-02-02"):
        client.post("/api/period/log", json={"startDate": start}, headers=auth())
    client.post("/api/period/log", json={"startDate": "2024-03-01", "notes": "updated"}, headers=auth())

    periods = client.get("/api/period/history", headers=auth()).json["periods"]
    assert [p["startDate"] for p in periods] == ["2024-03-01", "2024-02-02", "2024-01-03"]
    assert periods[0]["notes"] == "updated"


def test_history_is_per_user(client):
    client.post("/api/period/log", json={"startDate": "2024-01-03"}, headers=auth())
    assert client.get("/api/period/history", headers=auth(OTHER_TOKEN)).json["periods"] == []


def test_profile_picture_round_trip(client):
    assert client.get("/api/profile/picture", headers=auth()).json == {"url": None}
    r = client.post("/api/profile/picture", json={"picture": PNG}, headers=auth())
    assert r.status_code == 200
    assert r.json["url"] == PNG
    assert client.get("/api/profile/picture", headers=auth()).json["url"] == PNG
    assert client.get("/api/profile/picture", headers=auth(OTHER_TOKEN)).json["url"] is None


def test_profile_picture_validation(client):
    assert client.post("/api/profile/picture", json={}, headers=auth()).status_code == 400
    r = client.post("/api/profile/picture", json={"picture": "https://example.com/me.png"}, headers=auth())
    assert r.status_code == 400


def test_profile_picture_size_limit(app, client):
    app.config["MAX_PROFILE_PICTURE_BYTES"] = 64
    r = client.post("/api/profile/picture", json={"picture": PNG + "A" * 100}, headers=auth())
    assert r.status_code == 400


def test_profile_requires_auth(client):
    assert client.get("/api/profile/picture").status_code == 401
