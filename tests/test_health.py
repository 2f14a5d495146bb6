from sensai import main


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_reports_databases(client, monkeypatch):
    monkeypatch.setattr(main, "test_mongo_connection", lambda: False)

    body = client.get("/health").json()

    assert body["postgres"] == "connected"
    assert body["mongodb"] == "disconnected"
