from datetime import timedelta

from sensai.core import auth
from sensai.core.auth import create_access_token
from sensai.db.postgres import get_db_session
from sensai.models import User


def test_missing_token_is_unauthorized(client):
    response = client.get("/api/users/profile")
    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"


def test_invalid_token_is_unauthorized(client):
    response = client.get("/api/users/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_expired_token_is_unauthorized(client):
    token = create_access_token({"sub": "user_1", "email": "a@b.com"}, expires_delta=timedelta(minutes=-5))
    response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_first_request_provisions_user(client, auth_headers):
    response = client.get("/api/users/profile", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "ada@example.com"
    assert body["name"] == "Ada Lovelace"
    assert body["is_onboarded"] is False

    # Second request reuses the same row
    client.get("/api/users/profile", headers=auth_headers)
    with get_db_session() as db:
        assert db.query(User).count() == 1


def test_token_without_email_cannot_provision(client):
    token = create_access_token({"sub": "user_9"})
    response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 400


def test_concurrent_first_login_reuses_row(monkeypatch):
    with get_db_session() as db:
        db.add(User(auth_id="user_123", email="ada@example.com", name="Ada", skills=[]))
    real_find = auth._find_user
    lookups = []

    def find_after_race(auth_id):
        lookups.append(auth_id)
        return None if len(lookups) == 1 else real_find(auth_id)

    monkeypatch.setattr(auth, "_find_user", find_after_race)

    user = auth.get_or_create_user({"sub": "user_123", "email": "ada@example.com"})

    assert user["name"] == "Ada"
    assert len(lookups) == 2
    with get_db_session() as db:
        assert db.query(User).count() == 1
