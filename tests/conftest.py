import os

# Must be set before sensai modules read settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["WEBHOOK_SECRET"] = ""
os.environ["EMAIL_ADDRESS"] = ""
os.environ["EMAIL_PASSWORD"] = ""

from datetime import datetime, timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

import sensai.models  # noqa: F401
from sensai.core.auth import create_access_token
from sensai.db import mongodb
from sensai.db.postgres import Base, engine, get_db_session
from sensai.main import app
from sensai.models import IndustryInsight, User
from sensai.services import gemini_client
from sensai.services.gemini_client import GeminiClient


class FakeGeminiClient(GeminiClient):
    """
    Replaces the network call only, so the model fallback logic still runs.
    Queue strings (responses) or exceptions (raised by the next call).
    """

    def __init__(self):
        self.models = ["model-a", "model-b", "model-c"]
        self.responses = []
        self.calls = []

    def queue(self, *items):
        self.responses.extend(items)

    def _call_api(self, messages, model, max_tokens=None, temperature=None):
        self.calls.append({"model": model, "messages": messages})
        if not self.responses:
            raise AssertionError("Unexpected AI call")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def prompts(self):
        prompts = []
        for call in self.calls:
            content = call["messages"][0]["content"]
            prompts.append(content if isinstance(content, str) else content[0]["text"])
        return prompts


INSIGHT_JSON = """```json
{
  "salaryRanges": [
    {"role": "Backend Engineer", "min": 90000, "max": 160000, "median": 120000, "location": "Remote"}
  ],
  "growthRate": 12.5,
  "demandLevel": "High",
  "topSkills": ["Python", "SQL"],
  "marketOutlook": "Positive",
  "keyTrends": ["AI adoption"],
  "recommendedSkills": ["Kubernetes"]
}
```"""


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def mongo(monkeypatch):
    db = mongomock.MongoClient()["sensai_test"]
    monkeypatch.setattr(mongodb, "_db", db)
    return db


@pytest.fixture(autouse=True)
def fake_ai(monkeypatch):
    fake = FakeGeminiClient()
    monkeypatch.setattr(gemini_client, "_gemini_client", fake)
    return fake


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_headers():
    def _make(sub="user_123", email="ada@example.com", name="Ada Lovelace", **claims):
        token = create_access_token({"sub": sub, "email": email, "name": name, **claims})
        return {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def auth_headers(make_headers):
    return make_headers()


def create_insight(industry="tech-software-development", stale=False):
    now = datetime.utcnow()
    next_update = now - timedelta(days=1) if stale else now + timedelta(days=7)
    with get_db_session() as db:
        insight = IndustryInsight(
            industry=industry,
            salary_ranges=[{"role": "Engineer", "min": 1, "max": 3, "median": 2, "location": "NYC"}],
            growth_rate=5.0,
            demand_level="Medium",
            top_skills=["Go"],
            market_outlook="Neutral",
            key_trends=["Cloud"],
            recommended_skills=["Rust"],
            last_updated=now - timedelta(days=8) if stale else now,
            next_update=next_update
        )
        db.add(insight)
        db.flush()
        return insight.to_dict()


@pytest.fixture
def onboarded_user():
    """A user row matching the default auth_headers token, already onboarded."""
    create_insight()
    with get_db_session() as db:
        user = User(
            auth_id="user_123",
            email="ada@example.com",
            name="Ada Lovelace",
            industry="tech-software-development",
            experience=4,
            skills=["Python", "SQL"],
            target_role="Backend Engineer"
        )
        db.add(user)
        db.flush()
        return user.to_dict()
