from datetime import datetime

from sensai.db.postgres import get_db_session
from sensai.models import IndustryInsight
from sensai.services.insight_service import IndustryInsightService, validate_insights
from tests.conftest import INSIGHT_JSON, create_insight


def test_validate_insights_sanitizes_ai_output():
    data = validate_insights({
        "salaryRanges": [{"role": "Analyst", "min": "50000", "max": None, "median": 60000}, "junk"],
        "growthRate": "7.5",
        "demandLevel": "high",
        "topSkills": ["Excel", "", None, "SQL"],
        "marketOutlook": "Bullish",
        "keyTrends": "not a list"
    })

    assert data["salary_ranges"] == [
        {"role": "Analyst", "min": 50000.0, "max": 0.0, "median": 60000.0, "location": ""}
    ]
    assert data["growth_rate"] == 7.5
    assert data["demand_level"] == "High"
    assert data["top_skills"] == ["Excel", "SQL"]
    assert data["market_outlook"] == "Neutral"
    assert data["key_trends"] == []
    assert data["recommended_skills"] == []


def test_insights_require_onboarding(client, auth_headers):
    response = client.get("/api/dashboard/insights", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "User industry not set"


def test_fresh_insights_are_served_from_db(client, auth_headers, onboarded_user, fake_ai):
    response = client.get("/api/dashboard/insights", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["top_skills"] == ["Go"]
    assert fake_ai.calls == []


def test_stale_insights_are_regenerated(client, auth_headers, onboarded_user, fake_ai):
    with get_db_session() as db:
        insight = db.query(IndustryInsight).one()
        insight.next_update = datetime(2000, 1, 1)
    fake_ai.queue(INSIGHT_JSON)

    response = client.get("/api/dashboard/insights", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["top_skills"] == ["Python", "SQL"]
    assert body["growth_rate"] == 12.5
    next_update = datetime.fromisoformat(body["next_update"])
    last_updated = datetime.fromisoformat(body["last_updated"])
    assert (next_update - last_updated).days == 7


def test_refresh_regenerates_fresh_insights(client, auth_headers, onboarded_user, fake_ai):
    fake_ai.queue(INSIGHT_JSON)

    response = client.post("/api/dashboard/insights/refresh", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["demand_level"] == "High"
    assert len(fake_ai.calls) == 1


def test_ai_failure_has_generic_message(client, auth_headers, onboarded_user, fake_ai):
    fake_ai.queue("{broken json")

    response = client.post("/api/dashboard/insights/refresh", headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch industry insights."


def test_all_models_overloaded_is_503(client, auth_headers, onboarded_user, fake_ai):
    with get_db_session() as db:
        db.query(IndustryInsight).one().next_update = datetime(2000, 1, 1)
    fake_ai.queue(*[Exception("503 overloaded")] * 3)

    response = client.get("/api/dashboard/insights", headers=auth_headers)

    assert response.status_code == 503
    assert "overloaded" in response.json()["detail"]


def test_insight_staleness():
    now = datetime(2024, 1, 8)
    assert IndustryInsight(next_update=datetime(2024, 1, 7)).is_stale(now)
    assert not IndustryInsight(next_update=datetime(2024, 1, 9)).is_stale(now)


def test_insights_require_token(client):
    for method, path in (("get", "/api/dashboard/insights"), ("post", "/api/dashboard/insights/refresh")):
        response = getattr(client, method)(path)
        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"


def test_concurrently_created_insight_is_reused(monkeypatch, fake_ai):
    existing = create_insight("tech-data-science")
    service = IndustryInsightService()
    lookups = []
    real_find = service._find

    def find_after_race(industry):
        lookups.append(industry)
        return None if len(lookups) == 1 else real_find(industry)

    monkeypatch.setattr(service, "_find", find_after_race)
    fake_ai.queue(INSIGHT_JSON)

    insight = service.ensure_insight("tech-data-science")

    assert insight["id"] == existing["id"]
    assert insight["top_skills"] == ["Go"]
    with get_db_session() as db:
        assert db.query(IndustryInsight).count() == 1
