import httpx

from sensai.api.routes import career_routes
from sensai.services.leetcode_client import LeetCodeClient


def test_skill_gap_defaults_to_profile(client, auth_headers, onboarded_user, fake_ai):
    fake_ai.queue("## Strengths\n\nPython  ")

    response = client.post("/api/career/skill-gap", json={}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"gap": "## Strengths\n\nPython", "recommendations": []}
    assert "**Backend Engineer**" in fake_ai.prompts[0]
    assert "Python, SQL" in fake_ai.prompts[0]


def test_skill_gap_requires_role(client, auth_headers, fake_ai):
    response = client.post("/api/career/skill-gap", json={"skills": "Go, Rust"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing targetRole for skill gap analysis"
    assert fake_ai.calls == []


def test_skill_gap_includes_leetcode_stats(client, auth_headers, fake_ai):
    fake_ai.queue("ok")

    client.post(
        "/api/career/skill-gap",
        json={
            "target_role": "Data Engineer",
            "skills": ["Spark"],
            "leetcode_stats": {"totalSolved": 120, "totalQuestions": 3000, "easySolved": 70,
                               "mediumSolved": 45, "hardSolved": 5}
        },
        headers=auth_headers
    )

    prompt = fake_ai.prompts[0]
    assert "Total Solved: 120 out of 3000" in prompt
    assert "Hard: 5" in prompt


def test_reports_are_stored_newest_first(client, auth_headers, fake_ai):
    fake_ai.queue("first report", "second report")
    client.post("/api/career/skill-gap", json={"target_role": "SRE"}, headers=auth_headers)
    client.post("/api/career/recommendation", json={"target_role": "SRE"}, headers=auth_headers)

    response = client.get("/api/career/reports", headers=auth_headers)

    assert response.status_code == 200
    reports = response.json()
    assert [r["kind"] for r in reports] == ["recommendation", "skill_gap"]
    assert reports[1]["content"] == "first report"
    assert reports[0]["target_role"] == "SRE"


def test_recommendation_requires_role(client, auth_headers):
    response = client.post("/api/career/recommendation", json={}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing targetRole"


def test_resume_text_upload(client, auth_headers, fake_ai):
    fake_ai.queue("Learn Kubernetes")

    response = client.post(
        "/api/career/resume-analysis",
        files={"file": ("resume.txt", b"Five years of Django and Postgres", "text/plain")},
        data={"target_role": "Platform Engineer"},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json() == {"gap": "Learn Kubernetes", "filename": "resume.txt"}
    assert "Five years of Django and Postgres" in fake_ai.prompts[0]


def test_resume_upload_rejects_unknown_type(client, auth_headers):
    response = client.post(
        "/api/career/resume-analysis",
        files={"file": ("resume.rtf", b"{\\rtf1}", "application/rtf")},
        headers=auth_headers
    )
    assert response.status_code == 400


def test_resume_image_analysis(client, auth_headers, fake_ai):
    fake_ai.queue("Nice layout")

    response = client.post(
        "/api/career/resume-image-analysis",
        files={"resume_image": ("resume.png", b"\x89PNG fake", "image/png")},
        data={"target_company": "Acme", "target_role": "SRE"},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json() == {"gap": "Nice layout"}
    content = fake_ai.calls[0]["messages"][0]["content"]
    assert "**Acme** as **SRE**" in content[0]["text"]
    assert content[1]["image_url"]["url"].startswith("data:image/png;base64,")


def test_resume_image_rejects_other_types(client, auth_headers, fake_ai):
    response = client.post(
        "/api/career/resume-image-analysis",
        files={"resume_image": ("resume.gif", b"GIF89a", "image/gif")},
        headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only PNG, JPG, and JPEG images are allowed."
    assert fake_ai.calls == []


def _leetcode(monkeypatch, handler):
    client = LeetCodeClient(base_url="https://leetcode.test", transport=httpx.MockTransport(handler))
    monkeypatch.setattr(career_routes, "get_leetcode_client", lambda: client)


def test_leetcode_solved_stats(client, monkeypatch):
    def handler(request):
        assert request.url.path == "/ada/solved"
        return httpx.Response(200, json={
            "solvedProblem": 10, "totalSolved": 10, "easySolved": 6, "mediumSolved": 3, "hardSolved": 1
        })

    _leetcode(monkeypatch, handler)

    response = client.get("/api/career/leetcode-stats", params={"username": "ada"})

    assert response.status_code == 200
    assert response.json() == {
        "totalSolved": 10, "totalQuestions": None, "easySolved": 6, "mediumSolved": 3, "hardSolved": 1
    }


def test_leetcode_topic_stats(client, monkeypatch):
    def handler(request):
        assert request.url.path == "/skillStats/ada"
        return httpx.Response(200, json={"data": [{"tagName": "Graphs", "problemsSolved": 4}]})

    _leetcode(monkeypatch, handler)

    response = client.get("/api/career/leetcode-stats", params={"username": "ada", "topics": "true"})

    assert response.json() == {"topics": [{"tagName": "Graphs", "problemsSolved": 4}]}


def test_leetcode_upstream_error(client, monkeypatch):
    _leetcode(monkeypatch, lambda request: httpx.Response(502))

    response = client.get("/api/career/leetcode-stats", params={"username": "ada"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch LeetCode data"


def test_leetcode_requires_username(client):
    response = client.get("/api/career/leetcode-stats")
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing username"


def test_resume_formats(client):
    body = client.get("/api/career/resume-formats").json()
    assert body["max_size_mb"] == 5
    assert "image/png" in body["image_types"]


def test_resume_upload_size_limit(client, auth_headers, fake_ai):
    too_big = b"a" * (5 * 1024 * 1024 + 1)

    response = client.post(
        "/api/career/resume-analysis",
        files={"file": ("resume.txt", too_big, "text/plain")},
        data={"target_role": "SRE"},
        headers=auth_headers
    )

    assert response.status_code == 413
    assert response.json()["detail"] == "File too large. Maximum size: 5MB"
    assert fake_ai.calls == []
