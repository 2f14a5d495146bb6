import subprocess
from pathlib import Path

from sensai.services import latex_service


RESUME = {
    "contact_info": {
        "name": "Ada Lovelace",
        "location": "London",
        "phone": "+44 20 0000 0000",
        "email": "ada@example.com",
        "github": "https://github.com/ada"
    },
    "skills": [{"text": "Python"}, {"text": "Mathematics"}],
    "experience": [{
        "title": "Analyst",
        "organization": "Analytical Engine Co",
        "start_date": "1842-01",
        "current": True,
        "description": "Wrote the first program"
    }],
    "education": [],
    "projects": []
}


def test_get_resume_not_found(client, auth_headers):
    response = client.get("/api/resume", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Resume not found"


def test_save_and_get_resume(client, auth_headers, mongo):
    response = client.put("/api/resume", json=RESUME, headers=auth_headers)

    assert response.status_code == 200
    saved = response.json()
    assert saved["contact_info"]["github"] == "https://github.com/ada"
    assert saved["achievements"] == []

    fetched = client.get("/api/resume", headers=auth_headers).json()
    assert fetched["_id"] == saved["_id"]
    assert fetched["experience"][0]["organization"] == "Analytical Engine Co"


def test_save_resume_updates_single_document(client, auth_headers, mongo):
    client.put("/api/resume", json=RESUME, headers=auth_headers)
    updated = {**RESUME, "skills": [{"text": "Go"}]}

    response = client.put("/api/resume", json=updated, headers=auth_headers)

    assert response.json()["skills"] == [{"text": "Go"}]
    assert mongo["resumes"].count_documents({}) == 1


def test_save_resume_validation(client, auth_headers):
    too_many_skills = {**RESUME, "skills": [{"text": f"s{i}"} for i in range(6)]}
    missing_end = {**RESUME, "experience": [{**RESUME["experience"][0], "current": False}]}
    bad_email = {**RESUME, "contact_info": {**RESUME["contact_info"], "email": "not-an-email"}}

    for payload in (too_many_skills, missing_end, bad_email):
        response = client.put("/api/resume", json=payload, headers=auth_headers)
        assert response.status_code == 422


def test_improve_latex_uses_stored_resume(client, auth_headers, fake_ai):
    client.put("/api/resume", json=RESUME, headers=auth_headers)
    fake_ai.queue("```latex\n\\documentclass{article}\n\\begin{document}Ada\\end{document}\n```")

    response = client.post(
        "/api/resume/latex/improve",
        json={"prompt": "Make it one page", "current_latex": "\\documentclass{article}"},
        headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["latex_code"] == "\\documentclass{article}\n\\begin{document}Ada\\end{document}"
    assert "Make it one page" in fake_ai.prompts[0]
    assert "Analytical Engine Co" in fake_ai.prompts[0]


def test_improve_latex_empty_response(client, auth_headers, fake_ai):
    fake_ai.queue("```latex\n```")

    response = client.post(
        "/api/resume/latex/improve",
        json={"prompt": "Shorter", "form_data": {}},
        headers=auth_headers
    )

    assert response.status_code == 502


def test_compile_requires_code(client, auth_headers):
    response = client.post("/api/resume/compile", json={"latex_code": "   "}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "LaTeX code is required"


def test_compile_returns_pdf(client, auth_headers, monkeypatch):
    seen = {}

    def fake_run(args, cwd, **kwargs):
        seen["args"] = args
        seen["source"] = Path(args[-1]).read_text(encoding="utf-8")
        (Path(cwd) / "resume.pdf").write_bytes(b"%PDF-1.5 fake")
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

    monkeypatch.setattr(latex_service.subprocess, "run", fake_run)

    response = client.post(
        "/api/resume/compile", json={"latex_code": "\\documentclass{article}"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.content == b"%PDF-1.5 fake"
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="resume.pdf"' in response.headers["content-disposition"]
    assert seen["args"][1] == "-interaction=nonstopmode"
    assert seen["source"] == "\\documentclass{article}"
    assert not Path(seen["args"][-1]).exists()


def test_compile_error_returns_log(client, auth_headers, monkeypatch):
    def fake_run(args, cwd, **kwargs):
        return subprocess.CompletedProcess(args, 1, stdout="! Undefined control sequence.", stderr="")

    monkeypatch.setattr(latex_service.subprocess, "run", fake_run)

    response = client.post("/api/resume/compile", json={"latex_code": "\\badcommand"}, headers=auth_headers)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"].startswith("LaTeX compilation failed")
    assert "Undefined control sequence" in detail["details"]


def test_compile_without_pdflatex(client, auth_headers, monkeypatch):
    def fake_run(args, cwd, **kwargs):
        raise FileNotFoundError("pdflatex")

    monkeypatch.setattr(latex_service.subprocess, "run", fake_run)

    response = client.post("/api/resume/compile", json={"latex_code": "\\documentclass{article}"}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "Failed to generate PDF"


def test_save_resume_requires_name_and_email(client, auth_headers, mongo):
    for field in ("name", "email"):
        contact = {**RESUME["contact_info"], field: ""}

        response = client.put("/api/resume", json={**RESUME, "contact_info": contact}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Name and email are required"
    assert mongo["resumes"].count_documents({}) == 0


def test_saved_urls_keep_user_spelling(client, auth_headers):
    contact = {**RESUME["contact_info"], "linkedin": "https://linkedin.com"}
    projects = [{
        "title": "Engine notes",
        "organization": "Self",
        "start_date": "1843-01",
        "end_date": "1843-09",
        "links": [{"label": "Notes", "url": "https://example.org"}]
    }]

    response = client.put(
        "/api/resume", json={**RESUME, "contact_info": contact, "projects": projects}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["contact_info"]["linkedin"] == "https://linkedin.com"
    assert body["projects"][0]["links"][0]["url"] == "https://example.org"


def test_save_resume_rejects_bad_url(client, auth_headers):
    contact = {**RESUME["contact_info"], "github": "not a url"}
    response = client.put("/api/resume", json={**RESUME, "contact_info": contact}, headers=auth_headers)
    assert response.status_code == 422


def test_compile_timeout(client, auth_headers, monkeypatch):
    def fake_run(args, cwd, **kwargs):
        raise subprocess.TimeoutExpired(args, kwargs["timeout"])

    monkeypatch.setattr(latex_service.subprocess, "run", fake_run)

    response = client.post("/api/resume/compile", json={"latex_code": "\\documentclass{article}"}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "Failed to generate PDF"
