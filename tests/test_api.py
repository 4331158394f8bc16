"""Tests for the HTTP API."""
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import baseline_api.routes.analyze as analyze_route
from baseline_api.main import app
from baseline_api.services import ai as ai_module
from baseline_api.services import AIService
from baseline_checker import BaselineChecker

CARD_CSS = "@container (min-width: 400px) { .card { padding: 1px; } }\n"


@pytest.fixture
def client():
    return TestClient(app)


class TestBasics:

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert "Baseline Compatibility Checker API" in r.text

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestFeatureLookup:

    def test_get_feature(self, client):
        data = client.get("/features/container-queries").json()
        assert data["featureId"] == "container-queries"
        assert data["baseline"] == "newly-available"
        assert data["meetsCriteria"] is False
        assert data["browsers"]["chrome"]

    def test_get_feature_with_target(self, client):
        data = client.get("/features/container-queries", params={"target": "newly-available"}).json()
        assert data["meetsCriteria"] is True

    def test_unknown_feature_is_not_404(self, client):
        r = client.get("/features/not-a-real-feature-xyz")
        assert r.status_code == 200
        assert r.json()["baseline"] is None

    def test_bad_target(self, client):
        assert client.get("/features/grid", params={"target": "soon"}).status_code == 422

    def test_post_check(self, client):
        data = client.post("/check", json={"token": "-webkit-transform"}).json()
        assert data["featureId"] == "transforms2d"
        assert data["meetsCriteria"] is True

    def test_invalid_environment_target(self, client, monkeypatch):
        monkeypatch.setenv("BASELINE_TARGET", "always")
        r = client.get("/features/grid")
        assert r.status_code == 400
        assert "Invalid configuration" in r.json()["detail"]
        assert client.post("/check", json={"token": "grid"}).status_code == 400


class TestAnalyze:

    def test_inline_code(self, client):
        r = client.post("/analyze", json={"code": CARD_CSS, "filename": "card.css"})
        assert r.status_code == 200
        data = r.json()
        assert data["filesScanned"] == 1
        assert [w["featureId"] for w in data["warnings"]] == ["container-queries"]
        assert data["summary"]["warnings"] == 1
        assert data["ai_fix_suggestions"] is None
        assert data["progressiveEnhancements"] == []

    def test_code_needs_filename(self, client):
        r = client.post("/analyze", json={"code": CARD_CSS})
        assert r.status_code == 400
        assert "filename" in r.json()["detail"]

    def test_unsupported_filename(self, client):
        assert client.post("/analyze", json={"code": "x = 1", "filename": "main.py"}).status_code == 400

    def test_exceptions_and_target(self, client):
        exempt = client.post("/analyze", json={
            "code": CARD_CSS, "filename": "card.css", "exceptions": ["container-queries"],
        }).json()
        assert exempt["warnings"] == []
        assert len(exempt["exempted"]) == 1

        newly = client.post("/analyze", json={
            "code": CARD_CSS, "filename": "card.css", "target": "newly-available",
        }).json()
        assert newly["warnings"] == []

    def test_file_paths(self, client, project):
        path = project("card.css", CARD_CSS)
        data = client.post("/analyze", json={"file_paths": [str(path)]}).json()
        assert data["warnings"][0]["location"]["file"] == str(path)

    def test_relative_file_path(self, client):
        assert client.post("/analyze", json={"file_paths": ["card.css"]}).status_code == 400

    def test_missing_file_path(self, client, tmp_path):
        r = client.post("/analyze", json={"file_paths": [str(tmp_path / "gone.css")]})
        assert r.status_code == 404

    def test_folder_path(self, client, project):
        project("src/card.css", CARD_CSS)
        project("src/app.js", "navigator.share({});\n")
        data = client.post("/analyze", json={"folder_path": str(project.root)}).json()
        assert data["filesScanned"] == 2
        assert data["summary"]["errors"] == 1

    def test_folder_path_must_be_directory(self, client, project):
        path = project("card.css", CARD_CSS)
        assert client.post("/analyze", json={"folder_path": str(path)}).status_code == 400

    def test_empty_request(self, client):
        assert client.post("/analyze", json={}).status_code == 400

    def test_generate_fixes(self, client, monkeypatch):
        calls = []

        def fake_suggest(result, target, code=None):
            calls.append((target, code))
            return "Wrap the rule in @supports."

        monkeypatch.setattr(analyze_route.ai_svc, "suggest_fixes", fake_suggest)
        data = client.post("/analyze", json={
            "code": CARD_CSS, "filename": "card.css", "generate_fixes": True,
        }).json()
        assert data["ai_fix_suggestions"] == "Wrap the rule in @supports."
        assert data["progressiveEnhancements"][0]["feature"] == "container-queries"
        assert calls == [("widely-available", CARD_CSS)]


class TestAIService:

    def _result(self):
        return BaselineChecker().analyze_sources([("card.css", CARD_CSS)])

    def test_no_api_key(self):
        assert ai_module._client() is None
        assert AIService().suggest_fixes(self._result(), "widely-available") is None

    def test_nothing_to_fix(self, monkeypatch):
        monkeypatch.setattr(ai_module, "_client", lambda: pytest.fail("client should not be built"))
        result = BaselineChecker().analyze_sources([("a.css", ".a { padding: 0; }")])
        assert AIService().suggest_fixes(result, "widely-available") is None

    def test_prompt_and_response(self, monkeypatch):
        prompts = []

        def create(**kwargs):
            prompts.append(kwargs["messages"][0]["content"])
            message = SimpleNamespace(content="  Use @media as a fallback.  ")
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

        fake = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
        monkeypatch.setattr(ai_module, "_client", lambda: fake)

        text = AIService().suggest_fixes(self._result(), "widely-available", code=CARD_CSS)
        assert text == "Use @media as a fallback."
        assert "container-queries" in prompts[0]
        assert "Use media queries as fallback" in prompts[0]
        assert CARD_CSS.strip() in prompts[0]
