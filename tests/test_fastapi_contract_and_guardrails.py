"""
Test Suite: FastAPI Contract & Guardrail Validation

Purpose
-------
Validates the public HTTP contract of the expert search API without calling
a language model, the expert directory or Exa.

What This Test Suite Covers
---------------------------
1. Health & CORS
   - `/health` answers, OPTIONS preflights answer 200 with CORS headers
2. Input Validation
   - Empty searches and blank web queries are rejected with 400 before any
     downstream call is made
   - Malformed bodies are rendered as 400 {error, details}
3. Filter Precedence
   - An explicit specialty replaces the model's suggested specialties
4. Error Shapes
   - Directory failures return 500 {error, experts: []}
   - A missing EXA_API_KEY returns 500 {error, details}
5. Contact Extraction Contract
   - `contactInfo` is present only when extraction was requested

How These Tests Work
--------------------
- Service dependencies are replaced through FastAPI dependency overrides
- The case analyzer runs for real against an in-memory FakeAIClient
- The directory and Exa client are in-memory fakes
"""

import pytest
from fastapi.testclient import TestClient

from matching.case_analyzer import CaseAnalyzer
from matching.expert_search import ExpertSearchService
from models.errors import DirectoryQueryError
from models.unified_response import NormalizedError
from server.app import create_app
from tools.web.contracts import WebSearchResponse, WebSearchResult
from tools.web.exa_service import WebSearchService

from fakes import SCAFFOLDING_ANALYSIS, FakeDirectory, FakeExaClient, expert_row


# -------------------------------------------------------------------
# Pytest fixtures
# -------------------------------------------------------------------


@pytest.fixture()
def directory():
    return FakeDirectory(rows=[expert_row()])


@pytest.fixture()
def exa_client():
    page = (
        "Dr. Maria Chen, PE. Reach her at mchen@chenforensics.com or (312) 555-0142. "
        "Profile: https://chenforensics.com/team"
    )
    return FakeExaClient(
        response=WebSearchResponse(
            results=[
                WebSearchResult(
                    id="https://chenforensics.com/team",
                    url="https://chenforensics.com/team",
                    title="Chen Forensics | Team",
                    text=page,
                    highlights=["Structural engineer and expert witness"],
                    highlight_scores=[0.91],
                )
            ],
            autoprompt_string="structural engineering expert witness",
        )
    )


@pytest.fixture()
def app(fake_ai_client, directory, exa_client):
    """
    Build FastAPI app and override the search service dependencies.
    """
    app = create_app()

    from server import dependencies as deps

    # Clear singleton cache to avoid cross-test leakage
    for dependency in (deps.get_expert_search_service, deps.get_web_search_service_factory):
        if hasattr(dependency, "_instance"):
            delattr(dependency, "_instance")

    expert_service = ExpertSearchService(
        analyzer=CaseAnalyzer(client=fake_ai_client, timeout_s=5),
        directory=directory,
    )
    web_service = WebSearchService(client=exa_client, timeout_s=5)

    app.dependency_overrides[deps.get_expert_search_service] = lambda: expert_service
    app.dependency_overrides[deps.get_web_search_service_factory] = lambda: (lambda: web_service)
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


# -------------------------------------------------------------------
# Health & CORS
# -------------------------------------------------------------------


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json()["status"] == "healthy"


@pytest.mark.parametrize("path", ["/search-experts", "/exa-search"])
def test_preflight_returns_cors_headers(client, path):
    r = client.options(path)
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"
    assert "Authorization" in r.headers["access-control-allow-headers"]


def test_request_id_is_echoed(client):
    r = client.get("/health", headers={"X-Request-ID": "req-abc-123"})
    assert r.headers["x-request-id"] == "req-abc-123"


def test_request_id_is_generated_when_missing(client):
    r = client.get("/health")
    assert r.headers.get("x-request-id")


# -------------------------------------------------------------------
# /search-experts
# -------------------------------------------------------------------


def test_search_requires_query_or_case_description(client, fake_ai_client, directory):
    r = client.post("/search-experts", json={"query": "", "caseDescription": "   "})
    assert r.status_code == 400
    assert r.json()["error"] == "Search query or case description is required"
    assert fake_ai_client.prompts == []
    assert directory.queries == []


def test_search_with_case_description_returns_analysis(client, directory):
    r = client.post(
        "/search-experts",
        json={
            "caseDescription": "Worker injured when scaffolding collapsed",
            "specialty": "All Specialties",
            "availability": "Any Time",
        },
    )
    assert r.status_code == 200
    body = r.json()

    assert body["caseAnalysis"] == SCAFFOLDING_ANALYSIS
    assert body["originalQuery"] is None
    assert body["query"].startswith("scaffolding failure")
    assert body["total"] == 1

    expert = body["experts"][0]
    assert expert["name"] == "Dr. Maria Chen"
    assert expert["rate"] == "$450/hr"
    assert expert["experience"] == "18 years"
    assert expert["availabilityColor"] == "green"

    query = directory.queries[0]
    assert query.specialties == ("Structural Engineering",)
    assert query.specialty_source == "ai"


def test_explicit_specialty_replaces_suggestions(client, directory):
    r = client.post(
        "/search-experts",
        json={
            "caseDescription": "Worker injured when scaffolding collapsed",
            "specialty": "Construction Safety",
        },
    )
    assert r.status_code == 200

    query = directory.queries[0]
    assert query.specialties == ("Construction Safety",)
    assert "Structural Engineering" not in query.specialties


def test_query_only_search_skips_analysis(client, fake_ai_client, directory):
    r = client.post("/search-experts", json={"query": "toxicology", "languages": ["Spanish"]})
    assert r.status_code == 200
    body = r.json()
    assert body["caseAnalysis"] is None
    assert body["query"] == "toxicology"
    assert fake_ai_client.prompts == []
    assert directory.queries[0].languages == ("Spanish",)


def test_analysis_failure_falls_back_to_raw_query(client, fake_ai_client, directory):
    fake_ai_client.error = NormalizedError(code="rate_limit", message="429", provider="fake")
    r = client.post(
        "/search-experts",
        json={"query": "crane collapse", "caseDescription": "A crane fell on a parked car"},
    )
    assert r.status_code == 200
    assert r.json()["caseAnalysis"] is None
    assert directory.queries[0].text == "crane collapse"


def test_directory_failure_returns_error_with_empty_experts(client, directory):
    directory.error = DirectoryQueryError("Database query failed: OperationalError")
    r = client.post("/search-experts", json={"query": "toxicology"})
    assert r.status_code == 500
    body = r.json()
    assert body["error"]
    assert body["experts"] == []


def test_unexpected_service_failure_returns_error_with_empty_experts(client, directory):
    directory.error = RuntimeError("connection reset")
    r = client.post("/search-experts", json={"query": "toxicology"})
    assert r.status_code == 500
    assert r.json() == {"error": "connection reset", "experts": []}


def test_malformed_body_returns_400(client, directory):
    r = client.post("/search-experts", json={"query": "toxicology", "minRate": "abc"})
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid request body"
    assert "minRate" in body["details"]
    assert directory.queries == []


# -------------------------------------------------------------------
# /exa-search
# -------------------------------------------------------------------


@pytest.mark.parametrize("payload", [{}, {"query": ""}, {"query": "   "}])
def test_exa_search_requires_query(client, exa_client, payload):
    r = client.post("/exa-search", json=payload)
    assert r.status_code == 400
    assert r.json()["error"] == "Query is required"
    assert exa_client.calls == []


def test_exa_search_without_contacts_omits_contact_info(client, exa_client):
    r = client.post("/exa-search", json={"query": "structural engineering expert witness"})
    assert r.status_code == 200
    body = r.json()

    assert body["autopromptString"] == "structural engineering expert witness"
    assert "contactInfo" not in body["results"][0]
    assert exa_client.calls == [
        {
            "query": "structural engineering expert witness",
            "num_results": 10,
            "use_autoprompt": True,
        }
    ]


def test_exa_search_with_contacts(client):
    r = client.post(
        "/exa-search",
        json={"query": "structural engineer", "numResults": 5, "extractContacts": True},
    )
    assert r.status_code == 200
    contact = r.json()["results"][0]["contactInfo"]
    assert contact["emails"] == ["mchen@chenforensics.com"]
    assert contact["phones"] == ["(312) 555-0142"]
    assert "https://chenforensics.com/team" in contact["websites"]


def test_exa_search_provider_failure_returns_500(client, exa_client):
    exa_client.error = RuntimeError("Exa API error: 502")
    r = client.post("/exa-search", json={"query": "structural engineer"})
    assert r.status_code == 500
    assert r.json()["error"] == "Exa API error: 502"


def test_exa_search_missing_key_returns_500_with_details(monkeypatch):
    from config.config import Config
    from server import dependencies as deps

    if hasattr(deps.get_web_search_service_factory, "_instance"):
        delattr(deps.get_web_search_service_factory, "_instance")

    config = Config()
    config.EXA_API_KEY = None

    app = create_app()
    app.dependency_overrides[deps.get_app_config] = lambda: config
    client = TestClient(app)

    r = client.post("/exa-search", json={"query": "structural engineer"})
    assert r.status_code == 500
    body = r.json()
    assert "EXA_API_KEY" in body["error"]
    assert body["details"]

    # Query validation still runs first
    r = client.post("/exa-search", json={"query": ""})
    assert r.status_code == 400


# -------------------------------------------------------------------
# Degraded configuration
# -------------------------------------------------------------------


@pytest.fixture()
def fresh_expert_service():
    from server import dependencies as deps

    if hasattr(deps.get_expert_search_service, "_instance"):
        delattr(deps.get_expert_search_service, "_instance")
    yield
    if hasattr(deps.get_expert_search_service, "_instance"):
        delattr(deps.get_expert_search_service, "_instance")


@pytest.mark.parametrize("model_type", ["bogus", "claude"])
def test_unknown_model_type_still_searches(monkeypatch, fresh_expert_service, model_type):
    import db.directory
    from config.config import Config
    from server import dependencies as deps

    directory = FakeDirectory(rows=[expert_row()])
    monkeypatch.setattr(db.directory, "ExpertDirectory", lambda **kwargs: directory)

    config = Config()
    config.MODEL_TYPE = model_type

    app = create_app()
    app.dependency_overrides[deps.get_app_config] = lambda: config
    client = TestClient(app)

    r = client.post(
        "/search-experts",
        json={"query": "toxicology", "caseDescription": "Overdose at a clinic"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["caseAnalysis"] is None
    assert body["query"] == "toxicology"
    assert body["total"] == 1


def test_unhandled_error_keeps_cors_headers():
    from server import dependencies as deps

    def broken_service():
        raise RuntimeError("service wiring failed")

    app = create_app()
    app.dependency_overrides[deps.get_expert_search_service] = broken_service
    client = TestClient(app, raise_server_exceptions=False)

    r = client.post("/search-experts", json={"query": "toxicology"})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
    assert r.headers["access-control-allow-origin"] == "*"
