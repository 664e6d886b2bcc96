"""
Integration tests for the FastAPI application.

Requests go through routes, controller and requester; only the hosted
inference API and the logging endpoint are mocked (respx).
"""

import json
from urllib.parse import parse_qs

import httpx
from respx import MockRouter

from review_insight.config import settings

INFERENCE_URL = "https://inference.test/models/falcon-7b-instruct"
SCORING_URL = "https://inference.test/models/sentiment-roberta"
LOGGING_URL = "https://script.test/macros/s/abc123/exec"


def test_root_endpoint(client):
    """Test root endpoint returns service info."""
    response = client.get("/")
    
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == settings.APP_NAME
    assert data["version"] == settings.APP_VERSION
    assert data["status"] == "running"
    assert "docs" in data
    assert "health" in data


def test_request_id_header(client):
    response = client.get("/", headers={"X-Request-ID": "req-123"})
    
    assert response.headers["X-Request-ID"] == "req-123"


def test_health_endpoint(client):
    """Health reflects the loaded dataset and missing logging URL."""
    response = client.get("/health")
    
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["services"]["dataset"] == "ok (3 reviews)"
    assert data["services"]["logging_endpoint"] == "not_configured"
    assert data["services"]["auth_policy"] in ("strict", "permissive")
    assert "timestamp" in data


def test_health_degraded_without_reviews(empty_client):
    data = empty_client.get("/health").json()
    
    assert data["status"] == "degraded"
    assert data["services"]["dataset"] == "not_loaded"


def test_random_review(client, sample_tsv_path):
    response = client.get("/reviews/random")
    
    assert response.status_code == 200
    data = response.json()
    assert data["review"]
    assert data["review"] in sample_tsv_path.read_text(encoding="utf-8")
    assert data["error"] is None


def test_random_review_not_loaded(empty_client):
    data = empty_client.get("/reviews/random").json()
    
    assert data["error"] == "Data not loaded."
    assert data["error_kind"] == "missing_configuration"


def test_analyze_sentiment(client, respx_mock: MockRouter):
    """Sentiment answer is normalized and mapped to an icon."""
    route = respx_mock.post(INFERENCE_URL).mock(
        return_value=httpx.Response(200, json=[{"generated_text": "Negative\nThe review..."}])
    )
    
    response = client.post(
        "/analyze/sentiment",
        json={"review_text": "Broke after two days.", "auth_token": "hf_abc"},
    )
    
    assert response.status_code == 200
    data = response.json()
    assert data["review"] == "Broke after two days."
    assert data["model_answer"] == "negative"
    assert data["sentiment"]["category"] == "negative"
    assert data["sentiment"]["icon"] == "👎"
    assert data["noun_density"] is None
    
    request = route.calls.last.request
    assert request.headers["authorization"] == "Bearer hf_abc"
    assert json.loads(request.content)["inputs"].endswith("Broke after two days.")


def test_analyze_nouns_after_warmup(client, respx_mock: MockRouter, retry_sleep):
    """A warming model is retried once before answering."""
    route = respx_mock.post(INFERENCE_URL).mock(
        side_effect=[
            httpx.Response(503, json={"error": "Model is currently loading"}),
            httpx.Response(200, json={"generated_text": "Low"}),
        ]
    )
    
    data = client.post("/analyze/nouns", json={"review_text": "Nice."}).json()
    
    assert data["noun_density"]["category"] == "low"
    assert data["noun_density"]["icon"] == "🔴"
    assert route.call_count == 2
    retry_sleep.assert_awaited_once_with(1.2)


def test_analysis_failure_is_a_view(client, respx_mock: MockRouter):
    """Rate limiting is reported in the view, not as an HTTP error."""
    respx_mock.post(INFERENCE_URL).mock(return_value=httpx.Response(429, text="too many"))
    
    response = client.post("/analyze/sentiment", json={"review_text": "Fine."})
    
    assert response.status_code == 200
    data = response.json()
    assert data["error_kind"] == "rate_limited"
    assert data["error"].startswith("Rate limited (429).")
    assert data["sentiment"] is None


def test_non_ascii_token_is_a_view(client, respx_mock: MockRouter):
    response = client.post(
        "/analyze/sentiment",
        json={"review_text": "Fine.", "auth_token": "hf_tökén"},
    )
    
    assert response.status_code == 200
    assert response.json()["error_kind"] == "unauthorized"
    assert len(respx_mock.calls) == 0


def test_analyze_without_review(client, respx_mock: MockRouter):
    data = client.post("/analyze/sentiment", json={}).json()
    
    assert data["error"] == "Please provide review text."
    assert len(respx_mock.calls) == 0


def test_score_endpoint(client, respx_mock: MockRouter):
    respx_mock.post(SCORING_URL).mock(
        return_value=httpx.Response(200, json=[[{"label": "POSITIVE", "score": 0.953}]])
    )
    
    data = client.post("/analyze/score", json={}).json()
    
    assert data["review"]
    assert data["sentiment"]["category"] == "positive"
    assert data["sentiment"]["text"] == "Positive (95.3% confidence)"


def test_invalid_body_returns_400(client):
    response = client.post("/analyze/sentiment", json={"review_text": ["not", "a", "string"]})
    
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "invalid_request"
    assert data["details"]


def test_save_endpoint_url(client, state_store):
    response = client.put("/config/endpoint-url", json={"url": LOGGING_URL})
    
    assert response.status_code == 200
    assert response.json()["message"] == "Saved Web App URL."
    assert state_store.get_endpoint_url() == LOGGING_URL


def test_save_invalid_endpoint_url(client):
    response = client.put("/config/endpoint-url", json={"url": "not a url"})
    
    assert response.status_code == 400
    data = response.json()
    assert data["ok"] is False
    assert data["message"] == "Invalid URL format."


def test_missing_url_body_returns_400(client):
    response = client.put("/config/endpoint-url", json={})
    
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_request"


def test_cta_event_form_encoded(client, respx_mock: MockRouter):
    """CTA click is posted as a simple form to the saved URL."""
    client.put("/config/endpoint-url", json={"url": LOGGING_URL})
    route = respx_mock.post(LOGGING_URL).mock(return_value=httpx.Response(200, text="OK"))
    
    response = client.post(
        "/events/cta/A",
        json={"meta": {"campaign": "spring"}},
        headers={"User-Agent": "pytest-agent"},
    )
    
    assert response.status_code == 200
    assert response.json()["message"] == "Logged ✅"
    
    request = route.calls.last.request
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    form = parse_qs(request.content.decode())
    assert form["event"] == ["cta_click"]
    assert form["variant"] == ["A"]
    assert form["userId"][0]
    assert form["ts"][0].isdigit()
    meta = json.loads(form["meta"][0])
    assert meta == {"page": "/events/cta/A", "ua": "pytest-agent", "campaign": "spring"}


def test_heartbeat_without_url(client, respx_mock: MockRouter):
    response = client.post("/events/heartbeat")
    
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is False
    assert data["event_status"] == "missing_url"
    assert len(respx_mock.calls) == 0


def test_heartbeat_with_url_override(client, respx_mock: MockRouter):
    route = respx_mock.post(LOGGING_URL).mock(return_value=httpx.Response(200, text="OK"))
    
    data = client.post("/events/heartbeat", json={"url": LOGGING_URL}).json()
    
    assert data["ok"] is True
    form = parse_qs(route.calls.last.request.content.decode())
    assert form["event"] == ["heartbeat"]
    assert "variant" not in form or form["variant"] == [""]


def test_cta_unknown_variant(client, respx_mock: MockRouter):
    data = client.post("/events/cta/Z").json()
    
    assert data["ok"] is False
    assert len(respx_mock.calls) == 0
