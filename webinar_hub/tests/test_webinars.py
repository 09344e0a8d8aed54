from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from webinar_hub.app import _load_criteria, app
from webinar_hub.recommendations.store import clear_states


@pytest.fixture(autouse=True)
def _no_llm(monkeypatch):
    monkeypatch.setattr(
        "webinar_hub.recommendations.service.describe_recommendations",
        lambda *args, **kwargs: None,
    )
    clear_states()


def _login(username: str = "user", password: str = "user123") -> TestClient:
    c = TestClient(app)
    c.post("/auth/login", json={"username": username, "password": password})
    return c


def _ready_client() -> TestClient:
    c = _login()
    c.get("/webinars")  # schedules the recommendation run
    return c


def _recommended_ids(body: dict) -> list[str]:
    return [r["webinar"]["webinar_id"] for r in body["recommended"]]


def _other_ids(body: dict) -> list[str]:
    return [w["webinar_id"] for w in body["others"]]


# ── Discovery view ───────────────────────────────────────────────────────


def test_webinars_requires_login():
    c = TestClient(app)
    assert c.get("/webinars").status_code == 401


def test_first_view_is_pending_then_ready():
    c = _login()

    first = c.get("/webinars").json()
    assert first["recommendation_status"] == "pending"
    assert first["recommended"] == []
    assert len(first["others"]) == 8

    second = c.get("/webinars").json()
    assert second["recommendation_status"] == "ready"
    assert _recommended_ids(second) == ["web-005", "web-003", "web-007"]
    assert _other_ids(second) == ["web-001", "web-008", "web-002", "web-004", "web-006"]


def test_recommended_items_carry_reasons():
    body = _ready_client().get("/webinars").json()
    assert body["recommended"][0]["reason"] == (
        "Matches user interests: AI, Marketing. Matches user skill level."
    )


def test_recommendations_endpoint():
    c = _login()
    assert c.get("/recommendations").json()["status"] == "pending"
    body = c.get("/recommendations").json()
    assert body["status"] == "ready"
    assert [r["webinar_id"] for r in body["recommendations"]] == ["web-005", "web-003", "web-007"]


def test_host_gets_own_recommendations():
    c = _login("host", "host123")
    c.get("/webinars")
    body = c.get("/webinars").json()
    assert _recommended_ids(body) == ["web-003", "web-007", "web-008"]


# ── Filters ──────────────────────────────────────────────────────────────


def test_industry_filter():
    c = _ready_client()
    body = c.post("/filters", json={"kind": "set_industry", "value": "Finance"}).json()
    assert body["total_filtered"] == 2
    assert _recommended_ids(body) == ["web-003"]
    assert _other_ids(body) == ["web-008"]


def test_filters_accumulate_in_session():
    c = _ready_client()
    c.post("/filters", json={"kind": "toggle_topic", "value": "AI"})
    body = c.post("/filters", json={"kind": "set_price", "value": "paid"}).json()
    assert body["criteria"]["topics"] == ["AI"]
    assert body["criteria"]["price"] == "paid"
    assert _recommended_ids(body) == ["web-007"]
    assert _other_ids(body) == []


def test_filters_do_not_add_recommendations():
    c = _ready_client()
    body = c.post("/filters", json={"kind": "toggle_skill_level", "value": "beginner"}).json()
    assert _recommended_ids(body) == []
    assert _other_ids(body) == ["web-001", "web-006"]


def test_clear_all_filters():
    c = _ready_client()
    c.post("/filters", json={"kind": "set_industry", "value": "Finance"})
    body = c.delete("/filters").json()
    assert body["criteria"]["industry"] == "all"
    assert body["total_filtered"] == 8


def test_replace_filters():
    c = _ready_client()
    body = c.put("/filters", json={
        "topics": ["Tech"],
        "industry": "all",
        "price": "all",
        "skill_levels": ["intermediate"],
    }).json()
    assert _other_ids(body) == ["web-004"]


def test_unknown_industry_yields_empty_view():
    c = _ready_client()
    body = c.post("/filters", json={"kind": "set_industry", "value": "Aerospace"}).json()
    assert body["total_filtered"] == 0
    assert body["recommended"] == []
    assert body["others"] == []


@pytest.mark.parametrize("payload", [
    {"kind": "set_price", "value": "cheap"},
    {"kind": "toggle_skill_level", "value": "expert"},
    {"kind": "set_industry"},
    {"kind": "bogus"},
])
def test_invalid_filter_edit_rejected(payload):
    c = _login()
    assert c.post("/filters", json=payload).status_code == 422


# ── Registration ─────────────────────────────────────────────────────────


def test_register_then_register_again():
    c = _login()
    first = c.post("/webinars/web-001/register")
    assert first.status_code == 200
    assert first.json()["status"] == "registered"
    assert first.json()["registered"] == ["web-001"]

    second = c.post("/webinars/web-001/register")
    assert second.status_code == 200
    assert second.json()["status"] == "already_registered"
    assert second.json()["registered"] == ["web-001"]

    assert c.get("/webinars").json()["registered"] == ["web-001"]


def test_register_unknown_webinar():
    c = _login()
    assert c.post("/webinars/web-999/register").status_code == 404


def test_register_requires_login():
    c = TestClient(app)
    assert c.post("/webinars/web-001/register").status_code == 401


def test_login_starts_clean_view():
    c = _login()
    c.post("/webinars/web-001/register")
    c.post("/filters", json={"kind": "set_industry", "value": "Finance"})
    c.post("/auth/login", json={"username": "user", "password": "user123"})
    body = c.get("/webinars").json()
    assert body["registered"] == []
    assert body["criteria"]["industry"] == "all"


# ── Metadata / catalog reload ────────────────────────────────────────────


def test_metadata_lists_filter_vocabulary():
    body = TestClient(app).get("/metadata").json()
    assert "AI" in body["topics"]
    assert "Finance" in body["industries"]
    assert body["skill_levels"] == ["beginner", "intermediate", "advanced"]
    assert body["price_modes"] == ["all", "free", "paid"]


def test_catalog_reload_restarts_recommendations():
    c = _ready_client()
    assert c.get("/recommendations").json()["status"] == "ready"
    generation = c.get("/recommendations").json()["generation"]

    host = _login("host", "host123")
    body = host.post("/catalog/reload").json()
    assert body["status"] == "reloaded"
    assert body["generation"] > generation

    state = c.get("/recommendations").json()
    assert state["status"] == "pending"
    assert state["generation"] == body["generation"]


def test_invalid_session_criteria_fall_back_and_log(caplog):
    request = SimpleNamespace(session={"criteria": {"price": "cheap"}})
    with caplog.at_level(logging.WARNING, logger="webinar_hub.app"):
        criteria = _load_criteria(request)
    assert criteria.industry == "all"
    assert criteria.price == "all"
    assert "invalid filter criteria" in caplog.text
