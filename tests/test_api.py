"""Tests for API routes."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from src.idea_research.api import INTERNAL_MESSAGE, QUOTA_MESSAGE, create_app
from src.idea_research.config import Settings
from src.idea_research.database.models import ResearchReport
from src.idea_research.exceptions import DatabaseError, RetriesExhaustedError, SearchError
from src.idea_research.manager import ResearchManager
from src.idea_research.search_client import SearchResponse


@pytest.fixture
def manager():
    manager = MagicMock()
    manager.run.return_value = ResearchReport(keywords="drone, delivery", summary="# Report")
    return manager


@pytest.fixture
def database():
    database = MagicMock()
    database.save_research.return_value = "665f1c2e9b1e8a0012345678"
    return database


@pytest.fixture
def client(manager, database):
    return TestClient(create_app(manager=manager, database=database))


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

def test_research_success(client, manager):
    response = client.post("/api/research", json={"query": "Drone delivery"})
    assert response.status_code == 200
    assert response.json() == {"keywords": "drone, delivery", "summary": "# Report"}
    manager.run.assert_called_once_with("Drone delivery")

@pytest.mark.parametrize("body", [{}, {"query": ""}, {"query": "   "}, {"query": None}])
def test_research_missing_query(body):
    search_client = MagicMock()
    manager = ResearchManager(search_client=search_client, completion_client=MagicMock(), settings=Settings())
    client = TestClient(create_app(manager=manager, database=MagicMock()))

    response = client.post("/api/research", json=body)

    assert response.status_code == 400
    assert response.json()["error"]
    search_client.search.assert_not_called()

def test_research_malformed_body(client):
    response = client.post("/api/research", content="not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert "error" in response.json()

def test_research_quota_exhausted(client, manager):
    manager.run.side_effect = RetriesExhaustedError(3)
    response = client.post("/api/research", json={"query": "Drone delivery"})
    assert response.status_code == 429
    assert response.json() == {"error": QUOTA_MESSAGE}

def test_research_unexpected_failure(client, manager):
    manager.run.side_effect = SearchError("provider down")
    response = client.post("/api/research", json={"query": "Drone delivery"})
    assert response.status_code == 500
    assert response.json() == {"error": INTERNAL_MESSAGE}

def test_research_no_results_end_to_end(database):
    search_client = MagicMock()
    search_client.search.return_value = SearchResponse(web=[])
    completion_client = MagicMock()
    manager = ResearchManager(search_client=search_client, completion_client=completion_client, settings=Settings())
    client = TestClient(create_app(manager=manager, database=database))

    response = client.post("/api/research", json={"query": "AI note-taking apps"})

    assert response.status_code == 200
    assert response.json() == {"keywords": "note, taking, apps", "summary": "No results found."}
    completion_client.complete.assert_not_called()
    database.save_research.assert_not_called()

def test_save_record(client, database):
    response = client.post("/api/research/records", json={
        "idea": "Drone delivery",
        "keywords": "drone, delivery",
        "summary": "# Report"
    })
    assert response.status_code == 201
    assert response.json() == {"id": "665f1c2e9b1e8a0012345678"}
    database.save_research.assert_called_once_with("Drone delivery", "drone, delivery", "# Report")

def test_save_record_requires_idea(client, database):
    response = client.post("/api/research/records", json={"keywords": "x"})
    assert response.status_code == 400
    database.save_research.assert_not_called()

def test_save_record_store_unavailable(client, database):
    database.save_research.side_effect = DatabaseError("connection refused")
    response = client.post("/api/research/records", json={"idea": "Drone delivery"})
    assert response.status_code == 503
    assert "error" in response.json()
