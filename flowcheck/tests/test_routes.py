"""Tests for the HTTP API."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from server.app import app

FIXTURES = Path(__file__).parent / "fixtures"


def _fixture(name: str) -> dict:
    with open(FIXTURES / name) as f:
        return json.load(f)


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["maxNodes"] == 5000
        assert body["endpoints"]["validate"] == "/api/workflows/validate"


class TestValidateRoute:
    """Test POST /api/workflows/validate."""

    def test_valid_workflow(self, client):
        response = client.post("/api/workflows/validate", json=_fixture("valid_flow.json"))
        assert response.status_code == 200
        body = response.json()
        assert body["isValid"] is True
        assert body["score"] == 100
        assert body["errors"] == []

    def test_findings_use_camel_case(self, client):
        response = client.post("/api/workflows/validate", json=_fixture("broken_flow.json"))
        body = response.json()
        assert body["isValid"] is False
        assert body["score"] == 35
        assert {e["nodeId"] for e in body["errors"]} == {"writer", "fetch", None}

    def test_report_dangling(self, client):
        flow = {
            "nodes": [{"id": "s", "data": {"label": "Begin", "type": "Start"}}],
            "edges": [{"source": "s", "target": "ghost"}],
        }
        plain = client.post("/api/workflows/validate", json=flow).json()
        reported = client.post(
            "/api/workflows/validate", json=flow, params={"report_dangling": "true"}
        ).json()
        assert plain["info"] == []
        assert reported["info"][0]["edgeId"] == "edge_0"

    def test_malformed_graph(self, client):
        response = client.post("/api/workflows/validate", json={"nodes": [{"data": {}}]})
        assert response.status_code == 422

    def test_node_limit(self, client, monkeypatch):
        monkeypatch.setenv("FLOWCHECK_MAX_NODES", "2")
        response = client.post("/api/workflows/validate", json=_fixture("valid_flow.json"))
        assert response.status_code == 413
        assert response.json()["detail"] == "Workflow has 4 nodes, limit is 2"


class TestComplexityRoute:
    """Test POST /api/workflows/complexity."""

    def test_default_strategy(self, client):
        """layout_depth scores carry the high-complexity flag and no label."""
        response = client.post("/api/workflows/complexity", json=_fixture("valid_flow.json"))
        assert response.json() == {
            "score": 93,
            "strategy": "layout_depth",
            "label": None,
            "highComplexity": True,
        }

    def test_lone_start_is_not_labelled(self, client):
        flow = {"nodes": [{"id": "s", "data": {"label": "Begin", "type": "Start"}}], "edges": []}
        body = client.post("/api/workflows/complexity", json=flow).json()
        assert body["score"] == 16
        assert body["label"] is None
        assert body["highComplexity"] is False

    def test_category_weighted(self, client):
        """category_weighted scores carry a label and no high-complexity flag."""
        response = client.post(
            "/api/workflows/complexity",
            json=_fixture("valid_flow.json"),
            params={"strategy": "category_weighted"},
        )
        assert response.json() == {
            "score": 8,
            "strategy": "category_weighted",
            "label": "medium",
            "highComplexity": None,
        }

    def test_unknown_strategy(self, client):
        response = client.post(
            "/api/workflows/complexity",
            json=_fixture("valid_flow.json"),
            params={"strategy": "bogus"},
        )
        assert response.status_code == 422


class TestAnalyzeRoute:
    def test_analyze(self, client):
        response = client.post("/api/workflows/analyze", json=_fixture("valid_flow.json"))
        body = response.json()
        assert body["complexityScore"] == 93
        assert body["performanceMetrics"]["parallelizationPotential"] == 40
        assert body["optimizationSuggestions"] == []
        assert body["validation"]["isValid"] is True


class TestStoredWorkflowRoutes:
    """Test the routes that take a stored flowData string."""

    def test_insights(self, client):
        response = client.post("/api/workflows/insights", json={
            "workflowId": "wf-1",
            "flowData": json.dumps(_fixture("flowise_export.json")),
        })
        assert response.status_code == 200
        body = response.json()
        assert body["workflowId"] == "wf-1"
        assert [i["type"] for i in body["insights"]] == ["security", "optimization"]
        assert body["summary"] == {
            "totalInsights": 2,
            "performanceIssues": 0,
            "securityIssues": 1,
            "optimizationOpportunities": 1,
        }

    def test_insights_sections_can_be_disabled(self, client):
        response = client.post("/api/workflows/insights", json={
            "workflowId": "wf-1",
            "flowData": json.dumps(_fixture("flowise_export.json")),
            "includeSecurity": False,
        })
        assert [i["type"] for i in response.json()["insights"]] == ["optimization"]

    def test_snake_case_request_is_accepted(self, client):
        response = client.post("/api/workflows/insights", json={
            "workflow_id": "wf-1",
            "flow_data": json.dumps(_fixture("flowise_export.json")),
            "include_security": False,
        })
        assert response.status_code == 200
        assert response.json()["workflowId"] == "wf-1"
        assert [i["type"] for i in response.json()["insights"]] == ["optimization"]

    def test_optimizations_recompute_complexity(self, client):
        response = client.post("/api/workflows/optimizations", json={
            "workflowId": "wf-1",
            "flowData": json.dumps(_fixture("flowise_export.json")),
        })
        body = response.json()
        assert body["workflowId"] == "wf-1"
        assert [s["title"] for s in body["suggestions"]] == ["Add LLM cache"]
        assert body["summary"] == {
            "totalSuggestions": 1,
            "highPriority": 0,
            "mediumPriority": 1,
            "lowPriority": 0,
        }

    def test_optimizations_with_stored_complexity(self, client):
        response = client.post("/api/workflows/optimizations", json={
            "workflowId": "wf-1",
            "flowData": json.dumps(_fixture("flowise_export.json")),
            "currentComplexity": 30,
        })
        titles = [s["title"] for s in response.json()["suggestions"]]
        assert titles == ["Reduce complexity", "Add LLM cache"]

    def test_unparseable_flow_data(self, client):
        response = client.post("/api/workflows/insights", json={
            "workflowId": "wf-2",
            "flowData": "{broken",
        })
        assert response.status_code == 422
        assert response.json()["detail"].startswith("cannot analyze workflow")
