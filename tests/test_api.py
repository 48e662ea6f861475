"""
Tests for the API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from claimsense.exceptions import StoreLoadError
from claimsense.main import app
from claimsense.pipeline.models import AnalysisResult
from claimsense.pipeline.orchestrator import ClaimAnalysisPipeline


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


def analyze(client, **overrides):
    body = {"claim_type": "Flood", "jurisdiction": "Florida", "amount": 280000, "clock_hour": 10}
    body.update(overrides)
    return client.post("/api/claims/analyze", json=body)


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check_structure(self, client):
        """Test health endpoint returns expected structure."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["knowledge_excerpts"] == 5
        assert data["historical_cases"] == 5
        assert "version" in data
        assert "timestamp" in data

    def test_health_degraded(self, client, mocker):
        """Test health reports degraded when a table cannot be loaded."""
        mocker.patch(
            "claimsense.api.routes.get_history_store",
            side_effect=StoreLoadError("Data file not found"),
        )

        data = client.get("/health").json()

        assert data["status"] == "degraded"

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert "name" in data
        assert "version" in data
        assert "docs" in data


class TestAnalyzeEndpoint:
    """Tests for claim analysis endpoint."""

    def test_flood_florida_claim(self, client):
        """Test analysis of a $280K Florida flood claim."""
        response = analyze(client)
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["clock_hour"] == 10
        assert [k["id"] for k in data["knowledge"]] == [1, 2, 3]
        assert data["knowledge"][0]["match_score"] == 2
        assert data["knowledge"][0]["citation"] == "Florida_Flood_Policy_2024.pdf, Page 12, ¶3"
        assert data["memory"]["total_cases"] == 4
        assert data["memory"]["failed_cases"] == 2
        assert data["memory"]["failure_rate"] == 50
        assert data["memory"]["avg_resolution_time"] == 5.0
        assert data["risk"]["score"] == 65
        assert data["risk"]["tier"] == "HIGH"
        assert len(data["risk"]["factors"]) == 2
        assert len(data["risk"]["recommended_actions"]) == 3

    def test_string_amount(self, client):
        """Test the amount may be sent as text."""
        data = analyze(client, amount="280000").json()

        assert data["risk"]["score"] == 65

    def test_non_numeric_amount(self, client):
        """Test a non-numeric amount degrades to time-only scoring."""
        data = analyze(client, amount="abc", clock_hour=17).json()

        assert data["memory"]["total_cases"] == 0
        assert data["risk"]["score"] == 10
        assert [f["description"] for f in data["risk"]["factors"]] == ["Decision made near end of business day"]

    def test_no_matches(self, client):
        """Test a claim with no relevant policy or history."""
        data = analyze(client, claim_type="Storm", jurisdiction="Texas", amount=100000).json()

        assert data["knowledge"] == []
        assert data["memory"]["issue_frequency"] == []
        assert data["risk"]["score"] == 0
        assert data["risk"]["tier"] == "MODERATE"

    def test_clock_hour_optional(self, client):
        """Test the server clock is used when no hour is sent."""
        response = client.post(
            "/api/claims/analyze",
            json={"claim_type": "Flood", "jurisdiction": "Florida", "amount": 280000},
        )
        assert response.status_code == 200
        assert 0 <= response.json()["clock_hour"] <= 23

    @pytest.mark.parametrize("field", ["claim_type", "jurisdiction", "amount"])
    def test_required_fields(self, client, field):
        """Test each case field is required."""
        body = {"claim_type": "Flood", "jurisdiction": "Florida", "amount": 280000}
        del body[field]

        response = client.post("/api/claims/analyze", json=body)
        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["claim_type", "jurisdiction", "amount"])
    def test_blank_fields_rejected(self, client, field):
        """Test blank case fields are rejected."""
        response = analyze(client, **{field: "   "})
        assert response.status_code == 422

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean_amount_rejected(self, client, value):
        """Test a JSON boolean is not accepted as an amount."""
        response = analyze(client, amount=value)
        assert response.status_code == 422

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_clock_hour_range(self, client, hour):
        """Test the clock hour must be 0-23."""
        response = analyze(client, clock_hour=hour)
        assert response.status_code == 422

    def test_pipeline_failure(self, client, mocker):
        """Test a failed analysis maps to a server error."""
        mocker.patch.object(
            ClaimAnalysisPipeline,
            "process",
            return_value=AnalysisResult(
                success=False, claim_type="Flood", jurisdiction="Florida", errors=["history offline"]
            ),
        )

        response = analyze(client)
        assert response.status_code == 500
        assert response.json()["detail"] == "history offline"

    def test_tables_unavailable(self, client, mocker):
        """Test unavailable data tables map to 503."""
        mocker.patch(
            "claimsense.pipeline.orchestrator.get_knowledge_store",
            side_effect=StoreLoadError("Data file not found"),
        )

        response = analyze(client)
        assert response.status_code == 503

        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Data tables unavailable"
        assert "Data file not found" in data["detail"]


class TestKnowledgeEndpoints:
    """Tests for knowledge store endpoints."""

    def test_list_knowledge(self, client):
        """Test listing all excerpts."""
        data = client.get("/api/knowledge").json()

        assert data["count"] == 5
        assert data["excerpts"][0]["source_document"] == "Florida_Flood_Policy_2024.pdf"

    def test_filter_by_category(self, client):
        """Test listing excerpts of one category."""
        data = client.get("/api/knowledge", params={"category": "sop"}).json()

        assert data["count"] == 1
        assert data["excerpts"][0]["id"] == 2

    def test_get_excerpt(self, client):
        """Test getting one excerpt."""
        response = client.get("/api/knowledge/5")
        assert response.status_code == 200
        assert response.json()["category"] == "compliance"

    def test_get_nonexistent_excerpt(self, client):
        """Test getting an excerpt that doesn't exist."""
        response = client.get("/api/knowledge/99")
        assert response.status_code == 404


class TestHistoryEndpoint:
    """Tests for decision history endpoint."""

    def test_list_history(self, client):
        """Test the first page of history."""
        data = client.get("/api/history", params={"limit": 2}).json()

        assert data["count"] == 2
        assert data["total"] == 5
        assert data["cases"][0]["outcome"] == "Rejected by manager"
        assert data["cases"][0]["recorded_at"] == "2024-01-15"

    def test_history_pagination(self, client):
        """Test skipping into the history."""
        data = client.get("/api/history", params={"skip": 4, "limit": 10}).json()

        assert data["count"] == 1
        assert data["cases"][0]["claim_amount"] == 230000

    def test_invalid_limit(self, client):
        """Test the page size must be positive."""
        response = client.get("/api/history", params={"limit": 0})
        assert response.status_code == 422


class TestAPIDocumentation:
    """Tests for API documentation."""

    def test_openapi_schema(self, client):
        """Test OpenAPI schema is available."""
        response = client.get("/openapi.json")
        assert response.status_code == 200

        schema = response.json()
        assert "openapi" in schema
        assert "/api/claims/analyze" in schema["paths"]

    def test_docs_available(self, client):
        """Test Swagger docs are available."""
        response = client.get("/docs")
        assert response.status_code == 200
