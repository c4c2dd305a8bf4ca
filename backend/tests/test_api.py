"""
Unit Tests for API Endpoints

Tests the FastAPI routes and responses.
"""

from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import (
    get_api_football,
    get_competition_predictions_use_case,
    get_competitions_use_case,
)
from src.api.main import allowed_origins, app
from src.application.use_cases.competitions_use_case import GetCompetitionsUseCase
from src.application.use_cases.prediction_orchestrator import (
    GetCompetitionPredictionsUseCase,
    PredictionOrchestrator,
)
from src.domain.entities.entities import Fixture, TeamSeasonStatistics
from src.domain.exceptions import StatsProviderException
from src.domain.repositories.repositories import FixtureRepository, StatsLookup
from src.infrastructure.data_sources.api_football import APIFootballConfig, APIFootballSource
from src.utils.time_utils import get_current_season


class StubStatsLookup(StatsLookup):
    async def get_season_statistics(self, league_id, season, team_id):
        return TeamSeasonStatistics(
            team_id=team_id, played_home=5, played_away=5, played_total=10,
            goals_for_home=7, goals_against_home=5, goals_for_away=6, goals_against_away=7,
        )

    async def get_recent_form(self, league_id, season, team_id, limit=5):
        return None


class StubFixtureRepository(FixtureRepository):
    def __init__(self, fixtures=None, error=None):
        self.fixtures = fixtures or []
        self.error = error

    async def get_upcoming_fixtures(self, competition):
        if self.error:
            raise self.error
        return self.fixtures


def _use_case(repository):
    return lambda: GetCompetitionPredictionsUseCase(repository, PredictionOrchestrator(StubStatsLookup()))


@pytest.fixture
def client():
    """Create test client."""
    app.dependency_overrides[get_competitions_use_case] = lambda: GetCompetitionsUseCase(season=2025)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    @pytest.mark.parametrize("api_key,configured", [("", False), ("abc", True)])
    def test_health_check(self, client, api_key, configured):
        """Test health check returns healthy status."""
        app.dependency_overrides[get_api_football] = lambda: APIFootballSource(APIFootballConfig(api_key=api_key))

        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["season"] == get_current_season()
        assert data["provider_configured"] is configured
        assert datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00")).tzinfo is not None


class TestRootEndpoint:
    """Tests for root endpoint."""

    def test_root_returns_api_info(self, client):
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Match Forecast API"
        assert data["competitions"] == ["PL", "SA", "PD", "L1", "BL1", "DED", "RO1", "RO2"]
        assert data["endpoints"]["competitions"] == "/api/v1/competitions"
        assert "provider_status" in data["endpoints"]

    def test_allowed_origins(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://forecast.example, http://localhost:3000,")

        origins = allowed_origins()

        assert origins[0] == "http://localhost:3000"
        assert "https://forecast.example" in origins
        assert len(origins) == len(set(origins))
        assert "" not in origins


class TestCompetitionsEndpoint:
    """Tests for competitions endpoint."""

    def test_get_competitions(self, client):
        response = client.get("/api/v1/competitions")
        assert response.status_code == 200

        data = response.json()
        assert len(data) == 8
        codes = {c["code"] for c in data}
        assert {"PL", "SA", "PD", "RO1"} <= codes
        assert all(c["season"] == 2025 for c in data)


class TestMatchesEndpoint:
    """Tests for matches endpoint."""

    def test_matches_with_predictions(self, client):
        fixtures = [
            Fixture(id=1, home_team_id=10, away_team_id=20, home_team_name="Home FC", away_team_name="Away FC"),
            Fixture(id=2, home_team_id=None, away_team_id=30, home_team_name=None, away_team_name="Other FC"),
        ]
        app.dependency_overrides[get_competition_predictions_use_case] = _use_case(
            StubFixtureRepository(fixtures)
        )

        response = client.get("/api/v1/matches", params={"competition_id": 39})
        assert response.status_code == 200

        data = response.json()
        assert data["api_errors"] == []
        assert [m["id"] for m in data["matches"]] == [1, 2]

        first = data["matches"][0]
        assert first["competition"] == "Premier League"
        assert first["home_team"] == "Home FC"
        prediction = first["prediction"]
        total = prediction["prob_home"] + prediction["prob_draw"] + prediction["prob_away"]
        assert total == pytest.approx(100, abs=0.1)
        assert prediction["goals"]["over25"] + prediction["goals"]["under25"] == pytest.approx(100)
        assert prediction["btts"]["yes"] + prediction["btts"]["no"] == pytest.approx(100)
        assert 25 <= prediction["confidence"] <= 75
        assert prediction["confidence_label"] in ("high", "medium", "low")
        assert prediction["main_pick"] == "HOME"
        assert prediction["lambdas"]["home"] > prediction["lambdas"]["away"]

        second = data["matches"][1]["prediction"]
        assert second["data_flag"] == "LOW_DATA"

    def test_no_upcoming_matches(self, client):
        app.dependency_overrides[get_competition_predictions_use_case] = _use_case(StubFixtureRepository([]))

        response = client.get("/api/v1/matches", params={"competition_id": 140})

        assert response.status_code == 200
        assert response.json()["matches"] == []
        assert response.json()["api_errors"] == ["No upcoming matches"]

    def test_provider_error_reported(self, client):
        app.dependency_overrides[get_competition_predictions_use_case] = _use_case(
            StubFixtureRepository(error=StatsProviderException("Invalid key", status=401))
        )

        response = client.get("/api/v1/matches", params={"competition_id": 39})

        assert response.status_code == 200
        assert response.json()["api_errors"] == ["Invalid key"]

    def test_unknown_competition(self, client):
        app.dependency_overrides[get_competition_predictions_use_case] = _use_case(StubFixtureRepository([]))

        response = client.get("/api/v1/matches", params={"competition_id": 999})

        assert response.status_code == 200
        assert response.json()["api_errors"] == ["Unknown competition"]

    def test_generated_at_is_timezone_aware(self, client):
        app.dependency_overrides[get_competition_predictions_use_case] = _use_case(StubFixtureRepository([]))

        data = client.get("/api/v1/matches", params={"competition_id": 39}).json()

        assert datetime.fromisoformat(data["generated_at"].replace("Z", "+00:00")).tzinfo is not None

    def test_unhandled_provider_error_is_bad_gateway(self, client):
        class FailingUseCase:
            async def execute(self, competition):
                raise StatsProviderException("Upstream down", status=503)

        app.dependency_overrides[get_competition_predictions_use_case] = lambda: FailingUseCase()

        response = client.get("/api/v1/matches", params={"competition_id": 39})

        assert response.status_code == 502
        assert response.json()["error"] == "provider_error"
        assert response.json()["message"] == "Upstream down"
        assert response.json()["details"] == {"path": "/api/v1/matches"}

    def test_competition_id_required(self, client):
        response = client.get("/api/v1/matches")
        assert response.status_code == 422


class TestProviderEndpoints:
    """Tests for provider key and status endpoints."""

    def _override_source(self, api_key, handler=None):
        config = APIFootballConfig(api_key=api_key, base_url="https://api.test", timeout=5, retries=0)
        transport = httpx.MockTransport(handler) if handler else None
        source = APIFootballSource(config=config, transport=transport)
        app.dependency_overrides[get_api_football] = lambda: source

    def test_key_missing(self, client):
        self._override_source("")

        data = client.get("/api/v1/provider/key").json()

        assert data == {"ok": False, "message": "Missing"}

    def test_key_present(self, client):
        self._override_source("abc")

        data = client.get("/api/v1/provider/key").json()

        assert data == {"ok": True, "message": "Key OK"}

    def test_status_without_key(self, client):
        self._override_source("")

        data = client.get("/api/v1/provider/status").json()

        assert data["ok"] is False
        assert data["status"] == "NO_KEY"

    def test_status_ok(self, client):
        payload = {"errors": [], "response": {"account": {"firstname": "Test"}}}
        self._override_source("abc", lambda request: httpx.Response(200, json=payload))

        data = client.get("/api/v1/provider/status").json()

        assert data["ok"] is True
        assert data["status"] == "OK"
        assert data["raw"]["response"]["account"]["firstname"] == "Test"

    def test_status_error(self, client):
        self._override_source("abc", lambda request: httpx.Response(403, text="Forbidden"))

        data = client.get("/api/v1/provider/status").json()

        assert data["ok"] is False
        assert data["status"] == "403"
        assert data["message"] == "Forbidden"
