"""
API-Football Data Source

This module integrates with API-Football (api-football.com) for team season
statistics, recent results and upcoming fixtures.

API Documentation: https://www.api-football.com/documentation-v3
"""

import os
from datetime import datetime
from typing import Any, Optional
from dataclasses import dataclass
import logging

import httpx

from src.domain.constants import RECENT_FORM_LIMIT
from src.domain.entities.entities import (
    Competition,
    Fixture,
    RecentFormSample,
    TeamSeasonStatistics,
)
from src.domain.exceptions import StatsProviderException
from src.domain.repositories.repositories import FixtureRepository, StatsLookup


logger = logging.getLogger(__name__)


@dataclass
class APIFootballConfig:
    """Configuration for API-Football."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: Optional[float] = None
    retries: Optional[int] = None

    def __post_init__(self):
        # Fall back to environment for anything not provided
        if self.api_key is None:
            self.api_key = os.getenv("API_FOOTBALL_KEY")
        if self.base_url is None:
            self.base_url = os.getenv("API_FOOTBALL_BASE_URL", "https://v3.football.api-sports.io")
        if self.timeout is None:
            self.timeout = float(os.getenv("API_FOOTBALL_TIMEOUT", "30"))
        if self.retries is None:
            self.retries = int(os.getenv("API_FOOTBALL_RETRIES", "2"))
        self.retries = max(0, self.retries)


def _nested(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class APIFootballSource(StatsLookup, FixtureRepository):
    """
    Data source for API-Football.

    Statistics and form lookups are best effort: provider failures are
    logged and reported as "unknown" (None).
    """

    SOURCE_NAME = "API-Football"
    UPCOMING_FIXTURES = 30
    FALLBACK_WINDOW_DAYS = 30

    def __init__(
        self,
        config: Optional[APIFootballConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the data source."""
        self.config = config or APIFootballConfig()
        self._transport = transport
        self._request_count = 0

    @property
    def is_configured(self) -> bool:
        """Check if API key is configured."""
        return bool(self.config.api_key)

    @property
    def request_count(self) -> int:
        return self._request_count

    async def _fetch(self, endpoint: str, params: Optional[dict] = None) -> dict:
        """
        Single authenticated request to API-Football.

        Raises:
            StatsProviderException: on transport errors, non-2xx statuses or
                provider-reported errors
        """
        url = f"{self.config.base_url}{endpoint}"
        headers = {
            "x-apisports-key": self.config.api_key or "",
            "accept": "application/json",
        }
        query = {k: str(v) for k, v in (params or {}).items() if v is not None}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    url,
                    headers=headers,
                    params=query,
                    timeout=self.config.timeout,
                )
        except httpx.HTTPError as e:
            raise StatsProviderException(f"API-Football request error: {e}") from e

        self._request_count += 1

        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}

        errors = data.get("errors") if isinstance(data, dict) else None
        if response.is_error:
            message = (
                _nested(errors, "token")
                or _nested(errors, "server")
                or _nested(errors, "requests")
                or response.text
                or f"Status {response.status_code}"
            )
            raise StatsProviderException(str(message), status=response.status_code)

        if errors:
            raise StatsProviderException(f"API-Football error: {errors}", status=response.status_code)

        return data if isinstance(data, dict) else {}

    async def _make_request(
        self,
        endpoint: str,
        params: Optional[dict] = None,
        retries: Optional[int] = None,
    ) -> dict:
        """
        Request with retries.

        Client errors (status < 500) are not retried.

        Args:
            endpoint: API endpoint (e.g., "/fixtures")
            params: Query parameters
            retries: Extra attempts after the first (config default if None)

        Returns:
            JSON response
        """
        if retries is None:
            retries = self.config.retries
        retries = max(0, retries)

        last_error: Optional[StatsProviderException] = None
        for attempt in range(retries + 1):
            if attempt > 0:
                logger.warning(f"Retry {attempt} for {endpoint}...")
            try:
                return await self._fetch(endpoint, params)
            except StatsProviderException as e:
                last_error = e
                if e.status is not None and e.status < 500:
                    break

        raise last_error

    async def get_season_statistics(
        self,
        league_id: int,
        season: int,
        team_id: int,
    ) -> Optional[TeamSeasonStatistics]:
        """
        Get season statistics for a team.

        Returns:
            TeamSeasonStatistics, or None if unavailable
        """
        try:
            data = await self._make_request(
                "/teams/statistics",
                {"league": league_id, "season": season, "team": team_id},
            )
        except StatsProviderException as e:
            logger.error(f"Statistics lookup failed for team {team_id}: {e}")
            return None

        response = data.get("response")
        if not response:
            return None
        return self.parse_statistics(team_id, response)

    async def get_recent_form(
        self,
        league_id: int,
        season: int,
        team_id: int,
        limit: int = RECENT_FORM_LIMIT,
    ) -> Optional[list[RecentFormSample]]:
        """
        Get the last results of a team, most recent first.

        Returns:
            List of RecentFormSample, or None if unavailable
        """
        try:
            data = await self._make_request(
                "/fixtures",
                {"league": league_id, "season": season, "team": team_id, "last": limit},
            )
        except StatsProviderException as e:
            logger.error(f"Recent form lookup failed for team {team_id}: {e}")
            return None

        response = data.get("response") or []
        if not response:
            return None
        return [self.parse_form_sample(team_id, fixture) for fixture in response]

    async def get_upcoming_fixtures(self, competition: Competition) -> list[Fixture]:
        """
        Get upcoming fixtures for a competition.

        Tries the next N fixtures first, then a date window from today
        (some plans do not support 'next').
        """
        from src.utils.time_utils import get_date_str, get_today_str

        attempts = [
            {
                "league": competition.api_league_id,
                "season": competition.season,
                "next": self.UPCOMING_FIXTURES,
            },
            {
                "league": competition.api_league_id,
                "season": competition.season,
                "from": get_today_str(),
                "to": get_date_str(self.FALLBACK_WINDOW_DAYS),
            },
        ]

        for params in attempts:
            try:
                data = await self._make_request("/fixtures", params)
            except StatsProviderException as e:
                logger.info(f"Fixture lookup for {competition.code} failed ({e}), trying fallback")
                continue

            response = data.get("response") or []
            if response:
                return [self.parse_fixture(f) for f in response]

        return []

    async def get_status(self) -> dict:
        """Provider account status. Raises StatsProviderException on failure."""
        return await self._make_request("/status", retries=1)

    @staticmethod
    def parse_statistics(team_id: int, response: dict) -> TeamSeasonStatistics:
        """Map a /teams/statistics payload; absent fields become zero."""
        played = _nested(response, "fixtures", "played") or {}
        goals_for = _nested(response, "goals", "for", "total") or {}
        goals_against = _nested(response, "goals", "against", "total") or {}

        return TeamSeasonStatistics(
            team_id=team_id,
            played_home=played.get("home") or 0,
            played_away=played.get("away") or 0,
            played_total=played.get("total") or 0,
            goals_for_home=goals_for.get("home") or 0,
            goals_for_away=goals_for.get("away") or 0,
            goals_against_home=goals_against.get("home") or 0,
            goals_against_away=goals_against.get("away") or 0,
        )

    @staticmethod
    def parse_form_sample(team_id: int, fixture: dict) -> RecentFormSample:
        """Map a finished fixture to a result from the team's side."""
        was_home = _nested(fixture, "teams", "home", "id") == team_id
        home_goals = _nested(fixture, "goals", "home") or 0
        away_goals = _nested(fixture, "goals", "away") or 0

        return RecentFormSample(
            was_home=was_home,
            goals_for=home_goals if was_home else away_goals,
            goals_against=away_goals if was_home else home_goals,
        )

    @staticmethod
    def parse_fixture(fixture: dict) -> Fixture:
        """Map an upcoming fixture payload."""
        utc_date = None
        raw_date = _nested(fixture, "fixture", "date")
        if raw_date:
            try:
                utc_date = datetime.fromisoformat(raw_date.replace("Z", "+00:00"))
            except ValueError:
                logger.debug(f"Unparseable fixture date: {raw_date}")

        return Fixture(
            id=_nested(fixture, "fixture", "id"),
            home_team_id=_nested(fixture, "teams", "home", "id"),
            away_team_id=_nested(fixture, "teams", "away", "id"),
            home_team_name=_nested(fixture, "teams", "home", "name"),
            away_team_name=_nested(fixture, "teams", "away", "name"),
            utc_date=utc_date,
        )
