"""meteociel.fr client: station lookup and forecast table retrieval."""

import logging
from datetime import datetime
from urllib.parse import quote

import httpx

from meteociel.config.schema import DEFAULT_USER_AGENT, METEOCIEL_BASE_URL, MeteocielConfig
from meteociel.ingest.errors import MeteocielClientError, StationNotFoundError
from meteociel.ingest.forecast_parser import DEFAULT_HTML_PARSER, parse_forecast_page
from meteociel.ingest.station_resolver import parse_station_page
from meteociel.models.forecast import (
    ColumnFailurePolicy,
    ForecastRecord,
    ForecastVariant,
    ParsedForecast,
)
from meteociel.models.station import Station

logger = logging.getLogger(__name__)

STATION_SEARCH = "/prevville.php?action=getville&villeid=&ville={city}&envoyer=OK"

__all__ = ["MeteocielClient", "MeteocielClientError", "StationNotFoundError"]


class MeteocielClient:
    def __init__(
        self,
        base_url: str = METEOCIEL_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        policy: ColumnFailurePolicy = ColumnFailurePolicy.ABORT_ROW,
        html_parser: str = DEFAULT_HTML_PARSER,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.policy = policy
        self.html_parser = html_parser

    @classmethod
    def from_config(cls, config: MeteocielConfig) -> "MeteocielClient":
        return cls(
            base_url=config.client.base_url,
            user_agent=config.client.user_agent,
            timeout=config.client.timeout,
            policy=config.parser.column_failure_policy,
            html_parser=config.parser.html_parser,
        )

    def fetch(self, url: str) -> bytes:
        """GET a page and return its raw body.

        Redirects are followed; anything but HTTP 200 on the final response is
        an error.
        """
        logger.info("Making request to: %s", url)
        try:
            resp = httpx.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                follow_redirects=True,
            )
        except httpx.RequestError as e:
            logger.error("Request to %s failed: %s", url, e)
            raise
        if resp.status_code != 200:
            raise MeteocielClientError(
                f"bad http status code: {resp.status_code} {resp.reason_phrase}",
                resp.status_code,
            )
        return resp.content

    def forecast_url(self, variant: ForecastVariant, station: Station) -> str:
        path = variant.value.replace("{stationId}", station.id, 1)
        path = path.replace("{station}", station.name, 1)
        return f"{self.base_url}{path}"

    def station_search_url(self, city: str) -> str:
        return f"{self.base_url}{STATION_SEARCH.replace('{city}', quote(city), 1)}"

    def get_station_for_city(self, exact_name: str) -> Station:
        """Resolve a city to its station.

        The exact city name or ZIP code is required; anything the site does not
        redirect straight to a station raises StationNotFoundError.
        """
        body = self.fetch(self.station_search_url(exact_name))
        station = parse_station_page(body, self.html_parser)
        logger.info("Resolved %r to station %s/%s", exact_name, station.id, station.name)
        return station

    def get_forecast_page(
        self,
        variant: ForecastVariant,
        station: Station,
        now: datetime | None = None,
    ) -> ParsedForecast:
        """Fetch and parse a forecast page, keeping the per-row diagnostics."""
        body = self.fetch(self.forecast_url(variant, station))
        return parse_forecast_page(
            body, now=now, policy=self.policy, html_parser=self.html_parser
        )

    def get_forecast(
        self,
        variant: ForecastVariant,
        station: Station,
        now: datetime | None = None,
    ) -> list[ForecastRecord]:
        """Return the forecast records for a station.

        Depending on the variant some columns are absent from the page and the
        matching fields stay at their defaults.
        """
        parsed = self.get_forecast_page(variant, station, now=now)
        if parsed.issues:
            logger.warning(
                "%d parse issues in %s forecast for %s",
                len(parsed.issues), variant.cli_name, station.name,
            )
            for issue in parsed.issues:
                logger.debug(
                    "row %d column %s (%s): %s",
                    issue.row, issue.column, issue.field, issue.message,
                )
        return parsed.records
