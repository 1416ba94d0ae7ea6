"""Tests for the meteociel.fr client with mocked httpx."""

from datetime import UTC, datetime
from pathlib import Path

import httpx
import pytest
import respx

from meteociel.config.schema import MeteocielConfig
from meteociel.ingest.meteociel_client import (
    MeteocielClient,
    MeteocielClientError,
    StationNotFoundError,
)
from meteociel.models.forecast import ColumnFailurePolicy, ForecastVariant
from meteociel.models.station import Station

BASE = "https://test-meteociel.example.com"
PARIS = Station(id="27817", name="paris")


@pytest.fixture
def client() -> MeteocielClient:
    return MeteocielClient(base_url=BASE)


@pytest.fixture
def forecast_html(fixtures_dir: Path) -> bytes:
    return (fixtures_dir / "forecast_gfs.html").read_bytes()


class TestUrls:
    def test_forecast_url(self, client: MeteocielClient):
        assert (
            client.forecast_url(ForecastVariant.GFS, PARIS)
            == f"{BASE}/previsions/27817/paris.htm"
        )

    def test_every_variant_substitutes_both_placeholders(self, client: MeteocielClient):
        for variant in ForecastVariant:
            url = client.forecast_url(variant, PARIS)
            assert "{" not in url
            assert url.endswith("/27817/paris.htm")

    def test_trailing_slash_in_base(self):
        c = MeteocielClient(base_url=BASE + "/")
        assert c.forecast_url(ForecastVariant.TRENDS_10D, PARIS) == (
            f"{BASE}/tendances/27817/paris.htm"
        )

    def test_station_search_url_quotes_city(self, client: MeteocielClient):
        url = client.station_search_url("Saint-Étienne")
        assert url.startswith(f"{BASE}/prevville.php?action=getville&villeid=&ville=")
        assert "Saint-%C3%89tienne" in url
        assert url.endswith("&envoyer=OK")


class TestFetch:
    @respx.mock
    def test_success(self, client: MeteocielClient):
        route = respx.get(f"{BASE}/page.htm").mock(
            return_value=httpx.Response(200, content=b"<html></html>")
        )
        assert client.fetch(f"{BASE}/page.htm") == b"<html></html>"
        assert "meteociel-scraper" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_bad_status(self, client: MeteocielClient):
        respx.get(f"{BASE}/page.htm").mock(return_value=httpx.Response(404))
        with pytest.raises(MeteocielClientError, match="bad http status code") as exc:
            client.fetch(f"{BASE}/page.htm")
        assert exc.value.status_code == 404

    @respx.mock
    def test_follows_redirect(self, client: MeteocielClient):
        respx.get(f"{BASE}/previsions/1/paris.htm").mock(
            return_value=httpx.Response(
                301, headers={"Location": f"{BASE}/previsions/1/Paris.htm"}
            )
        )
        respx.get(f"{BASE}/previsions/1/Paris.htm").mock(
            return_value=httpx.Response(200, content=b"<html><body></body></html>")
        )
        assert client.get_forecast(ForecastVariant.GFS, Station("1", "paris")) == []

    @respx.mock
    def test_redirect_to_missing_page(self, client: MeteocielClient):
        respx.get(f"{BASE}/page.htm").mock(
            return_value=httpx.Response(302, headers={"Location": f"{BASE}/elsewhere"})
        )
        respx.get(f"{BASE}/elsewhere").mock(return_value=httpx.Response(404))
        with pytest.raises(MeteocielClientError) as exc:
            client.fetch(f"{BASE}/page.htm")
        assert exc.value.status_code == 404

    @respx.mock
    def test_transport_error_propagates(self, client: MeteocielClient):
        respx.get(f"{BASE}/page.htm").mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(httpx.ConnectError):
            client.fetch(f"{BASE}/page.htm")

    @respx.mock
    def test_no_retry(self, client: MeteocielClient):
        route = respx.get(f"{BASE}/page.htm").mock(return_value=httpx.Response(503))
        with pytest.raises(MeteocielClientError):
            client.fetch(f"{BASE}/page.htm")
        assert route.call_count == 1


class TestGetStationForCity:
    @respx.mock
    def test_success(self, client: MeteocielClient, fixtures_dir: Path):
        respx.get(f"{BASE}/prevville.php").mock(
            return_value=httpx.Response(
                200, content=(fixtures_dir / "station_paris.html").read_bytes()
            )
        )
        assert client.get_station_for_city("Paris") == PARIS

    @respx.mock
    def test_not_found(self, client: MeteocielClient, fixtures_dir: Path):
        respx.get(f"{BASE}/prevville.php").mock(
            return_value=httpx.Response(
                200, content=(fixtures_dir / "station_ambiguous.html").read_bytes()
            )
        )
        with pytest.raises(StationNotFoundError):
            client.get_station_for_city("Saint-Denis")


class TestGetForecast:
    @respx.mock
    def test_records(self, client: MeteocielClient, forecast_html: bytes):
        respx.get(f"{BASE}/previsions-arome/27817/paris.htm").mock(
            return_value=httpx.Response(200, content=forecast_html)
        )
        now = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)
        records = client.get_forecast(ForecastVariant.AROME, PARIS, now=now)
        assert len(records) == 5
        assert records[0].timestamp == datetime(2026, 10, 5, 8, 0, tzinfo=UTC)
        assert records[0].weather.name == "Sunny"

    @respx.mock
    def test_empty_page(self, client: MeteocielClient):
        respx.get(f"{BASE}/previsions/27817/paris.htm").mock(
            return_value=httpx.Response(200, content=b"<html><body></body></html>")
        )
        assert client.get_forecast(ForecastVariant.GFS, PARIS) == []

    @respx.mock
    def test_server_error_is_fatal(self, client: MeteocielClient):
        respx.get(f"{BASE}/previsions/27817/paris.htm").mock(
            return_value=httpx.Response(500)
        )
        with pytest.raises(MeteocielClientError) as exc:
            client.get_forecast(ForecastVariant.GFS, PARIS)
        assert exc.value.status_code == 500

    @respx.mock
    def test_issues_kept_on_forecast_page(self, client: MeteocielClient, make_page, make_row):
        html = make_page([make_row(marker="Lun 5", temp="?? °C")])
        respx.get(f"{BASE}/previsions/27817/paris.htm").mock(
            return_value=httpx.Response(200, text=html)
        )
        parsed = client.get_forecast_page(
            ForecastVariant.GFS, PARIS, now=datetime(2026, 10, 19, tzinfo=UTC)
        )
        assert len(parsed.records) == 1
        assert parsed.issues[0].field == "temperature_c"


class TestFromConfig:
    def test_uses_config_values(self):
        config = MeteocielConfig(
            client={"base_url": BASE, "timeout": 5.0, "user_agent": "ua/1"},
            parser={"column_failure_policy": "independent", "html_parser": "html.parser"},
        )
        client = MeteocielClient.from_config(config)
        assert client.base_url == BASE
        assert client.timeout == 5.0
        assert client.user_agent == "ua/1"
        assert client.policy == ColumnFailurePolicy.INDEPENDENT
        assert client.html_parser == "html.parser"
