"""Forecast data models for meteociel.fr hourly tables."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class ForecastVariant(StrEnum):
    """Forecast page templates, relative to the site base URL."""

    GFS = "/previsions/{stationId}/{station}.htm"
    WRF = "/previsions-wrf/{stationId}/{station}.htm"
    WRF_1H = "/previsions-wrf-1h/{stationId}/{station}.htm"
    AROME = "/previsions-arome/{stationId}/{station}.htm"
    AROME_1H = "/previsions-arome-1h/{stationId}/{station}.htm"
    ARPEGE_1H = "/previsions-arpege-1h/{stationId}/{station}.htm"
    ICON_EU = "/previsions-iconeu/{stationId}/{station}.htm"
    ICON_D2 = "/previsions-icond2/{stationId}/{station}.htm"
    TRENDS_10D = "/tendances/{stationId}/{station}.htm"

    @property
    def cli_name(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_cli_name(cls, name: str) -> "ForecastVariant":
        for variant in cls:
            if variant.cli_name == name.lower():
                return variant
        raise ValueError(f"Unknown forecast variant: {name}")


class ColumnFailurePolicy(StrEnum):
    ABORT_ROW = "abort-row"  # stop decoding the row at the first failing numeric column
    INDEPENDENT = "independent"


@dataclass(frozen=True)
class WeatherCategory:
    name: str = ""


@dataclass(frozen=True)
class ForecastRecord:
    timestamp: datetime
    temperature_c: int = 0
    wind_direction_deg: int = 0
    wind_speed: int = 0
    wind_gust: int = 0
    rainfall_mm: float = 0.0  # "--" (no reading) also stays 0.0
    humidity_pct: int = 0
    pressure_hpa: int = 0
    weather: WeatherCategory = WeatherCategory()


@dataclass(frozen=True)
class ParseIssue:
    """A non-fatal problem met while decoding a forecast table."""

    row: int
    message: str
    column: int | None = None
    field: str | None = None


@dataclass
class ParsedForecast:
    records: list[ForecastRecord] = field(default_factory=list)
    issues: list[ParseIssue] = field(default_factory=list)
