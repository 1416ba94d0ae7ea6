"""Output formatters for forecast records."""

import json

from meteociel.models.forecast import ForecastRecord, ParseIssue
from meteociel.models.station import Station

_HEADER = (
    f"{'Time':<16} {'Temp':>5} {'Dir':>4} {'Wind':>5} {'Gust':>5} "
    f"{'Rain':>6} {'Hum':>4} {'Press':>6}  Weather"
)


def format_forecast_text(station: Station, records: list[ForecastRecord]) -> str:
    """Plain text table, one line per record."""
    lines = [f"=== {station.name} ({station.id}) | {len(records)} records ===", _HEADER]
    for r in records:
        lines.append(
            f"{r.timestamp:%Y-%m-%d %H:%M} {r.temperature_c:>3}°C "
            f"{r.wind_direction_deg:>3}° {r.wind_speed:>5} {r.wind_gust:>5} "
            f"{r.rainfall_mm:>4.1f}mm {r.humidity_pct:>3}% {r.pressure_hpa:>6}  "
            f"{r.weather.name or '-'}"
        )
    return "\n".join(lines)


def record_to_dict(r: ForecastRecord) -> dict:
    return {
        "timestamp": r.timestamp.isoformat(),
        "temperature_c": r.temperature_c,
        "wind_direction_deg": r.wind_direction_deg,
        "wind_speed": r.wind_speed,
        "wind_gust": r.wind_gust,
        "rainfall_mm": r.rainfall_mm,
        "humidity_pct": r.humidity_pct,
        "pressure_hpa": r.pressure_hpa,
        "weather": r.weather.name,
    }


def format_forecast_json(station: Station, records: list[ForecastRecord]) -> str:
    """JSON document for programmatic consumption."""
    data = {
        "station": {"id": station.id, "name": station.name},
        "records": [record_to_dict(r) for r in records],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_issues(issues: list[ParseIssue]) -> str:
    lines = [f"{len(issues)} parse issues:"]
    for issue in issues:
        where = f"row {issue.row}"
        if issue.column is not None:
            where += f", column {issue.column} ({issue.field})"
        lines.append(f"  {where}: {issue.message}")
    return "\n".join(lines)
