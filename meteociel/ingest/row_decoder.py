"""Positional decoding of one forecast table row into a ForecastRecord.

The site's markup carries no semantic attributes on data cells, so each field
is addressed by its column index. COLUMNS is the single mapping from column
positions to record fields; position 0 (time of day) is consumed by the date
accumulator and position 2 is decorative.
"""

import re
import struct
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bs4 import Tag

from meteociel.ingest.weather_codes import icon_stem, lookup_weather
from meteociel.models.common import FLOAT32_MAX, INT8_RANGE, INT16_RANGE
from meteociel.models.forecast import (
    ColumnFailurePolicy,
    ForecastRecord,
    ParseIssue,
    WeatherCategory,
)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

NO_READING = "--"


def cell_text(cell: Tag) -> str:
    """Cell text with runs of whitespace (including nbsp) collapsed to one space."""
    return " ".join(cell.get_text().split())


def parse_int(text: str, bounds: tuple[int, int]) -> int:
    if not _INT_RE.match(text):
        raise ValueError(f"not an integer: {text!r}")
    value = int(text)
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{value} out of range [{low}, {high}]")
    return value


def parse_float32(text: str) -> float:
    if not _FLOAT_RE.match(text):
        raise ValueError(f"not a number: {text!r}")
    value = float(text)
    if abs(value) > FLOAT32_MAX:
        raise ValueError(f"{value} out of float32 range")
    return struct.unpack("f", struct.pack("f", value))[0]


def _strip_unit(text: str, unit: str) -> str:
    return text.removesuffix(unit).rstrip()


def _img_attr(cell: Tag, attr: str) -> str:
    img = cell.find("img")
    if img is None or not img.get(attr):
        raise ValueError(f"no image {attr} found")
    return img[attr]


def decode_temperature(cell: Tag) -> int:
    return parse_int(_strip_unit(cell_text(cell), "°C"), INT8_RANGE)


def decode_wind_direction(cell: Tag) -> int:
    # title looks like "Nord : 270 °"
    segments = _img_attr(cell, "title").split(" : ")
    if len(segments) < 2:
        raise ValueError(f"unexpected wind title {segments[0]!r}")
    degrees = _strip_unit(" ".join(segments[1].split()), "°")
    return parse_int(degrees, INT16_RANGE)


def decode_wind(cell: Tag) -> int:
    return parse_int(cell_text(cell), INT8_RANGE)


def decode_rainfall(cell: Tag) -> float | None:
    text = cell_text(cell)
    if text == NO_READING:
        return None
    return parse_float32(_strip_unit(text, "mm"))


def decode_humidity(cell: Tag) -> int:
    return parse_int(_strip_unit(cell_text(cell), "%"), INT8_RANGE)


def decode_pressure(cell: Tag) -> int:
    return parse_int(_strip_unit(cell_text(cell), "hPa"), INT16_RANGE)


def decode_weather(cell: Tag) -> WeatherCategory:
    return lookup_weather(icon_stem(_img_attr(cell, "src")))


@dataclass(frozen=True)
class ColumnSpec:
    position: int
    field: str
    decode: Callable[[Tag], Any]  # returns None when the cell holds no reading
    aborts_row: bool


COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec(1, "temperature_c", decode_temperature, aborts_row=True),
    ColumnSpec(3, "wind_direction_deg", decode_wind_direction, aborts_row=False),
    ColumnSpec(4, "wind_speed", decode_wind, aborts_row=True),
    ColumnSpec(5, "wind_gust", decode_wind, aborts_row=True),
    ColumnSpec(6, "rainfall_mm", decode_rainfall, aborts_row=True),
    ColumnSpec(7, "humidity_pct", decode_humidity, aborts_row=True),
    ColumnSpec(8, "pressure_hpa", decode_pressure, aborts_row=True),
    ColumnSpec(9, "weather", decode_weather, aborts_row=False),
)


def decode_row(
    cells: Sequence[Tag],
    timestamp: datetime,
    row: int = 0,
    policy: ColumnFailurePolicy = ColumnFailurePolicy.ABORT_ROW,
) -> tuple[ForecastRecord, list[ParseIssue]]:
    """Decode the data cells of one row.

    Returns the record and the column failures met while building it. Under
    ABORT_ROW a failing column with aborts_row set leaves every later column at
    its default; the record is still returned.
    """
    values: dict[str, Any] = {}
    issues: list[ParseIssue] = []

    for spec in COLUMNS:
        try:
            if spec.position >= len(cells):
                raise ValueError("missing cell")
            value = spec.decode(cells[spec.position])
        except ValueError as e:
            abort = spec.aborts_row and policy == ColumnFailurePolicy.ABORT_ROW
            message = str(e)
            if abort:
                message += "; remaining columns skipped"
            issues.append(
                ParseIssue(row=row, message=message, column=spec.position, field=spec.field)
            )
            if abort:
                break
            continue
        if value is not None:
            values[spec.field] = value

    return ForecastRecord(timestamp=timestamp, **values), issues
