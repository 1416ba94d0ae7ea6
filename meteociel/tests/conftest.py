"""Shared test fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml
from bs4 import BeautifulSoup, Tag


def _row_html(
    time: str = "08:00",
    temp: str = "12 °C",
    direction: str | None = "Nord : 270 °",
    speed: str = "15",
    gust: str = "20",
    rain: str = "2.5 mm",
    humidity: str = "60 %",
    pressure: str = "1015 hPa",
    icon: str | None = "soleil",
    marker: str | None = None,
    rowspan: int = 1,
    bgcolor: str = "#CCFFFF",
) -> str:
    marker_td = f'<td rowspan="{rowspan}">{marker}</td>' if marker else ""
    direction_td = (
        f'<td><img src="/images/vent.gif" title="{direction}"></td>'
        if direction is not None else "<td></td>"
    )
    icon_td = (
        f'<td><img src="//static.meteociel.fr/prevision/picto/{icon}.gif"></td>'
        if icon is not None else "<td></td>"
    )
    return (
        f'<tr bgcolor="{bgcolor}">{marker_td}'
        f"<td>{time}</td><td>{temp}</td><td></td>{direction_td}"
        f"<td>{speed}</td><td>{gust}</td><td>{rain}</td>"
        f"<td>{humidity}</td><td>{pressure}</td>{icon_td}</tr>"
    )


def _page_html(rows: list[str]) -> str:
    """Wrap rows in the site's nested layout, behind an unstriped header row."""
    return (
        '<html><head><meta charset="utf-8"></head><body>'
        '<table><tr><td class="Style1"><center>'
        "<table><tr><td><table>"
        '<tr bgcolor="#FFFFFF"><td>Jour</td><td>Heure</td><td>Temp.</td></tr>'
        + "".join(rows)
        + "</table></td></tr></table>"
        "</center></td></tr></table></body></html>"
    )


@pytest.fixture
def make_row() -> Callable[..., str]:
    """Return a builder for one striped forecast table row."""
    return _row_html


@pytest.fixture
def make_page() -> Callable[[list[str]], str]:
    """Return a builder for a forecast page holding the given rows."""
    return _page_html


@pytest.fixture
def row_cells() -> Callable[..., list[Tag]]:
    """Return a builder for the data cells of one row (no date marker)."""

    def build(**kwargs) -> list[Tag]:
        soup = BeautifulSoup(f"<table>{_row_html(**kwargs)}</table>", "lxml")
        return soup.find("tr").find_all("td", recursive=False)

    return build


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "client": {"base_url": "https://test-meteociel.example.com", "timeout": 5.0},
        "parser": {"column_failure_policy": "independent"},
        "default_variant": "arome-1h",
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
