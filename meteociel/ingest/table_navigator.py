"""Locate the forecast table in a meteociel.fr page and split it into rows."""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

# No tbody in the path: unlike browsers, HTML parsers keep the markup as written.
CONTAINER_SELECTOR = "td.Style1 center table tr td table"
# Data rows are striped with two alternating background colours.
ROW_SELECTOR = "tr[bgcolor='#CCFFFF' i], tr[bgcolor='#DDEEFF' i]"


@dataclass(frozen=True)
class TableRow:
    marker_text: str | None  # text of the day-spanning date cell, first row of a day only
    cells: list[Tag]


def find_forecast_rows(soup: BeautifulSoup) -> list[TableRow]:
    """Return the striped data rows of the forecast table, in document order.

    A page without the table, or without striped rows, yields an empty list.
    """
    container = soup.select_one(CONTAINER_SELECTOR)
    if container is None:
        return []
    return [split_row(tr) for tr in container.select(ROW_SELECTOR)]


def split_row(tr: Tag) -> TableRow:
    """Separate the optional date marker from the positional data cells."""
    cells = tr.find_all("td", recursive=False)
    marker = next((td for td in cells if td.has_attr("rowspan")), None)
    if marker is None:
        return TableRow(marker_text=None, cells=cells)
    return TableRow(
        marker_text=marker.get_text(" ", strip=True),
        cells=[td for td in cells if td is not marker],
    )
