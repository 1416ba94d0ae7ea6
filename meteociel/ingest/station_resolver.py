"""Extract the station identifiers from a meteociel.fr city search page."""

from bs4 import BeautifulSoup

from meteociel.ingest.errors import StationNotFoundError
from meteociel.models.station import Station

# The search page redirects through an inline script:
#   window.location='/previsions/<id>/<name>.htm';
SCRIPT_SELECTOR = "body table tr td table tr td p script"


def parse_station_page(html: bytes | str, html_parser: str = "lxml") -> Station:
    soup = BeautifulSoup(html, html_parser)
    scripts = soup.select(SCRIPT_SELECTOR)
    if len(scripts) != 1:
        raise StationNotFoundError("no station found")

    parts = (scripts[0].string or "").strip().split("/")
    if len(parts) < 4:
        raise StationNotFoundError("no station found")
    station_id = parts[2].strip()
    station_name = parts[3].replace(".htm';", "", 1).strip()
    if not station_id or not station_name:
        raise StationNotFoundError("no station found")
    return Station(id=station_id, name=station_name)
