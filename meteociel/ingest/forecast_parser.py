"""Forecast page parser: table rows -> dated, decoded forecast records."""

import logging
from datetime import datetime

from bs4 import BeautifulSoup

from meteociel.ingest.date_accumulator import DateAccumulator
from meteociel.ingest.row_decoder import cell_text, decode_row
from meteociel.ingest.table_navigator import find_forecast_rows
from meteociel.models.forecast import ColumnFailurePolicy, ParsedForecast, ParseIssue

logger = logging.getLogger(__name__)

DEFAULT_HTML_PARSER = "lxml"


def parse_forecast_page(
    html: bytes | str,
    now: datetime | None = None,
    policy: ColumnFailurePolicy = ColumnFailurePolicy.ABORT_ROW,
    html_parser: str = DEFAULT_HTML_PARSER,
) -> ParsedForecast:
    """Parse a forecast page into records, in table order.

    Rows whose date or time cannot be resolved are dropped; column failures
    default the affected fields. Both are reported as issues, never raised.
    """
    soup = BeautifulSoup(html, html_parser)
    rows = find_forecast_rows(soup)
    result = ParsedForecast()
    dates = DateAccumulator(now)

    for i, row in enumerate(rows):
        try:
            if row.marker_text is not None:
                dates.observe_marker(row.marker_text)
            if not row.cells:
                raise ValueError("Row has no data cells")
            timestamp = dates.resolve(cell_text(row.cells[0]))
        except ValueError as e:
            result.issues.append(ParseIssue(row=i, message=f"row dropped: {e}"))
            continue

        record, issues = decode_row(row.cells, timestamp, row=i, policy=policy)
        result.records.append(record)
        result.issues.extend(issues)

    logger.debug(
        "Parsed %d records from %d rows (%d issues)",
        len(result.records), len(rows), len(result.issues),
    )
    return result
