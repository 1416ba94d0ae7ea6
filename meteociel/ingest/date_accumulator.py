"""Running calendar date for forecast tables with row-spanning day markers."""

import logging
from datetime import date, datetime, tzinfo

from meteociel.models.common import DAY_NAMES

logger = logging.getLogger(__name__)

HOUR_FORMAT = "%H:%M"


class DateAccumulator:
    """Tracks the day announced by the last date marker seen in a table.

    Markers only carry a day of month, so year and month come from the
    reference time. Tables whose horizon crosses a month boundary therefore
    resolve the later days into the reference month.
    """

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime.now()
        self._tz: tzinfo | None = now.tzinfo if now is not None else None
        self.current_date: date | None = None

    def observe_marker(self, text: str) -> date:
        """Parse a marker like 'Lun 5' and make its day the current date.

        On failure the current date is cleared and ValueError is raised.
        """
        text = text.strip()
        prefix, day_text = text[:3], text[3:].strip()
        if prefix not in DAY_NAMES:
            logger.debug("Unexpected day name in date marker %r", text)
        try:
            self.current_date = date(self.now.year, self.now.month, int(day_text))
        except ValueError as e:
            self.current_date = None
            raise ValueError(f"Invalid date marker {text!r}: {e}") from e
        return self.current_date

    def resolve(self, time_text: str) -> datetime:
        """Combine the current date with an HH:MM time-of-day cell."""
        if self.current_date is None:
            raise ValueError("No date marker seen before this row")
        try:
            parsed = datetime.strptime(time_text.strip(), HOUR_FORMAT)
        except ValueError as e:
            raise ValueError(f"Invalid time cell {time_text!r}") from e

        stamp = datetime(
            self.current_date.year,
            self.current_date.month,
            self.current_date.day,
            parsed.hour,
            parsed.minute,
        )
        if self._tz is None:
            # Local zone, with the offset that applies at that instant
            return stamp.astimezone()
        return stamp.replace(tzinfo=self._tz)
