"""Errors raised by the meteociel.fr client."""


class MeteocielClientError(Exception):
    """Raised when meteociel.fr cannot serve the requested page."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StationNotFoundError(MeteocielClientError):
    """Raised when a city search does not resolve to exactly one station."""
