"""Meteociel station model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Site-specific identifier pair used to address forecast pages."""

    id: str
    name: str
