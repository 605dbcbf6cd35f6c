"""Data models for market data."""

from dataclasses import dataclass
from typing import Any


# One merged or charted month: {"date": "YYYY-MM", <key>: float | None, ...}
MergedRow = dict[str, Any]
ChartRow = dict[str, Any]

UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class TimePoint:
    """Single observation from a provider series."""

    date: str  # YYYY-MM-DD
    value: float


@dataclass(frozen=True)
class SeriesResult:
    """
    Outcome of fetching (or deriving) one series.

    A failed fetch is ``available=False``; an available result may still hold
    zero points (e.g. no data yet for the requested range).
    """

    key: str
    points: tuple[TimePoint, ...] = ()
    source: str = UNAVAILABLE
    available: bool = False
    error: str | None = None

    @classmethod
    def ok(cls, key: str, points, source: str) -> "SeriesResult":
        return cls(key=key, points=tuple(points), source=source, available=True)

    @classmethod
    def unavailable(cls, key: str, error: str | None = None) -> "SeriesResult":
        return cls(key=key, error=error)

    @property
    def source_label(self) -> str:
        """Provenance label for the response, or the unavailable marker."""
        return self.source if self.available else UNAVAILABLE
