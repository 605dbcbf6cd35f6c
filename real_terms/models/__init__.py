"""Data models."""

from real_terms.models.market_data import (
    UNAVAILABLE,
    ChartRow,
    MergedRow,
    SeriesResult,
    TimePoint,
)

__all__ = ["UNAVAILABLE", "ChartRow", "MergedRow", "SeriesResult", "TimePoint"]
