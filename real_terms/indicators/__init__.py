"""Composite index and chart transforms."""

from real_terms.indicators.composite import calculate_composite
from real_terms.indicators.denominators import (
    filter_time_range,
    performance_summary,
    transform_rows,
)

__all__ = ["calculate_composite", "filter_time_range", "performance_summary", "transform_rows"]
