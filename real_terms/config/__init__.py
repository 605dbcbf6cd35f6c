"""Application configuration."""

from real_terms.config.settings import (
    ASSETS,
    CHART_ASSETS,
    COMPOSITE_KEY,
    DENOMINATORS,
    FRED_SERIES,
    MAG7_COMPONENTS,
    MERGED_KEYS,
    REFERENCE_SERIES,
    TIME_RANGES,
    YAHOO_SYMBOLS,
    Settings,
)

__all__ = [
    "ASSETS",
    "CHART_ASSETS",
    "COMPOSITE_KEY",
    "DENOMINATORS",
    "FRED_SERIES",
    "MAG7_COMPONENTS",
    "MERGED_KEYS",
    "REFERENCE_SERIES",
    "TIME_RANGES",
    "YAHOO_SYMBOLS",
    "Settings",
]
