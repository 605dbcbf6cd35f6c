"""Synthetic placeholder rows used when the reference series cannot be fetched."""

import logging
from datetime import date, datetime, timezone

import numpy as np
import pandas as pd

from real_terms.config import MERGED_KEYS, Settings
from real_terms.models import MergedRow


logger = logging.getLogger(__name__)

FALLBACK_SOURCE = "fallback (synthetic)"

# Starting level and monthly growth rate per field
PLACEHOLDER_CURVES: dict[str, tuple[float, float]] = {
    "SPX": (1800.0, 0.008),
    "MAG7": (100.0, 0.020),
    "BTC": (500.0, 0.045),
    "GOLD": (1250.0, 0.005),
    "SILVER": (17.0, 0.004),
    "URANIUM": (20.0, 0.003),
    "PCE": (100.0, 0.002),
    "CASE_SHILLER": (165.0, 0.005),
}


def generate_fallback_rows(months: int = 120, end: date | None = None) -> list[MergedRow]:
    """
    Fixed-length monthly rows with smooth placeholder values.

    Args:
        months: Number of rows
        end: Month of the last row (defaults to today)
    """
    if months <= 0:
        raise ValueError(f"months must be positive: {months}")

    end = end or date.today()
    calendar = pd.date_range(end=pd.Timestamp(end.year, end.month, 1), periods=months, freq="MS")
    steps = np.arange(months)

    # Gentle seasonal wobble so the placeholder is not a straight line
    wobble = 1 + 0.02 * np.sin(steps / 6.0)

    columns = {}
    for key in MERGED_KEYS:
        start, growth = PLACEHOLDER_CURVES.get(key, (100.0, 0.0))
        columns[key] = np.round(start * np.power(1 + growth, steps) * wobble, 4)

    return [
        {"date": ts.strftime("%Y-%m"), **{key: float(columns[key][i]) for key in MERGED_KEYS}}
        for i, ts in enumerate(calendar)
    ]


def fallback_payload(settings: Settings | None = None, end: date | None = None) -> dict:
    """Response payload flagged as synthetic."""
    settings = settings or Settings()
    logger.warning(f"Serving {settings.fallback_months} months of fallback data")

    return {
        "success": True,
        "data": generate_fallback_rows(settings.fallback_months, end),
        "sources": {key: FALLBACK_SOURCE for key in MERGED_KEYS},
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
        "isFallback": True,
    }
