"""Assemble the dashboard payload from fetched series."""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from real_terms.config import (
    COMPOSITE_KEY,
    MAG7_COMPONENTS,
    MERGED_KEYS,
    REFERENCE_SERIES,
    Settings,
)
from real_terms.data.aggregator import fetch_all_series
from real_terms.data.fallback import fallback_payload
from real_terms.data.merge import canonical_dates, merge_series
from real_terms.indicators.composite import calculate_composite
from real_terms.models import SeriesResult


logger = logging.getLogger(__name__)


def build_dataset(results: Mapping[str, SeriesResult], settings: Settings | None = None) -> dict:
    """
    Composite, merge and label fetched series.

    Falls back to synthetic rows when the reference series is unavailable.
    Keys missing from ``results`` are treated as unavailable.
    """
    settings = settings or Settings()

    reference = results.get(REFERENCE_SERIES) or SeriesResult.unavailable(REFERENCE_SERIES)
    if not reference.available:
        logger.error(f"Reference series {REFERENCE_SERIES} unavailable: {reference.error}")
        return fallback_payload(settings)

    dates = canonical_dates(reference)

    components = {
        name: results.get(name) or SeriesResult.unavailable(name) for name in MAG7_COMPONENTS
    }
    composite = calculate_composite(components, dates, settings.composite_quorum, COMPOSITE_KEY)

    datasets = {
        key: (composite if key == COMPOSITE_KEY else results.get(key) or SeriesResult.unavailable(key))
        for key in MERGED_KEYS
    }
    rows = merge_series(datasets, dates, REFERENCE_SERIES)
    logger.info(f"Merged {len(rows)} monthly rows")

    sources = {key: result.source_label for key, result in datasets.items()}

    return {
        "success": True,
        "data": rows,
        "sources": sources,
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
        "isFallback": False,
    }


async def load_dashboard_data(settings: Settings | None = None, market=None, macro=None) -> dict:
    """
    Fetch every series and build the payload.

    Per-series failures are absorbed upstream; anything that still escapes
    is reported as ``success: False``.
    """
    settings = settings or Settings()
    try:
        results = await fetch_all_series(settings, market=market, macro=macro)
        return build_dataset(results, settings)
    except Exception as e:
        logger.exception("Failed to build dashboard data")
        return {"success": False, "error": str(e) or type(e).__name__}
