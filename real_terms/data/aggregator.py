"""Concurrent fetch of every tracked series."""

import asyncio
import logging

import httpx

from real_terms.config import FRED_SERIES, YAHOO_SYMBOLS, Settings
from real_terms.data.fred_fetcher import FredFetcher
from real_terms.data.yahoo_fetcher import YahooFetcher
from real_terms.models import SeriesResult


logger = logging.getLogger(__name__)


async def _fetch_tagged(key: str, label: str, fetch) -> SeriesResult:
    """Run one fetch; any failure becomes an unavailable result for this key."""
    try:
        points = await fetch
    except httpx.HTTPStatusError as e:
        logger.warning(f"{key}: HTTP error {e.response.status_code}")
        return SeriesResult.unavailable(key, f"HTTP {e.response.status_code}")
    except Exception as e:
        logger.warning(f"{key}: fetch failed - {e}")
        return SeriesResult.unavailable(key, str(e) or type(e).__name__)
    return SeriesResult.ok(key, points, label)


async def fetch_all_series(
    settings: Settings | None = None,
    market: YahooFetcher | None = None,
    macro: FredFetcher | None = None,
) -> dict[str, SeriesResult]:
    """
    Fetch all Yahoo and FRED series concurrently.

    Returns:
        Dict mapping series key to its tagged result (every key present)
    """
    settings = settings or Settings()
    market = market or YahooFetcher(settings)
    macro = macro or FredFetcher(settings)

    jobs = []
    for key, symbol in YAHOO_SYMBOLS.items():
        jobs.append(
            _fetch_tagged(key, f"Yahoo Finance ({symbol})", market.fetch(symbol, settings.start_date))
        )
    for key, series_id in FRED_SERIES.items():
        jobs.append(
            _fetch_tagged(key, f"FRED ({series_id})", macro.fetch(series_id, settings.start_date))
        )

    logger.info(f"Fetching {len(jobs)} series from {settings.start_date}...")
    results = await asyncio.gather(*jobs)

    by_key = {result.key: result for result in results}
    failed = [key for key, result in by_key.items() if not result.available]
    if failed:
        logger.warning(f"Failed to fetch {len(failed)} series: {failed}")

    return by_key


def main() -> None:
    """CLI entry point for a one-off fetch."""
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Fetch Yahoo Finance and FRED monthly series")
    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="First observation date (YYYY-MM-DD)",
    )
    args = parser.parse_args()

    settings = Settings()
    if args.start:
        settings.start_date = args.start

    results = asyncio.run(fetch_all_series(settings))

    print("\nFetch Status:")
    print("-" * 80)
    for key, result in results.items():
        if result.available:
            last = result.points[-1].date if result.points else "N/A"
            print(f"{key:14} | {len(result.points):5} obs | Last: {last:10} | {result.source}")
        else:
            print(f"{key:14} | unavailable | {result.error}")


if __name__ == "__main__":
    main()
