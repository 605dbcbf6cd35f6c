"""Yahoo Finance fetcher for monthly price bars."""

import asyncio
import logging
import math

import pandas as pd
import yfinance as yf

from real_terms.config import Settings
from real_terms.models import TimePoint


logger = logging.getLogger(__name__)


def history_to_points(history: pd.DataFrame) -> list[TimePoint]:
    """
    Convert a yfinance history frame into ordered points.

    Prefers "Adj Close" and falls back to "Close" per row. Bars without a
    close are dropped.
    """
    if history is None or history.empty:
        return []
    if "Close" not in history.columns:
        raise ValueError(f"No Close column in history: {list(history.columns)}")

    close = history["Close"]
    if "Adj Close" in history.columns:
        value = history["Adj Close"].where(history["Adj Close"].notna(), close)
    else:
        value = close
    value = value[close.notna()].dropna().sort_index()

    index = pd.to_datetime(value.index)
    return [
        TimePoint(date=ts.strftime("%Y-%m-%d"), value=float(v))
        for ts, v in zip(index, value.values)
        if math.isfinite(v)
    ]


class YahooFetcher:
    """Fetches monthly bars from Yahoo Finance."""

    INTERVAL = "1mo"

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    def _download(self, symbol: str, start_date: str) -> pd.DataFrame:
        return yf.Ticker(symbol).history(
            start=start_date,
            interval=self.INTERVAL,
            auto_adjust=False,
            timeout=self.settings.request_timeout,
        )

    async def fetch(self, symbol: str, start_date: str) -> list[TimePoint]:
        """
        Fetch monthly bars for a symbol.

        yfinance is blocking, so the download runs in a worker thread.

        Args:
            symbol: Yahoo ticker (e.g., "^GSPC")
            start_date: First bar date (YYYY-MM-DD)

        Returns:
            Ordered points; empty when the symbol has no data for the range
        """
        history = await asyncio.to_thread(self._download, symbol, start_date)
        points = history_to_points(history)
        if not points:
            logger.warning(f"  {symbol}: No data")
        else:
            logger.info(f"Yahoo {symbol}: {len(points)} bars")
        return points
