"""FRED API fetcher for monthly macro index levels."""

import logging
import math

import httpx
import pandas as pd

from real_terms.config import Settings
from real_terms.models import TimePoint


logger = logging.getLogger(__name__)


class MissingCredentialError(RuntimeError):
    """Raised when a FRED request is attempted without an API key."""


def parse_fred_observations(payload: dict) -> list[TimePoint]:
    """
    Convert a FRED observations payload into ordered points.

    FRED reports missing values as "."; those rows are dropped. An
    unparseable observation date makes the whole payload malformed.
    """
    if not isinstance(payload, dict) or "observations" not in payload:
        raise ValueError("FRED payload missing 'observations'")

    observations = payload["observations"]
    if not observations:
        return []

    df = pd.DataFrame(observations)
    if "date" not in df.columns or "value" not in df.columns:
        raise ValueError(f"Unexpected FRED observation fields: {list(df.columns)}")

    dates = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    if dates.isna().any():
        bad = df.loc[dates.isna(), "date"].tolist()[:3]
        raise ValueError(f"Unparseable FRED observation dates: {bad}")

    df["date"] = dates
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    df = df[["date", "value"]].dropna()

    return [
        TimePoint(date=row.date.strftime("%Y-%m-%d"), value=float(row.value))
        for row in df.itertuples(index=False)
        if math.isfinite(row.value)
    ]


class FredFetcher:
    """Fetches monthly observations from the FRED API."""

    BASE_URL = "https://api.stlouisfed.org/fred"

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._transport = transport

        if not self.settings.has_fred():
            logger.warning("FRED_API_KEY not set; macro series will be unavailable")

    async def fetch(self, series_id: str, start_date: str) -> list[TimePoint]:
        """
        Fetch monthly observations for a series.

        Args:
            series_id: FRED series ID
            start_date: First observation date (YYYY-MM-DD)

        Returns:
            Ordered points with missing-value sentinels removed
        """
        if not self.settings.has_fred():
            raise MissingCredentialError(f"FRED_API_KEY required for {series_id}")

        params = {
            "series_id": series_id,
            "api_key": self.settings.fred_api_key,
            "file_type": "json",
            "observation_start": start_date,
            "frequency": "m",
        }

        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout, transport=self._transport
        ) as client:
            response = await client.get(f"{self.BASE_URL}/series/observations", params=params)
            response.raise_for_status()
            data = response.json()

        points = parse_fred_observations(data)
        logger.info(f"FRED {series_id}: {len(points)} observations")
        return points
