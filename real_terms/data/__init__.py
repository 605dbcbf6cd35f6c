"""Data fetching, alignment and fallback."""

from .fred_fetcher import FredFetcher, MissingCredentialError
from .yahoo_fetcher import YahooFetcher
from .aggregator import fetch_all_series
from .pipeline import build_dataset, load_dashboard_data

__all__ = [
    "FredFetcher",
    "MissingCredentialError",
    "YahooFetcher",
    "fetch_all_series",
    "build_dataset",
    "load_dashboard_data",
]
