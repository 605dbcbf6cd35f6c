"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


load_dotenv()


# Yahoo Finance symbols - monthly price series
YAHOO_SYMBOLS: dict[str, str] = {
    "SPX": "^GSPC",  # S&P 500
    "AAPL": "AAPL",
    "MSFT": "MSFT",
    "GOOG": "GOOG",
    "AMZN": "AMZN",
    "NVDA": "NVDA",
    "META": "META",
    "TSLA": "TSLA",
    "BTC": "BTC-USD",
    "GOLD": "GC=F",  # Gold futures
    "SILVER": "SI=F",  # Silver futures
    "URANIUM": "URA",  # Uranium ETF
}

# FRED series - monthly macro index levels
FRED_SERIES: dict[str, str] = {
    "PCE": "PCEPI",  # PCE Price Index
    "CASE_SHILLER": "CSUSHPISA",  # Case-Shiller National Home Price Index
}

# Equal-weight composite basket
MAG7_COMPONENTS: tuple[str, ...] = ("AAPL", "MSFT", "GOOG", "AMZN", "NVDA", "META", "TSLA")

REFERENCE_SERIES = "SPX"
COMPOSITE_KEY = "MAG7"

# Fields carried on every merged row (besides date)
MERGED_KEYS: tuple[str, ...] = (
    "SPX",
    "MAG7",
    "BTC",
    "GOLD",
    "SILVER",
    "URANIUM",
    "PCE",
    "CASE_SHILLER",
)

# Chartable assets
ASSETS: dict[str, dict[str, str]] = {
    "SPX": {"name": "S&P 500", "color": "#3b82f6"},
    "MAG7": {"name": "Mag 7", "color": "#a855f7"},
    "BTC": {"name": "Bitcoin", "color": "#f59e0b"},
    "GOLD": {"name": "Gold", "color": "#d4af37"},
    "SILVER": {"name": "Silver", "color": "#94a3b8"},
    "URANIUM": {"name": "Uranium", "color": "#22d3ee"},
}

CHART_ASSETS: tuple[str, ...] = tuple(ASSETS)

DENOMINATORS: dict[str, str] = {
    "GOLD": "vs Gold",
    "HOUSES": "vs Houses",
    "PCE": "PCE Adjusted",
    "USD": "Nominal USD",
}

# Trailing month counts; None = full history
TIME_RANGES: dict[str, int | None] = {
    "1Y": 12,
    "3Y": 36,
    "5Y": 60,
    "10Y": 120,
    "MAX": None,
}


@dataclass
class Settings:
    """Application settings."""

    fred_api_key: str = field(default_factory=lambda: os.getenv("FRED_API_KEY", ""))
    start_date: str = field(
        default_factory=lambda: os.getenv("REAL_TERMS_START_DATE", "2014-01-01")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("REAL_TERMS_REQUEST_TIMEOUT", "30"))
    )
    composite_quorum: int = 5
    fallback_months: int = 120

    def has_fred(self) -> bool:
        """Check if FRED API key is configured."""
        return bool(self.fred_api_key)
