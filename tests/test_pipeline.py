import asyncio
import unittest
from datetime import date
from unittest import mock

from real_terms.config import DENOMINATORS, FRED_SERIES, MERGED_KEYS, YAHOO_SYMBOLS, Settings
from real_terms.data.aggregator import fetch_all_series
from real_terms.data.fallback import generate_fallback_rows
from real_terms.data.fred_fetcher import parse_fred_observations
from real_terms.data.pipeline import build_dataset, load_dashboard_data
from real_terms.indicators.denominators import transform_rows
from real_terms.models import SeriesResult, TimePoint

DATES = ["2024-01-01", "2024-02-01", "2024-03-01"]


class FakeFetcher:
    """Returns a flat-growth series per identifier; listed identifiers fail."""

    def __init__(self, failing=(), dates=DATES):
        self.failing = set(failing)
        self.dates = dates
        self.calls = []

    async def fetch(self, identifier, start_date):
        self.calls.append((identifier, start_date))
        if identifier in self.failing:
            raise ValueError(f"{identifier} exploded")
        return [TimePoint(d, 100.0 * 1.1 ** i) for i, d in enumerate(self.dates)]


class StaggeredFetcher:
    """Answers each identifier with its position, later positions first."""

    def __init__(self, identifiers):
        self.identifiers = list(identifiers)
        self.finished = []

    async def fetch(self, identifier, start_date):
        position = self.identifiers.index(identifier)
        await asyncio.sleep(0.01 * (len(self.identifiers) - position))
        self.finished.append(identifier)
        return [TimePoint("2024-01-01", float(position))]


class PayloadFetcher:
    """Parses a canned FRED payload for every series."""

    def __init__(self, payload):
        self.payload = payload

    async def fetch(self, identifier, start_date):
        return parse_fred_observations(self.payload)


def _settings():
    return Settings(fred_api_key="k", start_date="2024-01-01")


class TestFallback(unittest.TestCase):
    def test_fixed_length_and_all_fields(self):
        rows = generate_fallback_rows(24, end=date(2024, 6, 15))
        self.assertEqual(len(rows), 24)
        self.assertEqual(rows[-1]["date"], "2024-06")
        self.assertEqual(rows[0]["date"], "2022-07")
        for row in rows:
            for key in MERGED_KEYS:
                self.assertIsNotNone(row[key])

    def test_deterministic(self):
        end = date(2024, 6, 1)
        self.assertEqual(generate_fallback_rows(12, end), generate_fallback_rows(12, end))

    def test_rejects_non_positive_length(self):
        with self.assertRaises(ValueError):
            generate_fallback_rows(0)


class TestFetchAll(unittest.IsolatedAsyncioTestCase):
    async def test_failures_are_isolated_and_tagged(self):
        market = FakeFetcher(failing={"TSLA"})
        macro = FakeFetcher(failing={"CSUSHPISA"})
        results = await fetch_all_series(_settings(), market=market, macro=macro)

        self.assertEqual(set(results), set(YAHOO_SYMBOLS) | set(FRED_SERIES))
        self.assertFalse(results["TSLA"].available)
        self.assertIn("exploded", results["TSLA"].error)
        self.assertFalse(results["CASE_SHILLER"].available)
        self.assertTrue(results["AAPL"].available)
        self.assertEqual(results["SPX"].source, "Yahoo Finance (^GSPC)")
        self.assertEqual(results["PCE"].source, "FRED (PCEPI)")
        self.assertEqual(len(market.calls), len(YAHOO_SYMBOLS))
        self.assertTrue(all(start == "2024-01-01" for _, start in market.calls))

    async def test_results_follow_keys_not_completion_order(self):
        identifiers = list(YAHOO_SYMBOLS.values()) + list(FRED_SERIES.values())
        market = StaggeredFetcher(identifiers)
        macro = StaggeredFetcher(identifiers)
        results = await fetch_all_series(_settings(), market=market, macro=macro)

        # Earlier identifiers finish last
        self.assertEqual(market.finished[0], identifiers[len(YAHOO_SYMBOLS) - 1])
        for key, symbol in YAHOO_SYMBOLS.items():
            self.assertEqual(results[key].points[0].value, float(identifiers.index(symbol)))
        for key, series_id in FRED_SERIES.items():
            self.assertEqual(results[key].points[0].value, float(identifiers.index(series_id)))

    async def test_malformed_fred_dates_mark_series_unavailable(self):
        macro = PayloadFetcher(
            {"observations": [{"date": "2024-01-01", "value": "120.0"}, {"date": "bogus", "value": "121.0"}]}
        )
        results = await fetch_all_series(_settings(), market=FakeFetcher(), macro=macro)
        self.assertFalse(results["PCE"].available)
        self.assertIn("bogus", results["PCE"].error)

        payload = await load_dashboard_data(_settings(), market=FakeFetcher(), macro=macro)
        self.assertTrue(payload["success"])
        self.assertEqual(payload["sources"]["PCE"], "unavailable")
        self.assertTrue(all(row["PCE"] is None for row in payload["data"]))


class TestBuildDataset(unittest.IsolatedAsyncioTestCase):
    async def test_full_payload(self):
        payload = await load_dashboard_data(_settings(), market=FakeFetcher(), macro=FakeFetcher())
        self.assertTrue(payload["success"])
        self.assertFalse(payload["isFallback"])
        self.assertEqual([r["date"] for r in payload["data"]], ["2024-01", "2024-02", "2024-03"])
        self.assertEqual(payload["data"][0]["MAG7"], 100.0)
        self.assertEqual(set(payload["sources"]), set(MERGED_KEYS))
        self.assertEqual(payload["sources"]["MAG7"], "Calculated (7/7 components)")
        self.assertIn("lastUpdated", payload)

    async def test_composite_quorum_failure_leaves_null_column(self):
        market = FakeFetcher(failing={"AAPL", "MSFT", "GOOG"})
        payload = await load_dashboard_data(_settings(), market=market, macro=FakeFetcher())
        self.assertTrue(payload["success"])
        self.assertEqual(payload["sources"]["MAG7"], "unavailable")
        self.assertTrue(all(row["MAG7"] is None for row in payload["data"]))
        self.assertTrue(all(row["SPX"] is not None for row in payload["data"]))

    async def test_reference_failure_serves_fallback(self):
        market = FakeFetcher(failing={"^GSPC"})
        payload = await load_dashboard_data(_settings(), market=market, macro=FakeFetcher())
        self.assertTrue(payload["success"])
        self.assertTrue(payload["isFallback"])
        self.assertEqual(len(payload["data"]), _settings().fallback_months)
        for key in MERGED_KEYS:
            self.assertIsNotNone(payload["data"][-1][key])

    async def test_unexpected_error_is_reported(self):
        with mock.patch("real_terms.data.pipeline.merge_series", side_effect=RuntimeError("bad merge")):
            payload = await load_dashboard_data(_settings(), market=FakeFetcher(), macro=FakeFetcher())
        self.assertFalse(payload["success"])
        self.assertEqual(payload["error"], "bad merge")
        self.assertNotIn("data", payload)


class TestBuildDatasetMissingKeys(unittest.TestCase):
    def test_missing_keys_are_unavailable(self):
        spx = SeriesResult.ok("SPX", [TimePoint("2024-01-01", 1.0)], "Yahoo Finance (^GSPC)")
        payload = build_dataset({"SPX": spx}, _settings())
        self.assertEqual(payload["data"], [dict({"date": "2024-01", "SPX": 1.0}, **{
            key: None for key in MERGED_KEYS if key != "SPX"
        })])
        self.assertEqual(payload["sources"]["GOLD"], "unavailable")


class TestDeterminism(unittest.IsolatedAsyncioTestCase):
    async def test_same_inputs_give_same_chart(self):
        market = FakeFetcher(failing={"TSLA"})
        results = await fetch_all_series(_settings(), market=market, macro=FakeFetcher())

        first = build_dataset(results, _settings())
        second = build_dataset(results, _settings())
        self.assertEqual(first["data"], second["data"])
        self.assertEqual(first["sources"], second["sources"])

        for denominator in DENOMINATORS:
            for indexed in (True, False):
                self.assertEqual(
                    transform_rows(first["data"], denominator, indexed),
                    transform_rows(second["data"], denominator, indexed),
                )


if __name__ == "__main__":
    unittest.main()
