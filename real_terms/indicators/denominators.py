"""Re-express asset prices under alternative denominators for charting."""

from collections.abc import Mapping, Sequence

from real_terms.config import CHART_ASSETS, DENOMINATORS, TIME_RANGES
from real_terms.models import ChartRow, MergedRow


PRECISION = 4


def filter_time_range(rows: Sequence[MergedRow], time_range: str | int | None) -> list[MergedRow]:
    """
    Trailing window of merged rows.

    Args:
        time_range: Range key ("1Y", "5Y", ...), a month count, or
            "MAX"/"all"/None for the full history
    """
    if time_range is None:
        months = None
    elif isinstance(time_range, bool):
        raise ValueError(f"Unknown time range: {time_range}")
    elif isinstance(time_range, int):
        if time_range <= 0:
            raise ValueError(f"Month count must be positive: {time_range}")
        months = time_range
    elif time_range.lower() == "all":
        months = None
    elif time_range.upper() in TIME_RANGES:
        months = TIME_RANGES[time_range.upper()]
    else:
        raise ValueError(f"Unknown time range: {time_range}")

    if months is None:
        return list(rows)
    return list(rows[-months:])


def _ratio(numerator: float, divisor) -> float | None:
    if divisor is None or divisor == 0:
        return None
    return numerator / divisor


def apply_denominator(
    value: float | None,
    row: Mapping,
    denominator: str,
    latest_pce: float | None = None,
) -> float | None:
    """
    Express one value in the chosen unit.

    Returns None when the value or the row's divisor is missing (or zero).
    Without a window PCE level there is no reference purchasing power, so
    PCE leaves the value nominal.
    """
    if value is None:
        return None

    if denominator == "USD":
        return value
    if denominator == "GOLD":
        return _ratio(value, row.get("GOLD"))
    if denominator == "HOUSES":
        relative = _ratio(value, row.get("CASE_SHILLER"))
        return None if relative is None else relative * 100
    if denominator == "PCE":
        if latest_pce is None:
            return value
        factor = _ratio(latest_pce, row.get("PCE"))
        return None if factor is None else value * factor

    raise ValueError(f"Unknown denominator: {denominator}")


def _rebase(
    bases: Mapping[str, float], row: ChartRow, assets: Sequence[str]
) -> tuple[dict[str, float], ChartRow]:
    """Index one row to 100 against per-asset bases, capturing any new base."""
    bases = dict(bases)
    indexed: ChartRow = {"date": row["date"]}
    for asset in assets:
        value = row.get(asset)
        if value is not None and asset not in bases:
            bases[asset] = value
        base = bases.get(asset)
        if value is None or not base:
            indexed[asset] = None
        else:
            indexed[asset] = value / base * 100
    return bases, indexed


def transform_rows(
    rows: Sequence[MergedRow],
    denominator: str,
    indexed: bool,
    assets: Sequence[str] = CHART_ASSETS,
) -> list[ChartRow]:
    """
    Apply a denominator and optional base-100 indexing to a window of rows.

    The PCE reference level is the last row of ``rows``: values are stated in
    purchasing power at the end of the selected window, so narrowing the
    window can change PCE-adjusted values of months still in view.
    """
    if denominator not in DENOMINATORS:
        raise ValueError(f"Unknown denominator: {denominator}")
    if not rows:
        return []

    latest_pce = rows[-1].get("PCE")

    chart: list[ChartRow] = []
    bases: dict[str, float] = {}
    for row in rows:
        out: ChartRow = {"date": row["date"]}
        for asset in assets:
            out[asset] = apply_denominator(row.get(asset), row, denominator, latest_pce)
        if indexed:
            bases, out = _rebase(bases, out, assets)
        chart.append(
            {
                key: (round(value, PRECISION) if key != "date" and value is not None else value)
                for key, value in out.items()
            }
        )

    return chart


def performance_summary(
    chart_rows: Sequence[ChartRow], assets: Sequence[str] = CHART_ASSETS
) -> dict[str, dict]:
    """Percent change from the first to the last chart row per asset."""
    if len(chart_rows) < 2:
        return {}

    first, last = chart_rows[0], chart_rows[-1]
    result = {}
    for asset in assets:
        start, end = first.get(asset), last.get(asset)
        if not start or end is None:
            continue
        change = (end - start) / start * 100
        result[asset] = {"change": round(change, 1), "positive": change >= 0}
    return result


def period_description(rows: Sequence[Mapping]) -> str:
    """First and last date of the window, e.g. "2024-01 → 2024-03"."""
    if len(rows) < 2:
        return ""
    return f"{rows[0]['date']} → {rows[-1]['date']}"
