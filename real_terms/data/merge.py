"""Align provider series onto the reference monthly calendar."""

from collections.abc import Iterable, Mapping

import pandas as pd

from real_terms.models import MergedRow, SeriesResult, TimePoint


def month_key(date: str) -> str:
    """Canonical month key ("YYYY-MM") for an ISO date string."""
    key = str(date)[:7]
    if len(key) != 7 or key[4] != "-":
        raise ValueError(f"Not an ISO date: {date!r}")
    return key


def canonical_dates(reference: SeriesResult) -> list[str]:
    """Ordered dates of the reference series (empty if unavailable)."""
    if not reference.available:
        return []
    return [point.date for point in reference.points]


def monthly_values(points: Iterable[TimePoint]) -> pd.Series:
    """
    Series of values indexed by month key.

    Providers stamp months inconsistently (first day, mid-month, month end),
    so a month can hold more than one point; the first in source order wins.
    """
    frame = pd.DataFrame(
        [(month_key(point.date), point.value) for point in points],
        columns=["month", "value"],
    )
    return frame.groupby("month", sort=False)["value"].first()


def merge_series(
    datasets: Mapping[str, SeriesResult],
    dates: Iterable[str],
    reference_key: str,
) -> list[MergedRow]:
    """
    Build one row per canonical month with a field per series.

    Missing months and unavailable series are None. Rows without a
    reference value are dropped, as are repeats of an already emitted month.
    """
    months = pd.Index([month_key(date) for date in dates], dtype=object).drop_duplicates()

    frame = pd.DataFrame(index=months)
    for key, result in datasets.items():
        if result.available and result.points:
            frame[key] = monthly_values(result.points).reindex(months)
        else:
            frame[key] = float("nan")

    if reference_key not in frame.columns:
        return []
    frame = frame[frame[reference_key].notna()]

    return [
        dict(
            {"date": month},
            **{key: (None if pd.isna(value) else float(value)) for key, value in values.items()},
        )
        for month, values in frame.iterrows()
    ]
