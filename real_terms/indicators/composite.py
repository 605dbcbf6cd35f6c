"""Equal-weight composite index from component price series."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import reduce

import pandas as pd

from real_terms.models import SeriesResult, TimePoint


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CompositeState:
    """Fold accumulator: base values (set at the first complete date) and output."""

    bases: tuple[float, ...] | None = None
    points: tuple[TimePoint, ...] = ()


def _step(state: _CompositeState, row: tuple) -> _CompositeState:
    date, *values = row
    bases = state.bases if state.bases is not None else tuple(values)
    avg_return = sum(value / base for value, base in zip(values, bases)) / len(values)
    return _CompositeState(bases, state.points + (TimePoint(date, float(avg_return * 100)),))


def _aligned(live: Mapping[str, SeriesResult], dates: Sequence[str]) -> pd.DataFrame:
    """Component values on the canonical dates, one column per component."""
    columns = {}
    for name, result in live.items():
        series = pd.Series(
            [point.value for point in result.points],
            index=[point.date for point in result.points],
            dtype=float,
        )
        columns[name] = series[~series.index.duplicated()]
    return pd.DataFrame(columns).reindex(list(dates))


def calculate_composite(
    components: Mapping[str, SeriesResult],
    dates: Sequence[str],
    quorum: int,
    key: str = "MAG7",
) -> SeriesResult:
    """
    Build the equal-weight composite on the canonical dates.

    Unavailable components are dropped. If fewer than ``quorum`` remain the
    composite is unavailable. Otherwise a date contributes only when every
    remaining component has a point on that exact date; the first such date
    sets each component's base and the composite is the mean of
    value / base, times 100.

    An available composite with no points means the quorum was met but the
    components never overlapped.
    """
    live = {name: result for name, result in components.items() if result.available}
    if len(live) < quorum:
        logger.warning(
            f"{key}: only {len(live)}/{len(components)} components available (need {quorum})"
        )
        return SeriesResult.unavailable(key, f"{len(live)}/{len(components)} components available")

    if not live:
        return SeriesResult.ok(key, (), f"Calculated (0/{len(components)} components)")

    # Incomplete dates are skipped, not zero-filled
    complete = _aligned(live, dates).dropna()
    state = reduce(_step, complete.itertuples(name=None), _CompositeState())
    logger.info(f"{key}: {len(state.points)} points from {len(live)} components")

    return SeriesResult.ok(
        key,
        state.points,
        f"Calculated ({len(live)}/{len(components)} components)",
    )
