"""Streamlit dashboard: asset performance in real terms.

Price assets in gold, housing, or PCE to see regime change instead of
nominal illusions.
"""

import asyncio

import streamlit as st
import plotly.graph_objects as go

from real_terms.config import ASSETS, DENOMINATORS, TIME_RANGES
from real_terms.data.pipeline import load_dashboard_data
from real_terms.indicators.denominators import (
    filter_time_range,
    period_description,
    performance_summary,
    transform_rows,
)


DENOMINATOR_NOTES = {
    "GOLD": "Priced in ounces of gold. Strips out currency debasement.",
    "HOUSES": "Relative to Case-Shiller Index. Shows performance against the primary store of American wealth.",
    "PCE": "Restated in purchasing power at the end of the selected window using the PCE Price Index.",
}


@st.cache_data(ttl=86400, show_spinner=False)
def load_payload() -> dict:
    """Fetch once per day per server process."""
    return asyncio.run(load_dashboard_data())


def format_value(value: float | None, denominator: str, indexed: bool) -> str:
    """Format a chart value for the summary cards."""
    if value is None:
        return "N/A"
    if indexed:
        return f"{value:.1f}"
    if denominator == "GOLD":
        return f"{value:.3f} oz"
    if denominator == "HOUSES":
        return f"{value:.2f}"
    return f"${value:,.0f}"


def render_asset_cards(chart: list[dict], selected: list[str], denominator: str, indexed: bool) -> None:
    """Render latest value and period change per selected asset."""
    metrics = performance_summary(chart, selected)
    last = chart[-1] if chart else {}

    cols = st.columns(max(len(selected), 1))
    for col, asset in zip(cols, selected):
        metric = metrics.get(asset)
        delta = f"{metric['change']:+.1f}%" if metric else None
        with col:
            st.metric(
                ASSETS[asset]["name"],
                format_value(last.get(asset), denominator, indexed),
                delta,
            )


def render_chart(chart: list[dict], selected: list[str], indexed: bool, log_scale: bool) -> None:
    """Render the transformed series as a line chart."""
    if not chart:
        st.info("No data in the selected window")
        return

    dates = [row["date"] for row in chart]
    fig = go.Figure()
    for asset in selected:
        fig.add_trace(go.Scatter(
            x=dates, y=[row.get(asset) for row in chart],
            mode="lines", line=dict(color=ASSETS[asset]["color"], width=2),
            name=ASSETS[asset]["name"], connectgaps=False,
            hovertemplate=f"{ASSETS[asset]['name']}: %{{y:.2f}}<extra></extra>",
        ))

    if indexed:
        fig.add_hline(y=100, line_dash="dot", line_color="#475569", line_width=1)

    fig.update_layout(
        height=480, margin=dict(l=0, r=20, t=30, b=0),
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        legend=dict(
            orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1,
            font=dict(size=10, color="#94a3b8"), bgcolor="rgba(0,0,0,0)",
        ),
        xaxis=dict(showgrid=True, gridcolor="#1e293b", tickfont=dict(color="#64748b", size=10)),
        yaxis=dict(
            showgrid=True, gridcolor="#1e293b", tickfont=dict(color="#64748b", size=10),
            type="log" if log_scale else "linear",
        ),
        hovermode="x unified",
    )
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def render_sources(sources: dict[str, str]) -> None:
    """Render provenance of every series."""
    st.markdown("**Data Sources**")
    lines = []
    for key, source in sources.items():
        marker = "○" if source == "unavailable" else "●"
        lines.append(f"{marker} **{key}**: {source}")
    st.markdown("  \n".join(lines))


def main() -> None:
    """Main dashboard entry point."""
    st.set_page_config(
        page_title="Real Terms",
        page_icon="",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.markdown(
        """<div style="padding: 0.5rem 0 1rem 0; border-bottom: 1px solid #334155; margin-bottom: 1rem;">
            <div style="color: #64748b; font-size: 0.7rem; text-transform: uppercase; letter-spacing: 0.25em;">Real Terms</div>
            <h1 style="margin: 0; font-size: 1.75rem; font-weight: 300;">Asset Performance in Real Terms</h1>
        </div>""",
        unsafe_allow_html=True,
    )

    with st.spinner("Fetching from Yahoo Finance & FRED..."):
        payload = load_payload()

    if not payload.get("success"):
        st.error(f"Failed to load data: {payload.get('error', 'unknown error')}")
        if st.button("Retry"):
            load_payload.clear()
            st.rerun()
        return

    if payload.get("isFallback"):
        st.warning("Live data is unavailable. Showing synthetic placeholder data.")

    col_denom, col_range, col_opts = st.columns([2, 2, 1])
    with col_denom:
        denominator = st.radio(
            "Denominator",
            options=list(DENOMINATORS),
            format_func=DENOMINATORS.get,
            horizontal=True,
        )
    with col_range:
        time_range = st.radio("Time Range", options=list(TIME_RANGES), index=2, horizontal=True)
    with col_opts:
        indexed = st.toggle("Indexed", value=True)
        log_scale = st.toggle("Log", value=False)

    selected = st.multiselect(
        "Assets",
        options=list(ASSETS),
        default=["SPX", "MAG7", "BTC", "GOLD"],
        format_func=lambda key: ASSETS[key]["name"],
    )

    window = filter_time_range(payload["data"], time_range)
    chart = transform_rows(window, denominator, indexed)

    st.caption(f"{period_description(window)} | Updated {payload.get('lastUpdated', '')}")

    render_asset_cards(chart, selected, denominator, indexed)
    render_chart(chart, selected, indexed, log_scale)

    if denominator in DENOMINATOR_NOTES:
        st.caption(DENOMINATOR_NOTES[denominator])

    render_sources(payload.get("sources", {}))


if __name__ == "__main__":
    main()
