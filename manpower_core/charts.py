from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def daily_counts_chart(trend: pd.DataFrame, metrics: Dict[str, str]) -> alt.Chart:
    long = trend.melt(id_vars=["day", "shift"], value_vars=list(metrics), var_name="metric", value_name="count")
    long["metric"] = long["metric"].map(metrics)
    return (
        alt.Chart(long)
        .mark_line(point=True)
        .encode(
            x=alt.X("day:O", title="Day"),
            y=alt.Y("count:Q", title="Drivers / Units", axis=alt.Axis(format="d")),
            color=alt.Color("metric:N", title="Metric"),
            strokeDash=alt.StrokeDash("shift:N", title="Shift"),
            tooltip=["day", "shift", "metric", alt.Tooltip("count:Q", format="d")],
        )
        .properties(height=260)
    )
