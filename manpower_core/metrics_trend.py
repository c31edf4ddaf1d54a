from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from manpower_core.charts import daily_counts_chart, to_vega_spec
from manpower_core.filters import SHIFTS, STAT_CARDS
from manpower_core.metrics_daily import compute_daily_data
from manpower_core.models import FIRST_DAY, LAST_DAY, Roster


TREND_COLUMNS = ["day", "shift"] + list(STAT_CARDS)


def compute_month_trend(roster: Roster) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = []
    for day in range(FIRST_DAY, LAST_DAY + 1):
        data = compute_daily_data(day, roster)
        if data is None:
            continue
        for shift in SHIFTS:
            stats = data.shift(shift).stats
            rows.append(
                {
                    "day": day,
                    "shift": shift,
                    "on_duty_count": stats.on_duty_count,
                    "empty_count": stats.empty_count,
                    "rooster_count": stats.rooster_count,
                    "available_spares": stats.available_spares,
                }
            )
    return pd.DataFrame(rows, columns=TREND_COLUMNS)


def compute_trend_payload(roster: Roster, shift: Optional[str] = None) -> Dict[str, Any]:
    trend = compute_month_trend(roster)
    if shift in SHIFTS:
        trend = trend[trend["shift"] == shift].reset_index(drop=True)

    payload: Dict[str, Any] = {"shift": shift, "table": trend.to_dict(orient="records"), "charts": {}}
    if not trend.empty:
        payload["charts"]["daily_counts"] = to_vega_spec(daily_counts_chart(trend, STAT_CARDS))
        peak = trend.sort_values(["empty_count", "day"], ascending=[False, True]).iloc[0]
        payload["peak_shortage"] = {
            "day": int(peak["day"]),
            "shift": str(peak["shift"]),
            "empty_count": int(peak["empty_count"]),
        }
    return payload
