from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, Tuple

import pandas as pd
from pandas.io.formats.style import Styler

from manpower_core.filters import DETAIL_TABS, STAT_CARDS, DashboardFilters
from manpower_core.metrics_daily import compute_daily_data
from manpower_core.models import DriverStatusInfo, EmptyUnitInfo, Roster, ShiftView


DRIVER_COLUMNS = ["Driver Name", "Unit"]
DRIVER_SHIFT_COLUMNS = ["Driver Name", "Unit", "Shift"]
EMPTY_UNIT_COLUMNS = ["Unit", "Shift Empty", "Absent Driver", "Reason"]

# (background, text) colours of each status badge.
STATUS_BADGE_COLORS: Dict[str, Tuple[str, str]] = {
    "D": ("#dcfce7", "#166534"),
    "N": ("#e0f2fe", "#075985"),
    "CR": ("#dbeafe", "#1e40af"),
    "OFF": ("#e2e8f0", "#1e293b"),
    "I": ("#f3e8ff", "#6b21a8"),
}
DEFAULT_BADGE_COLORS = ("#f3f4f6", "#1f2937")


def driver_status_table(items: Iterable[DriverStatusInfo], show_shift: bool = False) -> pd.DataFrame:
    columns = DRIVER_SHIFT_COLUMNS if show_shift else DRIVER_COLUMNS
    rows = []
    for item in items:
        row = {"Driver Name": item.driver.name, "Unit": item.driver.unit}
        if show_shift:
            row["Shift"] = item.shift
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def empty_units_table(items: Iterable[EmptyUnitInfo]) -> pd.DataFrame:
    rows = [
        {
            "Unit": item.unit_name,
            "Shift Empty": item.shift,
            "Absent Driver": item.absent_driver.name,
            "Reason": item.status,
        }
        for item in items
    ]
    return pd.DataFrame(rows, columns=EMPTY_UNIT_COLUMNS)


def status_badge_css(status: object) -> str:
    background, color = STATUS_BADGE_COLORS.get(str(status), DEFAULT_BADGE_COLORS)
    return f"background-color: {background}; color: {color}; font-weight: 600; border-radius: 9999px; text-align: center"


def style_status_badges(df: pd.DataFrame, column: str = "Reason") -> Styler:
    styler = df.style.hide(axis="index")
    if column in df.columns:
        styler = styler.map(status_badge_css, subset=[column])
    return styler


def shift_tables(view: ShiftView) -> Dict[str, pd.DataFrame]:
    return {
        "on_duty": driver_status_table(view.on_duty),
        "empty_units": empty_units_table(view.empty_units),
        "rooster": driver_status_table(view.on_rooster, show_shift=True),
        "off": driver_status_table(view.on_off, show_shift=True),
        "induction": driver_status_table(view.on_induction, show_shift=True),
    }


def compute_overview(filters: DashboardFilters, roster: Roster) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "filters": asdict(filters),
        "day": filters.selected_day,
        "shift": filters.active_shift,
        "has_data": False,
        "stats": {key: 0 for key in STAT_CARDS},
        "tab_counts": {key: 0 for key in DETAIL_TABS},
        "columns": [],
        "rows": [],
    }

    data = compute_daily_data(filters.selected_day, roster)
    if data is None:
        return payload

    view = data.shift(filters.active_shift)
    tables = shift_tables(view)
    payload["has_data"] = True
    payload["stats"] = asdict(view.stats)
    payload["tab_counts"] = {key: int(len(tables[key])) for key in DETAIL_TABS}
    payload["columns"] = list(tables[filters.active_tab].columns)
    payload["rows"] = tables[filters.active_tab].to_dict(orient="records")
    return payload
