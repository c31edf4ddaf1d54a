from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from manpower_core.models import FIRST_DAY


SHIFTS: Tuple[str, ...] = ("day", "night")

DETAIL_TABS: Dict[str, str] = {
    "on_duty": "On Duty",
    "empty_units": "DT Kosong",
    "rooster": "Cuti Rooster",
    "off": "OFF",
    "induction": "Induksi",
}
DEFAULT_TAB = "on_duty"

STAT_CARDS: Dict[str, str] = {
    "on_duty_count": "On Duty",
    "empty_count": "DT Kosong",
    "rooster_count": "Driver Cuti",
    "available_spares": "Driver Spare",
}


@dataclass(frozen=True)
class DashboardFilters:
    selected_day: int = FIRST_DAY
    active_shift: str = "day"
    active_tab: str = DEFAULT_TAB


def normalize_filters(raw: dict) -> DashboardFilters:
    # The day is deliberately not clamped: an out-of-range day must reach the
    # aggregator and come back as "no data".
    selected_day = raw.get("selected_day", FIRST_DAY)
    try:
        selected_day = int(selected_day)
    except Exception:
        selected_day = FIRST_DAY

    active_shift = str(raw.get("active_shift") or "day").strip().lower()
    if active_shift not in SHIFTS:
        active_shift = "day"

    active_tab = str(raw.get("active_tab") or DEFAULT_TAB).strip().lower()
    if active_tab not in DETAIL_TABS:
        active_tab = DEFAULT_TAB

    return DashboardFilters(selected_day=selected_day, active_shift=active_shift, active_tab=active_tab)
