from __future__ import annotations

import sys
import unittest
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from manpower_core.filters import DashboardFilters  # noqa: E402
from manpower_core.grouping import build_roster  # noqa: E402
from manpower_core.metrics_daily import aggregate_day  # noqa: E402
from manpower_core.metrics_overview import (  # noqa: E402
    EMPTY_UNIT_COLUMNS,
    compute_overview,
    shift_tables,
    status_badge_css,
    style_status_badges,
)
from manpower_core.models import Driver  # noqa: E402


def driver(name: str, unit: str, day5: str) -> Driver:
    statuses = ["D"] * 31
    statuses[4] = day5
    return Driver(name=name, unit=unit, daily_statuses=tuple(statuses))


ROSTER = build_roster(
    [
        driver("Andi", "DT-101", "CR"),
        driver("Budi", "DT-101", "N"),
        driver("Citra", "DT-102", "D"),
        driver("Dewi", "DT-102", "OFF"),
        driver("Spare One", "SPARE", "CR"),
    ]
)


class OverviewTests(unittest.TestCase):
    def test_shift_tables_columns(self) -> None:
        data = aggregate_day(5, ROSTER.units, ROSTER.spares, ROSTER.drivers)
        tables = shift_tables(data.day_view)
        self.assertEqual(list(tables["on_duty"].columns), ["Driver Name", "Unit"])
        self.assertEqual(list(tables["empty_units"].columns), ["Unit", "Shift Empty", "Absent Driver", "Reason"])
        self.assertEqual(list(tables["rooster"].columns), ["Driver Name", "Unit", "Shift"])
        self.assertEqual(tables["rooster"]["Driver Name"].tolist(), ["Andi", "Spare One"])
        self.assertEqual(tables["rooster"]["Shift"].tolist(), ["Day", "Spare"])
        self.assertTrue(tables["induction"].empty)
        self.assertEqual(list(tables["induction"].columns), ["Driver Name", "Unit", "Shift"])

    def test_day_overview(self) -> None:
        payload = compute_overview(DashboardFilters(selected_day=5, active_shift="day", active_tab="empty_units"), ROSTER)
        self.assertTrue(payload["has_data"])
        self.assertEqual(payload["stats"], {"on_duty_count": 1, "empty_count": 1, "rooster_count": 2, "available_spares": 0})
        self.assertEqual(payload["rows"], [{"Unit": "DT-101", "Shift Empty": "Day", "Absent Driver": "Andi", "Reason": "CR"}])
        self.assertEqual(payload["tab_counts"], {"on_duty": 1, "empty_units": 1, "rooster": 2, "off": 0, "induction": 0})

    def test_night_overview(self) -> None:
        payload = compute_overview(DashboardFilters(selected_day=5, active_shift="night", active_tab="off"), ROSTER)
        self.assertEqual(payload["rows"], [{"Driver Name": "Dewi", "Unit": "DT-102", "Shift": "Night"}])
        self.assertEqual(payload["stats"]["rooster_count"], 2)
        self.assertEqual(payload["stats"]["empty_count"], 1)
        self.assertEqual(payload["tab_counts"]["rooster"], 1)

    def test_invalid_day_has_no_data(self) -> None:
        payload = compute_overview(DashboardFilters(selected_day=32), ROSTER)
        self.assertFalse(payload["has_data"])
        self.assertEqual(payload["rows"], [])
        self.assertEqual(payload["stats"]["on_duty_count"], 0)
        self.assertEqual(payload["filters"]["selected_day"], 32)
        self.assertEqual(payload["columns"], [])

    def test_overview_lists_columns_of_active_tab(self) -> None:
        payload = compute_overview(DashboardFilters(selected_day=5, active_shift="night", active_tab="empty_units"), ROSTER)
        self.assertEqual(payload["columns"], EMPTY_UNIT_COLUMNS)
        payload = compute_overview(DashboardFilters(selected_day=5, active_shift="night", active_tab="induction"), ROSTER)
        self.assertEqual(payload["rows"], [])
        self.assertEqual(payload["columns"], ["Driver Name", "Unit", "Shift"])


class StatusBadgeTests(unittest.TestCase):
    def test_known_and_unknown_status_colors(self) -> None:
        self.assertIn("background-color: #dbeafe", status_badge_css("CR"))
        self.assertIn("color: #6b21a8", status_badge_css("I"))
        self.assertIn("background-color: #f3f4f6", status_badge_css("X"))

    def test_reason_column_is_badged(self) -> None:
        data = aggregate_day(5, ROSTER.units, ROSTER.spares, ROSTER.drivers)
        html = style_status_badges(shift_tables(data.day_view)["empty_units"]).to_html()
        self.assertIn("#dbeafe", html)
        self.assertIn("Andi", html)

    def test_table_without_reason_column(self) -> None:
        data = aggregate_day(5, ROSTER.units, ROSTER.spares, ROSTER.drivers)
        html = style_status_badges(shift_tables(data.day_view)["on_duty"]).to_html()
        self.assertIn("Citra", html)
        self.assertNotIn("#dbeafe", html)


if __name__ == "__main__":
    unittest.main()
