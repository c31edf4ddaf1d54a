from __future__ import annotations

import sys
import unittest
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from manpower_core.filters import DashboardFilters, normalize_filters  # noqa: E402


class NormalizeFiltersTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(normalize_filters({}), DashboardFilters(selected_day=1, active_shift="day", active_tab="on_duty"))

    def test_values_pass_through(self) -> None:
        f = normalize_filters({"selected_day": "12", "active_shift": "Night", "active_tab": "rooster"})
        self.assertEqual(f, DashboardFilters(selected_day=12, active_shift="night", active_tab="rooster"))

    def test_out_of_range_day_is_not_clamped(self) -> None:
        self.assertEqual(normalize_filters({"selected_day": 40}).selected_day, 40)
        self.assertEqual(normalize_filters({"selected_day": 0}).selected_day, 0)

    def test_garbage_falls_back(self) -> None:
        f = normalize_filters({"selected_day": "tomorrow", "active_shift": "evening", "active_tab": "payroll"})
        self.assertEqual(f, DashboardFilters())
        self.assertEqual(normalize_filters({"selected_day": None}).selected_day, 1)


if __name__ == "__main__":
    unittest.main()
