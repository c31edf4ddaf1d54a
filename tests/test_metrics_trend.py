from __future__ import annotations

import sys
import unittest
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from manpower_core.grouping import build_roster  # noqa: E402
from manpower_core.metrics_trend import TREND_COLUMNS, compute_month_trend, compute_trend_payload  # noqa: E402
from manpower_core.models import Driver  # noqa: E402


def rotation(pattern: str) -> tuple:
    codes = pattern.split()
    return tuple(codes[i % len(codes)] for i in range(31))


ROSTER = build_roster(
    [
        Driver("Andi", "DT-101", rotation("D D OFF CR")),
        Driver("Budi", "DT-101", rotation("N N N N")),
        Driver("Spare One", "SPARE", rotation("CR D N OFF")),
    ]
)


class MonthTrendTests(unittest.TestCase):
    def test_one_row_per_day_and_shift(self) -> None:
        trend = compute_month_trend(ROSTER)
        self.assertEqual(list(trend.columns), TREND_COLUMNS)
        self.assertEqual(len(trend), 62)
        self.assertEqual(sorted(trend["day"].unique().tolist()), list(range(1, 32)))

    def test_counts_match_daily_view(self) -> None:
        trend = compute_month_trend(ROSTER).set_index(["day", "shift"])
        # Day 3: Andi OFF with Budi on nights leaves the day seat empty.
        self.assertEqual(trend.loc[(3, "day"), "empty_count"], 1)
        self.assertEqual(trend.loc[(3, "night"), "empty_count"], 0)
        # Day 4: Andi CR; rooster count covers the whole roster.
        self.assertEqual(trend.loc[(4, "day"), "rooster_count"], 1)
        self.assertEqual(trend.loc[(4, "night"), "rooster_count"], 1)
        # Day 1: spare on leave, Andi and Budi both working.
        self.assertEqual(trend.loc[(1, "day"), "rooster_count"], 1)
        self.assertEqual(trend.loc[(2, "day"), "available_spares"], 1)
        self.assertEqual(trend.loc[(3, "night"), "available_spares"], 1)

    def test_payload_for_one_shift(self) -> None:
        payload = compute_trend_payload(ROSTER, shift="day")
        self.assertEqual(len(payload["table"]), 31)
        self.assertTrue(all(row["shift"] == "day" for row in payload["table"]))
        self.assertIn("daily_counts", payload["charts"])
        self.assertEqual(payload["peak_shortage"], {"day": 3, "shift": "day", "empty_count": 1})

    def test_empty_roster(self) -> None:
        payload = compute_trend_payload(build_roster([]))
        self.assertEqual(len(payload["table"]), 62)
        self.assertEqual(payload["peak_shortage"]["empty_count"], 0)


if __name__ == "__main__":
    unittest.main()
