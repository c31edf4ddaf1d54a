from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Sequence

from manpower_core.models import (
    ABSENCE_STATUSES,
    FIRST_DAY,
    LAST_DAY,
    SHIFT_DAY,
    SHIFT_NIGHT,
    SHIFT_SPARE,
    STATUS_DAY,
    STATUS_INDUCTION,
    STATUS_NIGHT,
    STATUS_OFF,
    STATUS_ROOSTER,
    DailyData,
    Driver,
    DriverStatusInfo,
    EmptyUnitInfo,
    Roster,
    ShiftStats,
    ShiftView,
    Unit,
)


logger = logging.getLogger(__name__)


def is_valid_day(day: int) -> bool:
    return FIRST_DAY <= day <= LAST_DAY


class _ShiftLists:
    def __init__(self) -> None:
        self.on_duty: List[DriverStatusInfo] = []
        self.empty_units: List[EmptyUnitInfo] = []
        self.on_rooster: List[DriverStatusInfo] = []
        self.on_off: List[DriverStatusInfo] = []
        self.on_induction: List[DriverStatusInfo] = []

    def classify_absence(self, driver: Driver, status: str, shift: str) -> None:
        if status == STATUS_ROOSTER:
            self.on_rooster.append(DriverStatusInfo(driver, shift))
        elif status == STATUS_OFF:
            self.on_off.append(DriverStatusInfo(driver, shift))
        elif status == STATUS_INDUCTION:
            self.on_induction.append(DriverStatusInfo(driver, shift))

    def freeze(self, rooster_count: int, available_spares: int) -> ShiftView:
        return ShiftView(
            on_duty=tuple(self.on_duty),
            empty_units=tuple(self.empty_units),
            on_rooster=tuple(self.on_rooster),
            on_off=tuple(self.on_off),
            on_induction=tuple(self.on_induction),
            stats=ShiftStats(
                on_duty_count=len(self.on_duty),
                empty_count=len(self.empty_units),
                rooster_count=rooster_count,
                available_spares=available_spares,
            ),
        )


def _record_shortage(lists: _ShiftLists, unit: Unit, shift: str, absent: Driver, status: str) -> None:
    if status in ABSENCE_STATUSES:
        lists.empty_units.append(EmptyUnitInfo(unit_name=unit.name, shift=shift, absent_driver=absent, status=status))


def aggregate_day(
    day: int,
    units: Iterable[Unit],
    spares: Sequence[Driver],
    drivers: Sequence[Driver],
) -> Optional[DailyData]:
    """Partition the roster into duty, absence and shortage lists for one day.

    Returns None for a day outside FIRST_DAY..LAST_DAY; callers treat that as
    "nothing to show". Pure: no I/O, inputs are never mutated.
    """
    if not is_valid_day(day):
        logger.debug("day %s outside %s..%s, no daily view", day, FIRST_DAY, LAST_DAY)
        return None

    day_lists = _ShiftLists()
    night_lists = _ShiftLists()

    for driver in drivers:
        status = driver.status_on(day)
        if status == STATUS_DAY:
            day_lists.on_duty.append(DriverStatusInfo(driver, SHIFT_DAY))
        if status == STATUS_NIGHT:
            night_lists.on_duty.append(DriverStatusInfo(driver, SHIFT_NIGHT))

    for unit in units:
        seats = unit.seats()
        if seats is None:
            continue
        first, second = seats.day_incumbent, seats.night_incumbent
        status1 = first.status_on(day)
        status2 = second.status_on(day)

        has_day_worker = STATUS_DAY in (status1, status2)
        has_night_worker = STATUS_NIGHT in (status1, status2)

        # The absentee is the day incumbent unless they are the one working the
        # other shift; when neither works it stays the day incumbent.
        if not has_day_worker:
            if status1 != STATUS_NIGHT:
                _record_shortage(day_lists, unit, SHIFT_DAY, first, status1)
            else:
                _record_shortage(day_lists, unit, SHIFT_DAY, second, status2)
        if not has_night_worker:
            if status1 != STATUS_DAY:
                _record_shortage(night_lists, unit, SHIFT_NIGHT, first, status1)
            else:
                _record_shortage(night_lists, unit, SHIFT_NIGHT, second, status2)

        # Absences are attributed by seat, not by the shift the driver would have worked.
        if status1 not in (STATUS_DAY, STATUS_NIGHT):
            day_lists.classify_absence(first, status1, SHIFT_DAY)
        if status2 not in (STATUS_DAY, STATUS_NIGHT):
            night_lists.classify_absence(second, status2, SHIFT_NIGHT)

    for driver in spares:
        if driver.status_on(day) == STATUS_ROOSTER:
            # Spares have no seat, so their leave shows on both shifts.
            info = DriverStatusInfo(driver, SHIFT_SPARE)
            day_lists.on_rooster.append(info)
            night_lists.on_rooster.append(info)

    rooster_count = sum(1 for d in drivers if d.status_on(day) == STATUS_ROOSTER)
    spares_day = sum(1 for d in spares if d.status_on(day) == STATUS_DAY)
    spares_night = sum(1 for d in spares if d.status_on(day) == STATUS_NIGHT)

    return DailyData(
        day=day,
        day_view=day_lists.freeze(rooster_count, spares_day),
        night_view=night_lists.freeze(rooster_count, spares_night),
    )


@lru_cache(maxsize=64)
def compute_daily_data(day: int, roster: Roster) -> Optional[DailyData]:
    return aggregate_day(day, roster.units, roster.spares, roster.drivers)


def clear_daily_cache() -> None:
    compute_daily_data.cache_clear()


# ---------------- Serialization ----------------
def _driver_payload(driver: Driver) -> Dict[str, Any]:
    return {"name": driver.name, "unit": driver.unit}


def _status_info_payload(info: DriverStatusInfo) -> Dict[str, Any]:
    return {"driver": _driver_payload(info.driver), "shift": info.shift}


def shift_view_payload(view: ShiftView) -> Dict[str, Any]:
    return {
        "onDuty": [_status_info_payload(i) for i in view.on_duty],
        "emptyUnits": [
            {
                "unitName": e.unit_name,
                "shift": e.shift,
                "absentDriver": _driver_payload(e.absent_driver),
                "status": e.status,
            }
            for e in view.empty_units
        ],
        "onRooster": [_status_info_payload(i) for i in view.on_rooster],
        "onOff": [_status_info_payload(i) for i in view.on_off],
        "onInduction": [_status_info_payload(i) for i in view.on_induction],
        "stats": {
            "onDutyCount": view.stats.on_duty_count,
            "emptyCount": view.stats.empty_count,
            "roosterCount": view.stats.rooster_count,
            "availableSpares": view.stats.available_spares,
        },
    }


def daily_payload(data: Optional[DailyData]) -> Optional[Dict[str, Any]]:
    if data is None:
        return None
    return {"day": shift_view_payload(data.day_view), "night": shift_view_payload(data.night_view)}
