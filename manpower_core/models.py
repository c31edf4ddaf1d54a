from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


STATUS_DAY = "D"
STATUS_NIGHT = "N"
STATUS_ROOSTER = "CR"
STATUS_OFF = "OFF"
STATUS_INDUCTION = "I"

KNOWN_STATUSES = (STATUS_DAY, STATUS_NIGHT, STATUS_ROOSTER, STATUS_OFF, STATUS_INDUCTION)
# A unit only counts as short for a shift when the absent incumbent has one of these.
ABSENCE_STATUSES = (STATUS_ROOSTER, STATUS_OFF, STATUS_INDUCTION)

FIRST_DAY = 1
LAST_DAY = 31

SHIFT_DAY = "Day"
SHIFT_NIGHT = "Night"
SHIFT_SPARE = "Spare"


@dataclass(frozen=True)
class Driver:
    name: str
    unit: str
    daily_statuses: Tuple[str, ...] = ()

    def status_on(self, day: int) -> str:
        """Status for a 1-based day; days past the end of the sequence read as blank."""
        idx = day - 1
        if idx < 0 or idx >= len(self.daily_statuses):
            return ""
        return self.daily_statuses[idx]


class UnitSeats(NamedTuple):
    day_incumbent: Driver
    night_incumbent: Driver


@dataclass(frozen=True)
class Unit:
    name: str
    drivers: Tuple[Driver, ...]

    def seats(self) -> Optional[UnitSeats]:
        # First listed driver holds the day seat, second the night seat.
        if len(self.drivers) < 2:
            return None
        return UnitSeats(day_incumbent=self.drivers[0], night_incumbent=self.drivers[1])


@dataclass(frozen=True)
class Roster:
    drivers: Tuple[Driver, ...] = ()
    units: Tuple[Unit, ...] = ()
    spares: Tuple[Driver, ...] = ()
    version: Tuple[Tuple[str, float], ...] = ()


@dataclass(frozen=True)
class DriverStatusInfo:
    driver: Driver
    shift: str


@dataclass(frozen=True)
class EmptyUnitInfo:
    unit_name: str
    shift: str
    absent_driver: Driver
    status: str


@dataclass(frozen=True)
class ShiftStats:
    on_duty_count: int = 0
    empty_count: int = 0
    rooster_count: int = 0
    available_spares: int = 0


@dataclass(frozen=True)
class ShiftView:
    on_duty: Tuple[DriverStatusInfo, ...] = ()
    empty_units: Tuple[EmptyUnitInfo, ...] = ()
    on_rooster: Tuple[DriverStatusInfo, ...] = ()
    on_off: Tuple[DriverStatusInfo, ...] = ()
    on_induction: Tuple[DriverStatusInfo, ...] = ()
    stats: ShiftStats = ShiftStats()


@dataclass(frozen=True)
class DailyData:
    day: int
    day_view: ShiftView
    night_view: ShiftView

    def shift(self, name: str) -> ShiftView:
        return self.night_view if name == "night" else self.day_view
