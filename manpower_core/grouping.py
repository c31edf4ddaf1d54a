from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from manpower_core.models import Driver, Roster, Unit


RESERVE_MARKER = "SPARE"


def is_reserve_label(label: str, marker: str = RESERVE_MARKER) -> bool:
    return marker.upper() in (label or "").upper()


def split_reserve_pool(drivers: Iterable[Driver], marker: str = RESERVE_MARKER) -> Tuple[List[Driver], List[Driver]]:
    regular: List[Driver] = []
    spares: List[Driver] = []
    for driver in drivers:
        (spares if is_reserve_label(driver.unit, marker) else regular).append(driver)
    return regular, spares


def group_units(drivers: Iterable[Driver], marker: str = RESERVE_MARKER) -> List[Unit]:
    """Group regular drivers by exact unit label.

    Units come out in order of first appearance, and so do the drivers inside
    each unit; that order decides who holds the day and the night seat.
    """
    regular, _ = split_reserve_pool(drivers, marker)
    by_unit: Dict[str, List[Driver]] = {}
    for driver in regular:
        by_unit.setdefault(driver.unit, []).append(driver)
    return [Unit(name=name, drivers=tuple(members)) for name, members in by_unit.items() if members]


def build_roster(
    drivers: Iterable[Driver],
    version: Tuple[Tuple[str, float], ...] = (),
    marker: str = RESERVE_MARKER,
) -> Roster:
    drivers = tuple(drivers)
    _, spares = split_reserve_pool(drivers, marker)
    return Roster(
        drivers=drivers,
        units=tuple(group_units(drivers, marker)),
        spares=tuple(spares),
        version=tuple(version),
    )
