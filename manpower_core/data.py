from __future__ import annotations

import csv
import logging
import re
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

from manpower_core.grouping import build_roster
from manpower_core.models import FIRST_DAY, LAST_DAY, Driver


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
FILE_GLOBS = ("Manpower*.xlsx", "Manpower*.csv")

# Lower-cased header text -> field name.
ROSTER_COLUMNS = {
    "name": "name",
    "nama": "name",
    "driver": "name",
    "driver name": "name",
    "nama driver": "name",
    "unit": "unit",
    "no unit": "unit",
    "unit no": "unit",
    "no. unit": "unit",
    "dt": "unit",
    "code unit": "unit",
}
NAME_HEADERS = [k for k, v in ROSTER_COLUMNS.items() if v == "name"]

_NA_TOKENS = {"nan", "none", "null", "<na>", "nat"}


class RosterFormatError(ValueError):
    """Raised when a roster sheet has no recognizable name or unit column."""


def get_source_files(data_dir: Optional[Union[str, Path]] = None) -> List[Path]:
    base = Path(data_dir) if data_dir else DATA_DIR
    found = {p for pattern in FILE_GLOBS for p in base.glob(pattern)}
    return sorted(found, key=lambda p: p.name)


def file_signature(files: List[Path]) -> Tuple[Tuple[str, float], ...]:
    return tuple((f.name, f.stat().st_mtime) for f in files)


def clean_cell(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    s = str(value).strip()
    if s.lower() in _NA_TOKENS:
        return ""
    return s


def normalize_header(value: object) -> str:
    return re.sub(r"\s+", " ", clean_cell(value)).lower()


def parse_day_header(value: object) -> Optional[int]:
    """Day-of-month for a header cell like 1, 1.0, "01" or a date; None otherwise."""
    if isinstance(value, bool) or clean_cell(value) == "":
        return None
    if isinstance(value, date):
        return value.day
    s = clean_cell(value)
    if not re.fullmatch(r"\d{1,2}", s):
        return None
    day = int(s)
    if FIRST_DAY <= day <= LAST_DAY:
        return day
    return None


def find_header_row(df: pd.DataFrame, headers: Iterable[str], search_rows: int = 25) -> Optional[int]:
    wanted = {h.lower() for h in headers}
    for idx in range(min(search_rows, len(df))):
        row = {normalize_header(v) for v in df.iloc[idx].tolist()}
        if row & wanted:
            return idx
    return None


def _locate_columns(header: List[object]) -> Tuple[Optional[int], Optional[int], Dict[int, int]]:
    name_col: Optional[int] = None
    unit_col: Optional[int] = None
    day_cols: Dict[int, int] = {}
    for pos, label in enumerate(header):
        field = ROSTER_COLUMNS.get(normalize_header(label))
        if field == "name" and name_col is None:
            name_col = pos
        elif field == "unit" and unit_col is None:
            unit_col = pos
        else:
            day = parse_day_header(label)
            if day is None:
                continue
            if day in day_cols:
                logger.warning("duplicate column for day %d at position %d ignored; keeping position %d", day, pos, day_cols[day])
                continue
            day_cols[day] = pos
    return name_col, unit_col, day_cols


def roster_from_frame(raw: pd.DataFrame, *, fill_merged_units: bool = True) -> List[Driver]:
    """Parse a header-less sheet (as read with ``header=None``) into drivers.

    The header row is found by its name column. Day columns are the headers
    that read as 1..31; missing days are padded with blank statuses.
    """
    if raw.empty:
        return []
    header_row = find_header_row(raw, NAME_HEADERS)
    if header_row is None:
        raise RosterFormatError("no driver name column found in roster sheet")
    name_col, unit_col, day_cols = _locate_columns(raw.iloc[header_row].tolist())
    if name_col is None or unit_col is None:
        raise RosterFormatError("roster sheet needs both a name and a unit column")

    body = raw.iloc[header_row + 1 :].dropna(how="all").reset_index(drop=True)
    if body.empty:
        return []

    names = body.iloc[:, name_col].apply(clean_cell)
    units = body.iloc[:, unit_col].apply(clean_cell)
    if fill_merged_units:
        # Merged unit cells only carry the label on the first driver's row.
        units = units.replace("", pd.NA).ffill().fillna("")

    missing_name = names == ""
    if missing_name.any():
        logger.warning("dropping %d roster rows without a driver name", int(missing_name.sum()))

    drivers: List[Driver] = []
    for idx in body.index[~missing_name.to_numpy()]:
        statuses = tuple(
            clean_cell(body.iat[idx, day_cols[day]]).upper() if day in day_cols else ""
            for day in range(FIRST_DAY, LAST_DAY + 1)
        )
        drivers.append(Driver(name=names[idx], unit=units[idx], daily_statuses=statuses))
    return drivers


# ---------------- Loaders ----------------
def _csv_width(path: Path) -> int:
    with path.open(newline="", encoding="utf-8-sig") as fh:
        return max((len(row) for row in csv.reader(fh)), default=0)


def read_roster_sheet(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        # Title lines above the header are often a single cell, so size the
        # frame by the widest line instead of the first one.
        width = _csv_width(path)
        if width == 0:
            return pd.DataFrame()
        return pd.read_csv(path, header=None, names=list(range(width)), dtype=str, encoding="utf-8-sig")
    return pd.read_excel(path, header=None)


def load_roster_file(path: Union[str, Path], *, fill_merged_units: bool = True) -> List[Driver]:
    path = Path(path)
    drivers = roster_from_frame(read_roster_sheet(path), fill_merged_units=fill_merged_units)
    logger.info("loaded %d drivers from %s", len(drivers), path.name)
    return drivers


@lru_cache(maxsize=4)
def _load_dashboard_data_cached(data_dir: str, files_sig: Tuple[Tuple[str, float], ...]) -> Dict[str, object]:
    # The last file by name is the active month.
    latest = Path(data_dir) / files_sig[-1][0]
    drivers = load_roster_file(latest)
    return {
        "files": [name for name, _ in files_sig],
        "active_file": latest.name,
        "roster": build_roster(drivers, version=files_sig),
    }


def load_dashboard_data(data_dir: Optional[Union[str, Path]] = None) -> Dict[str, object]:
    base = Path(data_dir) if data_dir else DATA_DIR
    files = get_source_files(base)
    if not files:
        return {"files": [], "active_file": None, "roster": None}
    return _load_dashboard_data_cached(str(base), file_signature(files))
