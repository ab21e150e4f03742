"""
normalize.py
------------
Pure converters from raw GCAT text fields to typed values, plus the fold
that turns parsed rows into SatelliteRecords.
- Vague dates ("2023 Jan  3 1200") -> ISO date + year
- Masses with confidence markers ("306?", "~1500") -> float
- State codes -> region bucket
- Free-text operational orbit -> orbit family tag
None of these raise; bad input yields None or the default bucket.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional, Sequence, Tuple

from gcat_ingest.config import (
    EXCLUDED_FROM_WESTERN,
    MAX_RECORD_MASS_KG,
    MIN_YEAR,
    REGION_OTHER,
    REGION_WESTERN_ALIGNED,
    REGION_WESTERN_EUROPE,
    WESTERN_EUROPE_STATES,
)
from gcat_ingest.models import DateInfo, ParseResult, SatelliteRecord
from gcat_ingest.parse_tsv import ParsedTable

MONTHS = {
    "Jan": "01", "Feb": "02", "Mar": "03", "Apr": "04",
    "May": "05", "Jun": "06", "Jul": "07", "Aug": "08",
    "Sep": "09", "Oct": "10", "Nov": "11", "Dec": "12",
}

_DATE_RE = re.compile(r"(\d{4})\s+(\w+)\s+(\d{1,2})", re.ASCII)
_MASS_MARKERS = re.compile(r"[?~><]")
# leading float literal, like JS parseFloat
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# (tag, test) evaluated top to bottom, first match wins.
ORBIT_RULES: Tuple[Tuple[str, object], ...] = (
    ("LEO", lambda o: "LLEO" in o or o == "LEO" or o.startswith("LEO/")),
    ("SSO", lambda o: "SSO" in o or "S/S" in o),
    ("GTO", lambda o: "GTO" in o),
    ("GEO", lambda o: "GEO" in o or "GSO" in o),
    ("MEO", lambda o: "MEO" in o),
    ("EEO", lambda o: "EEO" in o),
    ("HEO", lambda o: "HEO" in o and "HELIO" not in o),
    ("Helio", lambda o: "HELIO" in o or "HCO" in o),
    ("Lunar", lambda o: any(t in o for t in ("MOON", "LUN", "SEL", "CLO", "CISLU", "EML"))),
    ("Deep Space", lambda o: any(t in o for t in ("MARS", "DEEP", "PLAN", "DSO", "SOI"))),
)


def round_half_up(x: float) -> int:
    """Math.round semantics (halves go up), not Python's banker's rounding."""
    return int(math.floor(x + 0.5))


def parse_date(raw: Optional[str]) -> Optional[DateInfo]:
    if not raw or raw == "-":
        return None
    m = _DATE_RE.search(raw)
    if not m:
        return None
    year, month, day = m.groups()
    month_num = MONTHS.get(month)
    if month_num is None:
        return None
    return DateInfo(date=f"{year}-{month_num}-{day.zfill(2)}", year=int(year))


def parse_mass(raw: Optional[str]) -> Optional[float]:
    if not raw or raw == "-":
        return None
    cleaned = _MASS_MARKERS.sub("", raw).strip()
    m = _FLOAT_PREFIX.match(cleaned)
    if not m:
        return None
    mass = float(m.group(0))
    if not math.isfinite(mass) or mass <= 0:
        return None
    return mass


def classify_region(
    state_code: Optional[str],
    western_europe: Iterable[str] = WESTERN_EUROPE_STATES,
    excluded: Iterable[str] = EXCLUDED_FROM_WESTERN,
) -> str:
    # Unlisted codes (including blank) default to Western-aligned; new
    # national programmes land there until the tables are updated.
    code = (state_code or "").strip().upper()
    if code in western_europe:
        return REGION_WESTERN_EUROPE
    if code in excluded:
        return REGION_OTHER
    return REGION_WESTERN_ALIGNED


def classify_orbit(op_orbit: Optional[str], rules: Sequence = ORBIT_RULES) -> str:
    orbit = (op_orbit or "").strip().upper()
    if not orbit:
        return "Unknown"
    for tag, test in rules:
        if test(orbit):
            return tag
    return "Other"


def _text(value: Optional[str]) -> str:
    return (value or "").strip()


def normalize_rows(table: ParsedTable, min_year: int = MIN_YEAR) -> ParseResult:
    """Fold parsed rows into records; rejected rows only bump a counter."""
    records = []
    no_mass = no_date = old_date = 0

    for row in table.rows:
        mass = parse_mass(table.field(row, "mass"))
        mass_kg = round_half_up(mass) if mass is not None else 0
        if not 0 < mass_kg <= MAX_RECORD_MASS_KG:
            no_mass += 1
            continue

        date_info = parse_date(table.field(row, "ldate"))
        if date_info is None:
            no_date += 1
            continue
        if date_info.year < min_year:
            old_date += 1
            continue

        state = _text(table.field(row, "state"))
        records.append(SatelliteRecord(
            name=_text(table.field(row, "name")) or "Unknown",
            launch_date=date_info.date,
            year=date_info.year,
            mass_kg=mass_kg,
            owner=_text(table.field(row, "owner")),
            state=state,
            region=classify_region(state),
            orbit=classify_orbit(table.field(row, "opOrbit")),
        ))

    return ParseResult(
        records=records,
        total_rows=table.line_count - 1,
        skipped_no_mass=no_mass,
        skipped_no_date=no_date,
        skipped_old_date=old_date,
    )
