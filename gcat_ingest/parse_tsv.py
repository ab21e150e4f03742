"""
parse_tsv.py
------------
Splits the raw GCAT TSV into a header + data rows and resolves the
logical columns we need by case-insensitive header synonyms.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from gcat_ingest.errors import MalformedInputError

log = logging.getLogger(__name__)

# logical field -> accepted header names (lowercase)
COLUMN_SYNONYMS: Dict[str, Sequence[str]] = {
    "name": ("name", "satname"),
    "ldate": ("ldate", "launch_date"),
    "mass": ("mass",),
    "owner": ("owner",),
    "state": ("state", "stateowner"),
    "opOrbit": ("oporbit", "orbit"),
}

_HEADER_PREFIX = re.compile(r"^#\s*")


@dataclass
class ParsedTable:
    header: List[str]
    columns: Dict[str, Optional[int]]
    rows: List[List[str]]
    line_count: int

    def field(self, row: Sequence[str], name: str) -> Optional[str]:
        """Raw value of a logical field; None if the column is missing or the row is short."""
        idx = self.columns.get(name)
        if idx is None or idx >= len(row):
            return None
        return row[idx]


def clean_header(line: str) -> List[str]:
    return [_HEADER_PREFIX.sub("", cell.strip()) for cell in line.split("\t")]


def resolve_columns(
    header: Sequence[str],
    synonyms: Dict[str, Sequence[str]] = COLUMN_SYNONYMS,
) -> Dict[str, Optional[int]]:
    """First header index matching any synonym per field, else None."""
    lowered = [h.lower() for h in header]
    resolved: Dict[str, Optional[int]] = {}
    for field_name, names in synonyms.items():
        resolved[field_name] = next(
            (i for i, h in enumerate(lowered) if h in names), None
        )
    return resolved


def parse_tsv(text: str, synonyms: Dict[str, Sequence[str]] = COLUMN_SYNONYMS) -> ParsedTable:
    lines = text.split("\n")
    if len(lines) < 2:
        raise MalformedInputError("TSV file appears empty")

    header = clean_header(lines[0])
    columns = resolve_columns(header, synonyms)
    missing = [k for k, v in columns.items() if v is None]
    if missing:
        log.warning("Columns not found in header: %s", missing)
    log.info("Found %d columns, resolved indices: %s", len(header), columns)

    rows: List[List[str]] = []
    for raw in lines[1:]:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        rows.append(line.split("\t"))

    return ParsedTable(header=header, columns=columns, rows=rows, line_count=len(lines))
