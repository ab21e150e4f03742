"""
config.py
---------
Source + output locations and the static tables used by the GCAT
ingestion steps. Every value can be passed explicitly to the pipeline
functions; the env overrides below only change the defaults used by
process_gcat.main().

# RAW_SOURCE_URL: https://planet4589.org/space/gcat/tsv/cat/satcat.tsv
# RAW_EXPECTED_FIELDS (case-insensitive, synonyms allowed):
#   name|satname, ldate|launch_date, mass, owner, state|stateowner, oporbit|orbit
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from gcat_ingest.models import MassBin

GCAT_URL = "https://planet4589.org/space/gcat/tsv/cat/satcat.tsv"
OUTPUT_PATH = Path("data/launcherSizingData.json")
LOG_FILE = Path("logs/process_gcat.log")

MIN_YEAR = 2015
FORECAST_BOUNDARY = 2026
MAX_REDIRECTS = 5
FETCH_TIMEOUT_S = 120

# Largest mass a record may carry; the record table is validated as int64.
MAX_RECORD_MASS_KG = 2**63 - 1

SOURCE_INFO = {
    "source": "GCAT (General Catalog of Artificial Space Objects)",
    "sourceUrl": "https://planet4589.org/space/gcat/",
    "citation": "data from GCAT (J. McDowell, planet4589.org/space/gcat)",
    "license": "Creative Commons CC-BY",
}

# Half-open [min, max) kg intervals, contiguous from 0 to 150 t.
MASS_BINS: Tuple[MassBin, ...] = (
    MassBin(min=0, max=50, label="0-50 kg"),
    MassBin(min=50, max=100, label="50-100 kg"),
    MassBin(min=100, max=300, label="100-300 kg"),
    MassBin(min=300, max=500, label="300-500 kg"),
    MassBin(min=500, max=1000, label="500 kg - 1 t"),
    MassBin(min=1000, max=2000, label="1-2 t"),
    MassBin(min=2000, max=5000, label="2-5 t"),
    MassBin(min=5000, max=10000, label="5-10 t"),
    MassBin(min=10000, max=20000, label="10-20 t"),
    MassBin(min=20000, max=50000, label="20-50 t"),
    MassBin(min=50000, max=150000, label="50-150 t"),
)

# GCAT state codes, see https://planet4589.org/space/gcat/web/intro/states.html
WESTERN_EUROPE_STATES = frozenset({
    "F",     # France
    "D",     # Germany
    "I",     # Italy
    "UK",    # United Kingdom
    "E",     # Spain
    "NL",    # Netherlands
    "B",     # Belgium
    "S",     # Sweden
    "N",     # Norway
    "DK",    # Denmark
    "SF",    # Finland
    "A",     # Austria
    "CH",    # Switzerland
    "P",     # Portugal
    "IRL",   # Ireland
    "L",     # Luxembourg
    "GR",    # Greece
    "PL",    # Poland
    "CZ",    # Czech Republic
    "H",     # Hungary
    "RO",    # Romania
    "BG",    # Bulgaria
    "HR",    # Croatia
    "SK",    # Slovakia
    "SLO",   # Slovenia
    "EST",   # Estonia
    "LV",    # Latvia
    "LT",    # Lithuania
    "CY",    # Cyprus
    "M",     # Malta
    "ESA",   # European Space Agency
    "EUME",  # Eumetsat
    "EUTE",  # Eutelsat
    "SES",   # SES (Luxembourg)
})

# Must stay disjoint from WESTERN_EUROPE_STATES.
EXCLUDED_FROM_WESTERN = frozenset({
    "PRC",   # China
    "RUS",   # Russia
    "SU",    # Soviet Union
    "CIS",   # Commonwealth of Independent States
    "BY",    # Belarus
    "DPRK",  # North Korea
    "IR",    # Iran
    "SYR",   # Syria
    "VE",    # Venezuela
    "CU",    # Cuba
})

# Record-level region tags; "Global" only exists as an aggregation bucket.
REGION_WESTERN_EUROPE = "Western Europe"
REGION_WESTERN_ALIGNED = "Western-aligned"
REGION_OTHER = "Other"
RECORD_REGIONS = (REGION_WESTERN_EUROPE, REGION_WESTERN_ALIGNED, REGION_OTHER)

OUTPUT_REGIONS = ("Global", REGION_WESTERN_EUROPE, REGION_WESTERN_ALIGNED)

ORBIT_TAGS = (
    "LEO", "SSO", "GTO", "GEO", "MEO", "EEO", "HEO",
    "Helio", "Lunar", "Deep Space", "Other", "Unknown",
)


def check_mass_bins(bins) -> None:
    """Raise ValueError unless bins start at 0 and tile without gaps/overlaps."""
    if not bins:
        raise ValueError("mass bin table is empty")
    if bins[0].min != 0:
        raise ValueError(f"first mass bin must start at 0, got {bins[0].min}")
    for prev, cur in zip(bins, bins[1:]):
        if cur.min != prev.max:
            raise ValueError(f"mass bins not contiguous: {prev.label!r} -> {cur.label!r}")


@dataclass(frozen=True)
class Settings:
    source_url: str = GCAT_URL
    input_file: Optional[Path] = None
    output_path: Path = OUTPUT_PATH
    log_file: Path = LOG_FILE
    min_year: int = MIN_YEAR
    forecast_boundary: int = FORECAST_BOUNDARY
    max_redirects: int = MAX_REDIRECTS
    timeout_s: float = FETCH_TIMEOUT_S
    mass_bins: Tuple[MassBin, ...] = field(default=MASS_BINS)
    regions: List[str] = field(default_factory=lambda: list(OUTPUT_REGIONS))


def load_settings() -> Settings:
    """Defaults from this module, overridden by GCAT_* env vars."""
    input_file = os.getenv("GCAT_INPUT_FILE", "").strip()
    min_year = os.getenv("GCAT_MIN_YEAR", "").strip()
    try:
        min_year_value = int(min_year) if min_year else MIN_YEAR
    except ValueError:
        raise ValueError(f"GCAT_MIN_YEAR must be an integer, got {min_year!r}") from None

    return Settings(
        source_url=os.getenv("GCAT_URL", "").strip() or GCAT_URL,
        input_file=Path(input_file) if input_file else None,
        output_path=Path(os.getenv("GCAT_OUTPUT_PATH", "").strip() or OUTPUT_PATH),
        log_file=Path(os.getenv("GCAT_LOG_FILE", "").strip() or LOG_FILE),
        min_year=min_year_value,
    )
