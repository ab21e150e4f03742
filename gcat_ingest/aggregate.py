"""
aggregate.py
------------
Builds the dashboard document from normalized records:
- per (region, year) histogram over the mass bins
- per (region, year) cumulative distribution by bin ceiling
- the flat record list, newest + heaviest first
The document is rebuilt from scratch on every run.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from gcat_ingest.config import (
    FORECAST_BOUNDARY,
    MASS_BINS,
    MIN_YEAR,
    OUTPUT_REGIONS,
    REGION_WESTERN_ALIGNED,
    REGION_WESTERN_EUROPE,
    SOURCE_INFO,
)
from gcat_ingest.models import MassBin, SatelliteRecord
from gcat_ingest.normalize import round_half_up

# Western-aligned deliberately includes Western Europe.
REGION_FILTERS: Dict[str, Callable[[SatelliteRecord], bool]] = {
    "Global": lambda s: True,
    REGION_WESTERN_EUROPE: lambda s: s.region == REGION_WESTERN_EUROPE,
    REGION_WESTERN_ALIGNED: lambda s: s.region in (REGION_WESTERN_EUROPE, REGION_WESTERN_ALIGNED),
}


def to_tonnes(mass_kg: int) -> float:
    return round_half_up(mass_kg / 100) / 10


def percent(part: int, total: int) -> float:
    if total <= 0:
        return 0
    return round_half_up(part / total * 1000) / 10


def bin_histogram(sats: Sequence[SatelliteRecord], mass_bins: Sequence[MassBin]) -> List[Dict[str, Any]]:
    out = []
    for b in mass_bins:
        in_bin = [s.mass_kg for s in sats if b.contains(s.mass_kg)]
        total = sum(in_bin)
        out.append({
            "bin": b.label,
            "count": len(in_bin),
            "totalMassKg": total,
            "totalMassTonnes": to_tonnes(total),
        })
    return out


def cumulative_distribution(sats: Sequence[SatelliteRecord], mass_bins: Sequence[MassBin]) -> List[Dict[str, Any]]:
    """Count/mass of records below each bin ceiling, recomputed per ceiling."""
    total_count = len(sats)
    total_mass = sum(s.mass_kg for s in sats)
    out = []
    for b in sorted(mass_bins, key=lambda b: b.max):
        below = [s.mass_kg for s in sats if s.mass_kg < b.max]
        count, mass = len(below), sum(below)
        out.append({
            "maxMassKg": b.max,
            "label": b.label,
            "count": count,
            "massTonnes": to_tonnes(mass),
            "pctCount": percent(count, total_count),
            "pctMass": percent(mass, total_mass),
        })
    return out


def region_year_distribution(sats: Sequence[SatelliteRecord], mass_bins: Sequence[MassBin]) -> Dict[str, Any]:
    return {
        "totalCount": len(sats),
        "totalMassTonnes": to_tonnes(sum(s.mass_kg for s in sats)),
        "byBin": bin_histogram(sats, mass_bins),
        "cumulative": cumulative_distribution(sats, mass_bins),
    }


def build_distributions(
    records: Sequence[SatelliteRecord],
    years: Sequence[str],
    mass_bins: Sequence[MassBin] = MASS_BINS,
    regions: Sequence[str] = OUTPUT_REGIONS,
) -> Dict[str, Dict[str, Dict[str, Any]]]:
    by_year: Dict[str, List[SatelliteRecord]] = {y: [] for y in years}
    for s in records:
        by_year.setdefault(str(s.year), []).append(s)

    distributions: Dict[str, Dict[str, Dict[str, Any]]] = {}
    for region in regions:
        keep = REGION_FILTERS[region]
        distributions[region] = {
            year: region_year_distribution([s for s in by_year[year] if keep(s)], mass_bins)
            for year in years
        }
    return distributions


def sort_records(records: Sequence[SatelliteRecord]) -> List[SatelliteRecord]:
    """Year desc, then mass desc; ties keep input order."""
    return sorted(records, key=lambda s: (-s.year, -s.mass_kg))


def build_output(
    records: Sequence[SatelliteRecord],
    mass_bins: Sequence[MassBin] = MASS_BINS,
    min_year: int = MIN_YEAR,
    regions: Sequence[str] = OUTPUT_REGIONS,
    forecast_boundary: int = FORECAST_BOUNDARY,
    source_sha256: Optional[str] = None,
    processed_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    years = sorted({str(s.year) for s in records})
    processed_at = processed_at or datetime.now(timezone.utc)

    metadata = dict(SOURCE_INFO)
    metadata.update({
        "processedDate": processed_at.strftime("%Y-%m-%d"),
        "filterCriteria": f"LDate >= {min_year}-01-01, Mass > 0",
        "totalSatellites": len(records),
        "forecastBoundary": forecast_boundary,
        "sourceSha256": source_sha256,
    })

    return {
        "metadata": metadata,
        "years": years,
        "regions": list(regions),
        "massBins": [b.model_dump() for b in mass_bins],
        "distributions": build_distributions(records, years, mass_bins, regions),
        "satellites": [s.model_dump(by_alias=True) for s in sort_records(records)],
    }
