"""
validate_output.py
------------------
Validates the assembled dashboard document before it is written, using
pandas + pandera for the record table and a few semantic checks on the
distributions. Raises OutputValidationError; nothing is written on failure.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import pandas as pd
import pandera as pa
from pandera import Column, Check

from gcat_ingest.config import MIN_YEAR, ORBIT_TAGS, RECORD_REGIONS
from gcat_ingest.errors import OutputValidationError

import warnings
warnings.filterwarnings("ignore", category=FutureWarning, module="pandera")

log = logging.getLogger(__name__)

RECORD_FIELDS = ["name", "launchDate", "year", "massKg", "owner", "state", "region", "orbit"]


def build_schema(min_year: int = MIN_YEAR) -> pa.DataFrameSchema:
    return pa.DataFrameSchema(
        columns={
            "name": Column(pa.String, nullable=False, checks=Check.str_length(min_value=1)),
            "launchDate": Column(pa.String, nullable=False, checks=Check.str_matches(r"^\d{4}-\d{2}-\d{2}$")),
            "year": Column(pa.Int, nullable=False, checks=Check.ge(min_year)),
            "massKg": Column(pa.Int, nullable=False, checks=Check.gt(0)),
            "owner": Column(pa.String, nullable=False),
            "state": Column(pa.String, nullable=False),
            "region": Column(pa.String, nullable=False, checks=Check.isin(list(RECORD_REGIONS))),
            "orbit": Column(pa.String, nullable=False, checks=Check.isin(list(ORBIT_TAGS))),
        },
        coerce=True,
        strict=True,
    )


def records_frame(doc: Dict[str, Any]) -> pd.DataFrame:
    return pd.DataFrame(doc["satellites"], columns=RECORD_FIELDS)


def _check_distributions(doc: Dict[str, Any]) -> None:
    for region, per_year in doc["distributions"].items():
        for year, dist in per_year.items():
            where = f"{region}/{year}"
            counts = [c["count"] for c in dist["cumulative"]]
            if any(b < a for a, b in zip(counts, counts[1:])):
                raise OutputValidationError(f"{where}: cumulative counts decrease")
            # records heavier than the last ceiling are in totalCount only
            tail = counts[-1] if counts else 0
            bin_total = sum(b["count"] for b in dist["byBin"])
            if bin_total != tail:
                raise OutputValidationError(f"{where}: byBin counts {bin_total} != cumulative tail {tail}")
            if tail > dist["totalCount"]:
                raise OutputValidationError(f"{where}: cumulative tail {tail} > totalCount {dist['totalCount']}")

    years = doc["years"]
    aligned = doc["distributions"].get("Western-aligned", {})
    europe = doc["distributions"].get("Western Europe", {})
    for year in years:
        if year in aligned and year in europe and aligned[year]["totalCount"] < europe[year]["totalCount"]:
            raise OutputValidationError(f"{year}: Western-aligned smaller than Western Europe")


def validate_output(doc: Dict[str, Any], min_year: int = MIN_YEAR) -> None:
    df = records_frame(doc)
    if len(df) != doc["metadata"]["totalSatellites"]:
        raise OutputValidationError(
            f"totalSatellites={doc['metadata']['totalSatellites']} but {len(df)} records"
        )
    try:
        build_schema(min_year).validate(df, lazy=True)
    except pa.errors.SchemaErrors as err:
        log.error("Pandera validation failed:\n%s", err.failure_cases)
        raise OutputValidationError(
            f"record table failed schema checks ({len(err.failure_cases)} failure cases)"
        ) from err

    _check_distributions(doc)
    log.info("OUTPUT_VALIDATION_OK (%d records)", len(df))
