"""
models.py
---------
Typed shapes flowing between the pipeline steps. SatelliteRecord is dumped
with camelCase aliases so the JSON matches what the dashboard reads.
"""

from __future__ import annotations

from typing import List, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MassBin(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(..., ge=0)
    max: int = Field(..., gt=0)
    label: str

    @model_validator(mode="after")
    def _ordered(self) -> "MassBin":
        if self.min >= self.max:
            raise ValueError(f"mass bin {self.label!r}: min must be < max")
        return self

    def contains(self, mass_kg: int) -> bool:
        return self.min <= mass_kg < self.max


class SatelliteRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    launch_date: str = Field(..., alias="launchDate", pattern=r"^\d{4}-\d{2}-\d{2}$")
    year: int
    mass_kg: int = Field(..., alias="massKg", gt=0)
    owner: str = ""
    state: str = ""
    region: str
    orbit: str


class DateInfo(NamedTuple):
    date: str
    year: int


class ParseResult(NamedTuple):
    """Outcome of folding raw rows into records, with the skip counters."""
    records: List[SatelliteRecord]
    total_rows: int
    skipped_no_mass: int
    skipped_no_date: int
    skipped_old_date: int
