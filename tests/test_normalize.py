import pytest

from gcat_ingest.config import EXCLUDED_FROM_WESTERN, WESTERN_EUROPE_STATES
from gcat_ingest.normalize import (
    classify_orbit,
    classify_region,
    normalize_rows,
    parse_date,
    parse_mass,
    round_half_up,
)
from gcat_ingest.parse_tsv import parse_tsv


@pytest.mark.parametrize("raw,expected", [
    ("306", 306), ("306?", 306), ("~1500", 1500), (">100", 100),
    ("<20", 20), ("12.5", 12.5), (" 7 ", 7), ("3.2e3", 3200),
])
def test_parse_mass_strips_markers(raw, expected):
    assert parse_mass(raw) == expected


@pytest.mark.parametrize("raw", ["0", "-5", "", "-", None, "abc", "?", "0.0"])
def test_parse_mass_rejects(raw):
    assert parse_mass(raw) is None


def test_parse_date_basic():
    assert parse_date("2023 Jan 15") == ("2023-01-15", 2023)
    info = parse_date("2023 Jan  3")
    assert info.date == "2023-01-03"
    assert info.year == 2023


def test_parse_date_ignores_time_of_day():
    assert parse_date("2017 May 25 0420:00") == ("2017-05-25", 2017)


@pytest.mark.parametrize("raw", ["not a date", "", "-", None, "2023 Foo 12", "2023 Jan", "2023"])
def test_parse_date_rejects(raw):
    assert parse_date(raw) is None


def test_region_tables_are_disjoint():
    assert not (WESTERN_EUROPE_STATES & EXCLUDED_FROM_WESTERN)


@pytest.mark.parametrize("code", sorted(WESTERN_EUROPE_STATES))
def test_region_western_europe(code):
    assert classify_region(code) == "Western Europe"
    assert classify_region(f" {code.lower()} ") == "Western Europe"


@pytest.mark.parametrize("code", sorted(EXCLUDED_FROM_WESTERN))
def test_region_excluded(code):
    assert classify_region(code) == "Other"


@pytest.mark.parametrize("code", ["US", "J", "IN", "NZ", "", None, "XYZ"])
def test_region_defaults_to_western_aligned(code):
    assert classify_region(code) == "Western-aligned"


@pytest.mark.parametrize("raw,expected", [
    ("LEO", "LEO"), ("LEO/I", "LEO"), ("VLLEO", "LEO"), ("leo/s", "LEO"),
    ("SSO", "SSO"), ("S/S", "SSO"), ("LEO/S/S", "LEO"), ("GTO", "GTO"), ("SSGTO", "GTO"),
    ("GEO/S", "GEO"), ("GSO", "GEO"), ("MEO", "MEO"), ("EEO", "EEO"),
    ("HEO", "HEO"), ("HELIO", "Helio"), ("HCO", "Helio"),
    ("MOON", "Lunar"), ("LUNAR", "Lunar"), ("SEL1", "Lunar"), ("CLO", "Lunar"),
    ("EML2", "Lunar"), ("MARS", "Deep Space"), ("DEEP", "Deep Space"),
    ("DSO", "Deep Space"), ("XYZ", "Other"), ("LEOX", "Other"),
    ("", "Unknown"), ("   ", "Unknown"), (None, "Unknown"),
])
def test_classify_orbit(raw, expected):
    assert classify_orbit(raw) == expected


def test_round_half_up_matches_js_math_round():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2


def test_normalize_rows_counts_skips(catalog_tsv):
    result = normalize_rows(parse_tsv(catalog_tsv), min_year=2015)
    assert [r.name for r in result.records] == ["Alpha", "Beta", "Gamma", "Delta", "Eps", "Unknown"]
    assert result.skipped_no_mass == 1
    assert result.skipped_no_date == 1
    assert result.skipped_old_date == 1
    assert all(r.mass_kg > 0 and r.year >= 2015 for r in result.records)


def test_normalize_rows_fields(catalog_tsv):
    records = {r.name: r for r in normalize_rows(parse_tsv(catalog_tsv)).records}
    beta = records["Beta"]
    assert beta.launch_date == "2021-03-12"
    assert beta.mass_kg == 4500
    assert beta.region == "Western Europe"
    assert beta.orbit == "GTO"
    assert records["Gamma"].region == "Other"
    assert records["Alpha"].mass_kg == 260
    assert records["Eps"].orbit == "Helio"


def test_sub_half_kg_mass_is_dropped():
    text = "Name\tLDate\tMass\nTiny\t2020 Jan  1\t0.3\n"
    result = normalize_rows(parse_tsv(text))
    assert result.records == []
    assert result.skipped_no_mass == 1


def test_missing_mass_column_skips_every_row():
    text = "Name\tLDate\nA\t2020 Jan  1\nB\t2021 Jan  1\n"
    result = normalize_rows(parse_tsv(text))
    assert result.records == []
    assert result.skipped_no_mass == 2


def test_min_year_is_a_parameter(catalog_tsv):
    result = normalize_rows(parse_tsv(catalog_tsv), min_year=2022)
    assert {r.year for r in result.records} == {2022}
    assert result.skipped_old_date == 4


@pytest.mark.parametrize("raw", ["1e400", "-1e400", "~1e999?"])
def test_parse_mass_rejects_infinite(raw):
    assert parse_mass(raw) is None


def test_oversized_masses_are_skipped_not_fatal():
    text = (
        "Name\tLDate\tMass\n"
        "Inf\t2020 Jan  1\t1e400\n"
        "Huge\t2020 Jan  1\t1e20\n"
        "Ok\t2020 Jan  2\t100\n"
    )
    result = normalize_rows(parse_tsv(text))
    assert [r.name for r in result.records] == ["Ok"]
    assert result.skipped_no_mass == 2


def test_non_ascii_digits_are_not_dates_or_masses():
    assert parse_date("２０２３ Jan 15") is None
    assert parse_date("2023 Jan １５") is None
    assert parse_mass("１００") is None
