import pytest

from gcat_ingest.models import SatelliteRecord

HEADER = "#JCAT\tSatname\tLDate\tMass\tOwner\tState\tOpOrbit"


def tsv(*rows):
    return "\n".join([HEADER, *["\t".join(r) for r in rows]]) + "\n"


@pytest.fixture
def scenario_tsv():
    return tsv(
        ("S1", "SatA", "2020 Mar  5", "100", "CNES", "F", "LEO/I"),
        ("S2", "SatB", "2014 Jan  1", "50", "NASA", "US", "LEO/I"),
        ("S3", "SatC", "2020 Jun 10", "-", "CAST", "PRC", "SSO"),
    )


@pytest.fixture
def catalog_tsv():
    return tsv(
        ("S1", "Alpha", "2021 Feb  1 1200", "260?", "SpX", "US", "LEO/I"),
        ("S2", "Beta", "2021 Mar 12", "~4500", "ESA", "ESA", "GTO"),
        ("S3", "Gamma", "2021 Apr  2", "40", "CAST", "PRC", "SSO"),
        ("S4", "Delta", "2022 May 30", ">1200", "DLR", "D", "GEO/S"),
        ("S5", "Eps", "2022 Jun  6", "12", "JAXA", "J", "HELIO"),
        ("S6", "", "2022 Jul  7", "75000", "NASA", "US", "EML2"),
        ("S7", "Old", "2010 Jan  1", "500", "NASA", "US", "LEO/I"),
        ("S8", "NoDate", "-", "500", "NASA", "US", "LEO/I"),
        ("S9", "NoMass", "2022 Aug  8", "", "NASA", "US", "LEO/I"),
    )


def make_record(year, mass_kg, region="Western-aligned", name="Sat", orbit="LEO"):
    return SatelliteRecord(
        name=name,
        launch_date=f"{year}-01-01",
        year=year,
        mass_kg=mass_kg,
        owner="",
        state="",
        region=region,
        orbit=orbit,
    )
