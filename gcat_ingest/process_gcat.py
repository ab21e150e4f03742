"""
process_gcat.py
---------------
End-to-end GCAT ingestion for the Launcher Sizing tool:
fetch -> parse TSV -> normalize -> aggregate -> validate -> write JSON.
Keeps 2015+ launches with a valid mass (cutoff configurable). The run is
all-or-nothing: any failure logs, prints an error and exits nonzero.

Source: https://planet4589.org/space/gcat/ (CC-BY)
Citation: "data from GCAT (J. McDowell, planet4589.org/space/gcat)"
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console

from gcat_ingest.aggregate import build_output
from gcat_ingest.config import Settings, check_mass_bins, load_settings
from gcat_ingest.errors import PipelineError
from gcat_ingest.fetch_raw import fetch_text, read_local, sha256_text
from gcat_ingest.models import ParseResult
from gcat_ingest.normalize import normalize_rows
from gcat_ingest.parse_tsv import parse_tsv
from gcat_ingest.validate_output import records_frame, validate_output

console = Console()
log = logging.getLogger(__name__)


def setup_logging(log_file: Path) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_file),
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def report_parse(result: ParseResult, min_year: int) -> None:
    console.print("\nProcessing summary:")
    console.print(f"  Total data rows: {result.total_rows}")
    console.print(f"  Skipped (no mass): {result.skipped_no_mass}")
    console.print(f"  Skipped (no date): {result.skipped_no_date}")
    console.print(f"  Skipped (before {min_year}): {result.skipped_old_date}")
    console.print(f"  Valid satellites: [green]{len(result.records)}[/green]")
    log.info(
        "rows=%d no_mass=%d no_date=%d old=%d valid=%d",
        result.total_rows, result.skipped_no_mass, result.skipped_no_date,
        result.skipped_old_date, len(result.records),
    )


def write_output(doc: Dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2)
    log.info("Wrote %s", path)
    return path


def print_summary(doc: Dict[str, Any], path: Path) -> None:
    years = doc["years"]
    console.print("\n=== Summary ===")
    if years:
        console.print(f"Years covered: {years[0]} - {years[-1]}")
    console.print(f"Total satellites: {doc['metadata']['totalSatellites']}")
    console.print(f"Output file size: {path.stat().st_size / 1024 / 1024:.2f} MB")

    console.print("\nYearly breakdown (Global):")
    for year in years[-5:]:
        data = doc["distributions"]["Global"][year]
        console.print(f"  {year}: {data['totalCount']} satellites, {data['totalMassTonnes']} tonnes")

    df = records_frame(doc)
    if not df.empty:
        console.print("\nBy orbit:")
        console.print(df["orbit"].value_counts().to_string())


def run(settings: Settings, session=None) -> Dict[str, Any]:
    """Run every stage and write the document; returns it."""
    check_mass_bins(settings.mass_bins)

    if settings.input_file is not None:
        text = read_local(settings.input_file)
    else:
        text = fetch_text(
            settings.source_url,
            session=session,
            max_redirects=settings.max_redirects,
            timeout=settings.timeout_s,
        )

    console.print("\nParsing TSV data...")
    table = parse_tsv(text)
    console.print(f"Found {len(table.header)} columns: {', '.join(table.header[:10])}...", markup=False)
    console.print(f"Column indices: {table.columns}", markup=False)

    result = normalize_rows(table, min_year=settings.min_year)
    report_parse(result, settings.min_year)

    console.print("\nGenerating output...")
    doc = build_output(
        result.records,
        mass_bins=settings.mass_bins,
        min_year=settings.min_year,
        regions=settings.regions,
        forecast_boundary=settings.forecast_boundary,
        source_sha256=sha256_text(text),
    )
    validate_output(doc, min_year=settings.min_year)

    console.print(f"\nWriting to [cyan]{settings.output_path}[/cyan] ...")
    write_output(doc, settings.output_path)
    print_summary(doc, settings.output_path)
    return doc


def main(settings: Optional[Settings] = None) -> None:
    try:
        settings = settings or load_settings()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise SystemExit(1)

    setup_logging(settings.log_file)
    console.print("=== GCAT Data Processing ===\n")
    try:
        run(settings)
    except (PipelineError, OSError, ValueError) as e:
        log.exception("GCAT processing failed: %s", e)
        console.print(f"[red]Processing failed:[/red] {e}")
        raise SystemExit(1)
    console.print("\n[green]=== Done! ===[/green]")


if __name__ == "__main__":
    main()
