"""Console report for a finished run."""

from __future__ import annotations

from typing import TextIO

from hardwaste.common.models import ResultRecord

BANNER = "*****************"


def format_results(records: list[ResultRecord]) -> list[str]:
    return [f"{record.pickup_date.isoformat()}\t{record.address.line}" for record in records]


def build_run_summary(run_id: str, *, region_count: int, harvest: dict, results: list[ResultRecord]) -> dict:
    return {
        "run_id": run_id,
        "regions": region_count,
        "queries": harvest["query_count"],
        "addresses_not_found": len(harvest["addresses_not_found"]),
        "pickups_not_found": len(harvest["pickups_not_found"]),
        "resolved": len(harvest["records"]),
        "unique_dates": len(results),
    }


def print_results(records: list[ResultRecord], out: TextIO) -> None:
    out.write(f"{BANNER} RESULTS\n")
    for line in format_results(records):
        out.write(f"{line}\n")
    out.write(f"{BANNER}\n")
