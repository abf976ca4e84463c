"""Deduplicate results by pickup date and order them by date."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from hardwaste.common.models import ResultRecord


def aggregate_results(records: Iterable[ResultRecord]) -> list[ResultRecord]:
    """Keep the first record seen for each pickup date, sorted ascending by date."""
    seen_dates: set[date] = set()
    kept: list[ResultRecord] = []
    for record in records:
        if record.pickup_date in seen_dates:
            continue
        seen_dates.add(record.pickup_date)
        kept.append(record)
    return sorted(kept, key=lambda record: record.pickup_date)
