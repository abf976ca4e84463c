"""GeoJSON export of resolved pickup dates for map display."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable

from hardwaste.common.constants import DATE_PALETTE
from hardwaste.common.fs import write_json
from hardwaste.common.models import ResultRecord


def assign_date_colors(dates: Iterable[date], palette: tuple[str, ...] = DATE_PALETTE) -> dict[date, str]:
    """Map each distinct date, earliest first, to a palette colour, cycling when exhausted."""
    return {value: palette[idx % len(palette)] for idx, value in enumerate(sorted(set(dates)))}


def _feature(record: ResultRecord, color: str) -> dict:
    return {
        "type": "Feature",
        "geometry": {
            "type": "Point",
            "coordinates": [record.address.lon, record.address.lat],
        },
        "properties": {
            "color": color,
            "label": record.pickup_date.isoformat(),
            "address": record.address.line,
        },
    }


def build_feature_collection(records: list[ResultRecord]) -> dict:
    colors = assign_date_colors(record.pickup_date for record in records)
    return {
        "type": "FeatureCollection",
        "features": [_feature(record, colors[record.pickup_date]) for record in records],
    }


def write_geojson(records: list[ResultRecord], out_path: Path) -> Path:
    write_json(out_path, build_feature_collection(records))
    return out_path
