"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Region:
    name: str
    source_url: str


@dataclass(frozen=True)
class Address:
    id: str
    line: str
    lat: float
    lon: float


@dataclass(frozen=True)
class ResultRecord:
    address: Address
    pickup_date: date
