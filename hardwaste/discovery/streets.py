"""Street enumeration per region, producing address search queries."""

from __future__ import annotations

import logging
from typing import Iterable

from hardwaste.common.constants import STREET_LABEL_SELECTOR
from hardwaste.common.errors import StageError
from hardwaste.common.html import element_text, parse_document, select_all
from hardwaste.common.http import HttpClient
from hardwaste.common.logging import log_event
from hardwaste.common.models import Region


def build_search_query(street_label: str, region_name: str) -> str:
    return f"{street_label} {region_name}".lower()


def parse_street_labels(markup: str, *, max_per_region: int | None = None) -> list[str]:
    document = parse_document(markup)
    return [element_text(label) for label in select_all(document, STREET_LABEL_SELECTOR, limit=max_per_region)]


def enumerate_search_queries(
    regions: Iterable[Region],
    *,
    max_per_region: int | None = None,
    http_client: HttpClient | None = None,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Fetch each region's street list and build one search query per street.

    A failed region page aborts the whole enumeration; nothing gathered from
    earlier regions is returned.
    """
    queries: list[str] = []

    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        for region in regions:
            try:
                markup = client.get_text(region.source_url)
            except StageError as exc:
                exc.with_context(stage="streets", subject=region.name)
                raise

            labels = parse_street_labels(markup, max_per_region=max_per_region)
            if logger is not None:
                log_event(
                    logger,
                    f"region {region.name}: {len(labels)} streets",
                    stage="streets",
                    region=region.name,
                    event="REGION_STREETS",
                    status="ok",
                    count=len(labels),
                )
            queries.extend(build_search_query(label, region.name) for label in labels)
    finally:
        if owns_client:
            client.close()

    return queries
