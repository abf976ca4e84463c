"""Per-query resolution: search query -> address -> pickup date.

Expected absences (no address match, no scheduled pickup) skip the query.
Every other failure propagates and ends the run.
"""

from __future__ import annotations

import logging
from typing import Iterable

from hardwaste.common.http import HttpClient
from hardwaste.common.logging import log_event
from hardwaste.common.models import ResultRecord
from hardwaste.harvest.address_search import resolve_address
from hardwaste.harvest.waste_services import fetch_pickup_date


def _log(logger: logging.Logger | None, message: str, **fields) -> None:
    if logger is not None:
        log_event(logger, message, **fields)


def run_pickup_harvest(
    queries: Iterable[str],
    source_config: dict,
    http_client: HttpClient | None = None,
    logger: logging.Logger | None = None,
) -> dict:
    records: list[ResultRecord] = []
    query_count = 0
    addresses_not_found: list[str] = []
    pickups_not_found: list[str] = []

    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        for query in queries:
            query_count += 1

            address = resolve_address(
                query,
                search_url=source_config["address_search_url"],
                http_client=client,
            )
            if address is None:
                addresses_not_found.append(query)
                _log(logger, "address not found", stage="addresses", query=query, event="ADDRESS_NOT_FOUND", status="skipped")
                continue
            _log(
                logger,
                f"address {address.line}",
                stage="addresses",
                query=query,
                address_id=address.id,
                event="ADDRESS_FOUND",
                status="ok",
            )

            pickup_date = fetch_pickup_date(
                address.id,
                services_url=source_config["waste_services_url"],
                http_client=client,
            )
            if pickup_date is None:
                pickups_not_found.append(query)
                _log(
                    logger,
                    "pickup not available or not found",
                    stage="pickups",
                    query=query,
                    address_id=address.id,
                    event="PICKUP_NOT_FOUND",
                    status="skipped",
                )
                continue
            _log(
                logger,
                f"pickup {pickup_date.isoformat()}",
                stage="pickups",
                query=query,
                address_id=address.id,
                event="PICKUP_FOUND",
                status="ok",
            )

            records.append(ResultRecord(address=address, pickup_date=pickup_date))
    finally:
        if owns_client:
            client.close()

    return {
        "query_count": query_count,
        "records": records,
        "addresses_not_found": addresses_not_found,
        "pickups_not_found": pickups_not_found,
    }
