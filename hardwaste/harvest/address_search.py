"""Address resolution against the council address-search API."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote, urlencode

from hardwaste.common.errors import SchemaError, StageError
from hardwaste.common.http import HttpClient
from hardwaste.common.models import Address


def build_search_url(search_url: str, query: str) -> str:
    # Spaces must go out as %20; the endpoint does not accept `+`.
    return f"{search_url}?{urlencode({'keywords': query}, quote_via=quote)}"


def _require_str(item: dict, key: str) -> str:
    if key not in item:
        raise SchemaError(f"missing json key `{key}`")
    value = item[key]
    if not isinstance(value, str):
        raise SchemaError(f"invalid json type for value of key `{key}`")
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_lat_lon(item: dict) -> tuple[float, float]:
    if "LatLon" not in item:
        raise SchemaError("missing json key `LatLon`")
    value = item["LatLon"]
    if not isinstance(value, list) or len(value) != 2 or not all(_is_number(v) for v in value):
        raise SchemaError("invalid json type for value of key `LatLon`")
    return float(value[0]), float(value[1])


def parse_address_payload(body: str) -> Address | None:
    """Return the first matched address, or ``None`` when nothing matched.

    Only the first entry of ``Items`` is considered, even when the search
    returns several candidates.
    """
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise SchemaError("response body is not valid json") from exc

    if not isinstance(payload, dict) or "Items" not in payload:
        raise SchemaError("missing json key `Items`")
    items = payload["Items"]
    if not isinstance(items, list):
        raise SchemaError("invalid json type for value of key `Items`")
    if not items:
        return None

    first = items[0]
    if not isinstance(first, dict):
        raise SchemaError("invalid json type for `Items[0]`")

    address_id = _require_str(first, "Id")
    line = _require_str(first, "AddressSingleLine")
    lat, lon = _require_lat_lon(first)
    return Address(id=address_id, line=line, lat=lat, lon=lon)


def resolve_address(
    query: str,
    *,
    search_url: str,
    http_client: HttpClient | None = None,
) -> Address | None:
    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        body = client.get_text(build_search_url(search_url, query))
        return parse_address_payload(body)
    except StageError as exc:
        exc.with_context(stage="addresses", subject=query)
        raise
    finally:
        if owns_client:
            client.close()
