"""Pickup date extraction from the council waste-services API.

The API answers with JSON wrapping an HTML fragment. The fragment holds one
``<article>`` per service category; the hard-waste article carries the next
pickup date as free text in a ``.next-service`` element.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from urllib.parse import quote, urlencode

from hardwaste.common.constants import (
    NEXT_SERVICE_SELECTOR,
    PICKUP_DATE_FORMATS,
    PICKUP_UNAVAILABLE_TEXT,
    SERVICE_ARTICLE_SELECTOR,
    SERVICE_HEADING_SELECTOR,
    TARGET_CATEGORY,
    WASTE_SERVICES_PARAMS,
)
from hardwaste.common.errors import SchemaError, StageError, UnexpectedContentError
from hardwaste.common.html import element_text, parse_document, select_all, select_first
from hardwaste.common.http import HttpClient


def build_services_url(services_url: str, address_id: str) -> str:
    params = [*WASTE_SERVICES_PARAMS, ("geolocationid", address_id)]
    return f"{services_url}?{urlencode(params, safe='/', quote_via=quote)}"


def _parse_with_format(text: str, fmt: str) -> date | None:
    try:
        parsed = datetime.strptime(text, fmt).date()
    except ValueError:
        return None
    # strptime ignores %a; a weekday that disagrees with the date is not a match.
    if "%a" in fmt and parsed.strftime("%a").lower() != text.split(maxsplit=1)[0].lower():
        return None
    return parsed


def parse_pickup_date(text: str) -> date | None:
    for fmt in PICKUP_DATE_FORMATS:
        parsed = _parse_with_format(text, fmt)
        if parsed is not None:
            return parsed
    return None


def find_date_in_content(content: str) -> date | None:
    """Return the hard-waste pickup date in a services fragment.

    ``None`` means no hard-waste article exists or the council reports the
    service as unavailable. Any other unparseable date text raises
    ``UnexpectedContentError``.
    """
    document = parse_document(content)

    for article in select_all(document, SERVICE_ARTICLE_SELECTOR):
        heading = select_first(article, SERVICE_HEADING_SELECTOR)
        if heading is None or element_text(heading) != TARGET_CATEGORY:
            continue

        body = select_first(article, NEXT_SERVICE_SELECTOR)
        if body is None:
            raise UnexpectedContentError(
                f"no `{NEXT_SERVICE_SELECTOR}` element in `{TARGET_CATEGORY}` article",
                text=element_text(article),
            )
        body_text = element_text(body)

        parsed = parse_pickup_date(body_text)
        if parsed is not None:
            return parsed
        if body_text == PICKUP_UNAVAILABLE_TEXT:
            return None
        raise UnexpectedContentError(f"unexpected body for pickup date: {body_text}", text=body_text)

    return None


def parse_services_payload(body: str) -> str:
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise SchemaError("response body is not valid json") from exc

    if not isinstance(payload, dict) or "responseContent" not in payload:
        raise SchemaError("missing json key `responseContent`")
    content = payload["responseContent"]
    if not isinstance(content, str):
        raise SchemaError("invalid json type for value of key `responseContent`")
    return content


def fetch_pickup_date(
    address_id: str,
    *,
    services_url: str,
    http_client: HttpClient | None = None,
) -> date | None:
    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        body = client.get_text(build_services_url(services_url, address_id))
        return find_date_in_content(parse_services_payload(body))
    except StageError as exc:
        exc.with_context(stage="pickups", subject=address_id)
        raise
    finally:
        if owns_client:
            client.close()
