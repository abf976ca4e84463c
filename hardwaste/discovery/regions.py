"""Region enumeration from the street-directory landing page."""

from __future__ import annotations

from urllib.parse import urljoin

from hardwaste.common.constants import REGION_LINK_SELECTOR
from hardwaste.common.errors import StageError
from hardwaste.common.html import element_text, parse_document, require_attr, select_all
from hardwaste.common.http import HttpClient
from hardwaste.common.models import Region


def parse_regions(markup: str, base_url: str) -> list[Region]:
    document = parse_document(markup)
    regions: list[Region] = []
    for anchor in select_all(document, REGION_LINK_SELECTOR):
        href = require_attr(anchor, "href")
        regions.append(Region(name=element_text(anchor), source_url=urljoin(base_url, href)))
    return regions


def enumerate_regions(source_config: dict, http_client: HttpClient | None = None) -> list[Region]:
    directory_url = source_config["directory_url"]

    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        markup = client.get_text(directory_url)
        return parse_regions(markup, source_config["base_url"])
    except StageError as exc:
        exc.with_context(stage="regions", subject=directory_url)
        raise
    finally:
        if owns_client:
            client.close()
