from __future__ import annotations

import json

import pytest

from hardwaste.common.constants import (
    ADDRESS_SEARCH_URL,
    DIRECTORY_BASE_URL,
    DIRECTORY_URL,
    WASTE_SERVICES_URL,
)
from hardwaste.common.errors import FetchError
from hardwaste.harvest.address_search import build_search_url
from hardwaste.harvest.waste_services import build_services_url


class FakeHttpClient:
    def __init__(self, pages: dict[str, str]):
        self.pages = pages
        self.calls: list[str] = []

    def get_text(self, url: str, *, params=None) -> str:
        del params
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(f"HTTP status 404 from {url}")
        return self.pages[url]

    def close(self):
        return None


def directory_page(regions: list[tuple[str, str]]) -> str:
    items = "".join(f'<li><a href="{href}">{name}</a></li>' for name, href in regions)
    return f'<html><body><div class="columns"><ul>{items}</ul></div></body></html>'


def street_page(labels: list[str]) -> str:
    items = "".join(f"<li><label>{label}</label></li>" for label in labels)
    return f'<html><body><div class="street-columns"><ul>{items}</ul></div></body></html>'


def search_body(*items: dict) -> str:
    return json.dumps({"Items": list(items)})


def services_body(next_service_text: str) -> str:
    fragment = (
        "<article><h3>Rubbish</h3><div class=\"next-service\">Mon 14/07/2025</div></article>"
        "<article><h3>Hard waste, bundled branches and metals</h3>"
        f"<div class=\"next-service\">{next_service_text}</div></article>"
    )
    return json.dumps({"responseContent": fragment})


def yarra_site_pages() -> dict[str, str]:
    """Two regions with two streets each.

    Three of the four streets resolve to an address; two of those addresses
    have a pickup date, and both dates fall on 2025-07-15.
    """
    return {
        DIRECTORY_URL: directory_page(
            [
                ("Lilydale", "/shire-of-yarra-ranges/lilydale"),
                ("Montrose", "/shire-of-yarra-ranges/montrose"),
            ]
        ),
        f"{DIRECTORY_BASE_URL}/shire-of-yarra-ranges/lilydale": street_page(["Main Street", "Cave Hill Road"]),
        f"{DIRECTORY_BASE_URL}/shire-of-yarra-ranges/montrose": street_page(["Swansea Road", "Leith Road"]),
        build_search_url(ADDRESS_SEARCH_URL, "main street lilydale"): search_body(
            {"Id": "101", "AddressSingleLine": "1 Main Street LILYDALE 3140", "LatLon": [-37.756, 145.351]},
            {"Id": "102", "AddressSingleLine": "2 Main Street LILYDALE 3140", "LatLon": [-37.757, 145.352]},
        ),
        build_search_url(ADDRESS_SEARCH_URL, "cave hill road lilydale"): search_body(),
        build_search_url(ADDRESS_SEARCH_URL, "swansea road montrose"): search_body(
            {"Id": "201", "AddressSingleLine": "5 Swansea Road MONTROSE 3765", "LatLon": [-37.81, 145.34]},
        ),
        build_search_url(ADDRESS_SEARCH_URL, "leith road montrose"): search_body(
            {"Id": "202", "AddressSingleLine": "9 Leith Road MONTROSE 3765", "LatLon": [-37.82, 145.35]},
        ),
        build_services_url(WASTE_SERVICES_URL, "101"): services_body("15 July 2025"),
        build_services_url(WASTE_SERVICES_URL, "201"): services_body("Tue 15/07/2025"),
        build_services_url(WASTE_SERVICES_URL, "202"): services_body("Not available at this address"),
    }


@pytest.fixture
def make_client():
    return FakeHttpClient


@pytest.fixture
def yarra_site() -> FakeHttpClient:
    return FakeHttpClient(yarra_site_pages())
