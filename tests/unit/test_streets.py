from pathlib import Path

import pytest

from hardwaste.common.errors import FetchError
from hardwaste.common.models import Region
from hardwaste.discovery.streets import build_search_query, enumerate_search_queries, parse_street_labels

LILYDALE = Region(name="Lilydale", source_url="https://streets.example/lilydale")
MONTROSE = Region(name="Montrose", source_url="https://streets.example/montrose")


def _street_page(*labels: str) -> str:
    items = "".join(f"<li><label>{label}</label></li>" for label in labels)
    return f'<div class="street-columns"><ul>{items}</ul></div>'


def test_parse_street_labels_only_reads_street_columns():
    markup = Path("tests/fixtures/pages/streets_lilydale.html").read_text(encoding="utf-8")
    assert parse_street_labels(markup) == ["Main Street", "Castella Street", "Hutchinson Street"]


def test_parse_street_labels_caps_per_region():
    markup = Path("tests/fixtures/pages/streets_lilydale.html").read_text(encoding="utf-8")
    assert parse_street_labels(markup, max_per_region=2) == ["Main Street", "Castella Street"]


def test_build_search_query_lowercases_street_and_region():
    assert build_search_query("Main Street", "Mount Evelyn") == "main street mount evelyn"


def test_enumerate_search_queries_preserves_region_then_street_order(make_client):
    client = make_client(
        {
            LILYDALE.source_url: _street_page("Main Street", "Cave Hill Road"),
            MONTROSE.source_url: _street_page("Swansea Road"),
        }
    )

    queries = enumerate_search_queries([LILYDALE, MONTROSE], http_client=client)

    assert queries == ["main street lilydale", "cave hill road lilydale", "swansea road montrose"]
    assert client.calls == [LILYDALE.source_url, MONTROSE.source_url]


def test_enumerate_search_queries_aborts_on_failed_region(make_client):
    client = make_client({LILYDALE.source_url: _street_page("Main Street")})

    with pytest.raises(FetchError) as excinfo:
        enumerate_search_queries([LILYDALE, MONTROSE], http_client=client)

    assert excinfo.value.stage == "streets"
    assert excinfo.value.subject == "Montrose"
