"""Structural HTML selection and visible-text extraction."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from hardwaste.common.errors import MissingAttributeError


def parse_document(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def select_all(node: Tag, selector: str, *, limit: int | None = None) -> list[Tag]:
    matches = node.select(selector)
    if limit is not None:
        return matches[:limit]
    return matches


def select_first(node: Tag, selector: str) -> Tag | None:
    return node.select_one(selector)


def element_text(element: Tag) -> str:
    """Concatenated visible text of an element with runs of whitespace collapsed."""
    return " ".join(element.get_text().split())


def require_attr(element: Tag, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise MissingAttributeError(f"missing `{name}` attribute on `<{element.name}>`")
    if isinstance(value, list):
        return " ".join(value)
    return str(value)
