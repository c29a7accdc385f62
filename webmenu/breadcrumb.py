"""Breadcrumb extraction along the active path of a menu."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Iterator, List

from bs4 import BeautifulSoup

from .items import HasTextAttributes, Item


def label_for(value: Any) -> str:
    """Return the display text of an item or of a chunk of markup."""

    if isinstance(value, Item):
        text = getattr(value, "text", None)
        value = text() if callable(text) else value.render()

    if not value:
        return ""

    return BeautifulSoup(str(value), "html.parser").get_text(" ", strip=True)


def _is_composite(item: Any) -> bool:
    return isinstance(item, Item) and isinstance(item, Iterable)


def _header_of(item: Any) -> Any:
    if isinstance(item, HasTextAttributes):
        return item.get_prepend()
    return ""


def _descend(item: Item) -> Iterator[str]:
    if not _is_composite(item):
        yield label_for(item)
        return

    for child in item:
        if _is_composite(child):
            yield label_for(_header_of(child))
        if child.is_active():
            yield from _descend(child)


def build_breadcrumb(menu: Iterable[Item]) -> List[str]:
    """Collect labels from the top-level active entry down to the active leaf.

    Every active top-level item contributes its header, then its active
    descendants: nested sub-menus contribute their headers and leaves their
    own text. Empty labels are dropped.
    """

    labels: List[str] = []
    for item in menu:
        if not item.is_active():
            continue
        labels.append(label_for(_header_of(item)))
        labels.extend(_descend(item))

    return [label for label in labels if label]


__all__ = ["build_breadcrumb", "label_for"]
