"""Tests for :mod:`webmenu.dispatch`."""

from __future__ import annotations

from typing import Optional, Union

from webmenu.dispatch import first_parameter_type, item_matches_type, resolve_kind
from webmenu.items import Activatable, HasHtmlAttributes, Link, RawHtml
from webmenu.menu import Menu


def only_links(link: Link) -> None:
    return None


def links_or_html(item: Union[Link, RawHtml]) -> None:
    return None


def optional_menu(menu: Optional[Menu]) -> None:
    return None


class Decorator:
    def __call__(self, item: HasHtmlAttributes) -> None:
        return None


def test_untyped_callback_matches_everything() -> None:
    """Given a lambda When inspected Then no type restriction applies."""

    kind = first_parameter_type(lambda item: None)

    assert kind is None
    assert item_matches_type(RawHtml.raw("x"), kind)
    assert item_matches_type(Menu.new(), kind)


def test_annotated_callback_is_selective() -> None:
    """Given a Link-typed function When matched Then only links qualify."""

    kind = first_parameter_type(only_links)

    assert kind is Link
    assert item_matches_type(Link.to("/", "Home"), kind)
    assert not item_matches_type(RawHtml.raw("x"), kind)


def test_union_annotations_become_tuples() -> None:
    """Given union and optional annotations When inspected Then member types are returned."""

    assert first_parameter_type(links_or_html) == (Link, RawHtml)
    assert first_parameter_type(optional_menu) == (Menu,)


def test_capability_annotations_match_implementers() -> None:
    """Given a capability-typed callable object When matched Then implementers qualify."""

    kind = first_parameter_type(Decorator())

    assert kind is HasHtmlAttributes
    assert item_matches_type(Link.to("/", "Home"), kind)
    assert item_matches_type(Menu.new(), kind)
    assert not item_matches_type(RawHtml.raw("x"), kind)


def test_unresolvable_annotation_matches_by_class_name() -> None:
    """Given a callback typed with a local class When matched Then the class name is used."""

    class FancyLink(Link):
        pass

    def only_fancy(link: FancyLink) -> None:
        return None

    kind = first_parameter_type(only_fancy)

    assert item_matches_type(FancyLink("/", "Home"), kind)
    assert not item_matches_type(Link.to("/", "Home"), kind)


def test_explicit_kind_wins() -> None:
    """Given an explicit kind When resolved Then the annotation is ignored."""

    assert resolve_kind(only_links, Activatable) is Activatable
    assert resolve_kind(only_links) is Link
