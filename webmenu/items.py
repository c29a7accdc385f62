"""Menu item variants and the optional capabilities they implement.

Every node that can be added to a :class:`~webmenu.menu.Menu` is an
:class:`Item`. Beyond rendering and reporting whether it is active, an item
opts into extra behaviour by inheriting capability mixins:

* :class:`Activatable` - carries active / exact-active flags and knows how to
  match itself against the current request URL.
* :class:`HasHtmlAttributes` - owns the attributes of its own root tag.
* :class:`HasParentAttributes` - owns the attributes of the wrapper tag a
  parent menu renders around it.
* :class:`HasConditions` - may veto its own rendering via :meth:`will_render`.
* :class:`Prerenderable` - gets a :meth:`before_render` call before the parent
  menu renders it.

Filters and :meth:`Menu.each` callbacks select items through these classes
(see :mod:`webmenu.dispatch`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

from .html import AttributeValue, Attributes, as_attributes
from .url import VALID_SCHEMES, Url

Condition = Union[bool, Callable[[], Any]]


def resolve_condition(condition: Condition) -> bool:
    """Return the truthiness of ``condition``, calling it first when callable."""

    if callable(condition):
        return bool(condition())
    return bool(condition)


class Item(ABC):
    """Anything that can be rendered inside a menu."""

    @abstractmethod
    def render(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def is_active(self) -> bool:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


class Prerenderable(ABC):
    """Items that need a hook right before a parent menu renders them."""

    @abstractmethod
    def before_render(self) -> None:
        raise NotImplementedError


class Activatable:
    """Active and exact-active state, plus URL based activation."""

    _url: Optional[str] = None
    _active: bool = False
    _exact_active: bool = False

    def url(self) -> Optional[str]:
        return self._url

    def has_url(self) -> bool:
        return self._url is not None

    def is_active(self) -> bool:
        return self._active

    def is_exact_active(self) -> bool:
        return self._exact_active

    def set_active(self, active: bool | Callable[[], Any] = True):
        self._active = resolve_condition(active)
        return self

    def set_inactive(self):
        self._active = False
        return self

    def set_exact_active(self, exact_active: bool | Callable[[], Any] = True):
        self._exact_active = resolve_condition(exact_active)
        return self

    def set_exact_inactive(self):
        self._exact_active = False
        return self

    def determine_active_for_url(self, url: str, root: str = "/"):
        """Mark this item active when ``url`` is (below) the item's own URL.

        ``/about`` is active for ``/about`` and ``/about/team`` but not for
        ``/aboutus``. An item whose URL equals ``root`` is never marked active,
        so a home link does not light up on every page; it can still be
        exact-active.

        URLs with a non-web scheme or an unparsable port, on either side,
        leave the item neither active nor exact-active.
        """

        if not self.has_url():
            return self

        item_url = _parse_web_url(self._url)
        match_url = _parse_web_url(url)
        if item_url is None or match_url is None:
            self._active = False
            self._exact_active = False
            return self

        if item_url.host and match_url.host and item_url.host != match_url.host:
            self._active = False
            self._exact_active = False
            return self

        item_path = _ensure_trailing_slash(item_url.path)
        match_path = _ensure_trailing_slash(match_url.path)
        root_url = _parse_web_url(root)
        root_path = _ensure_trailing_slash(root_url.path if root_url is not None else "/")

        self._exact_active = item_path == match_path

        if item_path == root_path:
            self._active = False
            return self

        self._active = match_path.startswith(item_path)
        return self


def _parse_web_url(url: str) -> Optional[Url]:
    """Parse ``url`` for matching; ``None`` for non-web schemes or bad ports."""

    try:
        if urlsplit(url).scheme.lower() not in VALID_SCHEMES + ("",):
            return None
        return Url.from_string(url)
    except ValueError:
        return None


def _ensure_trailing_slash(path: str) -> str:
    return path if path.endswith("/") else path + "/"


class HasHtmlAttributes:
    """Attributes rendered on the item's own root tag."""

    _html_attributes: Attributes

    def set_attribute(self, attribute: str, value: AttributeValue = ""):
        self._html_attributes.set_attribute(attribute, value)
        return self

    def set_attributes(self, attributes: Attributes | Mapping[str, AttributeValue]):
        self._html_attributes.merge_with(as_attributes(attributes))
        return self

    def add_class(self, class_name: AttributeValue):
        self._html_attributes.add_class(class_name)
        return self

    def html_attributes(self) -> Attributes:
        return self._html_attributes


class HasParentAttributes:
    """Attributes rendered on the wrapper tag a parent menu puts around the item."""

    _parent_attributes: Attributes

    def set_parent_attribute(self, attribute: str, value: AttributeValue = ""):
        self._parent_attributes.set_attribute(attribute, value)
        return self

    def set_parent_attributes(self, attributes: Attributes | Mapping[str, AttributeValue]):
        self._parent_attributes.merge_with(as_attributes(attributes))
        return self

    def add_parent_class(self, class_name: AttributeValue):
        self._parent_attributes.add_class(class_name)
        return self

    def parent_attributes(self) -> Attributes:
        return self._parent_attributes


class HasConditions:
    """Render-time gate; a falsy condition makes the parent skip the item."""

    _condition: Condition = True

    def set_condition(self, condition: Condition):
        self._condition = condition
        return self

    def will_render(self) -> bool:
        return resolve_condition(self._condition)


class HasTextAttributes:
    """Markup (or an item) rendered right before and after the item itself."""

    _prepend: Union[str, Item] = ""
    _append: Union[str, Item] = ""

    def prepend(self, prepend: Union[str, Item]):
        self._prepend = prepend
        return self

    def prepend_if(self, condition: Condition, prepend: Union[str, Item]):
        if resolve_condition(condition):
            self._prepend = prepend
        return self

    def append(self, append: Union[str, Item]):
        self._append = append
        return self

    def append_if(self, condition: Condition, append: Union[str, Item]):
        if resolve_condition(condition):
            self._append = append
        return self

    def get_prepend(self) -> Union[str, Item]:
        return self._prepend

    def get_append(self) -> Union[str, Item]:
        return self._append

    def render_prepend(self) -> str:
        return _render_text(self._prepend)

    def render_append(self) -> str:
        return _render_text(self._append)


def _render_text(value: Union[str, Item]) -> str:
    if isinstance(value, Item):
        return value.render()
    return value or ""


class Link(Activatable, HasHtmlAttributes, HasParentAttributes, HasConditions, HasTextAttributes, Item):
    """An anchor pointing at ``url`` with ``text`` as its label."""

    def __init__(self, url: str, text: str) -> None:
        self._url = url
        self._text = text
        self._active = False
        self._exact_active = False
        self._html_attributes = Attributes()
        self._parent_attributes = Attributes()

    @classmethod
    def to(cls, url: str, text: str) -> "Link":
        return cls(url, text)

    def text(self) -> str:
        return self._text

    def set_text(self, text: str) -> "Link":
        self._text = text
        return self

    def set_url(self, url: str) -> "Link":
        self._url = url
        return self

    def render(self) -> str:
        attributes = Attributes({"href": self._url})
        attributes.merge_with(self._html_attributes)

        return f"{self.render_prepend()}<a {attributes}>{self._text}</a>{self.render_append()}"

    def to_struct(self) -> Dict[str, Any]:
        return {"title": self._text, "url": self._url}

    def __repr__(self) -> str:
        return f"Link(url={self._url!r}, text={self._text!r})"


class RawHtml(Activatable, HasParentAttributes, HasConditions, Item):
    """A chunk of markup rendered verbatim.

    Raw HTML has no URL, so URL matching never activates it; only the
    predicate form of ``Menu.set_active`` (or an explicit ``set_active()``) can.
    """

    def __init__(self, html: str) -> None:
        self._html = html
        self._active = False
        self._exact_active = False
        self._parent_attributes = Attributes()

    @classmethod
    def raw(cls, html: str) -> "RawHtml":
        return cls(html)

    @classmethod
    def empty(cls) -> "RawHtml":
        return cls("")

    def html(self) -> str:
        return self._html

    def render(self) -> str:
        return self._html

    def to_struct(self) -> str:
        return self._html

    def __repr__(self) -> str:
        return f"RawHtml({self._html!r})"


__all__ = [
    "Activatable",
    "Condition",
    "HasConditions",
    "HasHtmlAttributes",
    "HasParentAttributes",
    "HasTextAttributes",
    "Item",
    "Link",
    "Prerenderable",
    "RawHtml",
    "resolve_condition",
]
