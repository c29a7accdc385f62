"""The :class:`Menu` composite: building, activation and rendering."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .breadcrumb import build_breadcrumb, label_for
from .config import MenuSettings
from .dispatch import Kind, item_matches_type, resolve_kind
from .exceptions import InvalidArgument
from .html import AttributeValue, Attributes, Tag, as_attributes
from .items import (
    Activatable,
    Condition,
    HasConditions,
    HasHtmlAttributes,
    HasParentAttributes,
    HasTextAttributes,
    Item,
    Link,
    Prerenderable,
    RawHtml,
    resolve_condition,
)
from .tracing import log_event, trace

_LOGGER = logging.getLogger("webmenu.menu")

ItemCallback = Callable[[Any], Any]
MenuBuilder = Callable[["Menu"], Any]
Filter = Tuple[Kind, ItemCallback]


class Menu(HasHtmlAttributes, HasParentAttributes, HasConditions, HasTextAttributes, Item):
    """An ordered list of items, itself usable as an item of another menu.

    Builder methods mutate the menu and return it so calls can be chained::

        menu = (
            Menu.new()
            .link("/", "Home")
            .submenu("<span>Docs</span>", lambda docs: docs.link("/docs/install", "Install"))
            .set_active("/docs/install")
        )
        menu.render()
    """

    def __init__(self, *items: Item) -> None:
        self._items: List[Item] = list(items)
        self._filters: List[Filter] = []
        self._prepend: Union[str, Item] = ""
        self._append: Union[str, Item] = ""
        self._wrap: Optional[Tuple[str, Attributes]] = None
        self._active_class = "active"
        self._exact_active_class = "exact-active"
        self._wrapper_tag_name: Optional[str] = "ul"
        self._parent_tag_name: Optional[str] = "li"
        self._active_class_on_parent = True
        self._active_class_on_link = False
        self._root = "/"
        self._html_attributes = Attributes()
        self._parent_attributes = Attributes()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def new(cls, items: Iterable[Item] = (), settings: MenuSettings | None = None) -> "Menu":
        """Create a menu, optionally prefilled with ``items``."""

        menu = cls(*items)
        if settings is not None:
            menu.configure(settings)
        return menu

    @classmethod
    def build(
        cls,
        items: Union[Iterable[Any], Mapping[Any, Any]],
        callback: Callable[["Menu", Any, Any], Optional["Menu"]],
        initial: Optional["Menu"] = None,
    ) -> "Menu":
        """Build a menu from a collection, see :meth:`fill`."""

        menu = initial if initial is not None else cls.new()
        return menu.fill(items, callback)

    def fill(
        self,
        items: Union[Iterable[Any], Mapping[Any, Any]],
        callback: Callable[["Menu", Any, Any], Optional["Menu"]],
    ) -> "Menu":
        """Feed every entry to ``callback(menu, value, key)``.

        Sequences use their index as key. A menu returned by the callback
        replaces the accumulator for the following entries.
        """

        pairs = items.items() if isinstance(items, Mapping) else enumerate(items)
        menu = self
        for key, value in pairs:
            result = callback(menu, value, key)
            if result is not None:
                menu = result
        return menu

    def configure(self, settings: MenuSettings) -> "Menu":
        """Apply render-policy ``settings`` to this menu."""

        self._active_class = settings.active_class
        self._exact_active_class = settings.exact_active_class
        self._wrapper_tag_name = settings.wrapper_tag
        self._parent_tag_name = settings.parent_tag
        self._active_class_on_parent = settings.active_class_on_parent
        self._active_class_on_link = settings.active_class_on_link
        self._root = settings.root
        return self

    def blueprint(self) -> "Menu":
        """Return an empty menu sharing only the filters and the active class."""

        clone = type(self)()
        clone._filters = list(self._filters)
        clone._active_class = self._active_class
        return clone

    # ------------------------------------------------------------------
    # Adding items
    # ------------------------------------------------------------------
    def add(self, item: Item) -> "Menu":
        """Run the registered filters over ``item`` and append it."""

        for kind, callback in self._filters:
            self._apply_filter(kind, callback, item)

        self._items.append(item)
        return self

    def add_if(self, condition: Condition, item: Item) -> "Menu":
        if resolve_condition(condition):
            self.add(item)
        return self

    def link(self, url: str, text: str) -> "Menu":
        return self.add(Link.to(url, text))

    def link_if(self, condition: Condition, url: str, text: str) -> "Menu":
        if resolve_condition(condition):
            self.link(url, text)
        return self

    def empty(self) -> "Menu":
        return self.add(RawHtml.empty())

    def html(
        self,
        html: str,
        parent_attributes: Attributes | Mapping[str, AttributeValue] | None = None,
    ) -> "Menu":
        item = RawHtml.raw(html)
        if parent_attributes is not None:
            item.set_parent_attributes(parent_attributes)
        return self.add(item)

    def html_if(
        self,
        condition: Condition,
        html: str,
        parent_attributes: Attributes | Mapping[str, AttributeValue] | None = None,
    ) -> "Menu":
        if resolve_condition(condition):
            self.html(html, parent_attributes)
        return self

    def submenu(
        self,
        header: Union[str, Item, "Menu", MenuBuilder],
        menu: Union["Menu", MenuBuilder, None] = None,
    ) -> "Menu":
        """Add a nested menu, optionally headed by ``header``.

        ``menu`` may be a :class:`Menu` or a callback that fills a fresh
        :meth:`blueprint` in place. With a single argument it is the menu.
        """

        if menu is None:
            header, menu = "", header

        submenu = self._create_submenu(menu)
        return self.add(submenu.prepend_if(header, header))

    def submenu_if(
        self,
        condition: Condition,
        header: Union[str, Item, "Menu", MenuBuilder],
        menu: Union["Menu", MenuBuilder, None] = None,
    ) -> "Menu":
        if resolve_condition(condition):
            self.submenu(header, menu)
        return self

    def _create_submenu(self, menu: Union["Menu", MenuBuilder]) -> "Menu":
        if isinstance(menu, Menu):
            return menu
        submenu = self.blueprint()
        menu(submenu)
        return submenu

    # ------------------------------------------------------------------
    # Callbacks and filters
    # ------------------------------------------------------------------
    def each(self, callback: ItemCallback, kind: Kind = None) -> "Menu":
        """Call ``callback`` for every direct child matching its parameter type."""

        kind = resolve_kind(callback, kind)
        for item in list(self._items):
            if item_matches_type(item, kind):
                callback(item)
        return self

    def register_filter(self, callback: ItemCallback, kind: Kind = None) -> "Menu":
        """Run ``callback`` on every matching item added from now on."""

        kind = resolve_kind(callback, kind)
        self._filters.append((kind, callback))
        log_event(
            _LOGGER,
            logging.DEBUG,
            "menu.filter.register",
            kind=kind,
            filters=len(self._filters),
        )
        return self

    def apply_to_all(self, callback: ItemCallback, kind: Kind = None) -> "Menu":
        """Run ``callback`` on the current items and register it as a filter."""

        kind = resolve_kind(callback, kind)
        self.each(callback, kind)
        self.register_filter(callback, kind)
        return self

    def filters(self) -> List[Filter]:
        return list(self._filters)

    def _apply_filter(self, kind: Kind, callback: ItemCallback, item: Item) -> None:
        if item_matches_type(item, kind):
            callback(item)

    def add_item_class(self, class_name: str) -> "Menu":
        return self.apply_to_all(lambda item: item.add_class(class_name), HasHtmlAttributes)

    def set_item_attribute(self, attribute: str, value: str = "") -> "Menu":
        return self.apply_to_all(lambda item: item.set_attribute(attribute, value), HasHtmlAttributes)

    def add_item_parent_class(self, class_name: str) -> "Menu":
        return self.apply_to_all(lambda item: item.add_parent_class(class_name), HasParentAttributes)

    def set_item_parent_attribute(self, attribute: str, value: str = "") -> "Menu":
        return self.apply_to_all(
            lambda item: item.set_parent_attribute(attribute, value), HasParentAttributes
        )

    # ------------------------------------------------------------------
    # Active state
    # ------------------------------------------------------------------
    def is_active(self) -> bool:
        """Active when a direct child is, or when an item header is."""

        if any(item.is_active() for item in self._items):
            return True

        return isinstance(self._prepend, Item) and self._prepend.is_active()

    def is_exact_active(self) -> bool:
        """Only the header can make a menu exact-active, never its children."""

        return _is_exact_active(self._prepend)

    def set_active(
        self,
        url_or_callable: Union[str, Callable[[Any], Any]],
        root: str | None = None,
        kind: Kind = None,
    ) -> "Menu":
        """Activate items from a request URL or from a predicate."""

        if isinstance(url_or_callable, str):
            return self.set_active_from_url(url_or_callable, root)

        if callable(url_or_callable):
            return self.set_active_from_callable(url_or_callable, kind)

        raise InvalidArgument.active_target(url_or_callable)

    def set_active_from_url(self, url: str, root: str | None = None) -> "Menu":
        """Set the items matching the request ``url`` active, recursively.

        ``/``, ``/about``, ``/contact``: a request to ``/about`` activates the
        about link. A link whose URL equals ``root`` is never activated, so
        with root ``/en`` a request to ``/en/about`` leaves ``/en`` inactive.

        The activation is also registered as a filter, so items added later
        are matched against the same URL. Each call registers new filters and
        earlier ones are never dropped, so activate a menu once per request;
        build a fresh menu for the next one.
        """

        root = self._root if root is None else root
        log_event(_LOGGER, logging.DEBUG, "menu.activate", mode="url", url=url, root=root)

        self.apply_to_all(lambda menu: menu.set_active_from_url(url, root), Menu)

        if isinstance(self._prepend, Activatable):
            self._prepend.determine_active_for_url(url, root)

        self.apply_to_all(lambda item: item.determine_active_for_url(url, root), Activatable)
        return self

    def set_active_from_callable(self, callback: Callable[[Any], Any], kind: Kind = None) -> "Menu":
        """Set every matching item for which ``callback`` is truthy active.

        Predicate activation marks items exact-active as well. Like
        :meth:`set_active_from_url`, every call registers filters that stay for
        the lifetime of the menu, so earlier predicates keep activating items
        added later.
        """

        kind = resolve_kind(callback, kind)
        log_event(_LOGGER, logging.DEBUG, "menu.activate", mode="callable", kind=kind)

        self.apply_to_all(lambda menu: menu.set_active_from_callable(callback, kind), Menu)

        def activate(item: Activatable) -> None:
            if not item_matches_type(item, kind):
                return
            if callback(item):
                item.set_active()
                item.set_exact_active()

        self.apply_to_all(activate, Activatable)
        return self

    def set_active_class(self, class_name: str) -> "Menu":
        self._active_class = class_name
        return self

    def set_exact_active_class(self, class_name: str) -> "Menu":
        self._exact_active_class = class_name
        return self

    def active_class(self) -> str:
        return self._active_class

    def exact_active_class(self) -> str:
        return self._exact_active_class

    # ------------------------------------------------------------------
    # Render policy
    # ------------------------------------------------------------------
    def wrap(self, element: str, attributes: Attributes | Mapping[str, AttributeValue] | None = None) -> "Menu":
        """Wrap the whole rendered menu, on top of the wrapper tag."""

        self._wrap = (element, as_attributes(attributes).copy())
        return self

    def set_wrapper_tag(self, wrapper_tag_name: str | None = None) -> "Menu":
        self._wrapper_tag_name = wrapper_tag_name
        return self

    def without_wrapper_tag(self) -> "Menu":
        self._wrapper_tag_name = None
        return self

    def set_parent_tag(self, parent_tag_name: str | None = None) -> "Menu":
        self._parent_tag_name = parent_tag_name
        return self

    def without_parent_tag(self) -> "Menu":
        self._parent_tag_name = None
        return self

    def set_active_class_on_link(self, active_class_on_link: bool = True) -> "Menu":
        self._active_class_on_link = active_class_on_link
        return self

    def set_active_class_on_parent(self, active_class_on_parent: bool = True) -> "Menu":
        self._active_class_on_parent = active_class_on_parent
        return self

    def if_(self, condition: Condition, callback: Callable[["Menu"], Optional["Menu"]]) -> "Menu":
        """Run ``callback(self)`` only when ``condition`` holds."""

        if not resolve_condition(condition):
            return self
        result = callback(self)
        return self if result is None else result

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> str:
        with trace("menu.render", logger=_LOGGER, items=len(self._items)):
            tag = (
                Tag(self._wrapper_tag_name, self._html_attributes)
                if self._wrapper_tag_name
                else None
            )

            contents = [self._render_item(item) for item in self._items]

            wrapped_contents = tag.with_contents(contents) if tag else "".join(contents)

            # An active header gets the link classes once it is rendered.
            if isinstance(self._prepend, Item) and self._prepend.is_active():
                self._render_active_class_on_link(self._prepend)

            menu = self.render_prepend() + wrapped_contents + self.render_append()

            if self._wrap is not None:
                element, attributes = self._wrap
                return Tag.make(element, attributes).with_contents(menu)

            return menu

    def _render_item(self, item: Item) -> str:
        attributes = Attributes()

        if isinstance(item, Prerenderable):
            item.before_render()

        if isinstance(item, HasConditions) and not item.will_render():
            return ""

        if item.is_active():
            if self._active_class_on_parent:
                attributes.add_class(self._active_class)

                if _is_exact_active(item):
                    attributes.add_class(self._exact_active_class)

            self._render_active_class_on_link(item)

        if isinstance(item, HasParentAttributes):
            attributes.merge_with(item.parent_attributes())

        if not self._parent_tag_name:
            return item.render()

        return Tag.make(self._parent_tag_name, attributes).with_contents(item.render())

    def _render_active_class_on_link(self, item: Item) -> Item:
        if (
            self._active_class_on_link
            and isinstance(item, HasHtmlAttributes)
            and not isinstance(item, Menu)
        ):
            item.add_class(self._active_class)

            if _is_exact_active(item):
                item.add_class(self._exact_active_class)

        return item

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def breadcrumb(self) -> List[str]:
        """Labels along the active path, from the top-level entry to the leaf."""

        return build_breadcrumb(self)

    def to_struct(self) -> Dict[str, Any]:
        """Plain nested structure of titles and URLs, e.g. for JSON APIs."""

        return {
            "title": label_for(self._prepend),
            "items": [_struct_of(item) for item in self._items],
        }

    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"Menu(items={len(self._items)}, header={label_for(self._prepend)!r})"


def _is_exact_active(item: Any) -> bool:
    if isinstance(item, (Activatable, Menu)):
        return item.is_exact_active()
    return False


def _struct_of(item: Item) -> Any:
    to_struct = getattr(item, "to_struct", None)
    if callable(to_struct):
        return to_struct()
    return item.render()


__all__ = ["Menu"]
