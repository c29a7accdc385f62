"""Composable navigation menus rendered to HTML."""

from .breadcrumb import build_breadcrumb
from .config import MenuSettings, load_menu_settings
from .exceptions import InvalidArgument
from .html import Attributes, Tag
from .items import (
    Activatable,
    HasConditions,
    HasHtmlAttributes,
    HasParentAttributes,
    HasTextAttributes,
    Item,
    Link,
    Prerenderable,
    RawHtml,
)
from .logging_config import configure_logging
from .menu import Menu
from .url import Url

__all__ = [
    "Activatable",
    "Attributes",
    "HasConditions",
    "HasHtmlAttributes",
    "HasParentAttributes",
    "HasTextAttributes",
    "InvalidArgument",
    "Item",
    "Link",
    "Menu",
    "MenuSettings",
    "Prerenderable",
    "RawHtml",
    "Tag",
    "Url",
    "build_breadcrumb",
    "configure_logging",
    "load_menu_settings",
]
