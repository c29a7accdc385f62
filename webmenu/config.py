"""Render-policy settings shared by the menus of an application."""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

_LOGGER = logging.getLogger("webmenu.config")
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DEFAULT_CONFIG_PATH = _PROJECT_ROOT / "configs" / "menu.json"
_TAG_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")

_ENV_OVERRIDES = {
    "WEBMENU_ACTIVE_CLASS": "active_class",
    "WEBMENU_EXACT_ACTIVE_CLASS": "exact_active_class",
    "WEBMENU_WRAPPER_TAG": "wrapper_tag",
    "WEBMENU_PARENT_TAG": "parent_tag",
    "WEBMENU_ROOT": "root",
}


class MenuSettings(BaseModel):
    """Default classes, tags and request root applied to new menus."""

    active_class: str = Field(
        default="active",
        description="Class added to active items",
    )
    exact_active_class: str = Field(
        default="exact-active",
        description="Class added to items matching the request exactly",
    )
    wrapper_tag: str | None = Field(
        default="ul",
        description="Tag wrapping the list of items, or None for no wrapper",
    )
    parent_tag: str | None = Field(
        default="li",
        description="Tag wrapping each item, or None to render items bare",
    )
    active_class_on_parent: bool = Field(
        default=True,
        description="Put the active classes on the parent tag",
    )
    active_class_on_link: bool = Field(
        default=False,
        description="Also put the active classes on the item itself",
    )
    root: str = Field(
        default="/",
        description="Request root that never marks its own link active",
    )

    @field_validator("active_class", "exact_active_class", mode="before")
    @classmethod
    def _ensure_class_name(cls, value: str) -> str:
        text = str(value or "").strip()
        if not text or len(text.split()) != 1:
            raise ValueError(f"Invalid class name '{value}'. Expected a single non-empty class.")
        return text

    @field_validator("wrapper_tag", "parent_tag", mode="before")
    @classmethod
    def _normalise_tag(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        if not _TAG_PATTERN.match(text):
            raise ValueError(f"Unsupported tag name '{value}'")
        return text.lower()

    @field_validator("root", mode="before")
    @classmethod
    def _normalise_root(cls, value: str | None) -> str:
        text = str(value or "").strip()
        return text or "/"

    @classmethod
    def load(cls, path: Path | None = None) -> "MenuSettings":
        """Load settings from a JSON file, then apply environment overrides."""

        config_path = path or _DEFAULT_CONFIG_PATH
        data: Dict[str, Any] = {}

        if config_path.exists():
            try:
                data = json.loads(config_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                _LOGGER.warning(
                    "Unable to decode menu config at %s: %s", config_path, exc
                )

        for variable, key in _ENV_OVERRIDES.items():
            value = os.environ.get(variable)
            if value is not None:
                data[key] = value

        filtered = {key: value for key, value in data.items() if key in cls.model_fields}
        return cls(**filtered)


def load_menu_settings(path: Path | None = None) -> MenuSettings:
    """Helper to load the menu settings."""

    return MenuSettings.load(path)


__all__ = ["MenuSettings", "load_menu_settings"]
