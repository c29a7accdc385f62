"""Tests for :mod:`webmenu.config`."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

import pytest
from pydantic import ValidationError

from webmenu.config import MenuSettings, load_menu_settings
from webmenu.menu import Menu


def test_menu_settings_load_file_and_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a JSON config When MenuSettings.load is invoked Then file and env overrides are merged."""

    config_payload: Dict[str, object] = {"active_class": "current", "parent_tag": "div", "unknown": 1}
    config_path = tmp_path / "menu.json"
    config_path.write_text(json.dumps(config_payload), encoding="utf-8")
    monkeypatch.setenv("WEBMENU_PARENT_TAG", "span")
    monkeypatch.setenv("WEBMENU_WRAPPER_TAG", "")

    settings = MenuSettings.load(config_path)

    assert settings.active_class == "current"
    assert settings.parent_tag == "span"
    assert settings.wrapper_tag is None


def test_load_menu_settings_defaults_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Given no config file When load_menu_settings is executed Then defaults are returned."""

    for variable in ("WEBMENU_ACTIVE_CLASS", "WEBMENU_WRAPPER_TAG", "WEBMENU_PARENT_TAG", "WEBMENU_ROOT"):
        monkeypatch.delenv(variable, raising=False)

    settings = load_menu_settings(tmp_path / "missing.json")

    assert settings == MenuSettings()
    assert settings.wrapper_tag == "ul"
    assert settings.root == "/"


def test_invalid_json_falls_back_to_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Given a broken JSON file When loaded Then a warning is logged and defaults are used."""

    config_path = tmp_path / "menu.json"
    config_path.write_text("{not json", encoding="utf-8")

    with caplog.at_level("WARNING", logger="webmenu.config"):
        settings = MenuSettings.load(config_path)

    assert settings.active_class == "active"
    assert "Unable to decode menu config" in caplog.text


def test_invalid_values_are_rejected() -> None:
    """Given bad class or tag names When validated Then a ValidationError is raised."""

    with pytest.raises(ValidationError):
        MenuSettings(active_class="two words")

    with pytest.raises(ValidationError):
        MenuSettings(wrapper_tag="<ul>")


def test_menu_uses_settings() -> None:
    """Given settings When a menu is created with them Then rendering and activation follow them."""

    settings = MenuSettings(
        wrapper_tag="nav",
        parent_tag=None,
        active_class="is-active",
        active_class_on_link=True,
        root="/en",
    )

    menu = Menu.new(settings=settings).link("/en", "Home").link("/en/about", "About").set_active("/en/about")

    assert menu.render() == (
        '<nav><a href="/en">Home</a><a href="/en/about" class="is-active exact-active">About</a></nav>'
    )
