"""Словари ключевых слов для распознавания иконок и UI-элементов по имени."""
from typing import Optional

# Префиксы популярных icon-библиотек (Iconify, Material, Font Awesome и т.п.)
ICON_HINTS = (
    "icon",
    "material-symbols",
    "mdi:",
    "majesticons:",
    "basil:",
    "fluent-color:",
    "devicon:",
    "ic:",
    "solar:",
    "lets-icons:",
    "iconamoon:",
    "fa-",
    "feather",
)

UI_HINTS = (
    "button", "btn", "primary button", "secondary button",
    "card", "list item", "list-item", "item",
    "input", "text field", "textfield", "text-field", "search",
    "checkbox", "radio", "switch", "toggle",
    "dropdown", "select", "combobox",
    "chip", "badge", "pill", "tag",
    "avatar", "image avatar",
    "tab", "tabs", "navbar", "navigation", "header", "footer",
    "modal", "dialog", "sheet", "drawer", "toast", "snackbar",
    "progress", "slider", "stepper",
)

BUTTON_HINTS = ("button", "btn")
CARD_HINTS = ("card",)
INPUT_HINTS = ("input", "textfield", "text field")


def _contains_any(name: Optional[str], hints) -> bool:
    lower = (name or "").lower()
    return any(h in lower for h in hints)


def is_icon_name(name: Optional[str]) -> bool:
    return _contains_any(name, ICON_HINTS)


def is_ui_name(name: Optional[str]) -> bool:
    return _contains_any(name, UI_HINTS)


def is_button_name(name: Optional[str]) -> bool:
    return _contains_any(name, BUTTON_HINTS)


def is_card_name(name: Optional[str]) -> bool:
    return _contains_any(name, CARD_HINTS)


def is_input_name(name: Optional[str]) -> bool:
    return _contains_any(name, INPUT_HINTS)
