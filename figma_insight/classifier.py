"""
Эвристический классификатор UI-элементов.

Нода получает одну из ролей: icon, button, input, card или none.
Сначала проверяется имя (иконки имеют приоритет над UI-словами), затем,
если имя ничего не дало, структура ноды: заливка, текст, размеры и
количество потомков. Пороги берутся из ClassifierConfig.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from .config import ClassifierConfig
from .extractors import (
    child_icon_count, child_text_count, has_solid_fill, has_stroke, resolve_size,
)
from .hints import is_button_name, is_card_name, is_icon_name, is_input_name, is_ui_name
from .models import ComponentMeta, InstanceNode, Node, STRUCTURAL_TYPES


class UiKind(str, Enum):
    ICON = "icon"
    BUTTON = "button"
    INPUT = "input"
    CARD = "card"
    UI = "ui"
    NONE = "none"

    @property
    def is_specific(self) -> bool:
        return self in (UiKind.BUTTON, UiKind.INPUT, UiKind.CARD)


@dataclass(frozen=True)
class Classification:
    kind: UiKind
    name: str = ""


NOT_CLASSIFIED = Classification(UiKind.NONE)


def kind_from_name(name: Optional[str]) -> UiKind:
    """
    Роль по имени. Для имени компонента порядок button -> card -> input;
    UI-слово без конкретной роли даёт UiKind.UI.
    """
    if not name:
        return UiKind.NONE
    if is_icon_name(name):
        return UiKind.ICON
    if not is_ui_name(name):
        return UiKind.NONE
    if is_button_name(name):
        return UiKind.BUTTON
    if is_card_name(name):
        return UiKind.CARD
    if is_input_name(name):
        return UiKind.INPUT
    return UiKind.UI


def shortcut_from_name(name: Optional[str]) -> UiKind:
    """Быстрая проверка собственного имени ноды: button -> input -> card."""
    if not name:
        return UiKind.NONE
    if is_icon_name(name):
        return UiKind.ICON
    if is_button_name(name):
        return UiKind.BUTTON
    if is_input_name(name):
        return UiKind.INPUT
    if is_card_name(name):
        return UiKind.CARD
    return UiKind.NONE


def _between(value: Optional[float], low: float, high: float) -> bool:
    return value is not None and low <= value <= high


def _at_least(value: Optional[float], low: float) -> bool:
    return value is not None and value >= low


class Classifier:
    """Классификатор с настраиваемыми порогами и словарём компонентов файла."""

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        components: Optional[Dict[str, ComponentMeta]] = None,
    ):
        self.config = config or ClassifierConfig()
        self.components = components or {}
        self._rules: Dict[str, Callable[[Node], bool]] = {
            "button": self._looks_like_button,
            "input": self._looks_like_input,
            "card": self._looks_like_card,
        }

    # -----------------------------------------------------------------
    # STRUCTURAL RULES
    # -----------------------------------------------------------------
    def _looks_like_button(self, node: Node) -> bool:
        _, height = resolve_size(node)
        return (
            has_solid_fill(node)
            and child_text_count(node) >= 1
            and _between(height, self.config.button_min_height, self.config.button_max_height)
        )

    def _looks_like_input(self, node: Node) -> bool:
        width, height = resolve_size(node)
        return (
            (has_stroke(node) or has_solid_fill(node))
            and _at_least(width, self.config.input_min_width)
            and _between(height, self.config.input_min_height, self.config.input_max_height)
            and child_text_count(node) <= self.config.input_max_text_children
            and child_icon_count(node, self.components) <= self.config.input_max_icon_children
        )

    def _looks_like_card(self, node: Node) -> bool:
        width, height = resolve_size(node)
        return (
            has_solid_fill(node)
            and _at_least(width, self.config.card_min_width)
            and _at_least(height, self.config.card_min_height)
            and len(node.kids) >= self.config.card_min_children
        )

    def classify_structure(self, node: Node) -> UiKind:
        """Структурная эвристика; только для контейнеров и прямоугольников."""
        if node.type not in STRUCTURAL_TYPES:
            return UiKind.NONE
        for category in self.config.category_priority:
            rule = self._rules.get(category)
            if rule is not None and rule(node):
                return UiKind(category)
        return UiKind.NONE

    # -----------------------------------------------------------------
    # FULL DECISION
    # -----------------------------------------------------------------
    def classify_instance(self, node: InstanceNode) -> Optional[Classification]:
        """
        Экземпляр компонента классифицируется по имени компонента из словаря.

        Возвращает None, если экземпляр нужно отдать общей эвристике
        (имя не похоже ни на иконку, ни на UI-элемент).
        """
        meta = self.components.get(node.component_id) if node.component_id else None
        name = (meta.name if meta and meta.name else None) or node.name
        if not name:
            return NOT_CLASSIFIED
        kind = kind_from_name(name)
        if kind is UiKind.ICON:
            return Classification(UiKind.ICON, name)
        if kind is UiKind.NONE:
            return None
        if kind.is_specific:
            return Classification(kind, name)
        return NOT_CLASSIFIED

    def classify(self, node: Node) -> Classification:
        if isinstance(node, InstanceNode) and node.component_id:
            verdict = self.classify_instance(node)
            if verdict is not None:
                return verdict

        # Текст, векторы и страницы по имени не классифицируются
        if node.type not in STRUCTURAL_TYPES:
            return NOT_CLASSIFIED

        shortcut = shortcut_from_name(node.name)
        if shortcut is UiKind.ICON:
            return Classification(UiKind.ICON, node.name)
        if shortcut.is_specific:
            return Classification(shortcut, node.name)

        kind = self.classify_structure(node)
        if kind is UiKind.NONE:
            return NOT_CLASSIFIED
        return Classification(kind, node.name or kind.value)

    # -----------------------------------------------------------------
    # INSPECTION HELPERS
    # -----------------------------------------------------------------
    def looks_like_card_for_inspection(self, node: Node) -> bool:
        """
        Более мягкий критерий карточки: заливка или обводка, размеры и
        минимум потомков, либо "card" в имени.
        """
        if node.type not in STRUCTURAL_TYPES:
            return False
        if is_icon_name(node.name):
            return False
        if is_card_name(node.name):
            return True
        width, height = resolve_size(node)
        return (
            _at_least(width, self.config.card_min_width)
            and _at_least(height, self.config.card_min_height)
            and (has_solid_fill(node) or has_stroke(node))
            and len(node.kids) >= self.config.card_min_children
        )


def classify_node(
    node: Node,
    components: Optional[Dict[str, ComponentMeta]] = None,
    config: Optional[ClassifierConfig] = None,
) -> Classification:
    return Classifier(config, components).classify(node)
