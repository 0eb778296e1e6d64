"""
Инструменты классификации UI-элементов: кнопки, поля ввода, карточки.
"""
import logging
from typing import Any, Dict
from ..config import config
from ..mcp_instance import mcp
from ..reports import button_report, card_report, ui_components_report
from .common import load_file_from_url, track_tool

logger = logging.getLogger(__name__)


async def figma_ui_components_from_url(url: str) -> Dict[str, Any]:
    """
    Analyze UI components (button, input, card) per page, excluding icons.

    Экземпляры компонентов классифицируются по имени компонента из словаря
    файла; остальные ноды - по имени, затем по структуре (заливка, текст,
    размеры, количество потомков).

    Args:
        url (str): Ссылка на файл Figma.

    Returns:
        Dict[str, Any]: {fileName, fileKey, pages: [{pageName, ui: {buttons, inputs, cards}}]},
        каждый элемент - {name, path}.
    """
    async with track_tool("figma_ui_components_from_url"):
        figma_file, file_key = await load_file_from_url(url)
        result = ui_components_report(figma_file, file_key, config.classifier)
        logger.info(f"UI components analyzed for {file_key}: {len(result['pages'])} pages")
        return result


async def figma_inspect_buttons_from_url(url: str) -> Dict[str, Any]:
    """Inspect button-like nodes: fill colors, corner radius, stroke, text presence and size."""
    async with track_tool("figma_inspect_buttons_from_url"):
        figma_file, file_key = await load_file_from_url(url)
        return button_report(figma_file, file_key, config.analysis)


async def figma_inspect_cards_from_url(url: str) -> Dict[str, Any]:
    """Inspect card-like nodes with their content summary, enclosing view and inferred role."""
    async with track_tool("figma_inspect_cards_from_url"):
        figma_file, file_key = await load_file_from_url(url)
        return card_report(figma_file, file_key, config.classifier, config.analysis)


# Регистрация без декоратора: функции остаются вызываемыми напрямую из тестов
for _tool in (figma_ui_components_from_url, figma_inspect_buttons_from_url, figma_inspect_cards_from_url):
    mcp.tool(_tool)
