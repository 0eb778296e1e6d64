"""
Инструменты по компонентам: инвентарь, использование по страницам, экспорт.
"""
import logging
from typing import Any, Dict
from ..mcp_instance import mcp
from ..reports import component_usage_report, components_export, inventory_report
from .common import load_file_from_url, track_tool

logger = logging.getLogger(__name__)


async def figma_inventory_from_url(url: str) -> Dict[str, Any]:
    """Inventory components, component sets, styles and basic instance stats from a Figma URL."""
    async with track_tool("figma_inventory_from_url"):
        figma_file, file_key = await load_file_from_url(url)
        result = inventory_report(figma_file, file_key)
        logger.info(f"Inventory for {file_key}: {result['counts']}")
        return result


async def figma_component_usage_from_url(url: str) -> Dict[str, Any]:
    """
    Count component instances per page.

    Returns:
        Dict[str, Any]: fileName, fileKey, pages[{pageName, componentsUsed}],
        allComponents. componentsUsed отсортирован по убыванию count,
        затем по имени.
    """
    async with track_tool("figma_component_usage_from_url"):
        figma_file, file_key = await load_file_from_url(url)
        return component_usage_report(figma_file, file_key)


async def figma_export_components_json_from_url(url: str) -> Dict[str, Any]:
    """Export all COMPONENT nodes from a Figma URL as simplified JSON trees for code generation."""
    async with track_tool("figma_export_components_json_from_url"):
        figma_file, file_key = await load_file_from_url(url)
        return components_export(figma_file, file_key)


# Регистрация без декоратора: функции остаются вызываемыми напрямую из тестов
for _tool in (figma_inventory_from_url, figma_component_usage_from_url, figma_export_components_json_from_url):
    mcp.tool(_tool)
