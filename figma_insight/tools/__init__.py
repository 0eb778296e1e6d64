"""Инструменты MCP сервера Figma Insight."""

from .fetch_tools import (
    parse_figma_url, figma_get_file, figma_get_node,
    figma_export_node_png_url, figma_get_from_url,
)
from .analyze_tool import (
    figma_analyze_report, figma_analyze_autodetect, figma_analyze_default,
    figma_analyze_views, figma_page_palettes,
)
from .components_tool import (
    figma_inventory_from_url, figma_component_usage_from_url,
    figma_export_components_json_from_url,
)
from .ui_tool import (
    figma_ui_components_from_url, figma_inspect_buttons_from_url,
    figma_inspect_cards_from_url,
)

__all__ = [
    "parse_figma_url",
    "figma_get_file",
    "figma_get_node",
    "figma_export_node_png_url",
    "figma_get_from_url",
    "figma_analyze_report",
    "figma_analyze_autodetect",
    "figma_analyze_default",
    "figma_analyze_views",
    "figma_page_palettes",
    "figma_inventory_from_url",
    "figma_component_usage_from_url",
    "figma_export_components_json_from_url",
    "figma_ui_components_from_url",
    "figma_inspect_buttons_from_url",
    "figma_inspect_cards_from_url",
]
