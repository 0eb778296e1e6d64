"""
Инструменты для выгрузки сырых данных из Figma.
"""
from typing import Any, Dict
from ..figma_client import figma_client
from ..mcp_instance import mcp
from ..validators import parse_figma_url as _parse_figma_url
from .common import track_tool


async def parse_figma_url(url: str) -> Dict[str, Any]:
    """Parse a Figma URL into fileKey and optional nodeId."""
    async with track_tool("parse_figma_url"):
        return _parse_figma_url(url).to_dict()


async def figma_get_file(fileKey: str) -> Dict[str, Any]:
    """Fetch Figma file JSON by fileKey."""
    async with track_tool("figma_get_file"):
        return await figma_client.get_file(fileKey)


async def figma_get_node(fileKey: str, nodeId: str) -> Dict[str, Any]:
    """Fetch specific node JSON by fileKey and nodeId."""
    async with track_tool("figma_get_node"):
        return await figma_client.get_file_nodes(fileKey, nodeId)


async def figma_export_node_png_url(fileKey: str, nodeId: str, scale: float = 2) -> Dict[str, Any]:
    """
    Get a temporary PNG export URL for a node.

    Args:
        fileKey (str): Ключ Figma-файла.
        nodeId (str): ID ноды (1:23 или 1-23).
        scale (float): Масштаб экспорта, 0.1-4.
    """
    async with track_tool("figma_export_node_png_url"):
        return await figma_client.get_image_urls(fileKey, nodeId, image_format="png", scale=scale)


async def figma_get_from_url(url: str) -> Dict[str, Any]:
    """Fetch file or node JSON from a Figma URL. If the URL contains a node-id, fetches the node; otherwise, the file."""
    async with track_tool("figma_get_from_url"):
        return await figma_client.get_from_url(url)


# Регистрация без декоратора: функции остаются вызываемыми напрямую из тестов
for _tool in (parse_figma_url, figma_get_file, figma_get_node, figma_export_node_png_url, figma_get_from_url):
    mcp.tool(_tool)
