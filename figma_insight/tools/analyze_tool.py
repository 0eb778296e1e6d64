"""
Инструменты отчётов по файлу: страницы, палитра, статистика видов.
"""
import logging
from typing import Any, Dict
from ..config import config
from ..mcp_instance import mcp
from ..reports import analyze_report, page_palettes, render_text_report, views_report
from ..validators import extract_first_url_candidate
from .common import load_file_from_url, track_tool

logger = logging.getLogger(__name__)


async def _build_report(url: str) -> Dict[str, Any]:
    figma_file, file_key = await load_file_from_url(url)
    analysis = analyze_report(figma_file, file_key, config.analysis)
    logger.info(
        f"Analysis completed for {file_key}: {len(analysis['pages'])} pages, "
        f"{len(analysis['palette'])} colors"
    )
    return {"report": render_text_report(analysis), "analysis": analysis}


async def figma_analyze_report(url: str) -> Dict[str, Any]:
    """
    Analyze a Figma URL: list pages and extract a color palette (top usages).

    Args:
        url (str): Ссылка на файл Figma (/file/<key> или /design/<key>).

    Returns:
        Dict[str, Any]:
            - report: текстовый отчёт
            - analysis: страницы, палитра (топ-50), FILL-стили, статистика видов
    """
    async with track_tool("figma_analyze_report"):
        return await _build_report(url)


async def figma_analyze_autodetect(input: str) -> Dict[str, Any]:
    """Paste any text containing a Figma URL; this will extract the first URL and analyze it."""
    async with track_tool("figma_analyze_autodetect"):
        url = extract_first_url_candidate(input)
        if not url:
            raise ValueError(
                "Input did not contain a valid Figma URL. "
                "Please include a link like https://www.figma.com/design/<key>/..."
            )
        return await _build_report(url)


async def figma_analyze_default() -> Dict[str, Any]:
    """Analyze the default Figma URL (FIGMA_DEFAULT_URL env)."""
    async with track_tool("figma_analyze_default"):
        if not config.figma.default_url:
            raise ValueError("FIGMA_DEFAULT_URL is empty. Set FIGMA_DEFAULT_URL in the environment.")
        return await _build_report(config.figma.default_url)


async def figma_analyze_views(url: str) -> Dict[str, Any]:
    """Per-page view statistics: node, text, vector, instance and image-fill counts plus top-8 colors."""
    async with track_tool("figma_analyze_views"):
        figma_file, file_key = await load_file_from_url(url)
        return views_report(figma_file, file_key, config.analysis)


async def figma_page_palettes(url: str) -> Dict[str, Any]:
    """Color palette of every page, most used colors first."""
    async with track_tool("figma_page_palettes"):
        figma_file, file_key = await load_file_from_url(url)
        return page_palettes(figma_file, file_key, config.analysis)


# Регистрация без декоратора: функции остаются вызываемыми напрямую из тестов
for _tool in (
    figma_analyze_report,
    figma_analyze_autodetect,
    figma_analyze_default,
    figma_analyze_views,
    figma_page_palettes,
):
    mcp.tool(_tool)
