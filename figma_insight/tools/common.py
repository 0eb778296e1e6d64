"""Общие части MCP-инструментов: загрузка файла и метрики вызова."""
import logging
import time
from contextlib import asynccontextmanager
from typing import Tuple

from ..config import config
from ..figma_client import figma_client
from ..mcp_instance import TOOL_CALLS_TOTAL, TOOL_CALL_DURATION
from ..models import FigmaFile, parse_file
from ..validators import parse_figma_url

logger = logging.getLogger(__name__)


@asynccontextmanager
async def track_tool(tool_name: str):
    """Счётчики started/success/error и длительность вызова инструмента."""
    start_time = time.time()
    TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="started").inc()
    try:
        yield
    except Exception as e:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="error").inc()
        logger.error(f"Error in {tool_name}: {e}")
        raise
    else:
        TOOL_CALLS_TOTAL.labels(tool_name=tool_name, status="success").inc()
    finally:
        duration = time.time() - start_time
        TOOL_CALL_DURATION.labels(tool_name=tool_name).observe(duration)
        logger.debug(f"Tool {tool_name} executed in {duration:.2f} seconds")


async def load_file_from_url(url: str) -> Tuple[FigmaFile, str]:
    """Скачивает файл по ссылке и разбирает его в типизированную модель."""
    file_key = parse_figma_url(url).file_key
    logger.info(f"Fetching Figma file: {file_key}")
    raw = await figma_client.get_file(file_key)
    figma_file = parse_file(
        raw,
        max_nodes=config.analysis.max_nodes,
        max_depth=config.analysis.max_depth,
    )
    return figma_file, file_key
