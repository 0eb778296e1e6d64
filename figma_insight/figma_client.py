"""
Асинхронный клиент для работы с Figma API.
"""
import aiohttp
import asyncio
import logging
from typing import Any, Dict, Iterable, Optional, Union
from .config import config, FigmaConfig
from .errors import FigmaAPIError
from .mcp_instance import FIGMA_API_CALLS
from .validators import normalize_node_id, parse_figma_url, validate_figma_file_key

logger = logging.getLogger(__name__)

IMAGE_FORMATS = ("png", "jpg", "svg", "pdf")


def _join_ids(node_ids: Union[str, Iterable[str]]) -> str:
    if isinstance(node_ids, str):
        ids = node_ids.split(",")
    else:
        ids = list(node_ids)
    return ",".join(normalize_node_id(i.strip()) for i in ids if i and i.strip())


class FigmaClient:
    """Клиент для работы с Figma API."""

    def __init__(self, figma_config: Optional[FigmaConfig] = None):
        self.config = figma_config or config.figma
        self.base_url = self.config.base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=self.config.timeout)

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Figma-Token": self.config.require_token(),
            "Content-Type": "application/json"
        }

    async def _make_request(self, method: str, endpoint: str, metric: str, **kwargs) -> Dict[str, Any]:
        """Выполняет HTTP-запрос к Figma API."""
        url = f"{self.base_url}/{endpoint}"
        headers = self._headers()
        logger.debug(f"{method} {url} params={kwargs.get('params')}")

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            try:
                async with session.request(method, url, headers=headers, **kwargs) as response:
                    FIGMA_API_CALLS.labels(endpoint=metric, status=response.status).inc()

                    if response.status != 200:
                        error_text = await response.text()
                        raise FigmaAPIError(
                            f"Figma API error ({response.status}): {error_text}",
                            status=response.status,
                        )

                    return await response.json()

            except asyncio.TimeoutError:
                FIGMA_API_CALLS.labels(endpoint=metric, status="timeout").inc()
                raise FigmaAPIError("Request timeout to Figma API")
            except aiohttp.ClientError as e:
                FIGMA_API_CALLS.labels(endpoint=metric, status="client_error").inc()
                raise FigmaAPIError(f"HTTP client error: {str(e)}")

    async def get_file(self, file_key: str) -> Dict[str, Any]:
        """Получает структуру файла Figma."""
        if not file_key:
            raise ValueError("file_key обязателен")
        if not validate_figma_file_key(file_key):
            logger.warning(f"Unusual Figma file key: {file_key}")
        return await self._make_request("GET", f"files/{file_key}", "files")

    async def get_file_nodes(self, file_key: str, node_ids: Union[str, Iterable[str]]) -> Dict[str, Any]:
        """Получает конкретные ноды файла."""
        ids = _join_ids(node_ids)
        if not file_key or not ids:
            raise ValueError("file_key и node_ids обязательны")
        return await self._make_request("GET", f"files/{file_key}/nodes", "nodes", params={"ids": ids})

    async def get_image_urls(
        self,
        file_key: str,
        node_ids: Union[str, Iterable[str]],
        image_format: str = "png",
        scale: float = 2,
    ) -> Dict[str, Any]:
        """Временные ссылки на экспорт нод в картинки."""
        if not 0.1 <= scale <= 4:
            raise ValueError(f"scale должен быть в диапазоне 0.1-4, получено: {scale}")
        if image_format not in IMAGE_FORMATS:
            raise ValueError(f"Неподдерживаемый формат: {image_format}")
        ids = _join_ids(node_ids)
        if not file_key or not ids:
            raise ValueError("file_key и node_ids обязательны")
        params = {"ids": ids, "format": image_format, "scale": str(scale)}
        return await self._make_request("GET", f"images/{file_key}", "images", params=params)

    async def get_from_url(self, url: str) -> Dict[str, Any]:
        """Файл целиком или нода, если в ссылке есть node-id."""
        parsed = parse_figma_url(url)
        if parsed.node_id:
            return await self.get_file_nodes(parsed.file_key, parsed.node_id)
        return await self.get_file(parsed.file_key)


figma_client = FigmaClient()
