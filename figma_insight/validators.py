"""
Валидаторы входных данных.
"""
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlparse

URL_SEGMENTS = ("file", "design")
_FIGMA_URL_IN_TEXT = re.compile(r"https?://\S*figma\.com\S*", re.IGNORECASE)


@dataclass(frozen=True)
class FigmaUrl:
    file_key: str
    node_id: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"fileKey": self.file_key}
        if self.node_id:
            data["nodeId"] = self.node_id
        return data


def validate_figma_file_key(file_key: str) -> bool:
    """Валидирует ключ файла Figma."""
    if not file_key or not isinstance(file_key, str):
        return False

    pattern = r'^[a-zA-Z0-9_-]{10,64}$'
    return bool(re.match(pattern, file_key))


def normalize_node_id(node_id: str) -> str:
    """В ссылках id ноды пишется через дефис (1-23), в API через двоеточие."""
    return node_id.replace("-", ":")


def parse_figma_url(url: str) -> FigmaUrl:
    """
    Извлекает ключ файла и id ноды из ссылки Figma.

    Поддерживаются /file/<key>/... и /design/<key>/...; id ноды берётся из
    параметра node-id или node_id.
    """
    if not url or not isinstance(url, str):
        raise ValueError("Invalid Figma URL: empty input")
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid Figma URL: {url}")

    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2:
        raise ValueError("Invalid Figma URL: cannot find file key in path")
    if parts[0] not in URL_SEGMENTS:
        raise ValueError("Invalid Figma URL: expected /file/<key> or /design/<key>")

    query = parse_qs(parsed.query)
    node_id = (query.get("node-id") or query.get("node_id") or [None])[0]
    return FigmaUrl(file_key=parts[1], node_id=node_id or None)


def extract_first_url_candidate(text: str) -> Optional[str]:
    """Вся строка, если это URL, иначе первая ссылка на figma.com в тексте."""
    if not text:
        return None
    trimmed = text.strip()
    if re.match(r"^https?://", trimmed, re.IGNORECASE):
        return trimmed
    match = _FIGMA_URL_IN_TEXT.search(trimmed)
    return match.group(0) if match else None
