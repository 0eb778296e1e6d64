"""
Конфигурация сервера и анализаторов.
"""
import os
from dataclasses import dataclass
from typing import Optional, Tuple
from dotenv import load_dotenv
load_dotenv()


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass
class FigmaConfig:
    """Конфигурация Figma API."""
    access_token: str = ""
    base_url: str = "https://api.figma.com/v1"
    timeout: int = 30
    default_url: str = ""

    @classmethod
    def from_env(cls) -> "FigmaConfig":
        return cls(
            access_token=os.getenv("FIGMA_TOKEN") or os.getenv("FIGMA_API_TOKEN", ""),
            base_url=os.getenv("FIGMA_API_BASE_URL", "https://api.figma.com/v1"),
            timeout=int(os.getenv("FIGMA_REQUEST_TIMEOUT", "30")),
            default_url=os.getenv("FIGMA_DEFAULT_URL", ""),
        )

    def require_token(self) -> str:
        if not self.access_token:
            raise ValueError(
                "Missing Figma token. Please set FIGMA_TOKEN (or FIGMA_API_TOKEN) in the environment."
            )
        return self.access_token


@dataclass
class ServerConfig:
    """Конфигурация сервера."""
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    transport: str = "stdio"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            transport=os.getenv("MCP_TRANSPORT", "stdio"),
        )


@dataclass
class ClassifierConfig:
    """
    Пороги структурного классификатора.

    Категории проверяются в порядке category_priority, первая подошедшая
    побеждает.
    """
    button_min_height: float = 28
    button_max_height: float = 64
    input_min_width: float = 200
    input_min_height: float = 34
    input_max_height: float = 72
    input_max_text_children: int = 1
    input_max_icon_children: int = 2
    card_min_width: float = 200
    card_min_height: float = 120
    card_min_children: int = 2
    category_priority: Tuple[str, ...] = ("button", "input", "card")

    @classmethod
    def from_env(cls) -> "ClassifierConfig":
        priority = os.getenv("CLASSIFIER_CATEGORY_PRIORITY", "button,input,card")
        return cls(
            button_min_height=_env_float("CLASSIFIER_BUTTON_MIN_HEIGHT", 28),
            button_max_height=_env_float("CLASSIFIER_BUTTON_MAX_HEIGHT", 64),
            input_min_width=_env_float("CLASSIFIER_INPUT_MIN_WIDTH", 200),
            input_min_height=_env_float("CLASSIFIER_INPUT_MIN_HEIGHT", 34),
            input_max_height=_env_float("CLASSIFIER_INPUT_MAX_HEIGHT", 72),
            input_max_text_children=_env_int("CLASSIFIER_INPUT_MAX_TEXT_CHILDREN", 1),
            input_max_icon_children=_env_int("CLASSIFIER_INPUT_MAX_ICON_CHILDREN", 2),
            card_min_width=_env_float("CLASSIFIER_CARD_MIN_WIDTH", 200),
            card_min_height=_env_float("CLASSIFIER_CARD_MIN_HEIGHT", 120),
            card_min_children=_env_int("CLASSIFIER_CARD_MIN_CHILDREN", 2),
            category_priority=tuple(p.strip() for p in priority.split(",") if p.strip()),
        )


@dataclass
class AnalysisConfig:
    """Лимиты отчётов и обхода дерева."""
    palette_limit: int = 50
    view_palette_limit: int = 8
    text_sample_limit: int = 3
    max_nodes: Optional[int] = 200_000
    max_depth: Optional[int] = 512

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        return cls(
            palette_limit=_env_int("ANALYSIS_PALETTE_LIMIT", 50),
            view_palette_limit=_env_int("ANALYSIS_VIEW_PALETTE_LIMIT", 8),
            text_sample_limit=_env_int("ANALYSIS_TEXT_SAMPLE_LIMIT", 3),
            max_nodes=_env_int("ANALYSIS_MAX_NODES", 200_000),
            max_depth=_env_int("ANALYSIS_MAX_DEPTH", 512),
        )


class Config:
    """Главный класс конфигурации."""

    def __init__(self):
        self.figma = FigmaConfig.from_env()
        self.server = ServerConfig.from_env()
        self.classifier = ClassifierConfig.from_env()
        self.analysis = AnalysisConfig.from_env()

config = Config()
