"""Исключения анализатора."""
from typing import Optional


class FigmaInsightError(Exception):
    """Базовая ошибка анализатора."""
    pass


class TreeLimitExceeded(FigmaInsightError):
    """Дерево слишком большое, слишком глубокое или содержит цикл."""
    pass


class FigmaAPIError(FigmaInsightError):
    """Ошибка Figma API."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
