"""Анализ дерева документа Figma: палитры, UI-элементы, виды и компоненты."""

__version__ = "0.1.0"
