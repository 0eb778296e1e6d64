import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(__file__))

from factories import figma_file, frame, image, instance, node, page, solid, text


RED = solid(1, 0, 0)
WHITE = solid(1, 1, 1)
BLUE = solid(0, 0, 1)


@pytest.fixture(autouse=True)
def figma_token(monkeypatch):
    """Тестовый токен, чтобы клиент не падал на require_token."""
    from figma_insight.config import config
    monkeypatch.setattr(config.figma, "access_token", "test-token")
    return "test-token"


@pytest.fixture
def components_dict():
    return {
        "10:1": {"key": "k-button", "name": "Button/Primary", "description": "Main CTA", "componentSetId": "9:1"},
        "10:2": {"key": "k-card", "name": "Product Card"},
        "10:3": {"key": "k-icon", "name": "mdi:home"},
        "10:4": {"key": "k-input", "name": "Text Field"},
        "10:5": {"key": "k-chip", "name": "Chip"},
    }


@pytest.fixture
def sample_file_raw(components_dict):
    """Файл с двумя страницами: Auth (форма входа) и Home (карточки и иконки)."""
    login_view = frame(
        "Login View",
        width=375, height=812, fills=[WHITE],
        children=[
            frame(
                "Card",
                width=320, height=300, fills=[WHITE],
                children=[
                    frame("Submit", width=280, height=44, fills=[RED], children=[text("Submit")]),
                    text("Welcome back"),
                ],
            ),
            frame("Email", width=300, height=48, strokes=[solid(0.8, 0.8, 0.8)], children=[text("Email")]),
            frame("Sign in", width=280, height=40, fills=[BLUE], children=[text("Sign in")]),
            instance("10:1", "Primary"),
            instance("10:3", "Home icon", width=24, height=24, fills=[BLUE]),
        ],
    )
    home_view = frame(
        "Home",
        width=375, height=812, fills=[WHITE],
        children=[
            instance("10:2", "Featured"),
            instance("10:2", "Featured 2"),
            instance("10:4", "Search"),
            instance("10:5", "Filter chip"),
            instance("99:9", "Detached"),
            node("VECTOR", "Divider", fills=[solid(0.5, 0.5, 0.5)]),
            node("RECTANGLE", "Hero", width=375, height=200, fills=[image()]),
        ],
    )
    return figma_file(
        [page("Auth", [login_view]), page("Home", [home_view])],
        name="Shop App",
        components=components_dict,
        componentSets={"9:1": {"key": "set-button", "name": "Button"}},
        styles={
            "S:1": {"key": "s1", "name": "Brand/Red", "styleType": "FILL", "description": ""},
            "S:2": {"key": "s2", "name": "Heading", "styleType": "TEXT"},
        },
    )


@pytest.fixture
def sample_file(sample_file_raw):
    from figma_insight.models import parse_file
    return parse_file(sample_file_raw)
