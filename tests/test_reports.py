import copy
import json

import pytest

from factories import figma_file, frame, instance, node, page, solid, text
from figma_insight.config import AnalysisConfig
from figma_insight.models import parse_file
from figma_insight.reports import (
    UNKNOWN_COMPONENT, analyze_report, button_report, card_report, component_usage_report,
    components_export, inventory_report, page_palettes, palette_for, render_text_report,
    ui_components_report, views_report,
)

KEY = "AbCdEfGhIjKlMnOp"


def _names(items):
    return [item["name"] for item in items]


class TestPalette:
    """Тесты палитры"""

    def test_counts_and_tie_break(self):
        a, b, c = solid(1, 0, 0), solid(0, 1, 0), solid(0, 0, 1)
        root = parse_file(figma_file([page("P", [
            node("RECTANGLE", fills=[b]),
            node("RECTANGLE", fills=[c]),
            *[node("RECTANGLE", fills=[a]) for _ in range(5)],
            node("RECTANGLE", fills=[b]),
            node("RECTANGLE", fills=[c]),
            node("RECTANGLE", fills=[b]),
            node("RECTANGLE", fills=[c]),
        ])])).document
        assert palette_for(root) == [
            {"hex": "#FF0000", "count": 5},
            {"hex": "#00FF00", "count": 3},
            {"hex": "#0000FF", "count": 3},
        ]

    def test_limit(self):
        fills = [solid(i / 10, 0, 0) for i in range(10)]
        root = parse_file(figma_file([page("P", [node("RECTANGLE", fills=[f]) for f in fills])])).document
        assert len(palette_for(root, limit=4)) == 4

    def test_alpha_makes_distinct_color(self):
        root = parse_file(figma_file([page("P", [
            node("RECTANGLE", fills=[solid(1, 0, 0)]),
            node("RECTANGLE", fills=[solid(1, 0, 0, opacity=0.5)]),
        ])])).document
        assert [c["hex"] for c in palette_for(root)] == ["#FF0000", "#FF000080"]

    def test_sample_file(self, sample_file):
        assert palette_for(sample_file.document) == [
            {"hex": "#FFFFFF", "count": 3},
            {"hex": "#0000FF", "count": 2},
            {"hex": "#FF0000", "count": 1},
            {"hex": "#808080", "count": 1},
        ]

    def test_page_palettes(self, sample_file):
        result = page_palettes(sample_file, KEY)
        auth, home = result["pages"]
        assert auth["pageName"] == "Auth"
        assert [c["hex"] for c in auth["palette"]] == ["#FFFFFF", "#0000FF", "#FF0000"]
        assert home["palette"] == [{"hex": "#FFFFFF", "count": 1}, {"hex": "#808080", "count": 1}]


class TestAnalyzeReport:
    """Тесты общего отчёта"""

    def test_sample_file(self, sample_file):
        report = analyze_report(sample_file, KEY)
        assert report["fileName"] == "Shop App"
        assert report["fileKey"] == KEY
        assert report["pages"] == ["Auth", "Home"]
        assert report["fillStyles"] == ["Brand/Red"]
        assert len(report["views"]) == 2

    def test_view_stats(self, sample_file):
        login = views_report(sample_file, KEY)["pages"][0]["views"][0]
        assert login["name"] == "Login View"
        assert login["type"] == "FRAME"
        assert (login["width"], login["height"]) == (375, 812)
        assert login["stats"] == {"totalNodes": 11, "text": 4, "vector": 0, "instance": 2, "imageFills": 0}
        assert login["palette"] == [
            {"hex": "#FFFFFF", "count": 2},
            {"hex": "#0000FF", "count": 2},
            {"hex": "#FF0000", "count": 1},
        ]

        home = views_report(sample_file, KEY)["pages"][1]["views"][0]
        assert home["stats"] == {"totalNodes": 8, "text": 0, "vector": 1, "instance": 5, "imageFills": 1}

    def test_view_palette_limit(self, sample_file):
        login = views_report(sample_file, KEY, AnalysisConfig(view_palette_limit=1))["pages"][0]["views"][0]
        assert login["palette"] == [{"hex": "#FFFFFF", "count": 2}]

    def test_only_containers_are_views(self):
        f = parse_file(figma_file([page("P", [
            frame("Screen"),
            text("Loose note"),
            node("RECTANGLE", "Background"),
            instance("1:1", "Header"),
        ])]))
        views = views_report(f, KEY)["pages"][0]["views"]
        assert _names(views) == ["Screen", "Header"]

    def test_render_text(self, sample_file):
        output = render_text_report(analyze_report(sample_file, KEY))
        assert output.startswith("=== Figma Report ===\n")
        assert "File name: Shop App" in output
        assert "- #FFFFFF (usage: 3)" in output
        assert "Color styles (FILL):\n- Brand/Red" in output
        assert "[Page] Auth" in output
        assert "- View: Login View [FRAME] 375x812" in output
        assert "  • Total nodes: 11" in output
        assert output.endswith("\n")

    def test_render_without_views(self, sample_file):
        output = render_text_report(analyze_report(sample_file, KEY), include_views=False)
        assert "View Analysis" not in output

    def test_empty_document(self):
        report = analyze_report(parse_file({"name": "Empty"}), KEY)
        assert report["pages"] == []
        assert report["palette"] == []
        assert report["views"] == []
        output = render_text_report(report)
        assert "Pages:\n- (none found)" in output

    def test_page_without_views(self):
        report = analyze_report(parse_file(figma_file([page("Blank")])), KEY)
        assert "- No views found" in render_text_report(report)

    def test_json_serializable(self, sample_file):
        json.dumps(analyze_report(sample_file, KEY))


class TestUiComponentsReport:
    """Тесты классификации UI по страницам"""

    def test_sample_file(self, sample_file):
        auth, home = ui_components_report(sample_file, KEY)["pages"]

        assert auth["pageName"] == "Auth"
        assert _names(auth["ui"]["buttons"]) == ["Submit", "Sign in", "Button/Primary"]
        assert auth["ui"]["buttons"][0]["path"] == "Auth / Login View / Card / Submit"
        assert auth["ui"]["buttons"][2]["path"] == "Auth / Login View / Primary"
        assert _names(auth["ui"]["inputs"]) == ["Email"]
        assert _names(auth["ui"]["cards"]) == ["Login View", "Card"]

        assert home["ui"]["buttons"] == []
        assert _names(home["ui"]["inputs"]) == ["Text Field"]
        assert _names(home["ui"]["cards"]) == ["Home", "Product Card", "Product Card"]

    def test_icons_never_listed(self, sample_file):
        result = json.dumps(ui_components_report(sample_file, KEY))
        assert "mdi:home" not in result
        assert "Home icon" not in result

    def test_unnamed_page(self):
        f = parse_file(figma_file([page("", [frame("Primary Button")])]))
        result = ui_components_report(f, KEY)
        assert result["pages"][0]["pageName"] == "(unnamed page)"
        assert result["pages"][0]["ui"]["buttons"][0]["path"] == "(unnamed page) / Primary Button"

    def test_input_not_mutated(self, sample_file_raw):
        snapshot = copy.deepcopy(sample_file_raw)
        f = parse_file(sample_file_raw)
        ui_components_report(f, KEY)
        card_report(f, KEY)
        assert sample_file_raw == snapshot

    def test_repeatable(self, sample_file):
        assert ui_components_report(sample_file, KEY) == ui_components_report(sample_file, KEY)


class TestInspectionReports:
    """Тесты отчётов по кнопкам и карточкам"""

    def test_button_report(self):
        f = parse_file(figma_file([page("Checkout", [
            frame("Cart", children=[
                frame("Pay button", width=200, height=48, fills=[solid(0, 0.5, 0)], cornerRadius=12,
                      children=[text("Pay now")]),
                frame("btn-back", children=[node("VECTOR", "arrow")]),
                frame("Total"),
            ]),
        ])]))
        buttons = button_report(f, KEY)["buttons"]
        assert [b["path"] for b in buttons] == ["Checkout / Cart / Pay button", "Checkout / Cart / btn-back"]
        pay = buttons[0]
        assert pay["page"] == "Checkout"
        assert pay["info"]["fills"] == ["#008000"]
        assert pay["info"]["cornerRadius"] == 12
        assert pay["info"]["text"] == {"hasText": True, "samples": ["Pay now"]}
        assert buttons[1]["info"]["text"]["hasText"] is False

    def test_card_report(self, sample_file):
        cards = card_report(sample_file, KEY)["cards"]
        assert [c["path"] for c in cards] == ["Auth / Login View", "Auth / Login View / Card", "Home / Home"]

        login, card, home = cards
        assert login["view"] == "Login View"
        assert login["role"] == "Login/identity card"
        assert card["view"] == "Login View"
        assert card["info"]["content"]["textCount"] == 1
        assert card["info"]["content"]["textSamples"] == ["Welcome back"]
        assert home["role"] == "Home page card"
        assert home["info"]["content"]["instanceCount"] == 5
        assert home["info"]["content"]["imageFillCount"] == 1


class TestComponentReports:
    """Тесты отчётов по компонентам"""

    def test_usage_sorted_by_count_then_name(self):
        comps = {"A": {"name": "Alpha"}, "B": {"name": "Beta"}}
        f = parse_file(figma_file(
            [page("P", [
                instance("B"), instance("A"), instance("A"), instance("Z"),
                instance("A"), instance("B"), instance("A"),
            ])],
            components=comps,
        ))
        used = component_usage_report(f, KEY)["pages"][0]["componentsUsed"]
        assert [(u["componentId"], u["name"], u["count"]) for u in used] == [
            ("A", "Alpha", 4),
            ("B", "Beta", 2),
            ("Z", UNKNOWN_COMPONENT, 1),
        ]
        assert used[2]["key"] is None

    def test_usage_sample_file(self, sample_file):
        result = component_usage_report(sample_file, KEY)
        auth, home = result["pages"]
        assert [(u["name"], u["count"]) for u in auth["componentsUsed"]] == [("Button/Primary", 1), ("mdi:home", 1)]
        assert [(u["name"], u["count"]) for u in home["componentsUsed"]] == [
            ("Product Card", 2),
            (UNKNOWN_COMPONENT, 1),
            ("Chip", 1),
            ("Text Field", 1),
        ]
        assert [c["nodeId"] for c in result["allComponents"]] == ["10:1", "10:2", "10:3", "10:4", "10:5"]

    def test_inventory(self, sample_file):
        result = inventory_report(sample_file, KEY)
        assert result["counts"] == {"components": 5, "componentSets": 1, "styles": 2}
        counts = {c["nodeId"]: c["instanceCount"] for c in result["components"]}
        assert counts == {"10:1": 1, "10:2": 2, "10:3": 1, "10:4": 1, "10:5": 1}
        assert result["components"][0]["componentSetId"] == "9:1"
        assert result["styles"][1] == {
            "styleId": "S:2", "name": "Heading", "styleType": "TEXT", "description": None, "key": "s2",
        }

    def test_components_export(self):
        f = parse_file(figma_file([page("Library", [
            node("COMPONENT", "Tag", width=60, height=24, fills=[solid(1, 1, 0)], children=[text("New")]),
            frame("Wrapper", children=[node("COMPONENT", "Badge")]),
        ])]))
        result = components_export(f, KEY)
        assert result["componentCount"] == 2
        tag, badge = result["components"]
        assert tag["name"] == "Tag"
        assert tag["fills"] == [{"type": "SOLID", "hex": "#FFFF00"}]
        assert tag["children"][0]["characters"] == "New"
        assert badge == {"id": badge["id"], "name": "Badge", "type": "COMPONENT"}

    @pytest.mark.parametrize("report", [component_usage_report, inventory_report, components_export])
    def test_empty_document(self, report):
        result = report(parse_file({}), KEY)
        assert result["fileName"] == "-"
        json.dumps(result)


class TestNameOnlyLeaves:
    """Тексты и векторы с UI-словами в имени не попадают в отчёт"""

    def test_label_inside_button_not_reported(self):
        f = parse_file(figma_file([
            page("Checkout", [
                frame("Pay button", children=[text("Buy button")]),
                node("VECTOR", "card-outline"),
            ]),
            page("Buttons"),
        ]))
        checkout, buttons_page = ui_components_report(f, KEY)["pages"]
        assert _names(checkout["ui"]["buttons"]) == ["Pay button"]
        assert checkout["ui"]["cards"] == []
        assert buttons_page["ui"] == {"buttons": [], "inputs": [], "cards": []}
