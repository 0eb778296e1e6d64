"""
Агрегация фактов о нодах в отчёты.

Каждая функция принимает уже разобранный FigmaFile и возвращает
JSON-сериализуемую структуру. Входные данные не изменяются; отсутствие
документа даёт пустые коллекции.
"""
import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from .classifier import Classifier, UiKind
from .config import AnalysisConfig, ClassifierConfig
from .extractors import button_info, card_info, image_fill_count, paint_hex, resolve_size, simplify_node
from .hints import is_button_name
from .models import FigmaFile, InstanceNode, Node, NodeType, VIEW_TYPES
from .paths import build_path, infer_role, nearest_view_name
from .traversal import ParentIndex, iter_nodes

logger = logging.getLogger(__name__)

UNNAMED_PAGE = "(unnamed page)"
UNNAMED_VIEW = "(unnamed view)"
UNKNOWN_COMPONENT = "(unknown component)"


def _page_name(page: Node) -> str:
    return page.name or UNNAMED_PAGE


def _file_header(file: FigmaFile, file_key: str) -> Dict[str, Any]:
    return {"fileName": file.name or "-", "fileKey": file_key}


# ---------------------------------------------------------------------
# PALETTE
# ---------------------------------------------------------------------
class ColorCounter:
    """
    Счётчик использования цветов.

    Ключ - канонический hex. При равном количестве порядок определяется
    первым появлением цвета при обходе.
    """

    def __init__(self):
        self._counts: Counter = Counter()

    def add_node(self, node: Node) -> None:
        for paint in node.fills:
            hex_value = paint_hex(paint, node)
            if hex_value:
                self._counts[hex_value] += 1

    def palette(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return [{"hex": h, "count": c} for h, c in self._counts.most_common(limit)]

    def __len__(self) -> int:
        return len(self._counts)


def palette_for(root: Optional[Node], limit: Optional[int] = 50) -> List[Dict[str, Any]]:
    counter = ColorCounter()
    for node, _ in iter_nodes(root):
        counter.add_node(node)
    return counter.palette(limit)


def fill_style_names(file: FigmaFile) -> List[str]:
    return [s.name for s in file.styles.values() if s.style_type == "FILL" and s.name]


def page_names(file: FigmaFile) -> List[str]:
    return [p.name for p in file.pages if p.name]


# ---------------------------------------------------------------------
# VIEWS
# ---------------------------------------------------------------------
def view_nodes(page: Node) -> List[Node]:
    return [n for n in page.kids if n.type in VIEW_TYPES]


def view_stats(view: Node, palette_limit: int = 8) -> Dict[str, Any]:
    """Статистика по одному виду (прямому потомку страницы)."""
    stats = {"totalNodes": 0, "text": 0, "vector": 0, "instance": 0, "imageFills": 0}
    colors = ColorCounter()
    for node, _ in iter_nodes(view):
        stats["totalNodes"] += 1
        if node.type is NodeType.TEXT:
            stats["text"] += 1
        elif node.type is NodeType.VECTOR:
            stats["vector"] += 1
        elif node.type is NodeType.INSTANCE:
            stats["instance"] += 1
        stats["imageFills"] += image_fill_count(node)
        colors.add_node(node)

    width, height = resolve_size(view)
    return {
        "name": view.name or UNNAMED_VIEW,
        "type": view.raw_type or "NODE",
        "width": width,
        "height": height,
        "stats": stats,
        "palette": colors.palette(palette_limit),
    }


def views_report(file: FigmaFile, file_key: str, config: Optional[AnalysisConfig] = None) -> Dict[str, Any]:
    config = config or AnalysisConfig()
    pages = []
    for page in file.pages:
        pages.append({
            "pageName": _page_name(page),
            "views": [view_stats(v, config.view_palette_limit) for v in view_nodes(page)],
        })
    return {**_file_header(file, file_key), "pages": pages}


def analyze_report(file: FigmaFile, file_key: str, config: Optional[AnalysisConfig] = None) -> Dict[str, Any]:
    """Страницы, общая палитра, FILL-стили и статистика по видам."""
    config = config or AnalysisConfig()
    return {
        **_file_header(file, file_key),
        "pages": page_names(file),
        "palette": palette_for(file.document, config.palette_limit),
        "fillStyles": fill_style_names(file),
        "views": views_report(file, file_key, config)["pages"],
    }


def page_palettes(file: FigmaFile, file_key: str, config: Optional[AnalysisConfig] = None) -> Dict[str, Any]:
    config = config or AnalysisConfig()
    pages = [
        {"pageName": _page_name(page), "palette": palette_for(page, config.palette_limit)}
        for page in file.pages
    ]
    return {**_file_header(file, file_key), "pages": pages}


def _bullets(items: Iterable[str], empty: str = "- (none found)") -> List[str]:
    lines = [f"- {item}" for item in items]
    return lines or [empty]


def render_text_report(report: Dict[str, Any], include_views: bool = True) -> str:
    """Текстовая версия analyze_report для CLI и MCP."""
    lines = [
        "=== Figma Report ===",
        f"File name: {report['fileName']}",
        f"File key: {report['fileKey']}",
        "",
        "Pages:",
        *_bullets(report["pages"]),
        "",
        f"Color palette (top {len(report['palette'])}, most used first):",
        *_bullets(f"{c['hex']} (usage: {c['count']})" for c in report["palette"]),
    ]
    if report["fillStyles"]:
        lines += ["", "Color styles (FILL):", *_bullets(report["fillStyles"])]

    if include_views:
        lines += ["", "", "=== View Analysis ==="]
        for page in report["views"]:
            lines += ["", f"[Page] {page['pageName']}"]
            if not page["views"]:
                lines.append("- No views found")
                continue
            for view in page["views"]:
                w = "?" if view["width"] is None else view["width"]
                h = "?" if view["height"] is None else view["height"]
                stats = view["stats"]
                lines.append(f"- View: {view['name']} [{view['type']}] {w}x{h}")
                lines.append(f"  • Total nodes: {stats['totalNodes']}")
                lines.append(
                    f"  • Text: {stats['text']}, Vector: {stats['vector']}, "
                    f"Instance: {stats['instance']}, Image fills: {stats['imageFills']}"
                )
                if view["palette"]:
                    lines.append(f"  • Colors (top {len(view['palette'])}): " + ", ".join(c["hex"] for c in view["palette"]))
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------
# UI CLASSIFICATION
# ---------------------------------------------------------------------
_UI_BUCKETS = {UiKind.BUTTON: "buttons", UiKind.INPUT: "inputs", UiKind.CARD: "cards"}


def ui_components_report(
    file: FigmaFile,
    file_key: str,
    config: Optional[ClassifierConfig] = None,
) -> Dict[str, Any]:
    """Кнопки, поля ввода и карточки по страницам, без иконок."""
    classifier = Classifier(config, file.components)
    pages = []
    for page in file.pages:
        page_name = _page_name(page)
        ui: Dict[str, List[Dict[str, str]]] = {bucket: [] for bucket in _UI_BUCKETS.values()}
        parents = ParentIndex()
        for node, parent in iter_nodes(page):
            parents.record(node, parent)
            verdict = classifier.classify(node)
            bucket = _UI_BUCKETS.get(verdict.kind)
            if bucket is None:
                continue
            ui[bucket].append({"name": verdict.name, "path": build_path(node, page, parents, page_name)})
        logger.debug(
            "Page %s: %d buttons, %d inputs, %d cards",
            page_name, len(ui["buttons"]), len(ui["inputs"]), len(ui["cards"]),
        )
        pages.append({"pageName": page_name, "ui": ui})
    return {**_file_header(file, file_key), "pages": pages}


def button_report(file: FigmaFile, file_key: str, config: Optional[AnalysisConfig] = None) -> Dict[str, Any]:
    """Ноды с button/btn в имени и их визуальные свойства."""
    config = config or AnalysisConfig()
    buttons = []
    for page in file.pages:
        page_name = _page_name(page)
        parents = ParentIndex()
        for node, parent in iter_nodes(page):
            parents.record(node, parent)
            if not node.name or not is_button_name(node.name):
                continue
            buttons.append({
                "page": page_name,
                "path": build_path(node, page, parents, page_name),
                "info": button_info(node, config.text_sample_limit),
            })
    return {**_file_header(file, file_key), "buttons": buttons}


def card_report(
    file: FigmaFile,
    file_key: str,
    config: Optional[ClassifierConfig] = None,
    analysis: Optional[AnalysisConfig] = None,
) -> Dict[str, Any]:
    """Карточки с содержимым, ближайшим видом и предполагаемой ролью."""
    analysis = analysis or AnalysisConfig()
    classifier = Classifier(config, file.components)
    cards = []
    for page in file.pages:
        page_name = _page_name(page)
        parents = ParentIndex()
        for node, parent in iter_nodes(page):
            parents.record(node, parent)
            if not classifier.looks_like_card_for_inspection(node):
                continue
            view = nearest_view_name(node, page, parents, page_name)
            info = card_info(node, file.components, analysis.text_sample_limit)
            cards.append({
                "page": page_name,
                "view": view,
                "path": build_path(node, page, parents, page_name),
                "info": info,
                "role": infer_role(view, info["name"]),
            })
    return {**_file_header(file, file_key), "cards": cards}


# ---------------------------------------------------------------------
# COMPONENTS
# ---------------------------------------------------------------------
def count_instances(root: Optional[Node]) -> Counter:
    counts: Counter = Counter()
    for node, _ in iter_nodes(root):
        if isinstance(node, InstanceNode) and node.component_id:
            counts[node.component_id] += 1
    return counts


def _all_components(file: FigmaFile) -> List[Dict[str, Any]]:
    return [
        {
            "nodeId": meta.node_id,
            "key": meta.key,
            "name": meta.name,
            "description": meta.description,
            "componentSetId": meta.component_set_id,
        }
        for meta in file.components.values()
    ]


def component_usage_report(file: FigmaFile, file_key: str) -> Dict[str, Any]:
    """Сколько раз каждый компонент используется на каждой странице."""
    pages = []
    for page in file.pages:
        used = []
        for component_id, count in count_instances(page).items():
            meta = file.components.get(component_id)
            used.append({
                "componentId": component_id,
                "name": (meta.name if meta and meta.name else None) or UNKNOWN_COMPONENT,
                "key": meta.key if meta else None,
                "count": count,
            })
        used.sort(key=lambda item: (-item["count"], item["name"]))
        pages.append({"pageName": _page_name(page), "componentsUsed": used})
    return {**_file_header(file, file_key), "pages": pages, "allComponents": _all_components(file)}


def inventory_report(file: FigmaFile, file_key: str) -> Dict[str, Any]:
    """Компоненты (с числом экземпляров), наборы компонентов и стили файла."""
    instance_counts = count_instances(file.document)
    components = [
        {
            "nodeId": meta.node_id,
            "key": meta.key,
            "name": meta.name,
            "description": meta.description,
            "componentSetId": meta.component_set_id,
            "documentationLinks": meta.documentation_links,
            "instanceCount": instance_counts.get(meta.node_id, 0),
        }
        for meta in file.components.values()
    ]
    component_sets = [
        {
            "nodeId": s.node_id,
            "key": s.key,
            "name": s.name,
            "description": s.description,
            "documentationLinks": s.documentation_links,
        }
        for s in file.component_sets.values()
    ]
    styles = [
        {
            "styleId": s.style_id,
            "name": s.name,
            "styleType": s.style_type,
            "description": s.description,
            "key": s.key,
        }
        for s in file.styles.values()
    ]
    return {
        **_file_header(file, file_key),
        "counts": {
            "components": len(components),
            "componentSets": len(component_sets),
            "styles": len(styles),
        },
        "components": components,
        "componentSets": component_sets,
        "styles": styles,
    }


def components_export(file: FigmaFile, file_key: str) -> Dict[str, Any]:
    components = [simplify_node(n) for n, _ in iter_nodes(file.document) if n.type is NodeType.COMPONENT]
    return {**_file_header(file, file_key), "componentCount": len(components), "components": components}
