"""
Типизированная модель документа Figma.

Сырые ответы Files API слабо типизированы: любое поле может отсутствовать
или иметь неожиданный тип. Парсер приводит их к набору dataclass-ов,
после чего экстракторы и классификатор работают с полями напрямую.
Некорректные значения превращаются в None / пустые коллекции, исключения
бросаются только при превышении бюджета обхода.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import TreeLimitExceeded


class NodeType(str, Enum):
    DOCUMENT = "DOCUMENT"
    CANVAS = "CANVAS"
    SECTION = "SECTION"
    FRAME = "FRAME"
    GROUP = "GROUP"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    RECTANGLE = "RECTANGLE"
    TEXT = "TEXT"
    VECTOR = "VECTOR"
    ELLIPSE = "ELLIPSE"
    LINE = "LINE"
    POLYGON = "POLYGON"
    STAR = "STAR"
    OTHER = "OTHER"

    @classmethod
    def from_raw(cls, value: Any) -> "NodeType":
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


CONTAINER_TYPES = frozenset({
    NodeType.FRAME, NodeType.GROUP, NodeType.COMPONENT, NodeType.INSTANCE,
})

# Типы, к которым применяется структурная эвристика
STRUCTURAL_TYPES = CONTAINER_TYPES | {NodeType.RECTANGLE}

# Прямые потомки страницы, которые считаются "видами"
VIEW_TYPES = CONTAINER_TYPES


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value
    return None


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class RGB:
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["RGB"]:
        if not isinstance(raw, dict):
            return None
        return cls(
            r=_number(raw.get("r")) or 0.0,
            g=_number(raw.get("g")) or 0.0,
            b=_number(raw.get("b")) or 0.0,
        )


@dataclass(frozen=True)
class Paint:
    """Один слой заливки или обводки."""
    type: str
    visible: bool = True
    color: Optional[RGB] = None
    opacity: Optional[float] = None

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["Paint"]:
        if not isinstance(raw, dict):
            return None
        paint_type = _string(raw.get("type"))
        return cls(
            type=paint_type,
            visible=raw.get("visible") is not False,
            color=RGB.from_raw(raw.get("color")) if paint_type == "SOLID" else None,
            opacity=_number(raw.get("opacity")),
        )

    @property
    def is_solid(self) -> bool:
        return self.type == "SOLID" and self.visible and self.color is not None

    @property
    def is_image(self) -> bool:
        return self.type == "IMAGE" and self.visible


def _paints(raw: Any) -> Tuple[Paint, ...]:
    if not isinstance(raw, list):
        return ()
    paints = (Paint.from_raw(item) for item in raw)
    return tuple(p for p in paints if p is not None)


@dataclass(frozen=True)
class Box:
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(eq=False)
class Node:
    """Общая часть всех нод дерева."""
    type: NodeType
    raw_type: str = ""
    id: str = ""
    name: str = ""
    children: Optional[Tuple["Node", ...]] = None
    bounding_box: Optional[Box] = None
    size: Optional[Box] = None
    width: Optional[float] = None
    height: Optional[float] = None
    fills: Tuple[Paint, ...] = ()
    strokes: Tuple[Paint, ...] = ()
    stroke_weight: Optional[float] = None
    corner_radius: Optional[float] = None
    rectangle_corner_radii: Optional[Tuple[float, ...]] = None
    opacity: Optional[float] = None

    @property
    def kids(self) -> Tuple["Node", ...]:
        return self.children or ()

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(eq=False)
class TextNode(Node):
    characters: Optional[str] = None
    style: Optional[Dict[str, Any]] = None


@dataclass(eq=False)
class InstanceNode(Node):
    component_id: Optional[str] = None


@dataclass
class ComponentMeta:
    node_id: str
    key: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    component_set_id: Optional[str] = None
    documentation_links: Optional[List[Any]] = None

    @classmethod
    def from_raw(cls, node_id: str, raw: Any) -> "ComponentMeta":
        raw = raw if isinstance(raw, dict) else {}
        return cls(
            node_id=node_id,
            key=raw.get("key"),
            name=raw.get("name"),
            description=raw.get("description"),
            component_set_id=raw.get("componentSetId"),
            documentation_links=raw.get("documentationLinks"),
        )


@dataclass
class ComponentSetMeta:
    node_id: str
    key: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    documentation_links: Optional[List[Any]] = None

    @classmethod
    def from_raw(cls, node_id: str, raw: Any) -> "ComponentSetMeta":
        raw = raw if isinstance(raw, dict) else {}
        return cls(
            node_id=node_id,
            key=raw.get("key"),
            name=raw.get("name"),
            description=raw.get("description"),
            documentation_links=raw.get("documentationLinks"),
        )


@dataclass
class StyleMeta:
    style_id: str
    name: Optional[str] = None
    style_type: Optional[str] = None
    description: Optional[str] = None
    key: Optional[str] = None

    @classmethod
    def from_raw(cls, style_id: str, raw: Any) -> "StyleMeta":
        raw = raw if isinstance(raw, dict) else {}
        return cls(
            style_id=style_id,
            name=raw.get("name"),
            style_type=raw.get("styleType"),
            description=raw.get("description"),
            key=raw.get("key"),
        )


@dataclass
class FigmaFile:
    """Разобранный ответ GET /files/:key."""
    name: Optional[str] = None
    document: Optional[Node] = None
    components: Dict[str, ComponentMeta] = field(default_factory=dict)
    component_sets: Dict[str, ComponentSetMeta] = field(default_factory=dict)
    styles: Dict[str, StyleMeta] = field(default_factory=dict)

    @property
    def pages(self) -> Tuple[Node, ...]:
        return self.document.kids if self.document else ()


# ---------------------------------------------------------------------
# PARSER
# ---------------------------------------------------------------------
def _box(raw: Any, width_key: str, height_key: str) -> Optional[Box]:
    if not isinstance(raw, dict):
        return None
    return Box(width=_number(raw.get(width_key)), height=_number(raw.get(height_key)))


def _radii(raw: Any) -> Optional[Tuple[float, ...]]:
    if not isinstance(raw, list):
        return None
    return tuple(v for v in raw if _number(v) is not None)


def _build_node(raw: Dict[str, Any], children: Optional[Tuple[Node, ...]]) -> Node:
    raw_type = _string(raw.get("type"))
    node_type = NodeType.from_raw(raw_type)
    common = dict(
        type=node_type,
        raw_type=raw_type,
        id=_string(raw.get("id")),
        name=_string(raw.get("name")),
        children=children,
        bounding_box=_box(raw.get("absoluteBoundingBox"), "width", "height"),
        size=_box(raw.get("size"), "x", "y"),
        width=_number(raw.get("width")),
        height=_number(raw.get("height")),
        fills=_paints(raw.get("fills")),
        strokes=_paints(raw.get("strokes")),
        stroke_weight=_number(raw.get("strokeWeight")),
        corner_radius=_number(raw.get("cornerRadius")),
        rectangle_corner_radii=_radii(raw.get("rectangleCornerRadii")),
        opacity=_number(raw.get("opacity")),
    )
    if node_type is NodeType.TEXT:
        characters = raw.get("characters")
        style = raw.get("style")
        return TextNode(
            **common,
            characters=characters if isinstance(characters, str) else None,
            style=style if isinstance(style, dict) else None,
        )
    if node_type is NodeType.INSTANCE:
        component_id = raw.get("componentId")
        return InstanceNode(
            **common,
            component_id=component_id if isinstance(component_id, str) else None,
        )
    return Node(**common)


def parse_node(
    raw: Any,
    max_nodes: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> Optional[Node]:
    """
    Строит типизированное дерево из сырого JSON.

    Обход выполняется явным стеком (post-order), поэтому глубина дерева не
    ограничена стеком интерпретатора. Превышение max_nodes / max_depth или
    цикл в исходных данных приводят к TreeLimitExceeded.
    """
    if not isinstance(raw, dict):
        return None

    built: Dict[int, Node] = {}
    on_path = set()
    count = 0
    # (raw, depth, expanded)
    stack: List[Tuple[Dict[str, Any], int, bool]] = [(raw, 0, False)]

    while stack:
        current, depth, expanded = stack.pop()
        raw_children = current.get("children")
        kids = [c for c in raw_children if isinstance(c, dict)] if isinstance(raw_children, list) else None

        if expanded:
            on_path.discard(id(current))
            children = tuple(built[id(c)] for c in kids) if kids is not None else None
            built[id(current)] = _build_node(current, children)
            continue

        if id(current) in on_path:
            raise TreeLimitExceeded("cycle detected in document tree")
        count += 1
        if max_nodes is not None and count > max_nodes:
            raise TreeLimitExceeded(f"document tree exceeds {max_nodes} nodes")
        if max_depth is not None and depth > max_depth:
            raise TreeLimitExceeded(f"document tree exceeds depth {max_depth}")

        on_path.add(id(current))
        stack.append((current, depth, True))
        for child in reversed(kids or []):
            stack.append((child, depth + 1, False))

    return built[id(raw)]


def parse_file(
    raw: Any,
    max_nodes: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> FigmaFile:
    """Разбирает ответ Files API. Отсутствующий документ даёт пустой FigmaFile."""
    if not isinstance(raw, dict):
        return FigmaFile()

    def _dict(key: str) -> Dict[str, Any]:
        value = raw.get(key)
        return value if isinstance(value, dict) else {}

    name = raw.get("name")
    return FigmaFile(
        name=name if isinstance(name, str) else None,
        document=parse_node(raw.get("document"), max_nodes=max_nodes, max_depth=max_depth),
        components={k: ComponentMeta.from_raw(k, v) for k, v in _dict("components").items()},
        component_sets={k: ComponentSetMeta.from_raw(k, v) for k, v in _dict("componentSets").items()},
        styles={k: StyleMeta.from_raw(k, v) for k, v in _dict("styles").items()},
    )
