"""
Извлечение атрибутов из нод: цвета, размеры, текст, иконки.

Все функции чистые и не бросают исключений на неполных данных:
отсутствующее значение возвращается как None или 0.
"""
import math
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .hints import is_icon_name
from .models import ComponentMeta, InstanceNode, Node, NodeType, Paint, RGB, TextNode


class ColorHex(NamedTuple):
    rgb: str
    rgba: str
    alpha255: int


def _to_byte(value: float) -> int:
    scaled = value * 255
    rounded = math.floor(abs(scaled) + 0.5)
    return max(0, min(255, int(math.copysign(rounded, scaled))))


def to_hex(color: Optional[RGB], opacity: Optional[float] = 1.0) -> ColorHex:
    """
    Переводит нормализованный RGB (0..1) и прозрачность в #RRGGBB[AA].

    Альфа-байт добавляется только если он меньше 255.
    """
    color = color or RGB()
    r, g, b = _to_byte(color.r), _to_byte(color.g), _to_byte(color.b)
    a = _to_byte(1.0 if opacity is None else opacity)
    rgb = f"#{r:02X}{g:02X}{b:02X}"
    rgba = f"{rgb}{a:02X}" if a < 255 else rgb
    return ColorHex(rgb=rgb, rgba=rgba, alpha255=a)


def effective_opacity(paint: Paint, node: Optional[Node] = None) -> float:
    if paint.opacity is not None:
        return paint.opacity
    if node is not None and node.opacity is not None:
        return node.opacity
    return 1.0


def paint_hex(paint: Paint, node: Optional[Node] = None) -> Optional[str]:
    """Канонический hex для видимой SOLID-заливки, иначе None."""
    if not paint.is_solid:
        return None
    return to_hex(paint.color, effective_opacity(paint, node)).rgba


def solid_fill_hexes(node: Node) -> List[str]:
    hexes = (paint_hex(p, node) for p in node.fills)
    return [h for h in hexes if h]


def image_fill_count(node: Node) -> int:
    return sum(1 for p in node.fills if p.is_image)


def has_solid_fill(node: Node) -> bool:
    return any(p.is_solid for p in node.fills)


def has_stroke(node: Node) -> bool:
    return any(p.visible for p in node.strokes)


# ---------------------------------------------------------------------
# GEOMETRY
# ---------------------------------------------------------------------
def resolve_size(node: Node) -> Tuple[Optional[float], Optional[float]]:
    """
    Ширина и высота ноды.

    Каждая величина берётся из первого источника с числовым значением:
    absoluteBoundingBox -> size -> width/height.
    """
    boxes = (node.bounding_box, node.size)
    width = next((b.width for b in boxes if b is not None and b.width is not None), node.width)
    height = next((b.height for b in boxes if b is not None and b.height is not None), node.height)
    return width, height


def size_dict(node: Node) -> Optional[Dict[str, float]]:
    width, height = resolve_size(node)
    if width is None or height is None:
        return None
    return {"width": width, "height": height}


# ---------------------------------------------------------------------
# CHILDREN
# ---------------------------------------------------------------------
def child_text_count(node: Node) -> int:
    return sum(1 for ch in node.kids if ch.type is NodeType.TEXT)


def child_text_samples(node: Node, limit: int = 3) -> List[str]:
    samples = []
    for ch in node.kids:
        if isinstance(ch, TextNode) and ch.characters is not None:
            samples.append(ch.characters)
    return samples[:limit]


def is_icon_like(node: Node, components: Optional[Dict[str, ComponentMeta]] = None) -> bool:
    if is_icon_name(node.name):
        return True
    if isinstance(node, InstanceNode) and components and node.component_id:
        meta = components.get(node.component_id)
        return bool(meta and is_icon_name(meta.name))
    return False


def child_icon_count(node: Node, components: Optional[Dict[str, ComponentMeta]] = None) -> int:
    return sum(1 for ch in node.kids if is_icon_like(ch, components))


# ---------------------------------------------------------------------
# INSPECTION
# ---------------------------------------------------------------------
def _stroke_info(node: Node) -> Optional[Dict[str, Any]]:
    return {"strokeWeight": node.stroke_weight} if has_stroke(node) else None


def button_info(node: Node, sample_limit: int = 3) -> Dict[str, Any]:
    """Сводка по кнопке: цвет, скругления, обводка, текст, размер."""
    samples = child_text_samples(node, limit=len(node.kids))
    return {
        "name": node.name or "(button)",
        "size": size_dict(node),
        "fills": solid_fill_hexes(node),
        "cornerRadius": node.corner_radius,
        "rectangleCornerRadii": list(node.rectangle_corner_radii) if node.rectangle_corner_radii is not None else None,
        "stroke": _stroke_info(node),
        "text": {"hasText": bool(samples), "samples": samples[:sample_limit]},
    }


def card_info(
    node: Node,
    components: Optional[Dict[str, ComponentMeta]] = None,
    sample_limit: int = 3,
) -> Dict[str, Any]:
    """Сводка по карточке, включая содержимое прямых потомков."""
    text_samples = child_text_samples(node, limit=len(node.kids))
    instances = [ch for ch in node.kids if ch.type is NodeType.INSTANCE]
    return {
        "name": node.name or "(card)",
        "size": size_dict(node),
        "fills": solid_fill_hexes(node),
        "cornerRadius": node.corner_radius,
        "rectangleCornerRadii": list(node.rectangle_corner_radii) if node.rectangle_corner_radii is not None else None,
        "stroke": _stroke_info(node),
        "content": {
            "textCount": len(text_samples),
            "textSamples": text_samples[:sample_limit],
            "imageFillCount": sum(image_fill_count(ch) for ch in node.kids),
            "iconCount": sum(1 for ch in instances if is_icon_like(ch, components)),
            "instanceCount": len(instances),
        },
    }


# ---------------------------------------------------------------------
# EXPORT
# ---------------------------------------------------------------------
EXPORTABLE_TYPES = frozenset({
    NodeType.FRAME, NodeType.GROUP, NodeType.RECTANGLE, NodeType.ELLIPSE,
    NodeType.LINE, NodeType.POLYGON, NodeType.STAR, NodeType.VECTOR,
    NodeType.TEXT, NodeType.INSTANCE, NodeType.COMPONENT,
})


def simplify_paints(node: Node) -> List[Dict[str, Any]]:
    fills = []
    for p in node.fills:
        if not p.visible:
            continue
        if p.is_solid:
            fills.append({"type": "SOLID", "hex": paint_hex(p, node)})
        elif p.type == "IMAGE":
            fills.append({"type": "IMAGE", "opacity": effective_opacity(p, node)})
        elif p.type:
            fills.append({"type": p.type})
    return fills


def _paint_dict(paint: Paint) -> Dict[str, Any]:
    data: Dict[str, Any] = {"type": paint.type, "visible": paint.visible}
    if paint.color is not None:
        data["color"] = {"r": paint.color.r, "g": paint.color.g, "b": paint.color.b}
    if paint.opacity is not None:
        data["opacity"] = paint.opacity
    return data


def simplify_node(node: Node) -> Dict[str, Any]:
    """Компактное JSON-представление поддерева для генерации кода."""
    base: Dict[str, Any] = {
        "id": node.id or None,
        "name": node.name or None,
        "type": node.raw_type or "NODE",
    }
    size = size_dict(node)
    if size:
        base["size"] = size
    fills = simplify_paints(node)
    if fills:
        base["fills"] = fills
    if node.strokes:
        base["strokes"] = [_paint_dict(s) for s in node.strokes]
    if node.stroke_weight is not None:
        base["strokeWeight"] = node.stroke_weight
    if node.corner_radius is not None:
        base["cornerRadius"] = node.corner_radius
    if node.rectangle_corner_radii is not None:
        base["rectangleCornerRadii"] = list(node.rectangle_corner_radii)
    if isinstance(node, TextNode):
        base["characters"] = node.characters or ""
        if node.style:
            base["textStyle"] = node.style

    children = [simplify_node(ch) for ch in node.kids if ch.type in EXPORTABLE_TYPES]
    if children:
        base["children"] = children
    return base
