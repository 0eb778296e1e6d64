"""Путь ноды внутри страницы и грубая контекстная роль."""
from typing import List, Optional, Tuple

from .models import Node, NodeType
from .traversal import ParentIndex

PATH_SEPARATOR = " / "

# (роль, ключевые слова по имени вида, ключевые слова по имени ноды)
ROLE_RULES: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...]], ...] = (
    ("Home page card", ("home",), ()),
    ("Calendar card", ("calendar",), ("calendar",)),
    ("Login/identity card", ("login",), ("login",)),
    ("Registration card", ("register",), ("register",)),
    ("Closet/product card", ("closet",), ("closet",)),
    ("Verification card", ("verification",), ("verification", "sms")),
)
DEFAULT_ROLE = "Generic card"


def build_path(node: Node, page: Node, parents: ParentIndex, page_name: Optional[str] = None) -> str:
    """
    "Page / View / ... / Node": имена предков от страницы (не включая её
    саму) до ноды, с именем страницы в начале. Пустое имя заменяется id.
    """
    parts: List[str] = [n.label for n in parents.ancestors(node, stop=page) if n.label]
    parts.append(page_name if page_name is not None else page.label)
    return PATH_SEPARATOR.join(reversed(parts))


def nearest_view_name(node: Node, page: Node, parents: ParentIndex, page_name: Optional[str] = None) -> str:
    """Имя самого внешнего FRAME-предка под страницей, иначе имя страницы."""
    view_name = page_name if page_name is not None else page.label
    for ancestor in parents.ancestors(node, stop=page):
        if ancestor.type is NodeType.FRAME:
            view_name = ancestor.name or view_name
    return view_name


def infer_role(view_name: str, node_name: str) -> str:
    view = (view_name or "").lower()
    name = (node_name or "").lower()
    for role, view_hints, name_hints in ROLE_RULES:
        if any(h in view for h in view_hints) or any(h in name for h in name_hints):
            return role
    return DEFAULT_ROLE
