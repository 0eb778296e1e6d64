"""Обход дерева нод в глубину."""
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .errors import TreeLimitExceeded


def _children(node: Any) -> Tuple[Any, ...]:
    kids = getattr(node, "children", None)
    return tuple(kids) if kids else ()


def iter_nodes(root: Any, max_nodes: Optional[int] = None) -> Iterator[Tuple[Any, Any]]:
    """
    Генерирует пары (node, parent) в pre-order: сначала корень, затем дети
    по порядку. Пустой корень ничего не генерирует.
    """
    if root is None:
        return
    visited = 0
    stack: List[Tuple[Any, Any]] = [(root, None)]
    while stack:
        node, parent = stack.pop()
        visited += 1
        if max_nodes is not None and visited > max_nodes:
            raise TreeLimitExceeded(f"traversal exceeds {max_nodes} nodes")
        yield node, parent
        for child in reversed(_children(node)):
            stack.append((child, node))


def walk(
    root: Any,
    visit: Callable[[Any, Any], None],
    max_nodes: Optional[int] = None,
) -> int:
    """Вызывает visit(node, parent) для каждой ноды. Возвращает число посещённых нод."""
    count = 0
    for node, parent in iter_nodes(root, max_nodes=max_nodes):
        visit(node, parent)
        count += 1
    return count


class ParentIndex:
    """
    Таблица node -> parent для одного прохода.

    Ноды не изменяются; индекс строится заново для каждого прохода и
    не переживает его.
    """

    def __init__(self):
        self._parents: Dict[int, Any] = {}

    @classmethod
    def build(cls, root: Any, max_nodes: Optional[int] = None) -> "ParentIndex":
        index = cls()
        walk(root, index.record, max_nodes=max_nodes)
        return index

    def record(self, node: Any, parent: Any) -> None:
        self._parents[id(node)] = parent

    def parent_of(self, node: Any) -> Any:
        return self._parents.get(id(node))

    def ancestors(self, node: Any, stop: Any = None) -> List[Any]:
        """Цепочка от node (включительно) вверх до stop (не включая)."""
        chain = []
        current = node
        while current is not None and current is not stop:
            chain.append(current)
            current = self.parent_of(current)
        return chain
