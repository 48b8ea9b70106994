"""
Service catalog tree: build a forest from the flat services table and
navigate it.

The services table stores the hierarchy as a ``parent_id`` column. The
catalog pages need it nested (category -> sub-category -> bookable
service), so every fetch is turned into a forest of ``ServiceNode``
objects here. All functions are pure and never raise for data-shape
problems: a dangling parent reference promotes the record to the top
level instead of dropping it, and lookups report "not found" as
``None`` / ``[]``.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from documentmitra.models.service import ServiceNode, ServiceRecord

logger = logging.getLogger(__name__)


def _sort_key(node: ServiceNode):
    return (node.display_order, node.name)


def _closes_cycle(service_id: int, parent_id: int, parents: Dict[int, int]) -> bool:
    """True if attaching ``service_id`` under ``parent_id`` loops back to it."""
    current: Optional[int] = parent_id
    seen = set()
    while current is not None and current not in seen:
        if current == service_id:
            return True
        seen.add(current)
        current = parents.get(current)
    return False


def build_tree(records: Iterable[ServiceRecord], sort: bool = False) -> List[ServiceNode]:
    """Build the catalog forest from flat service records.

    Two passes: the first indexes every record by id (a later duplicate
    id replaces the earlier record), the second attaches each node to
    its parent or to the forest. Records may reference parents that
    appear later in the input.

    Records whose parent is missing from the input, or whose parent
    chain would loop back to themselves, become top-level nodes.

    Siblings keep the order of ``records`` (the services query already
    orders by ``display_order`` then ``name``). Pass ``sort=True`` for
    unordered input to sort every ``children`` list and the forest by
    ``(display_order, name)``.

    Nodes are handed out as a read-only view: callers must not modify
    ``children`` in place; a refresh builds a new forest instead.
    """
    nodes: Dict[int, ServiceNode] = {}
    for record in records:
        if record.id in nodes:
            logger.warning(f"Duplicate service id {record.id}; keeping the last record")
        nodes[record.id] = ServiceNode(**dict(record), children=[])

    forest: List[ServiceNode] = []
    parents: Dict[int, int] = {}
    for node in nodes.values():
        parent_id = node.parent_id
        if parent_id is None:
            forest.append(node)
        elif parent_id not in nodes:
            logger.warning(
                f"Service {node.id} ({node.name!r}) references missing parent {parent_id}; "
                f"showing it at the top level"
            )
            forest.append(node)
        elif _closes_cycle(node.id, parent_id, parents):
            logger.warning(
                f"Service {node.id} ({node.name!r}) has a circular parent chain; "
                f"showing it at the top level"
            )
            forest.append(node)
        else:
            parents[node.id] = parent_id
            nodes[parent_id].children.append(node)

    if sort:
        for node in nodes.values():
            node.children.sort(key=_sort_key)
        forest.sort(key=_sort_key)
    return forest


def _preorder(forest: List[ServiceNode]) -> Iterator[Tuple[ServiceNode, int]]:
    """Yield ``(node, depth)`` depth-first, parent before children.

    Uses an explicit stack so arbitrarily deep parent chains do not hit
    the interpreter's recursion limit.
    """
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def find_by_id(forest: List[ServiceNode], service_id: int) -> Optional[ServiceNode]:
    """Depth-first lookup of a service; ``None`` if it is not in the forest."""
    for node, _ in _preorder(forest):
        if node.id == service_id:
            return node
    return None


def get_breadcrumbs(forest: List[ServiceNode], service_id: int) -> List[ServiceNode]:
    """Return the path from a top-level service down to ``service_id``.

    The result is root first and ends with the matched node. An unknown
    id yields an empty list.
    """
    path: List[ServiceNode] = []
    for node, depth in _preorder(forest):
        path[depth:] = [node]
        if node.id == service_id:
            return list(path)
    return []


def flatten(forest: List[ServiceNode]) -> List[ServiceNode]:
    """List every node in pre-order (parent before its children)."""
    return [node for node, _ in _preorder(forest)]
