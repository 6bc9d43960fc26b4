from __future__ import annotations

from collections import defaultdict, deque
from typing import Iterable

from .model import OfficeLink


def build_children_index(links: Iterable[OfficeLink]) -> dict[str, list[str]]:
    children: dict[str, list[str]] = defaultdict(list)
    for link in links:
        if link.parent_id is not None:
            children[link.parent_id].append(link.office_id)
    return children


def resolve_office_tree(root_id: str, links: Iterable[OfficeLink]) -> list[str]:
    """Breadth-first walk from ``root_id`` over "child of" edges.

    Returns the root followed by every descendant, each id once, in BFS order.
    Cycles and duplicate parent links are harmless: an id is enqueued at most
    once.
    """
    children = build_children_index(links)

    visited = {root_id}
    order: list[str] = []
    queue = deque([root_id])
    while queue:
        current = queue.popleft()
        order.append(current)
        for child_id in children.get(current, ()):
            if child_id in visited:
                continue
            visited.add(child_id)
            queue.append(child_id)
    return order
