from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set


@dataclass(frozen=True)
class ScheduleResult:
    order: List[str] = field(default_factory=list)
    # Nodes on or behind a cycle, in lexical order.
    remaining: List[str] = field(default_factory=list)


def topological_schedule(graph: Dict[str, Set[str]]) -> ScheduleResult:
    """Order ``graph`` so every node follows the nodes it depends on.

    ``graph`` maps a node to its dependencies. Ties are broken lexically so
    the order is reproducible. Colliding type names can close a reference
    cycle; nodes that cannot be ordered are returned in ``remaining``.
    """
    nodes: Set[str] = set(graph)
    for deps in graph.values():
        nodes.update(deps)

    incoming: Dict[str, Set[str]] = {node: set(graph.get(node, set())) for node in nodes}
    followers: Dict[str, Set[str]] = {node: set() for node in nodes}
    for node, deps in graph.items():
        for dep in deps:
            followers[dep].add(node)

    ready = sorted(node for node, deps in incoming.items() if not deps)
    order: List[str] = []
    while ready:
        node = ready.pop(0)
        order.append(node)
        for follower in sorted(followers[node]):
            incoming[follower].discard(node)
            if not incoming[follower]:
                ready.append(follower)
        ready.sort()

    return ScheduleResult(order=order, remaining=sorted(nodes - set(order)))
