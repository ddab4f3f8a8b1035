"""
Topological ordering of the subgraph reachable from a root.
"""

from __future__ import annotations

from typing import Iterator, List, Set, Tuple

from tiny_autograd.graph.ir import Graph, GraphError
from tiny_autograd.graph.value import Value
from tiny_autograd.utils.logging import logger


def topological_indices(graph: Graph, root: int, *, zero_grad: bool = False) -> List[int]:
    """
    Depth-first post-order over the children relation, starting at ``root``.

    Every child handle precedes each parent that references it and every
    reachable node appears exactly once. Children are visited in operand
    order, so the result is stable for a fixed graph. With ``zero_grad``,
    each node's gradient is reset to 0 as it is emitted.
    """
    nodes = graph.nodes
    graph.get_node(root)

    order: List[int] = []
    finished: Set[int] = set()
    on_path: Set[int] = {root}
    stack: List[Tuple[int, Iterator[int]]] = [(root, iter(nodes[root].children))]

    while stack:
        current, pending = stack[-1]
        for child in pending:
            if child in finished:
                continue
            if child in on_path:
                logger.error("Cycle through node %d while ordering from %d", child, root)
                raise GraphError(f"Cycle detected at node {child}.")
            on_path.add(child)
            stack.append((child, iter(nodes[child].children)))
            break
        else:
            stack.pop()
            on_path.discard(current)
            finished.add(current)
            if zero_grad:
                nodes[current].grad = 0.0
            order.append(current)

    return order


def topological_order(root: Value) -> List[Value]:
    """Handles reachable from ``root``, children before parents."""
    graph = root.graph
    return [Value(graph, i) for i in topological_indices(graph, root.index)]
