from __future__ import annotations

from contextlib import nullcontext
from typing import ContextManager, List, Optional

from tiny_autograd.graph.topo import topological_indices
from tiny_autograd.graph.value import Value
from tiny_autograd.ops.rules import propagate
from tiny_autograd.runtime.profiling import Profiler
from tiny_autograd.utils.config import config
from tiny_autograd.utils.logging import logger


def _phase(profiler: Optional[Profiler], name: str) -> ContextManager[None]:
    if profiler is None:
        return nullcontext()
    return profiler.timed(name)


def backward(root: Value, *, profiler: Optional[Profiler] = None) -> None:
    """
    Compute d(root)/d(node) for every node reachable from ``root``.

    Runs reset + order as one walk, seeds ``root`` with 1, then replays the
    gradient rules in reverse topological order. All traversal state lives
    in this call, so repeated or overlapping passes never interfere.

    Args:
        root: Output whose gradient is seeded with 1.
        profiler: Optional profiler receiving node counts and phase timings.
    """
    graph = root.graph

    with _phase(profiler, "order"):
        order: List[int] = topological_indices(graph, root.index, zero_grad=True)

    logger.debug("backward from node %d over %d nodes", root.index, len(order))

    graph.nodes[root.index].grad = 1.0

    with _phase(profiler, "replay"):
        for idx in reversed(order):
            if config.debug:
                node = graph.nodes[idx]
                logger.debug(
                    "replay node %d op=%s value=%r grad=%r",
                    idx,
                    node.op.name,
                    node.value,
                    node.grad,
                )
            propagate(graph, idx)

    if profiler is not None:
        profiler.record_pass(len(order))


def zero_grad(root: Value) -> None:
    """Reset the gradient of every node reachable from ``root`` to 0."""
    topological_indices(root.graph, root.index, zero_grad=True)
