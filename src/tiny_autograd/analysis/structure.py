"""
Structural statistics of the subgraph reachable from a root.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from statistics import mean
from typing import Dict, List

from tiny_autograd.graph.topo import topological_indices
from tiny_autograd.graph.value import Value


@dataclass(frozen=True)
class GraphSummary:
    num_nodes: int
    num_leaves: int
    num_edges: int
    depth: int
    max_fanout: int
    mean_fanout: float
    shared_nodes: List[int]
    op_counts: Dict[str, int]


def summarize_graph(root: Value) -> GraphSummary:
    """
    Count nodes, edges and operations, measure the longest leaf-to-root path,
    and list nodes used by more than one operand slot.
    """
    graph = root.graph
    order = topological_indices(graph, root.index)

    depth: Dict[int, int] = {}
    fanout: Counter[int] = Counter({idx: 0 for idx in order})
    op_counts: Counter[str] = Counter()
    num_edges = 0

    for idx in order:
        node = graph.nodes[idx]
        op_counts[node.op.name] += 1
        if node.is_leaf():
            depth[idx] = 1
        else:
            depth[idx] = 1 + max(depth[child] for child in node.children)
        for child in node.children:
            fanout[child] += 1
            num_edges += 1

    return GraphSummary(
        num_nodes=len(order),
        num_leaves=sum(1 for idx in order if graph.nodes[idx].is_leaf()),
        num_edges=num_edges,
        depth=depth[root.index],
        max_fanout=max(fanout.values()),
        mean_fanout=float(mean(fanout.values())),
        shared_nodes=[idx for idx in order if fanout[idx] > 1],
        op_counts=dict(op_counts),
    )
