"""
Read-only inspection of a graph, for printers and diagram renderers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from tiny_autograd.graph.ir import Op
from tiny_autograd.graph.topo import topological_indices
from tiny_autograd.graph.value import Value


@dataclass(frozen=True)
class NodeView:
    index: int
    label: Optional[str]
    op: Op
    exponent: Optional[float]
    value: float
    grad: float

    @property
    def op_label(self) -> str:
        if self.op is Op.POW:
            return f"{self.op.symbol}{self.exponent:g}"
        return self.op.symbol


def _json_number(x: float) -> Union[float, str]:
    if math.isfinite(x):
        return x
    return str(x)


@dataclass(frozen=True)
class GraphTrace:
    nodes: List[NodeView]
    edges: List[Tuple[int, int]]  # (parent, child), one per operand slot

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain-data form of the trace. Non-finite numbers become the strings
        ``"nan"``, ``"inf"`` and ``"-inf"`` so the result is strict JSON.
        """
        return {
            "nodes": [
                {
                    "id": view.index,
                    "label": view.label,
                    "op": view.op_label,
                    "value": _json_number(view.value),
                    "grad": _json_number(view.grad),
                }
                for view in self.nodes
            ],
            "edges": [{"source": p, "target": c} for p, c in self.edges],
        }


def trace(root: Value) -> GraphTrace:
    graph = root.graph
    order = topological_indices(graph, root.index)

    views: List[NodeView] = []
    edges: List[Tuple[int, int]] = []
    for idx in order:
        node = graph.nodes[idx]
        views.append(
            NodeView(
                index=idx,
                label=node.label,
                op=node.op,
                exponent=node.exponent,
                value=node.value,
                grad=node.grad,
            )
        )
        edges.extend((idx, child) for child in node.children)

    return GraphTrace(nodes=views, edges=edges)
