"""
tiny-autograd

Scalar reverse-mode automatic differentiation over arena-backed graphs.
"""

from .graph.ir import Graph, GraphError, Op, get_default_graph, reset_default_graph
from .graph.value import Value
from .graph.topo import topological_order
from .graph.inspect import GraphTrace, NodeView, trace
from .functional import (
    add,
    divide,
    exp,
    inverse,
    lift,
    multiply,
    negate,
    power,
    rectify,
    relu,
    subtract,
)
from .runtime.backward import backward, zero_grad

__all__ = [
    "Graph",
    "GraphError",
    "Op",
    "Value",
    "get_default_graph",
    "reset_default_graph",
    "topological_order",
    "GraphTrace",
    "NodeView",
    "trace",
    "add",
    "divide",
    "exp",
    "inverse",
    "lift",
    "multiply",
    "negate",
    "power",
    "rectify",
    "relu",
    "subtract",
    "backward",
    "zero_grad",
]
