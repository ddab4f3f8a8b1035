"""
Scalar expression graph.

- `Graph` arena, `Node` records and the `Op` tag set (see `ir.py`)
- `Value` handles with operator overloading (see `value.py`)
- Topological ordering and read-only inspection helpers.
"""

from .ir import Graph, GraphError, Node, Op, get_default_graph, reset_default_graph
from .value import Value
from . import topo
from . import inspect

__all__ = [
    "Graph",
    "GraphError",
    "Node",
    "Op",
    "Value",
    "get_default_graph",
    "reset_default_graph",
    "topo",
    "inspect",
]
