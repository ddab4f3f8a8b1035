from __future__ import annotations

import contextlib
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple


class GraphError(ValueError):
    """Raised when a graph invariant is violated (bad handle, cycle, mixed graphs)."""


class Op(Enum):
    """Tag selecting the forward evaluation and gradient rule of a node."""

    LEAF = ""
    ADD = "+"
    MUL = "*"
    NEG = "neg"
    POW = "**"
    INV = "inv"
    RELU = "ReLU"
    EXP = "exp"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def arity(self) -> int:
        if self is Op.LEAF:
            return 0
        if self in (Op.ADD, Op.MUL):
            return 2
        return 1


@dataclass
class Node:
    """Scalar vertex stored in a ``Graph`` arena."""

    value: float
    op: Op = Op.LEAF
    children: Tuple[int, ...] = ()
    exponent: Optional[float] = None
    label: Optional[str] = None
    grad: float = 0.0

    def __post_init__(self) -> None:
        if len(self.children) != self.op.arity:
            raise GraphError(
                f"Op `{self.op.name}` expects {self.op.arity} operand(s), "
                f"got {len(self.children)}."
            )
        if (self.op is Op.POW) != (self.exponent is not None):
            raise GraphError("Only POW nodes carry an exponent.")

    def is_leaf(self) -> bool:
        return not self.children


@dataclass
class Graph:
    """
    Growable indexed store of scalar nodes.

    A node's handle is its position in ``nodes``. Children always point to
    earlier slots, which keeps the structure acyclic by construction.
    """
    nodes: List[Node] = field(default_factory=list)
    name: Optional[str] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def add_node(self, node: Node) -> int:
        index = len(self.nodes)
        for child in node.children:
            if not 0 <= child < index:
                raise GraphError(
                    f"Node {index} references child {child}, which is not an "
                    "earlier node of this graph."
                )
        self.nodes.append(node)
        return index

    def get_node(self, index: int) -> Node:
        if not 0 <= index < len(self.nodes):
            raise GraphError(f"Unknown node handle: {index}")
        return self.nodes[index]

    @contextlib.contextmanager
    def as_default(self) -> Iterator["Graph"]:
        """Make this graph the target of leaf creation inside the block."""
        _scoped.append(self)
        try:
            yield self
        finally:
            _scoped.pop()


# Graphs installed with `as_default`, innermost last.
_scoped: List[Graph] = []
# The process default is held weakly: handles keep it alive, and once the
# last one is dropped the next leaf starts a new graph.
_default_ref: Optional["weakref.ReferenceType[Graph]"] = None


def get_default_graph() -> Graph:
    """
    Graph receiving leaves created without an explicit ``graph``.

    Inside ``Graph.as_default()`` this is the scoped graph. Otherwise it is
    the process default, which lives only as long as some ``Value`` (or the
    caller) references it.
    """
    global _default_ref
    if _scoped:
        return _scoped[-1]
    graph = _default_ref() if _default_ref is not None else None
    if graph is None:
        graph = Graph(name="default")
        _default_ref = weakref.ref(graph)
    return graph


def reset_default_graph() -> Graph:
    """Start a new empty process default graph and return it."""
    global _default_ref
    graph = Graph(name="default")
    _default_ref = weakref.ref(graph)
    return graph
