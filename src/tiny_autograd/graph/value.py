"""
User-facing handle onto a node of a ``Graph``.

A ``Value`` is just ``(graph, index)``. Arithmetic operators append new
nodes to the handle's graph; raw Python numbers are lifted to labelled leaf
nodes first.
"""

from __future__ import annotations

import numbers
from typing import Any, Optional, Tuple, Union

from tiny_autograd.graph.ir import Graph, GraphError, Node, Op, get_default_graph
from tiny_autograd.ops.forward import evaluate

Scalar = Union[int, float]


def _is_scalar(obj: Any) -> bool:
    return isinstance(obj, numbers.Real) and not isinstance(obj, bool)


class Value:
    __slots__ = ("graph", "index")

    def __init__(self, graph: Graph, index: int) -> None:
        graph.get_node(index)
        self.graph = graph
        self.index = index

    @classmethod
    def leaf(
        cls,
        data: Scalar,
        label: Optional[str] = None,
        *,
        graph: Optional[Graph] = None,
    ) -> "Value":
        """
        Create a leaf holding ``data``.

        Without ``graph`` the leaf goes to ``get_default_graph()``. A graph
        keeps every node appended to it until the last handle into it is
        dropped, so long-lived leaves (e.g. parameters) pin everything built
        on top of them; build each step under ``Graph.as_default()`` to
        bound that.
        """
        if not _is_scalar(data):
            raise TypeError(f"Cannot lift {type(data).__name__!r} into a Value.")
        graph = graph if graph is not None else get_default_graph()
        return cls(graph, graph.add_node(Node(value=float(data), label=label)))

    @classmethod
    def apply(
        cls,
        op: Op,
        *operands: "Value",
        exponent: Optional[float] = None,
    ) -> "Value":
        """Append a node computing ``op`` over ``operands``."""
        graph = operands[0].graph
        for operand in operands[1:]:
            if operand.graph is not graph:
                raise GraphError("Cannot combine values from different graphs.")
        data = evaluate(op, [o.node.value for o in operands], exponent)
        node = Node(
            value=data,
            op=op,
            children=tuple(o.index for o in operands),
            exponent=exponent,
        )
        return cls(graph, graph.add_node(node))

    # ------------------------------------------------------------------
    # Read-only view of the underlying node

    @property
    def node(self) -> Node:
        return self.graph.nodes[self.index]

    @property
    def value(self) -> float:
        return self.node.value

    @property
    def grad(self) -> float:
        return self.node.grad

    @property
    def label(self) -> Optional[str]:
        return self.node.label

    @property
    def op(self) -> Op:
        return self.node.op

    @property
    def exponent(self) -> Optional[float]:
        return self.node.exponent

    @property
    def children(self) -> Tuple["Value", ...]:
        return tuple(Value(self.graph, i) for i in self.node.children)

    def is_leaf(self) -> bool:
        return self.node.is_leaf()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.graph is other.graph and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.graph), self.index))

    def __repr__(self) -> str:
        name = f"{self.label!r}, " if self.label else ""
        return f"Value({name}value={self.value}, grad={self.grad})"

    # ------------------------------------------------------------------
    # Construction

    def _coerce(self, other: Any) -> Optional["Value"]:
        if isinstance(other, Value):
            return other
        if _is_scalar(other):
            return Value.leaf(other, label=str(other), graph=self.graph)
        return None

    def __add__(self, other: Any) -> "Value":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Value.apply(Op.ADD, self, rhs)

    def __radd__(self, other: Any) -> "Value":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return Value.apply(Op.ADD, lhs, self)

    def __mul__(self, other: Any) -> "Value":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Value.apply(Op.MUL, self, rhs)

    def __rmul__(self, other: Any) -> "Value":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return Value.apply(Op.MUL, lhs, self)

    def __neg__(self) -> "Value":
        return Value.apply(Op.NEG, self)

    def __sub__(self, other: Any) -> "Value":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: Any) -> "Value":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs + (-self)

    def __pow__(self, exponent: Any) -> "Value":
        if not _is_scalar(exponent):
            return NotImplemented
        return Value.apply(Op.POW, self, exponent=float(exponent))

    def inverse(self) -> "Value":
        return Value.apply(Op.INV, self)

    def __truediv__(self, other: Any) -> "Value":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self * rhs.inverse()

    def __rtruediv__(self, other: Any) -> "Value":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs * self.inverse()

    def relu(self) -> "Value":
        return Value.apply(Op.RELU, self)

    def exp(self) -> "Value":
        return Value.apply(Op.EXP, self)

    # ------------------------------------------------------------------
    # Differentiation

    def backward(self) -> None:
        """Fill ``grad`` of every node reachable from here with d(self)/d(node)."""
        from tiny_autograd.runtime.backward import backward

        backward(self)
