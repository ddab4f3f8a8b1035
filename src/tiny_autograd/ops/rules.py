"""
Local gradient rules, one per node tag.

Each rule reads the output node's current value and gradient plus its
operands' values, and adds its contribution into the operands' gradients.
Contributions are always accumulated, never assigned, so a node used by
several parents ends up with the sum over all of them.
"""

from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from tiny_autograd.graph.ir import Graph, Node, Op

GradientRule = Callable[[Graph, Node], None]


def _leaf(graph: Graph, node: Node) -> None:
    return None


def _add(graph: Graph, node: Node) -> None:
    a, b = (graph.nodes[i] for i in node.children)
    a.grad += node.grad
    b.grad += node.grad


def _mul(graph: Graph, node: Node) -> None:
    a, b = (graph.nodes[i] for i in node.children)
    # read both values first: for `v * v` both slots are the same record
    a_value, b_value = a.value, b.value
    a.grad += float(np.float64(b_value) * node.grad)
    b.grad += float(np.float64(a_value) * node.grad)


def _neg(graph: Graph, node: Node) -> None:
    x = graph.nodes[node.children[0]]
    x.grad += -node.grad


def _pow(graph: Graph, node: Node) -> None:
    x = graph.nodes[node.children[0]]
    n = np.float64(node.exponent)
    if n == 0:
        # x**0 is constant; n * x**-1 would give nan at x == 0
        return
    x.grad += float(n * np.power(np.float64(x.value), n - 1) * node.grad)


def _inv(graph: Graph, node: Node) -> None:
    x = graph.nodes[node.children[0]]
    x.grad += float(-(1.0 / np.float64(x.value) ** 2) * node.grad)


def _relu(graph: Graph, node: Node) -> None:
    x = graph.nodes[node.children[0]]
    x.grad += (1.0 if x.value > 0 else 0.0) * node.grad


def _exp(graph: Graph, node: Node) -> None:
    x = graph.nodes[node.children[0]]
    x.grad += float(np.float64(node.value) * node.grad)


GRADIENT_RULES: Dict[Op, GradientRule] = {
    Op.LEAF: _leaf,
    Op.ADD: _add,
    Op.MUL: _mul,
    Op.NEG: _neg,
    Op.POW: _pow,
    Op.INV: _inv,
    Op.RELU: _relu,
    Op.EXP: _exp,
}


def propagate(graph: Graph, index: int) -> None:
    """Apply the gradient rule of node ``index`` to its children."""
    node = graph.nodes[index]
    try:
        rule = GRADIENT_RULES[node.op]
    except KeyError as exc:
        raise KeyError(f"No gradient rule registered for op `{node.op}`.") from exc
    with np.errstate(all="ignore"):
        rule(graph, node)
