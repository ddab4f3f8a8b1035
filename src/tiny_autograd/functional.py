"""
Functional construction API.

Every function is pure with respect to existing nodes: it appends new nodes
and returns a handle to the result. Raw numbers are lifted to leaves in the
graph of the other operand, or the default graph when there is none.
"""

from __future__ import annotations

import operator
from typing import Callable, Optional, Union

from tiny_autograd.graph.ir import Graph, Op
from tiny_autograd.graph.value import Scalar, Value

Operand = Union[Value, Scalar]


def lift(data: Scalar, label: Optional[str] = None, *, graph: Optional[Graph] = None) -> Value:
    """
    Create a leaf node holding ``data``.

    The leaf lives in ``graph``, or in the default graph when omitted; see
    ``Value.leaf`` for how long a graph retains its nodes.
    """
    return Value.leaf(data, label, graph=graph)


def _as_value(x: Operand) -> Value:
    if isinstance(x, Value):
        return x
    return Value.leaf(x, label=str(x))


def _binary(a: Operand, b: Operand, fn: Callable[[Operand, Operand], Value]) -> Value:
    if not isinstance(a, Value) and not isinstance(b, Value):
        a = _as_value(a)
    return fn(a, b)


def add(a: Operand, b: Operand) -> Value:
    return _binary(a, b, operator.add)


def subtract(a: Operand, b: Operand) -> Value:
    return _binary(a, b, operator.sub)


def multiply(a: Operand, b: Operand) -> Value:
    return _binary(a, b, operator.mul)


def divide(a: Operand, b: Operand) -> Value:
    return _binary(a, b, operator.truediv)


def negate(x: Operand) -> Value:
    return -_as_value(x)


def power(x: Operand, exponent: Scalar) -> Value:
    base = _as_value(x)
    result = base.__pow__(exponent)
    if result is NotImplemented:
        raise TypeError(
            f"Exponent must be a real constant, got {type(exponent).__name__!r}."
        )
    return result


def inverse(x: Operand) -> Value:
    return Value.apply(Op.INV, _as_value(x))


def rectify(x: Operand) -> Value:
    return Value.apply(Op.RELU, _as_value(x))


relu = rectify


def exp(x: Operand) -> Value:
    return Value.apply(Op.EXP, _as_value(x))
