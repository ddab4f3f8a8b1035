"""
Forward evaluation for each node tag.

All arithmetic runs on numpy float64 with floating-point warnings silenced,
so division by zero, overflow and domain errors surface as inf/nan values
instead of Python exceptions.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

import numpy as np

from tiny_autograd.graph.ir import Op

ForwardFn = Callable[[Sequence[float], Optional[float]], float]


def _add(xs: Sequence[float], _: Optional[float]) -> float:
    return float(np.float64(xs[0]) + np.float64(xs[1]))


def _mul(xs: Sequence[float], _: Optional[float]) -> float:
    return float(np.float64(xs[0]) * np.float64(xs[1]))


def _neg(xs: Sequence[float], _: Optional[float]) -> float:
    return float(-np.float64(xs[0]))


def _pow(xs: Sequence[float], exponent: Optional[float]) -> float:
    return float(np.power(np.float64(xs[0]), np.float64(exponent)))


def _inv(xs: Sequence[float], _: Optional[float]) -> float:
    return float(np.float64(1.0) / np.float64(xs[0]))


def _relu(xs: Sequence[float], _: Optional[float]) -> float:
    return float(np.maximum(np.float64(0.0), np.float64(xs[0])))


def _exp(xs: Sequence[float], _: Optional[float]) -> float:
    return float(np.exp(np.float64(xs[0])))


FORWARD: Dict[Op, ForwardFn] = {
    Op.ADD: _add,
    Op.MUL: _mul,
    Op.NEG: _neg,
    Op.POW: _pow,
    Op.INV: _inv,
    Op.RELU: _relu,
    Op.EXP: _exp,
}


def evaluate(op: Op, operands: Sequence[float], exponent: Optional[float] = None) -> float:
    """Compute the forward value of ``op`` applied to operand values."""
    fn = FORWARD[op]
    with np.errstate(all="ignore"):
        return fn(operands, exponent)
