"""
Finite-difference verification of analytic gradients.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from tiny_autograd.graph.ir import Graph
from tiny_autograd.graph.value import Value
from tiny_autograd.runtime.backward import backward
from tiny_autograd.utils.config import config
from tiny_autograd.utils.logging import logger

ScalarFn = Callable[[List[Value]], Value]


@dataclass(frozen=True)
class GradCheckReport:
    analytic: np.ndarray
    numeric: np.ndarray
    max_abs_error: float
    passed: bool


def _evaluate(fn: ScalarFn, point: Sequence[float]) -> float:
    graph = Graph(name="gradcheck")
    with graph.as_default():
        leaves = [Value.leaf(float(x), f"x{i}", graph=graph) for i, x in enumerate(point)]
        return fn(leaves).value


def numeric_gradient(
    fn: ScalarFn,
    point: Sequence[float],
    eps: Optional[float] = None,
) -> np.ndarray:
    """
    Central-difference estimate of the gradient of ``fn`` at ``point``.

    ``fn`` receives one leaf per coordinate and must return the root value.
    """
    eps = config.gradcheck_eps if eps is None else eps
    base = np.asarray(point, dtype=np.float64)
    grads = np.zeros_like(base)
    for i in range(base.size):
        step = np.zeros_like(base)
        step[i] = eps
        upper = _evaluate(fn, base + step)
        lower = _evaluate(fn, base - step)
        grads[i] = (upper - lower) / (2.0 * eps)
    return grads


def analytic_gradient(fn: ScalarFn, point: Sequence[float]) -> np.ndarray:
    graph = Graph(name="gradcheck")
    with graph.as_default():
        leaves = [Value.leaf(float(x), f"x{i}", graph=graph) for i, x in enumerate(point)]
        root = fn(leaves)
        backward(root)
    return np.array([leaf.grad for leaf in leaves], dtype=np.float64)


def gradcheck(
    fn: ScalarFn,
    point: Sequence[float],
    *,
    eps: Optional[float] = None,
    tol: Optional[float] = None,
) -> GradCheckReport:
    """
    Compare ``backward`` gradients of ``fn`` with central differences.

    Args:
        fn: Builds the expression from a list of leaves.
        point: Coordinates at which to evaluate.
        eps: Finite-difference step; defaults to ``config.gradcheck_eps``.
        tol: Absolute and relative tolerance; defaults to ``config.gradcheck_tol``.
    """
    tol = config.gradcheck_tol if tol is None else tol
    analytic = analytic_gradient(fn, point)
    numeric = numeric_gradient(fn, point, eps)

    if analytic.size:
        max_abs_error = float(np.max(np.abs(analytic - numeric)))
    else:
        max_abs_error = 0.0
    passed = bool(np.allclose(analytic, numeric, rtol=tol, atol=tol))
    if not passed:
        logger.warning(
            "gradcheck failed at %s: analytic=%s numeric=%s",
            list(point),
            analytic.tolist(),
            numeric.tolist(),
        )

    return GradCheckReport(
        analytic=analytic,
        numeric=numeric,
        max_abs_error=max_abs_error,
        passed=passed,
    )
