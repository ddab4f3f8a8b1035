"""
Replay a scalar graph with PyTorch autograd to obtain reference gradients.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from tiny_autograd.graph.ir import Op
from tiny_autograd.graph.topo import topological_indices
from tiny_autograd.graph.value import Value

TorchOpFn = Callable[[Any, List[Any], Optional[float]], Any]

_TORCH_OPS: Dict[Op, TorchOpFn] = {
    Op.ADD: lambda torch, xs, _: xs[0] + xs[1],
    Op.MUL: lambda torch, xs, _: xs[0] * xs[1],
    Op.NEG: lambda torch, xs, _: -xs[0],
    Op.POW: lambda torch, xs, n: torch.pow(xs[0], n),
    Op.INV: lambda torch, xs, _: torch.reciprocal(xs[0]),
    Op.RELU: lambda torch, xs, _: torch.relu(xs[0]),
    Op.EXP: lambda torch, xs, _: torch.exp(xs[0]),
}


def torch_reference_gradients(root: Value) -> Dict[int, float]:
    """
    Rebuild the subgraph reachable from ``root`` with float64 tensors and
    differentiate it with ``torch.autograd``.

    Returns:
        Mapping from node handle to d(root)/d(node) for every reachable node.
        Does not touch the gradients stored in the graph.
    """
    try:
        import torch
    except ModuleNotFoundError as exc:  # pragma: no cover - handled in tests
        raise ModuleNotFoundError(
            "torch_reference_gradients requires PyTorch to be installed."
        ) from exc

    graph = root.graph
    tensors: Dict[int, Any] = {}
    for idx in topological_indices(graph, root.index):
        node = graph.nodes[idx]
        if node.is_leaf():
            tensor = torch.tensor(node.value, dtype=torch.float64, requires_grad=True)
        else:
            args = [tensors[child] for child in node.children]
            tensor = _TORCH_OPS[node.op](torch, args, node.exponent)
            tensor.retain_grad()
        tensors[idx] = tensor

    tensors[root.index].backward()

    return {
        idx: float(tensor.grad) if tensor.grad is not None else 0.0
        for idx, tensor in tensors.items()
    }
