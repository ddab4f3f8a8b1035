"""
Diagnostics for scalar expression graphs.

Key responsibilities:
- Verify analytic gradients against central finite differences.
- Summarise graph structure (depth, fan-out, shared subexpressions).
"""

from .gradcheck import GradCheckReport, analytic_gradient, gradcheck, numeric_gradient
from .structure import GraphSummary, summarize_graph

__all__ = [
    "GradCheckReport",
    "analytic_gradient",
    "gradcheck",
    "numeric_gradient",
    "GraphSummary",
    "summarize_graph",
]
