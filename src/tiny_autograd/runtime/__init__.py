"""
Runtime support for differentiating expression graphs.

This layer is responsible for:
- Resetting and ordering the subgraph reachable from a root.
- Replaying gradient rules in reverse topological order.
- Optional profiling of backward passes.
"""

from .backward import backward, zero_grad
from .profiling import Profiler, ProfileStats

__all__ = [
    "backward",
    "zero_grad",
    "Profiler",
    "ProfileStats",
]
