"""
Framework integration entry points.

Subpackages:
- `torch`: PyTorch cross-checking (torch is imported lazily).
"""

from . import torch as torch_integration  # noqa: F401

__all__ = ["torch_integration"]
