"""
PyTorch integration for tiny-autograd.

Exports:
- `torch_reference_gradients`: reference gradients from torch.autograd.
"""

from .reference import torch_reference_gradients

__all__ = ["torch_reference_gradients"]
