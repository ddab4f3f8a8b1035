"""
Operator library: forward evaluation and local gradient rules per node tag.
"""

from .forward import FORWARD, evaluate
from .rules import GRADIENT_RULES, propagate

__all__ = ["FORWARD", "evaluate", "GRADIENT_RULES", "propagate"]
