"""
Global / experimental configuration flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class AutogradConfig:
    debug: bool = False
    gradcheck_eps: float = 1e-6
    gradcheck_tol: float = 1e-4

    @classmethod
    def from_env(cls) -> "AutogradConfig":
        return cls(
            debug=os.getenv("TINY_AUTOGRAD_DEBUG", "").strip().lower() in _TRUE,
            gradcheck_eps=float(os.getenv("TINY_AUTOGRAD_GRADCHECK_EPS", "1e-6")),
            gradcheck_tol=float(os.getenv("TINY_AUTOGRAD_GRADCHECK_TOL", "1e-4")),
        )


config = AutogradConfig.from_env()
