"""
Miscellaneous utilities shared across tiny-autograd.
"""

from .logging import logger
from .config import AutogradConfig, config

__all__ = ["logger", "config", "AutogradConfig"]
