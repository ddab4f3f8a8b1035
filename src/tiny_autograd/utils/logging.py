"""
Package logger. Library code never configures handlers beyond a NullHandler.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger("tiny_autograd")
logger.addHandler(logging.NullHandler())

_level = os.getenv("TINY_AUTOGRAD_LOG_LEVEL")
if _level:
    logger.setLevel(_level.upper())
