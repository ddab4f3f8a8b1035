from __future__ import annotations

import os
import random
from typing import Iterator

import numpy as np
import pytest

from tiny_autograd.graph.ir import Graph

DEFAULT_SEED = int(os.getenv("TINY_AUTOGRAD_SEED", "1234"))


def pytest_configure(config) -> None:  # pylint: disable=unused-argument
    random.seed(DEFAULT_SEED)
    np.random.seed(DEFAULT_SEED)

    try:
        import torch

        torch.manual_seed(DEFAULT_SEED)
    except ModuleNotFoundError:
        pass


@pytest.fixture
def graph() -> Iterator[Graph]:
    """Fresh graph installed as the default for the duration of a test."""
    g = Graph(name="test")
    with g.as_default():
        yield g


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(DEFAULT_SEED)
