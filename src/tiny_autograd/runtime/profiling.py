"""
Lightweight profiling hooks for backward passes.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator


@dataclass
class ProfileStats:
    backward_passes: int = 0
    nodes_replayed: int = 0
    largest_pass: int = 0
    events: Dict[str, float] = field(default_factory=dict)


class Profiler:
    def __init__(self) -> None:
        self.stats = ProfileStats()

    def record_pass(self, num_nodes: int) -> None:
        self.stats.backward_passes += 1
        self.stats.nodes_replayed += num_nodes
        if num_nodes > self.stats.largest_pass:
            self.stats.largest_pass = num_nodes

    def record_event(self, name: str, duration_ms: float) -> None:
        self.stats.events[name] = self.stats.events.get(name, 0.0) + duration_ms

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_event(name, (time.perf_counter() - start) * 1000.0)

    def snapshot(self) -> ProfileStats:
        return self.stats
