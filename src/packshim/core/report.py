from __future__ import annotations

"""
Run-scoped diagnostics accounting.

A single DiagnosticsCounters instance is created per build and handed to
every rewrite stage; it is read once by the finisher to print the summary,
including the time spent in the rewrite and shrink stages.
"""

import time
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class DiagnosticsCounters:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None

    module_count: int = 0
    total_raw_bytes: int = 0

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {
            "rewrite": 0.0,
            "shrink": 0.0,
        }
    )

    def record_module(self, raw_size: int) -> None:
        self.module_count += 1
        self.total_raw_bytes += int(raw_size)

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds

    def stage_ms(self) -> Dict[str, int]:
        return {stage: int(seconds * 1000) for stage, seconds in self.time_by_stage.items()}

    def finish(self) -> None:
        self.finished_at = time.perf_counter()

    def elapsed_ms(self) -> int:
        end = self.finished_at if self.finished_at is not None else time.perf_counter()
        return int((end - self.started_at) * 1000)


class StageTimer:
    def __init__(self, counters: DiagnosticsCounters, stage: str):
        self._counters = counters
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._counters.add_time(self._stage, time.perf_counter() - self._t0)
        return False
