# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Stage timer for per-strategy latency reporting.

The extraction core has no cancellation of its own; the timer tells the host
where an invocation spent its time so it can enforce and tune its budget.
"""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(slots=True)
class StageRecord:
    name: str
    start_ns: int
    end_ns: int = 0


class PipelineTimer:
    """Track pipeline stage transitions for latency reporting."""

    __slots__ = ("_stages", "_current", "_start_ns")

    def __init__(self) -> None:
        self._stages: list[StageRecord] = []
        self._current: StageRecord | None = None
        self._start_ns: int = time.monotonic_ns()

    def stage(self, name: str) -> None:
        """End previous stage + start new stage."""
        now = time.monotonic_ns()
        if self._current is not None:
            self._current.end_ns = now
            self._stages.append(self._current)
        self._current = StageRecord(name=name, start_ns=now)

    def finalize(self) -> None:
        """End current stage. Call on success or error."""
        if self._current is not None:
            self._current.end_ns = time.monotonic_ns()
            self._stages.append(self._current)
            self._current = None

    @property
    def current_stage(self) -> str | None:
        return self._current.name if self._current else None

    def elapsed_per_stage(self) -> dict[str, float]:
        """Return {stage_name: elapsed_ms} for all stages (including current)."""
        now = time.monotonic_ns()
        result: dict[str, float] = {}
        for s in self._stages:
            result[s.name] = round((s.end_ns - s.start_ns) / 1e6, 3)
        if self._current is not None:
            result[self._current.name] = round((now - self._current.start_ns) / 1e6, 3)
        return result

    def total_ms(self) -> float:
        return round((time.monotonic_ns() - self._start_ns) / 1e6, 3)


def budget_report(elapsed_ms: dict[str, float], budget_ms: float) -> dict | None:
    """Structured diagnostic when an extraction overran *budget_ms*, else None."""
    total = round(sum(elapsed_ms.values()), 3)
    if total <= budget_ms:
        return None
    slowest = max(elapsed_ms, key=elapsed_ms.__getitem__) if elapsed_ms else "unknown"
    return {
        "error": "budget_exceeded",
        "budget_ms": budget_ms,
        "total_ms": total,
        "slowest_stage": slowest,
        "slowest_stage_ms": elapsed_ms.get(slowest, 0.0),
        "hint": hint_for_stage(slowest),
    }


def hint_for_stage(stage: str) -> str:
    hints = {
        "parse": "Document is very large or deeply nested. Lower the input size cap.",
        "accordion": "Many nested faq/accordion wrappers. Markup may be adversarial.",
        "faq_heading": "Very long FAQ section. Answers run to the end of the scope.",
        "inline_html": "Many Q:/A: markers in raw markup.",
        "inline_text": "Many Q:/A: markers in flattened text.",
    }
    return hints.get(stage, f"Most time spent in '{stage}' stage.")
