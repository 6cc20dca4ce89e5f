# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""FAQ extraction engine: run every strategy, then filter, dedup and cap.

Pure with respect to process state: no I/O, no module-level mutable data.
The only failure mode is "nothing extracted", returned as an empty list.
Per-invocation observability goes to an injected reporter callable; the
default one logs an ``faq.extraction`` record at DEBUG.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from faqmap import FAQItem
from faqmap.config import ExtractorConfig
from faqmap.dom import TextStream
from faqmap.pipeline_timer import PipelineTimer
from faqmap.strategies import STRATEGIES, STRATEGY_NAMES, Strategy

logger = logging.getLogger(__name__)

DEDUP_KEY_SEPARATOR = "||"


@dataclass(frozen=True, slots=True)
class ExtractionReport:
    """Structured per-invocation record handed to the reporter."""

    strategy_counts: dict[str, int]
    candidate_count: int
    final_count: int
    questions: list[str]
    elapsed_ms: dict[str, float] = field(default_factory=dict)
    total_ms: float = 0.0

    @classmethod
    def empty(cls) -> ExtractionReport:
        return cls(
            strategy_counts=dict.fromkeys(STRATEGY_NAMES, 0),
            candidate_count=0,
            final_count=0,
            questions=[],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy_counts": dict(self.strategy_counts),
            "candidate_count": self.candidate_count,
            "final_count": self.final_count,
            "questions": list(self.questions),
            "elapsed_ms": dict(self.elapsed_ms),
            "total_ms": self.total_ms,
        }


Reporter = Callable[[ExtractionReport], None]


def log_report(report: ExtractionReport) -> None:
    """Default reporter: one DEBUG record with the report fields as extras."""
    logger.debug("faq.extraction", extra=report.to_dict())


def dedup_key(item: FAQItem) -> str:
    return f"{item.question.lower()}{DEDUP_KEY_SEPARATOR}{item.answer.lower()}"


def aggregate(candidates: Iterable[FAQItem], config: ExtractorConfig | None = None) -> list[FAQItem]:
    """Trim, drop short items, dedup case-insensitively (first wins), cap.

    Candidate order is preserved; trimming yields new items, never mutates.
    """
    cfg = config or ExtractorConfig()
    seen: set[str] = set()
    result: list[FAQItem] = []
    for candidate in candidates:
        question = candidate.question.strip()
        answer = candidate.answer.strip()
        if len(question) < cfg.min_question_len or len(answer) < cfg.min_answer_len:
            continue
        item = candidate if (question, answer) == (candidate.question, candidate.answer) else FAQItem(question, answer)
        key = dedup_key(item)
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
        if len(result) >= cfg.max_items:
            break
    return result


def _run_strategy(strategy: Strategy, html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    """Run one strategy; an unexpected failure counts as "no match"."""
    try:
        return strategy.extract(html, stream, config)
    except Exception:
        logger.warning("FAQ strategy %s failed; treating as no match", strategy.name, exc_info=True)
        return []


def _deliver(reporter: Reporter, report: ExtractionReport) -> None:
    try:
        reporter(report)
    except Exception:
        logger.warning("FAQ extraction reporter failed", exc_info=True)


def extract_faq(
    html: str,
    *,
    config: ExtractorConfig | None = None,
    reporter: Reporter | None = None,
    strategies: tuple[Strategy, ...] = STRATEGIES,
) -> list[FAQItem]:
    """Extract up to ``config.max_items`` FAQ items from raw HTML.

    Strategies run sequentially in *strategies* order (default: the
    documented priority). Never raises for any input string.
    """
    cfg = config or ExtractorConfig()
    report_to = reporter or log_report

    if not html or not html.strip():
        _deliver(report_to, ExtractionReport.empty())
        return []

    timer = PipelineTimer()
    timer.stage("parse")
    stream = TextStream.parse(html)

    counts: dict[str, int] = {}
    candidates: list[FAQItem] = []
    for strategy in strategies:
        timer.stage(strategy.name)
        found = _run_strategy(strategy, html, stream, cfg)
        counts[strategy.name] = len(found)
        candidates.extend(found)

    timer.stage("aggregate")
    items = aggregate(candidates, cfg)
    timer.finalize()

    _deliver(
        report_to,
        ExtractionReport(
            strategy_counts=counts,
            candidate_count=len(candidates),
            final_count=len(items),
            questions=[item.question for item in items],
            elapsed_ms=timer.elapsed_per_stage(),
            total_ms=timer.total_ms(),
        ),
    )
    return items
