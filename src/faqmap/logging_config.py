# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""How faqmap's log records render, chosen once by the host (the CLI).

The extraction core logs through plain stdlib loggers and attaches its
structured data with ``extra=``: the extraction report, the schema decision
and the budget overrun. Only those fields are lifted into the event dict;
stray record attributes stay out of the output.

JSON lines keep every field as-is for log shipping. The console renderer
folds the per-strategy counts into one "name=count" string so a DEBUG line
stays readable.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# extra= keys of ExtractionReport.to_dict(), faq_schema.decision and budget_report()
RECORD_FIELDS: tuple[str, ...] = (
    "strategy_counts",
    "candidate_count",
    "final_count",
    "questions",
    "elapsed_ms",
    "total_ms",
    "source",
    "extracted_count",
    "eligible",
    "error",
    "budget_ms",
    "slowest_stage",
    "slowest_stage_ms",
    "hint",
)


def compact_strategy_counts(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render ``strategy_counts`` as "vendor_b=1 accordion=2", strategies with no candidates omitted."""
    counts = event_dict.get("strategy_counts")
    if isinstance(counts, dict):
        matched = [f"{name}={count}" for name, count in counts.items() if count]
        event_dict["strategy_counts"] = " ".join(matched) or "none"
    return event_dict


def configure(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        json_output: True for JSON lines (log shipping), False for the console.
        level: Root logger level (default INFO; unknown names fall back to INFO).
    """
    pre_chain: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(allow=RECORD_FIELDS),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        render: list = [structlog.processors.JSONRenderer()]
    else:
        render = [compact_strategy_counts, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *render],
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
