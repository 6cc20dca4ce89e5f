# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""schema.org FAQPage decision.

A page qualifies for FAQ structured data only with two or more items. When
it does not, no object is built at all: ``jsonld is None`` is the signal.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from faqmap import FAQItem

SCHEMA_CONTEXT = "https://schema.org"
MIN_SCHEMA_ITEMS = 2


@dataclass(frozen=True, slots=True)
class SchemaDecision:
    """Hand-off record for the structured-data emitter."""

    items: tuple[FAQItem, ...]
    eligible: bool
    jsonld: dict[str, Any] | None

    @property
    def count(self) -> int:
        return len(self.items)


def is_eligible(items: Sequence[FAQItem]) -> bool:
    return len(items) >= MIN_SCHEMA_ITEMS


def _question_entity(item: FAQItem) -> dict[str, Any]:
    return {
        "@type": "Question",
        "name": item.question,
        "acceptedAnswer": {
            "@type": "Answer",
            "text": item.answer,
        },
    }


def build_faq_jsonld(items: Sequence[FAQItem]) -> dict[str, Any] | None:
    """Map items 1:1 into a FAQPage object, or None when not eligible."""
    if not is_eligible(items):
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [_question_entity(item) for item in items],
    }


def decide(items: Sequence[FAQItem]) -> SchemaDecision:
    frozen = tuple(items)
    jsonld = build_faq_jsonld(frozen)
    return SchemaDecision(items=frozen, eligible=jsonld is not None, jsonld=jsonld)
