# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""FAQ Map: question/answer extraction from author-supplied HTML.

Turns a raw article body into a deduplicated list of FAQ items:
- seven independent strategies (plugin blocks, <dl>, FAQ headings, accordions, inline Q:/A:)
- aggregation with length filter, case-insensitive dedup and a 20-item cap
- schema.org FAQPage decision for the structured-data layer
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FAQItem:
    """A single question/answer pair extracted from a document."""

    question: str
    answer: str

    def to_dict(self) -> dict[str, str]:
        return {"question": self.question, "answer": self.answer}

    def __str__(self) -> str:
        return f"Q: {self.question}\nA: {self.answer}"
