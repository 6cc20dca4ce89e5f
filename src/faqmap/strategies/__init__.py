# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Strategy table for FAQ extraction.

Each strategy scans the whole document for one authoring convention and
returns zero or more candidate FAQItems. STRATEGIES is the priority order:
the aggregator keeps the first occurrence of a duplicate pair, so moving an
entry changes which strategy's rendition of shared content survives.

Overlaps that the order resolves:
  - a Yoast block is also an accordion wrapper ("schema-faq" contains "faq")
  - FAQ-section sub-headings inside an accordion wrapper match both
  - "Q:/A:" prose separated by newlines matches both inline strategies
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from faqmap import FAQItem
from faqmap.config import ExtractorConfig
from faqmap.dom import TextStream

from .blocks import VENDOR_A, VENDOR_B, VendorRule, extract_definition_lists, extract_vendor_a, extract_vendor_b
from .inline import extract_inline_markup, extract_inline_text
from .sections import extract_accordions, extract_faq_heading

ExtractFn = Callable[[str, TextStream, ExtractorConfig], list[FAQItem]]


@dataclass(frozen=True, slots=True)
class Strategy:
    """One authoring convention: a name (used in reports) and its extractor."""

    name: str
    extract: ExtractFn
    description: str = ""


STRATEGIES: tuple[Strategy, ...] = (
    Strategy("vendor_a", extract_vendor_a, "Yoast FAQ block (schema-faq-section)"),
    Strategy("vendor_b", extract_vendor_b, "Rank Math FAQ block (rank-math-list-item)"),
    Strategy("definition_list", extract_definition_lists, "<dl> with positional <dt>/<dd> pairs"),
    Strategy("faq_heading", extract_faq_heading, "FAQ heading followed by sub-heading questions"),
    Strategy("accordion", extract_accordions, "faq/accordion/collapse wrappers"),
    Strategy("inline_html", extract_inline_markup, "Q:/A: prose split by block breaks"),
    Strategy("inline_text", extract_inline_text, "Q:/A: prose in flattened text"),
)

STRATEGY_NAMES: tuple[str, ...] = tuple(s.name for s in STRATEGIES)

__all__ = [
    "STRATEGIES",
    "STRATEGY_NAMES",
    "VENDOR_A",
    "VENDOR_B",
    "ExtractFn",
    "Strategy",
    "VendorRule",
]
