# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Element-scoped strategies: plugin FAQ blocks and definition lists.

Plugin blocks are described by a VendorRule (block/question/answer class
markers) and run through one driver, so adding another plugin convention is
a table entry, not a new procedure.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from lxml import etree

from faqmap import FAQItem
from faqmap.config import ExtractorConfig
from faqmap.dom import TextStream, has_class_marker
from faqmap.normalize import truncate_answer

_QUESTION_FALLBACK_TAGS = frozenset({"h3", "h4"})
_ANSWER_FALLBACK_TAGS = ("p", "div")  # tried in this order


@dataclass(frozen=True, slots=True)
class VendorRule:
    """Class-name markers for one FAQ plugin's markup."""

    name: str
    block_marker: str
    question_marker: str
    answer_marker: str


# Yoast SEO FAQ block
VENDOR_A = VendorRule(
    name="vendor_a",
    block_marker="schema-faq-section",
    question_marker="schema-faq-question",
    answer_marker="schema-faq-answer",
)

# Rank Math FAQ block
VENDOR_B = VendorRule(
    name="vendor_b",
    block_marker="rank-math-list-item",
    question_marker="rank-math-question",
    answer_marker="rank-math-answer",
)


def _tag_is(tags: frozenset[str] | tuple[str, ...]) -> Callable[[etree._Element], bool]:
    return lambda el: el.tag in tags


def _pick_answer(
    stream: TextStream,
    block: etree._Element,
    rule: VendorRule,
    question_el: etree._Element | None,
) -> etree._Element | None:
    """Answer-class element, else first <p>, else first <div>.

    A fallback may never be the question element itself or one of its wrappers.
    """
    marked = stream.first_descendant(block, lambda el: has_class_marker(el, rule.answer_marker))
    if marked is not None:
        return marked

    excluded: set[etree._Element] = set()
    if question_el is not None:
        excluded.add(question_el)
        excluded.update(question_el.iterancestors())

    for tag in _ANSWER_FALLBACK_TAGS:
        found = stream.first_descendant(block, lambda el, tag=tag: el.tag == tag and el not in excluded)
        if found is not None:
            return found
    return None


def extract_vendor_blocks(rule: VendorRule, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    """One candidate per element whose class contains ``rule.block_marker``."""
    items: list[FAQItem] = []
    for block in stream.iter_elements(lambda el: has_class_marker(el, rule.block_marker)):
        question_el = stream.first_descendant(block, lambda el: has_class_marker(el, rule.question_marker))
        if question_el is None:
            question_el = stream.first_descendant(block, _tag_is(_QUESTION_FALLBACK_TAGS))
        answer_el = _pick_answer(stream, block, rule, question_el)
        if question_el is None or answer_el is None:
            continue

        question = stream.text_of(question_el)
        answer = truncate_answer(stream.text_of(answer_el), config.max_answer_len)
        if question and answer:
            items.append(FAQItem(question=question, answer=answer))
    return items


def extract_vendor_a(html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    return extract_vendor_blocks(VENDOR_A, stream, config)


def extract_vendor_b(html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    return extract_vendor_blocks(VENDOR_B, stream, config)


# --- <dl><dt>/<dd> ---


def _owned_by(dl: etree._Element, el: etree._Element) -> bool:
    """True when *dl* is the nearest <dl> ancestor of *el* (nested lists own their own terms)."""
    return next(el.iterancestors("dl"), None) is dl


def extract_definition_lists(html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    """Pair each list's <dt>/<dd> elements by position."""
    items: list[FAQItem] = []
    for dl in stream.iter_by_tag("dl"):
        terms = [stream.text_of(el) for el in dl.iterdescendants("dt") if _owned_by(dl, el)]
        definitions = [stream.text_of(el) for el in dl.iterdescendants("dd") if _owned_by(dl, el)]
        for question, definition in zip(terms, definitions):
            answer = truncate_answer(definition, config.max_answer_len)
            if question and answer:
                items.append(FAQItem(question=question, answer=answer))
    return items
