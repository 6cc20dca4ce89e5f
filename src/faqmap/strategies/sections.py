# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Boundary-scoped strategies: "FAQ" heading sections and accordion wrappers.

Both capture an answer as "everything after the question marker until the
next marker of the same kind", using TextStream offsets. An unterminated
section runs to the end of its scope (document end or wrapper end); the
answer cap keeps that bounded.
"""

from __future__ import annotations

import re

from lxml import etree

from faqmap import FAQItem
from faqmap.config import ExtractorConfig
from faqmap.dom import TextStream, has_class_marker, heading_level
from faqmap.normalize import truncate_answer

# --- FAQ heading section ---

_FAQ_TITLE_RE = re.compile(r"(?:faqs?|frequently asked questions)", re.IGNORECASE)
_MAX_LABEL_LEVEL = 4  # h1-h4 can open a FAQ section; sub-headings are the next two levels
_SUBORDINATE_DEPTH = 2


def _find_faq_label(stream: TextStream) -> tuple[int, etree._Element] | None:
    """First heading whose whole text is FAQ / FAQs / Frequently Asked Questions."""
    for index, el in enumerate(stream.elements):
        level = heading_level(el)
        if level is None or level > _MAX_LABEL_LEVEL:
            continue
        if _FAQ_TITLE_RE.fullmatch(stream.text_of(el)):
            return index, el
    return None


def extract_faq_heading(html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    """Sub-headings under the first FAQ heading, each answered by the content up to the next one."""
    found = _find_faq_label(stream)
    if found is None:
        return []
    label_index, label = found
    level = heading_level(label)
    subordinate = range(level + 1, level + 1 + _SUBORDINATE_DEPTH)

    scope_end = stream.end_offset
    questions: list[etree._Element] = []
    for el in stream.elements[label_index + 1 :]:
        el_level = heading_level(el)
        if el_level is None:
            continue
        if el_level <= level:
            scope_end = stream.start(el)
            break
        if el_level in subordinate:
            questions.append(el)

    items: list[FAQItem] = []
    for i, heading in enumerate(questions):
        question = stream.text_of(heading)
        if not question:
            continue
        stop = stream.start(questions[i + 1]) if i + 1 < len(questions) else scope_end
        answer = truncate_answer(stream.text_between(stream.end(heading), stop), config.max_answer_len)
        if answer:
            items.append(FAQItem(question=question, answer=answer))
    return items


# --- Accordion / collapsible wrappers ---

_WRAPPER_MARKERS = ("faq", "accordion", "collapse")
_WRAPPER_TAGS = frozenset({"div", "section", "article", "details", "ul", "dl"})
_QUESTION_TAGS = frozenset({"h3", "h4", "button", "summary", "strong"})


def _is_wrapper(el: etree._Element) -> bool:
    if el.tag not in _WRAPPER_TAGS:
        return False
    return any(has_class_marker(el, marker) for marker in _WRAPPER_MARKERS)


def _is_question_candidate(el: etree._Element) -> bool:
    if not isinstance(el.tag, str):
        return False
    return el.tag in _QUESTION_TAGS or (el.get("role") or "").strip().lower() == "button"


def _question_candidates(wrapper: etree._Element) -> list[etree._Element]:
    """Candidate markers in document order, skipping ones nested inside an earlier candidate."""
    candidates: list[etree._Element] = []
    accepted: set[etree._Element] = set()
    for el in wrapper.iterdescendants():
        if not _is_question_candidate(el):
            continue
        if any(ancestor in accepted for ancestor in el.iterancestors()):
            continue
        candidates.append(el)
        accepted.add(el)
    return candidates


def extract_accordions(html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    """Heading/button/strong markers inside faq/accordion/collapse wrappers."""
    wrappers = list(stream.iter_elements(_is_wrapper))
    wrapper_set = set(wrappers)

    items: list[FAQItem] = []
    for wrapper in wrappers:
        # Only outermost wrappers; inner ones are covered by their ancestor's scan.
        if any(ancestor in wrapper_set for ancestor in wrapper.iterancestors()):
            continue

        candidates = _question_candidates(wrapper)
        wrapper_end = stream.end(wrapper)
        for i, marker in enumerate(candidates):
            question = stream.text_of(marker)
            if len(question) < config.min_question_len:
                continue
            stop = stream.start(candidates[i + 1]) if i + 1 < len(candidates) else wrapper_end
            answer = truncate_answer(stream.text_between(stream.end(marker), stop), config.max_answer_len)
            if len(answer) >= config.min_answer_len:
                items.append(FAQItem(question=question, answer=answer))
    return items
