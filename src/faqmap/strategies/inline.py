# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Inline "Q: ... A: ..." prose, in raw markup and in flattened text.

Markers are located with a single finditer pass and the document is cut into
segments between consecutive Q markers; the A marker is then searched inside
each segment only. No pattern spans more than one segment, so the cost stays
linear in the document size.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from faqmap import FAQItem
from faqmap.config import ExtractorConfig
from faqmap.dom import TextStream
from faqmap.normalize import clean_text, flatten_text, truncate_answer

# Raw markup: optional <strong> wrapper, Q not glued to a word ("FAQ:" and "faq-item" don't count)
_HTML_Q_MARKER_RE = re.compile(r"(?:<strong[^<>]*>\s*)?(?<![\w-])Q\s*[:\-]\s*(?:</strong>)?", re.IGNORECASE)
_HTML_A_MARKER_RE = re.compile(r"(?:<strong[^<>]*>\s*)?(?<![\w-])A\s*[:\-]\s*(?:</strong>)?", re.IGNORECASE)

# Block break right before the A marker: <br>, </p>, </div> or newline, then an optional opener
_BREAK_BEFORE_RE = re.compile(
    r"(?:<br\s*/?>|</p>|</div>|\n)\s*(?:<(?:p|div)\b[^<>]*>\s*)?\Z",
    re.IGNORECASE,
)
_BREAK_LOOKBACK = 256

# Flattened text: markers start the text or follow whitespace
_TEXT_Q_MARKER_RE = re.compile(r"(?<!\S)Q\s*[:\-]\s*", re.IGNORECASE)
_TEXT_A_MARKER_RE = re.compile(r"(?<!\S)A\s*[:\-]\s*", re.IGNORECASE)


def _segments(text: str, marker_re: re.Pattern[str]) -> Iterator[str]:
    """Yield the text following each marker up to the next marker (or end of text)."""
    marks = list(marker_re.finditer(text))
    for i, mark in enumerate(marks):
        stop = marks[i + 1].start() if i + 1 < len(marks) else len(text)
        yield text[mark.end() : stop]


def _split_markup_segment(segment: str) -> tuple[str, str] | None:
    """Split at the first A marker that sits right after a block break."""
    for mark in _HTML_A_MARKER_RE.finditer(segment):
        before = segment[max(0, mark.start() - _BREAK_LOOKBACK) : mark.start()]
        if _BREAK_BEFORE_RE.search(before):
            return segment[: mark.start()], segment[mark.end() :]
    return None


def extract_inline_markup(html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    """Q:/A: pairs whose question and answer are separated by <br>, </p>, </div> or a newline."""
    items: list[FAQItem] = []
    for segment in _segments(html, _HTML_Q_MARKER_RE):
        split = _split_markup_segment(segment)
        if split is None:
            continue
        raw_question, raw_answer = split
        question = clean_text(raw_question)
        answer = truncate_answer(clean_text(raw_answer), config.max_answer_len)
        if question and answer:
            items.append(FAQItem(question=question, answer=answer))
    return items


def extract_inline_text(html: str, stream: TextStream, config: ExtractorConfig) -> list[FAQItem]:
    """Q:/A: pairs found purely by marker literals in the tag-stripped text."""
    text = flatten_text(html)
    if not text:
        return []

    items: list[FAQItem] = []
    for segment in _segments(text, _TEXT_Q_MARKER_RE):
        mark = _TEXT_A_MARKER_RE.search(segment)
        if mark is None:
            continue
        question = segment[: mark.start()].strip()
        answer = truncate_answer(segment[mark.end() :], config.max_answer_len)
        if question and answer:
            items.append(FAQItem(question=question, answer=answer))
    return items
