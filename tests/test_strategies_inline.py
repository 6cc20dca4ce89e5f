# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for inline Q:/A: prose (markup-separated and flattened)."""

from __future__ import annotations

import time

import pytest

from faqmap import FAQItem
from faqmap.strategies.inline import extract_inline_markup, extract_inline_text

from tests._faq_samples import run


class TestInlineMarkup:
    def test_br_separated(self):
        html = "<p>Q: What sizes of trucks do you have?<br>A: Sixteen and twenty six foot trucks.</p>"
        assert run(extract_inline_markup, html) == [
            FAQItem("What sizes of trucks do you have?", "Sixteen and twenty six foot trucks."),
        ]

    def test_paragraph_pairs_with_strong_markers(self):
        html = (
            "<p><strong>Q:</strong> Do you store furniture?</p>\n"
            "<p><strong>A:</strong> Yes, in climate controlled units.</p>\n"
            "<p><strong>Q:</strong> Is storage insured?</p>\n"
            "<p><strong>A:</strong> Up to ten thousand dollars.</p>"
        )
        assert run(extract_inline_markup, html) == [
            FAQItem("Do you store furniture?", "Yes, in climate controlled units."),
            FAQItem("Is storage insured?", "Up to ten thousand dollars."),
        ]

    @pytest.mark.parametrize("brk", ["<br>", "<br/>", "<br />", "</p>", "</div>", "\n"])
    def test_break_kinds(self, brk):
        html = f"Q: How early do crews arrive?{brk}A: Between eight and nine."
        assert run(extract_inline_markup, html) == [FAQItem("How early do crews arrive?", "Between eight and nine.")]

    def test_dash_separator(self):
        html = "<p>Q - Do you move offices?</p><p>A - Yes, after hours too.</p>"
        assert run(extract_inline_markup, html) == [FAQItem("Do you move offices?", "Yes, after hours too.")]

    def test_no_break_no_match(self):
        assert run(extract_inline_markup, "<p>Q: Same line question? A: Same line answer.</p>") == []

    def test_question_without_answer_skipped(self):
        html = "<p>Q: Is this answered?</p><p>Q: Is this one answered?</p><p>A: Only the second one.</p>"
        assert run(extract_inline_markup, html) == [FAQItem("Is this one answered?", "Only the second one.")]

    def test_marker_glued_to_word_ignored(self):
        assert run(extract_inline_markup, "<p>FAQ: read this first<br>A: nothing to see here</p>") == []

    def test_answer_ends_at_next_question(self):
        html = "Q: First question here?<br>A: First answer text.<br>Q: Second question here?<br>A: Second answer."
        items = run(extract_inline_markup, html)
        assert [item.answer for item in items] == ["First answer text.", "Second answer."]

    def test_entities_decoded(self):
        html = "<p>Q: Do you move R&amp;D labs?</p><p>A: Yes &nbsp;with &quot;care&quot;.</p>"
        assert run(extract_inline_markup, html) == [FAQItem("Do you move R&D labs?", 'Yes with "care".')]

    def test_answer_capped(self):
        html = f"<p>Q: Why so long?</p><p>A: {'z' * 3000}</p>"
        assert len(run(extract_inline_markup, html)[0].answer) == 2500

    def test_unclosed_openers_before_markers_stay_fast(self):
        html = "<p>Q: Where does this start?" + "\n<p A: " * 20_000
        start = time.perf_counter()
        assert run(extract_inline_markup, html) == []
        assert time.perf_counter() - start < 5.0


class TestInlineText:
    def test_flattened_pairs(self):
        html = "Q: Why red? A: Because stop signs. Q: Why blue? A: Because sky."
        assert run(extract_inline_text, html) == [
            FAQItem("Why red?", "Because stop signs."),
            FAQItem("Why blue?", "Because sky."),
        ]

    def test_markup_is_flattened(self):
        html = "<div><b>Q:</b> Do you rent dollies?</div><div><b>A:</b> Yes, ten dollars a day.</div>"
        assert run(extract_inline_text, html) == [FAQItem("Do you rent dollies?", "Yes, ten dollars a day.")]

    def test_lowercase_markers(self):
        assert run(extract_inline_text, "q: Lowercase works too? a: It does indeed.") == [
            FAQItem("Lowercase works too?", "It does indeed."),
        ]

    def test_missing_answer_marker(self):
        assert run(extract_inline_text, "Q: Nobody answered this one?") == []

    def test_marker_glued_to_word_ignored(self):
        assert run(extract_inline_text, "See our FAQ: it has a list of answers. A: not a pair") == []

    def test_script_text_ignored(self):
        html = "<script>var s = 'Q: hidden question A: hidden answer';</script><p>Nothing here.</p>"
        assert run(extract_inline_text, html) == []

    def test_empty(self):
        assert run(extract_inline_text, "") == []
