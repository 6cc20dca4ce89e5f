# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for faqmap.dom — lxml parse flattened into text offsets."""

from __future__ import annotations

import lxml.html
import pytest

from faqmap.dom import TextStream, has_class_marker, heading_level


class TestParse:
    @pytest.mark.parametrize("html", ["", "   ", "\n\t "])
    def test_blank_input_gives_empty_stream(self, html):
        stream = TextStream.parse(html)
        assert stream.elements == []
        assert stream.end_offset == 0

    def test_fragment_is_wrapped(self):
        stream = TextStream.parse("<p>Just a paragraph</p>")
        assert stream.elements[0].tag == "html"

    def test_null_bytes_do_not_break_parse(self):
        stream = TextStream.parse("<p>a\x00b</p>")
        p = next(stream.iter_by_tag("p"))
        assert stream.text_of(p) == "ab"

    def test_deep_nesting_does_not_raise(self):
        html = "<div>" * 3000 + "deep" + "</div>" * 3000
        stream = TextStream.parse(html)
        assert isinstance(stream.text_between(0, stream.end_offset), str)


class TestText:
    def test_inner_text_joins_with_spaces(self):
        stream = TextStream.parse("<div><p>Hello <b>big</b> world</p></div>")
        p = next(stream.iter_by_tag("p"))
        assert stream.text_of(p) == "Hello big world"

    def test_script_and_style_text_skipped(self):
        stream = TextStream.parse("<div>Visible<script>var x = 1;</script><style>p{}</style> text</div>")
        div = next(stream.iter_by_tag("div"))
        assert stream.text_of(div) == "Visible text"

    def test_comment_text_skipped_but_tail_kept(self):
        stream = TextStream.parse("<div>Before<!-- hidden -->After</div>")
        div = next(stream.iter_by_tag("div"))
        assert stream.text_of(div) == "Before After"

    def test_only_six_entities_decoded(self):
        stream = TextStream.parse("<p>&copy; 2024 &amp; &lt;b&gt;&nbsp;x</p>")
        p = next(stream.iter_by_tag("p"))
        assert stream.text_of(p) == "&copy; 2024 & <b> x"

    def test_text_between_headings(self):
        stream = TextStream.parse("<h3>First</h3><p>one</p><p>two</p><h3>Second</h3><p>three</p>")
        first, second = list(stream.iter_by_tag("h3"))
        assert stream.text_between(stream.end(first), stream.start(second)) == "one two"

    def test_text_between_inverted_range_is_empty(self):
        stream = TextStream.parse("<p>abc</p>")
        assert stream.text_between(5, 1) == ""

    def test_tail_excluded_from_text_of(self):
        stream = TextStream.parse("<div><span>inside</span> after</div>")
        span = next(stream.iter_by_tag("span"))
        assert stream.text_of(span) == "inside"


class TestLookup:
    def test_first_descendant_in_document_order(self):
        stream = TextStream.parse("<section><div><p>deep</p></div><p>shallow</p></section>")
        section = next(stream.iter_by_tag("section"))
        found = stream.first_descendant(section, lambda el: el.tag == "p")
        assert stream.text_of(found) == "deep"

    def test_first_descendant_none(self):
        stream = TextStream.parse("<section><p>x</p></section>")
        section = next(stream.iter_by_tag("section"))
        assert stream.first_descendant(section, lambda el: el.tag == "dl") is None

    def test_iter_elements_predicate(self):
        stream = TextStream.parse('<div class="a"></div><div class="b"></div>')
        assert len(list(stream.iter_elements(lambda el: el.get("class") == "b"))) == 1


class TestHelpers:
    def test_has_class_marker_case_insensitive_substring(self):
        el = lxml.html.fragment_fromstring('<div class="My-FAQ-Block"></div>')
        assert has_class_marker(el, "faq")
        assert not has_class_marker(el, "accordion")

    def test_has_class_marker_without_class(self):
        el = lxml.html.fragment_fromstring("<div></div>")
        assert not has_class_marker(el, "faq")

    @pytest.mark.parametrize(("tag", "level"), [("h1", 1), ("h4", 4), ("h6", 6), ("p", None)])
    def test_heading_level(self, tag, level):
        el = lxml.html.fragment_fromstring(f"<{tag}>x</{tag}>")
        assert heading_level(el) == level
