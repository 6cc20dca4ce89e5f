# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""lxml parse + flattened text stream for the tree-based strategies.

The document is parsed once and walked once. Every text node (element text
and tail) is appended to a flat list in document order; each element records
the list offset where it opens and where it closes. "Text between A and B"
is then a slice of that list, so boundary rules like "everything until the
next sub-heading" cost O(n) instead of a backtracking match over raw markup.

Joining slices with a single space mirrors strip_html, which replaces every
tag with a space.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import lxml.html
from lxml import etree

from faqmap.normalize import collapse_whitespace, escape_unknown_entities, remove_control_chars

logger = logging.getLogger(__name__)

# Elements whose text is never content
_SKIP_TEXT_TAGS = frozenset({"script", "style"})

_HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}


def heading_level(el: etree._Element) -> int | None:
    """Return 1-6 for <h1>-<h6>, else None."""
    tag = el.tag
    return _HEADING_LEVELS.get(tag) if isinstance(tag, str) else None


def has_class_marker(el: etree._Element, marker: str) -> bool:
    """True when the element's class attribute contains *marker* (case-insensitive substring)."""
    return marker in (el.get("class") or "").lower()


class TextStream:
    """Parsed document flattened into text offsets.

    An unparseable or empty document produces an empty stream: no elements,
    no text. Strategies running against it simply find nothing.
    """

    __slots__ = ("_texts", "_start", "_end", "_elements")

    def __init__(self, root: lxml.html.HtmlElement | None = None) -> None:
        self._texts: list[str] = []
        self._start: dict[etree._Element, int] = {}
        self._end: dict[etree._Element, int] = {}
        self._elements: list[etree._Element] = []
        if root is not None:
            self._index(root)

    @classmethod
    def parse(cls, html: str) -> TextStream:
        """Parse raw markup. Never raises; parser failures give an empty stream."""
        if not html or not html.strip():
            return cls()
        prepared = escape_unknown_entities(remove_control_chars(html))
        try:
            parser = lxml.html.HTMLParser(recover=True, encoding="utf-8")
            root = lxml.html.document_fromstring(prepared.encode("utf-8", errors="replace"), parser=parser)
        except (etree.LxmlError, ValueError) as e:
            logger.debug("HTML parse failed, tree strategies disabled: %s", e)
            return cls()
        return cls(root)

    def _index(self, root: etree._Element) -> None:
        # Iterative walk: deeply nested markup must not hit the recursion limit.
        texts = self._texts
        stack: list[tuple[etree._Element, bool]] = [(root, False)]
        while stack:
            el, closing = stack.pop()
            is_element = isinstance(el.tag, str)
            if closing:
                if is_element:
                    self._end[el] = len(texts)
                if el.tail:
                    texts.append(el.tail)
                continue

            if is_element:
                self._start[el] = len(texts)
                self._elements.append(el)
                if el.text and el.tag not in _SKIP_TEXT_TAGS:
                    texts.append(el.text)
            stack.append((el, True))
            if is_element:
                stack.extend((child, False) for child in reversed(el))

    # --- Offsets ---

    @property
    def elements(self) -> list[etree._Element]:
        """All elements in document order."""
        return self._elements

    @property
    def end_offset(self) -> int:
        return len(self._texts)

    def start(self, el: etree._Element) -> int:
        return self._start[el]

    def end(self, el: etree._Element) -> int:
        return self._end[el]

    # --- Text ---

    def text_between(self, start: int, stop: int) -> str:
        """Collapsed text of all nodes in [start, stop)."""
        if stop <= start:
            return ""
        return collapse_whitespace(" ".join(self._texts[start:stop]))

    def text_of(self, el: etree._Element) -> str:
        """Collapsed inner text of *el* (tail excluded)."""
        return self.text_between(self._start[el], self._end[el])

    # --- Lookup ---

    def iter_elements(self, predicate: Callable[[etree._Element], bool]) -> Iterator[etree._Element]:
        return (el for el in self._elements if predicate(el))

    def iter_by_tag(self, tag: str) -> Iterator[etree._Element]:
        return (el for el in self._elements if el.tag == tag)

    def first_descendant(
        self,
        scope: etree._Element,
        predicate: Callable[[etree._Element], bool],
    ) -> etree._Element | None:
        """First element below *scope* (document order) matching *predicate*."""
        for el in scope.iterdescendants():
            if isinstance(el.tag, str) and predicate(el):
                return el
        return None
