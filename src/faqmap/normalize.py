# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Text normalization shared by every extraction strategy.

All functions are pure and total: malformed markup degrades to an empty or
near-empty string, never an exception. Entity decoding covers
exactly six named references; anything else stays literal.
"""

from __future__ import annotations

import re

_STYLE_OPEN_RE = re.compile(r"<style", re.IGNORECASE)
_STYLE_CLOSE_RE = re.compile(r"</style>", re.IGNORECASE)
_SCRIPT_OPEN_RE = re.compile(r"<script", re.IGNORECASE)
_SCRIPT_CLOSE_RE = re.compile(r"</script>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

# Applied in sequence, so "&amp;lt;" decodes all the way to "<".
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)

# "&" not starting one of the six known entities
_UNKNOWN_AMP_RE = re.compile(r"&(?!(?:nbsp|amp|quot|#39|lt|gt);)")

# Characters libxml2 refuses (C0 controls except \t \n \r)
_XML_INVALID_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs (including NBSP) to one space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _drop_blocks(html: str, open_re: re.Pattern[str], close_re: re.Pattern[str], replacement: str) -> str:
    """Replace every opener-to-closer block (a whole <style> element, say) with *replacement*.

    Forward scan only: once an opener has no ">" or no closer after it, no
    later opener can have one either, so the rest of the text is kept as is.
    """
    parts: list[str] = []
    pos = 0
    while True:
        opener = open_re.search(html, pos)
        if opener is None:
            break
        gt = html.find(">", opener.end())
        if gt == -1:
            break
        closer = close_re.search(html, gt + 1)
        if closer is None:
            break
        parts.append(html[pos : opener.start()])
        parts.append(replacement)
        pos = closer.end()
    if not parts:
        return html
    parts.append(html[pos:])
    return "".join(parts)


def _replace_tags(text: str) -> str:
    # Every tag ends at a ">", so matching stops at the last one.
    stop = text.rfind(">") + 1
    if not stop:
        return text
    return _TAG_RE.sub(" ", text[:stop]) + text[stop:]


def strip_html(html: str) -> str:
    """Drop <style>/<script> blocks, replace remaining tags with a space, collapse whitespace."""
    if not html:
        return ""
    text = _drop_blocks(html, _STYLE_OPEN_RE, _STYLE_CLOSE_RE, "")
    text = _drop_blocks(text, _SCRIPT_OPEN_RE, _SCRIPT_CLOSE_RE, "")
    return collapse_whitespace(_replace_tags(text))


def decode_entities(text: str) -> str:
    """Decode exactly &nbsp; &amp; &quot; &#39; &lt; &gt; (in that order)."""
    if not text:
        return ""
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def clean_text(html: str) -> str:
    """strip_html + decode_entities + final collapse/trim."""
    return collapse_whitespace(decode_entities(strip_html(html)))


def flatten_text(html: str) -> str:
    """Whole-document text: style/script blocks and tags become spaces, entities decoded."""
    if not html:
        return ""
    text = _drop_blocks(html, _STYLE_OPEN_RE, _STYLE_CLOSE_RE, " ")
    text = _drop_blocks(text, _SCRIPT_OPEN_RE, _SCRIPT_CLOSE_RE, " ")
    return collapse_whitespace(decode_entities(_replace_tags(text)))


def escape_unknown_entities(html: str) -> str:
    """Make every "&" outside the six known entities literal.

    Run before handing markup to a real parser so that the parser's own
    (complete) entity table cannot decode more than clean_text would.
    """
    if not html:
        return ""
    return _UNKNOWN_AMP_RE.sub("&amp;", html)


def remove_control_chars(html: str) -> str:
    """Remove control characters that an XML/HTML tree cannot hold."""
    if not html:
        return ""
    return _XML_INVALID_RE.sub("", html)


def truncate_answer(text: str, limit: int) -> str:
    """Hard-cap captured answer text at *limit* characters."""
    if len(text) > limit:
        text = text[:limit]
    return text.strip()
