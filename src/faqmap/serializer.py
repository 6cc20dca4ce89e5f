# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""FAQ result serialization.

Three output formats:
- JSON: items + schema decision for programmatic consumption
- Script tag: the FAQPage JSON-LD ready to embed in a page head/body
- Text: numbered Q/A lines for terminals
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from faqmap import FAQItem
from faqmap.schema import SchemaDecision

# Escapes that keep a JSON payload from terminating or reshaping its <script> element
_SCRIPT_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def to_dict(decision: SchemaDecision) -> dict[str, Any]:
    return {
        "count": decision.count,
        "eligible": decision.eligible,
        "items": [item.to_dict() for item in decision.items],
        "jsonld": decision.jsonld,
    }


def to_json(decision: SchemaDecision, indent: int = 2) -> str:
    """Serialize a schema decision (items, eligibility, JSON-LD) to a JSON string."""
    return json.dumps(to_dict(decision), ensure_ascii=False, indent=indent)


def to_script_tag(jsonld: dict[str, Any] | None) -> str:
    """Render JSON-LD as an application/ld+json script element ("" when there is none)."""
    if jsonld is None:
        return ""
    payload = json.dumps(jsonld, ensure_ascii=False, separators=(",", ":"))
    for raw, escaped in _SCRIPT_ESCAPES:
        payload = payload.replace(raw, escaped)
    return f'<script type="application/ld+json">{payload}</script>'


def to_text(items: Sequence[FAQItem]) -> str:
    if not items:
        return "(no FAQ items)"
    blocks = [f"{i}. Q: {item.question}\n   A: {item.answer}" for i, item in enumerate(items, 1)]
    return "\n\n".join(blocks)
