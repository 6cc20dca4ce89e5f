# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Host-side input guards.

Pattern matching over adversarial markup can be superlinear, and the engine
cannot cancel itself; the host rejects oversized input before extraction.
"""

from __future__ import annotations

import logging

from faqmap.config import DEFAULT_MAX_HTML_BYTES
from faqmap.errors import ResourceExhaustionError

logger = logging.getLogger(__name__)


def html_size(raw_html: str) -> int:
    """UTF-8 byte size (lone surrogates counted, never rejected)."""
    return len(raw_html.encode("utf-8", errors="surrogatepass"))


def check_html_size(raw_html: str, limit: int = DEFAULT_MAX_HTML_BYTES) -> int:
    """Reject HTML exceeding *limit* bytes. Returns the measured size."""
    size = html_size(raw_html)
    if size > limit:
        logger.warning("Input guard triggered: html_size=%d limit=%d", size, limit)
        raise ResourceExhaustionError(
            f"HTML size {size:,} bytes exceeds {limit:,} byte limit.",
            size=size,
            limit=limit,
        )
    return size
