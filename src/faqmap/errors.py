# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""FAQ Map exception hierarchy.

The extraction core never raises: a document with nothing to extract yields
an empty list. These errors belong to the host layer (guards, config, CLI)
and all inherit from FaqMapError.
"""

from __future__ import annotations


class FaqMapError(Exception):
    """Base exception for all FAQ Map errors."""


class ConfigError(FaqMapError):
    """Invalid extractor configuration (bad FAQMAP_* value or out-of-range limit)."""

    def __init__(self, message: str, *, key: str = "") -> None:
        super().__init__(message)
        self.key = key


class ResourceExhaustionError(FaqMapError):
    """Input exceeds resource limits (HTML size)."""

    def __init__(self, message: str, *, size: int = 0, limit: int = 0) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit
