# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import faqmap  # noqa: F401
except ImportError:
    raise ImportError("faqmap is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog

from faqmap.config import ExtractorConfig


@pytest.fixture
def config() -> ExtractorConfig:
    return ExtractorConfig()


@pytest.fixture
def reports():
    """Collecting reporter: pass ``reports.append`` to extract_faq and inspect afterwards."""
    return []


@pytest.fixture
def reset_logging():
    """Restore root logging + structlog defaults around tests that call configure()."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()
