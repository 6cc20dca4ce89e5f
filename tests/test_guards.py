# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for the host-side HTML size guard."""

from __future__ import annotations

import logging

import pytest

from faqmap.errors import FaqMapError, ResourceExhaustionError
from faqmap.guards import check_html_size, html_size


class TestHtmlSize:
    def test_ascii(self):
        assert html_size("<p>abc</p>") == 10

    def test_multibyte_counts_bytes(self):
        assert html_size("é") == 2
        assert html_size("😀") == 4

    def test_lone_surrogate_counted(self):
        assert html_size("\ud800") == 3


class TestCheckHtmlSize:
    def test_under_limit_returns_size(self):
        assert check_html_size("x" * 100, limit=100) == 100

    def test_over_limit_raises(self, caplog):
        with caplog.at_level(logging.WARNING, logger="faqmap.guards"):
            with pytest.raises(ResourceExhaustionError) as exc_info:
                check_html_size("x" * 101, limit=100)
        assert exc_info.value.size == 101
        assert exc_info.value.limit == 100
        assert "exceeds" in str(exc_info.value)
        assert "Input guard triggered" in caplog.text

    def test_multibyte_pushes_over(self):
        with pytest.raises(ResourceExhaustionError):
            check_html_size("é" * 60, limit=100)

    def test_default_limit_allows_normal_pages(self):
        assert check_html_size("<html>" + "a" * 10_000 + "</html>") > 0

    def test_error_hierarchy(self):
        assert issubclass(ResourceExhaustionError, FaqMapError)
