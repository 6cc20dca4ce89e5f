# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Extractor limits with FAQMAP_* environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .errors import ConfigError

DEFAULT_MIN_QUESTION_LEN = 8
DEFAULT_MIN_ANSWER_LEN = 8
DEFAULT_MAX_ANSWER_LEN = 2500
DEFAULT_MAX_ITEMS = 20
DEFAULT_MAX_HTML_BYTES = 5 * 1024 * 1024  # host-side input cap

_ENV_FIELDS = {
    "FAQMAP_MAX_ITEMS": "max_items",
    "FAQMAP_MAX_ANSWER_LEN": "max_answer_len",
    "FAQMAP_MAX_HTML_BYTES": "max_html_bytes",
}


@dataclass(frozen=True, slots=True)
class ExtractorConfig:
    """Immutable extraction limits.

    The defaults are the canonical limits: questions and answers need at least
    8 characters, answers are cut at 2500 when captured, at most 20 items survive.
    """

    min_question_len: int = DEFAULT_MIN_QUESTION_LEN
    min_answer_len: int = DEFAULT_MIN_ANSWER_LEN
    max_answer_len: int = DEFAULT_MAX_ANSWER_LEN
    max_items: int = DEFAULT_MAX_ITEMS
    max_html_bytes: int = DEFAULT_MAX_HTML_BYTES

    def __post_init__(self) -> None:
        for name in ("min_question_len", "min_answer_len"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be >= 1", key=name)
        for name in ("max_answer_len", "max_items", "max_html_bytes"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be positive", key=name)
        if self.max_answer_len < self.min_answer_len:
            raise ConfigError("max_answer_len must be >= min_answer_len", key="max_answer_len")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExtractorConfig:
        """Build a config from defaults plus FAQMAP_* overrides.

        Empty values are ignored; non-integer values raise ConfigError.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, int] = {}
        for env_key, field_name in _ENV_FIELDS.items():
            raw = env.get(env_key, "").strip()
            if not raw:
                continue
            try:
                overrides[field_name] = int(raw.replace("_", ""))
            except ValueError:
                raise ConfigError(f"{env_key} must be an integer, got {raw!r}", key=env_key) from None
        return replace(cls(), **overrides) if overrides else cls()
