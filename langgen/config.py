#!/usr/bin/env python3
"""
Generation Configuration
========================
Session-level settings. Fields left as None are filled from the
``generation`` section of app.yaml.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .phonotactics.length import WordLength
from .settings import get_setting


@dataclass
class GenerationConfig:
    """Defaults for a generation session."""

    count: Optional[int] = None                  # Words per run
    syllable_marker: Optional[str] = None        # Joins syllables in rendered words
    language: Optional[str] = None               # Bundled language name or file path

    # Word length categories
    min_length: Optional[WordLength] = None
    median_length: Optional[WordLength] = None
    max_length: Optional[WordLength] = None

    # Presets applied before a language's own presets and rules
    presets: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        cfg = get_setting("generation", {}) or {}
        lengths = cfg.get("word_length", {}) or {}
        if self.count is None:
            self.count = cfg.get("count")
        if self.syllable_marker is None:
            self.syllable_marker = cfg.get("syllable_marker")
        if self.language is None:
            self.language = cfg.get("language")
        if self.min_length is None:
            self.min_length = lengths.get("min")
        if self.median_length is None:
            self.median_length = lengths.get("median")
        if self.max_length is None:
            self.max_length = lengths.get("max")
        if self.presets is None:
            self.presets = dict(cfg.get("presets") or {})

        missing = [
            name for name, value in (
                ("count", self.count),
                ("syllable_marker", self.syllable_marker),
                ("word_length.min", self.min_length),
                ("word_length.median", self.median_length),
                ("word_length.max", self.max_length),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"generation settings must be set in app.yaml: {', '.join(missing)}")

        self.count = int(self.count)
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        self.min_length = WordLength.from_label(self.min_length)
        self.median_length = WordLength.from_label(self.median_length)
        self.max_length = WordLength.from_label(self.max_length)
