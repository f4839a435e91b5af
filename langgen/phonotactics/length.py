#!/usr/bin/env python3
"""
Word Length
===========
Samples a syllable count from three length categories (min, median, max).

The median category sets the centre; the min and max categories pull the
result down and up. Each adjustment is the truncated minimum of two
uniform draws, which skews it towards zero.
"""

from enum import IntEnum

from ..entropy import new_rng


class WordLength(IntEnum):
    UNSPECIFIED = 0
    MONOSYLLABIC = 1
    SHORT = 2
    MEDIUM = 3
    LONG = 4
    X_LONG = 5
    XX_LONG = 6

    @property
    def syllables(self) -> int:
        return _SYLLABLES[self]

    @classmethod
    def from_label(cls, value) -> "WordLength":
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.UNSPECIFIED
        if isinstance(value, int):
            return cls(value)
        key = str(value).strip().upper().replace('-', '_').replace(' ', '_')
        key = {'MONO': 'MONOSYLLABIC', 'XLONG': 'X_LONG', 'XXLONG': 'XX_LONG'}.get(key, key)
        try:
            return cls[key]
        except KeyError:
            valid = ', '.join(m.name.lower().replace('_', '-') for m in cls)
            raise ValueError(f"Unknown word length '{value}'. Valid values: {valid}") from None


_SYLLABLES = {
    WordLength.UNSPECIFIED: 1,
    WordLength.MONOSYLLABIC: 1,
    WordLength.SHORT: 2,
    WordLength.MEDIUM: 3,
    WordLength.LONG: 6,
    WordLength.X_LONG: 10,
    WordLength.XX_LONG: 15,
}


def _skewed(rng, upper: int) -> int:
    a = rng.random() * upper
    b = rng.random() * upper
    return int(min(a, b))


def get_word_length(min_length=WordLength.MONOSYLLABIC, median=WordLength.SHORT,
                    max_length=WordLength.MEDIUM, rng=None) -> int:
    """Sample a syllable count (always >= 1)."""
    rng = rng or new_rng()
    low = WordLength.from_label(min_length).syllables
    mid = WordLength.from_label(median).syllables
    high = WordLength.from_label(max_length).syllables

    n = mid + _skewed(rng, mid // 2 + 1) - _skewed(rng, mid // 2 + 1)
    n = n - _skewed(rng, low) + _skewed(rng, high)
    return max(1, n)
