#!/usr/bin/env python3
"""
Phoneme Inventory
=================
The set of consonants and vowels a language uses, built from IPA strings.

Usage:
    inv = Inventory.from_ipa(["p", "t", "k", "a", "i", "u", "t"])
    inv.to_ipa()   # {'consonants': ['p', 't', 'k'], 'vowels': ['a', 'i', 'u']}
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .ipa import is_ipa_vowel, phoneme_from_ipa, to_ipa
from .phoneme import Consonant, Vowel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Inventory:
    """Ordered, duplicate-free consonant and vowel lists."""
    consonants: Tuple[Consonant, ...] = ()
    vowels: Tuple[Vowel, ...] = ()

    @classmethod
    def from_ipa(cls, symbols: Iterable[str]) -> "Inventory":
        """
        Build an inventory from IPA strings.

        Duplicates keep their first position. Symbols that do not parse
        are logged and skipped.
        """
        consonants: List[Consonant] = []
        vowels: List[Vowel] = []

        for symbol in symbols:
            try:
                phoneme = phoneme_from_ipa(symbol)
            except ValueError as e:
                logger.warning(f"Skipping inventory symbol: {e}")
                continue

            bucket = vowels if is_ipa_vowel(symbol.strip()) else consonants
            if phoneme not in bucket:
                bucket.append(phoneme)

        logger.debug(f"Inventory: {len(consonants)} consonants, {len(vowels)} vowels")
        return cls(consonants=tuple(consonants), vowels=tuple(vowels))

    def __len__(self) -> int:
        return len(self.consonants) + len(self.vowels)

    def to_ipa(self) -> Dict[str, List[str]]:
        return {
            'consonants': [to_ipa(c) for c in self.consonants],
            'vowels': [to_ipa(v) for v in self.vowels],
        }
