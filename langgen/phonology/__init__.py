"""Phoneme feature model, IPA conversion and inventories."""

from .features import *  # noqa: F401,F403
from .features import __all__ as _features_all
from .phoneme import (
    Consonant,
    Vowel,
    WordBoundary,
    Phoneme,
    match,
    phoneme_from_dict,
    phoneme_from_spec,
)
from .ipa import (
    to_ipa,
    is_ipa_vowel,
    is_ipa_consonant,
    vowel_from_ipa,
    consonant_from_ipa,
    phoneme_from_ipa,
)
from .inventory import Inventory

__all__ = list(_features_all) + [
    'Consonant',
    'Vowel',
    'WordBoundary',
    'Phoneme',
    'match',
    'phoneme_from_dict',
    'phoneme_from_spec',
    'to_ipa',
    'is_ipa_vowel',
    'is_ipa_consonant',
    'vowel_from_ipa',
    'consonant_from_ipa',
    'phoneme_from_ipa',
    'Inventory',
]
