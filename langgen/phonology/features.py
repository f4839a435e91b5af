#!/usr/bin/env python3
"""
Phonological Features
=====================
Categorical features for consonants and vowels.

Every feature is an IntEnum whose zero member, UNSPECIFIED, acts as a
wildcard when a phoneme is used as a pattern.

Feature values serialise as lower-case dashed names:
    ConsonantPlace.POST_ALVEOLAR  <->  "post-alveolar"
    VowelHeight.NEAR_CLOSE        <->  "near-close"
"""

from enum import IntEnum


class Feature(IntEnum):
    """Base class for phoneme features with string conversion."""

    @property
    def label(self) -> str:
        return self.name.lower().replace('_', '-')

    @classmethod
    def from_label(cls, value):
        """Parse a dashed label (or an existing member) into a feature value."""
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls(0)
        key = str(value).strip().upper().replace('-', '_').replace(' ', '_')
        try:
            return cls[key]
        except KeyError:
            valid = ', '.join(m.label for m in cls if m.value)
            raise ValueError(f"Unknown {cls.__name__} '{value}'. Valid values: {valid}") from None


# =============================================================================
# Consonant Features
# =============================================================================

class ConsonantPlace(Feature):
    UNSPECIFIED = 0
    BILABIAL = 1
    LABIO_DENTAL = 2
    DENTAL = 3
    ALVEOLAR = 4
    POST_ALVEOLAR = 5
    RETROFLEX = 6
    PALATAL = 7
    VELAR = 8
    UVULAR = 9
    PHARYNGEAL = 10
    GLOTTAL = 11


class ConsonantManner(Feature):
    UNSPECIFIED = 0
    NASAL = 1
    STOP = 2
    AFFRICATE = 3
    FRICATIVE = 4
    APPROXIMANT = 5
    TAP = 6
    TRILL = 7
    CLICK = 8


class ConsonantCoarticulation(Feature):
    """Secondary articulation, like palatalization or pharyngealization."""
    UNSPECIFIED = 0
    NONE = 1
    LABIAL = 2
    PALATAL = 3
    VELAR = 4
    PHARYNGEAL = 5
    PRENASAL = 6


class ConsonantNonPulmonic(Feature):
    UNSPECIFIED = 0
    PULMONIC = 1
    EJECTIVE = 2
    IMPLOSIVE = 3
    VELARIC = 4


class ConsonantVoicing(Feature):
    UNSPECIFIED = 0
    UNVOICED = 1
    VOICED = 2
    PREVOICED = 3


class ConsonantAspiration(Feature):
    UNSPECIFIED = 0
    UNASPIRATED = 1
    ASPIRATED = 2


class ConsonantLaterality(Feature):
    UNSPECIFIED = 0
    CENTRAL = 1
    LATERAL = 2


class ConsonantSibilance(Feature):
    UNSPECIFIED = 0
    NONSIBILANT = 1
    SIBILANT = 2


class ConsonantGemination(Feature):
    UNSPECIFIED = 0
    SINGLETON = 1
    GEMINATE = 2


# =============================================================================
# Vowel Features
# =============================================================================

class VowelHeight(Feature):
    UNSPECIFIED = 0
    CLOSE = 1
    NEAR_CLOSE = 2
    CLOSE_MID = 3
    MID = 4
    OPEN_MID = 5
    NEAR_OPEN = 6
    OPEN = 7


class VowelFrontness(Feature):
    UNSPECIFIED = 0
    FRONT = 1
    CENTRAL = 2
    BACK = 3


class VowelPhonation(Feature):
    """Voice quality: modal, devoiced, creaky, breathy."""
    UNSPECIFIED = 0
    MODAL = 1
    DEVOICED = 2
    CREAKY = 3
    BREATHY = 4


class VowelRounding(Feature):
    UNSPECIFIED = 0
    ROUNDED = 1
    UNROUNDED = 2


class VowelNasality(Feature):
    UNSPECIFIED = 0
    ORAL = 1
    NASAL = 2


class VowelLength(Feature):
    UNSPECIFIED = 0
    SHORT = 1
    LONG = 2
    EXTRA_SHORT = 3
    EXTRA_LONG = 4


__all__ = [
    'Feature',
    'ConsonantPlace',
    'ConsonantManner',
    'ConsonantCoarticulation',
    'ConsonantNonPulmonic',
    'ConsonantVoicing',
    'ConsonantAspiration',
    'ConsonantLaterality',
    'ConsonantSibilance',
    'ConsonantGemination',
    'VowelHeight',
    'VowelFrontness',
    'VowelPhonation',
    'VowelRounding',
    'VowelNasality',
    'VowelLength',
]
