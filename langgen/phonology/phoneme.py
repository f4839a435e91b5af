#!/usr/bin/env python3
"""
Phoneme Model
=============
A phoneme is one of three variants:

    Consonant     - 9 articulatory features
    Vowel         - 6 articulatory features
    WordBoundary  - sentinel marking the start or end of a word

Any feature left UNSPECIFIED is a wildcard, so the same classes describe
both concrete phonemes and patterns:

    Vowel(height=VowelHeight.CLOSE).match(vowel_from_ipa("i"))   # True
    Consonant().match(vowel_from_ipa("i"))                        # False

Patterns may be partial; candidates passed to match() should be concrete
(see ``is_concrete``).
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Union

from .features import (
    Feature,
    ConsonantPlace,
    ConsonantManner,
    ConsonantCoarticulation,
    ConsonantNonPulmonic,
    ConsonantVoicing,
    ConsonantAspiration,
    ConsonantLaterality,
    ConsonantSibilance,
    ConsonantGemination,
    VowelHeight,
    VowelFrontness,
    VowelPhonation,
    VowelRounding,
    VowelNasality,
    VowelLength,
)


class _FeatureBundle:
    """Shared behaviour for dataclasses made of Feature fields."""

    def __post_init__(self):
        # Accept labels and plain ints as well as enum members
        for f in fields(self):
            enum_cls = type(f.default)
            value = getattr(self, f.name)
            if not isinstance(value, enum_cls):
                if isinstance(value, int):
                    value = enum_cls(value)
                else:
                    value = enum_cls.from_label(value)
                object.__setattr__(self, f.name, value)

    @property
    def is_concrete(self) -> bool:
        """True when no feature is a wildcard."""
        return all(getattr(self, f.name) for f in fields(self))

    def _features_match(self, candidate) -> bool:
        for f in fields(self):
            wanted = getattr(self, f.name)
            if wanted and getattr(candidate, f.name) != wanted:
                return False
        return True

    def features(self) -> Dict[str, str]:
        """Specified features as {name: label}."""
        return {
            f.name: getattr(self, f.name).label
            for f in fields(self)
            if getattr(self, f.name)
        }

    @classmethod
    def _from_features(cls, data: Dict[str, Any]):
        names = {f.name for f in fields(cls)}
        unknown = set(data) - names
        if unknown:
            raise ValueError(
                f"Unknown {cls.__name__.lower()} feature(s): {', '.join(sorted(unknown))}"
            )
        return cls(**data)


@dataclass(frozen=True)
class Consonant(_FeatureBundle):
    """A consonant phoneme or consonant pattern."""
    place: ConsonantPlace = ConsonantPlace.UNSPECIFIED
    manner: ConsonantManner = ConsonantManner.UNSPECIFIED
    coarticulation: ConsonantCoarticulation = ConsonantCoarticulation.UNSPECIFIED
    non_pulmonic: ConsonantNonPulmonic = ConsonantNonPulmonic.UNSPECIFIED
    voicing: ConsonantVoicing = ConsonantVoicing.UNSPECIFIED
    aspiration: ConsonantAspiration = ConsonantAspiration.UNSPECIFIED
    laterality: ConsonantLaterality = ConsonantLaterality.UNSPECIFIED
    sibilance: ConsonantSibilance = ConsonantSibilance.UNSPECIFIED
    gemination: ConsonantGemination = ConsonantGemination.UNSPECIFIED

    def match(self, candidate: "Phoneme") -> bool:
        """True if candidate is a Consonant with every feature this pattern specifies."""
        if not isinstance(candidate, Consonant):
            return False
        return self._features_match(candidate)

    def with_defaults(self) -> "Consonant":
        """Fill features that have a neutral value; place and manner are left alone."""
        return replace(
            self,
            coarticulation=self.coarticulation or ConsonantCoarticulation.NONE,
            non_pulmonic=self.non_pulmonic or ConsonantNonPulmonic.PULMONIC,
            voicing=self.voicing or ConsonantVoicing.UNVOICED,
            aspiration=self.aspiration or ConsonantAspiration.UNASPIRATED,
            laterality=self.laterality or ConsonantLaterality.CENTRAL,
            sibilance=self.sibilance or ConsonantSibilance.NONSIBILANT,
            gemination=self.gemination or ConsonantGemination.SINGLETON,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'consonant', **self.features()}


@dataclass(frozen=True)
class Vowel(_FeatureBundle):
    """A vowel phoneme or vowel pattern."""
    height: VowelHeight = VowelHeight.UNSPECIFIED
    frontness: VowelFrontness = VowelFrontness.UNSPECIFIED
    phonation: VowelPhonation = VowelPhonation.UNSPECIFIED
    rounding: VowelRounding = VowelRounding.UNSPECIFIED
    nasality: VowelNasality = VowelNasality.UNSPECIFIED
    length: VowelLength = VowelLength.UNSPECIFIED

    def match(self, candidate: "Phoneme") -> bool:
        """True if candidate is a Vowel with every feature this pattern specifies."""
        if not isinstance(candidate, Vowel):
            return False
        return self._features_match(candidate)

    def with_defaults(self) -> "Vowel":
        """Fill phonation, rounding, nasality and length; height and frontness are left alone."""
        return replace(
            self,
            phonation=self.phonation or VowelPhonation.MODAL,
            rounding=self.rounding or VowelRounding.UNROUNDED,
            nasality=self.nasality or VowelNasality.ORAL,
            length=self.length or VowelLength.SHORT,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'vowel', **self.features()}


@dataclass(frozen=True)
class WordBoundary:
    """Sentinel phoneme for the start (initial=True) or end of a word."""
    initial: bool = False

    @property
    def is_concrete(self) -> bool:
        return True

    def match(self, candidate: "Phoneme") -> bool:
        # Direction is not a matching feature: any boundary matches
        return isinstance(candidate, WordBoundary)

    def with_defaults(self) -> "WordBoundary":
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'boundary', 'initial': self.initial}


Phoneme = Union[Consonant, Vowel, WordBoundary]


def match(pattern: Phoneme, candidate: Phoneme) -> bool:
    """Return whether candidate satisfies pattern."""
    if isinstance(pattern, (Consonant, Vowel, WordBoundary)):
        return pattern.match(candidate)
    raise TypeError(f"Not a phoneme pattern: {pattern!r}")


def phoneme_from_dict(data: Dict[str, Any]) -> Phoneme:
    """
    Build a phoneme (or pattern) from a flat record.

    Examples:
        {"type": "consonant", "manner": "stop", "voicing": "voiced"}
        {"type": "vowel", "height": "close"}
        {"type": "boundary", "initial": true}
    """
    if not isinstance(data, dict):
        raise ValueError(f"Phoneme record must be a mapping, got {type(data).__name__}")
    data = dict(data)
    kind = str(data.pop('type', '')).lower()
    if kind == 'consonant':
        return Consonant._from_features(data)
    if kind == 'vowel':
        return Vowel._from_features(data)
    if kind in ('boundary', 'word_boundary', 'word-boundary'):
        return WordBoundary(initial=bool(data.get('initial', False)))
    raise ValueError(f"Unknown phoneme type '{kind}' (expected consonant, vowel or boundary)")


def phoneme_from_spec(value: Union[str, Dict[str, Any], Phoneme], pattern: bool = False) -> Phoneme:
    """
    Build a phoneme from an IPA string, a record, or an existing phoneme.

    Concrete phonemes (pattern=False) have their neutral features filled in;
    patterns are returned as written so unspecified features stay wildcards.
    """
    if isinstance(value, (Consonant, Vowel, WordBoundary)):
        phoneme = value
    elif isinstance(value, str):
        from .ipa import phoneme_from_ipa
        phoneme = phoneme_from_ipa(value)
    else:
        phoneme = phoneme_from_dict(value)

    if pattern:
        return phoneme
    return phoneme.with_defaults()


__all__ = [
    'Feature',
    'Consonant',
    'Vowel',
    'WordBoundary',
    'Phoneme',
    'match',
    'phoneme_from_dict',
    'phoneme_from_spec',
]
