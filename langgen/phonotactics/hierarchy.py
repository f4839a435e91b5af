#!/usr/bin/env python3
"""
Sonority Hierarchies
====================
Immutable inputs to the tree builder.

A ConsonantHierarchy describes onset or coda clusters: tiers ranked by
sonority (index 0 = least sonorous) plus a set of consonants that never
cluster. A NucleusHierarchy describes the legal vowel chains inside a
syllable nucleus.

Phoneme entries in records may be IPA strings or feature dicts:

    onset:
      tiers:
        - [p, t, k]
        - [{type: consonant, manner: approximant, place: alveolar, voicing: voiced}]
      no_cluster: [h]
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..phonology import Consonant, Vowel, phoneme_from_spec, to_ipa


def _phonemes(values: Optional[Iterable[Any]], kind: type, group: str) -> tuple:
    """Parse a list of IPA strings / records, checking each is of the expected kind."""
    result = []
    for value in values or ():
        phoneme = phoneme_from_spec(value)
        if not isinstance(phoneme, kind):
            raise ValueError(
                f"{group} expects {kind.__name__.lower()}s, got {to_ipa(phoneme) or phoneme!r}"
            )
        result.append(phoneme)
    return tuple(result)


def _records(phonemes: Iterable[Any]) -> List[str]:
    return [to_ipa(p) for p in phonemes]


@dataclass(frozen=True)
class ConsonantHierarchy:
    """Onset (onset=True) or coda cluster hierarchy."""
    onset: bool = True
    tiers: Tuple[Tuple[Consonant, ...], ...] = ()
    no_cluster: Tuple[Consonant, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'tiers', tuple(tuple(t) for t in self.tiers))
        object.__setattr__(self, 'no_cluster', tuple(self.no_cluster))

    @property
    def is_empty(self) -> bool:
        return not self.no_cluster and not any(self.tiers)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], onset: bool = True) -> "ConsonantHierarchy":
        data = data or {}
        name = 'onset' if onset else 'coda'
        tiers = tuple(
            _phonemes(tier, Consonant, f"{name} tier {i}")
            for i, tier in enumerate(data.get('tiers') or [])
        )
        return cls(
            onset=bool(data.get('onset', onset)),
            tiers=tiers,
            no_cluster=_phonemes(data.get('no_cluster'), Consonant, f"{name} no_cluster"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'onset': self.onset,
            'tiers': [_records(tier) for tier in self.tiers],
            'no_cluster': _records(self.no_cluster),
        }


@dataclass(frozen=True)
class NucleusHierarchy:
    """Legal nucleus chains: onglide -> nucleus -> offglide, or a lone monophthong."""
    onglides: Tuple[Vowel, ...] = ()
    nuclei: Tuple[Vowel, ...] = ()
    offglides: Tuple[Vowel, ...] = ()
    monophthongs: Tuple[Vowel, ...] = ()
    consonants: Tuple[Consonant, ...] = ()

    def __post_init__(self):
        for name in ('onglides', 'nuclei', 'offglides', 'monophthongs', 'consonants'):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def is_empty(self) -> bool:
        return not (self.nuclei or self.monophthongs or self.consonants)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "NucleusHierarchy":
        data = data or {}
        return cls(
            onglides=_phonemes(data.get('onglides'), Vowel, "onglides"),
            nuclei=_phonemes(data.get('nuclei'), Vowel, "nuclei"),
            offglides=_phonemes(data.get('offglides'), Vowel, "offglides"),
            monophthongs=_phonemes(data.get('monophthongs'), Vowel, "monophthongs"),
            consonants=_phonemes(data.get('consonants'), Consonant, "syllabic consonants"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'onglides': _records(self.onglides),
            'nuclei': _records(self.nuclei),
            'offglides': _records(self.offglides),
            'monophthongs': _records(self.monophthongs),
            'consonants': _records(self.consonants),
        }
