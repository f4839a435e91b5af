"""
Tests for the Phoneme Model
===========================
Feature parsing, pattern matching and record conversion in
langgen/phonology/features.py and langgen/phonology/phoneme.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langgen.phonology import (
    Consonant,
    Vowel,
    WordBoundary,
    match,
    phoneme_from_dict,
    phoneme_from_spec,
    ConsonantPlace,
    ConsonantManner,
    ConsonantVoicing,
    ConsonantNonPulmonic,
    VowelHeight,
    VowelFrontness,
    VowelRounding,
    VowelLength,
)


class TestFeatureLabels:
    """Dashed-label conversion for feature enums."""

    def test_label(self):
        assert ConsonantPlace.POST_ALVEOLAR.label == "post-alveolar"
        assert VowelHeight.NEAR_CLOSE.label == "near-close"

    def test_from_label(self):
        assert ConsonantPlace.from_label("post-alveolar") == ConsonantPlace.POST_ALVEOLAR
        assert VowelHeight.from_label("Near Close") == VowelHeight.NEAR_CLOSE

    def test_empty_label_is_wildcard(self):
        assert ConsonantManner.from_label(None) == ConsonantManner.UNSPECIFIED
        assert ConsonantManner.from_label("") == ConsonantManner.UNSPECIFIED

    def test_unknown_label_raises(self):
        with pytest.raises(ValueError, match="ConsonantPlace"):
            ConsonantPlace.from_label("nasal-cavity")

    def test_constructor_accepts_labels(self):
        c = Consonant(place="velar", manner="stop")
        assert c.place == ConsonantPlace.VELAR
        assert c.manner == ConsonantManner.STOP


class TestMatch:
    """Partial-pattern matching."""

    @pytest.fixture
    def k(self):
        return Consonant(
            place=ConsonantPlace.VELAR,
            manner=ConsonantManner.STOP,
            voicing=ConsonantVoicing.UNVOICED,
        ).with_defaults()

    @pytest.fixture
    def i(self):
        return Vowel(height=VowelHeight.CLOSE, frontness=VowelFrontness.FRONT).with_defaults()

    def test_wildcard_matches_own_variant(self, k, i):
        assert Consonant().match(k)
        assert Vowel().match(i)

    def test_wildcard_rejects_other_variants(self, k, i):
        assert not Consonant().match(i)
        assert not Vowel().match(k)
        assert not Vowel().match(WordBoundary())

    def test_partial_pattern(self, k):
        assert Consonant(manner=ConsonantManner.STOP).match(k)
        assert not Consonant(manner=ConsonantManner.NASAL).match(k)
        assert Consonant(manner=ConsonantManner.STOP, place=ConsonantPlace.VELAR).match(k)
        assert not Consonant(manner=ConsonantManner.STOP, place=ConsonantPlace.BILABIAL).match(k)

    def test_concrete_matches_itself(self, k, i):
        assert k.match(k)
        assert i.match(i)

    def test_boundary_matches_any_boundary(self):
        assert WordBoundary().match(WordBoundary(initial=True))
        assert WordBoundary(initial=True).match(WordBoundary())
        assert not WordBoundary().match(Vowel())

    def test_module_level_match(self, i):
        assert match(Vowel(height=VowelHeight.CLOSE), i)
        assert not match(Vowel(height=VowelHeight.OPEN), i)

    def test_match_rejects_non_phoneme_pattern(self, i):
        with pytest.raises(TypeError):
            match("i", i)


class TestDefaults:
    """Concreteness and neutral defaults."""

    def test_is_concrete(self):
        assert not Consonant(manner=ConsonantManner.STOP).is_concrete
        assert WordBoundary().is_concrete

    def test_consonant_defaults(self):
        c = Consonant(place="bilabial", manner="stop").with_defaults()
        assert c.is_concrete
        assert c.voicing == ConsonantVoicing.UNVOICED
        assert c.non_pulmonic == ConsonantNonPulmonic.PULMONIC

    def test_defaults_keep_specified_values(self):
        c = Consonant(place="bilabial", manner="stop", voicing="voiced").with_defaults()
        assert c.voicing == ConsonantVoicing.VOICED

    def test_vowel_defaults(self):
        v = Vowel(height="open", frontness="front").with_defaults()
        assert v.is_concrete
        assert v.rounding == VowelRounding.UNROUNDED
        assert v.length == VowelLength.SHORT

    def test_defaults_leave_place_open(self):
        assert not Consonant(manner="stop").with_defaults().is_concrete


class TestRecords:
    """Flat dict records."""

    def test_to_dict(self):
        data = Vowel(height="close", rounding="rounded").to_dict()
        assert data == {'type': 'vowel', 'height': 'close', 'rounding': 'rounded'}

    def test_from_dict(self):
        c = phoneme_from_dict({'type': 'consonant', 'manner': 'stop', 'voicing': 'voiced'})
        assert c == Consonant(manner=ConsonantManner.STOP, voicing=ConsonantVoicing.VOICED)

    def test_boundary_record(self):
        assert phoneme_from_dict({'type': 'boundary', 'initial': True}) == WordBoundary(initial=True)

    def test_unknown_feature_raises(self):
        with pytest.raises(ValueError, match="colour"):
            phoneme_from_dict({'type': 'vowel', 'colour': 'red'})

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            phoneme_from_dict({'type': 'tone'})

    def test_from_spec_fills_defaults(self):
        v = phoneme_from_spec({'type': 'vowel', 'height': 'open', 'frontness': 'back'})
        assert v.is_concrete

    def test_from_spec_pattern_stays_partial(self):
        v = phoneme_from_spec({'type': 'vowel', 'height': 'open'}, pattern=True)
        assert v == Vowel(height=VowelHeight.OPEN)

    def test_from_spec_ipa(self):
        assert phoneme_from_spec("a") == Vowel(
            height="open", frontness="front", rounding="unrounded",
            phonation="modal", nasality="oral", length="short",
        )
