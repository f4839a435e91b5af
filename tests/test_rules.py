"""
Tests for the Rule Engine
=========================
Tests for edge reweighting in langgen/phonotactics/rules.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langgen.phonology import Consonant, Vowel, WordBoundary, phoneme_from_ipa
from langgen.phonotactics import (
    PhonotacticContext,
    Rule,
    RuleFrequency,
    apply_frequency,
    apply_presets,
    frequency_weight,
    set_final_null_coda,
    set_hiatus,
    set_initial_null_onset,
)

C = PhonotacticContext


def weight_of(tree, src, dst, context):
    """Weights of all src -> dst edges (IPA labels) in a context."""
    return [
        e.weight
        for n in tree.nodes
        for e in n.edges
        if tree.describe(n.handle) == src and tree.describe(e.target) == dst and e.context == context
    ]


class TestFrequencyWeights:
    """Scalar weights per frequency level."""

    def test_default_base(self):
        assert frequency_weight(RuleFrequency.NEVER) == 0.0
        assert frequency_weight(RuleFrequency.VERY_SELDOM) == 0.25
        assert frequency_weight(RuleFrequency.SELDOM) == 0.5
        assert frequency_weight(RuleFrequency.SOMETIMES) == 1.0
        assert frequency_weight(RuleFrequency.OFTEN) == 2.0
        assert frequency_weight(RuleFrequency.VERY_OFTEN) == 4.0

    def test_custom_base(self):
        assert frequency_weight("very-often", base=5) == 25.0
        assert frequency_weight("seldom", base=5) == 0.2

    @pytest.mark.parametrize("base", [0, -2])
    def test_non_positive_base(self, base):
        for frequency in ("never", "seldom", "often"):
            with pytest.raises(ValueError, match="must be positive"):
                frequency_weight(frequency, base=base)

    @pytest.mark.parametrize("base", [0, -2])
    def test_non_positive_base_leaves_tree_untouched(self, basic_tree, base):
        before = basic_tree.weights()
        with pytest.raises(ValueError):
            set_hiatus(basic_tree, RuleFrequency.OFTEN, base=base)
        with pytest.raises(ValueError):
            set_hiatus(basic_tree, RuleFrequency.SELDOM, base=base)
        assert basic_tree.weights() == before
        assert all(e.weight >= 0 for n in basic_tree.nodes for e in n.edges)

    def test_always_has_no_weight(self):
        with pytest.raises(ValueError):
            frequency_weight(RuleFrequency.ALWAYS)

    def test_labels(self):
        assert RuleFrequency.from_label("Very Seldom") == RuleFrequency.VERY_SELDOM
        with pytest.raises(ValueError):
            RuleFrequency.from_label("rarely")


class TestApplyFrequency:
    """Matching and reweighting."""

    def test_never_zeroes_only_matched(self, basic_tree):
        before = basic_tree.weights()
        matched = set_hiatus(basic_tree, RuleFrequency.NEVER)
        assert len(matched) == 9
        assert all(e.weight == 0.0 for e in matched)

        zeroed = sum(
            1 for old, new in zip(before, basic_tree.weights())
            for a, b in zip(old, new) if a != b
        )
        assert zeroed == 9
        assert weight_of(basic_tree, "a", "p", C.SYLLABLE_BOUNDARY) == [1.0]

    def test_scalar_frequency(self, basic_tree):
        matched = apply_frequency(basic_tree, RuleFrequency.OFTEN,
                                  phoneme_from_ipa("p"), phoneme_from_ipa("a"))
        assert len(matched) == 1
        assert weight_of(basic_tree, "p", "a", C.ONSET) == [2.0]
        assert weight_of(basic_tree, "p", "i", C.ONSET) == [1.0]

    def test_context_filter(self, basic_tree):
        # /a/ -> /p/ happens only across a syllable boundary
        assert apply_frequency(basic_tree, "never", Vowel(), phoneme_from_ipa("p"),
                               [C.ONSET, C.NUCLEUS]) == []
        assert len(apply_frequency(basic_tree, "never", Vowel(), phoneme_from_ipa("p"),
                                   [C.SYLLABLE_BOUNDARY])) == 3

    def test_idempotent(self, basic_tree):
        set_final_null_coda(basic_tree, RuleFrequency.VERY_OFTEN)
        once = basic_tree.weights()
        set_final_null_coda(basic_tree, RuleFrequency.VERY_OFTEN)
        assert basic_tree.weights() == once

    def test_assigns_rather_than_multiplies(self, basic_tree):
        set_hiatus(basic_tree, RuleFrequency.OFTEN)
        set_hiatus(basic_tree, RuleFrequency.SELDOM)
        assert set(weight_of(basic_tree, "a", "i", C.SYLLABLE_BOUNDARY)) == {0.5}

    def test_no_match_is_noop(self, basic_tree):
        before = basic_tree.weights()
        matched = apply_frequency(basic_tree, RuleFrequency.ALWAYS,
                                  Consonant(manner="trill"), Vowel())
        assert matched == []
        assert basic_tree.weights() == before


class TestAlways:
    """ALWAYS keeps matched edges and zeroes their siblings."""

    def test_siblings_zeroed(self, basic_tree):
        matched = apply_frequency(basic_tree, RuleFrequency.ALWAYS,
                                  phoneme_from_ipa("p"), phoneme_from_ipa("a"))
        assert [e.weight for e in matched] == [1.0]
        assert weight_of(basic_tree, "p", "i", C.ONSET) == [0.0]
        assert weight_of(basic_tree, "p", "u", C.ONSET) == [0.0]
        # Other source nodes are untouched
        assert weight_of(basic_tree, "t", "i", C.ONSET) == [1.0]

    def test_matched_weights_preserved(self, basic_tree):
        set_final_null_coda(basic_tree, RuleFrequency.OFTEN)
        matched = set_final_null_coda(basic_tree, RuleFrequency.ALWAYS)
        assert all(e.weight == 2.0 for e in matched)

    def test_zeroes_across_contexts(self, basic_tree):
        # Scoped to WORD_END, but the vowels' coda and boundary edges go too
        set_final_null_coda(basic_tree, RuleFrequency.ALWAYS)
        assert weight_of(basic_tree, "a", "n", C.NUCLEUS) == [0.0]
        assert weight_of(basic_tree, "a", "p", C.SYLLABLE_BOUNDARY) == [0.0]
        assert weight_of(basic_tree, "a", "#end", C.WORD_END) == [1.0]

    def test_zeroes_every_source_node(self, basic_tree):
        # Every vowel matches the source, so every vowel loses its other edges
        apply_frequency(basic_tree, RuleFrequency.ALWAYS, Vowel(), phoneme_from_ipa("n"))
        for v in ("a", "i", "u"):
            assert weight_of(basic_tree, v, "n", C.NUCLEUS) == [1.0]
            assert weight_of(basic_tree, v, "#end", C.WORD_END) == [0.0]


class TestPresets:
    """Preset compositions."""

    def test_initial_null_onset(self, basic_tree):
        matched = set_initial_null_onset(basic_tree, RuleFrequency.NEVER)
        assert len(matched) == 3
        assert weight_of(basic_tree, "#start", "a", C.WORD_START) == [0.0]
        assert weight_of(basic_tree, "#start", "p", C.WORD_START) == [1.0]

    def test_final_null_coda(self, basic_tree):
        assert len(set_final_null_coda(basic_tree, RuleFrequency.SELDOM)) == 3
        assert weight_of(basic_tree, "n", "#end", C.WORD_END) == [1.0]

    def test_apply_presets(self, basic_tree):
        apply_presets(basic_tree, {'hiatus': 'never', 'final-null-coda': 'often'})
        assert weight_of(basic_tree, "a", "i", C.SYLLABLE_BOUNDARY) == [0.0]
        assert weight_of(basic_tree, "a", "#end", C.WORD_END) == [2.0]

    def test_unknown_preset(self, basic_tree):
        with pytest.raises(ValueError, match="Unknown preset"):
            apply_presets(basic_tree, {'tone_sandhi': 'never'})


class TestRuleRecords:
    """Rules loaded from records."""

    def test_shorthand_patterns(self):
        rule = Rule.from_dict({'frequency': 'never', 'source': 'V', 'target': '#',
                               'contexts': ['word-end']})
        assert rule.source == Vowel()
        assert rule.target == WordBoundary()
        assert rule.contexts == (C.WORD_END,)

    def test_single_context_string(self):
        rule = Rule.from_dict({'frequency': 'often', 'source': 'C', 'target': 'C',
                               'contexts': 'onset'})
        assert rule.contexts == (C.ONSET,)

    def test_feature_pattern(self):
        rule = Rule.from_dict({'frequency': 'never', 'source': 'p',
                               'target': {'type': 'vowel', 'height': 'close'}})
        assert rule.target == Vowel(height="close")

    def test_apply(self, basic_tree):
        rule = Rule.from_dict({'frequency': 'never', 'source': 'n', 'target': '#'})
        assert len(rule.apply(basic_tree)) == 1
        assert weight_of(basic_tree, "n", "#end", C.WORD_END) == [0.0]

    def test_missing_fields(self):
        with pytest.raises(ValueError, match="target"):
            Rule.from_dict({'frequency': 'never', 'source': 'V'})

    def test_unknown_context(self):
        with pytest.raises(ValueError, match="context"):
            Rule.from_dict({'frequency': 'never', 'source': 'V', 'target': 'V',
                            'contexts': ['rhyme']})
