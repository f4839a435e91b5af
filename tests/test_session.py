"""
Tests for Languages and Sessions
================================
Tests for langgen/language.py, langgen/config.py and langgen/settings.py.
"""

import pytest
import random
import re
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langgen import GenerationConfig, GenerationSession, Language, new_rng, TrueRandom
from langgen.phonotactics import PhonotacticContext, RuleFrequency, WordLength
from langgen.settings import bundled_languages, get_setting, resolve_language_path

SYLLABLE = r"[ptk]?[aiu]n?"
WORD_RE = re.compile(rf"^{SYLLABLE}(\.{SYLLABLE})*$")


@pytest.fixture
def basic():
    return Language.from_yaml("basic")


@pytest.fixture
def vowels_only():
    """Only /a/: with hiatus disallowed no second syllable is possible."""
    return Language.from_dict({'name': 'vowels', 'nucleus': {'monophthongs': ['a']}})


class TestSettings:
    """app.yaml access."""

    def test_get_setting(self):
        assert get_setting("rules.frequency_base") == 2
        assert get_setting("generation.presets.hiatus") == "never"

    def test_missing_setting_default(self):
        assert get_setting("generation.nothing.here", "fallback") == "fallback"

    def test_bundled_languages(self):
        assert {"basic", "demo"} <= set(bundled_languages())

    def test_resolve_unknown_language(self):
        with pytest.raises(FileNotFoundError):
            resolve_language_path("no_such_language")


class TestGenerationConfig:
    """Dataclass defaults from settings."""

    def test_defaults(self):
        config = GenerationConfig()
        assert config.count == 30
        assert config.syllable_marker == "."
        assert config.min_length == WordLength.MONOSYLLABIC
        assert config.median_length == WordLength.SHORT
        assert config.max_length == WordLength.MEDIUM
        assert config.presets == {'hiatus': 'never'}

    def test_overrides(self):
        config = GenerationConfig(count=5, syllable_marker="-", median_length="long")
        assert config.count == 5
        assert config.syllable_marker == "-"
        assert config.median_length == WordLength.LONG

    def test_negative_count(self):
        with pytest.raises(ValueError):
            GenerationConfig(count=-1)


class TestRandomSources:
    """Seeded and hardware-backed sources."""

    def test_seeded_is_reproducible(self):
        assert new_rng(5).random() == new_rng(5).random()

    def test_unseeded_is_true_random(self):
        rng = new_rng()
        assert isinstance(rng, TrueRandom)
        assert 0.0 <= rng.random() < 1.0

    def test_true_random_drives_a_session(self, basic):
        session = GenerationSession(basic, rng=TrueRandom())
        words = session.generate(20)
        assert len(words) == 20
        assert all(WORD_RE.match(w) for w in words)


class TestLanguage:
    """Language definitions."""

    def test_from_yaml_bundled(self, basic):
        assert basic.name == "basic"
        assert len(basic.onset.tiers[0]) == 3
        assert len(basic.nucleus.monophthongs) == 3
        assert len(basic.coda.no_cluster) == 1

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "tiny.yaml"
        path.write_text("nucleus:\n  monophthongs: [a]\npresets:\n  hiatus: often\n", encoding="utf-8")
        lang = Language.from_yaml(path)
        assert lang.name == "tiny"
        assert lang.presets == {'hiatus': RuleFrequency.OFTEN}

    def test_demo_language_loads(self):
        demo = Language.from_yaml("demo")
        assert len(demo.rules) == 3
        assert demo.rules[0].contexts == (PhonotacticContext.ONSET,)
        assert demo.median_length == WordLength.SHORT

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            Language.from_dict({'name': 'x', 'presets': {'stress': 'often'}})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            Language.from_dict(["a"])

    def test_to_dict_round_trip(self):
        demo = Language.from_yaml("demo")
        assert Language.from_dict(demo.to_dict()) == demo

    def test_inventory(self, basic):
        assert basic.inventory.to_ipa() == {
            'consonants': ['p', 't', 'k', 'n'],
            'vowels': ['a', 'i', 'u'],
        }


class TestGenerationSession:
    """Sessions over a language."""

    def test_generate(self, basic):
        session = GenerationSession(basic, rng=random.Random(1))
        words = session.generate(50)
        assert len(words) == 50
        assert all(WORD_RE.match(w) for w in words)

    def test_default_count(self, basic):
        session = GenerationSession(basic, rng=random.Random(1),
                                    config=GenerationConfig(count=4))
        assert len(session.generate()) == 4

    def test_default_hiatus_never(self, basic):
        session = GenerationSession(basic, rng=random.Random(2))
        for word in session.generate(100, syllables=3):
            assert not re.search(r"[aiu]\.[aiu]", word)

    def test_language_preset_overrides_default(self):
        lang = Language.from_dict({
            'name': 'hiatus',
            'nucleus': {'monophthongs': ['a']},
            'presets': {'hiatus': 'sometimes'},
        })
        session = GenerationSession(lang, rng=random.Random(3))
        assert session.generate(3, syllables=2) == ["a.a", "a.a", "a.a"]

    def test_rules_applied(self):
        lang = Language.from_dict({
            'name': 'no-coda',
            'onset': {'tiers': [['p']]},
            'nucleus': {'monophthongs': ['a']},
            'coda': {'no_cluster': ['n']},
            'rules': [{'frequency': 'never', 'source': 'V', 'target': 'n'}],
        })
        session = GenerationSession(lang, rng=random.Random(4))
        assert all("n" not in w for w in session.generate(30))

    def test_unreachable_words_skipped(self, vowels_only, caplog):
        session = GenerationSession(vowels_only, rng=random.Random(5))
        assert session.generate(5, syllables=2) == []
        assert session.failures == 5
        assert "Unreachable" in caplog.text

    def test_session_continues_after_failure(self, vowels_only):
        session = GenerationSession(vowels_only, rng=random.Random(6))
        session.generate(2, syllables=2)
        assert session.generate(3, syllables=1) == ["a", "a", "a"]

    def test_sampled_length(self, basic):
        session = GenerationSession(basic, rng=random.Random(8))
        for _ in range(50):
            word = session.new_word()
            assert 1 <= word.count(".") + 1 <= 6

    def test_sessions_own_their_trees(self, basic):
        a = GenerationSession(basic, rng=random.Random(1))
        b = GenerationSession(basic, rng=random.Random(1))
        assert a.tree is not b.tree
        a.tree.nodes[a.tree.root].edges[0].weight = 0.0
        assert b.tree.nodes[b.tree.root].edges[0].weight == 1.0
