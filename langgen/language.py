#!/usr/bin/env python3
"""
Languages and Generation Sessions
=================================
A Language bundles the three hierarchies with the rules and presets that
shape its word frequencies. A GenerationSession builds a fresh tree for
one language, applies presets then rules, and samples words from it.

Language files are YAML:

    name: basic
    onset:
      tiers: [[p, t, k]]
    nucleus:
      monophthongs: [a, i, u]
    coda:
      no_cluster: [n]
    presets:
      final_null_coda: often
    rules:
      - {frequency: never, source: n, target: "#", contexts: [word-end]}
    word_length: {min: monosyllabic, median: short, max: medium}

Usage:
    lang = Language.from_yaml("basic")
    session = GenerationSession(lang, rng=new_rng(7))
    session.generate(10)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .config import GenerationConfig
from .entropy import new_rng
from .phonology import Consonant, Inventory, Vowel
from .phonotactics import (
    ConsonantHierarchy,
    NucleusHierarchy,
    PhonotacticTree,
    Rule,
    RuleFrequency,
    UnreachableStateError,
    WordGenerator,
    WordLength,
    apply_presets,
    build_tree,
    get_word_length,
    PRESETS,
)
from .settings import resolve_language_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Language:
    """Hierarchies plus frequency shaping for one invented language."""
    name: str
    onset: ConsonantHierarchy = field(default_factory=lambda: ConsonantHierarchy(onset=True))
    nucleus: NucleusHierarchy = field(default_factory=NucleusHierarchy)
    coda: ConsonantHierarchy = field(default_factory=lambda: ConsonantHierarchy(onset=False))
    rules: Tuple[Rule, ...] = ()
    presets: Dict[str, RuleFrequency] = field(default_factory=dict)
    min_length: Optional[WordLength] = None
    median_length: Optional[WordLength] = None
    max_length: Optional[WordLength] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: Optional[str] = None) -> "Language":
        if not isinstance(data, dict):
            raise ValueError("Language definition must be a mapping")

        presets = {}
        for key, frequency in (data.get('presets') or {}).items():
            key = str(key).replace('-', '_')
            if key not in PRESETS:
                raise ValueError(f"Unknown preset '{key}'. Valid presets: {', '.join(PRESETS)}")
            presets[key] = RuleFrequency.from_label(frequency)

        lengths = data.get('word_length') or {}
        return cls(
            name=str(data.get('name') or name or 'unnamed'),
            onset=ConsonantHierarchy.from_dict(data.get('onset'), onset=True),
            nucleus=NucleusHierarchy.from_dict(data.get('nucleus')),
            coda=ConsonantHierarchy.from_dict(data.get('coda'), onset=False),
            rules=tuple(Rule.from_dict(r) for r in data.get('rules') or []),
            presets=presets,
            min_length=WordLength.from_label(lengths['min']) if 'min' in lengths else None,
            median_length=WordLength.from_label(lengths['median']) if 'median' in lengths else None,
            max_length=WordLength.from_label(lengths['max']) if 'max' in lengths else None,
        )

    @classmethod
    def from_yaml(cls, path) -> "Language":
        """Load a language file, or a bundled language by name."""
        path = resolve_language_path(str(path))
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        logger.debug(f"Loaded language definition {path}")
        return cls.from_dict(data, name=Path(path).stem)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'name': self.name,
            'onset': self.onset.to_dict(),
            'nucleus': self.nucleus.to_dict(),
            'coda': self.coda.to_dict(),
            'presets': {k: v.value for k, v in self.presets.items()},
            'rules': [r.to_dict() for r in self.rules],
        }
        lengths = {
            key: value.name.lower().replace('_', '-')
            for key, value in (('min', self.min_length),
                               ('median', self.median_length),
                               ('max', self.max_length))
            if value is not None
        }
        if lengths:
            data['word_length'] = lengths
        return data

    def build_tree(self) -> PhonotacticTree:
        """Fresh, unweighted tree for this language."""
        return build_tree(self.onset, self.nucleus, self.coda)

    @property
    def inventory(self) -> Inventory:
        """Every distinct consonant and vowel the hierarchies mention."""
        consonants: List[Consonant] = []
        vowels: List[Vowel] = []
        groups = (
            [p for tier in self.onset.tiers for p in tier] + list(self.onset.no_cluster)
            + list(self.nucleus.onglides + self.nucleus.nuclei + self.nucleus.offglides
                   + self.nucleus.monophthongs + self.nucleus.consonants)
            + [p for tier in self.coda.tiers for p in tier] + list(self.coda.no_cluster)
        )
        for phoneme in groups:
            bucket = vowels if isinstance(phoneme, Vowel) else consonants
            if phoneme not in bucket:
                bucket.append(phoneme)
        return Inventory(consonants=tuple(consonants), vowels=tuple(vowels))


class GenerationSession:
    """
    One language, one tree, one random source.

    The tree is built and weighted here and never handed to another
    session; pass ``tree.copy()`` if a finished tree is needed elsewhere.
    """

    def __init__(self, language: Language, rng=None,
                 config: Optional[GenerationConfig] = None):
        self.language = language
        self.config = config or GenerationConfig()
        self.rng = rng if rng is not None else new_rng()
        self.failures = 0

        self.tree = language.build_tree()
        # Session defaults first so a language can override them
        apply_presets(self.tree, {**self.config.presets, **language.presets})
        for rule in language.rules:
            rule.apply(self.tree)

        self.generator = WordGenerator(
            self.tree, rng=self.rng, syllable_marker=self.config.syllable_marker
        )
        logger.debug(
            f"Session for '{language.name}': {len(self.tree)} nodes, "
            f"{self.tree.edge_count} edges, {len(language.rules)} rules"
        )

    def word_length(self) -> int:
        """Sample a syllable count from the language's (or config's) length categories."""
        lang = self.language
        return get_word_length(
            lang.min_length or self.config.min_length,
            lang.median_length or self.config.median_length,
            lang.max_length or self.config.max_length,
            rng=self.rng,
        )

    def new_word(self, syllables: Optional[int] = None) -> str:
        if syllables is None:
            syllables = self.word_length()
        return self.generator.new_word(syllables)

    def generate(self, count: Optional[int] = None, syllables: Optional[int] = None) -> List[str]:
        """
        Generate up to count words.

        A word that runs into an unreachable state is logged and skipped;
        the rest of the batch still runs.
        """
        count = self.config.count if count is None else count
        words = []
        for _ in range(count):
            try:
                words.append(self.new_word(syllables))
            except UnreachableStateError as e:
                self.failures += 1
                logger.warning(f"Skipping word: {e}")
        if len(words) < count:
            logger.info(f"Generated {len(words)}/{count} words for '{self.language.name}'")
        return words
