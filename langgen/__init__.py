#!/usr/bin/env python3
"""
langgen - Phonotactic Word Generator
====================================

Generates invented words that follow a language's sound-sequencing
rules. Sonority hierarchies are turned into a weighted, cyclic graph of
phonemes; rules reweight its edges; words are random walks through it.

Quick Start
-----------
    from langgen import Language, GenerationSession, new_rng

    lang = Language.from_yaml("basic")
    session = GenerationSession(lang, rng=new_rng(42))
    session.generate(10)          # ['ka.tin', 'pu', ...]

    # Lower level
    from langgen.phonotactics import build_tree, set_hiatus, WordGenerator

    tree = lang.build_tree()
    set_hiatus(tree, "never")
    WordGenerator(tree).new_word(3)

Modules
-------
    langgen.phonology    - Phoneme features, IPA conversion, inventories
    langgen.phonotactics - Hierarchies, tree builder, rules, generator
    langgen.language     - Language definitions and generation sessions
    langgen.settings     - app.yaml settings

CLI Usage
---------
    python -m langgen generate -n 10 --language demo
    python -m langgen tree --language basic --edges
    python -m langgen parse tʰ a
"""

__version__ = "0.1.0"

from . import phonology
from . import phonotactics

from .entropy import TrueRandom, new_rng
from .config import GenerationConfig
from .language import Language, GenerationSession
from .phonotactics import UnreachableStateError

__all__ = [
    'phonology',
    'phonotactics',
    'TrueRandom',
    'new_rng',
    'GenerationConfig',
    'Language',
    'GenerationSession',
    'UnreachableStateError',
    '__version__',
]
