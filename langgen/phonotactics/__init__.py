"""Phonotactic tree construction, rules and word generation."""

from .hierarchy import ConsonantHierarchy, NucleusHierarchy
from .tree import (
    PhonotacticContext,
    PhonotacticTree,
    PhonotacticTreeNode,
    PhonotacticTreeEdge,
    build_tree,
)
from .rules import (
    RuleFrequency,
    Rule,
    frequency_weight,
    find_pattern,
    apply_frequency,
    apply_presets,
    set_initial_null_onset,
    set_final_null_coda,
    set_hiatus,
    PRESETS,
)
from .generator import UnreachableStateError, WordGenerator, choose_edge
from .length import WordLength, get_word_length

__all__ = [
    'ConsonantHierarchy',
    'NucleusHierarchy',
    'PhonotacticContext',
    'PhonotacticTree',
    'PhonotacticTreeNode',
    'PhonotacticTreeEdge',
    'build_tree',
    'RuleFrequency',
    'Rule',
    'frequency_weight',
    'find_pattern',
    'apply_frequency',
    'apply_presets',
    'set_initial_null_onset',
    'set_final_null_coda',
    'set_hiatus',
    'PRESETS',
    'UnreachableStateError',
    'WordGenerator',
    'choose_edge',
    'WordLength',
    'get_word_length',
]
