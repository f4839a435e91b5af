#!/usr/bin/env python3
"""
Phonotactic Rules
=================
Reweights tree edges that match a (source -> target, contexts) pattern.

Weights are assigned relative to the baseline of 1.0, never multiplied,
so applying the same rule twice has the same effect as applying it once:

    never        0
    very-seldom  b^-2
    seldom       b^-1
    sometimes    1
    often        b
    very-often   b^2
    always       every other outgoing edge of the source nodes drops to 0

Usage:
    from langgen.phonotactics import rules

    rules.apply_frequency(tree, RuleFrequency.NEVER, Vowel(), Vowel(),
                          [PhonotacticContext.SYLLABLE_BOUNDARY])
    rules.set_final_null_coda(tree, RuleFrequency.OFTEN)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..phonology import Consonant, Phoneme, Vowel, WordBoundary, phoneme_from_spec
from ..settings import get_setting
from .tree import PhonotacticContext, PhonotacticTree, PhonotacticTreeEdge

logger = logging.getLogger(__name__)


class RuleFrequency(Enum):
    NEVER = "never"
    VERY_SELDOM = "very-seldom"
    SELDOM = "seldom"
    SOMETIMES = "sometimes"
    OFTEN = "often"
    VERY_OFTEN = "very-often"
    ALWAYS = "always"

    @classmethod
    def from_label(cls, value) -> "RuleFrequency":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace('_', '-').replace(' ', '-')
        try:
            return cls(key)
        except ValueError:
            valid = ', '.join(f.value for f in cls)
            raise ValueError(f"Unknown frequency '{value}'. Valid values: {valid}") from None


# Exponent of the base for each scalar frequency
_EXPONENTS = {
    RuleFrequency.VERY_SELDOM: -2,
    RuleFrequency.SELDOM: -1,
    RuleFrequency.SOMETIMES: 0,
    RuleFrequency.OFTEN: 1,
    RuleFrequency.VERY_OFTEN: 2,
}


def frequency_base() -> float:
    base = get_setting("rules.frequency_base")
    if base is None:
        raise ValueError("rules.frequency_base must be set in app.yaml")
    base = float(base)
    if base <= 0:
        raise ValueError(f"rules.frequency_base must be positive, got {base}")
    return base


def frequency_weight(frequency: RuleFrequency, base: Optional[float] = None) -> float:
    """Edge weight for a frequency level. ALWAYS has no scalar weight."""
    frequency = RuleFrequency.from_label(frequency)
    if base is not None and float(base) <= 0:
        raise ValueError(f"Frequency base must be positive, got {base}")
    if frequency == RuleFrequency.NEVER:
        return 0.0
    if frequency == RuleFrequency.ALWAYS:
        raise ValueError("'always' is exclusive and has no scalar weight")
    if base is None:
        base = frequency_base()
    return float(base) ** _EXPONENTS[frequency]


# =============================================================================
# Pattern Matching
# =============================================================================

def find_pattern(tree: PhonotacticTree, source: Phoneme, target: Phoneme,
                 contexts: Optional[Iterable[PhonotacticContext]] = None,
                 ) -> Tuple[List[int], List[PhonotacticTreeEdge]]:
    """
    Find (source nodes, matched edges) for a source -> target pattern.

    Source nodes are every reachable node whose phoneme matches source.
    Matched edges are their outgoing edges whose target matches target
    and whose context is in contexts (any context when none are given).
    """
    wanted = set(contexts or ())
    sources: List[int] = []
    edges: List[PhonotacticTreeEdge] = []

    for node in tree.walk():
        if not source.match(node.phoneme):
            continue
        sources.append(node.handle)
        for edge in node.edges:
            if wanted and edge.context not in wanted:
                continue
            if target.match(tree.nodes[edge.target].phoneme):
                edges.append(edge)

    return sources, edges


def apply_frequency(tree: PhonotacticTree, frequency: RuleFrequency, source: Phoneme,
                    target: Phoneme, contexts: Optional[Iterable[PhonotacticContext]] = None,
                    base: Optional[float] = None) -> List[PhonotacticTreeEdge]:
    """
    Set the frequency of source -> target transitions. Returns the matched edges.

    ALWAYS leaves matched edges alone and zeroes every other outgoing edge
    of every source node, in all contexts. A pattern that matches no edge
    changes nothing.
    """
    frequency = RuleFrequency.from_label(frequency)
    contexts = [PhonotacticContext.from_label(c) for c in contexts or ()]
    if frequency != RuleFrequency.ALWAYS:
        weight = frequency_weight(frequency, base)
    sources, edges = find_pattern(tree, source, target, contexts)

    if not edges:
        logger.debug(f"Rule {frequency.value} {source} -> {target} matched no edges")
        return edges

    if frequency == RuleFrequency.ALWAYS:
        keep = {id(e) for e in edges}
        zeroed = 0
        for handle in sources:
            for edge in tree.nodes[handle].edges:
                if id(edge) not in keep:
                    edge.weight = 0.0
                    zeroed += 1
        logger.debug(f"Rule always: kept {len(edges)} edges, zeroed {zeroed}")
    else:
        for edge in edges:
            edge.weight = weight
        logger.debug(f"Rule {frequency.value}: {len(edges)} edges set to {weight:g}")

    return edges


# =============================================================================
# Presets
# =============================================================================

def set_initial_null_onset(tree: PhonotacticTree, frequency: RuleFrequency,
                           base: Optional[float] = None) -> List[PhonotacticTreeEdge]:
    """How often a word starts with a vowel."""
    return apply_frequency(tree, frequency, WordBoundary(), Vowel(),
                           [PhonotacticContext.WORD_START], base)


def set_final_null_coda(tree: PhonotacticTree, frequency: RuleFrequency,
                        base: Optional[float] = None) -> List[PhonotacticTreeEdge]:
    """How often a word ends in a vowel."""
    return apply_frequency(tree, frequency, Vowel(), WordBoundary(),
                           [PhonotacticContext.WORD_END], base)


def set_hiatus(tree: PhonotacticTree, frequency: RuleFrequency,
               base: Optional[float] = None) -> List[PhonotacticTreeEdge]:
    """How often a vowel is followed by a vowel across a syllable boundary."""
    return apply_frequency(tree, frequency, Vowel(), Vowel(),
                           [PhonotacticContext.SYLLABLE_BOUNDARY], base)


PRESETS: Dict[str, Callable[..., List[PhonotacticTreeEdge]]] = {
    'initial_null_onset': set_initial_null_onset,
    'final_null_coda': set_final_null_coda,
    'hiatus': set_hiatus,
}


def apply_presets(tree: PhonotacticTree, presets: Dict[str, Any],
                  base: Optional[float] = None) -> None:
    """Apply {preset name: frequency} in the given order."""
    for name, frequency in (presets or {}).items():
        key = name.replace('-', '_')
        if key not in PRESETS:
            raise ValueError(f"Unknown preset '{name}'. Valid presets: {', '.join(PRESETS)}")
        PRESETS[key](tree, RuleFrequency.from_label(frequency), base)


# =============================================================================
# Rule Records
# =============================================================================

# Shorthand patterns usable in rule records
_CLASS_PATTERNS = {
    '#': WordBoundary(),
    'C': Consonant(),
    'V': Vowel(),
}


def pattern_from_spec(value: Any) -> Phoneme:
    """Rule pattern from '#', 'C', 'V', an IPA symbol or a (partial) feature record."""
    if isinstance(value, str) and value.strip() in _CLASS_PATTERNS:
        return _CLASS_PATTERNS[value.strip()]
    return phoneme_from_spec(value, pattern=True)


@dataclass(frozen=True)
class Rule:
    """A stored apply_frequency call."""
    frequency: RuleFrequency
    source: Phoneme
    target: Phoneme
    contexts: Tuple[PhonotacticContext, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rule":
        """
        Build a rule from a record:

            {frequency: never, source: V, target: V, contexts: [syllable-boundary]}
        """
        missing = [k for k in ('frequency', 'source', 'target') if k not in data]
        if missing:
            raise ValueError(f"Rule is missing: {', '.join(missing)}")
        contexts = data.get('contexts') or ()
        if isinstance(contexts, str):
            contexts = [contexts]
        return cls(
            frequency=RuleFrequency.from_label(data['frequency']),
            source=pattern_from_spec(data['source']),
            target=pattern_from_spec(data['target']),
            contexts=tuple(PhonotacticContext.from_label(c) for c in contexts),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'frequency': self.frequency.value,
            'source': self.source.to_dict(),
            'target': self.target.to_dict(),
            'contexts': [c.value for c in self.contexts],
        }

    def apply(self, tree: PhonotacticTree, base: Optional[float] = None) -> List[PhonotacticTreeEdge]:
        return apply_frequency(tree, self.frequency, self.source, self.target,
                               self.contexts, base)
