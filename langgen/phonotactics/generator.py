#!/usr/bin/env python3
"""
Word Generator
==============
Random walks through a phonotactic tree, one syllable at a time.

Each syllable starts at the node the previous syllable crossed into (the
tree root for the first syllable) and follows weighted edges until it
takes a terminal edge:

    start -> [onset ...] -> nucleus [...] -> [coda ...] -> WORD_END | SYLLABLE_BOUNDARY

Only the final requested syllable may take WORD_END; every other
syllable must leave through SYLLABLE_BOUNDARY.

Usage:
    gen = WordGenerator(tree, rng=new_rng(42))
    gen.new_word(2)    # e.g. 'ta.kun'
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from ..entropy import new_rng
from ..phonology import Phoneme, to_ipa
from ..settings import get_setting
from .tree import PhonotacticContext, PhonotacticTree, PhonotacticTreeEdge, PhonotacticTreeNode

logger = logging.getLogger(__name__)

# Contexts a syllable may move through before it ends
SYLLABLE_CONTEXTS = frozenset({
    PhonotacticContext.WORD_START,
    PhonotacticContext.ONSET,
    PhonotacticContext.NUCLEUS,
    PhonotacticContext.CODA,
})


class UnreachableStateError(RuntimeError):
    """No viable continuation from a node under the requested contexts."""

    def __init__(self, handle: int, contexts: Iterable[PhonotacticContext], phoneme: str = ""):
        self.handle = handle
        self.contexts = tuple(sorted(contexts, key=lambda c: c.value))
        where = f"node {handle}" + (f" ({phoneme})" if phoneme else "")
        allowed = ', '.join(c.value for c in self.contexts)
        super().__init__(
            f"Unreachable phonotactic state: no viable continuation from {where} "
            f"under contexts [{allowed}]"
        )


def choose_edge(node: PhonotacticTreeNode, contexts, rng) -> PhonotacticTreeEdge:
    """
    Pick one outgoing edge of node, restricted to contexts, with probability
    proportional to its weight.

    Raises:
        UnreachableStateError: no candidate edges, or their weights sum to 0
    """
    candidates = node.edges_in(contexts)
    total = sum(e.weight for e in candidates)
    if not candidates or total <= 0:
        raise UnreachableStateError(node.handle, contexts, to_ipa(node.phoneme))

    k = rng.random() * total
    chosen = None
    for edge in candidates:
        if edge.weight <= 0:
            continue
        chosen = edge
        k -= edge.weight
        if k <= 0:
            break
    # Float drift can leave k slightly positive; the last live edge takes it
    return chosen


class WordGenerator:
    """Samples words from one tree with one random source."""

    def __init__(self, tree: PhonotacticTree, rng=None,
                 render: Callable[[Phoneme], str] = to_ipa,
                 syllable_marker: Optional[str] = None):
        self.tree = tree
        self.rng = rng if rng is not None else new_rng()
        self.render = render
        if syllable_marker is None:
            syllable_marker = get_setting("generation.syllable_marker", ".")
        self.syllable_marker = syllable_marker

    def new_syllable(self, start: int, final: bool) -> Tuple[List[int], int]:
        """
        Walk one syllable from start.

        Returns (path, crossing) where path is the handles visited, starting
        with start, and crossing is the node the terminal edge leads to.
        """
        terminal = PhonotacticContext.WORD_END if final else PhonotacticContext.SYLLABLE_BOUNDARY
        allowed = SYLLABLE_CONTEXTS | {terminal}

        path = [start]
        current = start
        while True:
            edge = choose_edge(self.tree.nodes[current], allowed, self.rng)
            if edge.context.is_terminal:
                return path, edge.target
            current = edge.target
            path.append(current)

    def new_word_paths(self, syllables: int) -> List[List[int]]:
        """Node paths for a word of the given number of syllables."""
        if syllables < 1:
            raise ValueError(f"syllables must be at least 1, got {syllables}")

        paths = []
        current = self.tree.root
        for i in range(syllables):
            path, current = self.new_syllable(current, final=(i == syllables - 1))
            paths.append(path)
        return paths

    def render_path(self, path: List[int]) -> str:
        return ''.join(self.render(self.tree.nodes[h].phoneme) for h in path)

    def new_word(self, syllables: int) -> str:
        """Render a random word, syllables joined by the syllable marker."""
        word = self.syllable_marker.join(
            self.render_path(path) for path in self.new_word_paths(syllables)
        )
        logger.debug(f"Generated '{word}' ({syllables} syllables)")
        return word
