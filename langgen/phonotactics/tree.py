#!/usr/bin/env python3
"""
Phonotactic Tree
================
Builds the directed, cyclic graph that words are sampled from.

Nodes live in an arena (``PhonotacticTree.nodes``) and are addressed by
integer handles; edges store the handle of their target. Handle 0 is the
WordStart sentinel (``tree.root``) and handle 1 the WordEnd sentinel
(``tree.end``).

Edge categories, all created with weight 1.0:

    WordStart      -> onset roots         WORD_START
    WordStart      -> nucleus roots       WORD_START          (null onset)
    onset leaves   -> nucleus roots       ONSET
    nucleus leaves -> coda roots          NUCLEUS
    coda leaves    -> WordEnd             WORD_END
    nucleus leaves -> WordEnd             WORD_END            (null coda)
    nucleus leaves -> onset roots         SYLLABLE_BOUNDARY
    nucleus leaves -> nucleus roots       SYLLABLE_BOUNDARY   (hiatus)
    coda leaves    -> onset roots         SYLLABLE_BOUNDARY
    coda leaves    -> nucleus roots       SYLLABLE_BOUNDARY

Syllable-boundary edges loop back into the graph, so every traversal
needs a visited set.

Trees are owned by one generation session. Rules mutate edge weights in
place; use ``copy()`` to hand a finished tree to another session.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from ..phonology import Phoneme, WordBoundary, to_ipa
from .hierarchy import ConsonantHierarchy, NucleusHierarchy

logger = logging.getLogger(__name__)


class PhonotacticContext(Enum):
    """The syllable position an edge leads out of."""
    ONSET = "onset"
    NUCLEUS = "nucleus"
    CODA = "coda"
    WORD_START = "word-start"
    WORD_END = "word-end"
    SYLLABLE_BOUNDARY = "syllable-boundary"

    @classmethod
    def from_label(cls, value) -> "PhonotacticContext":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace('_', '-').replace(' ', '-')
        try:
            return cls(key)
        except ValueError:
            valid = ', '.join(c.value for c in cls)
            raise ValueError(f"Unknown context '{value}'. Valid values: {valid}") from None

    @property
    def is_terminal(self) -> bool:
        """True for edges that end the current syllable."""
        return self in (PhonotacticContext.WORD_END, PhonotacticContext.SYLLABLE_BOUNDARY)


@dataclass
class PhonotacticTreeEdge:
    target: int
    context: PhonotacticContext
    weight: float = 1.0


@dataclass
class PhonotacticTreeNode:
    handle: int
    phoneme: Phoneme
    edges: List[PhonotacticTreeEdge] = field(default_factory=list)

    def edges_in(self, contexts) -> List[PhonotacticTreeEdge]:
        """Outgoing edges whose context is in contexts."""
        return [e for e in self.edges if e.context in contexts]


class PhonotacticTree:
    """Arena of nodes; handles are list indices."""

    def __init__(self):
        self.nodes: List[PhonotacticTreeNode] = []
        self.root = self.add_node(WordBoundary(initial=True))
        self.end = self.add_node(WordBoundary(initial=False))

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"PhonotacticTree(nodes={len(self.nodes)}, edges={self.edge_count})"

    def add_node(self, phoneme: Phoneme) -> int:
        handle = len(self.nodes)
        self.nodes.append(PhonotacticTreeNode(handle=handle, phoneme=phoneme))
        return handle

    def node(self, handle: int) -> PhonotacticTreeNode:
        if not 0 <= handle < len(self.nodes):
            raise IndexError(f"No node with handle {handle}")
        return self.nodes[handle]

    def connect(self, sources: Sequence[int], targets: Sequence[int],
                context: PhonotacticContext, weight: float = 1.0) -> int:
        """Add an edge from every source to every target. Returns the number added."""
        for s in sources:
            edges = self.nodes[s].edges
            for t in targets:
                edges.append(PhonotacticTreeEdge(target=t, context=context, weight=weight))
        return len(sources) * len(targets)

    @property
    def edge_count(self) -> int:
        return sum(len(n.edges) for n in self.nodes)

    def walk(self, start: Optional[int] = None) -> Iterator[PhonotacticTreeNode]:
        """Breadth-first over nodes reachable from start (default: root), each once."""
        start = self.root if start is None else start
        visited = [False] * len(self.nodes)
        visited[start] = True
        queue = deque([start])
        while queue:
            node = self.nodes[queue.popleft()]
            yield node
            for edge in node.edges:
                if not visited[edge.target]:
                    visited[edge.target] = True
                    queue.append(edge.target)

    def weights(self) -> List[Tuple[float, ...]]:
        """Snapshot of edge weights, indexed by node handle."""
        return [tuple(e.weight for e in n.edges) for n in self.nodes]

    def copy(self) -> "PhonotacticTree":
        """Same topology and weights, with independent edge objects."""
        clone = PhonotacticTree.__new__(PhonotacticTree)
        clone.root = self.root
        clone.end = self.end
        clone.nodes = [
            PhonotacticTreeNode(
                handle=n.handle,
                phoneme=n.phoneme,
                edges=[PhonotacticTreeEdge(e.target, e.context, e.weight) for e in n.edges],
            )
            for n in self.nodes
        ]
        return clone

    def describe(self, handle: int) -> str:
        """Short label for a node: its IPA, or a sentinel name."""
        phoneme = self.node(handle).phoneme
        if isinstance(phoneme, WordBoundary):
            return "#start" if phoneme.initial else "#end"
        return to_ipa(phoneme)


# =============================================================================
# Builder
# =============================================================================

def _build_clusters(tree: PhonotacticTree, hierarchy: ConsonantHierarchy,
                    context: PhonotacticContext,
                    descending: bool) -> Tuple[List[int], List[int]]:
    """
    Add one cluster hierarchy to the tree and return (roots, leaves).

    Tiers are visited in sonority order (descending for codas); each tier
    receives edges from every node of the tiers already visited. Every
    tier node and no-cluster node can start or end a cluster.
    """
    roots: List[int] = []
    leaves: List[int] = []

    tiers = reversed(hierarchy.tiers) if descending else hierarchy.tiers
    for tier in tiers:
        handles = [tree.add_node(p) for p in tier]
        tree.connect(roots, handles, context)
        roots.extend(handles)
        leaves.extend(handles)

    singles = [tree.add_node(p) for p in hierarchy.no_cluster]
    roots.extend(singles)
    leaves.extend(singles)
    return roots, leaves


def _build_nuclei(tree: PhonotacticTree, hierarchy: NucleusHierarchy) -> Tuple[List[int], List[int]]:
    onglides = [tree.add_node(p) for p in hierarchy.onglides]
    nuclei = [tree.add_node(p) for p in hierarchy.nuclei]
    offglides = [tree.add_node(p) for p in hierarchy.offglides]
    monophthongs = [tree.add_node(p) for p in hierarchy.monophthongs]
    syllabic = [tree.add_node(p) for p in hierarchy.consonants]

    tree.connect(onglides, nuclei, PhonotacticContext.NUCLEUS)
    tree.connect(nuclei, offglides, PhonotacticContext.NUCLEUS)

    roots = onglides + nuclei + monophthongs + syllabic
    leaves = nuclei + offglides + monophthongs + syllabic
    return roots, leaves


def build_tree(onset: ConsonantHierarchy, nucleus: NucleusHierarchy,
               coda: ConsonantHierarchy) -> PhonotacticTree:
    """
    Build a fresh phonotactic tree from three hierarchies.

    Identical inputs give identical topology. Hierarchies are not
    validated: an empty nucleus simply yields a tree with no route to
    WordEnd, which surfaces as an error when sampling.

    Onset and coda tiers are both listed from least to most sonorous.
    Coda tiers are chained in reverse, so a coda cluster runs from the
    last tier listed down to the first.
    """
    C = PhonotacticContext
    tree = PhonotacticTree()
    start, end = [tree.root], [tree.end]

    onset_roots, onset_leaves = _build_clusters(tree, onset, C.ONSET, descending=False)
    nucleus_roots, nucleus_leaves = _build_nuclei(tree, nucleus)
    coda_roots, coda_leaves = _build_clusters(tree, coda, C.CODA, descending=True)

    tree.connect(start, onset_roots, C.WORD_START)
    tree.connect(start, nucleus_roots, C.WORD_START)
    tree.connect(onset_leaves, nucleus_roots, C.ONSET)
    tree.connect(nucleus_leaves, coda_roots, C.NUCLEUS)
    tree.connect(coda_leaves, end, C.WORD_END)
    tree.connect(nucleus_leaves, end, C.WORD_END)
    tree.connect(nucleus_leaves, onset_roots, C.SYLLABLE_BOUNDARY)
    tree.connect(nucleus_leaves, nucleus_roots, C.SYLLABLE_BOUNDARY)
    tree.connect(coda_leaves, onset_roots, C.SYLLABLE_BOUNDARY)
    tree.connect(coda_leaves, nucleus_roots, C.SYLLABLE_BOUNDARY)

    if nucleus.is_empty:
        logger.warning("Nucleus hierarchy is empty; no word can be generated from this tree")
    logger.debug(f"Built phonotactic tree: {len(tree)} nodes, {tree.edge_count} edges")
    return tree
