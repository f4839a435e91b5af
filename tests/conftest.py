"""Shared fixtures for langgen tests."""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langgen.phonotactics import ConsonantHierarchy, NucleusHierarchy, build_tree
from langgen.phonology import phoneme_from_ipa


class SequenceRandom:
    """Random source that replays a fixed list of draws, cycling."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def random(self) -> float:
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


def ipa(*symbols):
    return [phoneme_from_ipa(s) for s in symbols]


@pytest.fixture
def basic_hierarchies():
    """Onset /p t k/, monophthongs /a i u/, coda /n/."""
    return (
        ConsonantHierarchy(onset=True, tiers=[ipa("p", "t", "k")]),
        NucleusHierarchy(monophthongs=ipa("a", "i", "u")),
        ConsonantHierarchy(onset=False, no_cluster=ipa("n")),
    )


@pytest.fixture
def basic_tree(basic_hierarchies):
    return build_tree(*basic_hierarchies)
