#!/usr/bin/env python3
"""
Random Sources
==============
Random number sources for word generation.

The engine never reaches for a module-global generator: every generator
and session is handed its own source. Anything exposing ``random()``
returning a float in [0.0, 1.0) will do, which lets tests substitute a
scripted sequence.

    new_rng()       -> TrueRandom (hardware entropy, not reproducible)
    new_rng(seed)   -> random.Random(seed) (reproducible)
"""

import random
import secrets
from typing import Optional


class TrueRandom:
    """
    Cryptographically secure random source using hardware entropy.

    Backed by secrets.SystemRandom, which draws from os.urandom()
    (the system entropy pool, hardware RNG if available).
    """

    def __init__(self):
        self._rng = secrets.SystemRandom()

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()


def new_rng(seed: Optional[int] = None):
    """Fresh random source; seeded sources are reproducible."""
    if seed is None:
        return TrueRandom()
    return random.Random(seed)


__all__ = ['TrueRandom', 'new_rng']
