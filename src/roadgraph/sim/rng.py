# sim/rng.py
from __future__ import annotations

from functools import cache
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _tag(p: object) -> int:
    if isinstance(p, (int, np.integer)):
        return _u32(int(p))
    # stable, portable stringification then crc
    s = p if isinstance(p, str) else repr(p)
    return _u32(crc32(s.encode("utf-8")))


class RNGRegistry:
    """
    Deterministic named numpy.random.Generator streams.
    Entropy path: [master_seed, scenario, name, *parts], so the draws of one
    stream never depend on which other streams were requested first.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _tag(str(scenario))

    @cache
    def substream(self, name: str, *parts: object) -> np.random.Generator:
        ss = np.random.SeedSequence(
            entropy=[self.master_seed, self.scenario_tag, _tag(name), *(_tag(p) for p in parts)]
        )
        return np.random.Generator(np.random.PCG64(ss))

    def stream(self, name: str) -> np.random.Generator:
        return self.substream(name)
