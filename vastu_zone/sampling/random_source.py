"""
Random Sources
==============

Explicit, seedable random generators for the coverage sampler.

Design:
- The generator is always passed in, never module-level state
- One child generator per task for concurrent sampling
- Children are spawned in a fixed order, so task k always sees the same
  stream for a given seed regardless of worker count
"""

from typing import List, Union

import numpy as np

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """
    Create a generator from a seed (or pass a generator through).

    Args:
        seed: int / SeedSequence for reproducible draws, None for fresh OS entropy,
              or an existing Generator (returned as is)
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def spawn_rngs(seed: SeedLike, count: int) -> List[np.random.Generator]:
    """
    Create ``count`` statistically independent child generators.

    Args:
        seed: Same forms as make_rng()
        count: Number of children (>= 0)

    Returns:
        List of generators, child k deterministic for a fixed seed
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if isinstance(seed, np.random.Generator):
        return list(seed.spawn(count))

    sequence = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    return [np.random.default_rng(child) for child in sequence.spawn(count)]

