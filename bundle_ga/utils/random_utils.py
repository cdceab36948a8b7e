"""
Random utilities for reproducibility

The bundle search draws from one shared random source. Seeding it here makes
a run repeatable; leaving the seed out gives a non-reproducible run.
"""

import random
from typing import Optional

import numpy as np


def set_seed(seed: Optional[int] = None) -> None:
    """
    Seed Python's and numpy's global random generators

    Args:
        seed: Random seed value. None seeds from system entropy
    """
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create an independent random source for one run"""
    return random.Random(seed)
