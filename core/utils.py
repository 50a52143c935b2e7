from __future__ import annotations

import uuid
from typing import Optional, Tuple

import numpy as np

# self-selected seeds stay in the positive signed 32-bit range
_SEED_CEILING = 2_147_483_647


def resolve_seed(seed: Optional[int]) -> Tuple[int, bool]:
    """
    Return (seed, self_selected). Without a caller seed, draw one from OS
    entropy; such runs are not reproducible unless the returned seed is kept.
    """
    if seed is not None:
        return int(seed), False
    return int(np.random.default_rng().integers(0, _SEED_CEILING)), True


def generate_range_id() -> str:
    """Short random identifier for a user range (stable for its UI lifetime only)."""
    return uuid.uuid4().hex[:9]
