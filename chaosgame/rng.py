import random
from typing import Optional

class RNG(random.Random):
    """Seeded RNG so a run can be replayed point for point."""


def new_rng(seed: Optional[int] = None) -> RNG:
    rng = RNG()
    rng.seed(seed)
    return rng
