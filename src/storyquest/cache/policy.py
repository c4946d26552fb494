"""Call-site policy deciding whether a request consults the cache at all."""

from __future__ import annotations

import random
from collections.abc import Callable

# Stories are re-generated 70% of the time even when a cached copy exists.
# Images carry no gate: they are always looked up.
STORY_CACHE_PROBABILITY = 0.3


def should_consult_cache(
    probability: float,
    random_source: Callable[[], float] = random.random,
) -> bool:
    """Draw once from ``random_source`` (uniform in [0, 1)) against ``probability``."""
    return random_source() < probability
