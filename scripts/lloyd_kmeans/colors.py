"""Random color tags for clusters."""

import random
from typing import Optional


def get_random_color(rng: Optional[random.Random] = None) -> str:
    """
    Pick a random color as a '#RRGGBB' hex string.

    Args:
        rng: Optional random source; the module-level generator is used
            when omitted.

    Returns:
        Hex color string
    """
    source = rng if rng is not None else random
    return f"#{source.randrange(0x1000000):06X}"
