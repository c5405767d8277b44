"""Random soups with planted objects, for building sample search corpora."""
from typing import Optional, Tuple

import numpy as np

from .game_of_life import Pattern


def random_soup(grid_size: Tuple[int, int] = (32, 32),
                density: float = 0.3,
                rng: Optional[np.random.Generator] = None) -> Pattern:
    """
    Generate a random initial state.

    Args:
        grid_size: Grid dimensions as (height, width)
        density: Probability of alive cell
        rng: Random generator, a fresh unseeded one by default

    Returns:
        Random Pattern
    """
    rng = rng if rng is not None else np.random.default_rng()
    h, w = grid_size
    return Pattern.from_array((rng.random((h, w)) < density).astype(np.uint8))


def plant(background: Pattern, obj: Pattern, x: int, y: int, clearance: int = 1) -> Pattern:
    """
    Return a copy of ``background`` with ``obj`` written at (x, y).

    The object's bounding box plus ``clearance`` cells around it is cleared
    first so the object is not merged into neighbouring debris.
    """
    result = Pattern.from_array(background.to_array())
    x0 = max(x - clearance, 0)
    y0 = max(y - clearance, 0)
    x1 = min(x + obj.width + clearance, result.width)
    y1 = min(y + obj.height + clearance, result.height)
    result.clear(x0, y0, x1 - x0, y1 - y0)
    result.stamp(obj, x, y)
    return result
