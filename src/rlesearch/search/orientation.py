"""Symmetry reduction of search templates."""
from typing import Dict, List, Tuple

from ..utils.history import HistoryPattern


def orientation_index(swap: bool, reverse_x: bool, reverse_y: bool) -> int:
    return int(swap) * 4 + int(reverse_x) * 2 + int(reverse_y)


def describe_orientation(index: int) -> str:
    """Return a readable name such as ``'swap+flip-x'`` for an orientation index."""
    if not 0 <= index < 8:
        raise ValueError(f"Orientation must be in 0..7, got {index}")
    parts = []
    if index & 4:
        parts.append('swap')
    if index & 2:
        parts.append('flip-x')
    if index & 1:
        parts.append('flip-y')
    return '+'.join(parts) if parts else 'identity'


def distinct_orientations(template: HistoryPattern) -> List[Tuple[int, HistoryPattern]]:
    """
    Enumerate the distinct rotations and reflections of a template.

    The 8 combinations of axis swap, X reversal and Y reversal are generated
    in index order; transforms that produce an identical grid are merged and
    keep the lowest index.

    Returns:
        List of (orientation index, transformed template) in index order
    """
    transforms: Dict[HistoryPattern, int] = {}
    for swap in (False, True):
        for reverse_x in (False, True):
            for reverse_y in (False, True):
                transformed = template.transformed(swap, reverse_x, reverse_y)
                transforms.setdefault(transformed, orientation_index(swap, reverse_x, reverse_y))
    return [(index, transformed) for transformed, index in transforms.items()]
