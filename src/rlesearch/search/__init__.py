"""Orientation reduction and the match/simulate/absorb search loop."""

from .orientation import distinct_orientations, describe_orientation
from .engine import Match, ObjectSearch, search_object, MARGIN

__all__ = [
    'distinct_orientations',
    'describe_orientation',
    'Match',
    'ObjectSearch',
    'search_object',
    'MARGIN',
]
