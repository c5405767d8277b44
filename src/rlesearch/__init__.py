"""Search Game of Life pattern collections for a known object."""

from .utils import HistoryPattern, Pattern, RLEError
from .search import Match, ObjectSearch, search_object

__all__ = [
    'HistoryPattern',
    'Pattern',
    'RLEError',
    'Match',
    'ObjectSearch',
    'search_object',
]
