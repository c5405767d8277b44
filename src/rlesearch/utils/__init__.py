"""Grids, RLE codec and pattern utilities for Game of Life searches"""

from .rle import RLEError, decode, encode, guess_kind, read_lines
from .game_of_life import Pattern
from .history import HistoryPattern
from .patterns import get_pattern, load, load_template, PATTERN_CATEGORIES
from .soup import random_soup, plant

__all__ = [
    'RLEError',
    'decode',
    'encode',
    'guess_kind',
    'read_lines',
    'Pattern',
    'HistoryPattern',
    'get_pattern',
    'load',
    'load_template',
    'PATTERN_CATEGORIES',
    'random_soup',
    'plant',
]
