"""Predefined Game of Life patterns, stored as RLE data strings."""
from .rle import LIFE_TAGS
from .game_of_life import Pattern
from .history import HistoryPattern


# Still Lifes (period 1)
BLOCK = "2o$2o!"
BEEHIVE = "b2o$o2bo$b2o!"
BOAT = "2o$obo$bo!"
LOAF = "b2o$o2bo$bobo$2bo!"

# Oscillators (period 2)
BLINKER = "3o!"
TOAD = "b3o$3o!"
BEACON = "2o$2o$2b2o$2b2o!"

# Spaceships (period 4)
GLIDER = "bo$2bo$3o!"
LWSS = "bo2bo$o$o3bo$4o!"


# Glider phases whose leading edge faces the border they are about to cross.
# Two phases per side are enough to catch every glider inside a 3-cell strip.
GLIDER_TOP = ("3o$2bo$bo!", "3o$o$bo!")
GLIDER_BOTTOM = ("bo$2bo$3o!", "bo$o$3o!")
GLIDER_LEFT = ("2o$obo$o!", "o$obo$2o!")
GLIDER_RIGHT = ("2bo$obo$b2o!", "b2o$obo$2bo!")


PATTERN_CATEGORIES = {
    'still_lifes': {
        'block': BLOCK,
        'beehive': BEEHIVE,
        'boat': BOAT,
        'loaf': LOAF
    },
    'oscillators_p2': {
        'blinker': BLINKER,
        'toad': TOAD,
        'beacon': BEACON
    },
    'spaceships': {
        'glider': GLIDER,
        'lwss': LWSS
    }
}


def _bounding_header(data: str) -> str:
    rows = data.rstrip('!').split('$')
    width = 0
    for row in rows:
        cells = 0
        count = ""
        for c in row:
            if '0' <= c <= '9':
                count += c
            elif c in LIFE_TAGS:
                cells += int(count) if count else 1
                count = ""
        width = max(width, cells)
    return f"x = {width}, y = {len(rows)}"


def load(data: str) -> Pattern:
    """Build a tight Pattern from an RLE data string without header."""
    return Pattern.read_rle(_bounding_header(data), data)


def load_template(data: str) -> HistoryPattern:
    """Build a template where live cells must be alive and dead cells must be dead."""
    return HistoryPattern.from_array(load(data).to_array())


def get_pattern(name: str) -> Pattern:
    """Return the requested pattern by name."""
    for category in PATTERN_CATEGORIES.values():
        if name in category:
            return load(category[name])

    available = [pattern for cat in PATTERN_CATEGORIES.values() for pattern in cat.keys()]
    raise ValueError(f"Pattern '{name}' not found. Available patterns: {available}")
