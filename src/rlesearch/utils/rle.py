"""
Run-length encoded (RLE) pattern files.

Both grid kinds share the same file layout: ``#`` comment lines, one
``x = W, y = H`` header, then a stream of ``<count><tag>`` runs where ``$``
ends a row and ``!`` ends the pattern. Only the tag alphabet differs:
``o``/``b`` for plain Life patterns, ``.``/``A``-``Z`` for multi-state
templates.
"""
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np


HEADER_RE = re.compile(r"^x\s*=\s*([0-9]+)\s*,\s*y\s*=\s*([0-9]+)")
RULE = "B3/S23"
LINE_WIDTH = 70

LIFE_TAGS: Dict[str, int] = {'b': 0, 'o': 1}
HISTORY_TAGS: Dict[str, int] = {'.': 0}
HISTORY_TAGS.update({chr(ord('A') + i): i + 1 for i in range(26)})


class RLEError(ValueError):
    """Raised when RLE text cannot be parsed."""


def read_lines(path) -> List[str]:
    """Return the lines of an RLE file without line terminators.

    Bytes that are not UTF-8, as in legacy comment lines, become U+FFFD.
    """
    return Path(path).read_text(encoding="utf-8", errors="replace").splitlines()


def parse_header(line: str) -> Tuple[int, int]:
    """Return ``(width, height)`` from an ``x = W, y = H`` header line."""
    match = HEADER_RE.match(line)
    if not match:
        raise RLEError(f"Malformed RLE header: {line!r}")
    width, height = int(match.group(1)), int(match.group(2))
    if width < 1 or height < 1:
        raise RLEError(f"RLE header has empty dimensions: {line!r}")
    return width, height


def decode(lines: Iterable[str], tags: Dict[str, int]) -> Tuple[int, int, np.ndarray]:
    """
    Decode RLE text into a cell-state array.

    Args:
        lines: Text lines, comments and header included
        tags: Mapping from tag character to cell state

    Returns:
        ``(width, height, cells)`` where ``cells`` is a (H, W) uint8 array
    """
    cells: Optional[np.ndarray] = None
    width = height = 0
    x = y = 0
    count = ""

    for line in lines:
        if line.startswith('#'):
            continue
        if line.startswith('x'):
            if cells is not None:
                raise RLEError("RLE text contains more than one header line")
            width, height = parse_header(line)
            cells = np.zeros((height, width), dtype=np.uint8)
            continue

        for c in line:
            if '0' <= c <= '9':
                count += c
                continue
            if c == '!':
                if cells is None:
                    raise RLEError("RLE data found before the header line")
                return width, height, cells
            if c == '$':
                if cells is None:
                    raise RLEError("RLE data found before the header line")
                x = 0
                y += int(count) if count else 1
                count = ""
            elif c in tags:
                if cells is None:
                    raise RLEError("RLE data found before the header line")
                state = tags[c]
                for _ in range(int(count) if count else 1):
                    # Coordinates wrap around the torus
                    cells[y % height, x % width] = state
                    x = (x + 1) % width
                count = ""

    if cells is None:
        raise RLEError("RLE text has no header line")
    return width, height, cells


def guess_kind(lines: Iterable[str]) -> str:
    """Return ``'life'`` for o/b data and ``'history'`` otherwise."""
    for line in lines:
        if line.startswith('#') or line.startswith('x'):
            continue
        data = line.split('!', 1)[0]
        if any(c in LIFE_TAGS for c in data):
            return 'life'
        if '!' in line:
            break
    return 'history'


def encode(cells: np.ndarray, comment: Optional[str] = None) -> List[str]:
    """
    Encode a boolean (H, W) array as RLE text lines.

    Runs of identical tags are collapsed, a count of 1 is omitted and the data
    is wrapped at ``LINE_WIDTH`` characters without splitting a run.
    """
    height, width = cells.shape
    lines = []
    if comment is not None:
        lines.append(f"#C {comment}")
    lines.append(f"x = {width}, y = {height}, rule = {RULE}")

    tags = []
    for y in range(height):
        tags.extend('o' if alive else 'b' for alive in cells[y])
        tags.append('!' if y == height - 1 else '$')

    current = ""
    i = 0
    while i < len(tags):
        run = 1
        while i + 1 < len(tags) and tags[i + 1] == tags[i]:
            i += 1
            run += 1
        token = tags[i] if run == 1 else f"{run}{tags[i]}"
        if len(current) + len(token) > LINE_WIDTH:
            lines.append(current)
            current = ""
        current += token
        i += 1
    lines.append(current)
    return lines
