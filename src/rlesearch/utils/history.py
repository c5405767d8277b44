"""Multi-state template grids used for wildcard pattern matching."""
from typing import Optional, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from . import rle
from .game_of_life import Pattern


DEAD_STATE = 0
ALIVE_STATES = (1, 5)


class HistoryPattern:
    """
    Toroidal grid of small integer cell states.

    Only used as a search template, never simulated. State 0 requires a dead
    cell, states 1 and 5 require a live cell and every other state matches
    either.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells = np.zeros((height, width), dtype=np.uint8)

    @classmethod
    def from_array(cls, states: np.ndarray) -> "HistoryPattern":
        height, width = states.shape
        pattern = cls(width, height)
        pattern.cells[:] = states
        return pattern

    @classmethod
    def read_rle(cls, *lines: str) -> "HistoryPattern":
        """Parse a template from RLE lines using ``.`` and ``A``-``Z`` tags."""
        _, _, cells = rle.decode(lines, rle.HISTORY_TAGS)
        return cls.from_array(cells)

    @classmethod
    def from_file(cls, path) -> "HistoryPattern":
        return cls.read_rle(*rle.read_lines(path))

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def __getitem__(self, xy: Tuple[int, int]) -> int:
        x, y = xy
        self._check(x, y)
        return int(self.cells[y, x])

    def __setitem__(self, xy: Tuple[int, int], state: int) -> None:
        x, y = xy
        self._check(x, y)
        self.cells[y, x] = state

    def to_pattern(self) -> Pattern:
        """Convert to a binary grid where only state 1 is alive."""
        return Pattern.from_array(self.cells == 1)

    def transformed(self, swap: bool, reverse_x: bool, reverse_y: bool) -> "HistoryPattern":
        """Return a mirrored and/or transposed copy."""
        states = self.cells
        if reverse_x:
            states = states[:, ::-1]
        if reverse_y:
            states = states[::-1, :]
        if swap:
            states = states.T
        return HistoryPattern.from_array(np.ascontiguousarray(states))

    @property
    def alive_mask(self) -> np.ndarray:
        return np.isin(self.cells, ALIVE_STATES)

    @property
    def dead_mask(self) -> np.ndarray:
        return self.cells == DEAD_STATE

    def matches_at(self, target: Pattern, x: int, y: int) -> bool:
        """Check whether the template fits ``target`` with its corner at (x, y)."""
        if x < 0 or y < 0 or x + self.width > target.width or y + self.height > target.height:
            raise ValueError(
                f"Template {self.width}x{self.height} at ({x}, {y}) leaves "
                f"{target.width}x{target.height} target")
        window = target.to_array()[y:y + self.height, x:x + self.width].astype(bool)
        return bool(window[self.alive_mask].all() and not window[self.dead_mask].any())

    def find_in(self, target: Pattern) -> Optional[Tuple[int, int]]:
        """Return the first (x, y) where the template matches, scanning row by row."""
        return self.find_in_cells(target.to_array())

    def find_in_cells(self, cells: np.ndarray) -> Optional[Tuple[int, int]]:
        """Same as :meth:`find_in` on an (H, W) 0/1 array."""
        height, width = cells.shape
        if self.width > width or self.height > height:
            raise ValueError(
                f"Template {self.width}x{self.height} does not fit in {width}x{height} grid")
        windows = sliding_window_view(cells.astype(bool), (self.height, self.width))
        alive_ok = windows[:, :, self.alive_mask].all(axis=-1)
        dead_ok = ~windows[:, :, self.dead_mask].any(axis=-1)
        hits = np.argwhere(alive_ok & dead_ok)
        if len(hits) == 0:
            return None
        y, x = hits[0]
        return int(x), int(y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, HistoryPattern):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"HistoryPattern({self.width}x{self.height})"
