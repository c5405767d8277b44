"""Bit-packed Conway's Game of Life grid with periodic boundary conditions."""
import logging
from typing import Optional, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from . import rle


logger = logging.getLogger(__name__)

WORD_BITS = 64
_ONE = np.uint64(1)
_TOP = np.uint64(WORD_BITS - 1)
_FULL = np.uint64(0xFFFFFFFFFFFFFFFF)


def _half_adder(a: np.ndarray, b: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return (carry, sum) planes of a + b."""
    return a & b, a ^ b


def _full_adder(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return (carry, sum) planes of a + b + c."""
    t = a ^ b
    return (a & b) | (t & c), t ^ c


class Pattern:
    """
    Toroidal grid of alive/dead cells packed 64 to a word.

    Row ``y`` is stored as ``word_width`` uint64 words; bit ``i`` of word
    ``k`` holds cell ``x = 64 * k + i``. Bits past ``width`` in the last word
    of a row are always zero.
    """

    def __init__(self, width: int, height: int):
        """Create an empty (all dead) grid."""
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.word_width = (width + WORD_BITS - 1) // WORD_BITS
        self.cells = np.zeros((height, self.word_width), dtype=np.uint64)

    # ------------------------------------------------------------------
    # Construction and conversion
    # ------------------------------------------------------------------
    @classmethod
    def from_array(cls, state: np.ndarray) -> "Pattern":
        """Build a grid from an (H, W) array where nonzero means alive."""
        height, width = state.shape
        pattern = cls(width, height)
        pattern._load(state)
        return pattern

    @classmethod
    def read_rle(cls, *lines: str) -> "Pattern":
        """Parse a grid from RLE lines using ``o``/``b`` tags."""
        _, _, cells = rle.decode(lines, rle.LIFE_TAGS)
        return cls.from_array(cells)

    @classmethod
    def from_file(cls, path) -> "Pattern":
        return cls.read_rle(*rle.read_lines(path))

    def to_array(self) -> np.ndarray:
        """Return the cells as an (H, W) uint8 array of 0/1."""
        raw = self.cells.astype('<u8').view(np.uint8)
        bits = np.unpackbits(raw, axis=1, bitorder='little')
        return bits[:, :self.width]

    def _load(self, state: np.ndarray) -> None:
        padded = np.zeros((self.height, self.word_width * WORD_BITS), dtype=np.uint8)
        padded[:, :self.width] = state != 0
        packed = np.packbits(padded, axis=1, bitorder='little')
        self.cells = packed.view('<u8').astype(np.uint64)

    def write_rle(self, path, comment: Optional[str] = None) -> None:
        """Write the grid to ``path`` in RLE format."""
        with open(path, 'w') as f:
            f.write("\n".join(rle.encode(self.to_array(), comment)) + "\n")

    def crop(self, x: int, y: int, width: int, height: int) -> "Pattern":
        """Copy a ``width`` x ``height`` region starting at (x, y), wrapping around the torus."""
        rows = np.arange(y, y + height) % self.height
        cols = np.arange(x, x + width) % self.width
        return Pattern.from_array(self.to_array()[np.ix_(rows, cols)])

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def __getitem__(self, xy: Tuple[int, int]) -> bool:
        x, y = xy
        self._check(x, y)
        word = int(self.cells[y, x // WORD_BITS])
        return bool(word >> (x % WORD_BITS) & 1)

    def __setitem__(self, xy: Tuple[int, int], alive: bool) -> None:
        x, y = xy
        self._check(x, y)
        word = int(self.cells[y, x // WORD_BITS])
        bit = 1 << (x % WORD_BITS)
        self.cells[y, x // WORD_BITS] = word | bit if alive else word & ~bit

    @property
    def population(self) -> int:
        """Number of live cells."""
        return int(self.to_array().sum())

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def advance(self) -> "Pattern":
        """
        Compute the next generation under B3/S23.

        Every word is processed in parallel: the left and right neighbour
        planes of each row are built with shifts (carrying bits across word
        boundaries and wrapping the partial last word), the rows above and
        below come from a toroidal roll, and a carry-save adder network sums
        the eight neighbour planes into enough bits to tell 2 and 3 apart
        from every other count.
        """
        cells = self.cells
        last = np.uint64((self.width - 1) % WORD_BITS)
        tail = self.width % WORD_BITS
        tail_mask = _FULL if tail == 0 else np.uint64((1 << tail) - 1)

        # Bit x of `east` is cell x + 1, bit x of `west` is cell x - 1
        east = cells >> _ONE
        east[:, :-1] |= cells[:, 1:] << _TOP
        east[:, -1] |= (cells[:, 0] & _ONE) << last

        west = cells << _ONE
        west[:, 1:] |= cells[:, :-1] >> _TOP
        west[:, -1] &= tail_mask
        west[:, 0] |= cells[:, -1] >> last

        def north(plane):
            return np.roll(plane, 1, axis=0)

        def south(plane):
            return np.roll(plane, -1, axis=0)

        e_twos, e_ones = _full_adder(north(east), east, south(east))
        w_twos, w_ones = _full_adder(north(west), west, south(west))
        v_twos, v_ones = _half_adder(north(cells), south(cells))
        twos_a, ones = _full_adder(e_ones, w_ones, v_ones)
        fours, twos_b = _full_adder(e_twos, w_twos, v_twos)

        result = Pattern(self.width, self.height)
        result.cells = (cells | ones) & (twos_a ^ twos_b) & ~fours
        return result

    def simulate(self, steps: int) -> "Pattern":
        """Return the grid after ``steps`` generations."""
        current = self
        for _ in range(steps):
            current = current.advance()
        return current

    # ------------------------------------------------------------------
    # Editing and searching
    # ------------------------------------------------------------------
    def _check_rect(self, x: int, y: int, width: int, height: int) -> None:
        if width < 0 or height < 0 or x < 0 or y < 0 \
                or x + width > self.width or y + height > self.height:
            raise ValueError(
                f"Rectangle ({x}, {y}, {width}, {height}) outside "
                f"{self.width}x{self.height} grid")

    def clear(self, x: int, y: int, width: int, height: int) -> None:
        """Kill every cell in the rectangle."""
        self._check_rect(x, y, width, height)
        state = self.to_array()
        state[y:y + height, x:x + width] = 0
        self._load(state)

    def stamp(self, source: "Pattern", xo: int, yo: int) -> None:
        """OR the live cells of ``source`` into this grid at offset (xo, yo)."""
        self._check_rect(xo, yo, source.width, source.height)
        state = self.to_array()
        state[yo:yo + source.height, xo:xo + source.width] |= source.to_array()
        self._load(state)

    def search(self, template: "Pattern", x: int, y: int, width: int, height: int) -> bool:
        """
        Check for an exact copy of ``template`` at any offset in a rectangle.

        Args:
            template: Pattern that must match cell for cell
            x, y: First offset to try
            width, height: Number of offsets to try along each axis

        Returns:
            True if some offset matches
        """
        if width == 0 or height == 0:
            return False
        self._check_rect(x, y, width + template.width - 1, height + template.height - 1)
        region = self.to_array()[y:y + height + template.height - 1,
                                 x:x + width + template.width - 1]
        windows = sliding_window_view(region, (template.height, template.width))
        return bool((windows == template.to_array()).all(axis=(2, 3)).any())

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"Pattern({self.width}x{self.height}, population={self.population})"
