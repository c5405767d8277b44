"""
Object search over evolving Game of Life patterns.

A background pattern is embedded in a slightly larger torus and simulated
generation by generation. Before each step every distinct orientation of the
object template is matched against the grid. Gliders that reach the border
are erased before they can wrap around and hit the opposite side, so the
small torus behaves like a patch of the infinite plane.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..utils.game_of_life import Pattern
from ..utils.history import HistoryPattern
from ..utils import patterns
from .orientation import distinct_orientations


logger = logging.getLogger(__name__)

# Empirically sized for gliders; faster or larger spaceships are not
# guaranteed to be absorbed.
MARGIN = 3
GLIDER_SIZE = 3


@dataclass(frozen=True)
class Match:
    """Where and when an object was found, relative to the background's own frame."""
    x: int
    y: int
    x_percent: int
    y_percent: int
    tick: int
    orientation: int
    width: int = field(default=0, compare=False)
    height: int = field(default=0, compare=False)
    margin: int = field(default=MARGIN, compare=False, repr=False)
    grid: Optional[Pattern] = field(default=None, compare=False, repr=False)


def _percent(offset: int, slack: int) -> int:
    if slack == 0:
        return 0
    # Truncate toward zero; offsets inside the margin are negative
    return int(100 * offset / slack)


def _glider_signatures() -> List[Tuple[str, Pattern]]:
    sides = [
        ('top', patterns.GLIDER_TOP),
        ('bottom', patterns.GLIDER_BOTTOM),
        ('left', patterns.GLIDER_LEFT),
        ('right', patterns.GLIDER_RIGHT),
    ]
    return [(side, patterns.load(data)) for side, phases in sides for data in phases]


class ObjectSearch:
    """
    Search for one object template in any number of backgrounds.

    The distinct orientations of the object are computed once and reused for
    every background.
    """

    def __init__(self, obj: HistoryPattern, margin: int = MARGIN):
        if margin < 0:
            raise ValueError(f"Margin must be non-negative, got {margin}")
        self.obj = obj
        self.margin = margin
        self.orientations = distinct_orientations(obj)
        self.gliders = _glider_signatures()
        logger.debug("Object %dx%d has %d distinct orientations",
                     obj.width, obj.height, len(self.orientations))

    def _embed(self, background: Pattern) -> Pattern:
        m = self.margin
        expanded = Pattern(background.width + 2 * m, background.height + 2 * m)
        expanded.stamp(background, m, m)
        return expanded

    def _glider_at_border(self, grid: Pattern) -> bool:
        g = GLIDER_SIZE
        if grid.width < g or grid.height < g:
            return False
        strips = {
            'top': (0, 0, grid.width - g + 1, 1),
            'bottom': (0, grid.height - g, grid.width - g + 1, 1),
            'left': (0, 0, 1, grid.height - g + 1),
            'right': (grid.width - g, 0, 1, grid.height - g + 1),
        }
        for side, glider in self.gliders:
            if grid.search(glider, *strips[side]):
                logger.debug("Glider leaving through the %s border", side)
                return True
        return False

    def _clear_border(self, grid: Pattern) -> None:
        m = self.margin
        grid.clear(0, 0, grid.width, m)
        grid.clear(0, grid.height - m, grid.width, m)
        grid.clear(0, 0, m, grid.height)
        grid.clear(grid.width - m, 0, m, grid.height)

    def search(self, background: Pattern, ticks: int) -> Optional[Match]:
        """
        Look for the object in ``background`` during its first ``ticks`` generations.

        Args:
            background: Pattern to embed and simulate
            ticks: Number of generations to test, at least 1

        Returns:
            The first Match found, or None
        """
        if ticks < 1:
            raise ValueError(f"Tick budget must be at least 1, got {ticks}")

        expanded = self._embed(background)
        candidates = [(index, t) for index, t in self.orientations
                      if t.width <= expanded.width and t.height <= expanded.height]
        if not candidates:
            raise ValueError(
                f"Object {self.obj.width}x{self.obj.height} does not fit in "
                f"{background.width}x{background.height} background")

        for tick in range(ticks):
            cells = expanded.to_array()
            for orientation, transformed in candidates:
                hit = transformed.find_in_cells(cells)
                if hit is None:
                    continue
                x = hit[0] - self.margin
                y = hit[1] - self.margin
                logger.debug("Matched orientation %d at (%d, %d) on tick %d",
                             orientation, x, y, tick)
                return Match(
                    x=x,
                    y=y,
                    x_percent=_percent(x, background.width - transformed.width),
                    y_percent=_percent(y, background.height - transformed.height),
                    tick=tick,
                    orientation=orientation,
                    width=transformed.width,
                    height=transformed.height,
                    margin=self.margin,
                    grid=expanded,
                )

            if self.margin > 0 and self._glider_at_border(expanded):
                self._clear_border(expanded)
            expanded = expanded.advance()

        return None


def search_object(obj: HistoryPattern,
                  background: Pattern,
                  ticks: int,
                  margin: int = MARGIN) -> Optional[Match]:
    """Search ``background`` for ``obj`` over ``ticks`` generations."""
    return ObjectSearch(obj, margin).search(background, ticks)
