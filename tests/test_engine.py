import numpy as np
import pytest

from rlesearch.search.engine import MARGIN, Match, ObjectSearch, search_object
from rlesearch.utils.game_of_life import Pattern
from rlesearch.utils.history import HistoryPattern
from rlesearch.utils.patterns import get_pattern, load, load_template


def background(width, height, *placements):
    grid = Pattern(width, height)
    for pattern, x, y in placements:
        grid.stamp(pattern, x, y)
    return grid


def ringed_block():
    states = np.zeros((4, 4), dtype=np.uint8)
    states[1:3, 1:3] = 1
    return HistoryPattern.from_array(states)


def test_glider_in_corner_found_immediately():
    bg = background(20, 20, (get_pattern('glider'), 17, 17))
    match = search_object(load_template("bo$2bo$3o!"), bg, 8)
    assert match == Match(x=17, y=17, x_percent=100, y_percent=100, tick=0, orientation=0)
    assert (match.width, match.height) == (3, 3)


def test_reflected_phase_reports_orientation():
    bg = background(12, 12, (load("bo$o$3o!"), 5, 2))
    match = search_object(load_template("bo$2bo$3o!"), bg, 1)
    assert match == Match(x=5, y=2, x_percent=55, y_percent=22, tick=0, orientation=2)


def test_object_appearing_after_evolution():
    # An L-tromino becomes a block one generation later
    bg = background(8, 8, (load("2o$o!"), 3, 3))
    match = search_object(ringed_block(), bg, 4)
    assert match == Match(x=2, y=2, x_percent=50, y_percent=50, tick=1, orientation=0)


def test_not_found_within_budget():
    bg = background(10, 10, (load("2o$o!"), 3, 3))
    assert search_object(ringed_block(), bg, 1) is None
    assert search_object(ringed_block(), Pattern(10, 10), 5) is None


def test_match_inside_margin_has_negative_offset():
    bg = background(6, 6, (get_pattern('block'), 0, 0))
    match = search_object(ringed_block(), bg, 1)
    assert (match.x, match.y) == (-1, -1)
    assert (match.x_percent, match.y_percent) == (-50, -50)


def test_zero_slack_reports_zero_percent():
    bg = background(4, 4, (get_pattern('block'), 1, 1))
    match = search_object(ringed_block(), bg, 1)
    assert (match.x, match.y, match.x_percent, match.y_percent) == (0, 0, 0, 0)


def test_rejects_bad_budget():
    with pytest.raises(ValueError):
        search_object(ringed_block(), Pattern(10, 10), 0)


def test_rejects_object_larger_than_background():
    big = HistoryPattern(30, 30)
    with pytest.raises(ValueError):
        search_object(big, Pattern(5, 5), 3)


def test_escaping_glider_is_absorbed():
    bg = background(10, 10, (get_pattern('glider'), 4, 4))
    empty = HistoryPattern(10 + 2 * MARGIN, 10 + 2 * MARGIN)
    match = search_object(empty, bg, 40)
    assert match is not None
    assert (match.x, match.y) == (-MARGIN, -MARGIN)
    assert match.tick == 25


def test_glider_border_detection():
    searcher = ObjectSearch(ringed_block())
    grid = Pattern(16, 16)
    grid.stamp(get_pattern('glider'), 13, 13)
    assert searcher._glider_at_border(grid)
    searcher._clear_border(grid)
    assert grid.population == 0

    centre = Pattern(16, 16)
    centre.stamp(get_pattern('glider'), 6, 6)
    assert not searcher._glider_at_border(centre)


@pytest.mark.parametrize("data,x,y", [
    ("3o$2bo$bo!", 5, 0),
    ("bo$o$3o!", 2, 13),
    ("2o$obo$o!", 0, 7),
    ("b2o$obo$2bo!", 13, 4),
])
def test_each_border_strip(data, x, y):
    searcher = ObjectSearch(ringed_block())
    grid = Pattern(16, 16)
    grid.stamp(load(data), x, y)
    assert searcher._glider_at_border(grid)


def test_searcher_is_reusable():
    searcher = ObjectSearch(load_template("bo$2bo$3o!"))
    first = searcher.search(background(20, 20, (get_pattern('glider'), 17, 17)), 8)
    second = searcher.search(background(12, 12, (get_pattern('glider'), 0, 0)), 8)
    assert (first.x, first.y) == (17, 17)
    assert (second.x, second.y) == (0, 0)
