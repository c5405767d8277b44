import numpy as np
import pytest

from rlesearch.search.orientation import describe_orientation, distinct_orientations
from rlesearch.utils.history import HistoryPattern
from rlesearch.utils.patterns import load_template


@pytest.mark.parametrize("data", ["o!", "2o$2o!", "bo$3o$bo!"])
def test_symmetric_templates_collapse_to_one(data):
    orientations = distinct_orientations(load_template(data))
    assert [index for index, _ in orientations] == [0]


def test_blinker_has_two_orientations():
    orientations = distinct_orientations(load_template("3o!"))
    assert [index for index, _ in orientations] == [0, 4]
    assert (orientations[1][1].width, orientations[1][1].height) == (1, 3)


def test_asymmetric_template_has_eight_orientations():
    r_pentomino = load_template("b2o$2o$bo!")
    orientations = distinct_orientations(r_pentomino)
    assert [index for index, _ in orientations] == list(range(8))
    assert len({t for _, t in orientations}) == 8


def test_duplicates_keep_lowest_index():
    # Mirror-symmetric left to right, so reversing X changes nothing
    arrow = load_template("bo$3o!")
    orientations = dict((index, t) for index, t in distinct_orientations(arrow))
    assert sorted(orientations) == [0, 1, 4, 5]


def test_orientation_transforms():
    t = HistoryPattern.from_array(np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint8))
    orientations = dict(distinct_orientations(t))
    assert orientations[0] == t
    assert orientations[2].cells.tolist() == [[3, 2, 1], [6, 5, 4]]
    assert orientations[1].cells.tolist() == [[4, 5, 6], [1, 2, 3]]
    assert orientations[4].cells.tolist() == [[1, 4], [2, 5], [3, 6]]
    assert orientations[7].cells.tolist() == [[6, 3], [5, 2], [4, 1]]


def test_describe_orientation():
    assert describe_orientation(0) == 'identity'
    assert describe_orientation(6) == 'swap+flip-x'
    assert describe_orientation(7) == 'swap+flip-x+flip-y'
    with pytest.raises(ValueError):
        describe_orientation(8)
