import numpy as np
import pytest

from rlesearch.utils import rle
from rlesearch.utils.game_of_life import Pattern
from rlesearch.utils.patterns import load


def test_decode_glider():
    width, height, cells = rle.decode(["x = 3, y = 3", "bo$2bo$3o!"], rle.LIFE_TAGS)
    assert (width, height) == (3, 3)
    assert cells.tolist() == [[0, 1, 0], [0, 0, 1], [1, 1, 1]]


def test_decode_skips_comments_and_rule_suffix():
    lines = ["#N glider", "#C a comment with o and b", "x = 3, y = 3, rule = B3/S23", "bo$2bo$", "3o!"]
    _, _, cells = rle.decode(lines, rle.LIFE_TAGS)
    assert cells.tolist() == [[0, 1, 0], [0, 0, 1], [1, 1, 1]]


def test_decode_row_skip_and_unknown_characters():
    _, _, cells = rle.decode(["x = 3, y = 3", "o z 2$2bo!"], rle.LIFE_TAGS)
    assert cells.tolist() == [[1, 0, 0], [0, 0, 0], [0, 0, 1]]


def test_decode_skips_non_ascii_digits():
    _, _, cells = rle.decode(["x = 3, y = 1", "o\u00b2o!"], rle.LIFE_TAGS)
    assert cells.tolist() == [[1, 1, 0]]


def test_load_ignores_non_ascii_digits():
    assert load("2o\u00b2$2o!").to_array().tolist() == [[1, 1], [1, 1]]


def test_decode_stops_at_bang():
    _, _, cells = rle.decode(["x = 2, y = 2", "o!", "$2o"], rle.LIFE_TAGS)
    assert cells.tolist() == [[1, 0], [0, 0]]


def test_decode_wraps_long_runs():
    _, _, cells = rle.decode(["x = 2, y = 2", "$3o!"], rle.LIFE_TAGS)
    assert cells.tolist() == [[0, 0], [1, 1]]


def test_decode_history_tags():
    _, _, cells = rle.decode(["x = 4, y = 1", ".A2C!"], rle.HISTORY_TAGS)
    assert cells.tolist() == [[0, 1, 3, 3]]


@pytest.mark.parametrize("lines", [
    ["x=3 y=3", "3o!"],
    ["x = a, y = 3", "3o!"],
    ["x = 0, y = 3", "!"],
    ["3o!"],
    [],
    ["x = 3, y = 1", "x = 3, y = 1", "3o!"],
    ["2$", "x = 3, y = 3", "o!"],
])
def test_decode_rejects_bad_headers(lines):
    with pytest.raises(rle.RLEError):
        rle.decode(lines, rle.LIFE_TAGS)


def test_rle_error_is_value_error():
    assert issubclass(rle.RLEError, ValueError)


def test_encode_glider():
    cells = np.array([[0, 1, 0], [0, 0, 1], [1, 1, 1]], dtype=np.uint8)
    assert rle.encode(cells) == ["x = 3, y = 3, rule = B3/S23", "bob$2bo$3o!"]


def test_encode_comment():
    lines = rle.encode(np.ones((1, 2), dtype=np.uint8), comment="pair")
    assert lines == ["#C pair", "x = 2, y = 1, rule = B3/S23", "2o!"]


def test_encode_wraps_at_line_width():
    cells = (np.arange(100) % 2).reshape(1, 100).astype(np.uint8)
    lines = rle.encode(cells)
    data = lines[1:]
    assert len(data) == 2
    assert all(len(line) <= rle.LINE_WIDTH for line in data)
    assert "".join(data) == "bo" * 50 + "!"


def test_encode_never_splits_runs():
    cells = np.zeros((1, 200), dtype=np.uint8)
    cells[0, ::3] = 1
    for line in rle.encode(cells)[1:]:
        assert not line[-1].isdigit()


def test_round_trip_random_grid():
    rng = np.random.default_rng(7)
    pattern = Pattern.from_array((rng.random((37, 70)) < 0.4).astype(np.uint8))
    assert Pattern.read_rle(*rle.encode(pattern.to_array())) == pattern


def test_guess_kind():
    assert rle.guess_kind(["x = 3, y = 1, rule = B3/S23", "obo!"]) == 'life'
    assert rle.guess_kind(["#C object", "x = 3, y = 1", ".A.!"]) == 'history'
    assert rle.guess_kind(["x = 3, y = 1", "3.!", "bob"]) == 'history'
