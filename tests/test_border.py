import pytest

from kvds.border import (
    NEGATIVE_INF_BORDER,
    POSITIVE_INF_BORDER,
    ScoreBorder,
    parse_score_border,
)


@pytest.mark.parametrize("text", ["inf", "+inf"])
def test_parse_positive_infinity(text):
    assert parse_score_border(text) == POSITIVE_INF_BORDER


def test_parse_negative_infinity():
    assert parse_score_border("-inf") == NEGATIVE_INF_BORDER


def test_parse_inclusive_value():
    border = parse_score_border("2.718")
    assert border.value == 2.718
    assert border.exclude is False
    assert border.inf == 0


def test_parse_exclusive_value():
    border = parse_score_border("(-2")
    assert border.value == -2.0
    assert border.exclude is True


@pytest.mark.parametrize("text", ["abc", "(abc", "", "(", " 1", "1_0"])
def test_parse_errors(text):
    with pytest.raises(ValueError, match="ERR min or max is not a float"):
        parse_score_border(text)


def test_inclusive_border_comparisons():
    border = parse_score_border("2")
    assert border.greater(2.0)
    assert border.less(2.0)
    assert border.greater(1.0)
    assert not border.greater(3.0)
    assert border.less(3.0)
    assert not border.less(1.0)


def test_exclusive_border_comparisons():
    border = parse_score_border("(2")
    assert not border.greater(2.0)
    assert not border.less(2.0)
    assert border.greater(1.0)
    assert border.less(3.0)


def test_infinite_borders():
    for value in (-1e300, 0.0, 1e300):
        assert POSITIVE_INF_BORDER.greater(value)
        assert not POSITIVE_INF_BORDER.less(value)
        assert NEGATIVE_INF_BORDER.less(value)
        assert not NEGATIVE_INF_BORDER.greater(value)


def test_infinite_border_values_order_correctly():
    finite = ScoreBorder(value=3.0)
    assert NEGATIVE_INF_BORDER.value < finite.value < POSITIVE_INF_BORDER.value