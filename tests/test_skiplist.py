import random

from kvds.border import NEGATIVE_INF_BORDER, POSITIVE_INF_BORDER, parse_score_border
from kvds.skiplist import MAX_LEVEL, Element, Skiplist, random_level


def _build(pairs):
    sl = Skiplist()
    for member, score in pairs:
        sl.insert(member, score)
    return sl


def _sample():
    return _build([("c", 3.0), ("a", 1.0), ("d", 4.0), ("b", 2.0)])


def test_random_level_distribution():
    levels = [random_level() for _ in range(10000)]
    assert all(1 <= level <= MAX_LEVEL for level in levels)
    ones, twos, threes = levels.count(1), levels.count(2), levels.count(3)
    assert ones > twos > threes
    assert 4000 < ones < 6000


def test_iteration_sorted_by_score_then_member():
    sl = _build([("b", 1.0), ("a", 1.0), ("z", 0.5), ("c", 2.0)])
    assert [e.member for e in sl] == ["z", "a", "b", "c"]
    assert len(sl) == 4
    assert sl.first.element == Element("z", 0.5)
    assert sl.tail.element == Element("c", 2.0)


def test_rank_and_lookup():
    sl = _sample()
    assert sl.get_rank("a", 1.0) == 1
    assert sl.get_rank("d", 4.0) == 4
    assert sl.get_rank("missing", 2.5) == 0
    assert sl.get_by_rank(2).element == Element("b", 2.0)
    assert sl.get_by_rank(0) is None
    assert sl.get_by_rank(5) is None


def test_backward_links():
    sl = _sample()
    members = []
    node = sl.tail
    while node is not None:
        members.append(node.member)
        node = node.backward
    assert members == ["d", "c", "b", "a"]


def test_remove():
    sl = _sample()
    assert sl.remove("b", 2.0) is True
    assert sl.remove("b", 2.0) is False
    assert sl.remove("c", 9.0) is False
    assert [e.member for e in sl] == ["a", "c", "d"]
    assert sl.get_rank("c", 3.0) == 2
    assert sl.remove("d", 4.0)
    assert sl.tail.member == "c"


def test_score_range_queries():
    sl = _sample()
    low, high = parse_score_border("(1"), parse_score_border("3")
    assert sl.has_in_range(low, high)
    assert sl.get_first_in_score_range(low, high).member == "b"
    assert sl.get_last_in_score_range(low, high).member == "c"
    above = parse_score_border("5")
    assert not sl.has_in_range(above, POSITIVE_INF_BORDER)
    assert sl.get_first_in_score_range(above, POSITIVE_INF_BORDER) is None
    empty = parse_score_border("(2")
    assert not sl.has_in_range(empty, parse_score_border("2"))


def test_range_to_positive_infinity():
    sl = _sample()
    low = parse_score_border("3")
    assert sl.get_first_in_score_range(low, POSITIVE_INF_BORDER).member == "c"
    assert sl.get_last_in_score_range(low, POSITIVE_INF_BORDER).member == "d"


def test_remove_range_by_score_with_limit():
    sl = _sample()
    removed = sl.remove_range_by_score(parse_score_border("2"), POSITIVE_INF_BORDER, 1)
    assert removed == [Element("b", 2.0)]
    removed = sl.remove_range_by_score(NEGATIVE_INF_BORDER, parse_score_border("(4"))
    assert removed == [Element("a", 1.0), Element("c", 3.0)]
    assert [e.member for e in sl] == ["d"]


def test_remove_range_by_rank():
    sl = _sample()
    removed = sl.remove_range_by_rank(2, 4)
    assert [e.member for e in removed] == ["b", "c"]
    assert [e.member for e in sl] == ["a", "d"]
    assert sl.get_rank("d", 4.0) == 2


def test_empty_skiplist():
    sl = Skiplist()
    assert list(sl) == []
    assert sl.first is None and sl.tail is None
    assert not sl.has_in_range(NEGATIVE_INF_BORDER, POSITIVE_INF_BORDER)
    assert sl.remove_range_by_rank(1, 5) == []


def test_ranks_stay_consistent_under_random_changes():
    rng = random.Random(7)
    pairs = {f"m{i}": float(rng.randint(0, 50)) for i in range(300)}
    sl = _build(pairs.items())
    for member in list(pairs)[::2]:
        assert sl.remove(member, pairs.pop(member))
    expected = sorted(pairs.items(), key=lambda item: (item[1], item[0]))
    assert [(e.member, e.score) for e in sl] == expected
    assert len(sl) == len(expected)
    for rank, (member, score) in enumerate(expected, start=1):
        assert sl.get_rank(member, score) == rank
        assert sl.get_by_rank(rank).member == member