import pytest

from ghclone.output import FatalError
from ghclone.selection import (
    filter_by_indexes,
    parse_index,
    parse_index_range,
    parse_indexes,
    remove_duplicates,
)


def test_remove_duplicates_keeps_first_occurrence_order():
    assert remove_duplicates([3, 1, 3, 2, 1]) == [3, 1, 2]


def test_remove_duplicates_of_empty():
    assert remove_duplicates([]) == []


def test_filter_by_indexes_follows_index_order():
    assert filter_by_indexes(["a", "b", "c"], [2, 0]) == ["c", "a"]


def test_filter_by_indexes_invalid_index_raises():
    with pytest.raises(IndexError):
        filter_by_indexes(["a"], [5])


def test_parse_index_valid():
    assert parse_index("4", 5) == 4
    assert parse_index("0", 1) == 0


@pytest.mark.parametrize("text", ["x", "", "1.5", " 1", "1_0"])
def test_parse_index_not_integer(text):
    with pytest.raises(FatalError, match="is not integer!"):
        parse_index(text, 10)


@pytest.mark.parametrize("text", ["5", "100"])
def test_parse_index_out_of_range(text):
    with pytest.raises(FatalError, match="is out of range"):
        parse_index(text, 5)


def test_parse_index_too_large_for_int32_is_not_integer():
    with pytest.raises(FatalError, match="is not integer!"):
        parse_index("99999999999", 10)


def test_parse_index_range_inclusive():
    assert parse_index_range("1-3", 5) == [1, 2, 3]


def test_parse_index_range_reversed_equals_forward():
    assert parse_index_range("4-2", 5) == parse_index_range("2-4", 5)


def test_parse_index_range_invalid_shape():
    with pytest.raises(FatalError, match="Invalid indexes range: '1-2-3'"):
        parse_index_range("1-2-3", 5)


def test_parse_index_range_border_out_of_range():
    with pytest.raises(FatalError, match="out of range"):
        parse_index_range("0-9", 5)


def test_parse_indexes_mixed_and_deduplicated():
    result = parse_indexes("  3 0-2 1 \n", 5)
    assert result[0] == 3
    assert sorted(result) == [0, 1, 2, 3]
    assert len(result) == len(set(result))


def test_parse_indexes_empty_line_fails():
    with pytest.raises(FatalError, match="is not integer!"):
        parse_indexes("\n", 5)


def test_parse_indexes_double_space_fails():
    with pytest.raises(FatalError):
        parse_indexes("1  2", 5)