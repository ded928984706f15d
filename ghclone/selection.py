"""Parsing of index selections such as ``"0 2 4-6"`` and list filtering."""

import re
from collections.abc import Hashable, Iterable, Sequence
from typing import TypeVar

from ghclone.output import FatalError

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def remove_duplicates(values: Iterable[H]) -> list[H]:
    """Return the values without duplicates, keeping first occurrences in order."""
    return list(dict.fromkeys(values))


def filter_by_indexes(items: Sequence[T], indexes: Iterable[int]) -> list[T]:
    """Return the items at the given indexes, in the order of ``indexes``."""
    return [items[index] for index in indexes]


def parse_index(text: str, length: int) -> int:
    """Parse one index and check that it lies within ``0 .. length - 1``."""
    if not _INTEGER.fullmatch(text):
        raise FatalError(f"Index '{text}' is not integer!")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise FatalError(f"Index '{text}' is not integer!")
    if value < 0 or value > length - 1:
        raise FatalError(f"Index {text} is out of range")
    return value


def parse_index_range(text: str, length: int) -> list[int]:
    """Expand a range such as ``"2-5"`` (either order) into its indexes."""
    borders = text.split("-")
    if len(borders) != 2:
        raise FatalError(f"Invalid indexes range: '{text}'")
    low, high = (parse_index(border, length) for border in borders)
    if high < low:
        low, high = high, low
    return list(range(low, high + 1))


def _expand(tokens: Iterable[str], length: int) -> Iterable[int]:
    for token in tokens:
        if "-" in token:
            yield from parse_index_range(token, length)
        else:
            yield parse_index(token, length)


def parse_indexes(line: str, length: int) -> list[int]:
    """Parse a space separated selection of indexes and ranges, without duplicates."""
    tokens = line.strip().split(" ")
    return remove_duplicates(_expand(tokens, length))