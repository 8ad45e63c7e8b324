"""Tests for clipread.orp."""

import pytest

from clipread.orp import MAX_ORP_INDEX, OrpSplit, orp_index, split_at_orp

WORDS = ["", "a", "be", "word", "reader", "beautiful", "significant", "extraordinarily", "x" * 40, "héllo,"]


class TestOrpIndex:
    @pytest.mark.parametrize(
        "length,expected",
        [(0, 0), (1, 0), (2, 1), (5, 1), (6, 2), (9, 2), (10, 3), (13, 3), (14, 4), (100, 4)],
    )
    def test_thresholds(self, length: int, expected: int) -> None:
        assert orp_index("x" * length) == expected

    def test_monotonic_and_bounded(self) -> None:
        indices = [orp_index("x" * n) for n in range(60)]
        assert indices == sorted(indices)
        assert max(indices) == MAX_ORP_INDEX


class TestSplitAtOrp:
    @pytest.mark.parametrize("word", WORDS)
    def test_parts_join_back(self, word: str) -> None:
        prefix, pivot, suffix = split_at_orp(word)
        assert prefix + pivot + suffix == word

    def test_split_word(self) -> None:
        assert split_at_orp("reader") == OrpSplit("re", "a", "der")

    def test_single_letter(self) -> None:
        assert split_at_orp("I") == OrpSplit("", "I", "")

    def test_empty_word_has_no_pivot(self) -> None:
        assert split_at_orp("") == OrpSplit("", "", "")
