"""Optimal Recognition Point helpers.

The ORP is the letter the eye should fixate on. It sits roughly a quarter of
the way into the word and never moves past index 4, so long words still
centre without the pivot drifting.
"""

from __future__ import annotations

from typing import NamedTuple

MAX_ORP_INDEX = 4

# (max word length, pivot index); anything longer uses MAX_ORP_INDEX
ORP_THRESHOLDS = ((1, 0), (5, 1), (9, 2), (13, 3))


class OrpSplit(NamedTuple):
    prefix: str
    pivot: str
    suffix: str


def orp_index(word: str) -> int:
    length = len(word)
    for max_len, idx in ORP_THRESHOLDS:
        if length <= max_len:
            return idx
    return MAX_ORP_INDEX


def split_at_orp(word: str) -> OrpSplit:
    """Partition ``word`` around its ORP letter.

    The pivot is empty when ``word`` is empty; the three parts always join
    back into ``word``.
    """
    idx = orp_index(word)
    return OrpSplit(word[:idx], word[idx:idx + 1], word[idx + 1:])
