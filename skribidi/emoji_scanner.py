"""State machine that splits emoji category sequences into presentation runs.

The input is a sequence of small integer categories, one per character:
0 emoji, 1 text presentation, 2 emoji presentation, 3 modifier base,
4 modifier, 5 variation selector base, 6 regional indicator, 7 keycap base,
8 combining enclosing keycap, 9 combining enclosing circle backslash,
10 zero width joiner, 11 VS15, 12 VS16, 13 tag base, 14 tag sequence,
15 tag term.
"""

from __future__ import annotations

from typing import Iterator, Sequence

_TRANS_KEYS = (
    0, 13, 14, 15, 0, 13, 9, 12, 10, 12, 10, 10, 4, 12, 4, 12,
    6, 6, 9, 12, 8, 8, 8, 10, 9, 14,
)

_KEY_SPANS = (14, 2, 14, 4, 3, 1, 9, 9, 1, 4, 1, 3, 6)

_INDEX_OFFSETS = (0, 15, 18, 33, 38, 42, 44, 54, 64, 66, 71, 73, 77)

_INDICIES = (
    1, 1, 1, 2, 0, 0, 0, 1,
    0, 0, 0, 0, 0, 1, 0, 4,
    5, 3, 6, 6, 7, 8, 9, 9,
    10, 11, 9, 9, 9, 9, 9, 12,
    9, 5, 13, 14, 15, 0, 13, 16,
    17, 16, 13, 0, 17, 16, 16, 16,
    16, 16, 13, 16, 17, 16, 17, 16,
    16, 16, 16, 5, 13, 14, 15, 16,
    5, 18, 5, 13, 19, 20, 18, 14,
    21, 23, 22, 13, 22, 5, 13, 14,
    15, 16, 4, 16, 0,
)

_TRANS_TARGS = (
    2, 4, 6, 2, 1, 2, 3, 3,
    7, 2, 8, 9, 12, 0, 2, 5,
    2, 5, 2, 10, 11, 2, 2, 2,
)

_TRANS_ACTIONS = (
    1, 2, 2, 3, 0, 4, 7, 2,
    2, 8, 0, 7, 2, 0, 9, 10,
    11, 2, 12, 0, 10, 13, 14, 15,
)

_EOF_TRANS = (1, 4, 0, 1, 17, 1, 17, 17, 19, 19, 22, 23, 17)

_START_STATE = 2

# Token kinds as (is_emoji, has_vs).
_EMOJI_VS = (True, True)
_EMOJI = (True, False)
_TEXT_VS = (False, True)
_TEXT = (False, False)

# Pending token kind remembered for longest-match backtracking.
_ACT_KINDS = {2: _EMOJI_VS, 3: _EMOJI, 4: _TEXT}

# Actions that end a token including the current character.
_ACCEPT_INCLUSIVE = {9: _TEXT_VS, 15: _EMOJI_VS, 4: _EMOJI, 8: _TEXT}
# Actions that end a token just before the current character.
_ACCEPT_EXCLUSIVE = {13: _TEXT_VS, 14: _EMOJI_VS, 11: _EMOJI, 12: _TEXT}
# Actions that extend a candidate token and remember its kind.
_EXTEND = {10: 2, 2: 3, 7: 4}


def scan_emoji_presentation(categories: Sequence[int], start: int = 0) -> tuple[int, bool, bool]:
    """Scan one run beginning at ``start``.

    Returns ``(end, is_emoji, has_vs)`` where ``end`` is the index just past
    the run and ``has_vs`` tells whether a variation selector decided it.
    """
    pe = len(categories)
    if not 0 <= start <= pe:
        raise ValueError(f"start {start} is outside 0..{pe}")
    if start == pe:
        return start, False, False

    cs = _START_STATE
    te = 0
    act = 0

    def take(trans: int, p: int) -> tuple[int, bool, bool] | None:
        nonlocal cs, te, act
        cs = _TRANS_TARGS[trans]
        action = _TRANS_ACTIONS[trans]
        if action in _ACCEPT_INCLUSIVE:
            return (p + 1, *_ACCEPT_INCLUSIVE[action])
        if action in _ACCEPT_EXCLUSIVE:
            return (p, *_ACCEPT_EXCLUSIVE[action])
        if action == 3:
            return (te, *_EMOJI)
        if action == 1:
            kind = _ACT_KINDS.get(act)
            return None if kind is None else (te, *kind)
        if action in _EXTEND:
            te = p + 1
            act = _EXTEND[action]
        return None

    p = start
    while True:
        lo = _TRANS_KEYS[cs * 2]
        hi = _TRANS_KEYS[cs * 2 + 1]
        span = _KEY_SPANS[cs]
        c = categories[p]
        slot = c - lo if span > 0 and lo <= c <= hi else span
        result = take(_INDICIES[_INDEX_OFFSETS[cs] + slot], p)
        if result is not None:
            return result
        p += 1
        if p == pe:
            break

    eof = _EOF_TRANS[cs]
    if eof > 0:
        result = take(eof - 1, p)
        if result is not None:
            return result
    return pe, False, False


def iter_emoji_runs(categories: Sequence[int]) -> Iterator[tuple[int, int, bool, bool]]:
    """Yield ``(start, end, is_emoji, has_vs)`` for consecutive runs covering the input."""
    start = 0
    while start < len(categories):
        end, is_emoji, has_vs = scan_emoji_presentation(categories, start)
        yield start, end, is_emoji, has_vs
        start = end