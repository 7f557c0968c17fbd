"""Stroke-based debug font covering the printable ASCII range.

Glyph coordinates are in a design space where the baseline is y = 0 and
y grows upwards; a size of 30 maps one design unit to one pixel. A vertex
of ``(-1, -1)`` lifts the pen.
"""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import Vec2

FIRST_CHAR = 32
GLYPH_COUNT = 95
DESIGN_SIZE = 30.0
MAX_TEXT_BYTES = 1023

_PEN_UP = -1


@dataclass(frozen=True)
class LineGlyph:
    """Polyline vertices and horizontal advance of one glyph."""

    advance: int
    verts: tuple[tuple[int, int], ...]


def _glyph(num: int, advance: int, *flat: int) -> LineGlyph:
    coords = list(flat[: num * 2]) + [0] * max(0, num * 2 - len(flat))
    return LineGlyph(advance, tuple(zip(coords[0::2], coords[1::2])))


_GLYPHS = (
    _glyph(0, 16),  # space
    _glyph(8, 10, 5, 21, 5, 7, -1, -1, 5, 2, 4, 1, 5, 0, 6, 1, 5, 2),  # !
    _glyph(5, 16, 4, 21, 4, 14, -1, -1, 12, 21, 12, 14),  # "
    _glyph(11, 21, 9, 20, 6, -2, -1, -1, 15, 20, 12, -2, -1, -1, 4, 12, 18, 12, -1, -1, 3, 6, 17, 6),  # #
    _glyph(23, 20, 12, 25, 9, -4, -1, -1, 17, 18, 15, 20, 12, 21, 8, 21, 5, 20, 3, 18, 3, 16, 4, 14,
           5, 13, 7, 12, 13, 10, 15, 9, 16, 8, 17, 6, 17, 3, 15, 1, 12, 0, 8, 0, 5, 1, 3, 3),  # $
    _glyph(26, 24, 17, 21, 7, 0, -1, -1, 8, 21, 10, 19, 10, 17, 9, 15, 7, 14, 5, 14, 3, 16, 3, 18,
           4, 20, 6, 21, 8, 21, -1, -1, 17, 7, 15, 6, 14, 4, 14, 2, 16, 0, 18, 0, 20, 1, 21, 3,
           21, 5, 19, 7, 17, 7),  # %
    _glyph(23, 24, 19, 8, 15, 3, 13, 1, 11, 0, 7, 0, 5, 1, 4, 2, 3, 4, 3, 6, 4, 8, 5, 9, 12, 13,
           13, 14, 14, 16, 14, 18, 13, 20, 11, 21, 9, 20, 8, 18, 8, 16, 9, 13, 11, 10, 19, 0),  # &
    _glyph(7, 10, 5, 19, 4, 20, 5, 21, 6, 20, 6, 18, 5, 16, 4, 15),  # '
    _glyph(8, 12, 8, 22, 7, 20, 5, 16, 4, 11, 4, 7, 5, 2, 7, -2, 8, -4),  # (
    _glyph(8, 12, 4, 22, 5, 20, 7, 16, 8, 11, 8, 7, 7, 2, 5, -2, 4, -4),  # )
    _glyph(8, 16, 8, 21, 8, 9, -1, -1, 3, 18, 13, 12, -1, -1, 13, 18, 3, 12),  # *
    _glyph(5, 22, 11, 16, 11, 2, -1, -1, 4, 9, 18, 9),  # +
    _glyph(8, 10, 6, 1, 5, 0, 4, 1, 5, 2, 6, 1, 6, -1, 5, -3, 4, -4),  # ,
    _glyph(2, 22, 4, 9, 18, 9),  # -
    _glyph(5, 10, 5, 2, 4, 1, 5, 0, 6, 1, 5, 2),  # .
    _glyph(2, 16, 12, 21, 2, 0),  # /
    _glyph(17, 20, 9, 21, 6, 20, 4, 17, 3, 12, 3, 9, 4, 4, 6, 1, 9, 0, 11, 0, 14, 1, 16, 4, 17, 9,
           17, 12, 16, 17, 14, 20, 11, 21, 9, 21),  # 0
    _glyph(4, 20, 6, 17, 8, 18, 11, 21, 11, 0),  # 1
    _glyph(14, 20, 4, 16, 4, 17, 5, 19, 6, 20, 8, 21, 12, 21, 14, 20, 15, 19, 16, 17, 16, 15,
           15, 13, 13, 10, 3, 0, 17, 0),  # 2
    _glyph(15, 20, 5, 21, 16, 21, 10, 13, 13, 13, 15, 12, 16, 11, 17, 8, 17, 6, 16, 3, 14, 1,
           11, 0, 8, 0, 5, 1, 4, 2, 3, 4),  # 3
    _glyph(6, 20, 13, 21, 3, 7, 18, 7, -1, -1, 13, 21, 13, 0),  # 4
    _glyph(17, 20, 15, 21, 5, 21, 4, 12, 5, 13, 8, 14, 11, 14, 14, 13, 16, 11, 17, 8, 17, 6,
           16, 3, 14, 1, 11, 0, 8, 0, 5, 1, 4, 2, 3, 4),  # 5
    _glyph(23, 20, 16, 18, 15, 20, 12, 21, 10, 21, 7, 20, 5, 17, 4, 12, 4, 7, 5, 3, 7, 1, 10, 0,
           11, 0, 14, 1, 16, 3, 17, 6, 17, 7, 16, 10, 14, 12, 11, 13, 10, 13, 7, 12, 5, 10,
           4, 7),  # 6
    _glyph(5, 20, 17, 21, 7, 0, -1, -1, 3, 21, 17, 21),  # 7
    _glyph(29, 20, 8, 21, 5, 20, 4, 18, 4, 16, 5, 14, 7, 13, 11, 12, 14, 11, 16, 9, 17, 7, 17, 4,
           16, 2, 15, 1, 12, 0, 8, 0, 5, 1, 4, 2, 3, 4, 3, 7, 4, 9, 6, 11, 9, 12, 13, 13, 15, 14,
           16, 16, 16, 18, 15, 20, 12, 21, 8, 21),  # 8
    _glyph(23, 20, 16, 14, 15, 11, 13, 9, 10, 8, 9, 8, 6, 9, 4, 11, 3, 14, 3, 15, 4, 18, 6, 20,
           9, 21, 10, 21, 13, 20, 15, 18, 16, 14, 16, 9, 15, 4, 13, 1, 10, 0, 8, 0, 5, 1,
           4, 3),  # 9
    _glyph(11, 10, 5, 14, 4, 13, 5, 12, 6, 13, 5, 14, -1, -1, 5, 2, 4, 1, 5, 0, 6, 1, 5, 2),  # :
    _glyph(14, 10, 5, 14, 4, 13, 5, 12, 6, 13, 5, 14, -1, -1, 6, 1, 5, 0, 4, 1, 5, 2, 6, 1,
           6, -1, 5, -3, 4, -4),  # ;
    _glyph(3, 24, 20, 18, 4, 9, 20, 0),  # <
    _glyph(5, 26, 4, 12, 22, 12, -1, -1, 4, 6, 22, 6),  # =
    _glyph(3, 24, 4, 18, 20, 9, 4, 0),  # >
    _glyph(20, 18, 3, 16, 3, 17, 4, 19, 5, 20, 7, 21, 11, 21, 13, 20, 14, 19, 15, 17, 15, 15,
           14, 13, 13, 12, 9, 10, 9, 7, -1, -1, 9, 2, 8, 1, 9, 0, 10, 1, 9, 2),  # ?
    _glyph(40, 27, 18, 13, 17, 15, 15, 16, 12, 16, 10, 15, 9, 14, 8, 11, 8, 8, 9, 6, 11, 5, 14, 5,
           16, 6, 17, 8, -1, -1, 18, 16, 17, 8, 17, 6, 19, 5, 21, 5, 23, 7, 24, 10, 24, 12,
           23, 15, 22, 17, 20, 19, 18, 20, 15, 21, 12, 21, 9, 20, 7, 19, 5, 17, 4, 15, 3, 12,
           3, 9, 4, 6, 5, 4, 7, 2, 9, 1, 12, 0, 16, 0),  # @
    _glyph(8, 18, 9, 21, 1, 0, -1, -1, 9, 21, 17, 0, -1, -1, 4, 7, 14, 7),  # A
    _glyph(23, 21, 4, 21, 4, 0, -1, -1, 4, 21, 13, 21, 16, 20, 17, 19, 18, 17, 18, 15, 17, 13,
           16, 12, 13, 11, -1, -1, 4, 11, 13, 11, 16, 10, 17, 9, 18, 7, 18, 4, 17, 2, 16, 1,
           13, 0, 4, 0),  # B
    _glyph(18, 21, 18, 16, 17, 18, 15, 20, 13, 21, 9, 21, 7, 20, 5, 18, 4, 16, 3, 13, 3, 8, 4, 5,
           5, 3, 7, 1, 9, 0, 13, 0, 15, 1, 17, 3, 18, 5),  # C
    _glyph(15, 21, 4, 21, 4, 0, -1, -1, 4, 21, 11, 21, 14, 20, 16, 18, 17, 16, 18, 13, 18, 8,
           17, 5, 16, 3, 14, 1, 11, 0, 4, 0),  # D
    _glyph(11, 19, 4, 21, 4, 0, -1, -1, 4, 21, 17, 21, -1, -1, 4, 11, 12, 11, -1, -1, 4, 0,
           17, 0),  # E
    _glyph(8, 18, 4, 21, 4, 0, -1, -1, 4, 21, 17, 21, -1, -1, 4, 11, 12, 11),  # F
    _glyph(22, 21, 18, 16, 17, 18, 15, 20, 13, 21, 9, 21, 7, 20, 5, 18, 4, 16, 3, 13, 3, 8, 4, 5,
           5, 3, 7, 1, 9, 0, 13, 0, 15, 1, 17, 3, 18, 5, 18, 8, -1, -1, 13, 8, 18, 8),  # G
    _glyph(8, 22, 4, 21, 4, 0, -1, -1, 18, 21, 18, 0, -1, -1, 4, 11, 18, 11),  # H
    _glyph(2, 8, 4, 21, 4, 0),  # I
    _glyph(10, 16, 12, 21, 12, 5, 11, 2, 10, 1, 8, 0, 6, 0, 4, 1, 3, 2, 2, 5, 2, 7),  # J
    _glyph(8, 21, 4, 21, 4, 0, -1, -1, 18, 21, 4, 7, -1, -1, 9, 12, 18, 0),  # K
    _glyph(5, 17, 4, 21, 4, 0, -1, -1, 4, 0, 16, 0),  # L
    _glyph(11, 24, 4, 21, 4, 0, -1, -1, 4, 21, 12, 0, -1, -1, 20, 21, 12, 0, -1, -1, 20, 21,
           20, 0),  # M
    _glyph(8, 22, 4, 21, 4, 0, -1, -1, 4, 21, 18, 0, -1, -1, 18, 21, 18, 0),  # N
    _glyph(21, 22, 9, 21, 7, 20, 5, 18, 4, 16, 3, 13, 3, 8, 4, 5, 5, 3, 7, 1, 9, 0, 13, 0, 15, 1,
           17, 3, 18, 5, 19, 8, 19, 13, 18, 16, 17, 18, 15, 20, 13, 21, 9, 21),  # O
    _glyph(13, 21, 4, 21, 4, 0, -1, -1, 4, 21, 13, 21, 16, 20, 17, 19, 18, 17, 18, 14, 17, 12,
           16, 11, 13, 10, 4, 10),  # P
    _glyph(24, 22, 9, 21, 7, 20, 5, 18, 4, 16, 3, 13, 3, 8, 4, 5, 5, 3, 7, 1, 9, 0, 13, 0, 15, 1,
           17, 3, 18, 5, 19, 8, 19, 13, 18, 16, 17, 18, 15, 20, 13, 21, 9, 21, -1, -1, 12, 4,
           18, -2),  # Q
    _glyph(16, 21, 4, 21, 4, 0, -1, -1, 4, 21, 13, 21, 16, 20, 17, 19, 18, 17, 18, 15, 17, 13,
           16, 12, 13, 11, 4, 11, -1, -1, 11, 11, 18, 0),  # R
    _glyph(20, 20, 17, 18, 15, 20, 12, 21, 8, 21, 5, 20, 3, 18, 3, 16, 4, 14, 5, 13, 7, 12,
           13, 10, 15, 9, 16, 8, 17, 6, 17, 3, 15, 1, 12, 0, 8, 0, 5, 1, 3, 3),  # S
    _glyph(5, 16, 8, 21, 8, 0, -1, -1, 1, 21, 15, 21),  # T
    _glyph(10, 22, 4, 21, 4, 6, 5, 3, 7, 1, 10, 0, 12, 0, 15, 1, 17, 3, 18, 6, 18, 21),  # U
    _glyph(5, 18, 1, 21, 9, 0, -1, -1, 17, 21, 9, 0),  # V
    _glyph(11, 24, 2, 21, 7, 0, -1, -1, 12, 21, 7, 0, -1, -1, 12, 21, 17, 0, -1, -1, 22, 21,
           17, 0),  # W
    _glyph(5, 20, 3, 21, 17, 0, -1, -1, 17, 21, 3, 0),  # X
    _glyph(6, 18, 1, 21, 9, 11, 9, 0, -1, -1, 17, 21, 9, 11),  # Y
    _glyph(8, 20, 17, 21, 3, 0, -1, -1, 3, 21, 17, 21, -1, -1, 3, 0, 17, 0),  # Z
    _glyph(4, 11, 8, 22, 4, 22, 4, -2, 8, -2),  # [
    _glyph(2, 14, 2, 21, 12, 0),  # backslash
    _glyph(4, 11, 4, 22, 8, 22, 8, -2, 4, -2),  # ]
    _glyph(3, 16, 3, 15, 8, 20, 13, 15),  # ^
    _glyph(2, 16, 0, -2, 16, -2),  # _
    _glyph(7, 10, 6, 21, 5, 20, 4, 18, 4, 16, 5, 15, 6, 16, 5, 17),  # `
    _glyph(17, 19, 15, 14, 15, 0, -1, -1, 15, 11, 13, 13, 11, 14, 8, 14, 6, 13, 4, 11, 3, 8,
           3, 6, 4, 3, 6, 1, 8, 0, 11, 0, 13, 1, 15, 3),  # a
    _glyph(17, 19, 4, 21, 4, 0, -1, -1, 4, 11, 6, 13, 8, 14, 11, 14, 13, 13, 15, 11, 16, 8,
           16, 6, 15, 3, 13, 1, 11, 0, 8, 0, 6, 1, 4, 3),  # b
    _glyph(14, 18, 15, 11, 13, 13, 11, 14, 8, 14, 6, 13, 4, 11, 3, 8, 3, 6, 4, 3, 6, 1, 8, 0,
           11, 0, 13, 1, 15, 3),  # c
    _glyph(17, 19, 15, 21, 15, 0, -1, -1, 15, 11, 13, 13, 11, 14, 8, 14, 6, 13, 4, 11, 3, 8,
           3, 6, 4, 3, 6, 1, 8, 0, 11, 0, 13, 1, 15, 3),  # d
    _glyph(17, 18, 3, 8, 15, 8, 15, 10, 14, 12, 13, 13, 11, 14, 8, 14, 6, 13, 4, 11, 3, 8, 3, 6,
           4, 3, 6, 1, 8, 0, 11, 0, 13, 1, 15, 3),  # e
    _glyph(8, 12, 10, 21, 8, 21, 6, 20, 5, 17, 5, 0, -1, -1, 2, 14, 9, 14),  # f
    _glyph(22, 19, 15, 14, 15, -2, 14, -5, 13, -6, 11, -7, 8, -7, 6, -6, -1, -1, 15, 11, 13, 13,
           11, 14, 8, 14, 6, 13, 4, 11, 3, 8, 3, 6, 4, 3, 6, 1, 8, 0, 11, 0, 13, 1, 15, 3),  # g
    _glyph(10, 19, 4, 21, 4, 0, -1, -1, 4, 10, 7, 13, 9, 14, 12, 14, 14, 13, 15, 10, 15, 0),  # h
    _glyph(8, 8, 3, 21, 4, 20, 5, 21, 4, 22, 3, 21, -1, -1, 4, 14, 4, 0),  # i
    _glyph(11, 10, 5, 21, 6, 20, 7, 21, 6, 22, 5, 21, -1, -1, 6, 14, 6, -3, 5, -6, 3, -7,
           1, -7),  # j
    _glyph(8, 17, 4, 21, 4, 0, -1, -1, 14, 14, 4, 4, -1, -1, 8, 8, 15, 0),  # k
    _glyph(2, 8, 4, 21, 4, 0),  # l
    _glyph(18, 30, 4, 14, 4, 0, -1, -1, 4, 10, 7, 13, 9, 14, 12, 14, 14, 13, 15, 10, 15, 0,
           -1, -1, 15, 10, 18, 13, 20, 14, 23, 14, 25, 13, 26, 10, 26, 0),  # m
    _glyph(10, 19, 4, 14, 4, 0, -1, -1, 4, 10, 7, 13, 9, 14, 12, 14, 14, 13, 15, 10, 15, 0),  # n
    _glyph(17, 19, 8, 14, 6, 13, 4, 11, 3, 8, 3, 6, 4, 3, 6, 1, 8, 0, 11, 0, 13, 1, 15, 3, 16, 6,
           16, 8, 15, 11, 13, 13, 11, 14, 8, 14),  # o
    _glyph(17, 19, 4, 14, 4, -7, -1, -1, 4, 11, 6, 13, 8, 14, 11, 14, 13, 13, 15, 11, 16, 8,
           16, 6, 15, 3, 13, 1, 11, 0, 8, 0, 6, 1, 4, 3),  # p
    _glyph(17, 19, 15, 14, 15, -7, -1, -1, 15, 11, 13, 13, 11, 14, 8, 14, 6, 13, 4, 11, 3, 8,
           3, 6, 4, 3, 6, 1, 8, 0, 11, 0, 13, 1, 15, 3),  # q
    _glyph(8, 13, 4, 14, 4, 0, -1, -1, 4, 8, 5, 11, 7, 13, 9, 14, 12, 14),  # r
    _glyph(17, 17, 14, 11, 13, 13, 10, 14, 7, 14, 4, 13, 3, 11, 4, 9, 6, 8, 11, 7, 13, 6, 14, 4,
           14, 3, 13, 1, 10, 0, 7, 0, 4, 1, 3, 3),  # s
    _glyph(8, 12, 5, 21, 5, 4, 6, 1, 8, 0, 10, 0, -1, -1, 2, 14, 9, 14),  # t
    _glyph(10, 19, 4, 14, 4, 4, 5, 1, 7, 0, 10, 0, 12, 1, 15, 4, -1, -1, 15, 14, 15, 0),  # u
    _glyph(5, 16, 2, 14, 8, 0, -1, -1, 14, 14, 8, 0),  # v
    _glyph(11, 22, 3, 14, 7, 0, -1, -1, 11, 14, 7, 0, -1, -1, 11, 14, 15, 0, -1, -1, 19, 14,
           15, 0),  # w
    _glyph(5, 17, 3, 14, 14, 0, -1, -1, 14, 14, 3, 0),  # x
    _glyph(9, 16, 2, 14, 8, 0, -1, -1, 14, 14, 8, 0, 6, -4, 4, -6, 2, -7, 1, -7),  # y
    _glyph(8, 17, 14, 14, 3, 0, -1, -1, 3, 14, 14, 14, -1, -1, 3, 0, 14, 0),  # z
    _glyph(11, 14, 9, 22, 7, 21, 6, 19, 6, 12, 5, 10, 4, 9, 5, 8, 6, 6, 6, -1, 7, -3, 9, -4),  # {
    _glyph(2, 8, 4, 22, 4, -4),  # |
    _glyph(11, 14, 4, 22, 6, 21, 7, 19, 7, 12, 8, 10, 9, 9, 8, 8, 7, 6, 7, -1, 6, -3, 4, -4),  # }
    _glyph(9, 24, 3, 8, 4, 10, 6, 11, 8, 11, 14, 8, 16, 7, 18, 7, 20, 8, 21, 10),  # ~
)


def _glyph_by_code(code: int) -> LineGlyph | None:
    idx = code - FIRST_CHAR
    if 0 <= idx < GLYPH_COUNT:
        return _GLYPHS[idx]
    return None


def glyph_for(char: str) -> LineGlyph | None:
    """The glyph for a single character, or None outside printable ASCII."""
    return _glyph_by_code(ord(char))


def glyph_width(size: float, char: str) -> float:
    """Advance of ``char`` at font ``size``; zero for characters without a glyph."""
    glyph = glyph_for(char)
    if glyph is None:
        return 0.0
    return glyph.advance * (size / DESIGN_SIZE)


def char_segments(x: float, y: float, size: float, char: str) -> list[tuple[Vec2, Vec2]]:
    """Line segments that draw ``char`` with its baseline origin at ``(x, y)``.

    Screen y grows downwards, so design coordinates are flipped.
    """
    glyph = glyph_for(char)
    if glyph is None:
        return []
    scale = size / DESIGN_SIZE
    segments: list[tuple[Vec2, Vec2]] = []
    prev: tuple[int, int] | None = None
    for vx, vy in glyph.verts:
        if vx == _PEN_UP:
            prev = None
            continue
        cur = (vx, -vy)
        if prev is not None:
            segments.append((
                Vec2(x + prev[0] * scale, y + prev[1] * scale),
                Vec2(x + cur[0] * scale, y + cur[1] * scale),
            ))
        prev = cur
    return segments


def text_width(size: float, text: str) -> float:
    """Total advance of ``text``; only its first ``MAX_TEXT_BYTES`` UTF-8 bytes count."""
    scale = size / DESIGN_SIZE
    total = 0.0
    for code in text.encode("utf-8")[:MAX_TEXT_BYTES]:
        glyph = _glyph_by_code(code)
        if glyph is not None:
            total += glyph.advance * scale
    return total