"""Scanline rasterizer that renders polygon edges into an 8-bit coverage mask."""

from __future__ import annotations

import math
from bisect import bisect_left
from dataclasses import dataclass
from operator import attrgetter
from typing import Iterable

from .geometry import Rect2i, mul255

SUBSAMPLES = 5
SAMPLE_WEIGHT = 255 // SUBSAMPLES
FIX_SHIFT = 10
FIX = 1 << FIX_SHIFT
FIX_MASK = FIX - 1

_by_x = attrgetter("x")


@dataclass(frozen=True)
class Edge:
    """A non-horizontal edge, top to bottom, with y in subsample units."""

    x0: float
    y0: float
    x1: float
    y1: float
    direction: int


@dataclass
class Mask:
    """Coverage buffer and the region of it that is still active."""

    buffer: bytearray
    stride: int
    region: Rect2i


def make_edge(x0: float, y0: float, x1: float, y1: float) -> Edge | None:
    """Build an edge from pixel coordinates; horizontal edges give None."""
    if y0 == y1:
        return None
    if y0 < y1:
        return Edge(x0, y0 * SUBSAMPLES, x1, y1 * SUBSAMPLES, 1)
    return Edge(x1, y1 * SUBSAMPLES, x0, y0 * SUBSAMPLES, -1)


@dataclass
class _ActiveEdge:
    x: int
    dx: int
    ey: float
    direction: int


def _round_to_int(value: float) -> int:
    return int(math.floor(value + 0.5))


def _activate(edge: Edge, start_y: float) -> _ActiveEdge:
    dxdy = (edge.x1 - edge.x0) / (edge.y1 - edge.y0)
    if dxdy < 0:
        dx = -_round_to_int(FIX * -dxdy)
    else:
        dx = _round_to_int(FIX * dxdy)
    x = _round_to_int(FIX * (edge.x0 + dxdy * (start_y - edge.y0)))
    return _ActiveEdge(x, dx, edge.y1, edge.direction)


def _fill_span(scanline: bytearray, x0: int, x1: int) -> tuple[int, int]:
    """Accumulate coverage between two fixed point x positions."""
    width = len(scanline)
    start = x0 >> FIX_SHIFT
    end = x1 >> FIX_SHIFT
    touched = (start, end)

    if start < width and end >= 0:
        if start == end:
            scanline[start] = (scanline[start] + ((x1 - x0) * SAMPLE_WEIGHT >> FIX_SHIFT)) & 0xFF
        else:
            if start >= 0:
                cover = ((FIX - (x0 & FIX_MASK)) * SAMPLE_WEIGHT) >> FIX_SHIFT
                scanline[start] = (scanline[start] + cover) & 0xFF
            else:
                start = -1
            if end < width:
                cover = ((x1 & FIX_MASK) * SAMPLE_WEIGHT) >> FIX_SHIFT
                scanline[end] = (scanline[end] + cover) & 0xFF
            else:
                end = width
            for x in range(start + 1, end):
                scanline[x] = (scanline[x] + SAMPLE_WEIGHT) & 0xFF
    return touched


def rasterize_edges(edges: Iterable[Edge], mask: Mask, width: int) -> None:
    """Render edges with the non-zero rule, multiplying into ``mask`` within its region.

    Pixels of the region outside the rendered shape are cleared.
    """
    ordered = sorted(edges, key=attrgetter("y0"))
    region = mask.region
    buf = mask.buffer
    scanline = bytearray(width)
    x_lo = region.x
    x_hi = region.x + region.width

    active: list[_ActiveEdge] = []
    next_edge = 0

    for y in range(region.y, region.y + region.height):
        scanline[x_lo:x_hi] = bytes(region.width)
        xmin = width - 1
        xmax = 0

        for s in range(SUBSAMPLES):
            scan_y = float(y * SUBSAMPLES + s) + 0.5

            survivors = []
            for z in active:
                if z.ey > scan_y:
                    z.x += z.dx
                    survivors.append(z)
            active = survivors
            active.sort(key=_by_x)

            while next_edge < len(ordered) and ordered[next_edge].y0 <= scan_y:
                edge = ordered[next_edge]
                if edge.y1 > scan_y:
                    z = _activate(edge, scan_y)
                    active.insert(bisect_left(active, z.x, key=_by_x), z)
                next_edge += 1

            winding = 0
            span_start = 0
            for z in active:
                if winding == 0:
                    span_start = z.x
                    winding += z.direction
                else:
                    winding += z.direction
                    if winding == 0:
                        lo, hi = _fill_span(scanline, span_start, z.x)
                        xmin = min(xmin, lo)
                        xmax = max(xmax, hi)

        xmin = max(xmin, x_lo)
        xmax = min(xmax, x_hi - 1)
        row = y * mask.stride
        if xmin <= xmax:
            buf[row + x_lo:row + xmin] = bytes(xmin - x_lo)
            for x in range(xmin, xmax + 1):
                buf[row + x] = mul255(buf[row + x], scanline[x])
            buf[row + xmax + 1:row + x_hi] = bytes(x_hi - xmax - 1)
        else:
            buf[row + x_lo:row + x_hi] = bytes(region.width)