"""Software canvas that fills paths with solid colors and gradients.

Paths are flattened to polygons, rasterized into coverage masks and then
painted onto RGBA layers. Masks and layers form stacks so that clipping
and group compositing can be expressed by pushing and popping.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Sequence

from .geometry import Color, Mat2, Rect2, Rect2i, Vec2, clamp
from .raster import Mask, make_edge, rasterize_edges

GRADIENT_TABLE_SIZE = 256  # must be a power of two

_POINT_TOLERANCE = 0.1
_CURVE_TOLERANCE_SQR = 0.5 * 0.5
_MAX_CURVE_LEVEL = 10
_RADIAL_EPS = 0.25


@dataclass
class Image:
    """Pixel buffer with 1 (alpha) or 4 (RGBA) bytes per pixel."""

    width: int
    height: int
    bpp: int = 4
    stride_bytes: int = 0
    buffer: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        if not self.stride_bytes:
            self.stride_bytes = self.width * self.bpp
        if not self.buffer:
            self.buffer = bytearray(self.stride_bytes * max(self.height, 0))


class GradientSpread(Enum):
    """How a gradient continues outside its 0..1 range."""

    PAD = 0
    REPEAT = 1
    REFLECT = 2


@dataclass(frozen=True)
class ColorStop:
    """A gradient color at a position in 0..1."""

    offset: float
    color: Color


@dataclass
class _Layer:
    buffer: bytearray
    stride: int  # in bytes


def _read_color(buf: bytearray, i: int) -> Color:
    return Color(buf[i], buf[i + 1], buf[i + 2], buf[i + 3])


def _write_color(buf: bytearray, i: int, c: Color) -> None:
    buf[i:i + 4] = bytes((c.r, c.g, c.b, c.a))


def build_gradient_table(stops: Iterable[ColorStop]) -> list[Color]:
    """Sample the stops into ``GRADIENT_TABLE_SIZE + 1`` colors."""
    stops = list(stops)
    size = GRADIENT_TABLE_SIZE
    if not stops:
        return [Color()] * (size + 1)
    if len(stops) == 1:
        return [stops[0].color] * (size + 1)

    table = [Color()] * (size + 1)
    idx = clamp(int(stops[0].offset * size), 0, size)
    color = stops[0].color
    table[:idx] = [color] * idx

    for stop in stops[1:]:
        prev_idx, prev_color = idx, color
        idx = clamp(int(stop.offset * size), 0, size)
        color = stop.color
        count = idx - prev_idx
        if count > 0:
            dt = 1.0 / (count - 1) if count > 1 else 0.0
            t = 0.0
            for i in range(prev_idx, idx):
                table[i] = prev_color.lerpf(color, t)
                t += dt

    table[idx:] = [color] * (size + 1 - idx)
    return table


def apply_spread(index: int, spread: GradientSpread) -> int:
    """Map a table index through the spread mode into 0..GRADIENT_TABLE_SIZE."""
    size = GRADIENT_TABLE_SIZE
    if spread is GradientSpread.REPEAT:
        return index & (size - 1)
    if spread is GradientSpread.REFLECT:
        return size - abs((index & (size * 2 - 1)) - size)
    return clamp(index, 0, size)


class Canvas:
    """Rasterizing canvas drawing into an :class:`Image`."""

    def __init__(self, target: Image) -> None:
        if target.width <= 0 or target.height <= 0:
            raise ValueError("canvas target must have a positive size")
        if target.bpp not in (1, 4):
            raise ValueError("canvas target must have 1 or 4 bytes per pixel")

        self.target = target
        self.width = target.width
        self.height = target.height
        self.bpp = target.bpp

        self._start = Vec2()
        self._pen = Vec2()
        self._points: list[Vec2] = []
        self._degenerate_paths = 0
        self._bounds = Rect2.undefined()
        self._edges = []

        self._layers: list[_Layer] = []
        self._masks: list[Mask] = []
        self._transforms: list[Mat2] = []

        self.push_transform(Mat2.identity())

        buf = target.buffer
        stride = target.stride_bytes
        if self.bpp == 4:
            row_bytes = self.width * 4
            for y in range(self.height):
                buf[y * stride:y * stride + row_bytes] = bytes(row_bytes)
            self._layers.append(_Layer(buf, stride))
            self.push_mask()
        else:
            opaque = b"\xff" * self.width
            for y in range(self.height):
                buf[y * stride:y * stride + self.width] = opaque
            self._masks.append(Mask(buf, stride, Rect2i(0, 0, self.width, self.height)))

    # Paths

    @property
    def _transform(self) -> Mat2:
        return self._transforms[-1]

    def _add_point(self, pt: Vec2) -> None:
        if self._points and self._points[-1].close_to(pt, _POINT_TOLERANCE):
            return
        self._points.append(pt)

    def _tessellate_cubic(self, p0: Vec2, p1: Vec2, p2: Vec2, p3: Vec2, level: int) -> None:
        if level > _MAX_CURVE_LEVEL:
            return
        d30 = p3.sub(p0)
        d13 = p1.sub(p3)
        d23 = p2.sub(p3)
        d2 = abs(d13.x * d30.y - d13.y * d30.x)
        d3 = abs(d23.x * d30.y - d23.y * d30.x)
        if (d2 + d3) * (d2 + d3) < _CURVE_TOLERANCE_SQR * (d30.x * d30.x + d30.y * d30.y):
            self._add_point(p3)
            return

        p01 = p0.lerp(p1, 0.5)
        p12 = p1.lerp(p2, 0.5)
        p23 = p2.lerp(p3, 0.5)
        p012 = p01.lerp(p12, 0.5)
        p123 = p12.lerp(p23, 0.5)
        p0123 = p012.lerp(p123, 0.5)
        self._tessellate_cubic(p0, p01, p012, p0123, level + 1)
        self._tessellate_cubic(p0123, p123, p23, p3, level + 1)

    def _commit_path(self) -> None:
        pts = self._points
        if len(pts) > 2:
            for prev, cur in zip([pts[-1], *pts[:-1]], pts):
                self._bounds = self._bounds.union_point(prev)
                edge = make_edge(prev.x, prev.y, cur.x, cur.y)
                if edge is not None:
                    self._edges.append(edge)
        elif pts:
            # Points that do not form a shape still mean "nothing visible".
            self._degenerate_paths += 1
        self._points = []

    def move_to(self, pt: Vec2) -> None:
        """Start a new sub-path at ``pt``."""
        self._commit_path()
        pt = self._transform.transform_point(pt)
        self._add_point(pt)
        self._start = pt
        self._pen = pt

    def line_to(self, pt: Vec2) -> None:
        """Add a straight segment to ``pt``."""
        pt = self._transform.transform_point(pt)
        self._add_point(pt)
        self._pen = pt

    def quad_to(self, cp: Vec2, pt: Vec2) -> None:
        """Add a quadratic Bezier segment."""
        cp = self._transform.transform_point(cp)
        pt = self._transform.transform_point(pt)
        cp0 = self._pen.mad(cp.sub(self._pen), 2.0 / 3.0)
        cp1 = pt.mad(cp.sub(pt), 2.0 / 3.0)
        self._tessellate_cubic(self._pen, cp0, cp1, pt, 0)
        self._pen = pt

    def cubic_to(self, cp0: Vec2, cp1: Vec2, pt: Vec2) -> None:
        """Add a cubic Bezier segment."""
        t = self._transform
        cp0 = t.transform_point(cp0)
        cp1 = t.transform_point(cp1)
        pt = t.transform_point(pt)
        self._tessellate_cubic(self._pen, cp0, cp1, pt, 0)
        self._pen = pt

    def close(self) -> None:
        """Close the current sub-path back to its start."""
        self._add_point(self._start)

    # Masks

    def fill_mask(self) -> None:
        """Intersect the current mask with the pending path and reset the path."""
        self._commit_path()
        is_empty = not self._edges and self._degenerate_paths == 0
        mask = self._masks[-1]

        if self._edges:
            b = self._bounds
            x = math.floor(b.x)
            y = math.floor(b.y)
            shape = Rect2i(x, y, math.ceil(b.x + b.width) - x, math.ceil(b.y + b.height) - y)
            mask.region = mask.region.intersection(shape)
            if not mask.region.is_empty():
                rasterize_edges(self._edges, mask, self.width)
        elif self._degenerate_paths > 0:
            mask.region = Rect2i()

        if self.bpp == 1 and mask.buffer is self.target.buffer:
            self._clear_outside_region(mask, is_empty)

        self._bounds = Rect2.undefined()
        self._edges = []
        self._degenerate_paths = 0

    def _clear_outside_region(self, mask: Mask, clear_all: bool) -> None:
        buf = mask.buffer
        stride = mask.stride
        w = self.width
        r = mask.region

        def clear(y: int, start: int, stop: int) -> None:
            if stop > start:
                buf[y * stride + start:y * stride + stop] = bytes(stop - start)

        if clear_all or r.width <= 0 or r.height <= 0:
            for y in range(self.height):
                clear(y, 0, w)
            return
        for y in range(r.y):
            clear(y, 0, w)
        for y in range(r.y, r.y + r.height):
            clear(y, 0, r.x)
            clear(y, r.x + r.width, w)
        for y in range(r.y + r.height, self.height):
            clear(y, 0, w)

    def push_mask(self) -> None:
        """Push a copy of the current mask (or a fully open one)."""
        w, h = self.width, self.height
        if self._masks:
            cur = self._masks[-1]
            r = cur.region
            buf = bytearray(w * h)
            for y in range(r.y, r.y + r.height):
                src = y * cur.stride + r.x
                dst = y * w + r.x
                buf[dst:dst + r.width] = cur.buffer[src:src + r.width]
            region = r
        else:
            buf = bytearray(b"\xff" * (w * h))
            region = Rect2i(0, 0, w, h)
        self._masks.append(Mask(buf, w, region))

    def pop_mask(self) -> None:
        """Drop the top mask; the base mask always stays."""
        if len(self._masks) > 1:
            self._masks.pop()

    # Transforms

    def push_transform(self, transform: Mat2) -> None:
        """Apply ``transform`` before the current transform."""
        if self._transforms:
            transform = transform.multiply(self._transforms[-1])
        self._transforms.append(transform)

    def pop_transform(self) -> None:
        """Restore the previous transform; the base transform always stays."""
        if len(self._transforms) > 1:
            self._transforms.pop()

    # Layers

    def push_layer(self) -> None:
        """Start a transparent layer that is composited on pop."""
        self._layers.append(_Layer(bytearray(self.width * self.height * 4), self.width * 4))
        self.push_mask()

    def pop_layer(self) -> None:
        """Composite the top layer over the one below it."""
        if len(self._layers) <= 1:
            return
        fg = self._layers.pop()
        bg = self._layers[-1]
        r = self._masks[-1].region
        for y in range(r.y, r.y + r.height):
            for x in range(r.x, r.x + r.width):
                si = y * fg.stride + x * 4
                di = y * bg.stride + x * 4
                alpha = fg.buffer[si + 3]
                if alpha == 255:
                    bg.buffer[di:di + 4] = fg.buffer[si:si + 4]
                elif alpha > 0:
                    blended = _read_color(bg.buffer, di).blend_over(_read_color(fg.buffer, si))
                    _write_color(bg.buffer, di, blended)
        self.pop_mask()

    # Painting

    def _paint(self, shade: Callable[[float, float], Color], inv: Mat2, origin: Vec2) -> None:
        if not self._layers:
            raise RuntimeError("canvas has no color layer to paint on")
        layer = self._layers[-1]
        mask = self._masks[-1]
        r = mask.region
        for y in range(r.y, r.y + r.height):
            px = r.x + 0.5
            py = y + 0.5
            fx = px * inv.xx + py * inv.xy + inv.dx - origin.x
            fy = px * inv.yx + py * inv.yy + inv.dy - origin.y
            mask_row = y * mask.stride
            layer_row = y * layer.stride
            for x in range(r.x, r.x + r.width):
                coverage = mask.buffer[mask_row + x]
                if coverage:
                    i = layer_row + x * 4
                    _write_color(layer.buffer, i, _read_color(layer.buffer, i).lerp(shade(fx, fy), coverage))
                fx += inv.xx
                fy += inv.yx

    def fill_solid_color(self, color: Color) -> None:
        """Fill the pending path with a single color."""
        self.fill_mask()
        self._paint(lambda fx, fy: color, Mat2.identity(), Vec2())

    def fill_linear_gradient(
        self, p0: Vec2, p1: Vec2, spread: GradientSpread, stops: Sequence[ColorStop]
    ) -> None:
        """Fill the pending path with a gradient from ``p0`` to ``p1``."""
        self.fill_mask()
        inv = self._transform.inverse()
        table = build_gradient_table(stops)

        dir_x = p1.x - p0.x
        dir_y = p1.y - p0.y
        dir_d = dir_x * dir_x + dir_y * dir_y
        dir_s = 1.0 / dir_d if dir_d > 0.0 else 1.0

        def shade(fx: float, fy: float) -> Color:
            t = (dir_x * fx + dir_y * fy) * dir_s
            return table[apply_spread(int(t * GRADIENT_TABLE_SIZE), spread)]

        self._paint(shade, inv, p0)

    def fill_radial_gradient(
        self,
        p0: Vec2,
        r0: float,
        p1: Vec2,
        r1: float,
        spread: GradientSpread,
        stops: Sequence[ColorStop],
    ) -> None:
        """Fill the pending path with a concentric radial gradient centred at ``p0``.

        Only the simple case is supported: ``p1`` is ignored.
        """
        stops = list(stops)
        if not stops:
            return
        if r1 < _RADIAL_EPS:
            self.fill_solid_color(stops[-1].color)
            return

        self.fill_mask()
        inv = self._transform.inverse()
        r0 = clamp(r0, 0.0, r1 - _RADIAL_EPS)
        r_scale = 1.0 / (r1 - r0)
        table = build_gradient_table(stops)

        def shade(fx: float, fy: float) -> Color:
            t = (math.sqrt(fx * fx + fy * fy) - r0) * r_scale
            return table[apply_spread(int(t * GRADIENT_TABLE_SIZE), spread)]

        self._paint(shade, inv, p0)