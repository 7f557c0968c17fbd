"""Immediate-mode debug drawing recorded into vertex batches.

Shapes, stroke-font text, textured quads and stencil-filled paths are
collected as vertices grouped into batches that share a primitive type
and render state. :meth:`DrawList.flush` hands the recorded frame over
and starts a new one. Textures keep their pixels in memory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from .geometry import Color, Rect2, Vec2, clamp, rgba
from .vector_font import MAX_TEXT_BYTES, char_segments, glyph_for, text_width

CURVE_STEPS = 16
MAX_DASH_TICKS = 1000

_FILL_TOLERANCE_SQR = 0.75 * 0.75
_MAX_FILL_LEVEL = 10
_STENCIL_COLOR = rgba(255, 0, 0, 255)


class Primitive(Enum):
    """Primitive type of a batch."""

    LINES = "lines"
    TRIANGLES = "triangles"


class StencilMode(Enum):
    """Stencil state of a batch."""

    DISABLED = 0
    WINDING = 1
    FILL = 2


@dataclass(frozen=True)
class Vertex:
    """Position, texture coordinate, color and SDF scale of one vertex."""

    pos: Vec2
    color: Color
    uv: Vec2 = Vec2()
    scale: float = 0.0


@dataclass
class Batch:
    """A run of vertices drawn with the same state."""

    prim: Primitive
    offset: int
    count: int
    stencil: StencilMode
    line_width: float
    image_id: int
    sdf_id: int


@dataclass
class Texture:
    """Texture pixels stored tightly packed, ``width * bpp`` bytes per row."""

    id: int
    width: int
    height: int
    bpp: int
    data: bytearray = field(default_factory=bytearray, repr=False)

    @property
    def stride(self) -> int:
        return self.width * self.bpp


def _direction(x0: float, y0: float, x1: float, y1: float) -> tuple[float, float, float]:
    dx = x1 - x0
    dy = y1 - y0
    d = math.sqrt(dx * dx + dy * dy)
    inv = 1.0 / d if d > 0.0 else 0.0
    return d, dx * inv, dy * inv


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _quad_bez(x0: float, x1: float, x2: float, t: float) -> float:
    return _lerp(_lerp(x0, x1, t), _lerp(x1, x2, t), t)


def _cubic_bez(x0: float, x1: float, x2: float, x3: float, t: float) -> float:
    x01 = _lerp(x0, x1, t)
    x12 = _lerp(x1, x2, t)
    x23 = _lerp(x2, x3, t)
    return _lerp(_lerp(x01, x12, t), _lerp(x12, x23, t), t)


class DrawList:
    """Records debug drawing commands for one frame at a time."""

    def __init__(self, line_width_range: tuple[float, float] | None = None) -> None:
        if line_width_range is None:
            line_width_range = (0.0, math.inf)
        lo, hi = line_width_range
        if lo > hi:
            raise ValueError("line width range must be ordered")
        self.line_width_range = (float(lo), float(hi))
        self.line_width = 0.0
        self.stencil = StencilMode.DISABLED

        self._vertices: list[Vertex] = []
        self._batches: list[Batch] = []
        self._textures: list[Texture] = []

        self._image_id = 0
        self._sdf_id = 0

        self._in_polygon = False
        self._start = Vec2()
        self._pen = Vec2()
        self._poly_bounds = Rect2.undefined()

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        return tuple(self._vertices)

    @property
    def batches(self) -> tuple[Batch, ...]:
        return tuple(self._batches)

    @property
    def textures(self) -> tuple[Texture, ...]:
        return tuple(self._textures)

    # Recording

    def _add_command(self, prim: Primitive) -> None:
        if self._batches:
            prev = self._batches[-1]
            if (
                prev.prim == prim
                and prev.line_width == self.line_width
                and prev.stencil == self.stencil
                and prev.image_id == self._image_id
                and prev.sdf_id == self._sdf_id
            ):
                return
            prev.count = len(self._vertices) - prev.offset
        self._batches.append(
            Batch(
                prim=prim,
                offset=len(self._vertices),
                count=0,
                stencil=self.stencil,
                line_width=self.line_width,
                image_id=self._image_id,
                sdf_id=self._sdf_id,
            )
        )

    def _vertex(self, x: float, y: float, color: Color, uv: Vec2 = Vec2(), scale: float = 0.0) -> None:
        self._vertices.append(Vertex(Vec2(x, y), color, uv, scale))

    def set_line_width(self, width: float) -> None:
        """Set the line width, clamped to the supported range."""
        lo, hi = self.line_width_range
        self.line_width = clamp(width, lo, hi)

    # Shapes

    def tick(self, x: float, y: float, size: float, color: Color) -> None:
        """A small cross centred at ``(x, y)``."""
        self._add_command(Primitive.LINES)
        hs = size * 0.5 + self.line_width * 0.5
        self._vertex(x - hs, y, color)
        self._vertex(x + hs, y, color)
        self._vertex(x, y - hs, color)
        self._vertex(x, y + hs, color)

    def line(self, x0: float, y0: float, x1: float, y1: float, color: Color) -> None:
        """A line segment, extended by half the line width at both ends."""
        self._add_command(Primitive.LINES)
        if self.line_width > 0.0:
            _, dx, dy = _direction(x0, y0, x1, y1)
            dx *= self.line_width * 0.5
            dy *= self.line_width * 0.5
            self._vertex(x0 - dx, y0 - dy, color)
            self._vertex(x1 + dx, y1 + dy, color)
        else:
            self._vertex(x0, y0, color)
            self._vertex(x1, y1, color)

    def dashed_line(self, x0: float, y0: float, x1: float, y1: float, dash: float, color: Color) -> None:
        """A line broken into dashes of roughly ``dash`` length."""
        if dash == 0:
            raise ValueError("dash length must not be zero")
        length, dx, dy = _direction(x0, y0, x1, y1)
        length += self.line_width

        ticks = int(math.floor(length / dash)) | 1
        ticks = int(clamp(ticks, 1, MAX_DASH_TICKS))
        step = length / ticks

        x0 -= self.line_width * 0.5
        y0 -= self.line_width * 0.5

        self._add_command(Primitive.LINES)
        for i in range(0, ticks, 2):
            d0 = i * step
            d1 = d0 + step
            self._vertex(x0 + dx * d0, y0 + dy * d0, color)
            self._vertex(x0 + dx * d1, y0 + dy * d1, color)

    def arrow(self, x0: float, y0: float, x1: float, y1: float, size: float, color: Color) -> None:
        """A line with an arrow head of ``size`` at its end."""
        _, dx, dy = _direction(x0, y0, x1, y1)
        nx, ny = -dy, dx
        self.line(x0, y0, x1, y1, color)
        self.line(x1, y1, x1 - dx * size - nx * size * 0.5, y1 - dy * size - ny * size * 0.5, color)
        self.line(x1, y1, x1 - dx * size + nx * size * 0.5, y1 - dy * size + ny * size * 0.5, color)

    def quad_bez(self, x0: float, y0: float, x1: float, y1: float, x2: float, y2: float, color: Color) -> None:
        """A quadratic Bezier curve as line segments."""
        self._add_command(Primitive.LINES)
        half = self.line_width * 0.5
        if self.line_width > 0.0:
            _, dx, dy = _direction(x0, y0, x1, y1)
            self._vertex(x0 - dx * half, y0 - dy * half, color)
            self._vertex(x0, y0, color)

        px, py = x0, y0
        for i in range(CURVE_STEPS + 1):
            t = i / CURVE_STEPS
            x = _quad_bez(x0, x1, x2, t)
            y = _quad_bez(y0, y1, y2, t)
            self._vertex(px, py, color)
            self._vertex(x, y, color)
            px, py = x, y

        if self.line_width > 0.0:
            _, dx, dy = _direction(x1, y1, x2, y2)
            self._vertex(x2, y2, color)
            self._vertex(x2 + dx * half, y2 + dy * half, color)

    def cubic_bez(
        self, x0: float, y0: float, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float, color: Color
    ) -> None:
        """A cubic Bezier curve as line segments."""
        self._add_command(Primitive.LINES)
        px, py = x0, y0
        for i in range(CURVE_STEPS + 1):
            t = i / CURVE_STEPS
            x = _cubic_bez(x0, x1, x2, x3, t)
            y = _cubic_bez(y0, y1, y2, y3, t)
            self._vertex(px, py, color)
            self._vertex(x, y, color)
            px, py = x, y

    def rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        """Rectangle outline."""
        self._add_command(Primitive.LINES)
        lw = self.line_width * 0.5
        self._vertex(x - lw, y, color)
        self._vertex(x + w + lw, y, color)
        self._vertex(x + w, y - lw, color)
        self._vertex(x + w, y + h + lw, color)
        self._vertex(x + w + lw, y + h, color)
        self._vertex(x - lw, y + h, color)
        self._vertex(x, y + h + lw, color)
        self._vertex(x, y - lw, color)

    def filled_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        """Solid rectangle as two triangles."""
        self._add_command(Primitive.TRIANGLES)
        self._vertex(x, y, color)
        self._vertex(x + w, y, color)
        self._vertex(x + w, y + h, color)
        self._vertex(x, y, color)
        self._vertex(x + w, y + h, color)
        self._vertex(x, y + h, color)

    def tri(self, x0: float, y0: float, x1: float, y1: float, x2: float, y2: float, color: Color) -> None:
        """A solid triangle."""
        self._add_command(Primitive.TRIANGLES)
        self._vertex(x0, y0, color)
        self._vertex(x1, y1, color)
        self._vertex(x2, y2, color)

    # Text

    def char(self, x: float, y: float, size: float, color: Color, char: str) -> float:
        """Draw one character of the stroke font; returns its advance."""
        glyph = glyph_for(char)
        if glyph is None:
            return 0.0
        for a, b in char_segments(x, y, size, char):
            self.line(a.x, a.y, b.x, b.y, color)
        return glyph.advance * (size / 30.0)

    def text(self, x: float, y: float, size: float, align: float, color: Color, text: str) -> float:
        """Draw ``text`` aligned by ``align`` (0 left, 1 right); returns the pen x after it."""
        data = text.encode("utf-8")[:MAX_TEXT_BYTES]
        x -= text_width(size, text) * align
        for code in data:
            x += self.char(x, y, size, color, chr(code))
        return x

    def text_width(self, size: float, text: str) -> float:
        """Width of ``text`` in the stroke font."""
        return text_width(size, text)

    # Textures

    def find_texture(self, tex_id: int) -> Texture | None:
        """The texture with ``tex_id``; id 0 is never a texture."""
        if tex_id == 0:
            return None
        return next((t for t in self._textures if t.id == tex_id), None)

    @staticmethod
    def _pack(width: int, height: int, stride: int, data, bpp: int) -> bytearray:
        row_bytes = width * bpp
        if data is None:
            return bytearray(row_bytes * height)
        src = memoryview(bytes(data))
        out = bytearray()
        for y in range(height):
            out += src[y * stride:y * stride + row_bytes]
        return out

    def _resize(self, tex: Texture, width: int, height: int, stride: int, data, bpp: int) -> None:
        if bpp not in (1, 4):
            raise ValueError("texture must have 1 or 4 bytes per pixel")
        tex.width = width
        tex.height = height
        tex.bpp = bpp
        tex.data = self._pack(width, height, stride, data, bpp)

    def create_texture(self, width: int, height: int, stride: int, data, bpp: int) -> int:
        """Create a texture from pixels (or blank when ``data`` is None); returns its id."""
        tex = Texture(id=len(self._textures) + 1, width=0, height=0, bpp=bpp)
        self._resize(tex, width, height, stride, data, bpp)
        self._textures.append(tex)
        return tex.id

    def update_texture(
        self, tex_id: int, offset_x: int, offset_y: int, width: int, height: int,
        img_width: int, img_height: int, stride: int, data,
    ) -> None:
        """Copy a dirty region of an image into a texture, reallocating when its size changed."""
        tex = self.find_texture(tex_id)
        if tex is None:
            return
        if tex.width != img_width or tex.height != img_height:
            self._resize(tex, img_width, img_height, stride, data, tex.bpp)
            return
        src = bytes(data)
        bpp = tex.bpp
        row_bytes = width * bpp
        for y in range(offset_y, offset_y + height):
            s = y * stride + offset_x * bpp
            d = y * tex.stride + offset_x * bpp
            tex.data[d:d + row_bytes] = src[s:s + row_bytes]

    # Images

    def image_quad(self, geom: Rect2, image: Rect2, tint: Color, tex_id: int) -> None:
        """A textured quad; ``image`` is in texture pixels."""
        self._image_id = tex_id
        self._textured_quad(geom, image, tint, 0.0)
        self._image_id = 0

    def image_quad_sdf(self, geom: Rect2, image: Rect2, scale: float, tint: Color, tex_id: int) -> None:
        """A quad sampling a signed distance field texture."""
        self._sdf_id = tex_id
        self._textured_quad(geom, image, tint, scale)
        self._sdf_id = 0

    def _textured_quad(self, geom: Rect2, image: Rect2, tint: Color, scale: float) -> None:
        x0, y0 = geom.x, geom.y
        x1, y1 = geom.x + geom.width, geom.y + geom.height
        u0, v0 = image.x, image.y
        u1, v1 = image.x + image.width, image.y + image.height
        self._add_command(Primitive.TRIANGLES)
        self._vertex(x0, y0, tint, Vec2(u0, v0), scale)
        self._vertex(x1, y0, tint, Vec2(u1, v0), scale)
        self._vertex(x1, y1, tint, Vec2(u1, v1), scale)
        self._vertex(x0, y0, tint, Vec2(u0, v0), scale)
        self._vertex(x1, y1, tint, Vec2(u1, v1), scale)
        self._vertex(x0, y1, tint, Vec2(u0, v1), scale)

    # Stencil filled paths

    def _bound(self, x: float, y: float) -> None:
        self._poly_bounds = self._poly_bounds.union_point(Vec2(x, y))

    def path_begin(self) -> None:
        """Start a filled path; triangles go to the stencil until :meth:`path_end`."""
        if self._in_polygon:
            return
        self.stencil = StencilMode.WINDING
        self._pen = Vec2()
        self._poly_bounds = Rect2.undefined()
        self._in_polygon = True

    def path_move_to(self, x: float, y: float) -> None:
        if not self._in_polygon:
            return
        self._start = Vec2(x, y)
        self._pen = Vec2(x, y)
        self._bound(x, y)

    def path_line_to(self, x: float, y: float) -> None:
        if not self._in_polygon:
            return
        self.tri(self._start.x, self._start.y, self._pen.x, self._pen.y, x, y, _STENCIL_COLOR)
        self._pen = Vec2(x, y)
        self._bound(x, y)

    def _quad_fill(self, cx, cy, x0, y0, x1, y1, x2, y2, level: int) -> None:
        if level > _MAX_FILL_LEVEL:
            return
        dx = x2 - x0
        dy = y2 - y0
        d = abs((x1 - x2) * dy - (y1 - y2) * dx)
        if d * d < _FILL_TOLERANCE_SQR * (dx * dx + dy * dy):
            self.tri(cx, cy, x0, y0, x2, y2, _STENCIL_COLOR)
            return
        x01, y01 = (x0 + x1) * 0.5, (y0 + y1) * 0.5
        x12, y12 = (x1 + x2) * 0.5, (y1 + y2) * 0.5
        x012, y012 = (x01 + x12) * 0.5, (y01 + y12) * 0.5
        self._quad_fill(cx, cy, x0, y0, x01, y01, x012, y012, level + 1)
        self._quad_fill(cx, cy, x012, y012, x12, y12, x2, y2, level + 1)

    def path_quad_to(self, x1: float, y1: float, x2: float, y2: float) -> None:
        if not self._in_polygon:
            return
        self._quad_fill(self._start.x, self._start.y, self._pen.x, self._pen.y, x1, y1, x2, y2, 0)
        self._pen = Vec2(x2, y2)
        self._bound(x1, y1)
        self._bound(x2, y2)

    def _cubic_fill(self, cx, cy, x0, y0, x1, y1, x2, y2, x3, y3, level: int) -> None:
        if level > _MAX_FILL_LEVEL:
            return
        dx = x3 - x0
        dy = y3 - y0
        d2 = abs((x1 - x3) * dy - (y1 - y3) * dx)
        d3 = abs((x2 - x3) * dy - (y2 - y3) * dx)
        if (d2 + d3) * (d2 + d3) < _FILL_TOLERANCE_SQR * (dx * dx + dy * dy):
            self.tri(cx, cy, x0, y0, x3, y3, _STENCIL_COLOR)
            return
        x01, y01 = (x0 + x1) * 0.5, (y0 + y1) * 0.5
        x12, y12 = (x1 + x2) * 0.5, (y1 + y2) * 0.5
        x23, y23 = (x2 + x3) * 0.5, (y2 + y3) * 0.5
        x012, y012 = (x01 + x12) * 0.5, (y01 + y12) * 0.5
        x123, y123 = (x12 + x23) * 0.5, (y12 + y23) * 0.5
        x0123, y0123 = (x012 + x123) * 0.5, (y012 + y123) * 0.5
        self._cubic_fill(cx, cy, x0, y0, x01, y01, x012, y012, x0123, y0123, level + 1)
        self._cubic_fill(cx, cy, x0123, y0123, x123, y123, x23, y23, x3, y3, level + 1)

    def path_cubic_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        if not self._in_polygon:
            return
        self._cubic_fill(self._start.x, self._start.y, self._pen.x, self._pen.y, x1, y1, x2, y2, x3, y3, 0)
        self._pen = Vec2(x3, y3)
        self._bound(x1, y1)
        self._bound(x2, y2)
        self._bound(x3, y3)

    def path_end(self, color: Color) -> None:
        """Finish the path and cover its bounds with ``color`` where the stencil is set."""
        if not self._in_polygon:
            return
        self._in_polygon = False
        b = self._poly_bounds
        if not b.is_empty():
            self.stencil = StencilMode.FILL
            min_x, min_y = b.x, b.y
            max_x, max_y = b.x + b.width, b.y + b.height
            self.tri(min_x, min_y, max_x, min_y, max_x, max_y, color)
            self.tri(min_x, min_y, max_x, max_y, min_x, max_y, color)
        self.stencil = StencilMode.DISABLED

    # Frame

    def flush(self) -> tuple[list[Batch], list[Vertex]]:
        """Return the recorded batches and vertices, and start a new frame."""
        batches, vertices = self._batches, self._vertices
        self._batches = []
        self._vertices = []
        if not batches or not vertices:
            return [], []
        batches[-1].count = len(vertices) - batches[-1].offset
        self.line_width = 0.0
        return batches, vertices