"""Small value types used by the rasterizer and drawing helpers."""

from __future__ import annotations

from dataclasses import dataclass

_INF = float("inf")


def clamp(value, lo, hi):
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(value, hi))


def mul255(a: int, b: int) -> int:
    """Multiply two 0..255 quantities, returning the rounded product / 255."""
    x = a * b + 128
    return (x + (x >> 8)) >> 8


@dataclass(frozen=True)
class Vec2:
    """A 2D point or direction."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return self.sub(other)

    def __mul__(self, scale: float) -> Vec2:
        return Vec2(self.x * scale, self.y * scale)

    def sub(self, other: Vec2) -> Vec2:
        """Component-wise difference."""
        return Vec2(self.x - other.x, self.y - other.y)

    def lerp(self, other: Vec2, t: float) -> Vec2:
        """Linear interpolation towards ``other``."""
        return Vec2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def mad(self, direction: Vec2, scale: float) -> Vec2:
        """Return ``self + direction * scale``."""
        return Vec2(self.x + direction.x * scale, self.y + direction.y * scale)

    def close_to(self, other: Vec2, tolerance: float) -> bool:
        """True when the points are closer than ``tolerance``."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy < tolerance * tolerance


@dataclass(frozen=True)
class Rect2:
    """Axis-aligned float rectangle. A negative size marks an undefined rect."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def undefined(cls) -> Rect2:
        """A rectangle that any union replaces."""
        return cls(_INF, _INF, -_INF, -_INF)

    @property
    def _is_undefined(self) -> bool:
        return self.width < 0 or self.height < 0

    def union_point(self, pt: Vec2) -> Rect2:
        """Smallest rectangle holding this one and ``pt``."""
        if self._is_undefined:
            return Rect2(pt.x, pt.y, 0.0, 0.0)
        min_x = min(self.x, pt.x)
        min_y = min(self.y, pt.y)
        max_x = max(self.x + self.width, pt.x)
        max_y = max(self.y + self.height, pt.y)
        return Rect2(min_x, min_y, max_x - min_x, max_y - min_y)

    def union(self, other: Rect2) -> Rect2:
        """Smallest rectangle holding both rectangles."""
        if self._is_undefined:
            return other
        if other._is_undefined:
            return self
        min_x = min(self.x, other.x)
        min_y = min(self.y, other.y)
        max_x = max(self.x + self.width, other.x + other.width)
        max_y = max(self.y + self.height, other.y + other.height)
        return Rect2(min_x, min_y, max_x - min_x, max_y - min_y)

    def is_empty(self) -> bool:
        """True when the rectangle has no area."""
        return self.width <= 0 or self.height <= 0

    def translate(self, offset: Vec2) -> Rect2:
        """The rectangle moved by ``offset``."""
        return Rect2(self.x + offset.x, self.y + offset.y, self.width, self.height)


@dataclass(frozen=True)
class Rect2i:
    """Axis-aligned integer rectangle."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def intersection(self, other: Rect2i) -> Rect2i:
        """Overlap of both rectangles; zero sized when they are disjoint."""
        min_x = max(self.x, other.x)
        min_y = max(self.y, other.y)
        max_x = min(self.x + self.width, other.x + other.width)
        max_y = min(self.y + self.height, other.y + other.height)
        return Rect2i(min_x, min_y, max(0, max_x - min_x), max(0, max_y - min_y))

    def is_empty(self) -> bool:
        """True when the rectangle has no area."""
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Mat2:
    """2D affine transform: x' = x*xx + y*xy + dx, y' = x*yx + y*yy + dy."""

    xx: float = 1.0
    yx: float = 0.0
    xy: float = 0.0
    yy: float = 1.0
    dx: float = 0.0
    dy: float = 0.0

    @classmethod
    def identity(cls) -> Mat2:
        return cls()

    def multiply(self, other: Mat2) -> Mat2:
        """Transform that applies ``self`` first and then ``other``."""
        a, b = self, other
        return Mat2(
            xx=a.xx * b.xx + a.yx * b.xy,
            yx=a.xx * b.yx + a.yx * b.yy,
            xy=a.xy * b.xx + a.yy * b.xy,
            yy=a.xy * b.yx + a.yy * b.yy,
            dx=a.dx * b.xx + a.dy * b.xy + b.dx,
            dy=a.dx * b.yx + a.dy * b.yy + b.dy,
        )

    def inverse(self) -> Mat2:
        """Inverse transform; a singular matrix yields the identity."""
        det = self.xx * self.yy - self.xy * self.yx
        if abs(det) < 1e-6:
            return Mat2()
        inv_det = 1.0 / det
        return Mat2(
            xx=self.yy * inv_det,
            yx=-self.yx * inv_det,
            xy=-self.xy * inv_det,
            yy=self.xx * inv_det,
            dx=(self.xy * self.dy - self.yy * self.dx) * inv_det,
            dy=(self.yx * self.dx - self.xx * self.dy) * inv_det,
        )

    def transform_point(self, pt: Vec2) -> Vec2:
        return Vec2(
            pt.x * self.xx + pt.y * self.xy + self.dx,
            pt.x * self.yx + pt.y * self.yy + self.dy,
        )


@dataclass(frozen=True)
class Color:
    """8-bit RGBA color."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def lerp(self, other: Color, amount: int) -> Color:
        """Blend towards ``other`` by ``amount`` in 0..255."""
        inv = 255 - amount
        return Color(
            mul255(self.r, inv) + mul255(other.r, amount),
            mul255(self.g, inv) + mul255(other.g, amount),
            mul255(self.b, inv) + mul255(other.b, amount),
            mul255(self.a, inv) + mul255(other.a, amount),
        )

    def lerpf(self, other: Color, t: float) -> Color:
        """Blend towards ``other`` by a fraction ``t`` in 0..1."""

        def channel(a: int, b: int) -> int:
            return clamp(int(a + (b - a) * t + 0.5), 0, 255)

        return Color(
            channel(self.r, other.r),
            channel(self.g, other.g),
            channel(self.b, other.b),
            channel(self.a, other.a),
        )

    def blend_over(self, src: Color) -> Color:
        """Composite ``src`` over this color."""
        inv = 255 - src.a
        out_a = src.a + mul255(self.a, inv)
        if out_a == 0:
            return Color(0, 0, 0, 0)
        den = out_a * 255

        def channel(s: int, d: int) -> int:
            num = s * src.a * 255 + d * self.a * inv
            return clamp((num + den // 2) // den, 0, 255)

        return Color(
            channel(src.r, self.r),
            channel(src.g, self.g),
            channel(src.b, self.b),
            out_a,
        )


def rgba(r: int, g: int, b: int, a: int) -> Color:
    """Build a color from its channels."""
    return Color(r, g, b, a)