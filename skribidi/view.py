"""Pannable and zoomable 2D view used to place content on screen."""

from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import Rect2, Vec2, clamp

ZOOM_BASE = 1.5
ZOOM_MIN = -8.0
ZOOM_MAX = 8.0


@dataclass
class View:
    """View origin ``(cx, cy)`` and uniform scale, with mouse drag state."""

    cx: float = 0.0
    cy: float = 0.0
    scale: float = 1.0
    zoom_level: float = 0.0
    viewport_width: float = 0.0
    viewport_height: float = 0.0

    drag_start_mx: float = field(default=0.0, repr=False)
    drag_start_my: float = field(default=0.0, repr=False)
    drag_start_vx: float = field(default=0.0, repr=False)
    drag_start_vy: float = field(default=0.0, repr=False)

    def transform_point(self, pt: Vec2) -> Vec2:
        """Map a content point to screen space."""
        return Vec2(pt.x * self.scale + self.cx, pt.y * self.scale + self.cy)

    def transform_rect(self, rect: Rect2) -> Rect2:
        """Map a content rectangle to screen space."""
        return Rect2(
            rect.x * self.scale + self.cx,
            rect.y * self.scale + self.cy,
            rect.width * self.scale,
            rect.height * self.scale,
        )

    def transform_x(self, x: float) -> float:
        """Map a content x coordinate to screen space."""
        return x * self.scale + self.cx

    def transform_y(self, y: float) -> float:
        """Map a content y coordinate to screen space."""
        return y * self.scale + self.cy

    def drag_start(self, mouse_x: float, mouse_y: float) -> None:
        """Remember where a pan drag starts."""
        self.drag_start_mx = mouse_x
        self.drag_start_my = mouse_y
        self.drag_start_vx = self.cx
        self.drag_start_vy = self.cy

    def drag_move(self, mouse_x: float, mouse_y: float) -> None:
        """Pan the view by the mouse movement since the drag started."""
        self.cx = self.drag_start_vx + (mouse_x - self.drag_start_mx)
        self.cy = self.drag_start_vy + (mouse_y - self.drag_start_my)

    def scroll_zoom(self, mouse_x: float, mouse_y: float, delta: float) -> None:
        """Change the zoom level by ``delta``, keeping the point under the mouse fixed."""
        rel_x = (self.cx - mouse_x) / self.scale
        rel_y = (self.cy - mouse_y) / self.scale

        self.zoom_level = clamp(self.zoom_level + delta, ZOOM_MIN, ZOOM_MAX)
        self.scale = ZOOM_BASE ** self.zoom_level

        self.cx = mouse_x + rel_x * self.scale
        self.cy = mouse_y + rel_y * self.scale