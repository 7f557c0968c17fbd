"""Vector path rasterization, emoji presentation scanning and debug drawing."""

__version__ = "0.1.0"
__all__ = ["canvas", "draw_list", "emoji_scanner", "geometry", "raster", "vector_font", "view"]