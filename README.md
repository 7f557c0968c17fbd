# skribidi

A small, dependency-free toolkit for 2D vector graphics work around text
rendering:

- **`skribidi.geometry`** – vectors (`Vec2`), float and integer rectangles
  (`Rect2`, `Rect2i`), 2D affine matrices (`Mat2`) and 8-bit RGBA colors
  (`Color`, `rgba`) with blending helpers (`Color.lerp`, `Color.lerpf`,
  `Color.blend_over`, `mul255`, `clamp`).
- **`skribidi.raster`** – a scanline rasterizer with 5× vertical
  subsampling and non-zero winding fill. `rasterize_edges` multiplies the
  coverage of a set of `Edge`s (built with `make_edge`) into the active
  region of a `Mask` and clears the rest of that region.
- **`skribidi.canvas`** – a `Canvas` that renders paths (move, line,
  quadratic and cubic curves, close) into an `Image`, with a transform
  stack, nested masks, layers, solid fills and linear/radial gradients
  (`ColorStop`, `GradientSpread`, `build_gradient_table`, `apply_spread`).
- **`skribidi.emoji_scanner`** – splits a sequence of emoji character
  categories into runs of emoji and text presentation
  (`scan_emoji_presentation`, `iter_emoji_runs`).
- **`skribidi.view`** – a pannable, zoomable `View` transform with mouse
  drag and scroll-zoom helpers.
- **`skribidi.vector_font`** – a built-in line-segment font for printable
  ASCII debug text (`LineGlyph`, `glyph_for`, `glyph_width`,
  `char_segments`, `text_width`).
- **`skribidi.draw_list`** – a `DrawList` that collects lines, triangles,
  debug text, textured quads and stencil-filled paths into batches of
  vertices.

## Installation

```
pip install .
```

Install with the `test` extra to run the test suite with pytest.

## Rendering a shape

```python
from skribidi.canvas import Canvas, ColorStop, GradientSpread, Image
from skribidi.geometry import Vec2, rgba

image = Image(width=64, height=64, bpp=4)
canvas = Canvas(image)

canvas.move_to(Vec2(8, 8))
canvas.line_to(Vec2(56, 8))
canvas.quad_to(Vec2(56, 56), Vec2(8, 56))
canvas.close()
canvas.fill_linear_gradient(
    Vec2(0, 0),
    Vec2(64, 0),
    GradientSpread.PAD,
    [ColorStop(0.0, rgba(255, 102, 0, 255)), ColorStop(1.0, rgba(49, 109, 237, 255))],
)
```

An `Image` with `bpp=1` renders coverage only; with `bpp=4` it holds RGBA
pixels. `Canvas` raises `ValueError` for an empty target or any other
`bpp`. Use `push_layer`/`pop_layer` to composite groups and
`push_mask`/`pop_mask` together with `fill_mask` to clip. The radial
gradient is concentric around `p0`; its `p1` argument is ignored.

## Emoji runs

The scanner works on integer categories, one per character (0 emoji,
1 text presentation, 2 emoji presentation, … 12 VS16, … 15 tag term; the
full list is in the module docstring). `iter_emoji_runs(categories)`
yields `(start, end, is_emoji, has_vs)` for consecutive runs covering the
input; `scan_emoji_presentation(categories, start)` scans a single run and
returns `(end, is_emoji, has_vs)`.

## Debug drawing

```python
from skribidi.draw_list import DrawList
from skribidi.geometry import rgba

draw = DrawList(line_width_range=(1.0, 10.0))
draw.set_line_width(1.0)
draw.rect(10, 10, 100, 40, rgba(0, 0, 0, 255))
end_x = draw.text(15, 35, 12, 0.0, rgba(0, 0, 0, 255), "Hello")
batches, vertices = draw.flush()
```

`flush` returns the finished `Batch` list and its `Vertex` list and resets
the list for the next frame. Textures created with `create_texture` and
changed with `update_texture` keep their pixels in memory and are
referenced by id from `image_quad` and `image_quad_sdf`.

## What it does not do

The package does not open windows or talk to a GPU: `DrawList` only
records vertices and batches for a caller to submit. It does not load
fonts, shape or lay out text, or map characters to emoji categories; the
only font included is the stroke font in `skribidi.vector_font`.