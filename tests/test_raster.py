from skribidi.geometry import Rect2i
from skribidi.raster import SUBSAMPLES, Mask, make_edge, rasterize_edges


def _mask(width, height, fill=255, region=None):
    return Mask(
        buffer=bytearray([fill] * (width * height)),
        stride=width,
        region=region or Rect2i(0, 0, width, height),
    )


def _polygon_edges(points):
    edges = []
    for i, p in enumerate(points):
        q = points[(i + 1) % len(points)]
        e = make_edge(q[0], q[1], p[0], p[1])
        if e is not None:
            edges.append(e)
    return edges


def _pixel(mask, x, y):
    return mask.buffer[y * mask.stride + x]


def test_make_edge_skips_horizontal():
    assert make_edge(0.0, 2.0, 5.0, 2.0) is None


def test_make_edge_orients_downwards():
    down = make_edge(1.0, 1.0, 2.0, 3.0)
    up = make_edge(2.0, 3.0, 1.0, 1.0)
    assert down.direction == 1
    assert up.direction == -1
    assert (down.x0, down.y0, down.x1, down.y1) == (up.x0, up.y0, up.x1, up.y1)
    assert down.y0 == 1.0 * SUBSAMPLES
    assert down.y1 == 3.0 * SUBSAMPLES


def test_square_is_fully_covered():
    mask = _mask(4, 4)
    square = [(1, 1), (3, 1), (3, 3), (1, 3)]
    rasterize_edges(_polygon_edges(square), mask, 4)
    for y in range(4):
        for x in range(4):
            inside = 1 <= x < 3 and 1 <= y < 3
            assert _pixel(mask, x, y) == (255 if inside else 0)


def test_coverage_multiplies_existing_mask():
    mask = _mask(4, 4, fill=128)
    square = [(1, 1), (3, 1), (3, 3), (1, 3)]
    rasterize_edges(_polygon_edges(square), mask, 4)
    assert _pixel(mask, 1, 1) == 128
    assert _pixel(mask, 0, 0) == 0


def test_same_winding_overlap_stays_filled():
    mask = _mask(4, 4)
    square = [(1, 1), (3, 1), (3, 3), (1, 3)]
    rasterize_edges(_polygon_edges(square) + _polygon_edges(square), mask, 4)
    assert _pixel(mask, 2, 2) == 255


def test_opposite_winding_cancels():
    mask = _mask(4, 4)
    square = [(1, 1), (3, 1), (3, 3), (1, 3)]
    edges = _polygon_edges(square) + _polygon_edges(list(reversed(square)))
    rasterize_edges(edges, mask, 4)
    assert all(v == 0 for v in mask.buffer)


def test_partial_pixel_gets_partial_coverage():
    mask = _mask(4, 4)
    square = [(0.5, 0), (3, 0), (3, 4), (0.5, 4)]
    rasterize_edges(_polygon_edges(square), mask, 4)
    assert 0 < _pixel(mask, 0, 1) < 255
    assert _pixel(mask, 1, 1) == 255
    assert _pixel(mask, 3, 1) == 0


def test_pixels_outside_region_are_untouched():
    mask = _mask(6, 6, fill=7, region=Rect2i(2, 2, 2, 2))
    square = [(0, 0), (6, 0), (6, 6), (0, 6)]
    rasterize_edges(_polygon_edges(square), mask, 6)
    assert _pixel(mask, 0, 0) == 7
    assert _pixel(mask, 5, 5) == 7
    assert _pixel(mask, 2, 2) == 7
    assert _pixel(mask, 3, 3) == 7


def test_no_edges_clears_region():
    mask = _mask(4, 4, region=Rect2i(1, 1, 2, 2))
    rasterize_edges([], mask, 4)
    assert _pixel(mask, 1, 1) == 0
    assert _pixel(mask, 2, 2) == 0
    assert _pixel(mask, 0, 0) == 255


def test_edge_order_does_not_matter():
    tri = [(0.3, 0.2), (3.7, 1.1), (1.6, 3.9)]
    edges = _polygon_edges(tri)
    first = _mask(4, 4)
    second = _mask(4, 4)
    rasterize_edges(edges, first, 4)
    rasterize_edges(list(reversed(edges)), second, 4)
    assert first.buffer == second.buffer
    assert any(v > 0 for v in first.buffer)