import pytest

from skribidi.draw_list import CURVE_STEPS, DrawList, Primitive, StencilMode
from skribidi.geometry import Rect2, Vec2, rgba
from skribidi.vector_font import text_width

RED = rgba(255, 0, 0, 255)
BLUE = rgba(0, 0, 255, 255)


def _positions(vertices):
    return [(v.pos.x, v.pos.y) for v in vertices]


def test_filled_rect_single_triangle_batch():
    dl = DrawList()
    dl.filled_rect(1, 2, 3, 4, RED)
    batches, verts = dl.flush()
    assert len(batches) == 1
    assert batches[0].prim is Primitive.TRIANGLES
    assert batches[0].count == len(verts) == 6
    assert all(v.color == RED for v in verts)


def test_batches_merge_and_split():
    dl = DrawList()
    dl.line(0, 0, 1, 1, RED)
    dl.line(1, 1, 2, 2, RED)
    dl.tri(0, 0, 1, 0, 0, 1, RED)
    dl.line(0, 0, 5, 5, RED)
    batches, verts = dl.flush()
    assert [b.prim for b in batches] == [Primitive.LINES, Primitive.TRIANGLES, Primitive.LINES]
    assert sum(b.count for b in batches) == len(verts)
    assert batches[1].offset == batches[0].offset + batches[0].count


def test_line_width_change_splits_batch():
    dl = DrawList()
    dl.line(0, 0, 1, 0, RED)
    dl.set_line_width(2.0)
    dl.line(0, 0, 1, 0, RED)
    batches, _ = dl.flush()
    assert [b.line_width for b in batches] == [0.0, 2.0]


def test_line_width_clamped_to_range():
    dl = DrawList((1.0, 4.0))
    dl.set_line_width(10.0)
    assert dl.line_width == 4.0
    dl.set_line_width(0.0)
    assert dl.line_width == 1.0


def test_bad_range_rejected():
    with pytest.raises(ValueError):
        DrawList((5.0, 1.0))


def test_line_without_width_keeps_endpoints():
    dl = DrawList()
    dl.line(3, 4, 7, 9, RED)
    _, verts = dl.flush()
    assert _positions(verts) == [(3, 4), (7, 9)]


def test_wide_line_extends_ends():
    dl = DrawList()
    dl.set_line_width(2.0)
    dl.line(0, 5, 10, 5, RED)
    _, verts = dl.flush()
    assert _positions(verts) == [(-1.0, 5.0), (11.0, 5.0)]


def test_tick_and_rect_vertex_counts():
    dl = DrawList()
    dl.tick(0, 0, 4, RED)
    dl.rect(0, 0, 5, 5, RED)
    batches, verts = dl.flush()
    assert len(batches) == 1
    assert len(verts) == 4 + 8


def test_dashed_line_even_and_bounded():
    dl = DrawList()
    dl.dashed_line(0, 0, 100, 0, 6, RED)
    _, verts = dl.flush()
    assert len(verts) % 2 == 0
    assert 0 < len(verts) <= 1000
    assert all(0.0 <= v.pos.x <= 100.0 + 1e-3 for v in verts)


def test_dashed_line_zero_dash_rejected():
    with pytest.raises(ValueError):
        DrawList().dashed_line(0, 0, 10, 0, 0, RED)


def test_arrow_starts_with_main_line():
    dl = DrawList()
    dl.arrow(0, 0, 10, 0, 3, RED)
    _, verts = dl.flush()
    assert len(verts) == 6
    assert _positions(verts)[:2] == [(0, 0), (10, 0)]
    assert _positions(verts)[2] == (10, 0)
    assert _positions(verts)[4] == (10, 0)


def test_quad_bez_endpoints():
    dl = DrawList()
    dl.quad_bez(0, 0, 5, 10, 10, 0, RED)
    _, verts = dl.flush()
    assert len(verts) == 2 * (CURVE_STEPS + 1)
    assert _positions(verts)[0] == (0, 0)
    assert verts[-1].pos.x == pytest.approx(10)
    assert verts[-1].pos.y == pytest.approx(0)


def test_cubic_bez_endpoints():
    dl = DrawList()
    dl.cubic_bez(0, 0, 2, 5, 8, 5, 10, 0, RED)
    _, verts = dl.flush()
    assert len(verts) == 2 * (CURVE_STEPS + 1)
    assert verts[-1].pos.x == pytest.approx(10)
    assert verts[-1].pos.y == pytest.approx(0)


def test_text_left_aligned_returns_end_pen():
    dl = DrawList()
    end = dl.text(5.0, 20.0, 12.0, 0.0, RED, "Hi!")
    assert end == pytest.approx(5.0 + text_width(12.0, "Hi!"))
    _, verts = dl.flush()
    assert verts


def test_text_right_aligned_ends_at_x():
    dl = DrawList()
    end = dl.text(50.0, 20.0, 12.0, 1.0, RED, "abc")
    assert end == pytest.approx(50.0)
    assert dl.text_width(12.0, "abc") == pytest.approx(text_width(12.0, "abc"))


def test_char_without_glyph_draws_nothing():
    dl = DrawList()
    assert dl.char(0, 0, 12, RED, "\u00e9") == 0.0
    assert dl.char(0, 0, 12, RED, " ") > 0.0
    assert dl.flush() == ([], [])


def test_texture_ids_and_lookup():
    dl = DrawList()
    a = dl.create_texture(2, 2, 2, None, 1)
    b = dl.create_texture(1, 1, 4, bytes(4), 4)
    assert (a, b) == (1, 2)
    assert dl.find_texture(0) is None
    assert dl.find_texture(b).bpp == 4
    assert dl.find_texture(99) is None


def test_texture_bad_bpp():
    with pytest.raises(ValueError):
        DrawList().create_texture(2, 2, 6, None, 3)


def test_create_texture_respects_stride():
    dl = DrawList()
    data = bytes([1, 2, 9, 3, 4, 9])
    tid = dl.create_texture(2, 2, 3, data, 1)
    assert dl.find_texture(tid).data == bytearray([1, 2, 3, 4])


def test_update_texture_copies_region():
    dl = DrawList()
    tid = dl.create_texture(3, 2, 3, None, 1)
    image = bytes([0, 0, 0, 0, 7, 8])
    dl.update_texture(tid, 1, 1, 2, 1, 3, 2, 3, image)
    assert dl.find_texture(tid).data == bytearray([0, 0, 0, 0, 7, 8])


def test_update_texture_resizes():
    dl = DrawList()
    tid = dl.create_texture(1, 1, 1, None, 1)
    dl.update_texture(tid, 0, 0, 2, 2, 2, 2, 2, bytes([5, 6, 7, 8]))
    tex = dl.find_texture(tid)
    assert (tex.width, tex.height) == (2, 2)
    assert tex.data == bytearray([5, 6, 7, 8])


def test_image_quad_state_is_per_call():
    dl = DrawList()
    tid = dl.create_texture(4, 4, 4, None, 1)
    dl.image_quad(Rect2(0, 0, 4, 4), Rect2(0, 0, 4, 4), RED, tid)
    dl.filled_rect(0, 0, 1, 1, RED)
    batches, verts = dl.flush()
    assert [b.image_id for b in batches] == [tid, 0]
    assert verts[2].uv == Vec2(4, 4)


def test_image_quad_sdf_scale():
    dl = DrawList()
    dl.image_quad_sdf(Rect2(0, 0, 2, 2), Rect2(1, 1, 2, 2), 0.5, BLUE, 3)
    batches, verts = dl.flush()
    assert batches[0].sdf_id == 3
    assert all(v.scale == 0.5 for v in verts)
    assert verts[0].uv == Vec2(1, 1)


def test_path_fill_uses_stencil_passes():
    dl = DrawList()
    dl.path_begin()
    dl.path_move_to(0, 0)
    dl.path_line_to(10, 0)
    dl.path_line_to(10, 10)
    dl.path_line_to(0, 10)
    dl.path_end(BLUE)
    assert dl.stencil is StencilMode.DISABLED
    batches, verts = dl.flush()
    assert [b.stencil for b in batches] == [StencilMode.WINDING, StencilMode.FILL]
    fill = verts[batches[1].offset:]
    assert len(fill) == 6
    assert all(v.color == BLUE for v in fill)
    xs = [v.pos.x for v in fill]
    assert min(xs) == 0 and max(xs) == 10


def test_path_curves_emit_triangles():
    dl = DrawList()
    dl.path_begin()
    dl.path_move_to(0, 0)
    dl.path_quad_to(5, 10, 10, 0)
    dl.path_cubic_to(7, -5, 3, -5, 0, 0)
    dl.path_end(BLUE)
    batches, verts = dl.flush()
    assert all(b.prim is Primitive.TRIANGLES for b in batches)
    assert len(verts) % 3 == 0
    assert batches[-1].stencil is StencilMode.FILL


def test_path_commands_ignored_outside_path():
    dl = DrawList()
    dl.path_move_to(0, 0)
    dl.path_line_to(5, 5)
    dl.path_end(BLUE)
    assert dl.flush() == ([], [])


def test_degenerate_path_has_no_fill():
    dl = DrawList()
    dl.path_begin()
    dl.path_move_to(3, 3)
    dl.path_end(BLUE)
    assert dl.flush() == ([], [])


def test_flush_resets_frame():
    dl = DrawList()
    dl.set_line_width(3.0)
    dl.line(0, 0, 1, 1, RED)
    batches, verts = dl.flush()
    assert len(verts) == 2
    assert dl.line_width == 0.0
    assert dl.vertices == () and dl.batches == ()
    assert dl.flush() == ([], [])