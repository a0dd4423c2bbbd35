import struct

import pytest

from conftest import FakeDrawable, ZOOM_IN_KEY
from fractal_nav.rendering.bridge import RenderBridge
from fractal_nav.rendering.surface import UNIFORM_SIZE, pack_rect_uniform


def test_no_drawable_before_first_redraw(store, drawables):
    bridge = RenderBridge(store, drawables)
    assert bridge.live_drawables == 0
    bridge.draw()


def test_redraw_uses_current_rect(bridge, store, drawables):
    store.update(lambda r: r.translated(1j))
    bridge.redraw()

    assert drawables.made[-1].rect == store.get()


def test_redraw_retires_previous(bridge, drawables):
    first = drawables.made[0]
    bridge.redraw()

    assert first.released
    assert not drawables.made[1].released
    assert FakeDrawable.live == 1


def test_single_drawable_over_five_zoom_ins(router, bridge, drawables):
    for _ in range(5):
        router.on_key_press(ZOOM_IN_KEY, 0)
        router.on_key_release(ZOOM_IN_KEY, 0)

        assert bridge.live_drawables == 1
        assert FakeDrawable.live == 1

    assert len(drawables.made) == 6
    widths = [d.rect.width for d in drawables.made]
    assert widths == sorted(widths, reverse=True)


def test_draw_renders_current_drawable(bridge, drawables):
    bridge.draw()
    bridge.draw()
    assert drawables.made[-1].draws == 2


def test_close_releases(bridge, drawables):
    bridge.close()

    assert bridge.live_drawables == 0
    assert FakeDrawable.live == 0
    bridge.close()


def test_uniform_layout(start_rect):
    data = pack_rect_uniform(start_rect)

    assert len(data) == UNIFORM_SIZE
    assert struct.unpack("<4f", data) == pytest.approx((-0.75, 0.75, 0.0, 0.0))
