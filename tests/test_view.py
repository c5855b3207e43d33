import math

import pytest

from mandelbrot_view.view import PanController, ViewState, ZoomController


WIDTH, HEIGHT = 800, 600


def test_default_view():
    view = ViewState()
    assert view.center == (-0.75, 0.0)
    assert view.scale == 3.5


@pytest.mark.parametrize("scale", [0.0, -1.0, math.nan, math.inf])
def test_view_rejects_bad_scale(scale):
    with pytest.raises(ValueError):
        ViewState(scale=scale)


def test_reset_restores_defaults():
    view = ViewState(1.0, 2.0, 0.5)
    view.reset()
    assert view.snapshot() == (-0.75, 0.0, 3.5)


def test_is_valid_detects_outside_writes():
    view = ViewState()
    assert view.is_valid()
    view.scale = -1.0
    assert not view.is_valid()


class TestPanController:

    def test_first_sample_only_records_position(self):
        view = ViewState()
        pan = PanController()
        assert pan.update(view, True, (100, 100), WIDTH) is False
        assert view.center == (-0.75, 0.0)
        assert pan.dragging

    def test_drag_moves_center_against_pointer(self):
        view = ViewState()
        pan = PanController()
        pan.update(view, True, (100, 100), WIDTH)
        assert pan.update(view, True, (180, 60), WIDTH) is True
        per_pixel = 3.5 / WIDTH
        assert view.center_x == pytest.approx(-0.75 - 80 * per_pixel)
        assert view.center_y == pytest.approx(-40 * per_pixel)

    def test_drag_there_and_back_restores_center(self):
        view = ViewState(0.3, -0.2, 0.01)
        pan = PanController()
        pan.update(view, True, (400, 300), WIDTH)
        pan.update(view, True, (437, 251), WIDTH)
        pan.update(view, True, (400, 300), WIDTH)
        assert view.center_x == pytest.approx(0.3, abs=1e-12)
        assert view.center_y == pytest.approx(-0.2, abs=1e-12)

    def test_no_position_keeps_previous_sample(self):
        view = ViewState()
        pan = PanController()
        pan.update(view, True, (10, 10), WIDTH)
        assert pan.update(view, True, None, WIDTH) is False
        assert pan.last_pos == (10, 10)

    def test_release_forgets_position(self):
        view = ViewState()
        pan = PanController()
        pan.update(view, True, (10, 10), WIDTH)
        pan.update(view, False, (500, 500), WIDTH)
        assert not pan.dragging
        # New gesture far away does not jump
        assert pan.update(view, True, (700, 20), WIDTH) is False
        assert view.center == (-0.75, 0.0)

    def test_motion_without_button_does_nothing(self):
        view = ViewState()
        pan = PanController()
        assert pan.update(view, False, (10, 10), WIDTH) is False
        assert pan.update(view, False, (90, 10), WIDTH) is False
        assert view.center == (-0.75, 0.0)


class TestZoomController:

    @pytest.mark.parametrize("cursor,delta", [
        ((400, 300), 1.0),
        ((0, 0), 1.0),
        ((799, 599), -1.0),
        ((123, 456), 3.0),
        ((650, 80), -2.5),
    ])
    def test_point_under_cursor_stays_put(self, cursor, delta):
        view = ViewState(-0.1, 0.65, 0.02)
        before = view.pixel_to_complex(cursor[0], cursor[1], WIDTH, HEIGHT)
        assert ZoomController().apply(view, delta, cursor, WIDTH, HEIGHT)
        after = view.pixel_to_complex(cursor[0], cursor[1], WIDTH, HEIGHT)
        assert after[0] == pytest.approx(before[0], rel=1e-9, abs=1e-12)
        assert after[1] == pytest.approx(before[1], rel=1e-9, abs=1e-12)

    def test_scroll_up_zooms_in(self):
        view = ViewState()
        ZoomController().apply(view, 1.0, (400, 300), WIDTH, HEIGHT)
        assert view.scale == pytest.approx(3.5 * 0.9)

    def test_scroll_down_zooms_out(self):
        view = ViewState()
        ZoomController().apply(view, -1.0, (400, 300), WIDTH, HEIGHT)
        assert view.scale == pytest.approx(3.5 * 1.1)

    def test_cursor_outside_is_ignored(self):
        view = ViewState()
        zoom = ZoomController()
        assert zoom.apply(view, 1.0, None, WIDTH, HEIGHT) is False
        assert zoom.apply(view, 1.0, (WIDTH, 10), WIDTH, HEIGHT) is False
        assert zoom.apply(view, 1.0, (-1, 10), WIDTH, HEIGHT) is False
        assert view.snapshot() == (-0.75, 0.0, 3.5)

    def test_scale_clamped_to_minimum_keeps_anchor(self):
        view = ViewState(-0.75, 0.1, 2e-12)
        cursor = (200, 100)
        before = view.pixel_to_complex(cursor[0], cursor[1], WIDTH, HEIGHT)
        ZoomController(min_scale=1e-12).apply(view, 9.0, cursor, WIDTH, HEIGHT)
        assert view.scale == 1e-12
        after = view.pixel_to_complex(cursor[0], cursor[1], WIDTH, HEIGHT)
        assert after[0] == pytest.approx(before[0], abs=1e-15)
        assert after[1] == pytest.approx(before[1], abs=1e-15)

    def test_overshooting_scroll_never_goes_negative(self):
        view = ViewState()
        ZoomController(min_scale=1e-6).apply(view, 25.0, (400, 300), WIDTH, HEIGHT)
        assert view.scale == 1e-6

    def test_scale_clamped_to_maximum(self):
        view = ViewState(scale=90.0)
        ZoomController(max_scale=100.0).apply(view, -5.0, (400, 300), WIDTH, HEIGHT)
        assert view.scale == 100.0

    def test_zoom_at_limit_reports_no_change(self):
        view = ViewState(scale=1e-12)
        assert ZoomController(min_scale=1e-12).apply(view, 1.0, (400, 300), WIDTH, HEIGHT) is False

    def test_bad_bounds_rejected(self):
        with pytest.raises(ValueError):
            ZoomController(min_scale=2.0, max_scale=1.0)

    @pytest.mark.parametrize("bad_scale", [0.0, -1.0])
    def test_scroll_on_invalid_view_is_dropped(self, bad_scale):
        view = ViewState()
        view.scale = bad_scale
        before = view.snapshot()
        assert ZoomController().apply(view, 1.0, (400, 300), WIDTH, HEIGHT) is False
        assert view.snapshot() == before
