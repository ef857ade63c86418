import pytest

from rimviz.export import ExportFormat
from rimviz.objects import MathCircle, Position2D, World
from rimviz.state import (
    CameraState,
    CircleState,
    CoordinateSystemState,
    Level,
    PerformanceState,
    UiVisibility,
    fps_level,
    history_summary,
    memory_usage_estimate,
    screenshot_request,
    usage_level,
    view_range,
)


def test_ui_toggle_round_trip():
    ui = UiVisibility()
    assert ui.toggle() is False
    assert ui.toggle() is True
    assert ui.show_ui is True


def test_scroll_clamps_to_max():
    cam = CameraState()
    for _ in range(500):
        cam.apply_scroll(1.0)
    assert cam.target_zoom == 10.0


def test_scroll_clamps_to_min():
    cam = CameraState()
    for _ in range(500):
        cam.apply_scroll(-1.0)
    assert cam.target_zoom == 0.1


def test_scroll_moves_target_by_speed():
    cam = CameraState()
    target = cam.apply_scroll(2.0)
    assert target == pytest.approx(1.0 + 2.0 * cam.zoom_speed)


def test_update_eases_then_snaps():
    cam = CameraState()
    cam.apply_scroll(5.0)
    cam.update(0.01)
    assert 1.0 < cam.zoom < cam.target_zoom
    for _ in range(1000):
        cam.update(0.01)
    assert cam.zoom == cam.target_zoom


def test_consume_zoom_change():
    cam = CameraState()
    assert cam.consume_zoom_change() is None
    cam.zoom = 2.5
    assert cam.consume_zoom_change() == 2.5
    assert cam.consume_zoom_change() is None
    assert cam.previous_zoom == 2.5


def test_coordinate_toggles_independent():
    coords = CoordinateSystemState()
    assert coords.toggle_axes() is False
    assert coords.show_grid is True
    assert coords.toggle_grid() is False
    assert coords.toggle_axes() is True


def test_circle_style_without_fill():
    state = CircleState()
    style = state.style()
    assert style.fill_color is None
    assert style.stroke_color == state.default_color


def test_circle_style_with_fill():
    state = CircleState(show_fill=True)
    fill = state.style().fill_color
    assert fill == state.default_color.with_alpha(0.3)


def test_add_circle_spawns_at_next_position():
    world = World()
    state = CircleState(default_radius=1.5, resolution=64)
    entity = state.add_circle(world)
    assert state.circles == [entity]
    circle = world.get(entity, MathCircle)
    assert circle.radius == 1.5
    assert circle.resolution == 64
    assert circle.filled is False
    assert world.get(entity, Position2D).as_vec() == (0.0, 0.0)
    assert state.next_position != (0.0, 0.0)


def test_add_circle_positions_stay_in_bounds():
    world = World()
    state = CircleState()
    for _ in range(100):
        entity = state.add_circle(world)
        x, y = world.get(entity, Position2D).as_vec()
        assert -8.0 <= x <= 8.0
        assert -6.0 <= y <= 6.0
    assert len(state.circles) == 100
    assert len(world) == 100


def test_clear_removes_circles():
    world = World()
    state = CircleState()
    entities = [state.add_circle(world) for _ in range(3)]
    state.clear(world)
    assert state.circles == []
    assert state.next_position == (0.0, 0.0)
    assert all(e not in world for e in entities)


def _perf(**kwargs):
    return PerformanceState(
        last_update=0.0, cpu_sampler=lambda: 42.0, wall_clock=lambda: 0.0, **kwargs
    )


def test_tick_waits_a_second():
    perf = _perf()
    assert perf.tick(0.5) is False
    assert perf.frame_count == 1
    assert len(perf.fps_history) == 0


def test_tick_refreshes_figures():
    perf = _perf()
    perf.tick(0.5)
    assert perf.tick(1.0) is True
    assert perf.fps == pytest.approx(2 / 1.0)
    assert perf.frame_count == 0
    assert perf.memory_usage_mb == 50.0
    assert perf.cpu_usage_percent == 42.0
    assert list(perf.cpu_history) == [42.0]
    assert perf.last_update == 1.0


def test_history_is_bounded():
    perf = _perf()
    for second in range(1, 200):
        perf.tick(float(second))
    assert len(perf.fps_history) == 60
    assert len(perf.memory_history) == 60
    assert len(perf.cpu_history) == 60


def test_clear_history():
    perf = _perf()
    perf.tick(2.0)
    perf.clear_history()
    assert len(perf.fps_history) == 0
    assert len(perf.memory_history) == 0
    assert len(perf.cpu_history) == 0


def test_invalid_history_length():
    with pytest.raises(ValueError):
        _perf(max_history_len=0)


@pytest.mark.parametrize(
    "fps, level",
    [(60.0, Level.GREEN), (59.9, Level.YELLOW), (30.0, Level.YELLOW), (29.9, Level.RED)],
)
def test_fps_level(fps, level):
    assert fps_level(fps) is level


@pytest.mark.parametrize(
    "value, level",
    [(99.9, Level.GREEN), (100.0, Level.YELLOW), (199.9, Level.YELLOW), (200.0, Level.RED)],
)
def test_usage_level(value, level):
    assert usage_level(value, 100.0, 200.0) is level


def test_history_summary_empty():
    assert history_summary([]) is None


def test_history_summary_invariants():
    values = [12.0, 7.5, 30.25, 9.0]
    summary = history_summary(values)
    assert summary.maximum == max(values)
    assert summary.minimum == min(values)
    assert summary.minimum <= summary.average <= summary.maximum


def test_history_summary_maximum_floor():
    summary = history_summary([-3.0, -1.0])
    assert summary.maximum == 0.0
    assert summary.minimum == -3.0


def test_memory_estimate_base_and_period():
    assert memory_usage_estimate(0.0) == 50.0
    for t in (0.0, 17.0, 59.9, 1234.0):
        value = memory_usage_estimate(t)
        assert 50.0 <= value < 80.0
        assert memory_usage_estimate(t + 60.0) == value


def test_view_range_default_and_scaling():
    assert view_range(1.0) == ((-10.0, 10.0), (-8.0, 8.0))
    (x_lo, x_hi), (y_lo, y_hi) = view_range(2.0)
    assert x_hi * 2.0 == pytest.approx(10.0)
    assert x_lo == -x_hi
    assert y_lo == -y_hi


def test_screenshot_request():
    request = screenshot_request(1700000000.7)
    assert request.format is ExportFormat.PNG
    assert request.filename == "rim_screenshot_1700000000.png"
    assert request.resolution == (1920, 1080)