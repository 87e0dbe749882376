"""
Tests for RegressionEngine: point set mutations and the broadcast protocol.
"""

import numpy as np
import pytest

from bestfit.config import DEFAULT_BATCH_SIZE, DEFAULT_HEIGHT, DEFAULT_WIDTH
from bestfit.model.engine import RegressionEngine, RenderEvent, RenderMode
from bestfit.model.exceptions import DegenerateInputError, InvalidModeError


def _in_bounds(engine):
    return all(0 <= p.x < engine.width and 0 <= p.y < engine.height for p in engine.points)


class TestConstruction:

    def test_auto_populates_default_batch(self, engine):
        assert len(engine) == DEFAULT_BATCH_SIZE == 21
        assert engine.width == DEFAULT_WIDTH
        assert engine.height == DEFAULT_HEIGHT
        assert _in_bounds(engine)

    def test_populate_can_be_disabled(self, empty_engine):
        assert len(empty_engine) == 0
        assert empty_engine.last_point is None

    def test_defaults_to_colored_mode(self, engine):
        assert engine.mode == RenderMode.COLORED

    def test_same_seed_same_points(self):
        a = RegressionEngine(rng=np.random.default_rng(3))
        b = RegressionEngine(rng=np.random.default_rng(3))
        assert a.points == b.points

    @pytest.mark.parametrize("width, height", [(0, 500), (600, -1)])
    def test_rejects_non_positive_size(self, width, height):
        with pytest.raises(ValueError):
            RegressionEngine(width, height)

    def test_custom_size_and_batch(self, rng):
        engine = RegressionEngine(100, 50, batch_size=5, rng=rng)
        assert len(engine) == 5
        assert _in_bounds(engine)


class TestMutations:

    def test_points_snapshot_is_read_only(self, engine):
        assert isinstance(engine.points, tuple)

    def test_add_point_appends_exactly_one(self, engine):
        before = engine.points
        point = engine.add_point(12.5, 40.0)
        assert len(engine) == len(before) + 1
        assert engine.points[:-1] == before
        assert engine.last_point is point
        assert (point.x, point.y) == (12.5, 40.0)

    def test_append_point_does_not_notify(self, empty_engine, make_recorder, call_log):
        empty_engine.register_renderer(make_recorder("a"))
        empty_engine.append_point(1, 2)
        assert len(empty_engine) == 1
        assert call_log == []

    def test_generate_random_points_does_not_notify(self, empty_engine, make_recorder, call_log):
        empty_engine.register_renderer(make_recorder("a"))
        points = empty_engine.generate_random_points()
        assert points == empty_engine.points
        assert len(points) == DEFAULT_BATCH_SIZE
        assert call_log == []

    def test_generate_appends_batch(self, engine):
        engine.generate()
        assert len(engine) == 2 * DEFAULT_BATCH_SIZE
        assert _in_bounds(engine)

    def test_clear_then_generate(self, engine):
        engine.clear()
        assert len(engine) == 0
        engine.generate()
        assert len(engine) == DEFAULT_BATCH_SIZE
        assert _in_bounds(engine)

    def test_silent_primitives_emit_no_signal(self, empty_engine):
        events = []
        empty_engine.event_broadcast.connect(events.append)
        empty_engine.append_point(1, 1)
        empty_engine.generate_random_points()
        assert len(empty_engine) == 1 + DEFAULT_BATCH_SIZE
        assert events == []

    def test_notifying_mutations_emit_once_each(self, empty_engine):
        events = []
        empty_engine.event_broadcast.connect(events.append)
        empty_engine.add_point(1, 1)
        empty_engine.generate()
        empty_engine.clear()
        assert events == ["redraw", "regenerate", "clear"]


class TestBroadcast:

    def test_redraw_visits_renderers_once_in_order(self, engine, make_recorder, call_log):
        for name in ("a", "b", "c"):
            engine.register_renderer(make_recorder(name))
        engine.add_point(1, 1)
        assert call_log == [("a", "redraw"), ("b", "redraw"), ("c", "redraw")]

    def test_clear_broadcasts_clear(self, engine, make_recorder, call_log):
        engine.register_renderer(make_recorder("a"))
        engine.clear()
        assert call_log == [("a", "clear")]

    def test_generate_broadcasts_regenerate(self, engine, make_recorder, call_log):
        engine.register_renderer(make_recorder("a"))
        engine.generate()
        assert call_log == [("a", "regenerate")]

    def test_set_mode_broadcasts_clear_then_regenerate(self, engine, make_recorder, call_log):
        engine.register_renderer(make_recorder("a"))
        engine.register_renderer(make_recorder("b"))
        engine.set_mode(RenderMode.WIREFRAME)
        assert engine.mode == RenderMode.WIREFRAME
        assert call_log == [
            ("a", "clear"), ("b", "clear"),
            ("a", "regenerate"), ("b", "regenerate"),
        ]

    def test_set_mode_accepts_string_value(self, engine):
        engine.set_mode("wireframe")
        assert engine.mode is RenderMode.WIREFRAME

    def test_set_mode_rejects_unknown_mode(self, engine, make_recorder, call_log):
        engine.register_renderer(make_recorder("a"))
        with pytest.raises(InvalidModeError):
            engine.set_mode("sepia")
        assert engine.mode == RenderMode.COLORED
        assert call_log == []

    def test_missing_handlers_are_skipped(self, engine, make_recorder, call_log):
        class RedrawOnly:
            supports_incremental_redraw = False

            def __init__(self):
                self.calls = 0

            def redraw(self):
                self.calls += 1

        partial = RedrawOnly()
        engine.register_renderer(partial)
        engine.register_renderer(make_recorder("b"))

        engine.clear()
        engine.generate()
        engine.add_point(3, 3)

        assert partial.calls == 1
        assert call_log == [("b", "clear"), ("b", "regenerate"), ("b", "redraw")]

    def test_non_callable_attribute_is_not_a_handler(self, engine):
        class Odd:
            redraw = "not a method"

        engine.register_renderer(Odd())
        engine.add_point(1, 1)

    def test_event_broadcast_signal(self, engine):
        events = []
        engine.event_broadcast.connect(events.append)
        engine.add_point(1, 1)
        engine.set_mode(RenderMode.WIREFRAME)
        assert events == ["redraw", "clear", "regenerate"]

    def test_iterate_by_name(self, engine, make_recorder, call_log):
        engine.register_renderer(make_recorder("a"))
        engine.iterate("regenerate")
        engine.iterate(RenderEvent.CLEAR)
        assert call_log == [("a", "regenerate"), ("a", "clear")]

    def test_iterate_unknown_event(self, engine):
        with pytest.raises(ValueError):
            engine.iterate("explode")


class TestRegistry:

    def test_register_twice_is_noop(self, engine, make_recorder, call_log):
        r = make_recorder("a")
        engine.register_renderer(r)
        engine.register_renderer(r)
        assert engine.renderers == (r,)
        engine.clear()
        assert call_log == [("a", "clear")]

    def test_unregister(self, engine, make_recorder, call_log):
        a, b = make_recorder("a"), make_recorder("b")
        engine.register_renderer(a)
        engine.register_renderer(b)
        engine.unregister_renderer(a)
        engine.clear()
        assert call_log == [("b", "clear")]

    def test_unregister_unknown(self, engine, make_recorder):
        with pytest.raises(ValueError):
            engine.unregister_renderer(make_recorder("ghost"))


class TestBestFitLine:

    def test_spans_canvas_width(self, engine):
        line = engine.compute_best_fit_line()
        assert line.start.x == 0.0
        assert line.end.x == engine.width

    def test_colinear_points(self, empty_engine):
        for x, y in [(0, 1), (1, 3), (2, 5)]:
            empty_engine.append_point(x, y)
        line = empty_engine.compute_best_fit_line()
        assert line.slope == pytest.approx(2.0)
        assert line.intercept == pytest.approx(1.0)
        assert line.end.y == pytest.approx(1.0 + 2.0 * empty_engine.width)

    def test_recomputed_after_each_mutation(self, empty_engine):
        empty_engine.append_point(0, 0)
        empty_engine.append_point(10, 10)
        assert empty_engine.compute_best_fit_line().slope == pytest.approx(1.0)
        empty_engine.append_point(20, 0)
        assert empty_engine.compute_best_fit_line().slope == pytest.approx(0.0)

    def test_has_best_fit_line(self, empty_engine):
        assert not empty_engine.has_best_fit_line()
        empty_engine.append_point(1, 1)
        assert not empty_engine.has_best_fit_line()
        empty_engine.append_point(2, 2)
        assert empty_engine.has_best_fit_line()

    def test_same_x_is_degenerate(self, empty_engine):
        for y in (1, 2, 3):
            empty_engine.append_point(42, y)
        with pytest.raises(DegenerateInputError):
            empty_engine.compute_best_fit_line()

    def test_mode_does_not_change_the_math(self, engine):
        before = engine.compute_best_fit_line()
        engine.set_mode(RenderMode.WIREFRAME)
        assert engine.compute_best_fit_line() == before
