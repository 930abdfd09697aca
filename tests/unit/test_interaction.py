"""Tests for hover, drag and pan handling."""

import math

import pytest

from forcegraph.graph_engine import GraphEngine
from forcegraph.interaction import InteractionController, InteractionState


@pytest.fixture
def target(quiet_engine):
    return quiet_engine.create_node(x=100, y=100, size=10)


class TestHover:

    def test_pointer_inside_radius(self, controller, target):
        controller.pointer_move(105, 103)
        assert controller.hovered_node is target
        assert controller.state is InteractionState.HOVERING
        assert controller.cursor == "pointer"

    def test_pointer_outside_radius(self, controller, target):
        controller.pointer_move(150, 150)
        assert controller.hovered_node is None
        assert controller.state is InteractionState.IDLE
        assert controller.cursor == "default"

    def test_hover_under_zoom(self, controller, view, target):
        view.set_scale(2.0)
        controller.pointer_move(210, 206)
        assert controller.hovered_node is target
        controller.pointer_move(105, 103)
        assert controller.hovered_node is None

    def test_hover_after_pan(self, controller, view, target):
        view.pan(50, 0)
        controller.pointer_move(155, 100)
        assert controller.hovered_node is target

    def test_first_created_wins(self, controller, quiet_engine, target):
        quiet_engine.create_node(x=104, y=100, size=10)
        controller.pointer_move(102, 100)
        assert controller.hovered_node is target

    def test_hover_recomputed_every_move(self, controller, target):
        controller.pointer_move(100, 100)
        controller.pointer_move(300, 300)
        assert controller.hovered_node is None


class TestDrag:

    def test_pointer_down_on_node_starts_drag(self, controller, target):
        controller.pointer_move(100, 100)
        assert controller.pointer_down(100, 100) is target
        assert controller.dragged_node is target
        assert target.held
        assert not controller.is_panning
        assert controller.state is InteractionState.DRAGGING
        assert controller.cursor == "grabbing"

    def test_press_does_not_move_node(self, controller, target):
        target.last_x, target.last_y = 1.5, -0.5
        controller.pointer_down(106, 104)
        assert (target.x, target.y) == (100, 100)
        assert (target.last_x, target.last_y) == (0, 0)
        controller.pointer_move(110, 104)
        assert (target.x, target.y) == (110, 104)

    def test_dragged_node_follows_pointer_every_frame(self, controller, quiet_engine, view, target):
        quiet_engine.create_node(x=130, y=100)
        view.set_scale(2.0)
        controller.pointer_down(200, 200)
        for step in range(1, 6):
            controller.pointer_move(200 + 20 * step, 200 + 10 * step)
            quiet_engine.advance_frame()
            expected = view.to_simulation(200 + 20 * step, 200 + 10 * step)
            assert (target.x, target.y) == pytest.approx(expected)
            assert (target.last_x, target.last_y) == (0, 0)
            assert (target.next_x, target.next_y) == (0, 0)

    def test_release_resumes_forces_smoothly(self, controller, quiet_engine, target):
        quiet_engine.create_node(x=400, y=300)
        controller.pointer_down(100, 100)
        controller.pointer_move(380, 300)
        for _ in range(3):
            quiet_engine.advance_frame()
        controller.pointer_up(380, 300)
        assert not target.held
        assert controller.state is InteractionState.IDLE

        before = (target.x, target.y)
        quiet_engine.advance_frame()
        moved = math.hypot(target.x - before[0], target.y - before[1])
        assert 0 < moved <= quiet_engine.config.repulsion_cap

    def test_pointer_leave_ends_drag(self, controller, target):
        controller.pointer_down(100, 100)
        controller.pointer_leave()
        assert controller.dragged_node is None
        assert controller.hovered_node is None
        assert not target.held

    def test_removed_node_ends_drag(self, controller, quiet_engine, target):
        controller.pointer_down(100, 100)
        quiet_engine.remove_node(target)
        assert controller.dragged_node is None
        controller.pointer_move(100, 100)
        assert controller.hovered_node is None


class TestPan:

    def test_pointer_down_on_background_pans(self, controller, view, target):
        assert controller.pointer_down(400, 400) is None
        assert controller.is_panning
        assert controller.dragged_node is None
        assert controller.cursor == "grab"

        controller.pointer_move(450, 420)
        controller.pointer_move(470, 430)
        assert (view.translate_x, view.translate_y) == (70, 30)
        assert (target.x, target.y) == (100, 100)

    def test_pan_scaled_by_zoom(self, controller, view):
        view.set_scale(2.0)
        controller.pointer_down(0, 0)
        controller.pointer_move(40, 20)
        assert (view.translate_x, view.translate_y) == (20, 10)

    def test_no_hover_while_panning(self, controller, target):
        controller.pointer_down(400, 400)
        controller.pointer_move(100, 100)
        assert controller.hovered_node is None

    def test_pointer_up_ends_pan(self, controller, view):
        controller.pointer_down(0, 0)
        controller.pointer_up()
        controller.pointer_move(30, 30)
        assert (view.translate_x, view.translate_y) == (0, 0)
        assert controller.state is InteractionState.IDLE


class TestWheel:

    def test_wheel_zooms_about_pointer(self, controller, view):
        anchor = view.to_simulation(250, 125)
        controller.wheel(250, 125, 625)
        assert view.scale == 1.5
        assert view.to_device(*anchor) == pytest.approx((250, 125))

    def test_controller_has_no_global_state(self, quiet_engine, view, target):
        first = InteractionController(quiet_engine, view)
        second = InteractionController(quiet_engine, view)
        first.pointer_move(100, 100)
        assert second.hovered_node is None


class TestAttach:

    def test_attach_drops_pointer_state(self, controller, target):
        controller.pointer_down(100, 100)
        fresh = GraphEngine(seed=7, warm_start_frames=0)
        same_uid = fresh.create_node(x=100, y=100)
        assert same_uid.uid == target.uid

        controller.attach(fresh)

        assert controller.engine is fresh
        assert controller.hovered_node is None
        assert controller.dragged_node is None
        assert not target.held
        assert not same_uid.held
        assert controller.state is InteractionState.IDLE
