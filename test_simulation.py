import pytest

from dragon.camera import BoundsFitCamera, GrowthCamera
from dragon.clock import AnimationClock
from dragon.consolidation import SquareConsolidation
from dragon.settings import DragonSettings
from dragon.simulation import DragonSimulation


def run_until_step(simulation, limit=1000):
    for ticks in range(1, limit + 1):
        if simulation.tick():
            return ticks
    raise AssertionError("no iteration step happened")


class TestAnimationClock:
    def test_reaches_one_in_hundred_ticks(self) -> None:
        clock = AnimationClock(step=0.01)
        for _ in range(99):
            clock.tick()
        assert clock.t < 1.0
        clock.tick()
        assert clock.t == 1.0
        clock.tick()
        assert clock.t == 1.0

    def test_pause_freezes_transition(self) -> None:
        clock = AnimationClock(step=0.1)
        clock.tick()
        clock.toggle_pause()
        for _ in range(5):
            clock.tick()
        assert clock.t == pytest.approx(0.1)
        assert clock.frame_count == 6
        assert not clock.ready(True)

    def test_immediate_when_no_delay(self) -> None:
        clock = AnimationClock(delay=0)
        clock.t = 1.0
        assert clock.ready(True)
        assert clock.delay_remaining is None

    def test_not_ready_while_segments_rotate(self) -> None:
        clock = AnimationClock(delay=0)
        clock.t = 1.0
        assert not clock.ready(False)
        clock.t = 0.5
        assert not clock.ready(True)

    def test_cooldown_counts_down(self) -> None:
        clock = AnimationClock(delay=3)
        clock.t = 1.0
        remaining = []
        for _ in range(3):
            assert not clock.ready(True)
            remaining.append(clock.delay_remaining)
        assert remaining == [2, 1, 0]
        assert clock.ready(True)
        assert not clock.in_delay

    def test_delay_adjustment_is_clamped(self) -> None:
        clock = AnimationClock(delay=20, delay_step=15)
        clock.increase_delay()
        assert clock.delay == 35
        for _ in range(4):
            clock.decrease_delay()
        assert clock.delay == 0

    def test_shortening_delay_shortens_running_cooldown(self) -> None:
        clock = AnimationClock(delay=60)
        clock.t = 1.0
        clock.ready(True)
        clock.set_delay(5)
        assert clock.delay_remaining == 5

    def test_reset(self) -> None:
        clock = AnimationClock(delay=10)
        clock.t = 1.0
        clock.ready(True)
        clock.reset()
        assert clock.t == 0.0
        assert not clock.in_delay


class TestDragonSimulation:
    def test_three_iterations(self, settings) -> None:
        simulation = DragonSimulation(settings)
        simulation.run_iterations(3)
        assert simulation.generator.iteration_count == 3
        assert len(simulation.generator.segments) == 8
        assert simulation.generator.all_complete()

    def test_first_step_after_transition(self, settings) -> None:
        simulation = DragonSimulation(settings)
        assert run_until_step(simulation) == 100
        assert simulation.clock.t == 0.0
        assert len(simulation.generator.segments) == 2

    def test_no_stall_without_delay(self, settings) -> None:
        simulation = DragonSimulation(settings)
        run_until_step(simulation)
        steps = 0
        for _ in range(300):
            steps += simulation.tick()
            # a finished transition never lingers: the fold happens on the same tick
            assert not (simulation.generator.all_complete() and simulation.clock.transition_done)
        assert steps == 3

    def test_completion_and_step_share_a_tick(self, settings) -> None:
        simulation = DragonSimulation(settings)
        run_until_step(simulation)
        assert run_until_step(simulation) == 100

    def test_delay_postpones_step(self) -> None:
        simulation = DragonSimulation(DragonSettings(delay_frames=10))
        assert run_until_step(simulation) == 110

    def test_pause_stops_growth_but_keeps_drawing(self, settings, sink) -> None:
        simulation = DragonSimulation(settings)
        run_until_step(simulation)
        for _ in range(10):
            simulation.tick()
        simulation.on_key("p")
        t = simulation.clock.t
        angles = [s.angle for s in simulation.generator.segments]
        for _ in range(300):
            simulation.tick(sink)
        assert simulation.clock.t == t
        assert [s.angle for s in simulation.generator.segments] == angles
        assert simulation.generator.iteration_count == 1
        assert len(sink.lines) == 300 * 2
        simulation.on_key("P")
        simulation.tick()
        assert simulation.clock.t > t

    def test_completed_segments_never_reset(self, settings) -> None:
        simulation = DragonSimulation(settings)
        simulation.run_iterations(2)
        done = list(simulation.generator.segments)
        for _ in range(150):
            simulation.tick()
            assert all(segment.completed for segment in done)

    def test_draw_without_tick_is_identical(self, settings, sink) -> None:
        simulation = DragonSimulation(settings)
        simulation.run_iterations(3)
        for _ in range(30):
            simulation.tick()
        simulation.draw(sink)
        first = list(sink.calls)
        sink.calls.clear()
        simulation.draw(sink)
        assert sink.calls == first
        assert first

    def test_iteration_limit(self) -> None:
        simulation = DragonSimulation(DragonSettings(delay_frames=0, max_iterations=2))
        for _ in range(1000):
            simulation.tick()
        assert simulation.generator.iteration_count == 2
        assert simulation.state.limit_reached

    def test_consolidation_runs_in_tick(self) -> None:
        settings = DragonSettings(delay_frames=0, consolidate=True, consolidation_threshold=1e9, consolidation_interval=1)
        simulation = DragonSimulation(settings)
        assert isinstance(simulation.state.consolidation, SquareConsolidation)
        simulation.run_iterations(4)
        generator = simulation.generator
        assert generator.squares
        assert len(generator) == 16
        assert all(generator.is_pinned(s) or not s.completed for s in generator.segments)

    @pytest.mark.parametrize("camera", ["growth", "bounds"])
    def test_whole_curve_visible_after_each_iteration(self, camera) -> None:
        simulation = DragonSimulation(DragonSettings(delay_frames=0, camera=camera))
        width, height = simulation.settings.viewport
        for iterations in range(1, 7):
            simulation.run_iterations(iterations)
            view = simulation.settle()
            for segment in simulation.generator.segments:
                for point in (segment.a, segment.b):
                    x, y = view.to_screen(point)
                    assert 0 <= x <= width
                    assert 0 <= y <= height

    def test_camera_policy_selected_from_settings(self) -> None:
        assert isinstance(DragonSimulation(DragonSettings(camera="bounds")).camera, BoundsFitCamera)
        assert isinstance(DragonSimulation(DragonSettings(camera="growth")).camera, GrowthCamera)


class TestInput:
    def test_debug_toggle(self, settings) -> None:
        simulation = DragonSimulation(settings)
        simulation.on_key("d")
        assert simulation.stats()["debug"]
        simulation.on_key("D")
        assert not simulation.stats()["debug"]

    def test_delay_keys(self) -> None:
        simulation = DragonSimulation(DragonSettings(delay_frames=20))
        simulation.on_key("+")
        simulation.on_key("=")
        assert simulation.clock.delay == 50
        for _ in range(5):
            simulation.on_key("-")
        simulation.on_key("_")
        assert simulation.clock.delay == 0

    def test_scroll_zoom(self, settings) -> None:
        simulation = DragonSimulation(settings)
        simulation.on_scroll(120)
        assert simulation.camera.zoom == pytest.approx(1.1)
        simulation.on_scroll(-120)
        assert simulation.camera.zoom == pytest.approx(1.1 * 0.9)
        simulation.on_scroll(0)
        assert simulation.camera.zoom == pytest.approx(1.1 * 0.9)

    def test_unknown_key_is_ignored(self, settings) -> None:
        simulation = DragonSimulation(settings)
        before = simulation.stats()
        simulation.on_key("x")
        assert simulation.stats() == before

    def test_stats(self, settings) -> None:
        simulation = DragonSimulation(settings)
        stats = simulation.stats()
        assert stats["segments"] == 1
        assert stats["iteration"] == 0
        assert stats["delay_remaining"] is None
        assert not stats["paused"]
