import logging
from dataclasses import dataclass, field

from dragon.camera import Camera, make_camera
from dragon.clock import AnimationClock
from dragon.consolidation import make_consolidation
from dragon.generator import FractalGenerator
from dragon.render import Style, make_stroke, render
from dragon.settings import DragonSettings, default_settings


@dataclass
class SimulationState:
    generator: FractalGenerator
    clock: AnimationClock
    camera: Camera
    consolidation: object
    style: Style
    max_iterations: int
    debug: bool = False
    limit_reached: bool = False
    last_drawn: int = 0
    view: object = field(default=None)


class DragonSimulation:
    """
    Single owner of the animation state, advanced by the host once per frame.

    Per tick: clock, segment rotation, at most one fold, consolidation,
    camera, then drawing through the given render sink.
    """

    def __init__(self, settings: DragonSettings = default_settings, camera=None, consolidation=None):
        self.settings = settings
        generator = FractalGenerator(settings.length)
        clock = AnimationClock(settings.transition_step, settings.delay_frames, settings.delay_step)
        self.state = SimulationState(
            generator=generator,
            clock=clock,
            camera=camera or make_camera(settings),
            consolidation=consolidation or make_consolidation(settings),
            style=Style(make_stroke(settings), settings.segment_color, settings.square_color, settings.cull),
            max_iterations=settings.max_iterations,
        )
        self.state.camera.reset(generator)
        self.state.view = self.state.camera.update(generator, clock)
        logging.info(
            f"Dragon curve ready: length={generator.length}, camera={type(self.state.camera).__name__}, "
            f"consolidation={type(self.state.consolidation).__name__}"
        )

    @property
    def generator(self):
        return self.state.generator

    @property
    def clock(self):
        return self.state.clock

    @property
    def camera(self):
        return self.state.camera

    @property
    def view(self):
        return self.state.view

    def tick(self, sink=None, limit=None):
        state = self.state
        generator = state.generator
        clock = state.clock

        clock.tick()
        stepped = False
        if not clock.paused:
            all_complete = generator.update(clock.t)
            if self.can_grow(limit) and clock.ready(all_complete):
                self.next_iteration()
                stepped = True
            state.consolidation.run(generator, state.view, clock.frame_count)

        state.view = state.camera.update(generator, clock)
        if sink is not None:
            self.draw(sink)
        return stepped

    def can_grow(self, limit=None):
        state = self.state
        if limit is not None and state.generator.iteration_count >= limit:
            return False
        if state.generator.iteration_count < state.max_iterations:
            return True
        if not state.limit_reached:
            state.limit_reached = True
            logging.info(f"Reached the iteration limit of {state.max_iterations}, growth stopped.")
        return False

    def next_iteration(self):
        state = self.state
        state.generator.step_iteration()
        state.clock.reset()
        state.camera.on_iteration(state.generator)

    def draw(self, sink):
        """Issue draw calls for the current state; does not advance anything."""
        self.state.last_drawn = render(self.state.generator, self.state.view, sink, self.state.style)
        return self.state.last_drawn

    def settle(self):
        self.state.view = self.state.camera.settle(self.state.generator, self.state.clock)
        return self.state.view

    def run_iterations(self, count, max_ticks=None):
        """Tick without drawing until `count` iterations exist and have finished rotating."""
        clock = self.state.clock
        generator = self.state.generator
        target = min(count, self.state.max_iterations)
        max_ticks = max_ticks or (target + 1) * (int(1 / clock.step) + clock.delay + 2)
        ticks = 0
        while not (generator.iteration_count >= target and generator.all_complete()):
            if ticks >= max_ticks:
                logging.warning(f"Stopped after {ticks} ticks at iteration {generator.iteration_count}.")
                break
            self.tick(limit=target)
            ticks += 1
        return ticks

    # input

    def on_key(self, char):
        if char in ("d", "D"):
            self.state.debug = not self.state.debug
            logging.info(f"Debug mode {'on' if self.state.debug else 'off'}")
        elif char in ("p", "P"):
            self.state.clock.toggle_pause()
        elif char in ("+", "="):
            self.state.clock.increase_delay()
        elif char in ("-", "_"):
            self.state.clock.decrease_delay()

    def on_scroll(self, delta):
        if delta == 0:
            return
        factor = self.settings.zoom_in if delta > 0 else self.settings.zoom_out
        self.state.camera.apply_zoom(factor)

    def stats(self):
        state = self.state
        clock = state.clock
        return {
            "segments": len(state.generator.segments),
            "squares": len(state.generator.squares),
            "iteration": state.generator.iteration_count,
            "transition": clock.t,
            "scale": state.view.scale,
            "delay": clock.delay,
            "delay_remaining": clock.delay_remaining,
            "paused": clock.paused,
            "debug": state.debug,
            "drawn": state.last_drawn,
        }
