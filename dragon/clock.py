import logging

DEFAULT_STEP = 0.01
DEFAULT_DELAY = 60
DEFAULT_DELAY_STEP = 15


class AnimationClock:
    """
    Frame-driven transition value t in [0, 1] plus the cooldown between iterations.

    There is no internal timer: the host calls tick() once per rendered frame.
    """

    def __init__(self, step=DEFAULT_STEP, delay=DEFAULT_DELAY, delay_step=DEFAULT_DELAY_STEP):
        self.step = step
        self.delay = max(0, int(delay))
        self.delay_step = delay_step
        self.t = 0.0
        self.paused = False
        self.frame_count = 0
        self.delay_remaining = None

    @property
    def in_delay(self):
        return self.delay_remaining is not None

    @property
    def transition_done(self):
        return self.t >= 1.0

    def tick(self):
        self.frame_count += 1
        if not self.paused and self.t < 1.0:
            self.t = min(1.0, self.t + self.step)

    def reset(self):
        self.t = 0.0
        self.delay_remaining = None

    def ready(self, all_complete):
        """Count the cooldown down and report whether the next iteration may start."""
        if self.paused or not (all_complete and self.transition_done):
            return False
        if self.delay_remaining is None:
            self.delay_remaining = self.delay
        if self.delay_remaining <= 0:
            self.delay_remaining = None
            return True
        self.delay_remaining -= 1
        return False

    def toggle_pause(self):
        self.paused = not self.paused
        logging.info("Paused." if self.paused else "Resumed.")

    def increase_delay(self):
        self.set_delay(self.delay + self.delay_step)

    def decrease_delay(self):
        self.set_delay(self.delay - self.delay_step)

    def set_delay(self, frames):
        self.delay = max(0, int(frames))
        if self.delay_remaining is not None:
            self.delay_remaining = min(self.delay_remaining, self.delay)
        logging.info(f"Delay between iterations: {self.delay} frames")
