import pytest

from dragon.settings import DragonSettings


class RecordingSink:
    """Render sink that remembers every call instead of drawing."""

    def __init__(self):
        self.calls = []

    def draw_line(self, p1, p2, stroke_width, color):
        self.calls.append(("line", tuple(p1), tuple(p2), stroke_width, tuple(color)))

    def draw_filled_rect(self, center, half_size, color):
        self.calls.append(("rect", tuple(center), half_size, tuple(color)))

    @property
    def lines(self):
        return [call for call in self.calls if call[0] == "line"]

    @property
    def rects(self):
        return [call for call in self.calls if call[0] == "rect"]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def settings():
    return DragonSettings(delay_frames=0)
