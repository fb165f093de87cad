from itertools import chain
from typing import Protocol

import numpy as np

from dragon.segment import Segment, Square

SEGMENT_COLOR = (0, 238, 0)
SQUARE_COLOR = (0, 200, 100, 200)


class RenderSink(Protocol):
    """Drawing surface the core talks to. Coordinates are already in screen pixels."""

    def draw_line(self, p1, p2, stroke_width, color): ...

    def draw_filled_rect(self, center, half_size, color): ...


class UnitStroke:
    """Every line is one pixel wide, whatever the zoom."""

    def width(self, scale):
        return 1.0


class AdaptiveStroke:
    """Line width follows sqrt(scale), clamped to [min_width, max_width]."""

    def __init__(self, weight=12.0, min_width=1.0, max_width=16.0):
        self.weight = weight
        self.min_width = min_width
        self.max_width = max_width

    def width(self, scale):
        return float(np.clip(self.weight * np.sqrt(scale), self.min_width, self.max_width))


def make_stroke(settings):
    if settings.stroke == "adaptive":
        return AdaptiveStroke(settings.stroke_weight, settings.min_stroke, settings.max_stroke)
    if settings.stroke == "unit":
        return UnitStroke()
    raise ValueError(f"Unknown stroke policy: {settings.stroke}")


class Style:
    def __init__(self, stroke=None, segment_color=SEGMENT_COLOR, square_color=SQUARE_COLOR, cull=True):
        self.stroke = stroke or UnitStroke()
        self.segment_color = tuple(segment_color)
        self.square_color = tuple(square_color)
        self.cull = cull


def draw_segment(segment, view, sink, style, stroke_width):
    p1 = view.to_screen(segment.a)
    p2 = view.to_screen(segment.b)
    if style.cull and not view.is_visible(p1[0], p1[1], p2[0], p2[1]):
        return False
    sink.draw_line(p1, p2, stroke_width, style.segment_color)
    return True


def draw_square(square, view, sink, style):
    center = view.to_screen(square.center)
    half_size = square.half_size * view.scale
    if style.cull and not view.is_visible(
        center[0] - half_size, center[1] - half_size, center[0] + half_size, center[1] + half_size
    ):
        return False
    sink.draw_filled_rect(center, half_size, style.square_color)
    return True


def draw(item, view, sink, style, stroke_width):
    if isinstance(item, Segment):
        return draw_segment(item, view, sink, style, stroke_width)
    if isinstance(item, Square):
        return draw_square(item, view, sink, style)
    raise TypeError(f"Cannot draw {type(item).__name__}")


def render(generator, view, sink, style):
    """Draw squares first, then segments in insertion order. Returns the number drawn."""
    stroke_width = style.stroke.width(view.scale)
    drawn = 0
    for item in chain(generator.squares, generator.segments):
        drawn += draw(item, view, sink, style, stroke_width)
    return drawn
