import logging

from dragon.segment import Square

DEFAULT_THRESHOLD = 3.0
DEFAULT_INTERVAL = 30


class NoConsolidation:
    """Keeps every segment animated and drawn as a line."""

    def run(self, generator, view, frame_count):
        return 0


class SquareConsolidation:
    """
    Turns settled segments shorter than `threshold` screen pixels into static squares.

    The conversion is one-way. A pass runs every `interval` frames.
    """

    def __init__(self, threshold=DEFAULT_THRESHOLD, interval=DEFAULT_INTERVAL):
        self.threshold = threshold
        self.interval = max(1, int(interval))

    def run(self, generator, view, frame_count):
        if frame_count % self.interval:
            return 0
        return self.consolidate(generator, view.scale)

    def consolidate(self, generator, scale):
        keep = []
        converted = 0
        for segment in generator.segments:
            if (
                segment.completed
                and not generator.is_pinned(segment)
                and segment.length * scale < self.threshold
            ):
                generator.squares.append(Square.from_segment(segment))
                converted += 1
            else:
                keep.append(segment)
        if converted:
            generator.segments = keep
            logging.info(f"Consolidated {converted} segments into squares ({len(generator.squares)} squares total).")
        return converted


def make_consolidation(settings):
    if settings.consolidate:
        return SquareConsolidation(settings.consolidation_threshold, settings.consolidation_interval)
    return NoConsolidation()
