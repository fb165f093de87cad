import logging
from dataclasses import replace

from PIL import Image, ImageDraw

from dragon.simulation import DragonSimulation

BACKGROUND = (0, 0, 0)


class PillowSink:
    """Render sink drawing onto a Pillow image."""

    def __init__(self, size, background=BACKGROUND):
        self.image = Image.new("RGB", size, background)
        self.draw = ImageDraw.Draw(self.image, "RGBA")

    def draw_line(self, p1, p2, stroke_width, color):
        self.draw.line([p1, p2], fill=tuple(color), width=max(1, round(stroke_width)))

    def draw_filled_rect(self, center, half_size, color):
        x, y = center
        half_size = max(half_size, 0.5)
        self.draw.rectangle([x - half_size, y - half_size, x + half_size, y + half_size], fill=tuple(color))


def export_snapshot(settings, file_path, iterations):
    """Grow the curve for `iterations` folds without a window and save it as an image."""
    logging.info(f"Exporting dragon curve after {iterations} iterations to {file_path}...")
    simulation = DragonSimulation(replace(settings, delay_frames=0))
    ticks = simulation.run_iterations(iterations)
    simulation.settle()

    sink = PillowSink(settings.viewport)
    drawn = simulation.draw(sink)
    sink.image.save(file_path)
    logging.info(f"Exported {drawn} shapes after {ticks} ticks to {file_path}.")
    return sink.image
