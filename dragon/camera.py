import logging
from dataclasses import dataclass

import numpy as np

from dragon.vector import ORIGIN, Vector2

DEFAULT_SCALE = 1.0


@dataclass(frozen=True)
class ViewTransform:
    """Maps world points to screen pixels: the world point `center` lands on the viewport centre."""

    scale: float
    center: Vector2
    viewport: tuple

    def to_screen(self, point):
        width, height = self.viewport
        return (
            width / 2 + (point.x - self.center.x) * self.scale,
            height / 2 + (point.y - self.center.y) * self.scale,
        )

    def is_visible(self, x0, y0, x1, y1):
        """True if the screen-space box (x0, y0)-(x1, y1) overlaps the viewport."""
        width, height = self.viewport
        return min(x0, x1) <= width and max(x0, x1) >= 0 and min(y0, y1) <= height and max(y0, y1) >= 0


@dataclass
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def around_origin(cls, extent):
        return cls(-extent, extent, -extent, extent)

    @classmethod
    def from_points(cls, points, padding=0.0):
        if len(points) == 0:
            return cls(-padding, padding, -padding, padding)
        low = points.min(axis=0)
        high = points.max(axis=0)
        return cls(low[0] - padding, high[0] + padding, low[1] - padding, high[1] + padding)

    @property
    def width(self):
        return self.max_x - self.min_x

    @property
    def height(self):
        return self.max_y - self.min_y

    @property
    def center(self):
        return Vector2((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, x, y):
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


def fit_scale(bounds, viewport, fraction=0.8, default=DEFAULT_SCALE):
    """Largest scale that fits `bounds` into `fraction` of the viewport."""
    width, height = viewport
    scales = []
    if bounds.width > 0:
        scales.append(width * fraction / bounds.width)
    if bounds.height > 0:
        scales.append(height * fraction / bounds.height)
    if not scales:
        logging.warning(f"Degenerate fractal bounds {bounds}, falling back to scale {default}.")
        return default
    return min(scales)


class Camera:
    """Shared zoom handling; subclasses decide scale and pan."""

    def __init__(self, viewport, min_zoom=0.01, max_zoom=100.0):
        self.viewport = viewport
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom = 1.0
        self.view = ViewTransform(DEFAULT_SCALE, ORIGIN, viewport)

    def apply_zoom(self, factor):
        self.zoom = float(np.clip(self.zoom * factor, self.min_zoom, self.max_zoom))
        logging.info(f"Zoom set to {self.zoom:.3f}")

    def reset(self, generator):
        raise NotImplementedError

    def on_iteration(self, generator):
        raise NotImplementedError

    def update(self, generator, clock):
        raise NotImplementedError

    def settle(self, generator, clock):
        """Jump straight to the resting view; used when rendering a still image."""
        return self.update(generator, clock)


class BoundsFitCamera(Camera):
    """
    Fits the padded bounding box of the fractal into the viewport.

    Bounds are re-measured after every iteration and the scale eases towards
    the new target each frame. The pan eases towards the bounds centre.
    """

    def __init__(self, viewport, fraction=0.8, padding=50.0, smoothing=0.1, **kwargs):
        super().__init__(viewport, **kwargs)
        self.fraction = fraction
        self.padding = padding
        self.smoothing = smoothing
        self.bounds = None
        self.scale = DEFAULT_SCALE
        self.target_scale = DEFAULT_SCALE
        self.center = ORIGIN
        self.target_center = ORIGIN

    def reset(self, generator):
        self.bounds = Bounds.around_origin(generator.length)
        self.target_scale = fit_scale(self.bounds, self.viewport, self.fraction)
        self.scale = self.target_scale
        self.target_center = self.center = ORIGIN
        self.zoom = 1.0

    def update_bounds(self, generator):
        self.bounds = Bounds.from_points(generator.extent_points(), self.padding)
        return self.bounds

    def on_iteration(self, generator):
        self.update_bounds(generator)
        self.target_scale = fit_scale(self.bounds, self.viewport, self.fraction, default=self.target_scale)
        self.target_center = self.bounds.center
        logging.info(f"Camera target scale {self.target_scale:.5f} for bounds {self.bounds}")

    def update(self, generator, clock):
        self.scale += (self.target_scale - self.scale) * self.smoothing
        self.center = self.center + (self.target_center - self.center) * self.smoothing
        self.view = ViewTransform(self.scale * self.zoom, self.center, self.viewport)
        return self.view

    def settle(self, generator, clock):
        self.scale = self.target_scale
        self.center = self.target_center
        self.view = ViewTransform(self.scale * self.zoom, self.center, self.viewport)
        return self.view


class GrowthCamera(Camera):
    """
    Shrinks the scale by the curve's growth factor per iteration and follows its centroid.

    While an iteration animates the scale slides from base to base / growth,
    and each new iteration starts from that reduced base, so there is no jump.
    """

    def __init__(self, viewport, growth=np.sqrt(2), fraction=0.8, **kwargs):
        super().__init__(viewport, **kwargs)
        self.growth = float(growth)
        self.fraction = fraction
        self.base_scale = DEFAULT_SCALE

    def reset(self, generator):
        self.base_scale = fit_scale(Bounds.around_origin(generator.length), self.viewport, self.fraction)
        self.zoom = 1.0

    def on_iteration(self, generator):
        self.base_scale /= self.growth
        logging.info(f"Camera base scale {self.base_scale:.5f}")

    def current_scale(self, t):
        return self.base_scale * (1 - t * (1 - 1 / self.growth))

    def update(self, generator, clock):
        center = Vector2(*generator.endpoints().mean(axis=0))
        self.view = ViewTransform(self.current_scale(clock.t) * self.zoom, center, self.viewport)
        return self.view


def make_camera(settings):
    zoom_limits = {"min_zoom": settings.min_zoom, "max_zoom": settings.max_zoom}
    if settings.camera == "bounds":
        return BoundsFitCamera(
            settings.viewport,
            fraction=settings.fit_fraction,
            padding=settings.padding,
            smoothing=settings.smoothing,
            **zoom_limits,
        )
    if settings.camera == "growth":
        return GrowthCamera(settings.viewport, growth=settings.growth_factor, fraction=settings.fit_fraction, **zoom_limits)
    raise ValueError(f"Unknown camera policy: {settings.camera}")
