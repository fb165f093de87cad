import logging

import numpy as np

from dragon.segment import Segment
from dragon.vector import ORIGIN, Vector2

DEFAULT_LENGTH = 100.0


class FractalGenerator:
    """
    Owns every drawable of the dragon curve and performs the fold step.

    Each step duplicates all segments (and consolidated squares), rotating the
    copies a quarter turn about the end segment's pivot, so the drawable count
    doubles: 1, 2, 4, 8, ...
    """

    def __init__(self, length=DEFAULT_LENGTH):
        self.initialize(length)

    def initialize(self, length):
        if not length > 0:
            logging.warning(f"Initial length must be positive, got {length}. Using {DEFAULT_LENGTH}.")
            length = DEFAULT_LENGTH
        self.length = float(length)
        seed = Segment(ORIGIN, Vector2(0.0, self.length), Vector2(0.0, self.length))
        seed.completed = True
        self.segments = [seed]
        self.squares = []
        self.end_segment = seed
        self.iteration_count = 0

    @property
    def seed(self):
        return self.segments[0]

    def __len__(self):
        return len(self.segments) + len(self.squares)

    def all_complete(self):
        return all(segment.completed for segment in self.segments)

    def update(self, t):
        """Advance every still-rotating segment to transition value t."""
        for segment in self.segments:
            if not segment.completed:
                segment.update(t)
        return self.all_complete()

    def step_iteration(self):
        """Append a rotated duplicate of the whole curve and return the new segments."""
        pivot = self.end_segment.a
        new_segments = [segment.duplicate(pivot) for segment in self.segments]
        if self.iteration_count == 0:
            # The very first fold pivots the seed's copy about its far end.
            new_segments[0] = self.segments[0].duplicate(self.end_segment.b)
        new_squares = [square.duplicate(pivot) for square in self.squares]

        self.end_segment = new_segments[0]
        self.segments.extend(new_segments)
        self.squares.extend(new_squares)
        self.iteration_count += 1
        logging.info(f"Iteration {self.iteration_count}: {len(self)} drawables ({len(self.segments)} segments).")
        return new_segments

    def is_pinned(self, segment):
        """The seed and the end segment anchor the pivot chain and must stay segments."""
        return segment is self.seed or segment is self.end_segment

    def endpoints(self):
        """Current endpoints of all segments plus square centres, as an (N, 2) array."""
        points = [(s.a.x, s.a.y, s.b.x, s.b.y) for s in self.segments]
        points += [(q.center.x, q.center.y, q.center.x, q.center.y) for q in self.squares]
        return np.array(points, dtype=np.float64).reshape(-1, 2)

    def extent_points(self):
        """Current and resting endpoints of segments and square corners, as an (N, 2) array."""
        points = []
        for segment in self.segments:
            target_a, target_b = segment.target()
            points += [segment.a.as_tuple(), segment.b.as_tuple(), target_a.as_tuple(), target_b.as_tuple()]
        for square in self.squares:
            low, high = square.corners()
            points += [low.as_tuple(), high.as_tuple()]
        return np.array(points, dtype=np.float64).reshape(-1, 2)
