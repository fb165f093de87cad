import math
from dataclasses import dataclass

from dragon.vector import Vector2

QUARTER_TURN = math.pi / 2


def lerp(start, stop, amount):
    return start + (stop - start) * amount


class Segment:
    """
    A line that swings a quarter turn about its pivot while an iteration animates.

    start_a/start_b and origin are fixed once the segment exists; only angle,
    a, b and completed change, driven by the global transition value.
    """

    def __init__(self, a: Vector2, b: Vector2, origin: Vector2):
        self.start_a = a
        self.start_b = b
        self.a = a
        self.b = b
        self.origin = origin
        self.angle = 0.0
        self.completed = False

    def __repr__(self):
        return (
            f"Segment(a={self.a.as_tuple()}, b={self.b.as_tuple()}, "
            f"origin={self.origin.as_tuple()}, angle={self.angle:.3f}, completed={self.completed})"
        )

    def duplicate(self, origin: Vector2) -> "Segment":
        """Copy the current (already rotated) pose as the start of a new segment."""
        return Segment(self.a, self.b, origin)

    def pose(self, angle: float) -> tuple[Vector2, Vector2]:
        return (
            self.start_a.rotate_about(self.origin, angle),
            self.start_b.rotate_about(self.origin, angle),
        )

    def target(self) -> tuple[Vector2, Vector2]:
        """Where the endpoints will rest once this iteration's rotation is done."""
        if self.completed:
            return self.a, self.b
        return self.pose(QUARTER_TURN)

    def update(self, t: float):
        self.angle = lerp(0.0, QUARTER_TURN, t)
        if t >= 1 or self.angle >= QUARTER_TURN:
            self.angle = QUARTER_TURN
            self.completed = True
        self.a, self.b = self.pose(self.angle)

    @property
    def length(self):
        return self.a.distance(self.b)

    @property
    def midpoint(self):
        return self.a.midpoint(self.b)


@dataclass(frozen=True)
class Square:
    """Static stand-in for a segment that became too small to be worth animating."""

    center: Vector2
    half_size: float

    @classmethod
    def from_segment(cls, segment):
        return cls(segment.midpoint, segment.length * 0.5)

    def duplicate(self, origin: Vector2) -> "Square":
        # An axis-aligned square stays axis-aligned after a quarter turn.
        return Square(self.center.rotate_about(origin, QUARTER_TURN), self.half_size)

    def corners(self) -> tuple[Vector2, Vector2]:
        offset = Vector2(self.half_size, self.half_size)
        return self.center - offset, self.center + offset
