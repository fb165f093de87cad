import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float

    def __add__(self, other):
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor):
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def rotate(self, angle):
        """
        Rotate about the coordinate origin.

        Counter-clockwise for y-up axes, so on a y-down screen the rotation
        appears clockwise. (0, 1) rotated by pi/2 gives (-1, 0).
        """
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)

    def rotate_about(self, pivot, angle):
        return (self - pivot).rotate(angle) + pivot

    def distance(self, other):
        return math.hypot(self.x - other.x, self.y - other.y)

    def midpoint(self, other):
        return Vector2((self.x + other.x) * 0.5, (self.y + other.y) * 0.5)

    def as_tuple(self):
        return (self.x, self.y)


ORIGIN = Vector2(0.0, 0.0)
