"""Basic 2D geometry and colour value types used by the UI and tile map code."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def distance(self, other: Vec2) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def point(self) -> Vec2:
        """Top-left corner."""
        return Vec2(self.x, self.y)

    def size(self) -> Vec2:
        """Width and height as a vector."""
        return Vec2(self.w, self.h)

    def contains(self, point: Vec2) -> bool:
        """Whether the point lies inside the rectangle (right/bottom edges excluded)."""
        return self.x <= point.x < self.right and self.y <= point.y < self.bottom

    def overlaps(self, other: Rect) -> bool:
        """Whether the two rectangles touch or overlap."""
        return (
            self.left <= other.right
            and self.right >= other.left
            and self.top <= other.bottom
            and self.bottom >= other.top
        )

    def intersect(self, other: Rect) -> Rect | None:
        """The common area of both rectangles, or None when they do not meet."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right < left or bottom < top:
            return None
        return Rect(left, top, right - left, bottom - top)

    def combine_with(self, other: Rect) -> Rect:
        """The smallest rectangle that holds both rectangles."""
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect(left, top, right - left, bottom - top)

    def offset(self, offset: Vec2) -> Rect:
        """The same rectangle moved by the given vector."""
        return Rect(self.x + offset.x, self.y + offset.y, self.w, self.h)


@dataclass(frozen=True)
class RectOffset:
    """Distances from each edge of a rectangle."""

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float channels in the 0..1 range."""

    r: float
    g: float
    b: float
    a: float

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: int) -> Color:
        """Build a colour from 8-bit channel values."""
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def as_list(self) -> list[float]:
        """Channels as ``[r, g, b, a]``."""
        return [self.r, self.g, self.b, self.a]