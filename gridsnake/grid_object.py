from dataclasses import dataclass, replace
import pygame


@dataclass(frozen=True)
class GridObject:
    """An axis-aligned rectangle placed on the play area (snake segment or apple)."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def square(cls, x, y, size):
        return cls(float(x), float(y), float(size), float(size))

    @classmethod
    def from_rect(cls, rect):
        return cls(float(rect.x), float(rect.y), float(rect.width), float(rect.height))

    @classmethod
    def from_point(cls, point):
        return cls(float(point[0]), float(point[1]))

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def extend(self, dx: float, dy: float = None) -> "GridObject":
        """Grow by dx/dy, moving the top-left corner out and widening by the same amount."""
        if dy is None:
            dy = dx
        return GridObject(self.x - dx, self.y - dy, self.width + dx, self.height + dy)

    def reduce(self, dx: float, dy: float = None) -> "GridObject":
        if dy is None:
            dy = dx
        return GridObject(self.x + dx, self.y + dy, self.width - dx, self.height - dy)

    def moved_to(self, x: float, y: float) -> "GridObject":
        return replace(self, x=x, y=y)

    def translated(self, dx: float, dy: float) -> "GridObject":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_rect(self) -> pygame.Rect:
        # Rounded like the grid it lives on; floats never reach pygame directly
        return pygame.Rect(round(self.x), round(self.y), round(self.width), round(self.height))

    def intersects(self, other) -> bool:
        """Strict overlap test; rectangles that only share an edge do not intersect."""
        rect = other.to_rect() if isinstance(other, GridObject) else other
        return rects_intersect(self.to_rect(), rect)


def rects_intersect(a: pygame.Rect, b: pygame.Rect) -> bool:
    if a.width <= 0 or a.height <= 0 or b.width <= 0 or b.height <= 0:
        return False
    return a.colliderect(b)
