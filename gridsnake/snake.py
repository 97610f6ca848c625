from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from gridsnake.events import Signal
from gridsnake.grid_object import GridObject, rects_intersect


class Direction(Enum):
    STOPPED = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class Tile(Enum):
    """Snake sprite tiles; the value is the (column, row) cell of the 64px texture atlas."""

    HEAD_UP = (3, 0)
    HEAD_DOWN = (4, 1)
    HEAD_RIGHT = (4, 0)
    HEAD_LEFT = (3, 1)
    TAIL_UP = (3, 2)
    TAIL_DOWN = (4, 3)
    TAIL_RIGHT = (4, 2)
    TAIL_LEFT = (3, 3)
    HORIZONTAL = (1, 0)
    VERTICAL = (2, 1)
    TURN_LEFT_DOWN = (2, 0)
    TURN_TOP_LEFT = (2, 2)
    TURN_RIGHT_UP = (0, 1)
    TURN_DOWN_RIGHT = (0, 0)
    # Stacked segments (no distinct neighbour). Has no atlas cell of its own; the
    # canvas draws it as a plain body cell
    UNKNOWN = None


@dataclass(frozen=True)
class SnakeMoveEvent:
    segments: Tuple[GridObject, ...]
    direction: Direction

    @property
    def head(self) -> GridObject:
        return self.segments[0]


class Snake:
    """Segment chain: head at index 0, tail at the end, moving one cell per step."""

    def __init__(self):
        self.segments: List[GridObject] = []
        self.direction = Direction.STOPPED
        self.moved = Signal("snake_moved")

    def __len__(self):
        return len(self.segments)

    @property
    def head(self) -> GridObject:
        return self.segments[0]

    def init(self, head: GridObject, segment_count: int = 1, direction: Direction = Direction.RIGHT):
        """Lay out head plus segment_count segments trailing away from direction."""
        self.direction = direction
        self.segments = [head]

        dx, dy = direction.opposite.value
        if direction is Direction.STOPPED:
            dx, dy = Direction.LEFT.value

        previous = head
        for _ in range(segment_count):
            previous = previous.translated(dx * previous.width, dy * previous.height)
            self.segments.append(previous)

    def next_head(self) -> GridObject:
        head = self.segments[0]
        dx, dy = self.direction.value
        if self.direction is Direction.STOPPED:
            dx, dy = Direction.RIGHT.value
        return head.translated(dx * head.width, dy * head.height)

    def move(self, add_segment: bool = False, send_event: bool = True):
        if self.direction is Direction.STOPPED or len(self.segments) < 2:
            return

        tail = self.segments[-1]
        new_head = self.next_head()

        for i in range(len(self.segments) - 1, 0, -1):
            previous = self.segments[i - 1]
            self.segments[i] = self.segments[i].moved_to(previous.x, previous.y)

        if add_segment:
            self.segments.append(tail)

        self.segments[0] = self.segments[0].moved_to(new_head.x, new_head.y)

        if send_event:
            self.moved.emit(self, self.snapshot())

    def snapshot(self) -> SnakeMoveEvent:
        return SnakeMoveEvent(tuple(self.segments), self.direction)

    def translate(self, dx: float, dy: float):
        self.segments = [segment.translated(dx, dy) for segment in self.segments]

    def contains_rect(self, rect, start: int = 0) -> bool:
        if rect is None or rect.width <= 0 or rect.height <= 0:
            return False
        return any(rects_intersect(rect, segment.to_rect()) for segment in self.segments[start:])

    def contains_object(self, obj: GridObject, start: int = 0) -> bool:
        if obj is None or obj.is_empty:
            return False
        return self.contains_rect(obj.to_rect(), start)

    def tile_at(self, index: int) -> Tile:
        """Pick the sprite tile for a segment from its neighbours' positions."""
        seg = self.segments[index]

        if index == 0:
            nseg = self.segments[1]
            if seg.y < nseg.y:
                return Tile.HEAD_UP
            if seg.y > nseg.y:
                return Tile.HEAD_DOWN
            if seg.x > nseg.x:
                return Tile.HEAD_RIGHT
            if seg.x < nseg.x:
                return Tile.HEAD_LEFT
            return Tile.UNKNOWN

        if index == len(self.segments) - 1:
            pseg = self.segments[index - 1]
            if pseg.y < seg.y:
                return Tile.TAIL_UP
            if pseg.y > seg.y:
                return Tile.TAIL_DOWN
            if pseg.x > seg.x:
                return Tile.TAIL_RIGHT
            if pseg.x < seg.x:
                return Tile.TAIL_LEFT
            return Tile.UNKNOWN

        pseg = self.segments[index - 1]
        nseg = self.segments[index + 1]

        if (pseg.x < seg.x and nseg.x > seg.x) or (nseg.x < seg.x and pseg.x > seg.x):
            return Tile.HORIZONTAL
        if (pseg.y < seg.y and nseg.y > seg.y) or (nseg.y < seg.y and pseg.y > seg.y):
            return Tile.VERTICAL
        if (pseg.x < seg.x and nseg.y > seg.y) or (nseg.x < seg.x and pseg.y > seg.y):
            return Tile.TURN_LEFT_DOWN
        if (pseg.y < seg.y and nseg.x < seg.x) or (nseg.y < seg.y and pseg.x < seg.x):
            return Tile.TURN_TOP_LEFT
        if (pseg.x > seg.x and nseg.y < seg.y) or (nseg.x > seg.x and pseg.y < seg.y):
            return Tile.TURN_RIGHT_UP
        if (pseg.y > seg.y and nseg.x > seg.x) or (nseg.y > seg.y and pseg.x > seg.x):
            return Tile.TURN_DOWN_RIGHT
        return Tile.UNKNOWN

    def tiles(self) -> List[Tile]:
        if len(self.segments) < 2:
            return []
        return [self.tile_at(i) for i in range(len(self.segments))]

    def draw(self, canvas, opacity: float = 1.0):
        """Hand every segment with its tile to the canvas."""
        if canvas is None or len(self.segments) < 2:
            return

        for segment, tile in zip(self.segments, self.tiles()):
            canvas.draw_segment(segment.to_rect(), tile, opacity)

